"""
Bollinger Engine Schema Contracts

This module defines the data contracts between the chart host and the engine.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from bollinger.schemas.market import (
    Candle,
    Timeframe,
    TIMEFRAME_MS,
)
from bollinger.schemas.indicators import (
    PriceSource,
    MovingAverageType,
    BollingerBandsParams,
    BollingerBandsRequest,
    BollingerBandsPoint,
    BollingerBandsOutput,
)

__all__ = [
    # Market
    "Candle",
    "Timeframe",
    "TIMEFRAME_MS",
    # Indicators
    "PriceSource",
    "MovingAverageType",
    "BollingerBandsParams",
    "BollingerBandsRequest",
    "BollingerBandsPoint",
    "BollingerBandsOutput",
]
