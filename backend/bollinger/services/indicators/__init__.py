"""
Indicator Engine Service

CONTRACT:
    Input:  BollingerBandsRequest (candles + parameters)
    Output: BollingerBandsOutput

RESPONSIBILITIES:
    - Extract the configured price source from each candle
    - Calculate the SMA basis and sample standard deviation
    - Derive upper/lower bands and apply the display offset
    - Look up band values by timestamp for the crosshair legend
    - Format band values for display

PURE PYTHON - Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from bollinger.services.indicators.interface import IndicatorServiceInterface
from bollinger.services.indicators.service import (
    IndicatorService,
    calculate_bollinger_bands,
    format_bollinger_value,
    get_bollinger_bands_at_timestamp,
    get_indicator_service,
)

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorService",
    "calculate_bollinger_bands",
    "format_bollinger_value",
    "get_bollinger_bands_at_timestamp",
    "get_indicator_service",
]
