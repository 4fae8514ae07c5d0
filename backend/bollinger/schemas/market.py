"""
CONTRACT 1: Market Data

Candles handed to the indicator engine by the chart host.
The engine never mutates them; every model here is frozen.
"""

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# ENUMS
# =============================================================================


class Timeframe(str, Enum):
    M1 = "1m"
    M5 = "5m"
    M15 = "15m"
    M30 = "30m"
    H1 = "1h"
    H4 = "4h"
    D1 = "1d"
    W1 = "1w"


# Timeframe to milliseconds
TIMEFRAME_MS = {
    Timeframe.M1: 60_000,
    Timeframe.M5: 300_000,
    Timeframe.M15: 900_000,
    Timeframe.M30: 1_800_000,
    Timeframe.H1: 3_600_000,
    Timeframe.H4: 14_400_000,
    Timeframe.D1: 86_400_000,
    Timeframe.W1: 604_800_000,
}


# =============================================================================
# CANDLES
# =============================================================================


class Candle(BaseModel):
    """
    Single OHLCV observation.

    Timestamps are epoch milliseconds and non-decreasing across a series.
    No high >= low check is made; the host owns data quality.
    """

    model_config = ConfigDict(frozen=True)

    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float = Field(default=0.0, ge=0)
