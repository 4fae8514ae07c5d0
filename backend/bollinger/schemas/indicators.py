"""
CONTRACT 2: Indicator Engine

Input: BollingerBandsRequest (candles + parameters)
Output: BollingerBandsOutput

Missing values are None at this boundary. NaN never leaves the engine.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

from bollinger.schemas.market import Candle


# =============================================================================
# ENUMS
# =============================================================================


class PriceSource(str, Enum):
    OPEN = "open"
    HIGH = "high"
    LOW = "low"
    CLOSE = "close"


class MovingAverageType(str, Enum):
    SMA = "SMA"


# =============================================================================
# PARAMETERS
# =============================================================================


class BollingerBandsParams(BaseModel):
    """
    Bollinger Bands settings.

    Immutable: a settings change produces a new instance, e.g.
    ``params.model_copy(update={"length": 50})``.
    """

    model_config = ConfigDict(frozen=True)

    length: int = Field(default=20, gt=0, description="Moving average window")
    std_dev_multiplier: float = Field(
        default=2.0,
        gt=0,
        allow_inf_nan=False,
        description="Band distance in standard deviations",
    )
    offset: int = Field(
        default=0, description="Bars to shift the bands (negative shifts left)"
    )
    source: PriceSource = PriceSource.CLOSE
    ma_type: MovingAverageType = MovingAverageType.SMA


# =============================================================================
# INPUT: BollingerBandsRequest
# =============================================================================


class BollingerBandsRequest(BaseModel):
    """
    Request for a full Bollinger Bands recomputation.
    Sent by: chart host (on load and on every settings change)
    Received by: Indicator Service
    """

    candles: list[Candle] = Field(default_factory=list)
    params: Optional[BollingerBandsParams] = Field(
        default=None,
        description="Falls back to configured defaults when omitted",
    )


# =============================================================================
# OUTPUT
# =============================================================================


class BollingerBandsPoint(BaseModel):
    """Band values aligned by position with one input candle."""

    model_config = ConfigDict(frozen=True)

    timestamp: int
    basis: Optional[float] = None
    upper: Optional[float] = None
    lower: Optional[float] = None
    std_dev: Optional[float] = None

    @property
    def is_defined(self) -> bool:
        return self.basis is not None


class BollingerBandsOutput(BaseModel):
    """
    Complete Bollinger Bands series.
    Returned by: Indicator Service
    Consumed by: chart host overlay and crosshair legend
    """

    params: BollingerBandsParams
    points: list[BollingerBandsPoint]

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "params": {
                    "length": 20,
                    "std_dev_multiplier": 2.0,
                    "offset": 0,
                    "source": "close",
                    "ma_type": "SMA",
                },
                "points": [
                    {
                        "timestamp": 1706918400000,
                        "basis": None,
                        "upper": None,
                        "lower": None,
                        "std_dev": None,
                    },
                    {
                        "timestamp": 1708560000000,
                        "basis": 101.37,
                        "upper": 106.02,
                        "lower": 96.72,
                        "std_dev": 2.32,
                    },
                ],
            }
        }
    )

    @property
    def latest(self) -> Optional[BollingerBandsPoint]:
        """Most recent point with a defined basis."""
        for point in reversed(self.points):
            if point.is_defined:
                return point
        return None
