"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod
from typing import Optional, Sequence

from bollinger.services.base import BaseService
from bollinger.schemas.market import Candle
from bollinger.schemas.indicators import (
    BollingerBandsOutput,
    BollingerBandsParams,
    BollingerBandsPoint,
    BollingerBandsRequest,
)


class IndicatorServiceInterface(
    BaseService[BollingerBandsRequest, BollingerBandsOutput]
):
    """
    Indicator Engine Service Contract.

    INPUT: BollingerBandsRequest
        - candles: ordered OHLCV candles
        - params: Bollinger Bands settings (optional)

    OUTPUT: BollingerBandsOutput
        - params: the settings actually applied
        - points: one band point per input candle, same order
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    def execute(self, input_data: BollingerBandsRequest) -> BollingerBandsOutput:
        """Recompute the full band series for a request."""
        pass

    @abstractmethod
    def calculate_bollinger_bands(
        self,
        candles: Sequence[Candle],
        params: Optional[BollingerBandsParams] = None,
    ) -> list[BollingerBandsPoint]:
        """
        Calculate Bollinger Bands for a candle series.

        Args:
            candles: OHLCV candles in chart order
            params: Settings to apply (configured defaults when omitted)

        Returns:
            One point per candle; undefined values are None
        """
        pass

    @abstractmethod
    def get_point_at_timestamp(
        self, points: Sequence[BollingerBandsPoint], timestamp: int
    ) -> Optional[BollingerBandsPoint]:
        """Find the band point for a timestamp, or None."""
        pass

    @abstractmethod
    def format_value(
        self, value: Optional[float], decimals: Optional[int] = None
    ) -> str:
        """Render a band value for display."""
        pass

    @abstractmethod
    def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass
