"""
Indicator Engine Service Implementation

Calculates Bollinger Bands from OHLCV data.
Pure Python/NumPy calculations, no retained state between calls.
"""

import logging
import math
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Optional, Sequence

from bollinger.core.config import default_bollinger_params, settings
from bollinger.schemas.market import Candle
from bollinger.schemas.indicators import (
    BollingerBandsOutput,
    BollingerBandsParams,
    BollingerBandsPoint,
    BollingerBandsRequest,
    PriceSource,
)
from bollinger.services.base import ValidationError
from bollinger.services.indicators.interface import IndicatorServiceInterface
from bollinger.services.indicators.calculations import (
    bollinger_bands,
    extract_source,
    nan_to_none,
)

logger = logging.getLogger(__name__)

# Wide enough for any finite double at fixed-point precision
_FORMAT_CONTEXT = Context(prec=400)


def calculate_bollinger_bands(
    candles: Sequence[Candle],
    params: Optional[BollingerBandsParams] = None,
) -> list[BollingerBandsPoint]:
    """
    Calculate Bollinger Bands for given candle data.

    Timestamps are copied from the candles and never shifted; only the band
    values move with ``params.offset``.

    Raises:
        ValueError: length < 1 or a non-positive or non-finite multiplier
            (only reachable with params built via ``model_construct``)
    """
    if params is None:
        params = default_bollinger_params()
    if not candles:
        return []

    values = extract_source(candles, params.source)
    basis, upper, lower, std_dev = bollinger_bands(
        values,
        period=params.length,
        std_dev_multiplier=params.std_dev_multiplier,
        offset=params.offset,
    )

    points = [
        BollingerBandsPoint(
            timestamp=candle.timestamp,
            basis=b,
            upper=u,
            lower=lo,
            std_dev=s,
        )
        for candle, b, u, lo, s in zip(
            candles,
            nan_to_none(basis),
            nan_to_none(upper),
            nan_to_none(lower),
            nan_to_none(std_dev),
        )
    ]

    defined = sum(1 for p in points if p.is_defined)
    logger.debug(
        f"Bollinger Bands: {len(candles)} candles, length={params.length}, "
        f"mult={params.std_dev_multiplier}, offset={params.offset}, "
        f"source={PriceSource(params.source).value}, defined={defined}"
    )
    return points


def get_bollinger_bands_at_timestamp(
    points: Sequence[BollingerBandsPoint], timestamp: int
) -> Optional[BollingerBandsPoint]:
    """Get Bollinger Bands point for a specific timestamp (first match)."""
    return next((p for p in points if p.timestamp == timestamp), None)


def format_bollinger_value(
    value: Optional[float], decimals: Optional[int] = None
) -> str:
    """
    Format a band value for display; undefined renders as the placeholder.

    Ties round away from zero on the exact binary value, as the chart
    frontend's number formatting does (0.125 -> "0.13", 2.5 -> "3").
    """
    if value is None or not math.isfinite(value):
        return settings.missing_value_placeholder
    if decimals is None:
        decimals = settings.display_decimals
    if value == 0:
        value = 0.0  # drop the sign of -0.0
    quantized = Decimal(value).quantize(
        Decimal(1).scaleb(-decimals), rounding=ROUND_HALF_UP, context=_FORMAT_CONTEXT
    )
    return f"{quantized:f}"


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    Recomputes the whole band series on every request.
    All calculations are deterministic and reproducible.
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    def validate_input(self, input_data: BollingerBandsRequest) -> BollingerBandsRequest:
        """Reject parameters that bypassed model validation."""
        params = input_data.params
        if params is None:
            return input_data

        if params.length < 1:
            logger.warning(f"Rejected Bollinger request: length={params.length}")
            raise ValidationError(
                self.name,
                "length must be a positive integer",
                {"length": params.length},
            )
        multiplier = params.std_dev_multiplier
        if not (multiplier > 0 and math.isfinite(multiplier)):
            logger.warning(
                f"Rejected Bollinger request: std_dev_multiplier={params.std_dev_multiplier}"
            )
            raise ValidationError(
                self.name,
                "std_dev_multiplier must be positive and finite",
                {"std_dev_multiplier": params.std_dev_multiplier},
            )
        return input_data

    def execute(self, input_data: BollingerBandsRequest) -> BollingerBandsOutput:
        """Calculate the band series for a request."""
        request = self.validate_input(input_data)
        params = request.params or default_bollinger_params()
        points = self.calculate_bollinger_bands(request.candles, params)
        return BollingerBandsOutput(params=params, points=points)

    def calculate_bollinger_bands(
        self,
        candles: Sequence[Candle],
        params: Optional[BollingerBandsParams] = None,
    ) -> list[BollingerBandsPoint]:
        """Calculate Bollinger Bands for a candle series."""
        try:
            return calculate_bollinger_bands(candles, params)
        except ValueError as e:
            logger.warning(f"Bollinger calculation rejected: {e}")
            raise ValidationError(self.name, str(e)) from e

    def get_point_at_timestamp(
        self, points: Sequence[BollingerBandsPoint], timestamp: int
    ) -> Optional[BollingerBandsPoint]:
        return get_bollinger_bands_at_timestamp(points, timestamp)

    def format_value(
        self, value: Optional[float], decimals: Optional[int] = None
    ) -> str:
        return format_bollinger_value(value, decimals)

    def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance
