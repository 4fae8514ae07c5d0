"""
Mock Data Generator

Generates realistic sample candles for development, demos and testing.
"""

import math
import random
from datetime import datetime
from typing import Optional

from bollinger.core.config import settings
from bollinger.schemas.market import Candle, Timeframe, TIMEFRAME_MS


def generate_sample_candles(
    count: Optional[int] = None,
    timeframe: Timeframe = Timeframe.D1,
    start_price: Optional[float] = None,
    end_time: Optional[datetime] = None,
    seed: Optional[int] = None,
) -> list[Candle]:
    """
    Generate sample OHLCV candles.

    Random walk with a slow sinusoidal trend. The last candle opens one
    interval before ``end_time``. Pass ``seed`` for a reproducible series.
    """
    if count is None:
        count = settings.sample_candle_count
    if start_price is None:
        start_price = settings.sample_start_price
    if seed is None:
        seed = settings.sample_seed
    if end_time is None:
        end_time = datetime.now()

    rng = random.Random(seed)
    interval_ms = TIMEFRAME_MS[timeframe]
    base_time = int(end_time.timestamp() * 1000) - count * interval_ms
    price = start_price

    candles = []
    for i in range(count):
        trend = math.sin(i / 20) * 0.5
        noise = (rng.random() - 0.5) * 4
        change = trend + noise
        price = max(1.0, price + change)

        open_price = price
        price_range = open_price * (rng.random() * 0.1 + 0.02)  # 2-12% range
        high_price = open_price + rng.random() * price_range
        low_price = open_price - rng.random() * price_range
        close_price = open_price + (rng.random() - 0.5) * price_range * 0.7
        price = close_price

        # Bigger moves trade more
        volume = math.floor(
            1_000_000 + abs(change) * 500_000 + rng.random() * 2_000_000
        )

        candles.append(
            Candle(
                timestamp=base_time + i * interval_ms,
                open=round(open_price, 2),
                high=round(max(open_price, high_price, low_price, close_price), 2),
                low=round(min(open_price, high_price, low_price, close_price), 2),
                close=round(close_price, 2),
                volume=volume,
            )
        )

    return candles


def to_chart_format(candles: list[Candle]) -> list[dict]:
    """Convert candles to plain dicts for a charting widget."""
    return [candle.model_dump() for candle in candles]
