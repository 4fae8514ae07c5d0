"""Shared test fixtures and utilities."""

import pytest

from bollinger.schemas.market import Candle

DAY_MS = 86_400_000
BASE_TS = 1_704_067_200_000  # 2024-01-01T00:00:00Z


def make_candles(closes, start: int = BASE_TS, step: int = DAY_MS) -> list[Candle]:
    """Build candles whose close follows ``closes``.

    Open/high/low are derived from the close so each source field is
    distinguishable: open = close - 1, high = close + 2, low = close - 2.
    """
    return [
        Candle(
            timestamp=start + i * step,
            open=close - 1,
            high=close + 2,
            low=close - 2,
            close=close,
            volume=1_000 + i,
        )
        for i, close in enumerate(closes)
    ]


@pytest.fixture
def constant_candles():
    """25 daily candles closing at 100 (zero volatility)."""
    return make_candles([100.0] * 25)


@pytest.fixture
def ramp_candles():
    """20 candles closing at 1, 2, ..., 20."""
    return make_candles([float(i) for i in range(1, 21)])


@pytest.fixture
def noisy_candles():
    """30 candles with an irregular close series."""
    closes = [
        101.2, 99.8, 102.5, 103.1, 100.4, 98.7, 97.9, 99.3, 101.8, 104.6,
        105.2, 103.9, 102.2, 100.1, 99.5, 98.2, 100.9, 102.7, 104.1, 106.3,
        107.8, 105.5, 104.2, 103.6, 101.9, 100.3, 99.1, 101.4, 103.3, 105.0,
    ]
    return make_candles(closes)
