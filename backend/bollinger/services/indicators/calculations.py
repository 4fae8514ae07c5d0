"""
Technical Indicator Calculations

Pure Python/NumPy implementation of Bollinger Bands.
All math is deterministic: NaN marks values that cannot be computed
(insufficient history, shifted out of range).

Window sums are accumulated left to right and then divided, so results
match the charting frontend bit for bit.
np.mean / np.std sum pairwise, so they are not used here.
"""

import math
from typing import Optional, Sequence, Union

import numpy as np

from bollinger.schemas.indicators import PriceSource
from bollinger.schemas.market import Candle


# =============================================================================
# SOURCE EXTRACTION
# =============================================================================


def extract_source(
    candles: Sequence[Candle], source: Union[PriceSource, str] = PriceSource.CLOSE
) -> np.ndarray:
    """Pick one OHLC field from every candle, in order."""
    field = PriceSource(source).value
    return np.array([getattr(c, field) for c in candles], dtype=np.float64)


# =============================================================================
# MOVING AVERAGE / DISPERSION
# =============================================================================


def _check_period(period: int) -> None:
    if period < 1:
        raise ValueError(f"period must be a positive integer, got {period}")


def sma(data: np.ndarray, period: int) -> np.ndarray:
    """Simple Moving Average."""
    _check_period(period)
    result = np.full(len(data), np.nan)
    if len(data) < period:
        return result

    for i in range(period - 1, len(data)):
        window = data[i - period + 1 : i + 1]
        result[i] = sum(window) / period
    return result


def rolling_sample_std(
    data: np.ndarray, period: int, means: np.ndarray
) -> np.ndarray:
    """
    Rolling sample standard deviation (denominator period - 1).

    Each window is measured around the matching entry of ``means``; positions
    where the mean is NaN stay NaN. A period of 1 has no sample dispersion.
    """
    _check_period(period)
    result = np.full(len(data), np.nan)
    if period < 2 or len(data) < period:
        return result

    for i in range(period - 1, len(data)):
        mean = means[i]
        if np.isnan(mean):
            continue
        window = data[i - period + 1 : i + 1]
        squared = sum((value - mean) * (value - mean) for value in window)
        result[i] = np.sqrt(squared / (period - 1))
    return result


# =============================================================================
# OFFSET
# =============================================================================


def apply_offset(data: np.ndarray, offset: int) -> np.ndarray:
    """
    Shift a series by ``offset`` positions.

    Positive offsets move values later (right); the first ``offset`` slots
    become NaN. Negative offsets move values earlier; the last slots become
    NaN. Length is preserved.
    """
    n = len(data)
    if offset == 0:
        return data.copy()

    result = np.full(n, np.nan)
    shift = abs(offset)
    if shift >= n:
        return result

    if offset > 0:
        result[shift:] = data[: n - shift]
    else:
        result[: n - shift] = data[shift:]
    return result


# =============================================================================
# BOLLINGER BANDS
# =============================================================================


def bollinger_bands(
    values: np.ndarray,
    period: int = 20,
    std_dev_multiplier: float = 2.0,
    offset: int = 0,
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """
    Bollinger Bands.

    Returns: (basis, upper, lower, std_dev), each the same length as values
    and already shifted by ``offset``.

    Raises:
        ValueError: period < 1 or std_dev_multiplier not positive and finite
    """
    _check_period(period)
    if not (std_dev_multiplier > 0 and math.isfinite(std_dev_multiplier)):
        raise ValueError(
            f"std_dev_multiplier must be positive and finite, got {std_dev_multiplier}"
        )

    basis = sma(values, period)
    std_dev = rolling_sample_std(values, period, basis)

    upper = basis + std_dev_multiplier * std_dev
    lower = basis - std_dev_multiplier * std_dev

    return (
        apply_offset(basis, offset),
        apply_offset(upper, offset),
        apply_offset(lower, offset),
        apply_offset(std_dev, offset),
    )


# =============================================================================
# HELPERS
# =============================================================================


def nan_to_none(arr: np.ndarray) -> list[Optional[float]]:
    """Convert NaN entries to None and the rest to plain floats."""
    return [None if np.isnan(v) else float(v) for v in arr]


def get_last_valid(arr: np.ndarray) -> Optional[float]:
    """Get last non-NaN value from array."""
    valid = arr[~np.isnan(arr)]
    return float(valid[-1]) if len(valid) > 0 else None
