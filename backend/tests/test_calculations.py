"""Tests for the NumPy Bollinger Bands building blocks."""

import math

import numpy as np
import pytest

from bollinger.schemas.indicators import PriceSource
from bollinger.services.indicators.calculations import (
    apply_offset,
    bollinger_bands,
    extract_source,
    get_last_valid,
    nan_to_none,
    rolling_sample_std,
    sma,
)
from tests.conftest import make_candles


class TestExtractSource:
    """Tests for picking the price field out of candles."""

    def test_each_source_field(self):
        """Each PriceSource selects the matching candle attribute."""
        candles = make_candles([10.0, 20.0])

        assert extract_source(candles, PriceSource.CLOSE).tolist() == [10.0, 20.0]
        assert extract_source(candles, PriceSource.OPEN).tolist() == [9.0, 19.0]
        assert extract_source(candles, PriceSource.HIGH).tolist() == [12.0, 22.0]
        assert extract_source(candles, "low").tolist() == [8.0, 18.0]

    def test_empty(self):
        """No candles gives an empty float array."""
        values = extract_source([], PriceSource.CLOSE)
        assert values.dtype == np.float64
        assert len(values) == 0

    def test_unknown_source_rejected(self):
        """Only open/high/low/close are valid sources."""
        with pytest.raises(ValueError):
            extract_source(make_candles([1.0]), "volume")


class TestSMA:
    """Tests for the simple moving average pass."""

    def test_warmup_is_nan(self):
        """Positions before the first full window are NaN."""
        result = sma(np.array([1.0, 2.0, 3.0, 4.0]), 3)
        assert np.isnan(result[0]) and np.isnan(result[1])
        assert result[2] == 2.0
        assert result[3] == 3.0

    def test_left_to_right_sum_then_divide(self):
        """Each window is summed in order and divided once."""
        data = np.array([0.1, 0.2, 0.3, 1e16, -1e16, 0.7, 0.11, 0.13, 0.17])
        period = 4
        result = sma(data, period)

        for i in range(period - 1, len(data)):
            total = 0.0
            for value in data[i - period + 1 : i + 1].tolist():
                total += value
            assert result[i] == total / period

    def test_shorter_than_period(self):
        """A series shorter than the window is all NaN."""
        assert np.isnan(sma(np.array([1.0, 2.0]), 5)).all()

    def test_non_positive_period_rejected(self):
        with pytest.raises(ValueError):
            sma(np.array([1.0, 2.0]), 0)


class TestRollingSampleStd:
    """Tests for the dispersion pass."""

    def test_uses_sample_denominator(self):
        """Variance divides by period - 1, not period."""
        data = np.array([2.0, 4.0, 4.0, 4.0, 5.0, 5.0, 7.0, 9.0])
        means = sma(data, 8)
        result = rolling_sample_std(data, 8, means)

        # population std of this set is exactly 2.0
        assert result[-1] == pytest.approx(math.sqrt(32 / 7))
        assert result[-1] != pytest.approx(2.0)

    def test_nan_mean_propagates(self):
        """Where the mean is undefined the dispersion is undefined."""
        data = np.array([1.0, 2.0, 3.0, 4.0])
        means = np.array([np.nan, np.nan, np.nan, 3.0])
        result = rolling_sample_std(data, 3, means)

        assert np.isnan(result[:3]).all()
        assert result[3] == pytest.approx(1.0)

    def test_period_one_has_no_dispersion(self):
        """A single-value window has a zero denominator and stays NaN."""
        data = np.array([1.0, 2.0, 3.0])
        result = rolling_sample_std(data, 1, sma(data, 1))
        assert np.isnan(result).all()


class TestApplyOffset:
    """Tests for shifting a series."""

    def test_zero_is_identity_copy(self):
        data = np.array([1.0, 2.0, 3.0])
        result = apply_offset(data, 0)
        assert result.tolist() == data.tolist()
        assert result is not data

    def test_positive_shifts_right(self):
        result = apply_offset(np.array([1.0, 2.0, 3.0, 4.0]), 2)
        assert np.isnan(result[:2]).all()
        assert result[2:].tolist() == [1.0, 2.0]

    def test_negative_shifts_left(self):
        result = apply_offset(np.array([1.0, 2.0, 3.0, 4.0]), -1)
        assert result[:3].tolist() == [2.0, 3.0, 4.0]
        assert np.isnan(result[3])

    @pytest.mark.parametrize("offset", [4, 10, -4, -10])
    def test_shift_past_length_is_all_nan(self, offset):
        result = apply_offset(np.array([1.0, 2.0, 3.0, 4.0]), offset)
        assert len(result) == 4
        assert np.isnan(result).all()


class TestBollingerBands:
    """Tests for the combined band calculation."""

    def test_bands_symmetric_around_basis(self):
        data = np.array([3.0, 1.0, 4.0, 1.0, 5.0, 9.0, 2.0, 6.0, 5.0, 3.0])
        basis, upper, lower, std_dev = bollinger_bands(data, 4, 2.5)

        defined = ~np.isnan(basis)
        assert defined.sum() == 7
        np.testing.assert_allclose(upper[defined] - basis[defined], 2.5 * std_dev[defined])
        np.testing.assert_allclose(basis[defined] - lower[defined], 2.5 * std_dev[defined])

    def test_offset_applied_to_all_series(self):
        data = np.arange(1.0, 11.0)
        plain = bollinger_bands(data, 3, 2.0, 0)
        shifted = bollinger_bands(data, 3, 2.0, 2)

        for before, after in zip(plain, shifted):
            assert np.isnan(after[:2]).all()
            np.testing.assert_array_equal(after[2:], before[:-2])

    @pytest.mark.parametrize("multiplier", [0.0, -1.0, float("nan"), float("inf")])
    def test_invalid_multiplier_rejected(self, multiplier):
        with pytest.raises(ValueError, match="std_dev_multiplier"):
            bollinger_bands(np.arange(5.0), 3, multiplier)

    def test_non_positive_period_rejected(self):
        with pytest.raises(ValueError, match="period"):
            bollinger_bands(np.arange(5.0), 0, 2.0)


class TestHelpers:
    def test_nan_to_none(self):
        assert nan_to_none(np.array([np.nan, 1.5, np.nan])) == [None, 1.5, None]

    def test_get_last_valid(self):
        assert get_last_valid(np.array([1.0, 2.0, np.nan])) == 2.0
        assert get_last_valid(np.array([np.nan, np.nan])) is None
