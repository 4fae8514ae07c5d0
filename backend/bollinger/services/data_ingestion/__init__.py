"""
Data Ingestion

Sample candle generation for development and demos.
Live feeds are supplied by the chart host, not by this package.
"""

from bollinger.services.data_ingestion.mock_data import (
    generate_sample_candles,
    to_chart_format,
)

__all__ = [
    "generate_sample_candles",
    "to_chart_format",
]
