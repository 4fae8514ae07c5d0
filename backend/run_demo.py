"""
Bollinger Bands demo.
Run with: python run_demo.py [length] [multiplier] [offset]
"""

import logging
import os
import sys

backend_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.insert(0, backend_dir)

from dotenv import load_dotenv  # noqa: E402

load_dotenv(os.path.join(backend_dir, ".env"))

from bollinger.core.config import default_bollinger_params, settings  # noqa: E402
from bollinger.schemas.indicators import (  # noqa: E402
    BollingerBandsParams,
    BollingerBandsRequest,
)
from bollinger.services.data_ingestion import generate_sample_candles  # noqa: E402
from bollinger.services.indicators import get_indicator_service  # noqa: E402

logger = logging.getLogger(__name__)


def main(argv: list[str] = None, rows: int = 5) -> int:
    argv = sys.argv[1:] if argv is None else argv

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    params = default_bollinger_params()
    updates = {}
    for key, raw, cast in zip(
        ("length", "std_dev_multiplier", "offset"), argv, (int, float, int)
    ):
        updates[key] = cast(raw)
    if updates:
        params = BollingerBandsParams.model_validate({**params.model_dump(), **updates})

    candles = generate_sample_candles()
    service = get_indicator_service()
    output = service.execute(BollingerBandsRequest(candles=candles, params=params))

    print("\n" + "=" * 60)
    print(f"{settings.app_name.upper()} v{settings.app_version}")
    print("=" * 60)
    print(
        f"Candles: {len(candles)} | length={params.length} "
        f"mult={params.std_dev_multiplier} offset={params.offset} "
        f"source={params.source.value}"
    )
    print("-" * 60)
    print(f"{'timestamp':>15} {'close':>10} {'upper':>10} {'basis':>10} {'lower':>10}")

    for candle, point in list(zip(candles, output.points))[-rows:]:
        print(
            f"{point.timestamp:>15} {candle.close:>10.2f} "
            f"{service.format_value(point.upper):>10} "
            f"{service.format_value(point.basis):>10} "
            f"{service.format_value(point.lower):>10}"
        )

    latest = output.latest
    if latest is None:
        logger.warning("No defined band values; series shorter than the window")
    return 0


if __name__ == "__main__":
    sys.exit(main())
