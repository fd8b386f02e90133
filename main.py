import argparse
import logging
import sys
from pathlib import Path

from stock_tracking.exceptions import StockTrackingError
from stock_tracking.logger import setup_logger
from stock_tracking.pipelines.stock_tracking import process_stock_tracking

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Merge a stock export into the tracking workbook and rebuild the variation sheets."
    )
    parser.add_argument("--tracking", required=True, type=Path, help="Tracking workbook (.xlsx)")
    parser.add_argument("--export", required=True, type=Path, help="Export snapshot (.xlsx)")
    parser.add_argument("--date", required=True, help="Export date, YYYY-MM-DD or DD/MM/YYYY")
    parser.add_argument(
        "--output",
        type=Path,
        help="Write the result here instead of rewriting the tracking file in place",
    )
    parser.add_argument("--test", action="store_true", help="Skip the webhook post")
    return parser.parse_args(argv)


def run_process(argv: list[str] | None = None) -> int:
    """Main orchestration function for a command-line run."""
    setup_logger()
    args = parse_args(argv)

    try:
        saved = process_stock_tracking(
            args.tracking, args.export, args.date, output_path=args.output, test_mode=args.test
        )
    except (StockTrackingError, FileNotFoundError) as e:
        logger.error(f"❌ ERROR: {e}")
        return 1

    logger.info(f"✅ Result: {saved}")
    return 0


if __name__ == "__main__":
    sys.exit(run_process())
