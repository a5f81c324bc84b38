"""Run the holiday supplier report check once (for cron / a daily timer).

Usage:
    python scripts/run_holiday_scheduler.py
    python scripts/run_holiday_scheduler.py --date 2026-09-15 --no-notify
"""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import argparse
from datetime import date

from config.logging_conf import configure_logging
from services.holiday_report_service import get_holiday_report_service
from exceptions import AppError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Generate reports for upcoming holidays")
    parser.add_argument(
        "--date",
        type=date.fromisoformat,
        default=None,
        help="Run as if today were this date (YYYY-MM-DD)",
    )
    parser.add_argument(
        "--no-notify",
        action="store_true",
        help="Compute reports without sending WhatsApp / email",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configure_logging()

    try:
        result = get_holiday_report_service().run_scheduled(
            today=args.date,
            notify=not args.no_notify,
        )
    except AppError as e:
        print(f"Holiday check failed: {e.message}")
        return 1

    print("=" * 60)
    print(f"HOLIDAY CHECK {result.run_date.isoformat()} (next {result.lookahead_days} days)")
    print("=" * 60)
    print(result.message)

    for item in result.results:
        line = f"  {item.holiday_name:<30} {item.status}"
        if item.error:
            line += f"  ({item.error})"
        print(line)
        for outcome in item.notifications:
            if outcome.error:
                print(f"      {outcome.channel}: failed - {outcome.error}")

    return 1 if result.failed_holidays else 0


if __name__ == "__main__":
    sys.exit(main())
