#!/usr/bin/env python
"""
CLI for printing resale market aggregates.

Loads a snapshot (or fetches one from data.gov.sg), applies the filters
given on the command line and prints the summary statistics and monthly
trends, or the full dashboard view as JSON.

Usage:
    python -m hdbtrends.cli.report
    python -m hdbtrends.cli.report --input resale.csv --towns "ANG MO KIO,BEDOK"
    python -m hdbtrends.cli.report --save snapshot.json --json
"""

import argparse
import json
import sys
from typing import List, Optional

from hdbtrends.analytics.categories import category_percentages
from hdbtrends.analytics.dashboard import DashboardService, DashboardView
from hdbtrends.analytics.filters import RecordFilter
from hdbtrends.config import get_config
from hdbtrends.core.constants import PRICE_BAND_LABELS, BoxPlotMetric
from hdbtrends.datasource import get_records, save_records
from hdbtrends.exceptions import HdbTrendsError
from hdbtrends.logging_config import setup_logging, get_logger
from hdbtrends.utils.date_parser import format_month_year
from hdbtrends.utils.price_parser import (
    format_compact_currency,
    format_currency,
    format_number,
    format_percentage,
    format_psf,
)


def _split(value: Optional[str]) -> List[str]:
    if not value:
        return []
    return [v.strip() for v in value.split(",") if v.strip()]


def build_filter(service: DashboardService, args: argparse.Namespace) -> RecordFilter:
    """Combine command-line filters with the service defaults."""
    defaults = service.default_filter(args.months)
    date_range = defaults.date_range
    if args.start or args.end:
        if date_range is None:
            date_range = (args.start, args.end)
        else:
            date_range = (args.start or date_range[0], args.end or date_range[1])
    return RecordFilter(
        towns=tuple(_split(args.towns)),
        flat_types=tuple(_split(args.flat_types)),
        date_range=date_range,
        lease_range=defaults.lease_range,
    )


def print_report(view: DashboardView) -> None:
    """Print summary cards, monthly trends and price band shares."""
    summary = view.summary
    months = view.month_domain
    window = f"{format_month_year(months[0])} - {format_month_year(months[-1])}" if months else "-"

    print(f"\nHDB resale transactions, {window}")
    print("=" * 60)
    print(f"  Transactions:        {format_number(summary.count)}")
    print(f"  Median price:        {format_currency(summary.median_price)}")
    print(f"  Price range:         {format_currency(summary.min_price)} - {format_currency(summary.max_price)}")
    print(f"  Median psf:          {format_psf(summary.median_psf)}")
    print(f"  Median per lease yr: {format_currency(summary.median_price_per_lease)}")
    print(f"  Gross value:         {format_compact_currency(summary.gross_transaction_value)}")
    print(f"  Million-dollar:      {format_percentage(summary.million_unit_percentage)}")

    print(f"\n{'Month':<10} {'Count':>7} {'Gross':>10} {'Med psf':>12} {'>=1m':>8}")
    print("-" * 51)
    for point in view.time_series.points:
        print(
            f"{format_month_year(point.month):<10} "
            f"{format_number(point.transaction_count):>7} "
            f"{format_compact_currency(point.gross_transaction_value):>10} "
            f"{format_psf(point.median_psf):>12} "
            f"{format_percentage(point.million_unit_percentage):>8}"
        )

    print(f"\n{'Month':<10} " + " ".join(f"{label:>9}" for label in PRICE_BAND_LABELS))
    print("-" * (11 + 10 * len(PRICE_BAND_LABELS)))
    for share in category_percentages(view.categories):
        print(
            f"{format_month_year(share.month):<10} "
            + " ".join(f"{format_percentage(s):>9}" for s in share.shares)
        )


def main():
    """Main entry point for the report CLI."""
    parser = argparse.ArgumentParser(
        description="Print HDB resale market aggregates",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    python -m hdbtrends.cli.report --input resale.csv
    python -m hdbtrends.cli.report --flat-types "4 ROOM" --metric price_psf --json
        """,
    )
    parser.add_argument("--input", type=str, default=None, help="CSV/JSON snapshot to load instead of fetching")
    parser.add_argument("--save", type=str, default=None, help="Write the loaded records to a JSON snapshot")
    parser.add_argument("--towns", type=str, default=None, help="Comma-separated towns")
    parser.add_argument("--flat-types", type=str, default=None, help="Comma-separated flat types")
    parser.add_argument("--start", type=str, default=None, help="First month (YYYY-MM)")
    parser.add_argument("--end", type=str, default=None, help="Last month (YYYY-MM)")
    parser.add_argument(
        "--months",
        type=int,
        default=get_config().dashboard.default_window_months,
        help="Trailing window when --start is not given (default: %(default)s)",
    )
    parser.add_argument(
        "--metric",
        choices=[m.value for m in BoxPlotMetric],
        default=BoxPlotMetric.RESALE_PRICE.value,
        help="Box plot metric for the JSON output",
    )
    parser.add_argument("--json", action="store_true", help="Print the dashboard view as JSON")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set log level",
    )

    args = parser.parse_args()

    setup_logging(level=args.log_level)
    logger = get_logger(__name__)

    try:
        records = get_records(args.input)
        if args.save:
            save_records(records, args.save)

        service = DashboardService(records)
        view = service.build_view(build_filter(service, args), args.metric)
    except HdbTrendsError as e:
        logger.error("Report failed: %s", e.message)
        sys.exit(1)

    if args.json:
        print(json.dumps(view.to_dict(), indent=2))
    else:
        print_report(view)


if __name__ == "__main__":
    main()
