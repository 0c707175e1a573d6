"""Command line entry point: read journals, chart balance of one account.

Usage:
  ledgergraph journal.ledger [more.ledger ...] -a Assets:Checking -o balance.png

All files are read in the given order into one ledger.
"""

import logging
import sys
from argparse import ArgumentParser, Namespace

from pydantic import ValidationError

from .base import LedgerGraphError
from .chart import draw_balance
from .config import load_settings
from .journal import read_journals
from .ledger import Ledger


def make_parser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="ledgergraph", description="Chart account balance from ledger journal files."
    )
    parser.add_argument("files", nargs="+", help="transactions file path(s)")
    parser.add_argument("-a", "--account", help="account to chart")
    parser.add_argument("-o", "--output", help="PNG file to write")
    parser.add_argument("-c", "--config", help="YAML settings file")
    parser.add_argument(
        "--cumulative",
        action="store_true",
        default=None,
        help="chart running balance instead of single postings",
    )
    parser.add_argument(
        "--print", dest="print_series", action="store_true", help="print series as JSON"
    )
    parser.add_argument(
        "--totals", action="store_true", help="print per-account totals as JSON"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def run(args: Namespace) -> int:
    settings = load_settings(
        args.config,
        account=args.account,
        output=args.output,
        cumulative=args.cumulative,
        log_level="DEBUG" if args.verbose else None,
    )
    logging.basicConfig(
        level=settings.log_level, format="%(asctime)s %(levelname)s %(message)s"
    )
    ledger = Ledger.from_list(read_journals(args.files))
    logging.info("Ledger has %d accounts", len(ledger.accounts))
    series = ledger.series_for(settings.account)
    if settings.cumulative:
        series = series.cumulative()
    if args.print_series:
        print(series.model_dump_json(indent=2))
    if args.totals:
        print(ledger.totals.model_dump_json())
    path = draw_balance(
        series, settings.output, settings.width, settings.height, settings.dpi
    )
    print(f"Image result has been saved to {path}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = make_parser().parse_args(argv)
    try:
        return run(args)
    except (LedgerGraphError, ValidationError, OSError) as e:
        logging.error("%s", e)
        return 1


if __name__ == "__main__":
    sys.exit(main())
