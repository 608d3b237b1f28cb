# main.py

"""Entry point for the chango price comparison CLI."""

import argparse
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("chango.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    valid_ids = ", ".join(s["id"] for s in Settings.AVAILABLE_STORES)

    parser = argparse.ArgumentParser(
        prog="chango",
        description="Grocery price comparison and cart totals.",
        epilog=f"Available stores: {valid_ids}",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=False,
        help="Show info-level log messages on the console.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    compare = sub.add_parser(
        "compare", help="Best price, average and trend per product.",
    )
    compare.add_argument("products", help="Products JSON export.")
    compare.add_argument(
        "--history",
        default=None,
        help="History JSON export (default: the local history DB).",
    )
    compare.add_argument(
        "--tab", choices=Settings.CATALOG_TABS, default="home",
    )
    compare.add_argument("--search", default="", help="Name or ticker.")
    compare.add_argument("--trend", choices=["up", "down"], default=None)
    _add_format_flag(compare)

    cart = sub.add_parser("cart", help="Rank stores by cart total.")
    cart.add_argument("products", help="Products JSON export.")
    cart.add_argument("cart", help="Cart JSON: {product_id: quantity}.")
    cart.add_argument(
        "-s",
        "--stores",
        default=None,
        help="Comma-separated store IDs (default: all).",
    )
    _add_format_flag(cart)

    importer = sub.add_parser(
        "import-history", help="Load a history JSON export into the DB.",
    )
    importer.add_argument("history", help="History JSON export.")

    history = sub.add_parser(
        "history", help="Show one product's price history.",
    )
    history.add_argument("name", help="Exact product name.")
    history.add_argument(
        "--days",
        type=int,
        choices=Settings.CHART_WINDOWS,
        default=Settings.CHART_WINDOWS[0],
    )
    return parser


def _add_format_flag(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )


def main(argv: list[str] | None = None) -> None:
    """Parse arguments and dispatch to the matching command."""
    args = _build_parser().parse_args(argv)
    log_file = setup_logging(verbose=args.verbose)
    logger.info("chango %s starting — log file: %s", args.command, log_file)

    from src.cli import runner

    if args.command == "compare":
        exit_code = runner.run_compare(
            args.products,
            history_file=args.history,
            tab=args.tab,
            search=args.search,
            trend=args.trend,
            output_format=args.output_format,
        )
    elif args.command == "cart":
        exit_code = runner.run_cart(
            args.products,
            args.cart,
            store_csv=args.stores,
            output_format=args.output_format,
        )
    elif args.command == "import-history":
        exit_code = runner.run_import_history(args.history)
    else:
        exit_code = runner.run_history(args.name, days=args.days)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
