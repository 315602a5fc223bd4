# main.py

"""Entry point for the market_search application (TUI or headless CLI)."""

import argparse
import logging
import sys

from src.config.logging_config import setup_logging

logger = logging.getLogger("market_search.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="market_search",
        description="Search and browse a local market's vendor catalog.",
    )
    parser.add_argument(
        "query",
        nargs="?",
        default=None,
        help="Product search text. Omit (with no other option) for the TUI.",
    )
    parser.add_argument(
        "-c",
        "--category",
        default=None,
        help="Only list products from vendors in this category.",
    )
    parser.add_argument(
        "-p",
        "--page",
        type=int,
        default=1,
        help="Result page to show (default: 1).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["json", "table", "tsv"],
        default="json",
        dest="output_format",
        help="Output format (default: json).",
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        dest="output_dir",
        help="Also save the full result list as JSON into this directory.",
    )
    parser.add_argument(
        "--catalog",
        default=None,
        help="Path to a JSON catalog file (default: bundled seed data).",
    )
    parser.add_argument(
        "--remote",
        action="store_true",
        default=False,
        help="Read the catalog from CATALOG_API_URL instead of a file.",
    )
    parser.add_argument(
        "--categories",
        action="store_true",
        default=False,
        help="List the browsable categories and exit.",
    )
    parser.add_argument(
        "--featured",
        action="store_true",
        default=False,
        help="List the featured vendors and exit.",
    )
    parser.add_argument(
        "--vendor",
        default=None,
        metavar="VENDOR_ID",
        help="Show a vendor and its products.",
    )
    parser.add_argument(
        "--related",
        default=None,
        metavar="PRODUCT_ID",
        help="Show a product with a sample of related products.",
    )
    return parser


def _run_tui(args: argparse.Namespace) -> None:
    """Launch the interactive Textual TUI."""
    from src.cli.runner import build_service
    from src.ui.app import MarketSearchApp

    try:
        app = MarketSearchApp(build_service(args.catalog, args.remote))
        app.run()
    except Exception:
        logger.critical("Fatal error during TUI run", exc_info=True)
        raise
    finally:
        logger.info("market_search TUI shutting down")


def _run_cli(args: argparse.Namespace) -> int:
    """Dispatch a headless command and return its exit code."""
    from src.cli.runner import (
        build_service,
        cli_search,
        run_featured,
        run_list_categories,
        run_related,
        run_vendor,
    )

    service = build_service(args.catalog, args.remote)
    if args.categories:
        return run_list_categories(service)
    if args.featured:
        return run_featured(service)
    if args.vendor:
        return run_vendor(service, args.vendor, args.output_format)
    if args.related:
        return run_related(service, args.related, args.output_format)
    return cli_search(
        service,
        query=args.query,
        category=args.category,
        page=args.page,
        output_format=args.output_format,
        output_dir=args.output_dir,
    )


def main() -> None:
    """Route to the TUI (no arguments) or a headless command."""
    log_file = setup_logging()
    logger.info("market_search starting, log file: %s", log_file)

    args = _build_parser().parse_args()

    headless = (
        args.query is not None
        or args.category is not None
        or args.categories
        or args.featured
        or args.vendor is not None
        or args.related is not None
    )
    if not headless:
        _run_tui(args)
        return
    sys.exit(_run_cli(args))


if __name__ == "__main__":
    main()
