# main.py

"""Entry point for the catalog_browser headless client."""

import argparse
import asyncio
import logging
import sys

from src.config.logging_config import setup_logging
from src.config.settings import Settings
from src.models.query import SortKey

logger = logging.getLogger("catalog_browser.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="catalog_browser",
        description="Browse, search and sort the public product catalog.",
        epilog=f"API: {Settings.API_BASE_URL}",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    list_cmd = commands.add_parser(
        "list", help="Fetch the catalog and print a filtered, sorted view."
    )
    list_cmd.add_argument(
        "-q",
        "--search",
        default=None,
        help="Case-insensitive text to match in product titles.",
    )
    list_cmd.add_argument(
        "-c",
        "--category",
        default=Settings.ALL_CATEGORIES,
        help="Exact category slug (default: all).",
    )
    list_cmd.add_argument(
        "-s",
        "--sort",
        choices=[k.value for k in SortKey],
        default=Settings.DEFAULT_SORT_KEY,
        dest="sort_key",
        help="Sort order (default: name-asc).",
    )
    list_cmd.add_argument(
        "--search-description",
        action="store_true",
        default=Settings.SEARCH_INCLUDES_DESCRIPTION,
        dest="search_description",
        help="Also match the search text against descriptions.",
    )

    show_cmd = commands.add_parser(
        "show", help="Print the details of one product."
    )
    show_cmd.add_argument("product_id", help="Product id.")

    for sub in (list_cmd, show_cmd):
        sub.add_argument(
            "-f",
            "--format",
            choices=["json", "table"],
            default="json",
            dest="output_format",
            help="Output format (default: json).",
        )

    commands.add_parser(
        "categories", help="Print the category names known to the API."
    )
    return parser


def main() -> None:
    """Dispatch the chosen sub-command and exit with its code."""
    log_file = setup_logging()
    logger.info("catalog_browser starting, log file: %s", log_file)

    args = _build_parser().parse_args()

    from src.cli import runner

    try:
        if args.command == "list":
            exit_code = asyncio.run(
                runner.cli_list(
                    search_text=args.search,
                    category=args.category,
                    sort_key=args.sort_key,
                    search_description=args.search_description,
                    output_format=args.output_format,
                )
            )
        elif args.command == "show":
            exit_code = asyncio.run(
                runner.cli_show(args.product_id, args.output_format)
            )
        else:
            exit_code = asyncio.run(runner.cli_categories())
    except Exception:
        logger.critical("Fatal error during CLI run", exc_info=True)
        raise
    finally:
        logger.info("catalog_browser shutting down")
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
