# main.py

"""Entry point for the storefront price updater (headless, CI-driven)."""

import argparse
import logging
import sys

from storefront_prices.config.logging_config import setup_logging
from storefront_prices.config.settings import Settings

logger = logging.getLogger("storefront_prices.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="storefront-prices",
        description=(
            "Fetch current Amazon prices for the storefront catalog "
            "and write them to prices.json."
        ),
        epilog=(
            "Credentials are read from AMAZON_ACCESS_KEY_ID, "
            "AMAZON_SECRET_ACCESS_KEY and AMAZON_PARTNER_TAG."
        ),
    )
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        dest="output_path",
        help=f"Output file (default: {Settings.OUTPUT_PATH.name} "
        "in the project root).",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["summary", "table"],
        default="summary",
        dest="output_format",
        help="Console output after a successful update (default: summary).",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Run one price update and exit with its status code."""
    args = _build_parser().parse_args(argv)

    log_file = setup_logging()
    logger.info("storefront-prices starting, log file: %s", log_file)

    from storefront_prices.cli.runner import run_update

    exit_code = run_update(
        output_path=args.output_path,
        output_format=args.output_format,
    )
    logger.info("storefront-prices finished with exit code %d", exit_code)
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
