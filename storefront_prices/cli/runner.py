# storefront_prices/cli/runner.py

"""Headless price update run: config → fetch → map → write."""

import logging
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from storefront_prices.clients.paapi_client import PaapiClient
from storefront_prices.config.catalog import PRODUCT_CATALOG
from storefront_prices.config.settings import ConfigError, Settings
from storefront_prices.models.price_record import PriceDocument
from storefront_prices.services.price_updater import PriceUpdater
from storefront_prices.storage.file_manager import FileManager

logger = logging.getLogger("storefront_prices.cli")

# Stderr console for status messages so stdout stays clean
_err = Console(stderr=True)


def _print_table(document: PriceDocument) -> None:
    """Render a Rich table of the published records to stdout."""
    table = Table(
        title=f"Prices ({document.marketplace})",
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("Product", style="bold")
    table.add_column("ASIN", style="dim")
    table.add_column("Price", justify="right", style="green")
    table.add_column("List price", justify="right")
    table.add_column("Discount", justify="right", style="magenta")

    for key, record in document.items.items():
        discount = (
            f"-{record.discount_percent}%"
            if record.discount_percent
            else "—"
        )
        table.add_row(
            key,
            record.asin,
            record.display_price,
            record.display_list_price or "—",
            discount,
        )

    Console().print(table)


def run_update(
    output_path: str | Path | None = None,
    output_format: str = "summary",
) -> int:
    """Run one price update and return an exit code (0=ok, 1=fail).

    The output file is only written after every batch has been fetched
    and mapped; any failure leaves the previous snapshot in place.
    """
    try:
        settings = Settings.from_env()
    except ConfigError as exc:
        logger.error("%s", exc)
        _err.print(f"[red]{escape(str(exc))}[/red]")
        return 1

    file_manager = FileManager(
        Path(output_path) if output_path is not None else None
    )

    try:
        with PaapiClient(settings) as client:
            updater = PriceUpdater(settings, client, PRODUCT_CATALOG)
            result = updater.collect()
        path = file_manager.save_document(result.document)
    except Exception as exc:
        logger.critical("Price update failed", exc_info=True)
        _err.print(f"[red]Price update failed: {escape(str(exc))}[/red]")
        return 1

    logger.info(
        "Priced %d of %d ASINs (%d returned by the API)",
        result.priced_count,
        result.requested_count,
        result.returned_count,
    )
    if result.unpriced:
        logger.info(
            "No price available for: %s", ", ".join(result.unpriced)
        )
    _err.print(
        f"[green]{path.name} updated: "
        f"{result.priced_count} products[/green] "
        f"[dim]({result.priced_count} of {result.requested_count} "
        f"ASINs priced)[/dim]"
    )
    if output_format == "table":
        _print_table(result.document)
    return 0
