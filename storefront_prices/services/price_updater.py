# storefront_prices/services/price_updater.py

"""Drives catalog → PA-API → price records for one update run."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone

from storefront_prices.clients.paapi_client import PaapiClient
from storefront_prices.config.catalog import catalog_entries
from storefront_prices.config.settings import Settings
from storefront_prices.filters.batching import unique_in_order
from storefront_prices.models.price_record import PriceDocument
from storefront_prices.services.price_mapper import map_item

logger = logging.getLogger("storefront_prices.updater")


@dataclass
class UpdateResult:
    """Outcome of a completed fetch-and-map pass."""

    document: PriceDocument
    requested_count: int = 0
    returned_count: int = 0
    unpriced: list[str] = field(
        default_factory=lambda: list[str]()
    )

    @property
    def priced_count(self) -> int:
        return len(self.document.items)


class PriceUpdater:
    """Builds a fresh :class:`PriceDocument` for a static catalog."""

    def __init__(
        self,
        settings: Settings,
        client: PaapiClient,
        catalog: Mapping[str, str],
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ) -> None:
        self.settings = settings
        self.client = client
        self.catalog = catalog
        self._clock = clock

    def collect(self) -> UpdateResult:
        """Fetch and map every catalog item.

        Errors from the client propagate unchanged; nothing is written here.
        """
        entries = catalog_entries(self.catalog)
        asins = unique_in_order(entry.asin for entry in entries)
        asin_to_key = {entry.asin: entry.product_key for entry in entries}
        logger.info(
            "Updating %d products (%d unique ASINs)",
            len(entries),
            len(asins),
        )

        items = self.client.fetch_all(asins)

        document = PriceDocument(
            updated_at=self._clock(),
            marketplace=self.settings.marketplace,
            source=self.settings.SOURCE_TAG,
        )
        result = UpdateResult(
            document=document,
            requested_count=len(asins),
            returned_count=len(items),
        )
        for item in items:
            if item.asin is None or item.asin not in asin_to_key:
                logger.debug("Skipping unknown ASIN %r", item.asin)
                continue
            record = map_item(item)
            if record is None:
                logger.debug(
                    "No usable price for %s (%s)",
                    item.asin,
                    item.title or "untitled",
                )
                result.unpriced.append(item.asin)
                continue
            document.items[asin_to_key[item.asin]] = record

        return result
