# storefront_prices/models/catalog.py

"""Catalog entry model linking a storefront product to its ASIN."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CatalogEntry:
    """A storefront product key and the Amazon item it is priced from."""

    product_key: str
    asin: str
