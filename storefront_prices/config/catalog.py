# storefront_prices/config/catalog.py

"""Static storefront catalog: product key to Amazon ASIN."""

from collections.abc import Mapping
from types import MappingProxyType

from storefront_prices.models.catalog import CatalogEntry

PRODUCT_CATALOG: Mapping[str, str] = MappingProxyType({
    "massagepistole": "B09NZT1VV4",
    "moorkissen": "B08SQM4GK6",
    "knie-kuehlpack": "B0B6TXXL51",
    "retterspitz": "B00E4UGQYG",
    "macdavid-bandage": "B000V41428",
    "leukotape": "B001BB6UEM",
    "laufband": "B0FLJHY419",
    "thrombosestrumpf": "B0D15GQVRM",
    "waermemessgeraet": "B0BGGJH3G2",
    "aloe-vera-gel": "B0C7BFWTQ7",
    "lymphmassband": "B082W886W9",
    "elektrischer-shaker": "B0C7GWGLWV",
    "bauerfeind-fussbandage": "B01BJT4BY6",
    "bauerfeind-armbandage": "B076KP7BKW",
    "neue-empfehlung-1": "B0FKBLTN38",
    "neue-empfehlung-2": "B004FNTGUI",
    "neue-empfehlung-3": "B0DVC94TN2",
    "neue-empfehlung-4": "B0GFSJYVX6",
})


def catalog_entries(
    catalog: Mapping[str, str] = PRODUCT_CATALOG,
) -> list[CatalogEntry]:
    """Return the catalog as an ordered list of entries."""
    return [
        CatalogEntry(product_key=key, asin=asin)
        for key, asin in catalog.items()
    ]
