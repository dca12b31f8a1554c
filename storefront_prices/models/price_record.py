# storefront_prices/models/price_record.py

"""Normalized price records and the published price document."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any


def iso_timestamp(moment: datetime) -> str:
    """Format a datetime as UTC ISO-8601 with milliseconds and ``Z``."""
    utc = moment.astimezone(timezone.utc)
    return (
        utc.strftime("%Y-%m-%dT%H:%M:%S")
        + f".{utc.microsecond // 1000:03d}Z"
    )


@dataclass(frozen=True)
class PriceRecord:
    """Current price and discount data for one storefront product."""

    asin: str
    currency: str
    display_price: str
    price: float | None = None
    list_price: float | None = None
    display_list_price: str | None = None
    discount_amount: float | None = None
    discount_percent: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the storefront JSON shape, omitting absent fields."""
        data: dict[str, Any] = {
            "asin": self.asin,
            "currency": self.currency,
            "displayPrice": self.display_price,
        }
        if self.price is not None:
            data["price"] = self.price
        if self.list_price is not None:
            data["listPrice"] = self.list_price
        if self.display_list_price:
            data["displayListPrice"] = self.display_list_price
        if self.discount_amount is not None:
            data["discountAmount"] = self.discount_amount
        if self.discount_percent is not None:
            data["discountPercent"] = self.discount_percent
        return data


@dataclass
class PriceDocument:
    """Snapshot written to ``prices.json`` on every successful run."""

    updated_at: datetime
    marketplace: str
    source: str = "amazon-paapi5"
    items: dict[str, PriceRecord] = field(
        default_factory=lambda: dict[str, PriceRecord]()
    )

    def to_dict(self) -> dict[str, Any]:
        return {
            "updatedAt": iso_timestamp(self.updated_at),
            "source": self.source,
            "marketplace": self.marketplace,
            "items": {
                key: record.to_dict()
                for key, record in self.items.items()
            },
        }
