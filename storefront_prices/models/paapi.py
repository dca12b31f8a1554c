# storefront_prices/models/paapi.py

"""Typed view of a PA-API 5.0 ``GetItems`` response.

The raw JSON is decoded once, at the client boundary. Every field the
price mapper reads is carried as an explicit optional value, so the
mapper never probes raw dicts for presence. Decoding never raises:
fields with the wrong shape are treated as absent.
"""

import math
from dataclasses import dataclass
from typing import Any


def _as_dict(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_list(value: Any) -> list[Any]:
    return value if isinstance(value, list) else []


def _as_str(value: Any) -> str | None:
    return value if isinstance(value, str) else None


def as_number(value: Any) -> float | None:
    """Coerce a JSON number or numeric string to a finite float.

    Returns ``None`` for missing, boolean, non-numeric or non-finite input.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str) and value.strip():
        try:
            number = float(value)
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


@dataclass(frozen=True)
class Money:
    """A price object (``Price``, ``SavingBasis``, ``LowestPrice``)."""

    amount: float | None = None
    currency: str | None = None
    display_amount: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Money | None":
        if not isinstance(data, dict):
            return None
        return cls(
            amount=as_number(data.get("Amount")),
            currency=_as_str(data.get("Currency")),
            display_amount=_as_str(data.get("DisplayAmount")),
        )


@dataclass(frozen=True)
class Saving:
    """The ``SavingAmount`` object of a listing."""

    amount: float | None = None
    percentage: float | None = None
    display_amount: str | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Saving | None":
        if not isinstance(data, dict):
            return None
        return cls(
            amount=as_number(data.get("Amount")),
            percentage=as_number(data.get("Percentage")),
            display_amount=_as_str(data.get("DisplayAmount")),
        )


@dataclass(frozen=True)
class Listing:
    """One entry of ``Offers.Listings``."""

    price: Money | None = None
    saving_basis: Money | None = None
    saving_amount: Saving | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Listing":
        data = _as_dict(data)
        return cls(
            price=Money.from_dict(data.get("Price")),
            saving_basis=Money.from_dict(data.get("SavingBasis")),
            saving_amount=Saving.from_dict(data.get("SavingAmount")),
        )


@dataclass(frozen=True)
class Summary:
    """One entry of ``Offers.Summaries``."""

    lowest_price: Money | None = None

    @classmethod
    def from_dict(cls, data: Any) -> "Summary":
        return cls(
            lowest_price=Money.from_dict(_as_dict(data).get("LowestPrice"))
        )


@dataclass(frozen=True)
class Item:
    """A single item of ``ItemsResult.Items``."""

    asin: str | None
    title: str | None = None
    listings: tuple[Listing, ...] = ()
    summaries: tuple[Summary, ...] = ()

    @property
    def first_listing(self) -> Listing | None:
        return self.listings[0] if self.listings else None

    @property
    def first_summary(self) -> Summary | None:
        return self.summaries[0] if self.summaries else None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Item":
        offers = _as_dict(data.get("Offers"))
        title = _as_dict(_as_dict(data.get("ItemInfo")).get("Title"))
        return cls(
            asin=_as_str(data.get("ASIN")) or None,
            title=_as_str(title.get("DisplayValue")),
            listings=tuple(
                Listing.from_dict(entry)
                for entry in _as_list(offers.get("Listings"))
            ),
            summaries=tuple(
                Summary.from_dict(entry)
                for entry in _as_list(offers.get("Summaries"))
            ),
        )


@dataclass(frozen=True)
class ProviderError:
    """An entry of the top-level ``Errors`` array."""

    code: str | None = None
    message: str | None = None


@dataclass(frozen=True)
class GetItemsResponse:
    """Decoded ``GetItems`` response body."""

    items: tuple[Item, ...] = ()
    errors: tuple[ProviderError, ...] = ()

    @classmethod
    def from_dict(cls, data: Any) -> "GetItemsResponse":
        """Decode a parsed JSON body; non-object items are skipped."""
        data = _as_dict(data)
        raw_items = _as_list(_as_dict(data.get("ItemsResult")).get("Items"))
        return cls(
            items=tuple(
                Item.from_dict(raw)
                for raw in raw_items
                if isinstance(raw, dict)
            ),
            errors=tuple(
                ProviderError(
                    code=_as_str(_as_dict(raw).get("Code")),
                    message=_as_str(_as_dict(raw).get("Message")),
                )
                for raw in _as_list(data.get("Errors"))
            ),
        )

    @property
    def warning_message(self) -> str:
        """Non-empty error messages joined with `` | ``."""
        return " | ".join(e.message for e in self.errors if e.message)
