# storefront_prices/services/price_mapper.py

"""Maps decoded PA-API items to normalized storefront price records."""

import logging
import math
from decimal import ROUND_HALF_UP, Decimal

from babel.core import UnknownLocaleError
from babel.numbers import format_currency, is_currency

from storefront_prices.config.settings import Settings
from storefront_prices.models.paapi import Item, Money
from storefront_prices.models.price_record import PriceRecord

logger = logging.getLogger("storefront_prices.mapper")

_CENT = Decimal("0.01")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return math.floor(value + 0.5)


def round_money(value: float) -> float:
    """Round to cents with ties going up (``10.125`` becomes ``10.13``).

    The exact binary value is rounded, so ``1.005`` (stored just below
    the tie) stays ``1.0``.
    """
    return float(Decimal(value).quantize(_CENT, rounding=ROUND_HALF_UP))


def format_money(
    amount: float,
    currency: str = Settings.DEFAULT_CURRENCY,
    locale: str = Settings.DISPLAY_LOCALE,
) -> str:
    """Format *amount* as a localized currency string (e.g. ``12,50 €``).

    Always two decimals, whatever the currency's usual precision.
    Falls back to ``"12.50 EUR"`` for codes that are not ISO 4217
    currencies or when the locale is unknown.
    """
    if not is_currency(currency):
        logger.debug("Unknown currency code %r, using plain format", currency)
        return f"{amount:.2f} {currency}"
    try:
        return format_currency(
            amount, currency, locale=locale, currency_digits=False
        )
    except (ValueError, UnknownLocaleError):
        logger.debug(
            "Currency formatting failed for %s/%s", currency, locale,
            exc_info=True,
        )
        return f"{amount:.2f} {currency}"


def _display_amount(
    money: Money | None, amount: float | None, currency: str
) -> str:
    if money is not None and money.display_amount:
        stripped = money.display_amount.strip()
        if stripped:
            return stripped
    if amount is not None:
        return format_money(amount, currency)
    return ""


def map_item(item: Item) -> PriceRecord | None:
    """Build a :class:`PriceRecord` from one item, or ``None`` if unpriced.

    The first listing's price wins over the first summary's lowest price.
    When the provider omits the saving amount, the discount is derived
    from the listing's saving basis.
    """
    listing = item.first_listing
    summary = item.first_summary

    price = listing.price if listing is not None else None
    if price is None and summary is not None:
        price = summary.lowest_price
    if price is None or item.asin is None:
        return None

    raw_price = price.amount
    currency = price.currency or Settings.DEFAULT_CURRENCY
    display_price = _display_amount(price, raw_price, currency)
    if not display_price:
        return None

    basis = listing.saving_basis if listing is not None else None
    saving = listing.saving_amount if listing is not None else None

    list_price = basis.amount if basis is not None else None
    display_list_price = _display_amount(basis, list_price, currency)

    discount_amount = saving.amount if saving is not None else None
    discount_percent = saving.percentage if saving is not None else None
    if (
        raw_price is not None
        and list_price is not None
        and list_price > raw_price
    ):
        if discount_amount is None:
            discount_amount = list_price - raw_price
        if discount_percent is None:
            discount_percent = round_half_up(
                (list_price - raw_price) / list_price * 100
            )

    return PriceRecord(
        asin=item.asin,
        currency=currency,
        display_price=display_price,
        price=round_money(raw_price) if raw_price is not None else None,
        list_price=round_money(list_price) if list_price is not None else None,
        display_list_price=display_list_price or None,
        discount_amount=(
            round_money(discount_amount)
            if discount_amount is not None and discount_amount > 0
            else None
        ),
        discount_percent=(
            round_half_up(discount_percent)
            if discount_percent is not None and discount_percent > 0
            else None
        ),
    )
