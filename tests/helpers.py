# tests/helpers.py

"""Canned PA-API payloads and settings shared across test modules."""

from typing import Any
from unittest.mock import MagicMock

from storefront_prices.config.settings import Settings

TEST_ENV: dict[str, str] = {
    "AMAZON_ACCESS_KEY_ID": "AKIDEXAMPLE",
    "AMAZON_SECRET_ACCESS_KEY": "wJalrXUtnFEMI/K7MDENG+bPxRfiCYEXAMPLEKEY",
    "AMAZON_PARTNER_TAG": "storefront-21",
}


def make_settings(**overrides: str) -> Settings:
    """Return Settings built from TEST_ENV plus keyword overrides."""
    values = {
        "access_key_id": TEST_ENV["AMAZON_ACCESS_KEY_ID"],
        "secret_access_key": TEST_ENV["AMAZON_SECRET_ACCESS_KEY"],
        "partner_tag": TEST_ENV["AMAZON_PARTNER_TAG"],
        **overrides,
    }
    return Settings(**values)


def raw_item(
    asin: str,
    amount: float | None = 19.99,
    display: str | None = "19,99 €",
    basis: float | None = None,
) -> dict[str, Any]:
    """Build a raw GetItems item with one listing."""
    price: dict[str, Any] = {"Currency": "EUR"}
    if amount is not None:
        price["Amount"] = amount
    if display is not None:
        price["DisplayAmount"] = display
    listing: dict[str, Any] = {"Price": price}
    if basis is not None:
        listing["SavingBasis"] = {"Amount": basis, "Currency": "EUR"}
    return {
        "ASIN": asin,
        "ItemInfo": {"Title": {"DisplayValue": f"Product {asin}"}},
        "Offers": {"Listings": [listing]},
    }


def mock_response(
    status_code: int = 200,
    payload: dict[str, Any] | None = None,
    text: str = "",
) -> MagicMock:
    """Build a curl_cffi-like response mock."""
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    resp.json.return_value = payload if payload is not None else {}
    return resp


def items_payload(*items: dict[str, Any]) -> dict[str, Any]:
    return {"ItemsResult": {"Items": list(items)}}
