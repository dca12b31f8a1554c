# storefront_prices/config/settings.py

"""Central configuration for the storefront price updater."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from dotenv import load_dotenv

load_dotenv()


class ConfigError(ValueError):
    """Raised when a required environment variable is missing."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(
            f"Missing required env vars: {', '.join(missing)}"
        )


@dataclass(frozen=True)
class Settings:
    """Immutable run configuration for the PA-API price updater.

    Class-level constants describe the fixed protocol and file layout.
    Instance fields hold the per-run values read from the environment
    by :meth:`from_env`.
    """

    access_key_id: str
    secret_access_key: str
    partner_tag: str
    region: str = "eu-west-1"
    host: str = "webservices.amazon.de"
    marketplace: str = "www.amazon.de"
    partner_type: str = "Associates"

    # --- Environment ---
    REQUIRED_ENV: ClassVar[tuple[str, ...]] = (
        "AMAZON_ACCESS_KEY_ID",
        "AMAZON_SECRET_ACCESS_KEY",
        "AMAZON_PARTNER_TAG",
    )

    # --- PA-API 5.0 GetItems ---
    SERVICE: ClassVar[str] = "ProductAdvertisingAPI"
    TARGET: ClassVar[str] = (
        "com.amazon.paapi5.v1.ProductAdvertisingAPIv1.GetItems"
    )
    REQUEST_PATH: ClassVar[str] = "/paapi5/getitems"
    CONTENT_ENCODING: ClassVar[str] = "amz-1.0"
    CONTENT_TYPE: ClassVar[str] = "application/json; charset=utf-8"
    SIGNED_HEADERS: ClassVar[str] = (
        "content-encoding;content-type;host;x-amz-date;x-amz-target"
    )
    CONDITION: ClassVar[str] = "New"
    RESOURCES: ClassVar[tuple[str, ...]] = (
        "ItemInfo.Title",
        "Offers.Listings.Price",
        "Offers.Listings.SavingAmount",
        "Offers.Listings.SavingBasis",
        "Offers.Summaries.LowestPrice",
    )

    # --- Fetching ---
    BATCH_SIZE: ClassVar[int] = 10       # GetItems accepts at most 10 ids
    REQUEST_TIMEOUT: ClassVar[int] = 30  # Seconds before a request times out
    ERROR_BODY_LIMIT: ClassVar[int] = 500

    # --- Output ---
    SOURCE_TAG: ClassVar[str] = "amazon-paapi5"
    DEFAULT_CURRENCY: ClassVar[str] = "EUR"
    DISPLAY_LOCALE: ClassVar[str] = "de_DE"

    # --- Paths ---
    BASE_DIR: ClassVar[Path] = Path(__file__).resolve().parent.parent.parent
    OUTPUT_PATH: ClassVar[Path] = BASE_DIR / "prices.json"
    LOGS_DIR: ClassVar[Path] = BASE_DIR / "logs"

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None
    ) -> "Settings":
        """Build settings from the process environment.

        Raises:
            ConfigError: if any of :attr:`REQUIRED_ENV` is unset or empty.
        """
        env = os.environ if environ is None else environ
        missing = [key for key in cls.REQUIRED_ENV if not env.get(key)]
        if missing:
            raise ConfigError(missing)

        return cls(
            access_key_id=env["AMAZON_ACCESS_KEY_ID"],
            secret_access_key=env["AMAZON_SECRET_ACCESS_KEY"],
            partner_tag=env["AMAZON_PARTNER_TAG"],
            region=env.get("AMAZON_REGION") or "eu-west-1",
            host=env.get("AMAZON_HOST") or "webservices.amazon.de",
            marketplace=env.get("AMAZON_MARKETPLACE") or "www.amazon.de",
            partner_type=env.get("AMAZON_PARTNER_TYPE") or "Associates",
        )

    @property
    def endpoint(self) -> str:
        """Full HTTPS URL of the GetItems operation."""
        return f"https://{self.host}{self.REQUEST_PATH}"
