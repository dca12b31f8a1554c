# storefront_prices/clients/paapi_client.py

"""Signed batch client for the PA-API 5.0 ``GetItems`` operation."""

import json
import logging
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from typing import Any

from curl_cffi import requests as curl_requests

from storefront_prices.clients.signing import build_authorization, to_amz_date
from storefront_prices.config.settings import Settings
from storefront_prices.filters.batching import chunked
from storefront_prices.models.paapi import GetItemsResponse, Item


class ProviderAPIError(RuntimeError):
    """Raised when PA-API answers with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Amazon API error {status_code}: {body}")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class PaapiClient:
    """Fetches item offers in fixed-size, sequential, signed batches.

    No retries are attempted: the first failing batch raises and the
    items collected from earlier batches are discarded by the caller.
    """

    def __init__(
        self,
        settings: Settings,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.settings = settings
        self.logger = logging.getLogger("storefront_prices.paapi")
        self.session = curl_requests.Session()
        self._clock = clock

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "PaapiClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _build_payload(self, item_ids: Sequence[str]) -> str:
        """Serialise the request body exactly as it will be signed."""
        payload: dict[str, Any] = {
            "ItemIds": list(item_ids),
            "PartnerTag": self.settings.partner_tag,
            "PartnerType": self.settings.partner_type,
            "Marketplace": self.settings.marketplace,
            "Condition": self.settings.CONDITION,
            "Resources": list(self.settings.RESOURCES),
        }
        return json.dumps(payload, separators=(",", ":"))

    def _build_headers(self, body: str, amz_date: str) -> dict[str, str]:
        return {
            "content-encoding": self.settings.CONTENT_ENCODING,
            "content-type": self.settings.CONTENT_TYPE,
            "host": self.settings.host,
            "x-amz-date": amz_date,
            "x-amz-target": self.settings.TARGET,
            "authorization": build_authorization(
                body, amz_date, self.settings
            ),
        }

    def get_items(self, item_ids: Sequence[str]) -> list[Item]:
        """Issue one signed ``GetItems`` call for up to ten ASINs.

        Raises:
            ProviderAPIError: on any non-2xx response.
        """
        body = self._build_payload(item_ids)
        amz_date = to_amz_date(self._clock())
        headers = self._build_headers(body, amz_date)

        self.logger.info(
            "[paapi] GetItems for %d ASINs: %s",
            len(item_ids),
            ", ".join(item_ids),
        )
        resp = self.session.post(
            self.settings.endpoint,
            headers=headers,
            data=body.encode("utf-8"),
            timeout=self.settings.REQUEST_TIMEOUT,
        )

        if not 200 <= resp.status_code < 300:
            self.logger.error(
                "[paapi] HTTP %d for ASINs %s",
                resp.status_code,
                ", ".join(item_ids),
            )
            raise ProviderAPIError(
                resp.status_code,
                resp.text[: self.settings.ERROR_BODY_LIMIT],
            )

        response = GetItemsResponse.from_dict(resp.json())
        if response.warning_message:
            self.logger.warning(
                "Amazon API warning: %s", response.warning_message
            )
        self.logger.debug(
            "[paapi] %d items returned", len(response.items)
        )
        return list(response.items)

    def fetch_all(self, item_ids: Sequence[str]) -> list[Item]:
        """Fetch every ASIN, one batch at a time, in order."""
        items: list[Item] = []
        batches = chunked(item_ids, self.settings.BATCH_SIZE)
        for index, batch in enumerate(batches, 1):
            self.logger.info(
                "[paapi] Batch %d/%d (%d items so far)",
                index,
                len(batches),
                len(items),
            )
            items.extend(self.get_items(batch))
        return items
