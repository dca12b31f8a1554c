# tests/test_paapi_client.py

"""Tests for the PA-API batch client using mocked HTTP responses."""

import json
import logging
import unittest
from datetime import datetime, timezone
from unittest.mock import MagicMock, patch

from helpers import items_payload, make_settings, mock_response, raw_item

from storefront_prices.clients.paapi_client import PaapiClient, ProviderAPIError
from storefront_prices.clients.signing import build_authorization

FIXED_NOW = datetime(2026, 10, 19, 6, 0, 0, tzinfo=timezone.utc)


class TestPaapiClient(unittest.TestCase):
    """Verify request construction, batching and error handling."""

    def setUp(self) -> None:
        patcher = patch(
            "storefront_prices.clients.paapi_client.curl_requests.Session"
        )
        self.mock_session_cls = patcher.start()
        self.addCleanup(patcher.stop)
        self.mock_session = MagicMock()
        self.mock_session_cls.return_value = self.mock_session
        self.settings = make_settings()
        self.client = PaapiClient(self.settings, clock=lambda: FIXED_NOW)

    def test_request_body_and_headers(self) -> None:
        """One POST with the signed JSON body and the fixed header set."""
        self.mock_session.post.return_value = mock_response(
            payload=items_payload(raw_item("B09NZT1VV4"))
        )

        self.client.get_items(["B09NZT1VV4", "B08SQM4GK6"])

        self.mock_session.post.assert_called_once()
        args, kwargs = self.mock_session.post.call_args
        self.assertEqual(
            args[0], "https://webservices.amazon.de/paapi5/getitems"
        )
        body = kwargs["data"].decode("utf-8")
        self.assertEqual(json.loads(body), {
            "ItemIds": ["B09NZT1VV4", "B08SQM4GK6"],
            "PartnerTag": "storefront-21",
            "PartnerType": "Associates",
            "Marketplace": "www.amazon.de",
            "Condition": "New",
            "Resources": [
                "ItemInfo.Title",
                "Offers.Listings.Price",
                "Offers.Listings.SavingAmount",
                "Offers.Listings.SavingBasis",
                "Offers.Summaries.LowestPrice",
            ],
        })
        headers = kwargs["headers"]
        self.assertEqual(headers["x-amz-date"], "20261019T060000Z")
        self.assertEqual(headers["content-encoding"], "amz-1.0")
        self.assertEqual(
            headers["x-amz-target"],
            "com.amazon.paapi5.v1.ProductAdvertisingAPIv1.GetItems",
        )
        self.assertEqual(headers["host"], "webservices.amazon.de")
        self.assertEqual(kwargs["timeout"], self.settings.REQUEST_TIMEOUT)

    def test_authorization_signs_exact_body(self) -> None:
        """The Authorization header is computed over the bytes sent."""
        self.mock_session.post.return_value = mock_response(payload={})
        self.client.get_items(["B09NZT1VV4"])
        _, kwargs = self.mock_session.post.call_args
        body = kwargs["data"].decode("utf-8")
        self.assertEqual(
            kwargs["headers"]["authorization"],
            build_authorization(body, "20261019T060000Z", self.settings),
        )
        self.assertNotIn(" ", body)

    def test_fresh_timestamp_per_call(self) -> None:
        """Each batch captures its own timestamp."""
        moments = iter([
            datetime(2026, 10, 19, 6, 0, 0, tzinfo=timezone.utc),
            datetime(2026, 10, 19, 6, 0, 2, tzinfo=timezone.utc),
        ])
        client = PaapiClient(self.settings, clock=lambda: next(moments))
        self.mock_session.post.return_value = mock_response(payload={})

        client.fetch_all([f"ASIN{i:02d}" for i in range(11)])

        dates = [
            c.kwargs["headers"]["x-amz-date"]
            for c in self.mock_session.post.call_args_list
        ]
        self.assertEqual(dates, ["20261019T060000Z", "20261019T060002Z"])

    def test_returns_decoded_items(self) -> None:
        self.mock_session.post.return_value = mock_response(
            payload=items_payload(raw_item("A1"), raw_item("A2"))
        )
        items = self.client.get_items(["A1", "A2"])
        self.assertEqual([i.asin for i in items], ["A1", "A2"])

    def test_missing_items_is_empty(self) -> None:
        """A body without ItemsResult yields zero items, not an error."""
        self.mock_session.post.return_value = mock_response(payload={})
        self.assertEqual(self.client.get_items(["A1"]), [])

    def test_non_2xx_raises_with_truncated_body(self) -> None:
        self.mock_session.post.return_value = mock_response(
            status_code=429, text="x" * 2000
        )
        with self.assertRaises(ProviderAPIError) as ctx:
            self.client.get_items(["A1"])
        self.assertEqual(ctx.exception.status_code, 429)
        self.assertEqual(len(ctx.exception.body), 500)
        self.assertIn("Amazon API error 429", str(ctx.exception))

    def test_provider_warnings_logged_not_raised(self) -> None:
        self.mock_session.post.return_value = mock_response(payload={
            **items_payload(raw_item("A1")),
            "Errors": [
                {"Code": "ItemNotAccessible", "Message": "A2 not accessible"},
                {"Code": "Other", "Message": ""},
            ],
        })
        with self.assertLogs("storefront_prices.paapi", logging.WARNING) as logs:
            items = self.client.get_items(["A1", "A2"])
        self.assertEqual(len(items), 1)
        self.assertEqual(
            logs.records[0].getMessage(),
            "Amazon API warning: A2 not accessible",
        )

    def test_fetch_all_batches_of_ten(self) -> None:
        """Twelve ids are sent as a batch of ten and a batch of two."""
        ids = [f"ASIN{i:02d}" for i in range(12)]
        self.mock_session.post.side_effect = [
            mock_response(payload=items_payload(*[raw_item(i) for i in ids[:10]])),
            mock_response(payload=items_payload(*[raw_item(i) for i in ids[10:]])),
        ]

        items = self.client.fetch_all(ids)

        self.assertEqual(self.mock_session.post.call_count, 2)
        sent = [
            json.loads(c.kwargs["data"])["ItemIds"]
            for c in self.mock_session.post.call_args_list
        ]
        self.assertEqual(sent, [ids[:10], ids[10:]])
        self.assertEqual([i.asin for i in items], ids)

    def test_fetch_all_stops_at_first_failure(self) -> None:
        """A failing batch aborts the remaining batches."""
        ids = [f"ASIN{i:02d}" for i in range(25)]
        self.mock_session.post.side_effect = [
            mock_response(status_code=500, text="boom"),
            mock_response(payload={}),
            mock_response(payload={}),
        ]
        with self.assertRaises(ProviderAPIError):
            self.client.fetch_all(ids)
        self.assertEqual(self.mock_session.post.call_count, 1)

    def test_transport_errors_propagate(self) -> None:
        self.mock_session.post.side_effect = ConnectionError("reset")
        with self.assertRaises(ConnectionError):
            self.client.get_items(["A1"])

    def test_context_manager_closes_session(self) -> None:
        with PaapiClient(self.settings) as client:
            self.assertIs(client.session, self.mock_session)
        self.mock_session.close.assert_called_once()


if __name__ == "__main__":
    unittest.main()
