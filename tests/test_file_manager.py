# tests/test_file_manager.py

"""Tests for the FileManager storage module."""

import json
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path

from storefront_prices.models.price_record import PriceDocument, PriceRecord
from storefront_prices.storage.file_manager import FileManager


class TestFileManager(unittest.TestCase):
    """Tests for writing prices.json."""

    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.path = Path(tmp.name) / "prices.json"
        self.fm = FileManager(self.path)

    def _document(self) -> PriceDocument:
        return PriceDocument(
            updated_at=datetime(2026, 10, 19, 6, 0, 0, 123456, tzinfo=timezone.utc),
            marketplace="www.amazon.de",
            items={
                "leukotape": PriceRecord(
                    asin="B001BB6UEM",
                    currency="EUR",
                    display_price="12,49 €",
                    price=12.49,
                ),
            },
        )

    def test_save_document_writes_json(self) -> None:
        path = self.fm.save_document(self._document())

        self.assertEqual(path, self.path)
        data = json.loads(path.read_text(encoding="utf-8"))
        self.assertEqual(data["updatedAt"], "2026-10-19T06:00:00.123Z")
        self.assertEqual(data["source"], "amazon-paapi5")
        self.assertEqual(data["items"]["leukotape"]["price"], 12.49)

    def test_pretty_printed_with_trailing_newline(self) -> None:
        self.fm.save_document(self._document())
        text = self.path.read_text(encoding="utf-8")
        self.assertTrue(text.endswith("}\n"))
        self.assertIn('\n  "source": "amazon-paapi5",\n', text)

    def test_non_ascii_kept(self) -> None:
        self.fm.save_document(self._document())
        self.assertIn("12,49 €", self.path.read_text(encoding="utf-8"))

    def test_overwrites_previous_snapshot(self) -> None:
        self.path.write_text('{"old": true}\n', encoding="utf-8")
        self.fm.save_document(self._document())
        data = json.loads(self.path.read_text(encoding="utf-8"))
        self.assertNotIn("old", data)

    def test_default_path_is_project_root(self) -> None:
        self.assertEqual(FileManager().output_path.name, "prices.json")


if __name__ == "__main__":
    unittest.main()
