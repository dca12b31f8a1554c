# storefront_prices/storage/file_manager.py

"""Writes the price document consumed by the storefront."""

import json
import logging
from pathlib import Path

from storefront_prices.config.settings import Settings
from storefront_prices.models.price_record import PriceDocument

logger = logging.getLogger("storefront_prices.storage")


class FileManager:
    """Handles saving the price document to disk."""

    def __init__(self, output_path: Path | None = None) -> None:
        self.output_path: Path = (
            Settings.OUTPUT_PATH if output_path is None else output_path
        )
        logger.debug(
            "FileManager initialised, output_path=%s", self.output_path
        )

    @staticmethod
    def render(document: PriceDocument) -> str:
        """Serialise *document* as pretty-printed JSON with a final newline."""
        return (
            json.dumps(document.to_dict(), ensure_ascii=False, indent=2)
            + "\n"
        )

    def save_document(self, document: PriceDocument) -> Path:
        """Overwrite the output file with *document*."""
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.output_path, "w", encoding="utf-8") as f:
            f.write(self.render(document))

        logger.info(
            "Saved %d products to %s",
            len(document.items),
            self.output_path,
        )
        return self.output_path
