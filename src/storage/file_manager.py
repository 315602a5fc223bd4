# src/storage/file_manager.py

"""Saves search results to disk as JSON or CSV, or formats them as TSV."""

import csv
import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.models.search_result_item import SearchResultItem

logger = logging.getLogger("market_search.storage")

_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9_-]+")

_COLUMNS = ["Name", "Price", "Unit", "Vendor", "Rating", "Best Price"]


def item_to_dict(item: SearchResultItem) -> dict[str, Any]:
    """Serialise a result item to a plain dict for JSON output."""
    return {
        "id": item.id,
        "name": item.name,
        "price": item.price,
        "unit": item.unit,
        "discount": item.discount,
        "vendorId": item.vendor_id,
        "vendorName": item.vendor_name,
        "vendorRating": item.vendor_rating,
        "lowPrice": item.low_price,
    }


def _slug(label: str) -> str:
    """Turn a query or category into a filename-safe fragment."""
    cleaned = _UNSAFE_CHARS_RE.sub("_", label.strip()).strip("_")
    return cleaned or "all"


def _row(item: SearchResultItem) -> list[str]:
    return [
        item.name,
        f"{item.price:.2f}",
        item.unit or "",
        item.vendor_name,
        f"{item.vendor_rating:.1f}",
        "yes" if item.low_price else "",
    ]


def format_tsv(items: list[SearchResultItem]) -> str:
    """Format results as tab-separated text sorted by price."""
    ordered = sorted(items, key=lambda i: i.price)
    lines = ["\t".join(_COLUMNS)]
    lines.extend("\t".join(_row(item)) for item in ordered)
    return "\n".join(lines)


class FileManager:
    """Writes result listings into ``Settings.RESULTS_DIR``."""

    def __init__(self, results_dir: Path | None = None) -> None:
        self.results_dir: Path = results_dir or Settings.RESULTS_DIR
        self.results_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("FileManager ready, results_dir=%s", self.results_dir)

    def _target(self, prefix: str, label: str, suffix: str) -> Path:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        return self.results_dir / f"{prefix}_{_slug(label)}_{timestamp}{suffix}"

    def save_results(
        self, label: str, items: list[SearchResultItem]
    ) -> Path:
        """Save results to a timestamped JSON file, keeping their order."""
        filepath = self._target("results", label, ".json")
        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(
                [item_to_dict(i) for i in items],
                f,
                ensure_ascii=False,
                indent=2,
            )

        logger.info(
            "Saved %d results for '%s' to %s", len(items), label, filepath
        )
        return filepath

    def export_csv(
        self, label: str, items: list[SearchResultItem]
    ) -> Path:
        """Export results to a CSV file sorted by price."""
        filepath = self._target("export", label, ".csv")
        ordered = sorted(items, key=lambda i: i.price)

        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(_COLUMNS)
            for item in ordered:
                writer.writerow(_row(item))

        logger.info(
            "Exported %d results for '%s' to %s",
            len(items),
            label,
            filepath,
        )
        return filepath
