# tests/test_file_manager.py

"""Tests for the FileManager storage module."""

import csv
import json
import tempfile
import unittest
from pathlib import Path

from src.models.search_result_item import SearchResultItem
from src.storage.file_manager import FileManager, format_tsv, item_to_dict


class TestFileManager(unittest.TestCase):
    """Tests for JSON/CSV save and export."""

    def setUp(self) -> None:
        """Use a temp directory for results."""
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.fm = FileManager(Path(self._tmp.name))

    def _sample_items(self) -> list[SearchResultItem]:
        return [
            SearchResultItem(
                id="cc-002",
                name="Silver Necklace",
                price=45.0,
                vendor_id="crafted-creations",
                vendor_name="Crafted Creations",
                vendor_rating=4.7,
            ),
            SearchResultItem(
                id="cc-001",
                name="Ceramic Mug",
                price=25.0,
                vendor_id="crafted-creations",
                vendor_name="Crafted Creations",
                vendor_rating=4.7,
                low_price=True,
            ),
        ]

    def test_save_results_creates_json(self) -> None:
        path = self.fm.save_results("silver mug", self._sample_items())
        self.assertTrue(path.exists())
        self.assertTrue(path.name.startswith("results_silver_mug_"))
        data = json.loads(path.read_text(encoding="utf-8"))
        self.assertEqual([d["id"] for d in data], ["cc-002", "cc-001"])
        self.assertTrue(data[1]["lowPrice"])
        self.assertEqual(data[0]["vendorName"], "Crafted Creations")

    def test_unsafe_label_sanitised(self) -> None:
        path = self.fm.save_results("../etc/passwd", [])
        self.assertEqual(path.parent, Path(self._tmp.name))
        self.assertNotIn("/", path.name)

    def test_blank_label_becomes_all(self) -> None:
        path = self.fm.save_results("   ", [])
        self.assertTrue(path.name.startswith("results_all_"))

    def test_export_csv_sorted_by_price(self) -> None:
        path = self.fm.export_csv("crafts", self._sample_items())
        with open(path, newline="", encoding="utf-8") as f:
            rows = list(csv.reader(f))
        self.assertEqual(rows[0][0], "Name")
        self.assertEqual([r[0] for r in rows[1:]], ["Ceramic Mug", "Silver Necklace"])
        self.assertEqual(rows[1][5], "yes")

    def test_format_tsv(self) -> None:
        text = format_tsv(self._sample_items())
        lines = text.split("\n")
        self.assertEqual(len(lines), 3)
        self.assertTrue(lines[1].startswith("Ceramic Mug\t25.00"))

    def test_item_to_dict_keys(self) -> None:
        data = item_to_dict(self._sample_items()[0])
        self.assertEqual(
            set(data),
            {
                "id", "name", "price", "unit", "discount",
                "vendorId", "vendorName", "vendorRating", "lowPrice",
            },
        )
