# tests/test_catalog_service.py

"""Tests for CatalogService orchestration."""

import json
import random
import tempfile
import unittest
from pathlib import Path
from unittest.mock import MagicMock

from src.clients.catalog_client import CatalogFetchError
from src.models.product import Product
from src.models.vendor import Vendor
from src.services.catalog_service import CatalogService, SearchOutcome
from src.storage.catalog_cache import CatalogCache

_RECORDS = [
    {
        "id": "a",
        "name": "Vendor A",
        "category": "Produce",
        "rating": 4.8,
        "products": [
            {"id": "a1", "name": "Apple", "price": 3.99},
            {"id": "a2", "name": "Pear", "price": 4.50},
            {"id": "a3", "name": "", "price": 1.00},
        ],
    },
    {
        "id": "b",
        "name": "Vendor B",
        "category": "Bakery",
        "rating": 4.9,
        "products": [{"id": "b1", "name": "Apple Pie", "price": 8.00}],
    },
]


class TestCatalogServiceWithFile(unittest.TestCase):
    """Service backed by a JSON catalog file."""

    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "catalog.json"
        self.path.write_text(json.dumps(_RECORDS), encoding="utf-8")
        self.service = CatalogService(catalog_path=self.path)

    def test_search_returns_outcome(self) -> None:
        outcome = self.service.search(query="apple")
        self.assertIsInstance(outcome, SearchOutcome)
        self.assertEqual(
            [(r.name, r.low_price) for r in outcome.results],
            [("Apple", True), ("Apple Pie", False)],
        )
        self.assertEqual(outcome.errors, [])
        self.assertEqual(outcome.total, 2)

    def test_invalid_products_dropped_and_counted(self) -> None:
        outcome = self.service.search()
        self.assertEqual(outcome.total, 3)
        self.assertEqual(outcome.invalid_count, 1)

    def test_second_search_uses_cache(self) -> None:
        first = self.service.search()
        self.path.write_text("[]", encoding="utf-8")
        second = self.service.search()
        self.assertFalse(first.cache_hit)
        self.assertTrue(second.cache_hit)
        self.assertEqual(second.total, 3)

    def test_search_paginates(self) -> None:
        outcome = self.service.search(page=2, per_page=2)
        self.assertEqual([i.name for i in outcome.page.items], ["Apple Pie"])
        self.assertFalse(outcome.page.has_more)

    def test_category_browse(self) -> None:
        outcome = self.service.search(category="bakery")
        self.assertEqual([r.id for r in outcome.results], ["b1"])
        self.assertFalse(outcome.results[0].low_price)

    def test_categories(self) -> None:
        self.assertEqual(self.service.categories(), ["Produce", "Bakery"])

    def test_details(self) -> None:
        details = self.service.details("a2")
        assert details is not None
        self.assertEqual(details.item.name, "Pear")
        self.assertEqual(details.vendor.id, "a")
        self.assertIsNone(self.service.details("missing"))

    def test_related(self) -> None:
        related = self.service.related("a1", rng=random.Random(1))
        self.assertEqual([r.id for r in related], ["a2"])

    def test_related_unknown_product(self) -> None:
        self.assertEqual(self.service.related("missing"), [])

    def test_featured_and_vendor_lookup(self) -> None:
        self.assertEqual([v.id for v in self.service.featured(1)], ["a"])
        vendor = self.service.vendor("b")
        assert vendor is not None
        self.assertEqual(vendor.name, "Vendor B")
        self.assertIsNone(self.service.vendor("zzz"))


class TestCatalogServiceFailures(unittest.TestCase):
    """Source errors are reported, never raised."""

    def test_missing_file_reports_error(self) -> None:
        service = CatalogService(catalog_path=Path("/nonexistent.json"))
        outcome = service.search(query="apple")
        self.assertEqual(outcome.results, [])
        self.assertEqual(len(outcome.errors), 1)
        self.assertEqual(service.categories(), [])
        self.assertIsNone(service.details("x"))

    def test_malformed_product_entry_reported(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "catalog.json"
            path.write_text(
                json.dumps([{"id": "v1", "name": "A", "products": [None]}]),
                encoding="utf-8",
            )
            outcome = CatalogService(catalog_path=path).search("apple")
        self.assertEqual(outcome.results, [])
        self.assertEqual(len(outcome.errors), 1)
        self.assertIn("v1", outcome.errors[0])

    def test_remote_fetch_error_reported(self) -> None:
        client = MagicMock()
        client.source_label = "remote:test"
        client.fetch_catalog.side_effect = CatalogFetchError("down")
        service = CatalogService(client=client, cache=CatalogCache())

        outcome = service.search()

        self.assertEqual(outcome.errors, ["down"])
        self.assertEqual(outcome.results, [])

    def test_remote_catalog_used_when_client_given(self) -> None:
        client = MagicMock()
        client.source_label = "remote:test"
        client.fetch_catalog.return_value = [
            Vendor(id="r", name="Remote", category="Food", products=[
                Product(id="r1", vendor_id="r", name="Tamale", price=3.0),
            ])
        ]
        service = CatalogService(client=client)

        outcome = service.search(query="tamale")

        self.assertEqual(service.source_label, "remote:test")
        self.assertEqual([r.id for r in outcome.results], ["r1"])
        self.assertTrue(outcome.results[0].low_price)
