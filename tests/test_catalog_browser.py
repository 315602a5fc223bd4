# tests/test_catalog_browser.py

"""Tests for catalog lookups."""

import unittest

from src.models.product import Product
from src.models.vendor import Vendor
from src.services.catalog_browser import (
    featured_vendors,
    find_product,
    find_vendor,
    list_categories,
)


class TestCatalogBrowser(unittest.TestCase):
    """Category listing, featured vendors and id lookups."""

    def setUp(self) -> None:
        self.catalog = [
            Vendor(id="a", name="A", category="Produce", rating=4.2, products=[
                Product(id="a-1", vendor_id="a", name="Kale", price=2.0),
            ]),
            Vendor(id="b", name="B", category="Bakery"),
            Vendor(id="c", name="C", category="Produce"),
            Vendor(id="d", name="D", category=None),
        ]

    def test_list_categories_unique_in_order(self) -> None:
        self.assertEqual(
            list_categories(self.catalog), ["Produce", "Bakery"]
        )

    def test_list_categories_empty(self) -> None:
        self.assertEqual(list_categories([]), [])

    def test_featured_vendors_default_three(self) -> None:
        featured = featured_vendors(self.catalog)
        self.assertEqual([v.id for v in featured], ["a", "b", "c"])

    def test_featured_vendors_short_catalog(self) -> None:
        self.assertEqual(len(featured_vendors(self.catalog[:1], 3)), 1)

    def test_find_vendor(self) -> None:
        self.assertEqual(find_vendor(self.catalog, "c").name, "C")
        self.assertIsNone(find_vendor(self.catalog, "zzz"))

    def test_find_product_joins_vendor(self) -> None:
        details = find_product(self.catalog, "a-1")
        self.assertIsNotNone(details)
        assert details is not None
        self.assertEqual(details.item.name, "Kale")
        self.assertEqual(details.item.vendor_rating, 4.2)
        self.assertIs(details.vendor, self.catalog[0])
        self.assertFalse(details.item.low_price)

    def test_find_product_missing(self) -> None:
        self.assertIsNone(find_product(self.catalog, "nope"))
