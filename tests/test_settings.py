# tests/test_settings.py

"""Tests for the Settings configuration class."""

import unittest
from pathlib import Path

from src.config.settings import Settings


class TestSettings(unittest.TestCase):
    """Verify Settings constants and paths."""

    def test_items_per_page(self) -> None:
        """Listings load ten items at a time."""
        self.assertEqual(Settings.ITEMS_PER_PAGE, 10)

    def test_related_limit(self) -> None:
        self.assertEqual(Settings.RELATED_PRODUCTS_LIMIT, 4)

    def test_featured_vendor_count(self) -> None:
        self.assertEqual(Settings.FEATURED_VENDOR_COUNT, 3)

    def test_cache_ttl_positive(self) -> None:
        self.assertGreater(Settings.CATALOG_CACHE_TTL, 0)

    def test_request_settings_positive(self) -> None:
        self.assertGreater(Settings.REQUEST_DELAY, 0)
        self.assertGreater(Settings.REQUEST_TIMEOUT, 0)
        self.assertGreaterEqual(Settings.MAX_RETRIES, 1)
        self.assertGreaterEqual(Settings.CIRCUIT_BREAKER_THRESHOLD, 1)
        self.assertGreater(Settings.CIRCUIT_BREAKER_COOLDOWN, 0)

    def test_paths_are_paths(self) -> None:
        for name in ("BASE_DIR", "CATALOG_PATH", "RESULTS_DIR", "LOGS_DIR"):
            with self.subTest(name=name):
                self.assertIsInstance(getattr(Settings, name), Path)

    def test_bundled_catalog_exists(self) -> None:
        self.assertTrue(Settings.CATALOG_PATH.is_file())

    def test_vendors_path_is_rest_route(self) -> None:
        self.assertTrue(Settings.CATALOG_VENDORS_PATH.startswith("/rest/v1/"))
