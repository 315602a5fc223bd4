# src/storage/catalog_cache.py

"""In-memory TTL cache for the materialised catalog."""

import logging
import time
from dataclasses import dataclass

from src.config.settings import Settings
from src.models.vendor import Vendor

logger = logging.getLogger("market_search.cache")


@dataclass
class CacheEntry:
    """A fetched catalog and the moment it was stored."""

    source: str
    vendors: list[Vendor]
    timestamp: float


class CatalogCache:
    """Single-slot cache so repeated requests reuse one fetched catalog.

    The entry is keyed by its source label; asking for a different
    source, or asking after the TTL has elapsed, is a miss.
    """

    def __init__(self, ttl: float | None = None) -> None:
        self._entry: CacheEntry | None = None
        self._ttl: float = (
            Settings.CATALOG_CACHE_TTL if ttl is None else ttl
        )

    def get(self, source: str) -> list[Vendor] | None:
        """Return the cached vendors for *source*, or ``None`` on a miss."""
        entry = self._entry
        if entry is None or entry.source != source:
            return None

        age = time.time() - entry.timestamp
        if age >= self._ttl:
            logger.debug(
                "Catalog cache for '%s' expired after %.0fs", source, age
            )
            self._entry = None
            return None

        logger.debug("Catalog cache hit for '%s'", source)
        return list(entry.vendors)

    def store(self, source: str, vendors: list[Vendor]) -> None:
        """Replace the cached catalog."""
        self._entry = CacheEntry(
            source=source,
            vendors=list(vendors),
            timestamp=time.time(),
        )
        logger.info(
            "Cached %d vendors from '%s'", len(vendors), source
        )

    def clear(self) -> int:
        """Drop the cached catalog; returns 1 if an entry was removed."""
        removed = 0 if self._entry is None else 1
        self._entry = None
        return removed
