# src/clients/catalog_client.py

"""REST client for the hosted relational store holding vendors and products."""

import logging
import time
import urllib.parse
from typing import Any

from curl_cffi import requests as curl_requests

from src.config.settings import Settings
from src.models.vendor import Vendor
from src.storage.catalog_loader import CatalogLoader

logger = logging.getLogger("market_search.client")


class CatalogFetchError(Exception):
    """Raised when the catalog cannot be fetched from the store."""


class CatalogClient:
    """Fetch vendors with their embedded products over the store's REST API.

    Transient failures are retried with a growing delay; after
    ``CIRCUIT_BREAKER_THRESHOLD`` failed fetches the circuit opens and
    calls fail fast until ``CIRCUIT_BREAKER_COOLDOWN`` has passed.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
    ) -> None:
        self.settings = Settings()
        self.base_url = (base_url or self.settings.CATALOG_API_URL).rstrip("/")
        self.api_key = api_key or self.settings.CATALOG_API_KEY
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._current_delay: float = self.settings.REQUEST_DELAY
        self._consecutive_failures: int = 0
        self._circuit_open: bool = False
        self._circuit_opened_at: float = 0.0
        self._request_timeout: int = self.settings.REQUEST_TIMEOUT

    @property
    def source_label(self) -> str:
        """Cache key identifying this remote catalog."""
        return f"remote:{self.base_url}"

    def _vendors_url(self) -> str:
        query = urllib.parse.urlencode(
            {"select": self.settings.CATALOG_SELECT}, safe="*,()"
        )
        return f"{self.base_url}{self.settings.CATALOG_VENDORS_PATH}?{query}"

    def _headers(self) -> dict[str, str]:
        return {
            **self.settings.DEFAULT_HEADERS,
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
        }

    def _check_circuit(self) -> bool:
        """Return True while the circuit breaker blocks requests."""
        if not self._circuit_open:
            return False
        elapsed = time.time() - self._circuit_opened_at
        if elapsed >= self.settings.CIRCUIT_BREAKER_COOLDOWN:
            logger.info(
                "Circuit breaker half-open after %.0fs", elapsed
            )
            self._circuit_open = False
            return False
        return True

    def _record_success(self) -> None:
        self._consecutive_failures = 0
        self._circuit_open = False
        self._circuit_opened_at = 0.0
        self._current_delay = self.settings.REQUEST_DELAY

    def _record_failure(self) -> None:
        self._consecutive_failures += 1
        if self._consecutive_failures >= self.settings.CIRCUIT_BREAKER_THRESHOLD:
            self._circuit_open = True
            self._circuit_opened_at = time.time()
            logger.error(
                "Circuit breaker opened after %d consecutive failures",
                self._consecutive_failures,
            )

    def _escalate_delay(self) -> None:
        """Double the current delay up to the configured max."""
        max_delay = (
            self.settings.REQUEST_DELAY * self.settings.MAX_DELAY_MULTIPLIER
        )
        self._current_delay = min(self._current_delay * 2, max_delay)
        logger.warning(
            "Catalog store throttled, delay escalated to %.1fs",
            self._current_delay,
        )

    def _fetch_records(self) -> list[dict[str, Any]] | None:
        """GET the vendor rows with retries; ``None`` once retries run out."""
        url = self._vendors_url()
        for attempt in range(self.settings.MAX_RETRIES):
            try:
                resp = self.session.get(
                    url,
                    headers=self._headers(),
                    timeout=self._request_timeout,
                )
                if resp.status_code == 200:
                    records: list[dict[str, Any]] = resp.json()
                    self._record_success()
                    return records
                logger.warning(
                    "HTTP %d fetching catalog on attempt %d",
                    resp.status_code,
                    attempt + 1,
                )
                if resp.status_code in (429, 503):
                    self._escalate_delay()
                    time.sleep(self._current_delay)
                elif resp.status_code in (401, 403, 404):
                    break
            except Exception as exc:
                logger.warning(
                    "Catalog request error on attempt %d: %s",
                    attempt + 1,
                    exc,
                    exc_info=True,
                )
                time.sleep(self._current_delay * (attempt + 1))
        return None

    def fetch_catalog(self) -> list[Vendor]:
        """Fetch and build the full catalog.

        Raises:
            CatalogFetchError: when the API is not configured, the circuit
                is open, or every attempt failed.
        """
        if not self.base_url:
            raise CatalogFetchError(
                "CATALOG_API_URL is not set; cannot fetch remote catalog"
            )
        if self._check_circuit():
            raise CatalogFetchError(
                "Catalog store circuit is open; skipping fetch"
            )

        records = self._fetch_records()
        if records is None:
            self._record_failure()
            raise CatalogFetchError(
                f"Failed to fetch catalog from {self.base_url} after "
                f"{self.settings.MAX_RETRIES} attempts"
            )

        vendors = CatalogLoader.from_records(records)
        logger.info(
            "Fetched %d vendors from %s", len(vendors), self.base_url
        )
        return vendors
