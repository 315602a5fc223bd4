# src/config/settings.py

"""Central configuration for the market_search catalog engine."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the market_search catalog engine."""

    # --- Browsing ---
    ITEMS_PER_PAGE: int = 10            # Results per page / load-more step
    RELATED_PRODUCTS_LIMIT: int = 4     # Sample size on product detail
    FEATURED_VENDOR_COUNT: int = 3      # Vendors shown on the dashboard

    # --- Catalog cache ---
    CATALOG_CACHE_TTL: float = 300.0    # Seconds a fetched catalog stays fresh

    # --- Remote catalog (hosted relational store) ---
    CATALOG_API_URL: str = os.getenv("CATALOG_API_URL", "")
    CATALOG_API_KEY: str = os.getenv("CATALOG_API_KEY", "")
    CATALOG_VENDORS_PATH: str = "/rest/v1/vendors"
    CATALOG_SELECT: str = "*,products(*)"

    # --- Requests ---
    REQUEST_DELAY: float = 1.0          # Base back-off between retries
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out
    MAX_RETRIES: int = 3                # Retry count on transient failures

    # --- Resilience ---
    CIRCUIT_BREAKER_THRESHOLD: int = 3  # Consecutive failures to trip
    CIRCUIT_BREAKER_COOLDOWN: float = 60.0
    MAX_DELAY_MULTIPLIER: int = 8       # Cap for adaptive backoff

    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    CATALOG_PATH: Path = BASE_DIR / "src" / "data" / "catalog.json"
    RESULTS_DIR: Path = BASE_DIR / "results"
    LOGS_DIR: Path = BASE_DIR / "logs"
