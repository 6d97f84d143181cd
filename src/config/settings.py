# src/config/settings.py

"""Central configuration for the catalog_browser client."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


class Settings:
    """Central configuration for the catalog_browser client."""

    # --- Remote API ---
    API_BASE_URL: str = os.getenv(
        "CATALOG_API_BASE_URL", "https://dummyjson.com"
    ).rstrip("/")
    PRODUCT_LIST_LIMIT: int = 150       # One page, covers late categories
    REQUEST_TIMEOUT: int = 15           # Seconds before a request times out

    # --- HTTP client ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": "application/json",
        "Accept-Language": "en-US,en;q=0.9",
    }

    # --- Query defaults ---
    ALL_CATEGORIES: str = "all"
    DEFAULT_SORT_KEY: str = "name-asc"
    SEARCH_INCLUDES_DESCRIPTION: bool = False

    # --- Detail view ---
    LOW_STOCK_THRESHOLD: int = 10       # 1..N units counts as low stock

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    LOGS_DIR: Path = BASE_DIR / "logs"
