"""Centralised settings for the scrapeview client.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _optional_float(name: str) -> float | None:
    raw = os.environ.get(name, "").strip()
    return float(raw) if raw else None


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # Scraping API
    # ------------------------------------------------------------------
    api_base_url: str = field(
        default_factory=lambda: os.environ.get(
            "SCRAPER_API_BASE_URL", "http://localhost:8080"
        )
    )
    # None means requests may take as long as the server needs.
    request_timeout: float | None = field(
        default_factory=lambda: _optional_float("SCRAPER_REQUEST_TIMEOUT")
    )

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    log_level: str = field(
        default_factory=lambda: os.environ.get("SCRAPEVIEW_LOG_LEVEL", "WARNING")
    )


# Module-level singleton, import this everywhere:
#   from scrapeview.config import settings
settings = Settings()
