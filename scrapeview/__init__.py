"""scrapeview: client for a remote page-scraping API."""

from scrapeview.api import ScraperClient
from scrapeview.controller import FetchController, FetchStatus
from scrapeview.errors import RemoteRejection, ScrapeError, TransportFailure, Unclassified
from scrapeview.session import SessionState, merge, start_session

__all__ = [
    "ScraperClient",
    "FetchController",
    "FetchStatus",
    "ScrapeError",
    "RemoteRejection",
    "TransportFailure",
    "Unclassified",
    "SessionState",
    "start_session",
    "merge",
]
