"""Async HTTP client for the remote scraping API.

Two calls are supported:

    GET <base>/scrape?url=<url>   first page of a new scrape
    GET <base><next_page>         a later page; ``next_page`` is the opaque
                                  relative URL returned by the previous page

Every failure is converted to a :class:`~scrapeview.errors.ScrapeError`
subclass so callers only ever need to handle one exception family.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from scrapeview.config import settings
from scrapeview.errors import RemoteRejection, TransportFailure, Unclassified
from scrapeview.models import ScrapeResponse

logger = logging.getLogger(__name__)

_DEFAULT_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "scrapeview/0.1",
}


def _rejection_detail(response: httpx.Response) -> str:
    """Return the ``error`` field of a failed response, or a generic line."""
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return f"Request failed with status code {response.status_code}"


class ScraperClient:
    """Thin wrapper over ``httpx.AsyncClient`` bound to one API base URL.

    A fresh ``AsyncClient`` is opened for each call, so an instance can be
    shared between separate ``asyncio.run`` invocations.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.request_timeout
        self._transport = transport

    async def scrape(self, url: str) -> ScrapeResponse:
        """Request the first page of a scrape of *url*."""
        return await self._get("/scrape", params={"url": url})

    async def fetch_page(self, next_page: str) -> ScrapeResponse:
        """Request the page behind the continuation token *next_page*."""
        return await self._get(next_page)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    async def _get(self, path: str, params: dict[str, Any] | None = None) -> ScrapeResponse:
        target = f"{self.base_url}{path}"
        logger.debug("GET %s params=%s", target, params)

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers=_DEFAULT_HEADERS,
                timeout=self.timeout,
                follow_redirects=True,
                transport=self._transport,
            ) as client:
                response = await client.get(path, params=params)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            logger.warning("API rejected %s with HTTP %d", target, status)
            raise RemoteRejection(status, _rejection_detail(exc.response), url=target) from exc
        except httpx.RequestError as exc:
            logger.warning("Transport failure for %s: %r", target, exc)
            raise TransportFailure(str(exc) or type(exc).__name__, url=target) from exc
        except httpx.InvalidURL as exc:
            logger.warning("Invalid request URL %s: %s", target, exc)
            raise TransportFailure(str(exc), url=target) from exc
        except Exception as exc:
            logger.warning("Unexpected failure for %s: %r", target, exc)
            raise Unclassified(str(exc) or type(exc).__name__, url=target) from exc

        try:
            return ScrapeResponse.model_validate(response.json())
        except ValueError as exc:
            # Covers both undecodable JSON and pydantic validation errors.
            logger.warning("Malformed response body from %s: %s", target, exc)
            raise Unclassified(str(exc), url=target) from exc
