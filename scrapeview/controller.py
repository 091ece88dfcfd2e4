"""Fetch controller: owns the loading status, the error slot and the session.

The controller performs one of two operations, :meth:`FetchController.submit`
for a new URL and :meth:`FetchController.load_more` for the next page, and
keeps the current :class:`~scrapeview.session.SessionState` up to date.

Each submit bumps a generation counter.  A response that arrives after a
newer submit was issued is dropped, so overlapping submits never let an
older result overwrite a newer one.
"""

from __future__ import annotations

import enum
import logging

from scrapeview.api import ScraperClient
from scrapeview.errors import ScrapeError
from scrapeview.session import SessionState, merge, start_session

logger = logging.getLogger(__name__)


class FetchStatus(str, enum.Enum):
    IDLE = "idle"
    LOADING_INITIAL = "loading-initial"
    LOADING_MORE = "loading-more"


class FetchController:
    def __init__(self, client: ScraperClient | None = None) -> None:
        self.client = client or ScraperClient()
        self.status = FetchStatus.IDLE
        self.error: str | None = None
        self.session: SessionState | None = None
        self.url: str | None = None
        self._generation = 0

    @property
    def in_flight(self) -> bool:
        return self.status is not FetchStatus.IDLE

    @property
    def can_load_more(self) -> bool:
        """True when a next page exists and no fetch is running."""
        return (
            self.session is not None
            and self.session.has_next_page
            and not self.in_flight
        )

    async def submit(self, url: str) -> bool:
        """Start a new scrape of *url*.

        On success the session is replaced by a fresh one built from the
        first page.  On failure the error slot is set and the previous
        session, if any, is kept.  Returns ``True`` on success.

        Raises:
            ValueError: If *url* is empty.
        """
        if not url:
            raise ValueError("url must not be empty")

        self._generation += 1
        generation = self._generation
        self.error = None
        self.status = FetchStatus.LOADING_INITIAL
        logger.debug("submit #%d: %s", generation, url)

        try:
            response = await self.client.scrape(url)
        except ScrapeError as exc:
            if not self._is_stale(generation):
                self.error = exc.message
            return False
        else:
            if self._is_stale(generation):
                return False
            self.session = start_session(response)
            self.url = url
            logger.debug(
                "submit #%d done: %d url(s), next_page=%s",
                generation,
                len(self.session.urls),
                self.session.pagination.next_page,
            )
            return True
        finally:
            self._settle(generation)

    async def load_more(self) -> bool:
        """Fetch the next page and merge it into the session.

        Does nothing, and returns ``False``, when there is no next page or a
        fetch is already in flight.  On failure the error slot is set and
        everything loaded so far is kept.
        """
        session = self.session
        if session is None or not self.can_load_more:
            logger.debug("load_more ignored (status=%s)", self.status.value)
            return False

        generation = self._generation
        next_page = session.pagination.next_page
        self.status = FetchStatus.LOADING_MORE
        logger.debug("load_more #%d: %s", generation, next_page)

        try:
            response = await self.client.fetch_page(next_page)
        except ScrapeError as exc:
            if not self._is_stale(generation):
                self.error = f"Error fetching more data: [{exc}]"
            return False
        else:
            if self._is_stale(generation):
                return False
            self.session = merge(session, response)
            return True
        finally:
            self._settle(generation)

    def _settle(self, generation: int) -> None:
        # A newer submit owns the status once it has started.
        if generation == self._generation:
            self.status = FetchStatus.IDLE

    def _is_stale(self, generation: int) -> bool:
        if generation == self._generation:
            return False
        logger.info(
            "Dropping response for request #%d; #%d is current",
            generation,
            self._generation,
        )
        return True
