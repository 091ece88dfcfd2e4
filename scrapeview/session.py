"""Pagination accumulator.

A :class:`SessionState` is an immutable snapshot of everything loaded so far
for one scraped URL.  :func:`start_session` builds it from the first page and
:func:`merge` folds each further page into a new snapshot.  The derived
display quantities are computed from the snapshot, never stored.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

from scrapeview.models import Pagination, ScrapedSummary, ScrapeResponse, UrlItem


@dataclass(frozen=True)
class SessionState:
    response: ScrapeResponse
    urls: tuple[UrlItem, ...]
    loaded_pages: int
    inaccessible_count: int
    pagination: Pagination

    # ------------------------------------------------------------------
    # Convenience accessors
    # ------------------------------------------------------------------
    @property
    def request_id(self) -> str:
        return self.response.request_id

    @property
    def summary(self) -> ScrapedSummary:
        return self.response.scraped

    @property
    def has_next_page(self) -> bool:
        return bool(self.pagination.next_page)

    # ------------------------------------------------------------------
    # Derived display quantities
    # ------------------------------------------------------------------
    @property
    def accessed_so_far(self) -> int:
        """URLs covered by the pages loaded so far, capped at the total."""
        return min(self.loaded_pages * self.pagination.page_size, self.summary.total_urls)

    @property
    def remaining(self) -> int:
        return self.summary.total_urls - self.accessed_so_far

    @property
    def next_batch_size(self) -> int:
        """Size of the batch the next load-more would bring in."""
        return min(self.pagination.page_size, self.remaining)

    def to_dict(self) -> dict[str, Any]:
        """Serialise the accumulated session to plain JSON-friendly types."""
        summary = self.summary.model_dump(exclude={"paginated"})
        return {
            "request_id": self.request_id,
            "pagination": self.pagination.model_dump(),
            "scraped": summary,
            "loaded_pages": self.loaded_pages,
            "accessed_urls": self.accessed_so_far,
            "inaccessible_urls": self.inaccessible_count,
            "urls": [item.model_dump() for item in self.urls],
        }


def start_session(response: ScrapeResponse) -> SessionState:
    """Create a fresh session from the first page of a scrape."""
    return SessionState(
        response=response,
        urls=tuple(response.urls),
        loaded_pages=1,
        inaccessible_count=response.inaccessible_urls,
        pagination=response.pagination,
    )


def merge(existing: SessionState, new_page: ScrapeResponse) -> SessionState:
    """Append *new_page* to *existing* and return the new snapshot.

    URLs are appended in order with no deduplication.  The summary of
    *new_page* is ignored and its request id is not compared; only its URL
    list, inaccessible count and pagination block are used.
    """
    return replace(
        existing,
        urls=existing.urls + tuple(new_page.urls),
        loaded_pages=existing.loaded_pages + 1,
        inaccessible_count=existing.inaccessible_count + new_page.inaccessible_urls,
        pagination=new_page.pagination,
    )
