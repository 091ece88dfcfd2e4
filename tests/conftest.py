"""Shared fixtures: canned scraping API payloads."""

from __future__ import annotations

from typing import Any, Callable

import pytest

PAGE_2 = "/scrape?url=http%3A%2F%2Fexample.com&page=2"


def build_payload(
    *,
    count: int = 50,
    start: int = 0,
    inaccessible: int = 0,
    current_page: int = 1,
    next_page: str | None = None,
    page_size: int = 50,
    total_pages: int = 3,
    total_urls: int = 120,
    request_id: str = "req-1",
    title: str = "Ex",
) -> dict[str, Any]:
    """Return a JSON body shaped like one page of ``/scrape``.

    The last *inaccessible* URLs of the page are reported as 404s.
    """
    urls = []
    for i in range(count):
        broken = i >= count - inaccessible
        urls.append(
            {
                "url": f"http://example.com/link/{start + i}",
                "http_status": 404 if broken else 200,
                "error": "Not Found" if broken else None,
            }
        )
    return {
        "request_id": request_id,
        "pagination": {
            "page_size": page_size,
            "current_page": current_page,
            "total_pages": total_pages,
            "next_page": next_page,
        },
        "scraped": {
            "title": title,
            "html_version": "HTML5",
            "headings": {"h1": 2, "h2": 5},
            "contains_login_form": False,
            "total_urls": total_urls,
            "internal_urls": 80,
            "external_urls": 40,
            "paginated": {"urls": urls, "inaccessible_urls": inaccessible},
        },
    }


@pytest.fixture()
def make_payload() -> Callable[..., dict[str, Any]]:
    return build_payload


@pytest.fixture()
def first_page() -> dict[str, Any]:
    """Page 1 of 3: 50 URLs, 3 inaccessible."""
    return build_payload(inaccessible=3, next_page=PAGE_2)


@pytest.fixture()
def last_page() -> dict[str, Any]:
    """A final page: 50 more URLs, 2 inaccessible, no continuation."""
    return build_payload(start=50, inaccessible=2, current_page=2, next_page=None)
