"""Pydantic models for the scraping API's JSON contract.

Field names mirror the wire format exactly.  Only the fields the client
reads are declared; anything else the server sends is ignored.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UrlItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    url: str
    http_status: int = 0
    error: str | None = None

    @field_validator("http_status", mode="before")
    @classmethod
    def _missing_status(cls, value: object) -> object:
        # Requests that never completed come back without a status.
        return 0 if value is None else value

    @property
    def is_success(self) -> bool:
        return 200 <= self.http_status < 300


class PaginatedUrls(BaseModel):
    model_config = ConfigDict(frozen=True)

    urls: list[UrlItem] = Field(default_factory=list)
    inaccessible_urls: int = 0

    @field_validator("urls", mode="before")
    @classmethod
    def _null_urls(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("inaccessible_urls", mode="before")
    @classmethod
    def _null_count(cls, value: object) -> object:
        return 0 if value is None else value


class Pagination(BaseModel):
    model_config = ConfigDict(frozen=True)

    page_size: int
    current_page: int
    total_pages: int
    next_page: str | None = None


class ScrapedSummary(BaseModel):
    """Page analysis; identical on every page of one scrape."""

    model_config = ConfigDict(frozen=True)

    title: str = ""
    html_version: str = ""
    headings: dict[str, int] = Field(default_factory=dict)
    contains_login_form: bool = False
    total_urls: int = 0
    internal_urls: int = 0
    external_urls: int = 0
    paginated: PaginatedUrls = Field(default_factory=PaginatedUrls)


class ScrapeResponse(BaseModel):
    """One page of a scrape, as returned by ``/scrape``."""

    model_config = ConfigDict(frozen=True)

    request_id: str = ""
    pagination: Pagination
    scraped: ScrapedSummary

    @property
    def urls(self) -> list[UrlItem]:
        return self.scraped.paginated.urls

    @property
    def inaccessible_urls(self) -> int:
        return self.scraped.paginated.inaccessible_urls
