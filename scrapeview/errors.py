"""Failure taxonomy for calls to the scraping API.

Every failed request surfaces as exactly one :class:`ScrapeError` subclass.
``str(exc)`` is the bare detail; :attr:`ScrapeError.message` is the text
shown in the error banner.
"""

from __future__ import annotations


class ScrapeError(Exception):
    """Base class for all scraping API failures."""

    def __init__(self, detail: str | None = None, url: str | None = None):
        self.detail = detail
        self.url = url
        super().__init__(detail or "")

    @property
    def message(self) -> str:
        return f"Error: {self.detail}"


class RemoteRejection(ScrapeError):
    """The API answered with a non-2xx status."""

    def __init__(self, status_code: int, detail: str, url: str | None = None):
        self.status_code = status_code
        super().__init__(detail, url=url)


class TransportFailure(ScrapeError):
    """No response was received (connection refused, DNS, timeout, ...)."""


class Unclassified(ScrapeError):
    """Anything else, e.g. a 2xx body that does not match the contract."""

    @property
    def message(self) -> str:
        if self.detail:
            return f"An unexpected error occurred: {self.detail}"
        return "An unexpected error occurred."
