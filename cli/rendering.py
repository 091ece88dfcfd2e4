"""Text rendering of a scrape session for the terminal.

Every function returns a string; printing is left to the commands so the
same output can be captured in tests.
"""

from __future__ import annotations

from typing import Iterable

import typer

from scrapeview.controller import FetchStatus
from scrapeview.models import ScrapedSummary, UrlItem
from scrapeview.session import SessionState

_MAX_URL_LENGTH = 150
_RULE = "─" * 40


def truncate_url(url: str) -> str:
    """Shorten URLs longer than 150 characters to 147 plus an ellipsis."""
    if len(url) > _MAX_URL_LENGTH:
        return f"{url[:_MAX_URL_LENGTH - 3]}..."
    return url


def status_text(item: UrlItem) -> str:
    if item.is_success:
        return f"Success ({item.http_status})"
    return f"Error ({item.http_status})"


def status_label(item: UrlItem, width: int = 0) -> str:
    """Coloured status, padded to *width* before styling."""
    colour = typer.colors.GREEN if item.is_success else typer.colors.RED
    return typer.style(f"{status_text(item):<{width}}", fg=colour)


def render_page_info(summary: ScrapedSummary) -> str:
    """Left panel: HTML version, title, heading counts and login form flag."""
    rows: list[tuple[str, str]] = [
        ("HTML Version:", summary.html_version),
        ("Title:", summary.title),
    ]
    for level, count in summary.headings.items():
        rows.append((f"{level.upper()} Headings:", str(count)))
    rows.append(("Contains Login Form:", "Yes" if summary.contains_login_form else "No"))

    width = max(len(label) for label, _ in rows)
    lines = ["Page Information", _RULE]
    lines.extend(f"{label:<{width}}  {value}" for label, value in rows)
    return "\n".join(lines)


def render_url_insights(session: SessionState) -> str:
    """Right panel: URL counts and progress through the paginated list."""
    summary = session.summary
    return "\n".join(
        [
            "URL Insights",
            _RULE,
            f"{summary.total_urls} URLs detected with {summary.external_urls} "
            f"external URLs and {summary.internal_urls} internal URLs.",
            f"{session.accessed_so_far} of {summary.total_urls} URL(s) accessed "
            f"and {session.inaccessible_count} are inaccessible.",
        ]
    )


def render_url_table(urls: Iterable[UrlItem], start: int = 1) -> str:
    """Numbered table of per-URL status rows, numbering from *start*."""
    items = list(urls)
    shown = [truncate_url(item.url) for item in items]
    num_width = max(len("#"), len(str(start + len(items) - 1)))
    url_width = max([len("URL"), *(len(u) for u in shown)])

    lines = [f"{'#':>{num_width}}  {'URL':<{url_width}}  {'Status':<14}  Error"]
    for index, (item, url) in enumerate(zip(items, shown), start=start):
        status = status_label(item, width=14)
        lines.append(f"{index:>{num_width}}  {url:<{url_width}}  {status}  {item.error or 'None'}")
    return "\n".join(lines)


def load_more_label(session: SessionState) -> str:
    return (
        f"Access next {session.next_batch_size} of remaining "
        f"{session.remaining} URL(s)"
    )


def render_progress(status: FetchStatus, target: str | None = None) -> str:
    if status is FetchStatus.LOADING_INITIAL:
        return f"[scrape] Fetching {target!r} …" if target else "[scrape] Fetching …"
    if status is FetchStatus.LOADING_MORE:
        return "[scrape] Loading next page …"
    return ""


def render_error(message: str) -> str:
    return typer.style(message, fg=typer.colors.RED, bold=True)


def render_session(session: SessionState) -> str:
    """Both panels followed by the URL table."""
    return "\n\n".join(
        [
            render_page_info(session.summary),
            render_url_insights(session),
            render_url_table(session.urls),
        ]
    )
