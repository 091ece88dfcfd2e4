"""scrapeview CLI: terminal front-end for the scraping API.

Usage:
    python cli/main.py --help

Commands:
    scrape    scrape one URL, then page through its URL list
    shell     interactive loop: submit URLs, load more, repeat
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from scrapeview.xxx import
# ...` works when the CLI is invoked as `python cli/main.py` from any
# working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

import asyncio
import json
from typing import Optional

import typer

from cli.rendering import (
    load_more_label,
    render_error,
    render_progress,
    render_session,
    render_url_insights,
    render_url_table,
)
from scrapeview.api import ScraperClient
from scrapeview.config import settings
from scrapeview.controller import FetchController, FetchStatus
from scrapeview.logging_config import setup_logging

app = typer.Typer(
    name="scrapeview",
    help="Inspect pages through the remote scraping API.",
    no_args_is_help=True,
)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Log level (default from SCRAPEVIEW_LOG_LEVEL)."
    ),
) -> None:
    """Inspect pages through the remote scraping API."""
    setup_logging(log_level or settings.log_level)


def _make_controller(base_url: Optional[str]) -> FetchController:
    return FetchController(ScraperClient(base_url=base_url))


def _render_view(controller: FetchController) -> None:
    """Print the banner, the current session and the load-more offer."""
    if controller.error:
        typer.echo(render_error(controller.error))
    if controller.session is not None:
        typer.echo(f"[url] {controller.url}")
        typer.echo(render_session(controller.session))
    if controller.can_load_more:
        typer.echo(f"\n[more] {load_more_label(controller.session)}")


# ---------------------------------------------------------------------------
# scrape
# ---------------------------------------------------------------------------
@app.command("scrape")
def scrape(
    url: str = typer.Argument(..., help="URL to scrape."),
    load_all: bool = typer.Option(False, "--all", help="Load every page without asking."),
    as_json: bool = typer.Option(
        False, "--json", help="Print the accumulated result as JSON instead of tables."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Scraping API base URL (default from SCRAPER_API_BASE_URL)."
    ),
) -> None:
    """Scrape a URL and page through the URLs found on it.

    With --json nothing is prompted: only the first page is loaded unless
    --all is given.
    """
    url = url.strip()
    if not url:
        typer.echo(render_error("Error: URL must not be empty."))
        raise typer.Exit(code=1)

    controller = _make_controller(base_url)
    if not as_json:
        typer.echo(render_progress(FetchStatus.LOADING_INITIAL, url))
    asyncio.run(controller.submit(url))

    if controller.error:
        typer.echo(render_error(controller.error), err=as_json)
        raise typer.Exit(code=1)

    if not as_json:
        typer.echo(render_session(controller.session))

    failed = False
    while controller.can_load_more:
        label = load_more_label(controller.session)
        if not load_all:
            if as_json or not typer.confirm(f"\n{label}?", default=False):
                break
        if not as_json:
            typer.echo(render_progress(FetchStatus.LOADING_MORE))

        loaded_before = len(controller.session.urls)
        if not asyncio.run(controller.load_more()):
            typer.echo(render_error(controller.error), err=as_json)
            if load_all:
                failed = True
                break
            continue

        if not as_json:
            session = controller.session
            typer.echo(render_url_insights(session))
            typer.echo(render_url_table(session.urls[loaded_before:], start=loaded_before + 1))

    if as_json:
        typer.echo(json.dumps(controller.session.to_dict(), indent=2))
    if failed:
        raise typer.Exit(code=1)


# ---------------------------------------------------------------------------
# shell
# ---------------------------------------------------------------------------
@app.command("shell")
def shell(
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Scraping API base URL (default from SCRAPER_API_BASE_URL)."
    ),
) -> None:
    """Interactive session: enter URLs to scrape, 'more' for the next page."""
    controller = _make_controller(base_url)
    typer.echo("Enter a URL to scrape, 'more' to load the next page, 'quit' to exit.")

    while True:
        try:
            line = typer.prompt("url", default="", show_default=False)
        except typer.Abort:
            break

        line = line.strip()
        if not line:
            continue
        if line in ("quit", "exit"):
            break

        if line == "more":
            if not controller.can_load_more:
                typer.echo("Nothing more to load.")
                continue
            typer.echo(render_progress(FetchStatus.LOADING_MORE))
            asyncio.run(controller.load_more())
        else:
            typer.echo(render_progress(FetchStatus.LOADING_INITIAL, line))
            asyncio.run(controller.submit(line))

        _render_view(controller)


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()
