"""Tests for the scrapeview CLI commands."""

from __future__ import annotations

import json
from unittest.mock import patch

import httpx
import respx
from typer.testing import CliRunner

from cli.main import app

runner = CliRunner()

BASE_URL = "http://scraper.test"
TARGET_URL = "http://example.com"


def _mock_pages(first_page, last_page) -> None:
    # Page 2's query also holds the target URL, so it is registered first.
    respx.get(f"{BASE_URL}/scrape", params={"page": "2"}).mock(
        return_value=httpx.Response(200, json=last_page)
    )
    respx.get(f"{BASE_URL}/scrape", params={"url": TARGET_URL}).mock(
        return_value=httpx.Response(200, json=first_page)
    )


def _scrape(*args: str, input: str | None = None):
    return runner.invoke(
        app, ["scrape", *args, "--base-url", BASE_URL], input=input
    )


class TestScrapeCommand:
    def test_first_page_panels(self, first_page, last_page) -> None:
        with respx.mock:
            _mock_pages(first_page, last_page)
            result = _scrape(TARGET_URL, input="n\n")

        assert result.exit_code == 0, result.output
        assert "Page Information" in result.output
        assert "HTML5" in result.output
        assert "H1 Headings:" in result.output
        assert "Contains Login Form:" in result.output
        assert "120 URLs detected with 40 external URLs and 80 internal URLs." in result.output
        assert "50 of 120 URL(s) accessed and 3 are inaccessible." in result.output
        assert "Access next 50 of remaining 70 URL(s)?" in result.output

    def test_url_is_trimmed(self, first_page, last_page) -> None:
        with respx.mock:
            _mock_pages(first_page, last_page)
            result = _scrape(f"  {TARGET_URL}  ", input="n\n")

        assert result.exit_code == 0, result.output
        assert "50 of 120 URL(s) accessed" in result.output

    def test_load_more_until_last_page(self, first_page, last_page) -> None:
        with respx.mock:
            _mock_pages(first_page, last_page)
            result = _scrape(TARGET_URL, input="y\n")

        assert result.exit_code == 0, result.output
        assert "100 of 120 URL(s) accessed and 5 are inaccessible." in result.output
        assert "http://example.com/link/99" in result.output
        # No further offer once next_page is null.
        assert result.output.count("Access next") == 1

    def test_initial_rejection_shows_banner_only(self) -> None:
        with respx.mock:
            respx.get(f"{BASE_URL}/scrape").mock(
                return_value=httpx.Response(400, json={"error": "invalid url"})
            )
            result = _scrape("bogus")

        assert result.exit_code == 1
        assert "Error: invalid url" in result.output
        assert "Page Information" not in result.output
        assert "URL Insights" not in result.output

    def test_blank_url_rejected(self) -> None:
        result = _scrape("   ")

        assert result.exit_code == 1
        assert "URL must not be empty" in result.output

    def test_all_loads_every_page_without_prompt(self, first_page, last_page) -> None:
        with respx.mock:
            _mock_pages(first_page, last_page)
            result = _scrape(TARGET_URL, "--all")

        assert result.exit_code == 0, result.output
        assert "100 of 120 URL(s) accessed and 5 are inaccessible." in result.output
        assert "Access next" not in result.output

    def test_all_stops_on_failed_page(self, first_page) -> None:
        with respx.mock:
            respx.get(f"{BASE_URL}/scrape", params={"page": "2"}).mock(
                return_value=httpx.Response(500, json={"error": "upstream timeout"})
            )
            respx.get(f"{BASE_URL}/scrape", params={"url": TARGET_URL}).mock(
                return_value=httpx.Response(200, json=first_page)
            )
            result = _scrape(TARGET_URL, "--all")

        assert result.exit_code == 1
        assert "Error fetching more data: [upstream timeout]" in result.output
        assert "50 of 120 URL(s) accessed" in result.output

    def test_json_output(self, first_page, last_page) -> None:
        with respx.mock:
            _mock_pages(first_page, last_page)
            result = _scrape(TARGET_URL, "--json", "--all")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["loaded_pages"] == 2
        assert data["inaccessible_urls"] == 5
        assert len(data["urls"]) == 100
        assert data["pagination"]["next_page"] is None

    def test_json_failure_goes_to_stderr(self) -> None:
        with respx.mock, patch("cli.main.typer.echo") as echo:
            respx.get(f"{BASE_URL}/scrape").mock(
                return_value=httpx.Response(400, json={"error": "invalid url"})
            )
            result = _scrape("bogus", "--json")

        assert result.exit_code == 1
        banner = [c for c in echo.call_args_list if "Error: invalid url" in str(c.args[0])]
        assert len(banner) == 1
        assert banner[0].kwargs.get("err") is True

    def test_json_without_all_loads_first_page_only(self, first_page, last_page) -> None:
        with respx.mock:
            _mock_pages(first_page, last_page)
            result = _scrape(TARGET_URL, "--json")

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["loaded_pages"] == 1
        assert len(data["urls"]) == 50


class TestShellCommand:
    def _shell(self, input: str):
        return runner.invoke(app, ["shell", "--base-url", BASE_URL], input=input)

    def test_submit_then_more(self, first_page, last_page) -> None:
        with respx.mock:
            _mock_pages(first_page, last_page)
            result = self._shell(f"{TARGET_URL}\nmore\nmore\nquit\n")

        assert result.exit_code == 0, result.output
        assert "[more] Access next 50 of remaining 70 URL(s)" in result.output
        assert "100 of 120 URL(s) accessed and 5 are inaccessible." in result.output
        assert "Nothing more to load." in result.output

    def test_failed_resubmit_keeps_previous_view(self, first_page, last_page) -> None:
        with respx.mock:
            respx.get(f"{BASE_URL}/scrape", params={"url": "bogus"}).mock(
                return_value=httpx.Response(400, json={"error": "invalid url"})
            )
            _mock_pages(first_page, last_page)
            result = self._shell(f"{TARGET_URL}\nbogus\n")

        assert result.exit_code == 0, result.output
        after_error = result.output.split("Error: invalid url", 1)[1]
        assert f"[url] {TARGET_URL}" in after_error
        assert "Page Information" in after_error
        assert "50 of 120 URL(s) accessed and 3 are inaccessible." in after_error

    def test_more_before_submit(self) -> None:
        result = self._shell("more\n")

        assert result.exit_code == 0
        assert "Nothing more to load." in result.output
