"""Tests for the GitHub minutes source with a mocked HTTP layer."""

from datetime import date
from unittest.mock import MagicMock, patch

import pytest
import requests

from minutes_index.sources.github import GitHubMinutesSource

LISTING = [
    {"name": "2023-05-01.html", "path": "minutes/2023-05-01.html", "type": "file"},
    {"name": "index.html", "path": "minutes/index.html", "type": "file"},
    {"name": "2024-01-10-f2f.html", "path": "minutes/2024-01-10-f2f.html", "type": "file"},
    {"name": "2024-01-10.html", "path": "minutes/2024-01-10.html", "type": "file"},
    {"name": "resolutions.html", "path": "minutes/resolutions.html", "type": "file"},
    {"name": "images", "path": "minutes/images", "type": "dir"},
]

MINUTES = "\n".join([
    "<nav id=toc>",
    "<h2>Contents</h2>",
    '<li><a href="#t01">Topic</a></li>',
    "</nav>",
])


def response(ok=True, status_code=200, reason="OK", json_data=None, text=""):
    resp = MagicMock()
    resp.ok = ok
    resp.status_code = status_code
    resp.reason = reason
    resp.json.return_value = json_data
    resp.text = text
    return resp


@pytest.fixture
def source():
    return GitHubMinutesSource()


class TestListMinutes:
    @patch("minutes_index.sources.github.requests.get")
    def test_lists_newest_first(self, mock_get, source):
        mock_get.return_value = response(json_data=LISTING)
        records = source.list_minutes("pm-wg")

        mock_get.assert_called_once_with(
            "https://api.github.com/repos/w3c/pm-wg/contents/minutes", timeout=30,
        )
        assert [r.file_name for r in records] == [
            "2024-01-10.html", "2024-01-10-f2f.html", "2023-05-01.html",
        ]

    @patch("minutes_index.sources.github.requests.get")
    def test_builds_records(self, mock_get, source):
        mock_get.return_value = response(json_data=LISTING)
        record = source.list_minutes("pm-wg")[1]

        assert record.url == "https://w3c.github.io/pm-wg/minutes/2024-01-10-f2f.html"
        assert record.source == record.url
        assert record.date == date(2024, 1, 10)
        assert record.task_force == "f2f"

    @patch("minutes_index.sources.github.requests.get")
    def test_error_status_gives_empty_list(self, mock_get, source):
        mock_get.return_value = response(ok=False, status_code=403, reason="Forbidden")
        assert source.list_minutes("pm-wg") == []

    @patch("minutes_index.sources.github.requests.get")
    def test_connection_error_gives_empty_list(self, mock_get, source):
        mock_get.side_effect = requests.ConnectionError("unreachable")
        assert source.list_minutes("pm-wg") == []

    @patch("minutes_index.sources.github.requests.get")
    def test_non_json_body_gives_empty_list(self, mock_get, source):
        resp = response()
        resp.json.side_effect = requests.JSONDecodeError("Expecting value", "<html>", 0)
        mock_get.return_value = resp
        assert source.list_minutes("pm-wg") == []

    @patch("minutes_index.sources.github.requests.get")
    def test_non_array_body_gives_empty_list(self, mock_get, source):
        mock_get.return_value = response(json_data={"message": "Not Found"})
        assert source.list_minutes("pm-wg") == []

    @patch("minutes_index.sources.github.requests.get")
    def test_malformed_entries_skipped(self, mock_get, source):
        mock_get.return_value = response(json_data=[
            "2024-01-01.html",
            None,
            {"name": "2024-02-01.html"},
            {"path": "minutes/2024-02-02.html"},
            LISTING[0],
        ])
        records = source.list_minutes("pm-wg")
        assert [r.file_name for r in records] == ["2023-05-01.html"]

    @patch("minutes_index.sources.github.requests.get")
    def test_custom_urls(self, mock_get):
        source = GitHubMinutesSource(
            api_url="https://git.example.org/{scope}/list",
            html_url="https://pages.example.org/{scope}/{path}",
            timeout=5,
        )
        mock_get.return_value = response(json_data=LISTING[:1])
        records = source.list_minutes("wg")

        mock_get.assert_called_once_with("https://git.example.org/wg/list", timeout=5)
        assert records[0].url == "https://pages.example.org/wg/minutes/2023-05-01.html"


class TestFetchContent:
    @patch("minutes_index.sources.github.requests.get")
    def test_splits_lines(self, mock_get, source):
        mock_get.return_value = response(text="<html>\n<body>\n</html>")
        assert source.fetch_content("https://example.org/m.html") == ["<html>", "<body>", "</html>"]

    @patch("minutes_index.sources.github.requests.get")
    def test_http_error_propagates(self, mock_get, source):
        resp = response(ok=False, status_code=404)
        resp.raise_for_status.side_effect = requests.HTTPError("404 Not Found")
        mock_get.return_value = resp
        with pytest.raises(requests.HTTPError):
            source.fetch_content("https://example.org/m.html")


class TestHarvest:
    @patch("minutes_index.sources.github.requests.get")
    def test_harvest_extracts_in_listing_order(self, mock_get, source):
        def fake_get(url, timeout):
            if "api.github.com" in url:
                return response(json_data=LISTING)
            if url.endswith("2024-01-10-f2f.html"):
                raise requests.ConnectionError("reset")
            return response(text=MINUTES)

        mock_get.side_effect = fake_get
        harvested = source.harvest("pm-wg", max_workers=3)

        assert [record.file_name for record, _ in harvested] == [
            "2024-01-10.html", "2024-01-10-f2f.html", "2023-05-01.html",
        ]
        first, failed, last = (extracted for _, extracted in harvested)
        assert first.toc[-2] == (
            '<li><a href="https://w3c.github.io/pm-wg/minutes/2024-01-10.html#t01">Topic</a></li>'
        )
        assert failed.toc == ()
        assert last.toc != ()
