"""GitHub-hosted minutes source.

Minutes live in the ``minutes`` directory of a W3C repository and are
published through GitHub Pages. The contents API lists them:

    GET https://api.github.com/repos/w3c/{scope}/contents/minutes
    -> [{"name": "2024-03-12.html", "path": "minutes/2024-03-12.html", ...}, ...]

and each file is read from its published page.
"""

import logging

import requests

from minutes_index.config import GITHUB_API_URL, GITHUB_HTML_URL
from minutes_index.errors import ListingFetchError
from minutes_index.sources.base import MinutesSource

logger = logging.getLogger(__name__)


class GitHubMinutesSource(MinutesSource):
    """Minutes published from a GitHub repository."""

    source_id = "github"

    def __init__(self, api_url: str = GITHUB_API_URL, html_url: str = GITHUB_HTML_URL, timeout: float = 30):
        """Initialize the source.

        Args:
            api_url: Listing endpoint pattern, with a ``{scope}`` placeholder.
            html_url: Published page pattern, with ``{scope}`` and ``{path}``.
            timeout: Timeout of each HTTP request, in seconds.
        """
        self.api_url = api_url
        self.html_url = html_url
        self.timeout = timeout

    def fetch_listing(self, scope: str) -> list[dict]:
        url = self.api_url.replace("{scope}", scope)
        logger.info(f"Fetching minutes listing from {url}")
        try:
            resp = requests.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise ListingFetchError(url, 0, f"{type(e).__name__}: {e}") from e

        if not resp.ok:
            raise ListingFetchError(url, resp.status_code, resp.reason or "")

        try:
            entries = resp.json()
        except ValueError as e:
            raise ListingFetchError(url, resp.status_code, f"listing is not valid JSON: {e}") from e
        if not isinstance(entries, list):
            raise ListingFetchError(url, resp.status_code, "listing is not a JSON array")

        files = []
        for entry in entries:
            if not isinstance(entry, dict) or not isinstance(entry.get("name"), str) \
                    or not isinstance(entry.get("path"), str):
                logger.warning(f"Skipping malformed listing entry: {entry!r}")
                continue
            if entry.get("type", "file") == "file":
                files.append(entry)
        return files

    def record_url(self, scope: str, entry: dict) -> str:
        return self.html_url.replace("{scope}", scope).replace("{path}", entry["path"])

    def fetch_content(self, source: str) -> list[str]:
        resp = requests.get(source, timeout=self.timeout)
        resp.raise_for_status()
        return resp.text.split("\n")
