"""Local checkout minutes source.

Reads the minutes from a directory on disk, typically a clone of the
repository the generated pages are published from. Links in the generated
pages point to ``{location}/{file name}``, so ``location`` is the minutes
directory as seen from the generated pages.
"""

import logging
from pathlib import Path

from minutes_index.errors import ListingFetchError
from minutes_index.sources.base import MinutesSource

logger = logging.getLogger(__name__)


class LocalMinutesSource(MinutesSource):
    """Minutes read from a local directory."""

    source_id = "local"

    def __init__(self, directory: str | Path, location: str = ""):
        self.directory = Path(directory)
        self.location = location.rstrip("/")

    def fetch_listing(self, scope: str) -> list[dict]:
        # The directory already names the minutes; scope only labels the run.
        if not self.directory.is_dir():
            raise ListingFetchError(str(self.directory), 404, "Not a directory")
        logger.info(f"Listing minutes in {self.directory}")
        return [
            {"name": path.name, "path": str(path)}
            for path in self.directory.glob("*.html")
            if path.is_file()
        ]

    def record_url(self, scope: str, entry: dict) -> str:
        return f"{self.location}/{entry['name']}" if self.location else entry["name"]

    def record_source(self, scope: str, entry: dict) -> str:
        return entry["path"]

    def fetch_content(self, source: str) -> list[str]:
        return Path(source).read_text(encoding="utf-8").split("\n")
