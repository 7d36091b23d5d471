"""Base class for minutes sources.

A source knows how to list the minutes files of a scope and how to read one
of them. Everything else (ordering, filtering, building records, concurrent
fetching and extraction) is shared here, so adding a new kind of repository
means writing a new source, not modifying the pipeline.
"""

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor

from minutes_index.errors import ListingFetchError
from minutes_index.extraction import empty_extraction, extract
from minutes_index.models import ExtractedMinutes, MinutesRecord
from minutes_index.utils.normalization import parse_minutes_date, parse_task_force

logger = logging.getLogger(__name__)

# Generated pages living next to the minutes, not minutes themselves
IGNORED_FILES = frozenset({"index.html", "resolutions.html"})


class MinutesSource(ABC):
    """Abstract base class for minutes repositories."""

    source_id: str = ""

    @abstractmethod
    def fetch_listing(self, scope: str) -> list[dict]:
        """List the files of the scope's minutes directory.

        Returns:
            One ``{"name": ..., "path": ...}`` dict per file, in any order.

        Raises:
            ListingFetchError: If the repository refused the listing.
        """

    @abstractmethod
    def record_url(self, scope: str, entry: dict) -> str:
        """Public URL of a listed file."""

    def record_source(self, scope: str, entry: dict) -> str:
        """Where fetch_content reads a listed file from. Defaults to its URL."""
        return self.record_url(scope, entry)

    @abstractmethod
    def fetch_content(self, source: str) -> list[str]:
        """Read one minutes document and split it into lines."""

    def list_minutes(self, scope: str) -> list[MinutesRecord]:
        """List the minutes records of a scope, newest first.

        Entries are ordered by file name, descending; since names start with
        the meeting date this is reverse chronological order. Generated
        pages and files without a leading date are left out. A listing
        failure is logged and yields no records.
        """
        try:
            entries = self.fetch_listing(scope)
        except ListingFetchError as e:
            logger.error(f"Error: {e}")
            return []

        records = []
        for entry in sorted(entries, key=lambda e: e["name"], reverse=True):
            name = entry["name"]
            if name in IGNORED_FILES:
                continue
            meeting_date = parse_minutes_date(name)
            if meeting_date is None:
                logger.warning(f"Skipping {name}: file name does not start with a date")
                continue
            records.append(MinutesRecord(
                file_name=name,
                url=self.record_url(scope, entry),
                date=meeting_date,
                task_force=parse_task_force(name),
                source=self.record_source(scope, entry),
            ))

        logger.info(f"Listed {len(records)} minutes for {scope or self.source_id}")
        return records

    def fetch_and_extract(self, record: MinutesRecord) -> ExtractedMinutes:
        """Read and extract one record.

        A record that cannot be read keeps its place in the listing with
        empty fragments; the failure is logged.
        """
        try:
            lines = self.fetch_content(record.source)
        except Exception as e:
            logger.warning(f"Could not read {record.source}: {type(e).__name__}: {e}")
            return empty_extraction(record)
        return extract(record, lines)

    def harvest(self, scope: str, max_workers: int = 8) -> list[tuple[MinutesRecord, ExtractedMinutes]]:
        """List a scope and extract all its minutes concurrently.

        Returns:
            (record, extracted) pairs in listing order.
        """
        records = self.list_minutes(scope)
        if not records:
            return []

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            extracted = list(executor.map(self.fetch_and_extract, records))

        logger.info(f"Extracted {len(extracted)} minutes for {scope or self.source_id}")
        return list(zip(records, extracted))
