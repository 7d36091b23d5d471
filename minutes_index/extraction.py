"""Extraction of the table of contents and resolution summary of a minutes file.

Minutes produced by the W3C scribe tooling carry two marker-bracketed blocks:

    <nav id=toc>                      <div id=ResolutionSummary>
    <h2>Contents</h2>                 <h2>Summary of resolutions</h2>
    <ol>...</ol>                      <ol>...</ol>
    </nav>                            </div>

Each block is located with a two-state line scanner. A missing marker means
the block is absent, which yields an empty fragment rather than an error.
"""

import logging
from dataclasses import dataclass
from typing import Sequence

from minutes_index.errors import MalformedDocumentError
from minutes_index.models import ExtractedMinutes, MinutesRecord

logger = logging.getLogger(__name__)

# Heading strings that the generated pages replace with their own headings
_STRIPPED_HEADINGS = ("<h2>Contents</h2>", "<h2>Summary of resolutions</h2>")

_RELATIVE_HREF = 'href="#'


@dataclass(frozen=True)
class MarkerPair:
    """Opening/closing marker lines of a block, and how the slice treats them."""
    opening: str
    closing: str
    include_opening: bool
    include_closing: bool


TOC_MARKERS = MarkerPair("<nav id=toc>", "</nav>", include_opening=True, include_closing=True)

# The summary's own <div> and closing </div> are dropped; its <h2> is
# removed by the cleanup step.
RESOLUTION_MARKERS = MarkerPair(
    "<div id=ResolutionSummary>", "</div>", include_opening=False, include_closing=False,
)


def scan_block(lines: Sequence[str], markers: MarkerPair) -> list[str]:
    """Return the lines bracketed by ``markers``.

    Raises:
        MalformedDocumentError: If the opening marker, or a closing marker
            following it, cannot be found.
    """
    searching_open = True
    start = 0
    for i, line in enumerate(lines):
        stripped = line.strip()
        if searching_open:
            if stripped == markers.opening:
                searching_open = False
                start = i
        elif stripped == markers.closing:
            begin = start if markers.include_opening else start + 1
            end = i + 1 if markers.include_closing else i
            return list(lines[begin:end])

    if searching_open:
        raise MalformedDocumentError(f"opening marker {markers.opening!r} not found")
    raise MalformedDocumentError(
        f"closing marker {markers.closing!r} not found after line {start + 1}"
    )


def cleanup_line(line: str, url: str) -> str:
    """Normalize one fragment line for inclusion in a generated page."""
    for heading in _STRIPPED_HEADINGS:
        line = line.replace(heading, "")
    line = line.replace(TOC_MARKERS.opening, "<nav>")
    # Relative links must point back into the minutes document
    return line.replace(_RELATIVE_HREF, f'href="{url}#')


def extract_fragment(record: MinutesRecord, lines: Sequence[str], markers: MarkerPair) -> tuple[str, ...]:
    """Extract and clean up one block; an absent or unterminated block is empty."""
    try:
        block = scan_block(lines, markers)
    except MalformedDocumentError as e:
        logger.debug(f"No {markers.opening} block in {record.file_name}: {e}")
        return ()

    cleaned = (cleanup_line(line, record.url) for line in block)
    return tuple(line for line in cleaned if line.strip())


def extract(record: MinutesRecord, lines: Sequence[str]) -> ExtractedMinutes:
    """Extract the TOC and resolution fragments of one minutes document.

    Args:
        record: The harvested minutes record; its URL anchors rewritten links.
        lines: The raw document, split on line breaks.

    Returns:
        The extracted minutes. Either fragment may be empty.
    """
    return ExtractedMinutes(
        url=record.url,
        date=record.date,
        toc=extract_fragment(record, lines, TOC_MARKERS),
        resolutions=extract_fragment(record, lines, RESOLUTION_MARKERS),
    )


def empty_extraction(record: MinutesRecord) -> ExtractedMinutes:
    """Extraction result for a record whose content could not be read."""
    return ExtractedMinutes(url=record.url, date=record.date)
