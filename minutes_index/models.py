"""Data classes shared by the harvesting, extraction and rendering stages."""

from dataclasses import dataclass
from datetime import date

DEFAULT_TASK_FORCE = ""
F2F_TASK_FORCE = "f2f"


@dataclass(frozen=True)
class MinutesRecord:
    """Identity of one published minutes document.

    ``url`` is where readers find the document; ``source`` is where the
    harvester reads it from (the same URL for HTTP sources, a file path for
    a local checkout).
    """
    file_name: str
    url: str
    date: date
    task_force: str = DEFAULT_TASK_FORCE
    source: str = ""

    @property
    def year(self) -> int:
        return self.date.year


@dataclass(frozen=True)
class ExtractedMinutes:
    """The fragments extracted from a single minutes document."""
    url: str
    date: date
    toc: tuple[str, ...] = ()
    resolutions: tuple[str, ...] = ()

    @property
    def year(self) -> int:
        return self.date.year


@dataclass(frozen=True)
class TaskForce:
    key: str
    display_name: str


# year -> minutes of that year, in listing order
GroupedByYear = dict[int, list[ExtractedMinutes]]

# task force key -> minutes of that task force grouped by year
TaskForceGroups = dict[str, GroupedByYear]
