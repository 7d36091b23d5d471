"""Grouping of extracted minutes by calendar year and by task force."""

import logging
from typing import Callable, Iterable, TypeVar

from minutes_index.models import (
    DEFAULT_TASK_FORCE,
    F2F_TASK_FORCE,
    ExtractedMinutes,
    GroupedByYear,
    MinutesRecord,
    TaskForceGroups,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


def group_by_year(items: Iterable[ExtractedMinutes]) -> GroupedByYear:
    """Group minutes by the year of their meeting date.

    Years appear in first-encounter order, and the minutes of a year keep
    their arrival order. Since the harvester lists files newest first, the
    most recent year comes first.
    """
    groups: GroupedByYear = {}
    for entry in items:
        groups.setdefault(entry.year, []).append(entry)
    return groups


def partition_by_task_force(items: Iterable[T], task_force_of: Callable[[T], str]) -> dict[str, list[T]]:
    """Split items by task force key, preserving arrival order in each part."""
    parts: dict[str, list[T]] = {}
    for item in items:
        parts.setdefault(task_force_of(item), []).append(item)
    return parts


def group_by_task_force(
    harvested: Iterable[tuple[MinutesRecord, ExtractedMinutes]],
    known_task_forces: Iterable[str] = (),
) -> TaskForceGroups:
    """Build the per-task-force, per-year grouping of harvested minutes.

    Args:
        harvested: (record, extracted) pairs in listing order.
        known_task_forces: Configured task force keys. Minutes filed under
            any other suffix keep their own group but are reported.

    Returns:
        Mapping of task force key to its minutes grouped by year. The default
        ("") and face-to-face ("f2f") groups are always present.
    """
    known = set(known_task_forces)
    parts = partition_by_task_force(harvested, lambda pair: pair[0].task_force)

    groups: TaskForceGroups = {DEFAULT_TASK_FORCE: {}, F2F_TASK_FORCE: {}}
    for tf, pairs in parts.items():
        if known and tf not in known:
            logger.warning(
                f"{len(pairs)} minutes filed under unknown task force '{tf}' "
                f"(e.g. {pairs[0][0].file_name})"
            )
        groups[tf] = group_by_year(extracted for _, extracted in pairs)
    return groups
