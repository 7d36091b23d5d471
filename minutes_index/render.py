"""Section builders for the generated pages.

Each builder appends one ``<section id="{task force}">`` to a slot of a
template document and reports whether the section carries visible content.
"""

import logging
from typing import Mapping, Protocol

from minutes_index.models import GroupedByYear
from minutes_index.template import Document
from minutes_index.utils.normalization import format_meeting_date

logger = logging.getLogger(__name__)

TOC_SLOT_ID = "toc"


class SectionBuilder(Protocol):
    def __call__(
        self,
        document: Document,
        task_forces: Mapping[str, str],
        parent: int,
        data: GroupedByYear,
        tf: str,
    ) -> bool:
        ...


def task_force_name(task_forces: Mapping[str, str], tf: str) -> str:
    return task_forces.get(tf, f"Unknown taskforce {tf}")


def toc_section(
    document: Document,
    task_forces: Mapping[str, str],
    parent: int,
    data: GroupedByYear,
    tf: str,
) -> bool:
    """Append the list of meetings of one task force, grouped by year.

    The first year listed (the most recent one) is expanded, the others are
    collapsed. A link to the section is added to the "toc" slot if the
    template has one.

    Returns:
        False, without touching the document, if there is no data.
    """
    if not data:
        return False

    section = document.add_child(parent, "section")
    document.set_attribute(section, "id", tf)
    section_title = f"{task_force_name(task_forces, tf)} meetings"
    document.add_child(section, "h2", section_title)
    ul = document.add_child(section, "ul")

    open_details = True
    for year, entries in data.items():
        li_year = document.add_child(ul, "li")
        document.add_child(li_year, "h3", f"Minutes in {year}")
        details_year = document.add_child(li_year, "details")
        if open_details:
            open_details = False
            document.set_attribute(details_year, "open", "true")
        document.add_child(details_year, "summary", "List of Meetings")
        ul_meetings = document.add_child(details_year, "ul")

        for entry in entries:
            li_meeting = document.add_child(ul_meetings, "li")
            document.add_child(
                li_meeting,
                "h4",
                f'<a target="_blank" href="{entry.url}">{format_meeting_date(entry.date)}</a>',
            )
            details_meeting = document.add_child(li_meeting, "details")
            document.add_child(details_meeting, "summary", "Agenda")
            ul_toc = document.add_child(details_meeting, "ul")
            for line in entry.toc:
                document.add_child(ul_toc, "li", line)

    slot = document.get_element_by_id(TOC_SLOT_ID)
    if slot is not None:
        document.add_child(slot, "li", f'<a href="#{tf}">{section_title}</a>')
    return True


def resolution_section(
    document: Document,
    task_forces: Mapping[str, str],
    parent: int,
    data: GroupedByYear,
    tf: str,
) -> bool:
    """Append the resolutions of one task force, grouped by year.

    The section is built before knowing whether any meeting of the task
    force took a resolution; if none did, it is removed again.
    """
    section = document.add_child(parent, "section")
    document.set_attribute(section, "id", tf)
    document.add_child(section, "h2", f"{task_force_name(task_forces, tf)} resolutions")
    ul = document.add_child(section, "ul")

    emitted = 0
    for year, entries in data.items():
        li_year = document.add_child(ul, "li")
        document.add_child(li_year, "h3", f"Resolutions in {year}")
        ul_resolutions = document.add_child(li_year, "ul")
        for entry in entries:
            date = format_meeting_date(entry.date)
            for line in entry.resolutions:
                document.add_child(ul_resolutions, "li", f"{line} ({date})")
                emitted += 1

    if emitted == 0:
        document.remove_child(parent, section)
        logger.debug(f"No resolutions for task force '{tf}', section dropped")
        return False
    return True
