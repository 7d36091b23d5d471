"""Pipeline orchestrator for the minutes index pages.

Harvests the minutes of a scope, groups them by task force and year, and
renders the meeting index and the resolutions digest from their templates.
The two pages are rendered independently: a failure in one is reported
without affecting the other.
"""

import logging
import traceback
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime
from pathlib import Path
from typing import Iterable, Mapping, Optional

from minutes_index.config import Params, TargetConfig
from minutes_index.errors import ConfigurationError, RenderTargetError
from minutes_index.grouping import group_by_task_force
from minutes_index.models import DEFAULT_TASK_FORCE, F2F_TASK_FORCE, TaskForceGroups
from minutes_index.render import SectionBuilder, resolution_section, toc_section
from minutes_index.sources import MinutesSource, source_from_params
from minutes_index.template import Document

logger = logging.getLogger(__name__)

YEAR_SLOT_ID = "year"

SECTION_BUILDERS: dict[str, SectionBuilder] = {
    "index": toc_section,
    "resolutions": resolution_section,
}


def task_force_order(keys: Iterable[str]) -> list[str]:
    """Rendering order of task forces: "", "f2f", then the rest alphabetically."""
    others = sorted(key for key in set(keys) if key not in (DEFAULT_TASK_FORCE, F2F_TASK_FORCE))
    return [DEFAULT_TASK_FORCE, F2F_TASK_FORCE, *others]


def generate_content(
    data: TaskForceGroups,
    task_forces: Mapping[str, str],
    target: TargetConfig,
    builder: SectionBuilder,
    year: Optional[int] = None,
) -> Path:
    """Fill one template with the grouped minutes and write the result.

    Args:
        data: Minutes grouped by task force and year.
        task_forces: Configured task force keys and display names. Only
            these task forces are rendered.
        target: Template, slot id, output path and empty-state message.
        builder: Section builder appending one task force's content.
        year: Year for the "year" slot; defaults to the current year.

    Returns:
        Path of the written file.

    Raises:
        ConfigurationError: If the slot id is missing or not in the template.
    """
    if not target.slot_id:
        raise ConfigurationError(f"No id specified for the template {target.template}")

    document = Document.from_file(target.template)
    slot = document.get_element_by_id(target.slot_id)
    if slot is None:
        raise ConfigurationError(f"Could not find the right slot {target.slot_id} in the template")

    results = []
    for tf in task_force_order(task_forces):
        tf_data = data.get(tf)
        if tf_data:
            results.append(builder(document, task_forces, slot, tf_data, tf))

    if not any(results):
        logger.info(f"No content for {target.name}, using the empty-state message")
        document.add_child(slot, "p", target.empty_message)

    year_slot = document.get_element_by_id(YEAR_SLOT_ID)
    if year_slot is not None:
        document.set_inner_html(year_slot, str(year or datetime.now().year))

    target.output.parent.mkdir(parents=True, exist_ok=True)
    target.output.write_text(document.serialize(), encoding="utf-8")
    logger.info(f"Wrote {target.name} page to {target.output}")
    return target.output


def run_targets(
    data: TaskForceGroups,
    task_forces: Mapping[str, str],
    targets: list[TargetConfig],
    year: Optional[int] = None,
) -> dict:
    """Render all targets concurrently.

    Returns:
        Dict keyed by target name with a ``status`` of "completed" (and the
        ``output`` path) or "error" (and the ``error`` message).
    """
    results = {}
    if not targets:
        return results

    with ThreadPoolExecutor(max_workers=len(targets)) as executor:
        futures = {
            target.name: executor.submit(
                generate_content, data, task_forces, target, SECTION_BUILDERS[target.name], year,
            )
            for target in targets
        }

        for name, future in futures.items():
            try:
                output = future.result()
                results[name] = {"status": "completed", "output": output}
            except Exception as e:
                error = RenderTargetError(name, e)
                logger.error(f"Error generating the {name} file: {e}")
                logger.debug(traceback.format_exc())
                results[name] = {"status": "error", "error": str(error)}

    return results


class MinutesIndexPipeline:
    """Runs harvesting, grouping and rendering for one parameter set."""

    def __init__(self, params: Params, source: Optional[MinutesSource] = None):
        self.params = params
        self.source = source or source_from_params(params)

    def collect(self) -> TaskForceGroups:
        """Harvest and group the minutes of the configured scope."""
        harvested = self.source.harvest(self.params.scope, max_workers=self.params.max_workers)
        return group_by_task_force(harvested, known_task_forces=self.params.task_force_names)

    def run(self, year: Optional[int] = None) -> dict:
        """Generate both pages.

        Returns:
            Per-target results, see ``run_targets``.
        """
        logger.info(f"=== Generating minutes pages for {self.params.scope or self.params.directory} ===")
        groups = self.collect()
        results = run_targets(groups, self.params.task_force_names, self.params.targets, year=year)

        completed = [name for name, result in results.items() if result["status"] == "completed"]
        logger.info(f"=== Completed {len(completed)}/{len(results)} pages ===")
        return results
