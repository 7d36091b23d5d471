"""Parameter file loading and validation.

The parameter file is YAML, or JSON when its name ends in ".json". Its
location is, in order of precedence:

1. the command line argument,
2. the DM_PARAMS environment variable,
3. ``params.json`` in the working directory.

Relative paths in the file are resolved against the file's own directory.
"""

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from minutes_index.errors import ConfigurationError
from minutes_index.models import DEFAULT_TASK_FORCE, F2F_TASK_FORCE, TaskForce

logger = logging.getLogger(__name__)

DEFAULT_PARAMS_FILE = "params.json"
PARAMS_ENV_VAR = "DM_PARAMS"

GITHUB_API_URL = "https://api.github.com/repos/w3c/{scope}/contents/minutes"
GITHUB_HTML_URL = "https://w3c.github.io/{scope}/{path}"

DEFAULT_INDEX_EMPTY_MESSAGE = "No meeting records available."
DEFAULT_RESOLUTION_EMPTY_MESSAGE = "No resolutions have been taken."

REQUIRED_KEYS = [
    "index_template",
    "index_template_id",
    "resolution_template",
    "resolution_template_id",
    "taskForces",
]

SOURCES = ("github", "local")


@dataclass(frozen=True)
class TargetConfig:
    """Everything needed to render one output page."""
    name: str
    template: Path
    slot_id: str
    output: Path
    empty_message: str


@dataclass(frozen=True)
class Params:
    """Validated parameters of a run."""
    source: str
    scope: str
    directory: Optional[Path]
    location: str
    api_url: str
    html_url: str
    index: TargetConfig
    resolutions: TargetConfig
    task_forces: tuple[TaskForce, ...]
    timeout: float = 30.0
    max_workers: int = 8

    @property
    def task_force_names(self) -> dict[str, str]:
        return {tf.key: tf.display_name for tf in self.task_forces}

    @property
    def targets(self) -> list[TargetConfig]:
        return [self.index, self.resolutions]


def resolve_params_path(argument: Optional[str] = None) -> Path:
    """Pick the parameter file from the argument, the environment, or the default."""
    if argument:
        return Path(argument)
    env_value = os.environ.get(PARAMS_ENV_VAR)
    if env_value:
        return Path(env_value)
    return Path(DEFAULT_PARAMS_FILE)


def parse_task_forces(raw: Any) -> tuple[TaskForce, ...]:
    """Validate the task force mapping into an ordered tuple.

    The default ("") and face-to-face ("f2f") task forces come first, the
    others follow in alphabetical order of their keys.

    Raises:
        ConfigurationError: If the mapping is malformed or lacks "" or "f2f".
    """
    if not isinstance(raw, dict):
        raise ConfigurationError("taskForces must be a mapping of task force keys to names")

    task_forces = {}
    for key, name in raw.items():
        key = "" if key is None else str(key)
        if not isinstance(name, str):
            raise ConfigurationError(f"Display name of task force '{key}' must be a string")
        task_forces[key] = name

    missing = [key for key in (DEFAULT_TASK_FORCE, F2F_TASK_FORCE) if key not in task_forces]
    if missing:
        listed = ", ".join(f'"{key}"' for key in missing)
        raise ConfigurationError(f"taskForces must define the {listed} task force(s)")

    others = sorted(key for key in task_forces if key not in (DEFAULT_TASK_FORCE, F2F_TASK_FORCE))
    ordered = [DEFAULT_TASK_FORCE, F2F_TASK_FORCE, *others]
    return tuple(TaskForce(key, task_forces[key]) for key in ordered)


def _string_param(data: dict, key: str, default: Optional[str] = None) -> str:
    """Read a string parameter, using the default when the key is absent."""
    value = data.get(key, default)
    if not isinstance(value, str):
        raise ConfigurationError(f"Parameter '{key}' must be a string, got {value!r}")
    return value


def parse_params(data: Any, base_dir: Path) -> Params:
    """Build Params from the decoded parameter file contents."""
    if not isinstance(data, dict):
        raise ConfigurationError("Parameter file must contain a mapping")

    missing = [key for key in REQUIRED_KEYS if data.get(key) in (None, "")]
    if missing:
        raise ConfigurationError(f"Missing required parameter(s): {', '.join(missing)}")

    source = data.get("source", "github")
    if source not in SOURCES:
        raise ConfigurationError(f"Unknown source '{source}'. Available: {', '.join(SOURCES)}")

    scope = str(data.get("scope") or "")
    directory = None
    if source == "github" and not scope:
        raise ConfigurationError("The github source needs a 'scope' (repository name)")
    if source == "local":
        if not data.get("directory"):
            raise ConfigurationError("The local source needs a 'directory'")
        directory = base_dir / _string_param(data, "directory")

    def target(name: str, prefix: str, default_output: str, default_message: str) -> TargetConfig:
        return TargetConfig(
            name=name,
            template=base_dir / _string_param(data, f"{prefix}_template"),
            slot_id=str(data[f"{prefix}_template_id"]),
            output=base_dir / _string_param(data, f"{prefix}_output", default_output),
            empty_message=_string_param(data, f"{prefix}_empty_message", default_message),
        )

    try:
        timeout = float(data.get("timeout", 30))
        max_workers = int(data.get("max_workers", 8))
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid numeric parameter: {e}") from e
    if max_workers < 1:
        raise ConfigurationError("max_workers must be at least 1")

    return Params(
        source=source,
        scope=scope,
        directory=directory,
        location=_string_param(data, "location", ""),
        api_url=_string_param(data, "api_url", GITHUB_API_URL),
        html_url=_string_param(data, "html_url", GITHUB_HTML_URL),
        index=target("index", "index", "index.html", DEFAULT_INDEX_EMPTY_MESSAGE),
        resolutions=target("resolutions", "resolution", "resolutions.html", DEFAULT_RESOLUTION_EMPTY_MESSAGE),
        task_forces=parse_task_forces(data["taskForces"]),
        timeout=timeout,
        max_workers=max_workers,
    )


def load_params(path: Optional[str | Path] = None) -> Params:
    """Load and validate the parameter file.

    Args:
        path: Explicit parameter file. Falls back to DM_PARAMS, then to
            params.json.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid.
    """
    params_path = resolve_params_path(str(path) if path else None)
    logger.info(f"Using params file: {params_path}")

    if not params_path.exists():
        raise ConfigurationError(
            f"The file {params_path} does not exist. Please provide a valid file name "
            f"as the argument or set the {PARAMS_ENV_VAR} environment variable."
        )

    try:
        with open(params_path, "r", encoding="utf-8") as f:
            if params_path.suffix == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Could not read {params_path}: {e}") from e

    return parse_params(data, params_path.parent)
