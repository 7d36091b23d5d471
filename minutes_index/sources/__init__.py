"""Minutes source registry.

Maps source IDs to their classes for the CLI and pipeline.
"""

from minutes_index.config import Params
from minutes_index.sources.base import MinutesSource
from minutes_index.sources.github import GitHubMinutesSource
from minutes_index.sources.local import LocalMinutesSource

SOURCE_REGISTRY: dict[str, type] = {
    "github": GitHubMinutesSource,
    "local": LocalMinutesSource,
}


def get_source(name: str, **kwargs) -> MinutesSource:
    """Get a source instance by name.

    Raises:
        KeyError: If the source name is not found.
    """
    if name not in SOURCE_REGISTRY:
        available = ", ".join(sorted(SOURCE_REGISTRY.keys()))
        raise KeyError(f"Unknown source '{name}'. Available: {available}")
    return SOURCE_REGISTRY[name](**kwargs)


def source_from_params(params: Params) -> MinutesSource:
    """Build the source a parameter set asks for."""
    if params.source == "local":
        return get_source("local", directory=params.directory, location=params.location)
    return get_source("github", api_url=params.api_url, html_url=params.html_url, timeout=params.timeout)
