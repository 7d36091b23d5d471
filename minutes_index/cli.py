"""CLI interface for the minutes index generator.

Usage:
    minutes-index                  # Use $DM_PARAMS, or params.json
    minutes-index params.yaml      # Use the given parameter file
    python -m minutes_index.cli params.yaml
"""

import logging
import sys

import click

from minutes_index.config import PARAMS_ENV_VAR, load_params
from minutes_index.errors import ConfigurationError
from minutes_index.pipeline import MinutesIndexPipeline

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@click.command()
@click.argument("params_file", required=False, envvar=PARAMS_ENV_VAR)
def cli(params_file):
    """Generate the meeting index and resolutions pages from published minutes."""
    try:
        params = load_params(params_file)
    except ConfigurationError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    results = MinutesIndexPipeline(params).run()

    failed = False
    for name, result in results.items():
        if result["status"] == "completed":
            click.echo(f"  {name}: generated {result['output']}")
        else:
            failed = True
            click.echo(f"  {name}: ERROR - {result['error']}", err=True)

    if failed:
        sys.exit(1)


if __name__ == "__main__":
    cli()
