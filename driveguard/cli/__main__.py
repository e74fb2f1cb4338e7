"""Main file for driveguard CLI."""

import logging
import os
from importlib import metadata

import click

from .server import server
from .watch import watch

LOG_LEVELS = ["error", "warning", "info", "debug"]

_LOGGER = logging.getLogger(__name__)


@click.group()
@click.option("--log-level", type=click.Choice(LOG_LEVELS), default=None)
def cli(log_level: str | None) -> None:
    """Create the click CLI group with specified log level."""
    if log_level is None:
        log_level = os.environ.get("DRIVEGUARD_LOG_LEVEL", "warning")
    level = getattr(logging, log_level.upper(), logging.WARNING)
    logging.basicConfig(
        format="%(asctime)s.%(msecs)03d %(threadName)-25s %(levelname)-8s %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger().setLevel(level)
    _LOGGER.debug("driveguard version: %s", get_version())


@cli.command()
def version() -> None:
    """CLI command to print installed package version."""
    print(get_version())  # noqa: T201 # Valid CLI print


def get_version() -> str:
    """Get the version of the driveguard module."""
    return metadata.version("driveguard")


# Add more commands to the CLI
cli.add_command(watch)
cli.add_command(server)

if __name__ == "__main__":
    cli()
