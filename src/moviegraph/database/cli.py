#!/usr/bin/env python3
"""
Schema migrations for the durable movie store.

Wraps Alembic so migrations run against the same database URL the service
uses (``MOVIEGRAPH_DATABASE_URL`` or the configured default).
"""

import os
import sys
from collections.abc import Callable
from pathlib import Path

import click

from alembic import command
from alembic.config import Config
from moviegraph import __version__
from moviegraph.logging import configure_logging, get_logger

from .connection import get_database_url

logger = get_logger(__name__)

ALEMBIC_INI_ENV = "MOVIEGRAPH_ALEMBIC_INI"


def find_alembic_ini() -> Path:
    """Locate alembic.ini: ``$MOVIEGRAPH_ALEMBIC_INI``, the working directory, then the checkout root."""
    override = os.environ.get(ALEMBIC_INI_ENV)
    candidates = [Path(override)] if override else []
    candidates += [Path.cwd() / "alembic.ini", Path(__file__).resolve().parents[3] / "alembic.ini"]

    for candidate in candidates:
        if candidate.is_file():
            return candidate
    raise FileNotFoundError(
        "alembic.ini not found (looked in: " + ", ".join(str(c) for c in candidates) + ")"
    )


def get_alembic_config() -> Config:
    """Alembic config bound to the service's database URL."""
    config = Config(str(find_alembic_ini()))
    # ConfigParser interpolation treats % specially
    config.set_main_option("sqlalchemy.url", get_database_url().replace("%", "%%"))
    return config


def _run(description: str, action: Callable[[Config], None]) -> None:
    try:
        action(get_alembic_config())
    except Exception as e:
        logger.error(f"{description} failed", error=str(e))
        click.echo(f"✗ {description} failed: {e}", err=True)
        sys.exit(1)
    logger.info(f"{description} finished")


@click.group()
@click.option(
    "--log-level",
    default="info",
    type=click.Choice(["debug", "info", "warning", "error"]),
    help="Log level (default: info)",
)
@click.version_option(version=__version__, prog_name="moviegraph-migrate")
def main(log_level: str) -> None:
    """Manage the movie store schema."""
    configure_logging(debug=(log_level == "debug"), log_level=log_level)


@main.command()
@click.argument("revision", default="head")
@click.option("--sql", is_flag=True, default=False, help="Print SQL instead of applying it")
def upgrade(revision: str, sql: bool) -> None:
    """Apply migrations up to REVISION (default: head)."""
    _run(f"Upgrade to {revision}", lambda config: command.upgrade(config, revision, sql=sql))


@main.command()
@click.argument("revision", default="-1")
def downgrade(revision: str) -> None:
    """Revert migrations down to REVISION (default: one step)."""
    _run(f"Downgrade to {revision}", lambda config: command.downgrade(config, revision))


@main.command()
def current() -> None:
    """Show the revision the database is at."""
    _run("Current revision lookup", lambda config: command.current(config, verbose=True))


@main.command()
def history() -> None:
    """List known migrations."""
    _run("History listing", lambda config: command.history(config))


if __name__ == "__main__":
    main()
