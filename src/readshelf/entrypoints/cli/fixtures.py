"""``readshelf fixtures``: load seed data into a migrated database.

Meant for development and tests: by default every application table is
purged before the fixtures are written.
"""

from __future__ import annotations

import click
import click_extra as clickx

from readshelf.adapters.db.engine import make_engine
from readshelf.service_layer.fixtures import load_fixtures

from .db import get_checked_url
from .helpers import sanitize_url, success, warn

PURGE_WARNING = "Careful, the database will be purged before loading fixtures."


@click.group(cls=clickx.ExtraGroup)
def fixtures() -> None:
    """Fixture (seed data) commands."""


@fixtures.command()
@click.option(
    "--append",
    is_flag=True,
    help="Append the fixtures instead of purging the database first.",
)
@click.option(
    "--no-interaction",
    "-n",
    "no_interaction",
    is_flag=True,
    help="Do not ask for confirmation before purging.",
)
def load(append: bool, no_interaction: bool) -> None:
    """Load the fixture data set."""
    url = get_checked_url()
    if not append and not no_interaction:
        warn(PURGE_WARNING)
        click.echo(f"db: {sanitize_url(url)}")
        click.confirm("Continue?", default=True, abort=True)

    engine = make_engine(url)
    try:
        report = load_fixtures(engine, append=append)
    finally:
        engine.dispose()

    for skipped in report.skipped:
        warn(f"Skipped: {skipped}")
    success(
        f"Loaded {report.users} users, {report.tags} tags, "
        f"{report.entries} entries and {report.settings} settings."
    )
