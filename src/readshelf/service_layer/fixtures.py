"""Seed data for development and tests.

`load_fixtures` fills a migrated database with a small, predictable data set:
three users (``admin`` is a super admin, ``empty`` is disabled), a few tags
and entries, and the default internal settings. By default the application
tables are purged first so every load starts from the same state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from sqlalchemy import delete, insert, select

from readshelf.adapters.db.schema import (
    config_table,
    entry_table,
    entry_tag_table,
    internal_setting_table,
    tag_table,
    user_table,
)
from readshelf.service_layer.errors import UserAlreadyExistsError
from readshelf.service_layer.settings import write_default_settings
from readshelf.service_layer.users import UserManager

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

FIXTURE_PASSWORD = "mypassword"

# (username, email, super_admin, enabled)
USERS = (
    ("admin", "bigboss@example.org", True, True),
    ("bob", "bobby@example.org", False, True),
    ("empty", "empty@example.org", False, False),
)

TAGS = (("foo", "foo"), ("bar", "bar"), ("baz", "baz"))

# (owner, url, title, archived, starred, tag labels)
ENTRIES = (
    ("admin", "https://www.lemonde.fr/pixels/article/2015/10/10/", "title entry1", False, False, ("foo", "bar")),
    ("admin", "https://www.lemonde.fr/", "test title entry2", False, True, ()),
    ("admin", "https://en.wikipedia.org/wiki/Read_it_later", "test title entry3", True, False, ("baz",)),
    ("bob", "https://www.example.org/article", "test title entry4", False, False, ("foo",)),
)

# Children first so foreign keys hold while purging
PURGE_ORDER = (
    entry_tag_table,
    tag_table,
    entry_table,
    config_table,
    user_table,
    internal_setting_table,
)


@dataclass
class FixtureReport:
    """Counts of rows written by :func:`load_fixtures`."""

    users: int = 0
    tags: int = 0
    entries: int = 0
    settings: int = 0
    skipped: list[str] = field(default_factory=list)


def purge(engine: Engine) -> None:
    """Delete every row from the application tables."""
    with engine.begin() as conn:
        for table in PURGE_ORDER:
            conn.execute(delete(table))
    logger.debug("Purged %d tables", len(PURGE_ORDER))


def _tag_ids(conn: Connection) -> dict[str, int]:
    return dict(conn.execute(select(tag_table.c.label, tag_table.c.id)).all())


def load_fixtures(engine: Engine, *, append: bool = False) -> FixtureReport:
    """Load the fixture data set.

    Args:
        engine: Engine bound to a database at migration head.
        append: Keep existing rows; users and tags that already exist are
            skipped instead of purged and recreated.

    Returns:
        FixtureReport: What was written, and what was skipped.
    """
    if not append:
        purge(engine)

    report = FixtureReport()
    users = UserManager(engine)
    user_ids: dict[str, int] = {}

    for username, email, super_admin, enabled in USERS:
        try:
            user_ids[username] = users.create_user(
                username,
                FIXTURE_PASSWORD,
                email,
                super_admin=super_admin,
                enabled=enabled,
            )
            report.users += 1
        except UserAlreadyExistsError as e:
            report.skipped.append(str(e))
            if (row := users.find_by_username(username)) is not None:
                user_ids[username] = row["id"]

    with engine.begin() as conn:
        existing_tags = _tag_ids(conn)
        new_tags = [
            {"label": label, "slug": slug}
            for label, slug in TAGS
            if label not in existing_tags
        ]
        if new_tags:
            conn.execute(insert(tag_table), new_tags)
        report.tags = len(new_tags)
        tag_ids = _tag_ids(conn)

        for owner, url, title, archived, starred, labels in ENTRIES:
            if owner not in user_ids:
                report.skipped.append(f"entry {url!r}: unknown owner {owner!r}")
                continue
            result = conn.execute(
                insert(entry_table).values(
                    user_id=user_ids[owner],
                    url=url,
                    title=title,
                    content="<p>Lorem ipsum dolor sit amet.</p>",
                    domain_name=url.split("/")[2],
                    reading_time=1,
                    is_archived=archived,
                    is_starred=starred,
                )
            )
            (entry_id,) = result.inserted_primary_key
            if labels:
                conn.execute(
                    insert(entry_tag_table),
                    [{"entry_id": entry_id, "tag_id": tag_ids[label]} for label in labels],
                )
            report.entries += 1

    report.settings = write_default_settings(engine)

    logger.info(
        "Loaded fixtures: %d users, %d tags, %d entries, %d settings",
        report.users,
        report.tags,
        report.entries,
        report.settings,
    )
    return report
