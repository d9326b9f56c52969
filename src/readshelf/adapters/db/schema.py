"""Table definitions for readshelf.

These mirror the Alembic migrations under ``adapters/db/alembic/versions`` and
are what the service layer queries against. The installer only ever builds
the schema through migrations; ``metadata.create_all`` is reserved for tests.
"""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    Text,
    func,
)

from readshelf.adapters.db.metadata import metadata
from readshelf.adapters.db.sa_types import BIGINT_PK, PORTABLE_JSON, UTCDateTime

__all__ = [
    "user_table",
    "config_table",
    "entry_table",
    "tag_table",
    "entry_tag_table",
    "internal_setting_table",
]

user_table = Table(
    "user",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("username", String(180), nullable=False, unique=True),
    Column("email", String(180), nullable=False, unique=True),
    Column("password", String(255), nullable=False, comment="Password hash."),
    Column("enabled", Boolean, nullable=False, server_default="1"),
    Column(
        "roles",
        PORTABLE_JSON,
        nullable=False,
        comment="List of role names, e.g. ROLE_SUPER_ADMIN.",
    ),
    Column(
        "created_at", UTCDateTime(), nullable=False, server_default=func.current_timestamp()
    ),
    Column(
        "updated_at", UTCDateTime(), nullable=False, server_default=func.current_timestamp()
    ),
)

config_table = Table(
    "config",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column(
        "user_id",
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    ),
    Column("items_per_page", Integer, nullable=False, server_default="12"),
    Column("reading_speed", Integer, nullable=False, server_default="200"),
    Column("language", String(20), nullable=False, server_default="en"),
    Column("feed_limit", Integer, nullable=False, server_default="50"),
    Column("theme", String(20), nullable=False, server_default="light"),
)

entry_table = Table(
    "entry",
    metadata,
    Column("id", BIGINT_PK, primary_key=True, autoincrement=True),
    Column(
        "user_id",
        Integer,
        ForeignKey("user.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("url", Text, nullable=False),
    Column("title", Text, nullable=True),
    Column("content", Text, nullable=True),
    Column("domain_name", String(255), nullable=True),
    Column("reading_time", Integer, nullable=False, server_default="0"),
    Column("is_archived", Boolean, nullable=False, server_default="0"),
    Column("is_starred", Boolean, nullable=False, server_default="0"),
    Column(
        "created_at", UTCDateTime(), nullable=False, server_default=func.current_timestamp()
    ),
    Column(
        "updated_at", UTCDateTime(), nullable=False, server_default=func.current_timestamp()
    ),
    Index("ix_entry_user_id_is_archived", "user_id", "is_archived"),
)

tag_table = Table(
    "tag",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("label", String(255), nullable=False, unique=True),
    Column("slug", String(255), nullable=False, unique=True),
)

entry_tag_table = Table(
    "entry_tag",
    metadata,
    Column(
        "entry_id",
        BIGINT_PK,
        ForeignKey("entry.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        Integer,
        ForeignKey("tag.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

internal_setting_table = Table(
    "internal_setting",
    metadata,
    Column("name", String(255), primary_key=True),
    Column("value", String(255), nullable=True),
    Column("section", String(20), nullable=False),
)
