"""Database engine factory and server-level helpers.

This module centralizes creation of SQLAlchemy Engines and the handful of
operations that act on the *database* rather than on its tables:

- checking whether the database named in a URL exists,
- creating and dropping that database,
- checking for, and dropping, readshelf's schema.

PostgreSQL and MySQL need a server-level connection for create/drop (the
``postgres`` maintenance database, or no database at all for MySQL) and run
those statements in AUTOCOMMIT. SQLite databases are plain files, so the
helpers work on the filesystem and never open a connection to a file that
does not exist yet (connecting would create it).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import MetaData, create_engine, event, inspect, pool, text
from sqlalchemy.engine import URL, make_url

from readshelf.adapters.db.dialects import DialectName
from readshelf.adapters.db.metadata import metadata

# Register the tables on the shared metadata
import readshelf.adapters.db.schema  # noqa: F401 # pylint: disable=unused-import,wrong-import-order

if TYPE_CHECKING:
    from sqlite3 import Connection as SQLiteConnection

    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

SQLITE_NAMES = {"sqlite", "sqlite+pysqlite"}
SQLITE_MEMORY = ":memory:"
SQLITE_COMPANION_SUFFIXES = ("-wal", "-shm", "-journal")
POSTGRES_MAINTENANCE_DB = "postgres"


class DatabaseExistsError(Exception):
    """Raised when creating a database that already exists."""


class DatabaseNotFoundError(Exception):
    """Raised when dropping a database that does not exist."""


def is_sqlite(url: str | URL) -> bool:
    """Return True if the given SQLAlchemy URL or string corresponds to SQLite.

    Args:
        url: A database URL string or SQLAlchemy :class:`URL`.

    Returns:
        bool: True if the backend is SQLite, otherwise False.
    """
    u = make_url(url)
    return u.get_backend_name() in SQLITE_NAMES


def sqlite_path(url: str | URL) -> Path | None:
    """Return the file path of a SQLite URL, or None for an in-memory database."""
    database = make_url(url).database
    if not database or database == SQLITE_MEMORY:
        return None
    return Path(database)


def make_engine(url: str | URL, *, echo: bool = False) -> Engine:
    """Create a SQLAlchemy Engine for the given URL.

    If the backend is SQLite, applies a set of PRAGMAs on every connection:
        - ``foreign_keys=ON`` (enforce referential integrity)
        - ``journal_mode=WAL`` (write-ahead logging for concurrency)
        - ``synchronous=NORMAL`` (balanced durability)
        - ``temp_store=MEMORY`` (reduce temp file I/O)

    Args:
        url: Database connection URL (str or :class:`URL`).
        echo: If True, log SQL statements.

    Returns:
        Engine: Configured SQLAlchemy Engine.
    """

    engine = create_engine(url, echo=echo, future=True)

    if is_sqlite(url):

        @event.listens_for(engine, "connect")
        def _sqlite_pragmas(dbapi_conn: SQLiteConnection, conn_record):  # type: ignore #pylint: disable=W0613
            cur = dbapi_conn.cursor()
            cur.execute("PRAGMA foreign_keys=ON;")
            cur.execute("PRAGMA journal_mode=WAL;")
            cur.execute("PRAGMA synchronous=NORMAL;")
            cur.execute("PRAGMA temp_store=MEMORY;")
            cur.close()

    return engine


def _server_engine(url: URL) -> Engine:
    """Engine connected to the server rather than to the target database."""
    dialect = DialectName.from_url(url)
    server_url = (
        url.set(database=POSTGRES_MAINTENANCE_DB)
        if dialect is DialectName.POSTGRES
        else url.set(database=None)
    )
    return create_engine(
        server_url, isolation_level="AUTOCOMMIT", poolclass=pool.NullPool
    )


def database_exists(url: str | URL) -> bool:
    """Return True if the database named in ``url`` exists.

    SQLite: the file exists (an in-memory database always exists).
    PostgreSQL: a row in ``pg_database``. MySQL: a row in
    ``information_schema.schemata``.

    Raises:
        sqlalchemy.exc.OperationalError: If the database server is unreachable.
    """
    u = make_url(url)
    dialect = DialectName.from_url(u)

    if dialect is DialectName.SQLITE:
        path = sqlite_path(u)
        return path is None or path.exists()

    if dialect is DialectName.POSTGRES:
        stmt = text("SELECT 1 FROM pg_database WHERE datname = :name")
    else:
        stmt = text(
            "SELECT SCHEMA_NAME FROM INFORMATION_SCHEMA.SCHEMATA "
            "WHERE SCHEMA_NAME = :name"
        )

    engine = _server_engine(u)
    try:
        with engine.connect() as conn:
            return conn.execute(stmt, {"name": u.database}).first() is not None
    finally:
        engine.dispose()


def create_database(url: str | URL, *, if_not_exists: bool = False) -> bool:
    """Create the database named in ``url``.

    Args:
        url: Target database URL.
        if_not_exists: Return quietly when the database already exists.

    Returns:
        bool: True if a database was created, False if it already existed.

    Raises:
        DatabaseExistsError: If it exists and ``if_not_exists`` is False.
    """
    u = make_url(url)
    if database_exists(u):
        if if_not_exists:
            return False
        raise DatabaseExistsError(f"Database {u.database!r} already exists.")

    dialect = DialectName.from_url(u)
    if dialect is DialectName.SQLITE:
        if (path := sqlite_path(u)) is None:
            raise DatabaseExistsError("In-memory SQLite databases always exist.")
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
    else:
        engine = _server_engine(u)
        name = engine.dialect.identifier_preparer.quote(u.database)
        stmt = f"CREATE DATABASE {name}"
        if dialect is DialectName.MYSQL:
            stmt += " CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        try:
            with engine.connect() as conn:
                conn.execute(text(stmt))
        finally:
            engine.dispose()

    logger.info("Created database %s", u.database)
    return True


def drop_database(url: str | URL, *, if_exists: bool = False) -> bool:
    """Drop the database named in ``url``.

    For SQLite the file and its ``-wal``/``-shm``/``-journal`` companions are
    deleted. Dispose any engine bound to the database before calling this.

    Args:
        url: Target database URL.
        if_exists: Return quietly when the database does not exist.

    Returns:
        bool: True if a database was dropped, False if there was nothing to drop.

    Raises:
        DatabaseNotFoundError: If it is missing and ``if_exists`` is False.
    """
    u = make_url(url)
    dialect = DialectName.from_url(u)
    path = sqlite_path(u) if dialect is DialectName.SQLITE else None

    if dialect is DialectName.SQLITE and path is None:
        return False

    if not database_exists(u):
        if if_exists:
            return False
        raise DatabaseNotFoundError(f"Database {u.database!r} does not exist.")

    if path is not None:
        path.unlink()
        for suffix in SQLITE_COMPANION_SUFFIXES:
            Path(f"{path}{suffix}").unlink(missing_ok=True)
    else:
        engine = _server_engine(u)
        name = engine.dialect.identifier_preparer.quote(u.database)
        try:
            with engine.connect() as conn:
                conn.execute(text(f"DROP DATABASE {name}"))
        finally:
            engine.dispose()

    logger.info("Dropped database %s", u.database)
    return True


def schema_present(engine: Engine) -> bool:
    """Return True if any readshelf table exists in the connected database."""
    existing = set(inspect(engine).get_table_names())
    return bool(existing & set(metadata.tables))


def drop_schema(engine: Engine, *, full_database: bool = False) -> list[str]:
    """Drop readshelf's tables.

    Args:
        engine: Engine bound to the target database.
        full_database: Drop every table found in the database, including
            Alembic's ``alembic_version``, instead of only readshelf's tables.

    Returns:
        list[str]: Names of the tables that were dropped.
    """
    if full_database:
        target = MetaData()
        target.reflect(bind=engine)
    else:
        target = metadata

    existing = set(inspect(engine).get_table_names())
    dropped = [name for name in target.tables if name in existing]
    with engine.begin() as conn:
        target.drop_all(conn, checkfirst=True)
    logger.info("Dropped tables: %s", ", ".join(dropped) or "<none>")
    return dropped
