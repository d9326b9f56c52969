"""Unit tests for the database engine helpers.

These tests cover:
- Detection of SQLite URLs and of the SQLite file path.
- SQLite PRAGMAs applied on connect.
- Database provisioning on SQLite (the file *is* the database).
- Schema detection and schema dropping.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import inspect
from sqlalchemy.engine import make_url

from readshelf.adapters.db.engine import (
    DatabaseExistsError,
    DatabaseNotFoundError,
    create_database,
    database_exists,
    drop_database,
    drop_schema,
    is_sqlite,
    make_engine,
    schema_present,
    sqlite_path,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine


def test_is_sqlite():
    assert is_sqlite("sqlite:///:memory:")
    assert is_sqlite(make_url("sqlite+pysqlite:///file.db"))
    assert not is_sqlite("postgresql://u:p@localhost/db")
    assert not is_sqlite(make_url("mysql+pymysql://u:p@localhost/db"))


@pytest.mark.parametrize(
    "url,expected",
    [
        ("sqlite:///:memory:", None),
        ("sqlite://", None),
        ("sqlite:////var/lib/readshelf/readshelf.db", Path("/var/lib/readshelf/readshelf.db")),
        ("sqlite+pysqlite:///relative.db", Path("relative.db")),
    ],
)
def test_sqlite_path(url, expected):
    assert sqlite_path(url) == expected


def test_sqlite_pragmas_applied(sqlite_engine_file: Engine):
    with sqlite_engine_file.connect() as cxn:
        fk = cxn.exec_driver_sql("PRAGMA foreign_keys;").scalar()
        jm = cxn.exec_driver_sql("PRAGMA journal_mode;").scalar()
    assert fk == 1
    assert jm.lower() == "wal"


def test_sqlite_create_and_drop_database(tmp_path: Path):
    db_file = tmp_path / "nested" / "readshelf.db"
    url = f"sqlite:///{db_file}"
    assert not database_exists(url)

    assert create_database(url) is True
    assert db_file.exists()
    assert database_exists(url)
    assert create_database(url, if_not_exists=True) is False
    with pytest.raises(DatabaseExistsError):
        create_database(url)

    # a connection leaves WAL companions behind
    engine = make_engine(url)
    with engine.connect() as conn:
        conn.exec_driver_sql("CREATE TABLE t (id INTEGER)")
        conn.commit()
    engine.dispose()

    assert drop_database(url) is True
    assert not database_exists(url)
    assert not list(db_file.parent.iterdir())
    assert drop_database(url, if_exists=True) is False
    with pytest.raises(DatabaseNotFoundError):
        drop_database(url)


def test_in_memory_database_always_exists():
    assert database_exists("sqlite:///:memory:")
    assert drop_database("sqlite:///:memory:") is False


def test_in_memory_database_cannot_be_created():
    assert create_database("sqlite:///:memory:", if_not_exists=True) is False
    with pytest.raises(DatabaseExistsError):
        create_database("sqlite:///:memory:")


def test_drop_database_without_sqlite_file_is_an_error(tmp_path: Path):
    url = f"sqlite:///{tmp_path / 'never-created.db'}"
    with pytest.raises(DatabaseNotFoundError):
        drop_database(url)
    assert not (tmp_path / "never-created.db").exists()


def test_schema_present(sqlite_engine_memory: Engine, tmp_path: Path):
    assert schema_present(sqlite_engine_memory)

    empty = make_engine(f"sqlite:///{tmp_path / 'empty.db'}")
    try:
        assert not schema_present(empty)
    finally:
        empty.dispose()


def test_drop_schema_keeps_foreign_tables(sqlite_engine_file: Engine):
    with sqlite_engine_file.begin() as conn:
        conn.exec_driver_sql("CREATE TABLE legacy_notes (id INTEGER PRIMARY KEY)")

    dropped = drop_schema(sqlite_engine_file)

    assert "user" in dropped
    assert "alembic_version" not in dropped
    assert set(inspect(sqlite_engine_file).get_table_names()) == {
        "alembic_version",
        "legacy_notes",
    }
    assert not schema_present(sqlite_engine_file)


def test_drop_schema_full_database(sqlite_engine_file: Engine):
    with sqlite_engine_file.begin() as conn:
        conn.exec_driver_sql("CREATE TABLE legacy_notes (id INTEGER PRIMARY KEY)")

    dropped = drop_schema(sqlite_engine_file, full_database=True)

    assert {"alembic_version", "legacy_notes", "user", "entry"} <= set(dropped)
    assert inspect(sqlite_engine_file).get_table_names() == []
