"""System requirement checks run at the start of an installation.

Each check produces a :class:`RequirementCheck` row. Only ``ERROR`` rows make
the installation stop; ``WARNING`` rows are informational. A database that
does not exist yet is *not* an error: the installer will create it.
"""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError, NoSuchModuleError, SQLAlchemyError

from readshelf.adapters.db.dialects import DialectName, UnsupportedDialect
from readshelf.adapters.db.engine import database_exists, make_engine
from readshelf.config import get_cache_dir

if TYPE_CHECKING:
    from sqlalchemy.engine import URL

logger = logging.getLogger(__name__)

MIN_PYTHON = (3, 10)

MIN_SERVER_VERSIONS: dict[DialectName, tuple[int, ...]] = {
    DialectName.POSTGRES: (9, 2),  # JSON columns
    DialectName.MYSQL: (5, 5, 4),  # utf8mb4
    DialectName.SQLITE: (3, 9, 0),  # JSON1
}


class RequirementStatus(Enum):
    """Outcome of one requirement check."""

    OK = "OK!"
    WARNING = "WARNING!"
    ERROR = "ERROR!"


@dataclass(frozen=True)
class RequirementCheck:
    """One row of the requirements table."""

    name: str
    status: RequirementStatus
    help: str = ""


def _version(parts: tuple[int, ...] | None) -> str:
    return ".".join(str(p) for p in parts) if parts else "unknown"


def check_python() -> RequirementCheck:
    """Check the running interpreter against :data:`MIN_PYTHON`."""
    name = f"Python version (>= {_version(MIN_PYTHON)})"
    if sys.version_info[:2] >= MIN_PYTHON:
        return RequirementCheck(name, RequirementStatus.OK)
    return RequirementCheck(
        name,
        RequirementStatus.ERROR,
        f"Python {_version(tuple(sys.version_info[:3]))} is too old.",
    )


def check_driver(url: URL) -> RequirementCheck:
    """Check that the DBAPI driver for ``url`` can be imported."""
    name = f"Database driver ({url.drivername})"
    try:
        DialectName.from_url(url)
        url.get_dialect().import_dbapi()
    except UnsupportedDialect:
        return RequirementCheck(
            name,
            RequirementStatus.ERROR,
            "Use PostgreSQL, MySQL/MariaDB or SQLite.",
        )
    except (NoSuchModuleError, ImportError) as e:
        return RequirementCheck(
            name,
            RequirementStatus.ERROR,
            f"Install the database driver for {url.drivername}: {e}",
        )
    return RequirementCheck(name, RequirementStatus.OK)


def check_database(url: URL) -> list[RequirementCheck]:
    """Check connectivity and, if the database exists, the server version."""
    name = "Database connection"
    try:
        exists = database_exists(url)
    except SQLAlchemyError as e:
        logger.debug("Database server check failed", exc_info=True)
        return [
            RequirementCheck(
                name,
                RequirementStatus.ERROR,
                f"Cannot reach the database server: {e.__class__.__name__}",
            )
        ]

    if not exists:
        return [
            RequirementCheck(
                name,
                RequirementStatus.OK,
                f"Database {url.database!r} does not exist yet, it will be created.",
            )
        ]

    engine = make_engine(url)
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            server_version = conn.dialect.server_version_info
    except SQLAlchemyError as e:
        logger.debug("Database connection check failed", exc_info=True)
        return [
            RequirementCheck(
                name,
                RequirementStatus.ERROR,
                f"Cannot connect to the database: {e.__class__.__name__}",
            )
        ]
    finally:
        engine.dispose()

    dialect = DialectName.from_url(url)
    minimum = MIN_SERVER_VERSIONS[dialect]
    version_name = f"Database version ({dialect.value} >= {_version(minimum)})"
    if server_version is None:
        version_check = RequirementCheck(
            version_name,
            RequirementStatus.WARNING,
            "Could not determine the server version.",
        )
    elif tuple(server_version[: len(minimum)]) >= minimum:
        version_check = RequirementCheck(version_name, RequirementStatus.OK)
    else:
        version_check = RequirementCheck(
            version_name,
            RequirementStatus.ERROR,
            f"Server version {_version(tuple(server_version))} is too old.",
        )
    return [RequirementCheck(name, RequirementStatus.OK), version_check]


def check_cache_dir(cache_dir: Path) -> RequirementCheck:
    """Check that the cache directory exists (or can be created) and is writable."""
    name = "Cache directory writable"
    try:
        cache_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        return RequirementCheck(name, RequirementStatus.ERROR, str(e))
    if not os.access(cache_dir, os.W_OK):
        return RequirementCheck(
            name, RequirementStatus.ERROR, f"{cache_dir} is not writable."
        )
    return RequirementCheck(name, RequirementStatus.OK)


def check_requirements(
    db_url: str, cache_dir: Path | None = None
) -> list[RequirementCheck]:
    """Run every requirement check.

    Database checks are skipped when the URL cannot be parsed or its driver
    is missing.

    Args:
        db_url: SQLAlchemy database URL of the instance being installed.
        cache_dir: Cache directory to check; defaults to the configured one.

    Returns:
        list[RequirementCheck]: One row per check, in display order.
    """
    checks = [check_python()]

    try:
        url = make_url(db_url)
    except ArgumentError:
        checks.append(
            RequirementCheck(
                "Database URL",
                RequirementStatus.ERROR,
                "DATABASE_URL is not a valid SQLAlchemy database URL.",
            )
        )
    else:
        driver = check_driver(url)
        checks.append(driver)
        if driver.status is RequirementStatus.OK:
            checks.extend(check_database(url))

    checks.append(check_cache_dir(cache_dir or get_cache_dir()))

    for check in checks:
        logger.debug("Requirement %s: %s %s", check.name, check.status.name, check.help)
    return checks


def requirements_fulfilled(checks: list[RequirementCheck]) -> bool:
    """Return True when no check has failed."""
    return all(check.status is not RequirementStatus.ERROR for check in checks)
