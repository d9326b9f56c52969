"""Default marks for tests under `tests/integration/`.

Every test here gets the `integration` mark. Tests that need the PostgreSQL
container also get `slow`, so `-m "not slow"` keeps to the SQLite ones.
"""

from pathlib import Path

import pytest

# pylint: disable=unused-argument

INTEGRATION_ROOT = Path(__file__).parent.resolve()
CONTAINER_FIXTURES = frozenset({"pg_url_base", "pg_url", "postgres_engine"})


def _has_marker(item: pytest.Item, name: str) -> bool:
    return any(marker.name == name for marker in item.iter_markers())


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Mark integration tests, and the container-backed ones as slow."""
    for item in items:
        if INTEGRATION_ROOT not in item.path.resolve().parents:
            continue
        if not _has_marker(item, "integration"):
            item.add_marker(pytest.mark.integration)
        fixturenames = set(getattr(item, "fixturenames", ()))
        if fixturenames & CONTAINER_FIXTURES and not _has_marker(item, "slow"):
            item.add_marker(pytest.mark.slow)
