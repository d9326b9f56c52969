"""Fixtures and test helpers for end-to-end CLI logging tests.

Provides a test-only `log-demo` Click command that emits log messages on a
readshelf logger and on a third-party logger, fixtures to register that
command and to run in an isolated filesystem, and the default `e2e` mark.
"""

import logging
from pathlib import Path

import click
import pytest
from click.testing import CliRunner

from readshelf.entrypoints.cli.main import readshelf

# pylint: disable=redefined-outer-name,unused-argument

E2E_ROOT = Path(__file__).parent.resolve()


@pytest.hookimpl(tryfirst=True)
def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Add default `e2e` marks to items in `tests/e2e/`."""
    for item in items:
        if E2E_ROOT in item.path.resolve().parents:
            if not any(marker.name == "e2e" for marker in item.iter_markers()):
                item.add_marker(pytest.mark.e2e)


@click.command()
def log_demo():
    """Emit DEBUG..CRITICAL on 'readshelf.demo' and some on 'some.thirdparty'."""
    logger = logging.getLogger("readshelf.demo")
    logger.debug("This is a debug-level test message.")
    logger.info("This is an info-level test message.")
    logger.warning("This is a warning-level test message.")
    logger.error("This is an error-level test message.")
    logger.critical("This is a critical-level test message.")
    third_party_logger = logging.getLogger("some.thirdparty")
    third_party_logger.debug("This is a debug-level third-party test message.")
    third_party_logger.info("This is an info-level third-party test message.")
    third_party_logger.warning("This is a warning-level third-party test message.")
    logger.debug("This is a final debug-level test message.")


def _remove_command_everywhere(group, name: str) -> None:
    """Remove a command from a Click group and any click-extra sections."""
    group.commands.pop(name, None)
    if hasattr(group, "_default_section"):
        group._default_section.commands.pop(name, None)  # pylint: disable=protected-access
    for sec in getattr(group, "_sections", []):
        getattr(sec, "commands", {}).pop(name, None)


@pytest.fixture
def registered_log_demo():
    """Register 'log-demo' on the top-level group for the duration of a test."""
    readshelf.add_command(log_demo, name="log-demo")
    try:
        yield
    finally:
        _remove_command_everywhere(readshelf, "log-demo")


@pytest.fixture
def runner():
    """Return a Click CliRunner for invoking CLI commands in tests."""
    return CliRunner()


@pytest.fixture
def fs(runner, monkeypatch):
    """Run the test inside `runner.isolated_filesystem()`.

    The default flight-recorder file is redirected there as well.
    """
    monkeypatch.setenv("READSHELF_LOG_PATH", "latest.log")
    with runner.isolated_filesystem():
        yield
