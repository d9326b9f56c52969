"""Functional tests for readshelf's CLI help/version output and OSC-8 links.

This suite verifies:
- The long-form `HELP` prose from `readshelf.entrypoints.cli.main` is rendered
  on `--help` (compared after stripping ANSI and normalizing whitespace).
- The help frame appears (Usage/Options/Commands + "See Also" links) and
  lists the install command.
- Bare URLs are shown when OSC-8 is not supported (CliRunner default).
- OSC-8 BEL-terminated hyperlinks are emitted when supported (via monkeypatch).
"""

from __future__ import annotations

import importlib
import re
from textwrap import dedent
from typing import TYPE_CHECKING

import pytest
from click.testing import CliRunner

import readshelf
import readshelf.entrypoints.cli.main as main  # pylint: disable=consider-using-from-import # need it like this for patching

if TYPE_CHECKING:
    from click.testing import Result
    from pytest import MonkeyPatch

ANSI_RE = re.compile(r"\x1b\[[0-9;]*[A-Za-z]")  # strip SGR styling only

DOCS_URL = "https://readshelf.github.io/readshelf/"
ISSUES_URL = "https://github.com/readshelf/readshelf/issues"


def _normalize(s: str) -> str:
    """Return `s` with leading/trailing space trimmed and internal whitespace collapsed."""
    return re.sub(r"\s+", " ", s.strip())


def _assert_help_displayed(result: Result):
    """Assert that help output contains the project HELP text and expected sections."""
    # pylint: disable=magic-value-comparison
    text = ANSI_RE.sub("", result.output)
    expected_message = _normalize(dedent(main.HELP))
    assert expected_message
    assert expected_message in _normalize(text), "HELP text not rendered."
    assert "Usage:" in text
    assert "Options:" in text
    assert "Commands:" in text
    assert "install" in text
    assert "Docs  :" in text
    assert "Issues:" in text


def _osc8(url: str) -> str:
    return f"\x1b]8;;{url}\x07{url}\x1b]8;;\x07"


class TestNewReadshelfUser:
    """A new readshelf operator, unfamiliar with the tool, tries to get help."""

    @staticmethod
    @pytest.mark.parametrize("args", ([], ["-h"], ["--help"]))
    def test_readshelf_help_output(args: list[str]):
        """Help and links are shown with no args/-h/--help."""
        result = CliRunner().invoke(main.readshelf, args)

        _assert_help_displayed(result)
        # CliRunner does not support OSC-8, so links are plain text
        assert DOCS_URL in result.output, "Help link missing."
        assert ISSUES_URL in result.output, "Issues link missing."

    @staticmethod
    def test_install_help_output():
        """The installer documents its options."""
        result = CliRunner().invoke(main.readshelf, ["install", "--help"])
        assert result.exit_code == 0
        assert "--reset" in result.output
        assert "--no-interaction" in result.output
        assert "--no-run-other-commands" not in result.output

    @staticmethod
    def test_readshelf_version_output():
        """User runs --version and sees the version string."""
        result = CliRunner().invoke(main.readshelf, ["--version"])
        assert result.exit_code == 0
        assert readshelf.__version__ in result.output

    @staticmethod
    def test_osc8_links(monkeypatch: MonkeyPatch):
        """With OSC-8 support, user sees BEL-terminated hyperlink sequences."""
        monkeypatch.setattr(
            "readshelf.entrypoints.cli.helpers.hyperlinks.supports_osc8",
            lambda stream=None: True,
        )

        importlib.reload(main)
        result = CliRunner().invoke(main.readshelf, ["--help"])

        assert _osc8(DOCS_URL) in result.output
        assert _osc8(ISSUES_URL) in result.output
