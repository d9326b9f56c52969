"""Terminal message helpers for the readshelf CLI.

Small helpers for rendering user-visible status lines with emoji→ASCII
fallbacks. Notices (`warn`, `success`, `error`) go to stderr; `title` and
`section` print the installer's headings to stdout, where the rest of the
installer's narrative goes.
"""

import click


def _supports_character(character: str) -> bool:
    """Return True if *character* can be encoded on stderr.

    Args:
        character: A single Unicode character to probe (e.g., "⚠️", "✅").

    Returns:
        bool: True if encoding succeeds; False on `UnicodeEncodeError`.
    """

    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def _glyph(emoji: str, fallback: str) -> str:
    return emoji if _supports_character(emoji) else fallback


def caution_glyph() -> str:
    """Warning marker: "⚠️" when the stream supports it, else "[!]"."""
    return _glyph("⚠️", "[!]")  # pragma: no mutate


def success_glyph() -> str:
    """Success marker: "✅" when the stream supports it, else "[OK]"."""
    return _glyph("✅", "[OK]")  # pragma: no mutate


def error_glyph() -> str:
    """Error marker: "❌" when the stream supports it, else "[X]"."""
    return _glyph("❌", "[X]")  # pragma: no mutate


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line to **stderr** with a caution glyph.

    Args:
        msg: The message to display.

    Example:
        ``⚠️  This will drop your database.``
    """
    click.secho(f"{caution_glyph()}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Emit a green, bold success line to **stderr** with a success glyph.

    Args:
        msg: The message to display.

    Example:
        ``✅  Database created.``
    """
    click.secho(f"{success_glyph()}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a red, bold error line to **stderr** with an error glyph.

    Args:
        msg: The message to display.

    Example:
        ``❌  Cannot connect to database.``
    """
    click.secho(f"{error_glyph()}  {msg}", fg="red", bold=True, err=True)


def title(msg: str) -> None:
    """Emit a green, bold command title to **stdout**, underlined with ``=``.

    Args:
        msg: The title to display.

    Note:
        Headings go to **stdout** with the rest of the installer's narrative;
        notices stay on stderr.

    Example:
        ``readshelf installer``
        ``===================``
    """
    click.echo()
    click.secho(msg, fg="green", bold=True)
    click.secho("=" * len(msg), fg="green", bold=True)
    click.echo()


def section(msg: str) -> None:
    """Emit a yellow, bold section heading to **stdout**, underlined with ``-``.

    Args:
        msg: The heading to display.

    Example:
        ``Step 1 of 4: Checking system requirements.``
        ``------------------------------------------``
    """
    click.echo()
    click.secho(msg, fg="yellow", bold=True)
    click.secho("-" * len(msg), fg="yellow", bold=True)
    click.echo()
