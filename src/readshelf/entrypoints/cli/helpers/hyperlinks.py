"""OSC-8 hyperlink utilities for the readshelf CLI.

Detects whether the active text stream is likely to render OSC-8 terminal
hyperlinks and renders a URL as a clickable link, falling back to the plain
URL otherwise.
"""

import os
import sys
from typing import TextIO

OSC8_TERMINAL_PROGRAMS = {"apple_terminal", "vscode", "iterm.app", "wezterm", "kitty"}


def supports_osc8(stream: TextIO | None = None) -> bool:
    """Heuristically detect whether the target stream supports OSC-8 hyperlinks.

    Args:
        stream: File-like text stream to probe; defaults to ``sys.stdout``.

    Returns:
        bool: ``True`` if hyperlinks should be emitted; ``False`` otherwise.

    Notes:
        - Returns ``False`` when the stream is not a TTY (piped or redirected).
        - Recognizes a short allowlist of terminals (VS Code, iTerm2, WezTerm,
          Kitty, Windows Terminal, VTE-based terminals, Alacritty, Konsole).
    """
    stream = stream or sys.stdout
    if not getattr(stream, "isatty", lambda: False)():
        return False
    terminal_program = (os.getenv("TERM_PROGRAM") or "").lower()
    return bool(
        terminal_program in OSC8_TERMINAL_PROGRAMS
        or os.getenv("WT_SESSION")  # Windows Terminal
        or os.getenv("VTE_VERSION")  # GNOME Terminal, Tilix, etc.
        or os.getenv("TERM", "").startswith(("alacritty", "konsole"))
    )


def hyperlink(url: str, label: str | None = None) -> str:
    """Return ``url`` as an OSC-8 hyperlink, or as plain text when unsupported.

    Args:
        url: Target URL.
        label: Text to display; defaults to the URL itself.

    Returns:
        str: The link wrapped in OSC-8 sequences (BEL-terminated) when
        supported, otherwise the plain URL.
    """
    if not supports_osc8():
        return url
    return f"\x1b]8;;{url}\x07{label or url}\x1b]8;;\x07"
