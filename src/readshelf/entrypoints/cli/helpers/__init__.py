"""CLI helpers for readshelf.

URL sanitization for safe display, OSC-8 terminal hyperlinks when supported,
logger-level option parsing, and message emitters with emoji→ASCII fallbacks.
"""

from .db_url import sanitize_url
from .hyperlinks import hyperlink
from .messages import error, success, warn

__all__ = ["sanitize_url", "warn", "success", "error", "hyperlink"]
