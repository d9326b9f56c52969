"""Instance-wide internal settings.

Internal settings are name/value pairs grouped by section and stored in the
``internal_setting`` table. They are what an administrator tweaks from the
web UI (sharing targets, exports, analytics, import workers...). The
installer seeds the defaults below; it never overwrites a value that is
already stored, so re-running the installer keeps an admin's choices.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from sqlalchemy import insert, select

from readshelf.adapters.db.schema import internal_setting_table

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Setting:
    """One internal setting."""

    name: str
    value: str | None
    section: str


DEFAULT_SETTINGS: tuple[Setting, ...] = (
    Setting("share_public", "1", "entry"),
    Setting("share_mail", "1", "entry"),
    Setting("share_mastodon", "0", "entry"),
    Setting("share_shaarli", "0", "entry"),
    Setting("shaarli_url", "https://myshaarli.example.org", "entry"),
    Setting("shaarli_share_origin_url", "0", "entry"),
    Setting("show_printlink", "1", "entry"),
    Setting("export_epub", "1", "export"),
    Setting("export_pdf", "1", "export"),
    Setting("export_csv", "1", "export"),
    Setting("export_json", "1", "export"),
    Setting("export_txt", "1", "export"),
    Setting("export_xml", "1", "export"),
    Setting("import_with_worker", "0", "import"),
    Setting("matomo_enabled", "0", "analytics"),
    Setting("matomo_host", "matomo.example.org", "analytics"),
    Setting("matomo_site_id", "1", "analytics"),
    Setting("demo_mode_enabled", "0", "misc"),
    Setting("demo_mode_username", "readshelf", "misc"),
    Setting("download_images_enabled", "0", "misc"),
    Setting("restricted_access", "0", "misc"),
    Setting("api_user_registration", "0", "misc"),
    Setting("store_article_headers", "0", "misc"),
    Setting("support_url", "https://github.com/readshelf/readshelf/issues", "misc"),
)


def read_settings(engine: Engine) -> dict[str, str | None]:
    """Return every stored internal setting as ``{name: value}``."""
    stmt = select(internal_setting_table.c.name, internal_setting_table.c.value)
    with engine.connect() as conn:
        return {name: value for name, value in conn.execute(stmt)}


def write_default_settings(
    engine: Engine, settings: tuple[Setting, ...] = DEFAULT_SETTINGS
) -> int:
    """Persist every setting in ``settings`` that is not stored yet.

    Args:
        engine: Engine bound to a database at migration head.
        settings: Settings to seed; defaults to :data:`DEFAULT_SETTINGS`.

    Returns:
        int: Number of settings written.
    """
    with engine.begin() as conn:
        existing = set(conn.execute(select(internal_setting_table.c.name)).scalars())
        missing = [s for s in settings if s.name not in existing]
        if missing:
            conn.execute(
                insert(internal_setting_table),
                [
                    {"name": s.name, "value": s.value, "section": s.section}
                    for s in missing
                ],
            )
    logger.info(
        "Wrote %d internal setting(s), %d already present",
        len(missing),
        len(settings) - len(missing),
    )
    return len(missing)
