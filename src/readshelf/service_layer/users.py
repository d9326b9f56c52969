"""User management for readshelf.

`UserManager` is the single place that creates accounts, so every user gets
a hashed password and a default per-user `config` row in the same
transaction. Passwords are hashed with passlib's `CryptContext`
(``pbkdf2_sha256``); the context is module-level so the hashing policy can
be tightened without touching callers (``deprecated="auto"`` lets old hashes
be flagged for re-hashing).
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from passlib.context import CryptContext
from sqlalchemy import insert, select

from readshelf.adapters.db.schema import config_table, user_table
from readshelf.service_layer.errors import InvalidUserDataError, UserAlreadyExistsError

if TYPE_CHECKING:
    from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

ROLE_USER = "ROLE_USER"
ROLE_SUPER_ADMIN = "ROLE_SUPER_ADMIN"


def hash_password(password: str) -> str:
    """Return a salted hash of ``password``."""
    return pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    """Return True if ``password`` matches ``hashed``."""
    return pwd_context.verify(password, hashed)


def _validate(username: str, password: str, email: str) -> None:
    if not username.strip():
        raise InvalidUserDataError("The username must not be empty.")
    if not password:
        raise InvalidUserDataError("The password must not be empty.")
    local, _, domain = email.partition("@")
    if not local or not domain:
        raise InvalidUserDataError(f"'{email}' is not a valid email address.")


class UserManager:
    """Create and look up users.

    Args:
        engine: Engine bound to a database at migration head.
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    def find_by_username(self, username: str) -> dict[str, Any] | None:
        """Return the user row for ``username`` as a dict, or None."""
        stmt = select(user_table).where(user_table.c.username == username)
        with self.engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        return dict(row) if row is not None else None

    def username_taken(self, username: str) -> bool:
        return self.find_by_username(username) is not None

    def email_taken(self, email: str) -> bool:
        stmt = select(user_table.c.id).where(user_table.c.email == email)
        with self.engine.connect() as conn:
            return conn.execute(stmt).first() is not None

    def create_user(  # pylint: disable=too-many-arguments
        self,
        username: str,
        password: str,
        email: str,
        *,
        super_admin: bool = False,
        enabled: bool = True,
    ) -> int:
        """Create a user and its default config.

        Args:
            username: Unique login name.
            password: Plain-text password; only its hash is stored.
            email: Unique email address.
            super_admin: Grant ``ROLE_SUPER_ADMIN`` in addition to ``ROLE_USER``.
            enabled: Whether the account can log in.

        Returns:
            int: The new user's id.

        Raises:
            InvalidUserDataError: If a field is empty or malformed.
            UserAlreadyExistsError: If the username or email is taken.
        """
        username = username.strip()
        email = email.strip()
        _validate(username, password, email)

        roles = [ROLE_USER, ROLE_SUPER_ADMIN] if super_admin else [ROLE_USER]

        with self.engine.begin() as conn:
            self._ensure_unique(conn, username, email)
            result = conn.execute(
                insert(user_table).values(
                    username=username,
                    email=email,
                    password=hash_password(password),
                    enabled=enabled,
                    roles=roles,
                )
            )
            (user_id,) = result.inserted_primary_key
            conn.execute(insert(config_table).values(user_id=user_id))

        logger.info("Created user %s (id=%s, roles=%s)", username, user_id, roles)
        return user_id

    @staticmethod
    def _ensure_unique(conn: Connection, username: str, email: str) -> None:
        taken_username = conn.execute(
            select(user_table.c.id).where(user_table.c.username == username)
        ).first()
        if taken_username is not None:
            raise UserAlreadyExistsError("username", username)
        taken_email = conn.execute(
            select(user_table.c.id).where(user_table.c.email == email)
        ).first()
        if taken_email is not None:
            raise UserAlreadyExistsError("email", email)
