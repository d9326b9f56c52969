"""Unit tests for :mod:`readshelf.service_layer.users`."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import func, select

from readshelf.adapters.db.schema import config_table, user_table
from readshelf.service_layer.errors import InvalidUserDataError, UserAlreadyExistsError
from readshelf.service_layer.users import (
    ROLE_SUPER_ADMIN,
    ROLE_USER,
    UserManager,
    hash_password,
    verify_password,
)

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

# pylint: disable=redefined-outer-name


@pytest.fixture
def users(sqlite_engine_memory: Engine) -> UserManager:
    return UserManager(sqlite_engine_memory)


def test_password_hash_roundtrip():
    hashed = hash_password("s3cr3t")
    assert hashed != "s3cr3t"
    assert hashed.startswith("$pbkdf2-sha256$")
    assert verify_password("s3cr3t", hashed)
    assert not verify_password("wrong", hashed)


def test_create_user_defaults(users: UserManager):
    user_id = users.create_user("alice", "pw", "alice@example.org")

    alice = users.find_by_username("alice")
    assert alice is not None
    assert alice["id"] == user_id
    assert alice["roles"] == [ROLE_USER]
    assert alice["enabled"]
    assert verify_password("pw", alice["password"])
    assert alice["created_at"].tzinfo is not None


def test_create_super_admin_disabled(users: UserManager):
    users.create_user("root", "pw", "root@example.org", super_admin=True, enabled=False)

    root = users.find_by_username("root")
    assert root is not None
    assert root["roles"] == [ROLE_USER, ROLE_SUPER_ADMIN]
    assert not root["enabled"]


def test_create_user_also_creates_config(users: UserManager):
    user_id = users.create_user("alice", "pw", "alice@example.org")

    with users.engine.connect() as conn:
        row = conn.execute(
            select(config_table).where(config_table.c.user_id == user_id)
        ).mappings().one()
    assert row["items_per_page"] == 12
    assert row["language"] == "en"


def test_create_user_strips_whitespace(users: UserManager):
    users.create_user("  alice ", "pw", " alice@example.org ")
    assert users.username_taken("alice")
    assert users.email_taken("alice@example.org")


@pytest.mark.parametrize(
    "username,email,field",
    [("alice", "other@example.org", "username"), ("other", "alice@example.org", "email")],
)
def test_duplicates_are_rejected(users: UserManager, username, email, field):
    users.create_user("alice", "pw", "alice@example.org")

    with pytest.raises(UserAlreadyExistsError) as excinfo:
        users.create_user(username, "pw", email)
    assert excinfo.value.field == field

    # nothing half-written
    with users.engine.connect() as conn:
        assert conn.execute(select(func.count()).select_from(user_table)).scalar() == 1
        assert conn.execute(select(func.count()).select_from(config_table)).scalar() == 1


@pytest.mark.parametrize(
    "username,password,email",
    [(" ", "pw", "a@example.org"), ("alice", "", "a@example.org"), ("alice", "pw", "nope")],
    ids=["empty-username", "empty-password", "bad-email"],
)
def test_invalid_data_is_rejected(users: UserManager, username, password, email):
    with pytest.raises(InvalidUserDataError):
        users.create_user(username, password, email)


def test_lookups_on_empty_table(users: UserManager):
    assert users.find_by_username("nobody") is None
    assert not users.username_taken("nobody")
    assert not users.email_taken("nobody@example.org")
