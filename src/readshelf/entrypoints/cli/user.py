"""``readshelf user``: account administration."""

from __future__ import annotations

import click
import click_extra as clickx

from readshelf.adapters.db.engine import make_engine
from readshelf.service_layer.errors import InvalidUserDataError, UserAlreadyExistsError
from readshelf.service_layer.users import UserManager

from .db import get_checked_url
from .helpers import success


@click.group(cls=clickx.ExtraGroup)
def user() -> None:
    """User management commands."""


@user.command()
@click.argument("username")
@click.option("--email", prompt=True, help="Email address of the new user.")
@click.option(
    "--password",
    prompt=True,
    hide_input=True,
    confirmation_prompt=True,
    help="Password of the new user (prompted, hidden, when omitted).",
)
@click.option(
    "--super-admin", is_flag=True, help="Grant the super administrator role."
)
@click.option(
    "--inactive", is_flag=True, help="Create the account disabled."
)
def create(
    username: str, email: str, password: str, super_admin: bool, inactive: bool
) -> None:
    """Create a user account."""
    engine = make_engine(get_checked_url())
    try:
        UserManager(engine).create_user(
            username,
            password,
            email,
            super_admin=super_admin,
            enabled=not inactive,
        )
    except (UserAlreadyExistsError, InvalidUserDataError) as e:
        raise click.ClickException(str(e)) from e
    finally:
        engine.dispose()
    success(f"Created user {username}.")
