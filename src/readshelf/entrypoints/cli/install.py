"""``readshelf install``: first-run setup of a readshelf instance.

The installer walks through four steps and prints a banner for each:

1. **Checking system requirements.** Interpreter, database driver, database
   reachability and server version, cache directory.
2. **Setting up database.** Depending on ``--reset``, on whether the database
   exists and on the answers given, one of:

   - drop + create + migrate (``--reset``, or the user asked for a reset),
   - create + migrate (no database yet),
   - drop schema + migrate (the user asked to reset the schema only),
   - migrate (empty database).

3. **Administration setup.** Optionally create a super-admin account.
4. **Config setup.** Seed the default internal settings.

Database work is delegated to the ``readshelf db`` and ``readshelf cache``
sub-commands, run in-process. ``--no-interaction`` answers every question
with its default. Delegation can be switched off (hidden
``--no-run-other-commands`` flag, or :meth:`Installer.disable_run_other_commands`)
so tests can exercise the flow against a prepared database; every banner is
still printed.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from sqlalchemy.exc import SQLAlchemyError

from readshelf import config
from readshelf.adapters.db.engine import database_exists, make_engine, schema_present
from readshelf.service_layer.errors import (
    InstallError,
    InvalidUserDataError,
    RequirementsNotFulfilledError,
    SubCommandError,
    UserAlreadyExistsError,
)
from readshelf.service_layer.requirements import (
    RequirementStatus,
    check_requirements,
    requirements_fulfilled,
)
from readshelf.service_layer.settings import write_default_settings
from readshelf.service_layer.users import UserManager

from . import cache as cache_cli
from . import db as db_cli
from .helpers import error, sanitize_url, success, warn
from .helpers.messages import section, title

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)

TITLE = "readshelf installer"

STEP_REQUIREMENTS = "Step 1 of 4: Checking system requirements."
STEP_DATABASE = "Step 2 of 4: Setting up database."
STEP_ADMIN = "Step 3 of 4: Administration setup."
STEP_CONFIG = "Step 4 of 4: Config setup."

RECREATE_DATABASE_MSG = "Dropping database, creating database and schema, clearing the cache"
CREATE_DATABASE_MSG = "Creating database and schema, clearing the cache"
RESET_SCHEMA_MSG = "Dropping schema and creating schema"
CREATE_SCHEMA_MSG = "Creating schema"
CLEAR_CACHE_MSG = "Clearing the cache"

RESET_DATABASE_QUESTION = (
    "It appears that your database already exists. Would you like to reset it?"
)
RESET_SCHEMA_QUESTION = (
    "Seems like your database contains schema. Do you want to reset it?"
)
CREATE_ADMIN_QUESTION = "Would you like to create a new admin user (recommended)?"

STATUS_STYLES = {
    RequirementStatus.OK: "green",
    RequirementStatus.WARNING: "yellow",
    RequirementStatus.ERROR: "red",
}


class Installer:  # pylint: disable=too-many-instance-attributes
    """Sequential installer for a readshelf instance.

    Args:
        db_url: SQLAlchemy URL of the database to install into.
        interactive: Ask questions; when False every question takes its default.
        reset: Always drop and recreate the database.
        cache_dir: Cache directory checked and cleared; defaults to the configured one.
        color: Allow colored tables.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        db_url: str,
        *,
        interactive: bool = True,
        reset: bool = False,
        cache_dir: Path | None = None,
        color: bool = True,
    ) -> None:
        self.db_url = db_url
        self.interactive = interactive
        self.reset = reset
        self.cache_dir = cache_dir or config.get_cache_dir()
        self.color = color
        self.run_other_commands = True
        self._engine: Engine | None = None

    # ------------------------------------------------------------------
    # plumbing
    # ------------------------------------------------------------------

    def disable_run_other_commands(self) -> None:
        """Turn every delegated sub-command into a no-op."""
        self.run_other_commands = False

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = make_engine(self.db_url)
        return self._engine

    def close(self) -> None:
        """Release pooled connections; the next use of :attr:`engine` reconnects."""
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def confirm(self, question: str, default: bool) -> bool:
        if not self.interactive:
            return default
        return click.confirm(question, default=default)

    def ask(
        self,
        question: str,
        default: str,
        *,
        hide_input: bool = False,
        value_proc: Callable[[str], Any] | None = None,
    ) -> str:
        if not self.interactive:
            return default
        return click.prompt(
            question, default=default, hide_input=hide_input, value_proc=value_proc
        )

    def run_command(self, name: str, command: click.Command, *args: str) -> None:
        """Run a readshelf sub-command in-process.

        The installer's engine is disposed first so the command (which may
        drop the database) and the following steps never share a stale
        connection.

        Raises:
            SubCommandError: If the command fails.
        """
        if not self.run_other_commands:
            logger.debug("Sub-commands disabled, skipping %s %s", name, " ".join(args))
            return

        logger.info("Running %s %s", name, " ".join(args))
        self.close()
        try:
            command.main(
                args=list(args),
                prog_name=f"readshelf {name}",
                standalone_mode=False,
            )
        except click.ClickException as e:
            raise SubCommandError(name, e.format_message()) from e
        except click.Abort as e:
            raise SubCommandError(name, "Aborted.") from e
        except SystemExit as e:
            if e.code not in (0, None):
                raise SubCommandError(name, f"Exited with status {e.code}.") from e
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.debug("%s failed", name, exc_info=True)
            raise SubCommandError(name, str(e) or type(e).__name__) from e

    def is_database_present(self) -> bool:
        try:
            return database_exists(self.db_url)
        except SQLAlchemyError as e:
            raise InstallError(f"Cannot check whether the database exists: {e}") from e

    def is_schema_present(self) -> bool:
        try:
            return schema_present(self.engine)
        except SQLAlchemyError as e:
            raise InstallError(f"Cannot inspect the database schema: {e}") from e

    # ------------------------------------------------------------------
    # steps
    # ------------------------------------------------------------------

    def run(self) -> None:
        """Run every installation step in order."""
        title(TITLE)
        logger.info(
            "Installing into %s (interactive=%s, reset=%s, sub-commands=%s)",
            sanitize_url(self.db_url),
            self.interactive,
            self.reset,
            "on" if self.run_other_commands else "off",
        )

        self.check_requirements()
        self.setup_database()
        self.setup_admin()
        self.setup_config()

        click.echo()
        success("readshelf has been successfully installed.")
        success("You can now start using readshelf.")

    def check_requirements(self) -> None:
        """Step 1: render the requirement checks and stop if one failed.

        Raises:
            RequirementsNotFulfilledError: If any check has ERROR status.
        """
        section(STEP_REQUIREMENTS)

        checks = check_requirements(self.db_url, self.cache_dir)

        table = Table("Checked", "Status", "Recommendation")
        for check in checks:
            table.add_row(
                escape(check.name),
                f"[{STATUS_STYLES[check.status]}]{check.status.value}[/]",
                escape(check.help),
            )
        Console(color_system="auto" if self.color else None).print(table)

        if not requirements_fulfilled(checks):
            error("Failed! Your system does not meet the requirements to run readshelf.")
            raise RequirementsNotFulfilledError

        success("Success! Your system can run readshelf properly.")

    def setup_database(self) -> None:
        """Step 2: create, reset or migrate the database."""
        section(STEP_DATABASE)

        if self.reset:
            self._recreate_database()
        elif not self.is_database_present():
            self._create_database()
        elif self.confirm(RESET_DATABASE_QUESTION, default=False):
            self._recreate_database()
        else:
            self._setup_schema()

        click.echo()
        click.secho("Database successfully setup.", fg="green")

    def _recreate_database(self) -> None:
        click.echo(RECREATE_DATABASE_MSG)
        self.run_command("db drop", db_cli.drop, "--force", "--if-exists")
        self.run_command("db create", db_cli.create)
        self.run_command("db upgrade", db_cli.upgrade, "--force")
        self._clear_cache()

    def _create_database(self) -> None:
        click.echo(CREATE_DATABASE_MSG)
        self.run_command("db create", db_cli.create)
        self.run_command("db upgrade", db_cli.upgrade, "--force")
        self._clear_cache()

    def _clear_cache(self) -> None:
        self.run_command(
            "cache clear", cache_cli.clear, "--cache-dir", str(self.cache_dir)
        )

    def _setup_schema(self) -> None:
        if self.is_schema_present():
            if self.confirm(RESET_SCHEMA_QUESTION, default=False):
                click.echo(RESET_SCHEMA_MSG)
                self.run_command(
                    "db schema-drop", db_cli.schema_drop, "--force", "--full-database"
                )
                self.run_command("db upgrade", db_cli.upgrade, "--force")
        else:
            click.echo(CREATE_SCHEMA_MSG)
            self.run_command("db upgrade", db_cli.upgrade, "--force")

        click.echo(CLEAR_CACHE_MSG)
        self._clear_cache()

    def setup_admin(self) -> None:
        """Step 3: optionally create a super-admin account."""
        section(STEP_ADMIN)

        if not self.confirm(CREATE_ADMIN_QUESTION, default=True):
            return

        users = UserManager(self.engine)

        def _unused_username(value: str) -> str:
            if users.username_taken(value.strip()):
                raise click.BadParameter(f"The username '{value}' is already taken.")
            return value

        def _unused_email(value: str) -> str:
            if users.email_taken(value.strip()):
                raise click.BadParameter(f"The email '{value}' is already taken.")
            return value

        try:
            username = self.ask(
                "Username", config.DEFAULT_ADMIN_USERNAME, value_proc=_unused_username
            )
            password = self.ask(
                "Password", config.DEFAULT_ADMIN_PASSWORD, hide_input=True
            )
            email = self.ask(
                "Email", config.DEFAULT_ADMIN_EMAIL, value_proc=_unused_email
            )
            users.create_user(username, password, email, super_admin=True)
        except UserAlreadyExistsError as e:
            warn(f"{e} Skipping administrator creation.")
            return
        except InvalidUserDataError as e:
            raise InstallError(str(e)) from e
        except SQLAlchemyError as e:
            raise InstallError(f"Cannot create the administrator: {e}") from e

        click.secho("Administration successfully setup.", fg="green")

    def setup_config(self) -> None:
        """Step 4: seed the default internal settings."""
        section(STEP_CONFIG)

        try:
            written = write_default_settings(self.engine)
        except SQLAlchemyError as e:
            raise InstallError(f"Cannot write the default settings: {e}") from e

        logger.debug("%d default setting(s) written", written)
        click.secho("Config successfully setup.", fg="green")


@click.command()
@click.option("--reset", is_flag=True, help="Reset current database.")
@click.option(
    "--no-interaction",
    "-n",
    "no_interaction",
    is_flag=True,
    help="Do not ask any interactive question; defaults are used.",
)
@click.option(
    "--no-run-other-commands",
    "skip_sub_commands",
    is_flag=True,
    hidden=True,
    help="Do not run the delegated db/cache sub-commands (for tests).",
)
@click.pass_context
def install(
    ctx: click.Context, reset: bool, no_interaction: bool, skip_sub_commands: bool
) -> None:
    """readshelf installer."""
    installer = Installer(
        db_cli.require_url(),
        interactive=not no_interaction,
        reset=reset,
        color=ctx.color is not False,
    )
    if skip_sub_commands:
        installer.disable_run_other_commands()

    try:
        installer.run()
    except InstallError as e:
        logger.error("Installation failed: %s", e)
        raise click.ClickException(str(e)) from e
    finally:
        installer.close()
