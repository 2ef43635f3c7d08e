"""Flask CLI commands for account role management."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext

from showcase.models.user import Role, User
from showcase.services.auth.service import MIN_PASSWORD_LENGTH
from showcase.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

LOGGER = logging.getLogger(__name__)


def _set_role(email: str, role: Role) -> User:
    with SQLAlchemyUnitOfWork() as uow:
        user = uow.users.get_by_email(email)
        if user is None:
            raise click.ClickException(f"No user with email {email!r}.")
        uow.users.set_role(user, role)
        LOGGER.info(
            "cli.role_changed",
            extra={"user_id": user.id, "role": role.value},
        )
        return user


def _check_password(password: str | None) -> str:
    """Reject missing or short passwords before touching the database."""
    if not password:
        raise click.UsageError("A password is required (--password or ADMIN_PASSWORD).")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise click.UsageError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."
        )
    return password


@click.group("users")
def users_cli() -> None:
    """Account administration commands."""


@users_cli.command("promote")
@click.argument("email")
@with_appcontext
def promote_command(email: str) -> None:
    """Grant the ADMIN role to the account registered under EMAIL."""
    _set_role(email, Role.ADMIN)
    click.echo(f"{email} is now ADMIN.")


@users_cli.command("demote")
@click.argument("email")
@with_appcontext
def demote_command(email: str) -> None:
    """Return the account registered under EMAIL to the USER role."""
    _set_role(email, Role.USER)
    click.echo(f"{email} is now USER.")


@users_cli.command("create-admin")
@click.option("--email", required=True, help="Login email of the new admin.")
@click.option("--username", default=None, help="Optional public handle.")
@click.option("--password", envvar="ADMIN_PASSWORD", default=None, help="Initial password.")
@with_appcontext
def create_admin_command(email: str, username: str | None, password: str | None) -> None:
    """Create an ADMIN account. Refuses to run without a strong enough password."""
    password = _check_password(password)
    with SQLAlchemyUnitOfWork() as uow:
        if uow.users.exists_by_email(email):
            raise click.ClickException(f"Email {email!r} is already registered.")
        if username and uow.users.exists_by_username(username):
            raise click.ClickException(f"Username {username!r} is already taken.")
        try:
            user = User(email=email, username=username, role=Role.ADMIN)
            user.password = password
        except ValueError as exc:
            raise click.UsageError(str(exc)) from exc
        uow.users.add(user)
    click.echo(f"Admin {email} created.")
