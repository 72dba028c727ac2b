"""Flask CLI commands driving the registration pipeline from a shell."""

from __future__ import annotations

import logging

import click
from flask import current_app
from flask.cli import with_appcontext

from backregister.core.config import SETTINGS_EXTENSION_KEY, RegistrarSettings
from backregister.services import RegistrationService, authenticate

LOGGER = logging.getLogger(__name__)


def _settings() -> RegistrarSettings:
    return current_app.extensions[SETTINGS_EXTENSION_KEY]


@click.group("registrar")
@click.option("--verbose", is_flag=True, help="Enable verbose logging for the pipeline.")
def registrar_cli(verbose: bool) -> None:
    """Register homeserver accounts without going through the web form."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger("backregister").setLevel(level)


@registrar_cli.command("register")
@click.argument("username")
@click.password_option(help="Password for the new account (prompted when omitted).")
@with_appcontext
def register_command(username: str, password: str) -> None:
    """Register USERNAME on the configured homeserver."""
    result = RegistrationService(_settings()).submit(username, password)
    click.echo(f"{result.notice} ({result.status_code})")
    if not result.ok:
        raise click.exceptions.Exit(1)


@registrar_cli.command("mac")
@click.argument("username")
@with_appcontext
def mac_command(username: str) -> None:
    """Print the shared-secret MAC for USERNAME."""
    click.echo(authenticate(username, _settings().shared_secret))
