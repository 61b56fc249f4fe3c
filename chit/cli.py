"""CLI commands for chit."""

import logging
import re
import sys
from pathlib import Path
from typing import NoReturn

import click

from chit.config import (
    LOG_LEVELS,
    Settings,
    clear_settings_cache,
    get_settings,
    set_config_path,
)
from chit.exceptions import ChitError
from chit.keys import random_secret
from chit.token import decrypt, encrypt

logger = logging.getLogger(__name__)


def _settings() -> Settings:
    try:
        return get_settings()
    except ValueError as exc:
        # pydantic's ValidationError is a ValueError too
        raise click.ClickException(f"Invalid configuration: {exc}") from exc


@click.group()
@click.version_option(package_name="chit")
@click.option(
    "-f",
    "--config-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML config file to use instead of ./chit.yaml",
)
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(LOG_LEVELS),
    help="Logging level",
)
def cli(config_file, log_level):
    """chit - authenticated, timestamped, encrypted tokens."""
    if config_file is not None:
        set_config_path(config_file)
        clear_settings_cache()

    level = log_level or _settings().log_level
    logging.basicConfig(level=level.upper(), format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("chit").setLevel(level.upper())


def _resolve_secret(secret: str | None) -> str:
    secret = secret or _settings().secret
    if not secret:
        raise click.UsageError("No secret given. Pass --secret or set CHIT_SECRET.")
    return secret


def _fail(exc: ChitError) -> NoReturn:
    logger.debug("Rejected with %s", type(exc).__name__)
    click.echo(f"Error: {exc}", err=True)
    sys.exit(1)


@cli.command()
@click.option(
    "--write",
    type=click.Path(),
    default=None,
    help="Write CHIT_SECRET to a .env file",
)
def secret(write):
    """Generate a new random secret."""
    try:
        key = random_secret()
    except ChitError as exc:
        _fail(exc)

    if write:
        env_path = Path(write)
        env_content = ""

        if env_path.exists():
            env_content = env_path.read_text()

        secret_pattern = re.compile(r"^CHIT_SECRET=.*$", re.MULTILINE)
        new_line = f"CHIT_SECRET={key}"

        if secret_pattern.search(env_content):
            env_content = secret_pattern.sub(new_line, env_content)
        else:
            if env_content and not env_content.endswith("\n"):
                env_content += "\n"
            env_content += new_line + "\n"

        env_path.write_text(env_content)
        click.echo(f"CHIT_SECRET written to {env_path}")
    else:
        click.echo(key)


@cli.command("encrypt")
@click.argument("message", required=False)
@click.option("--secret", "secret_", default=None, help="Secret to encrypt with")
def encrypt_cmd(message, secret_):
    """Encrypt MESSAGE (or stdin) and print the token."""
    secret_ = _resolve_secret(secret_)
    if message is None or message == "-":
        data = sys.stdin.buffer.read()
    else:
        data = message.encode("utf-8")

    try:
        token = encrypt(data, secret_)
    except ChitError as exc:
        _fail(exc)

    click.echo(token)


@cli.command("decrypt")
@click.argument("token")
@click.option("--secret", "secret_", default=None, help="Secret the token was made with")
@click.option("--ttl", default=None, type=int, help="Maximum token age in seconds")
def decrypt_cmd(token, secret_, ttl):
    """Verify TOKEN and print the message it carries."""
    secret_ = _resolve_secret(secret_)
    if ttl is None:
        ttl = _settings().ttl

    try:
        message = decrypt(token.strip(), secret_, ttl)
    except ChitError as exc:
        _fail(exc)

    click.echo(message)


if __name__ == "__main__":
    cli()
