from __future__ import annotations

from typing import TYPE_CHECKING, TextIO

import click

if TYPE_CHECKING:
    from devbridge.remote.store.local import LocalCredentialStore


@click.group()
@click.option("--log-level", default=None, help="Log level (default: from DEVBRIDGE_LOG_LEVEL or INFO).")
def main(log_level: str | None) -> None:
    """Devbridge - connect to remote development workspaces."""
    from devbridge.remote.log import setup_logging
    from devbridge.remote.settings import get_settings

    setup_logging(log_level or get_settings().log_level)


def _store() -> LocalCredentialStore:
    from devbridge.remote.settings import get_settings
    from devbridge.remote.store.local import LocalCredentialStore

    settings = get_settings()
    return LocalCredentialStore(settings.storage_path(), prefix=settings.token_prefix)


@main.command()
@click.argument("workspace_id")
def paths(workspace_id: str) -> None:
    """Show the token file, log file and SSH host alias of a workspace."""
    from devbridge.remote.connection.tunnel import host_name_for
    from devbridge.remote.settings import get_settings

    store = _store()
    click.echo(f"token: {store.location(workspace_id)}")
    click.echo(f"log:   {store.log_location(workspace_id)}")
    click.echo(f"host:  {host_name_for(workspace_id, get_settings().host_name_prefix)}")


@main.command("parse-arn")
@click.argument("arn")
def parse_arn(arn: str) -> None:
    """Print the workspace id encoded in a workspace ARN."""
    from devbridge.remote.connection.identity import ArnParseError, parse_workspace_id

    try:
        click.echo(parse_workspace_id(arn))
    except ArnParseError as exc:
        raise click.ClickException(str(exc)) from exc


@main.command("cache-token")
@click.argument("workspace_id")
@click.option("--token-file", type=click.File("r"), default="-", help="File to read the token from (default: stdin).")
def cache_token(workspace_id: str, token_file: TextIO) -> None:
    """Cache a bearer token for WORKSPACE_ID."""
    import asyncio

    token = token_file.read().strip()
    if not token:
        raise click.ClickException("No token provided on stdin")

    store = _store()
    try:
        asyncio.run(store.cache(token, workspace_id))
    except OSError as exc:
        raise click.ClickException(f"Unable to cache token: {exc}") from exc
    click.echo(str(store.location(workspace_id)))


if __name__ == "__main__":
    main()
