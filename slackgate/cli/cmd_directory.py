"""Directory command — inspect the cache the gateway would serve."""

import asyncio
import sys

import click
from rich.table import Table

from . import cli
from .shared import console


@cli.command()
@click.option("--channels/--no-channels", default=True, help="Show channels")
@click.option("--users/--no-users", default=False, help="Show users")
def directory(channels, users):
    """Build the directory and print it (DMs excluded)."""
    from slackgate.config import load_settings
    from slackgate.errors import StartupFailure
    from slackgate.gateway import Gateway
    from slackgate.main import create_client

    async def _load():
        settings = load_settings()
        async with create_client(settings) as client:
            return await Gateway.start(client, settings)

    try:
        gateway = asyncio.run(_load())
    except StartupFailure as e:
        console.print(f"[red]{e}[/red]")
        sys.exit(1)

    console.print(f"[bold]Workspace:[/bold] {gateway.workspace}")

    if channels:
        table = Table(title="Channels")
        table.add_column("ID", style="bold")
        table.add_column("Name")
        table.add_column("Private")
        table.add_column("Members", justify="right")
        for channel in gateway.policy.visible_channels():
            table.add_row(
                channel.id,
                channel.name,
                "yes" if channel.is_private else "",
                "" if channel.member_count is None else str(channel.member_count),
            )
        console.print(table)

    if users:
        table = Table(title="Users")
        table.add_column("ID", style="bold")
        table.add_column("Handle")
        table.add_column("Name")
        for user in gateway.directory.users():
            table.add_row(user.id, f"@{user.name}", user.display_name)
        console.print(table)
