"""Slackgate CLI — command line interface."""

import sys

import click

from slackgate import __version__
from .shared import console


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="slackgate")
@click.pass_context
def cli(ctx):
    """Slackgate — Slack tool gateway with DMs blocked"""
    if ctx.invoked_subcommand is None:
        _show_help()


def _show_help():
    """Show all available commands."""
    console.print(f"[bold]Slackgate v{__version__}[/bold] — Slack tool gateway with DMs blocked\n")
    commands = [
        ("start", "Build the directory and serve tools over stdio"),
        ("directory", "Show the cached channels and users (DMs excluded)"),
    ]
    for name, desc in commands:
        console.print(f"    [bold]slackgate {name:12s}[/bold] {desc}")
    console.print()
    console.print("[dim]Run 'slackgate <command> --help' for details on a specific command.[/dim]")


# Import all command modules (registers commands onto cli group)
from . import cmd_start  # noqa: E402, F401
from . import cmd_directory  # noqa: E402, F401


def main():
    """CLI entry point."""
    try:
        cli(standalone_mode=False)
    except click.UsageError as e:
        if e.ctx:
            click.echo(e.ctx.command.get_usage(e.ctx), err=True)
        click.echo(f"Error: {e.format_message()}", err=True)
        sys.exit(2)
    except click.ClickException as e:
        e.show()
        sys.exit(e.exit_code)
    except click.exceptions.Exit as e:
        sys.exit(e.exit_code)
    except click.Abort:
        click.echo("Aborted!", err=True)
        sys.exit(1)
