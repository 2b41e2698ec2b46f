"""Start command."""

import click

from . import cli


@cli.command()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def start(debug):
    """Start the gateway (MCP over stdio)."""
    from slackgate.main import main as run_main
    run_main(debug=debug)
