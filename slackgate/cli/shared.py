"""Shared utilities for Slackgate CLI commands."""

from rich.console import Console

# stdout belongs to the MCP stream when serving; CLI output goes to stderr
console = Console(stderr=True)
