"""Slackgate — Slack tool gateway that never exposes direct messages."""

__version__ = "1.0.0"
