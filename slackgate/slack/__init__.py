"""Slack Web API access."""

from .client import SlackClient, SlackPage

__all__ = ["SlackClient", "SlackPage"]
