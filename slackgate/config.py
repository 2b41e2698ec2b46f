"""Slackgate configuration management."""

import logging
from dataclasses import dataclass
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings

from .errors import StartupFailure
from .security import PostingPolicy

logger = logging.getLogger("slackgate.config")

_TRUE_VALUES = frozenset({"true", "1", "yes"})
_FALSE_VALUES = frozenset({"", "false", "0", "no"})


@dataclass(frozen=True)
class SlackCredentials:
    token: str
    cookie: Optional[str] = None    # "d=<xoxd>" for browser sessions
    scheme: str = "oauth"           # "browser" | "oauth"


class GatewaySettings(BaseSettings):
    """Settings loaded from environment variables or .env file."""

    # Auth — browser session pair, or a user OAuth token
    xoxc_token: Optional[str] = Field(default=None, description="Browser session token (xoxc-*)")
    xoxd_token: Optional[str] = Field(default=None, description="Browser session cookie (xoxd-*)")
    xoxp_token: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SLACK_TOKEN", "SLACK_MCP_XOXP_TOKEN"),
        description="User OAuth token (xoxp-*)",
    )

    # Posting: "true"/"1" for every channel, or a comma-separated list of channel IDs
    add_message_tool: str = Field(default="", description="Message posting enablement")

    # Hardening
    strict_channel_ids: bool = Field(
        default=False,
        description="Reject raw channel IDs that are not in the directory",
    )
    max_directory_pages: Optional[int] = Field(
        default=None, ge=1,
        description="Abort startup if a directory listing needs more pages than this",
    )

    # Remote
    api_base_url: str = Field(default="https://slack.com/api", description="Slack Web API base URL")
    request_timeout: float = Field(default=30.0, gt=0, description="HTTP timeout in seconds")

    # Resources and logging
    resource_scheme: str = Field(default="slack", description="URI scheme for directory resources")
    log_level: str = Field(default="INFO", description="Root log level for slackgate.*")
    log_file: Optional[str] = Field(default=None, description="Optional log file path")

    model_config = {
        "env_prefix": "SLACK_MCP_",
        "env_file": ".env",
        "extra": "ignore",
        "populate_by_name": True,
    }

    def credentials(self) -> SlackCredentials:
        """Pick the authentication scheme.

        The browser pair wins when both halves are present; otherwise the
        OAuth token is used.

        Raises:
            StartupFailure: when no usable credential is configured
        """
        if self.xoxc_token and self.xoxd_token:
            return SlackCredentials(
                token=self.xoxc_token,
                cookie=f"d={self.xoxd_token}",
                scheme="browser",
            )
        if self.xoxp_token:
            return SlackCredentials(token=self.xoxp_token, scheme="oauth")

        message = (
            "Provide either SLACK_MCP_XOXC_TOKEN + SLACK_MCP_XOXD_TOKEN, "
            "or SLACK_TOKEN (xoxp-*)"
        )
        if self.xoxc_token or self.xoxd_token:
            missing = "SLACK_MCP_XOXD_TOKEN" if self.xoxc_token else "SLACK_MCP_XOXC_TOKEN"
            message += f". Browser auth is missing {missing}"
        raise StartupFailure(message)

    def posting_policy(self) -> PostingPolicy:
        """Interpret add_message_tool as a PostingPolicy."""
        return parse_posting_setting(self.add_message_tool)


def parse_posting_setting(raw: Optional[str]) -> PostingPolicy:
    """Parse the posting enablement string.

    Args:
        raw: "true"/"1"/"yes" enables every channel, ""/"false"/"0"/"no"
            disables posting, anything else is a comma-separated allow-list.

    Returns:
        PostingPolicy. An allow-list never enables other channels.
    """
    value = (raw or "").strip()
    if value.lower() in _FALSE_VALUES:
        return PostingPolicy()
    if value.lower() in _TRUE_VALUES:
        return PostingPolicy(enabled_everywhere=True)

    allowed = frozenset(part.strip() for part in value.split(",") if part.strip())
    return PostingPolicy(allowed_channels=allowed)


def load_settings() -> GatewaySettings:
    """Load settings from environment."""
    settings = GatewaySettings()

    posting = settings.posting_policy()
    if posting.enabled_everywhere:
        logger.warning(
            "⚠️ Message posting is enabled for EVERY channel. "
            "Set SLACK_MCP_ADD_MESSAGE_TOOL to a list of channel IDs to restrict it."
        )
    elif posting.allowed_channels:
        logger.info(f"Message posting allowed for {len(posting.allowed_channels)} channel(s)")

    return settings
