"""channels_list — list public and private channels from the directory."""

import logging

from ..directory import ALLOWED_CHANNEL_TYPES
from ..errors import ValidationError
from ..formatting import render_channels
from .limits import LIST_MAX, clamp_limit

logger = logging.getLogger("slackgate.tools.channels")

DEFAULT_TYPES = ",".join(ALLOWED_CHANNEL_TYPES)


async def channels_list_handler(gateway, types: str = DEFAULT_TYPES, limit: int = 100) -> str:
    """List channels of the requested types.

    Args:
        gateway: owning Gateway
        types: comma-separated channel types; anything other than
            public_channel / private_channel is ignored
        limit: max rows (clamped to 1000)
    """
    requested = [t.strip() for t in types.split(",") if t.strip() in ALLOWED_CHANNEL_TYPES]
    if not requested:
        raise ValidationError(f"types must include one of: {DEFAULT_TYPES}")

    limit = clamp_limit(limit, 100, LIST_MAX)
    channels = gateway.policy.visible_channels(requested)[:limit]
    return render_channels(channels)


CHANNELS_LIST_TOOL = {
    "name": "channels_list",
    "description": "List Slack channels. DMs and group DMs are NOT accessible.",
    "parameters": {
        "type": "object",
        "properties": {
            "types": {
                "type": "string",
                "description": "Channel types: public_channel, private_channel (comma-separated)",
                "default": DEFAULT_TYPES,
            },
            "limit": {
                "type": "integer",
                "description": "Max results (default 100, max 1000)",
                "default": 100,
            },
        },
    },
    "handler": channels_list_handler,
}
