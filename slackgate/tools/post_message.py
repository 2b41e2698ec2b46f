"""conversations_add_message — post to a channel (disabled by default)."""

import logging
from typing import Optional

from ..errors import PostingDisabled

logger = logging.getLogger("slackgate.tools.post_message")

POSTING_DISABLED = (
    "Message posting is disabled. "
    "Set SLACK_MCP_ADD_MESSAGE_TOOL=true or to a list of channel IDs."
)


async def add_message_handler(
    gateway,
    channel_id: str,
    text: str,
    thread_ts: Optional[str] = None,
) -> str:
    """Post a message to a resolved, posting-enabled channel."""
    if not gateway.policy.posting.enabled:
        raise PostingDisabled(POSTING_DISABLED)

    channel = gateway.policy.resolve_target(channel_id)
    gateway.policy.check_post_allowed(channel)

    result = await gateway.client.post_message(channel, text, thread_ts=thread_ts or None)
    logger.info(f"Message posted to {result.get('channel') or channel}")
    return f"Message posted: ts={result.get('ts')}, channel={result.get('channel') or channel}"


ADD_MESSAGE_TOOL = {
    "name": "conversations_add_message",
    "description": "Post a message to a channel (disabled by default). DMs NOT supported.",
    "parameters": {
        "type": "object",
        "properties": {
            "channel_id": {"type": "string", "description": "Channel ID or #name"},
            "text": {"type": "string", "description": "Message text (markdown supported)"},
            "thread_ts": {"type": "string", "description": "Reply to thread (optional)"},
        },
        "required": ["channel_id", "text"],
    },
    "handler": add_message_handler,
}
