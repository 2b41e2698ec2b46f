"""conversations_search — search messages across accessible channels."""

import logging
from typing import Optional

from ..errors import NotFoundError
from ..formatting import SEARCH_COLUMNS, render_table
from .limits import SEARCH_MAX, clamp_limit

logger = logging.getLogger("slackgate.tools.search")


def _channel_clause(gateway, channel: str) -> str:
    channel_id = gateway.policy.resolve_target(channel)
    cached = gateway.directory.channel_by_id(channel_id)
    if cached is None:
        # Without a name the scope can't be expressed; never widen the search
        raise NotFoundError(f"Channel {channel} not found")
    return f"in:{cached.name.lstrip('#')}"


def _user_clause(gateway, from_user: str) -> str:
    from_user = from_user.strip()
    if from_user.startswith("@"):
        return f"from:{from_user[1:]}"
    user = gateway.directory.user_by_id(from_user)
    return f"from:{user.name if user else from_user}"


async def conversations_search_handler(
    gateway,
    query: str,
    channel: Optional[str] = None,
    from_user: Optional[str] = None,
    limit: int = 20,
) -> str:
    """Search messages.

    Matches from direct messages and group direct messages are dropped
    before rendering, whatever the query asked for.
    """
    parts = [query.strip()]
    if channel and channel.strip():
        parts.append(_channel_clause(gateway, channel))
    if from_user and from_user.strip():
        parts.append(_user_clause(gateway, from_user))

    count = clamp_limit(limit, 20, SEARCH_MAX)
    matches = await gateway.client.search(" ".join(parts), count=count)

    rows = []
    dropped = 0
    for match in matches:
        match_channel = match.get("channel") or {}
        if gateway.policy.is_blocked_record(match_channel):
            dropped += 1
            continue
        user_id = match.get("user")
        rows.append({
            "ts": match.get("ts"),
            "channel": f"#{match_channel.get('name') or 'unknown'}",
            "user": gateway.directory.user_label(user_id) if user_id else match.get("username") or "",
            "text": match.get("text"),
        })
    if dropped:
        logger.info(f"Dropped {dropped} search match(es) from blocked conversations")
    return render_table(SEARCH_COLUMNS, rows)


CONVERSATIONS_SEARCH_TOOL = {
    "name": "conversations_search",
    "description": "Search messages in channels. DMs are NOT searchable.",
    "parameters": {
        "type": "object",
        "properties": {
            "query": {"type": "string", "description": "Search query"},
            "channel": {"type": "string", "description": "Filter by channel ID or #name"},
            "from_user": {"type": "string", "description": "Filter by user ID or @name"},
            "limit": {"type": "integer", "description": "Max results (default 20, max 100)", "default": 20},
        },
        "required": ["query"],
    },
    "handler": conversations_search_handler,
}
