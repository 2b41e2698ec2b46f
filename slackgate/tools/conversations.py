"""conversations_history / conversations_replies — read channel messages."""

import logging
from typing import Optional

from ..formatting import HISTORY_COLUMNS, REPLY_COLUMNS, render_table
from .limits import HISTORY_MAX, clamp_limit

logger = logging.getLogger("slackgate.tools.conversations")


def _reactions(message: dict) -> str:
    return "|".join(f"{r.get('name')}:{r.get('count')}" for r in message.get("reactions") or [])


def _mark_cursor(rows: list[dict], page) -> list[dict]:
    # Only the last row carries the cursor, and only when Slack has more
    if rows and page.has_more and page.next_cursor:
        rows[-1]["cursor"] = page.next_cursor
    return rows


async def conversations_history_handler(
    gateway,
    channel_id: str,
    limit: int = 50,
    cursor: Optional[str] = None,
) -> str:
    """Fetch one page of channel history.

    Author IDs are replaced with display names from the directory.
    """
    channel = gateway.policy.resolve_target(channel_id)
    limit = clamp_limit(limit, 50, HISTORY_MAX)

    page = await gateway.client.get_history(channel, cursor=cursor, limit=limit)
    rows = [
        {
            "ts": m.get("ts"),
            "user": gateway.directory.user_label(m.get("user") or ""),
            "text": m.get("text"),
            "thread_ts": m.get("thread_ts"),
            "reactions": _reactions(m),
        }
        for m in page.items
    ]
    return render_table(HISTORY_COLUMNS, _mark_cursor(rows, page))


async def conversations_replies_handler(
    gateway,
    channel_id: str,
    thread_ts: str,
    limit: int = 50,
    cursor: Optional[str] = None,
) -> str:
    """Fetch one page of replies in a thread."""
    channel = gateway.policy.resolve_target(channel_id)
    limit = clamp_limit(limit, 50, HISTORY_MAX)

    page = await gateway.client.get_replies(channel, thread_ts.strip(), cursor=cursor, limit=limit)
    rows = [
        {
            "ts": m.get("ts"),
            "user": gateway.directory.user_label(m.get("user") or ""),
            "text": m.get("text"),
        }
        for m in page.items
    ]
    return render_table(REPLY_COLUMNS, _mark_cursor(rows, page))


CONVERSATIONS_HISTORY_TOOL = {
    "name": "conversations_history",
    "description": "Get messages from a channel. DMs are NOT accessible.",
    "parameters": {
        "type": "object",
        "properties": {
            "channel_id": {
                "type": "string",
                "description": "Channel ID (C...) or name (#general). DMs (@user) NOT supported.",
            },
            "limit": {"type": "integer", "description": "Number of messages (default 50, max 100)", "default": 50},
            "cursor": {"type": "string", "description": "Pagination cursor"},
        },
        "required": ["channel_id"],
    },
    "handler": conversations_history_handler,
}

CONVERSATIONS_REPLIES_TOOL = {
    "name": "conversations_replies",
    "description": "Get thread replies. DMs are NOT accessible.",
    "parameters": {
        "type": "object",
        "properties": {
            "channel_id": {"type": "string", "description": "Channel ID or name"},
            "thread_ts": {"type": "string", "description": "Thread timestamp"},
            "limit": {"type": "integer", "description": "Number of replies (default 50, max 100)", "default": 50},
            "cursor": {"type": "string", "description": "Pagination cursor"},
        },
        "required": ["channel_id", "thread_ts"],
    },
    "handler": conversations_replies_handler,
}
