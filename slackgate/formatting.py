"""CSV-style tables for tool output.

Every table has a fixed header. Free-text columns are always wrapped in
double quotes with embedded quotes doubled; ID, count and timestamp columns
are written bare. Missing values render as empty strings. Rows keep the order
they were given in.
"""

from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence


@dataclass(frozen=True)
class Column:
    name: str
    quoted: bool = False


def quote(value: Any) -> str:
    """Wrap a free-text value in quotes, doubling embedded quotes."""
    text = "" if value is None else str(value)
    return '"' + text.replace('"', '""') + '"'


def plain(value: Any) -> str:
    return "" if value is None else str(value)


def render_table(columns: Sequence[Column], records: Iterable[Mapping[str, Any]]) -> str:
    """Render records as a header-prefixed table, one line per record."""
    lines = [",".join(column.name for column in columns)]
    for record in records:
        cells = []
        for column in columns:
            value = record.get(column.name)
            cells.append(quote(value) if column.quoted else plain(value))
        lines.append(",".join(cells))
    return "\n".join(lines)


# ─── Table layouts ───────────────────────────────────────────

CHANNEL_COLUMNS = (
    Column("id"),
    Column("name"),
    Column("topic", quoted=True),
    Column("purpose", quoted=True),
    Column("members"),
)

USER_COLUMNS = (
    Column("id"),
    Column("name"),
    Column("real_name", quoted=True),
)

HISTORY_COLUMNS = (
    Column("ts"),
    Column("user", quoted=True),
    Column("text", quoted=True),
    Column("thread_ts"),
    Column("reactions", quoted=True),
    Column("cursor"),
)

REPLY_COLUMNS = (
    Column("ts"),
    Column("user", quoted=True),
    Column("text", quoted=True),
    Column("cursor"),
)

SEARCH_COLUMNS = (
    Column("ts"),
    Column("channel", quoted=True),
    Column("user", quoted=True),
    Column("text", quoted=True),
)


def channel_record(channel) -> dict:
    return {
        "id": channel.id,
        "name": channel.name,
        "topic": channel.topic,
        "purpose": channel.purpose,
        "members": channel.member_count,
    }


def user_record(user) -> dict:
    return {"id": user.id, "name": user.name, "real_name": user.display_name}


def render_channels(channels: Iterable) -> str:
    return render_table(CHANNEL_COLUMNS, (channel_record(c) for c in channels))


def render_users(users: Iterable) -> str:
    return render_table(USER_COLUMNS, (user_record(u) for u in users))
