"""Directory cache — channels and users indexed by ID and by name.

Built once, before any tool call is served, by paginating the Slack listing
endpoints to exhaustion. Read-only afterwards: the lookup tables are exposed
as mapping proxies and nothing in the gateway writes to them again.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Awaitable, Callable, Iterable, Mapping, Optional

from .errors import GatewayError, StartupFailure

logger = logging.getLogger("slackgate.directory")

# Only these types are ever requested. DMs and group DMs are never listed.
ALLOWED_CHANNEL_TYPES = ("public_channel", "private_channel")

DEFAULT_WORKSPACE = "workspace"


@dataclass(frozen=True)
class Channel:
    id: str
    name: str                           # always "#"-prefixed
    is_private: bool = False
    is_im: bool = False
    is_mpim: bool = False
    topic: Optional[str] = None
    purpose: Optional[str] = None
    member_count: Optional[int] = None

    @property
    def is_direct(self) -> bool:
        return self.is_im or self.is_mpim

    @classmethod
    def from_api(cls, raw: dict) -> "Channel":
        return cls(
            id=raw["id"],
            name=f"#{raw.get('name') or raw['id']}",
            is_private=bool(raw.get("is_private")),
            is_im=bool(raw.get("is_im")),
            is_mpim=bool(raw.get("is_mpim")),
            topic=(raw.get("topic") or {}).get("value") or None,
            purpose=(raw.get("purpose") or {}).get("value") or None,
            member_count=raw.get("num_members"),
        )


@dataclass(frozen=True)
class User:
    id: str
    name: str                           # handle, looked up as "@name"
    real_name: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.real_name or self.name

    @classmethod
    def from_api(cls, raw: dict) -> "User":
        return cls(
            id=raw["id"],
            name=raw.get("name") or raw["id"],
            real_name=raw.get("real_name") or None,
        )


class Directory:
    """Immutable snapshot of the workspace's channels and users."""

    def __init__(
        self,
        workspace: str = DEFAULT_WORKSPACE,
        channels: Iterable[Channel] = (),
        users: Iterable[User] = (),
    ):
        self.workspace = workspace

        channels_by_id: dict[str, Channel] = {}
        channels_by_name: dict[str, Channel] = {}
        for channel in channels:
            channels_by_id[channel.id] = channel
            channels_by_name[channel.name] = channel

        users_by_id: dict[str, User] = {}
        users_by_name: dict[str, User] = {}
        for user in users:
            users_by_id[user.id] = user
            users_by_name[f"@{user.name}"] = user

        self.channels_by_id: Mapping[str, Channel] = MappingProxyType(channels_by_id)
        self.channels_by_name: Mapping[str, Channel] = MappingProxyType(channels_by_name)
        self.users_by_id: Mapping[str, User] = MappingProxyType(users_by_id)
        self.users_by_name: Mapping[str, User] = MappingProxyType(users_by_name)

    # ─── Lookups ─────────────────────────────────────────────

    def channel_by_id(self, channel_id: str) -> Optional[Channel]:
        return self.channels_by_id.get(channel_id)

    def channel_by_name(self, name: str) -> Optional[Channel]:
        """Look up a channel by its "#name" alias."""
        return self.channels_by_name.get(name)

    def user_by_id(self, user_id: str) -> Optional[User]:
        return self.users_by_id.get(user_id)

    def user_by_name(self, name: str) -> Optional[User]:
        """Look up a user by its "@handle" alias."""
        return self.users_by_name.get(name)

    def user_label(self, user_id: str) -> str:
        """Display name, then handle, then the raw ID."""
        user = self.users_by_id.get(user_id)
        if not user:
            return user_id
        return user.display_name

    def channels(self) -> list[Channel]:
        return list(self.channels_by_id.values())

    def users(self) -> list[User]:
        return list(self.users_by_id.values())

    # ─── Build ───────────────────────────────────────────────

    @classmethod
    async def build(cls, client, max_pages: Optional[int] = None) -> "Directory":
        """Load the workspace label, channels and users from Slack.

        Args:
            client: SlackClient (or anything with the same typed operations)
            max_pages: Optional safety cap per listing. Exceeding it aborts
                the build rather than serving a partial directory.

        Raises:
            StartupFailure: if any call fails or a cap is exceeded
        """
        logger.info("Loading channels and users cache...")
        try:
            identity = await client.auth_identity()
            workspace = identity.get("team") or DEFAULT_WORKSPACE

            channels = []
            for raw in await _collect(
                lambda cursor: client.list_channels(",".join(ALLOWED_CHANNEL_TYPES), cursor=cursor),
                "conversations.list", max_pages,
            ):
                channels.append(Channel.from_api(raw))

            users = []
            for raw in await _collect(
                lambda cursor: client.list_users(cursor=cursor),
                "users.list", max_pages,
            ):
                if raw.get("deleted") or raw.get("is_bot"):
                    continue
                users.append(User.from_api(raw))
        except StartupFailure:
            raise
        except GatewayError as e:
            raise StartupFailure(f"Directory build failed: {e}") from e
        except (KeyError, TypeError) as e:
            raise StartupFailure(f"Directory build failed: malformed record ({e})") from e

        directory = cls(workspace=workspace, channels=channels, users=users)
        logger.info(
            f"Loaded {len(directory.channels_by_id)} channels, "
            f"{len(directory.users_by_id)} users for workspace {workspace}"
        )
        return directory


async def _collect(
    fetch_page: Callable[[Optional[str]], Awaitable],
    label: str,
    max_pages: Optional[int],
) -> list[dict]:
    """Follow next cursors until Slack stops returning one."""
    items: list[dict] = []
    cursor: Optional[str] = None
    pages = 0
    while True:
        if max_pages is not None and pages >= max_pages:
            raise StartupFailure(f"{label} exceeded {max_pages} pages")
        page = await fetch_page(cursor)
        pages += 1
        items.extend(page.items)
        cursor = page.next_cursor
        if not cursor:
            break
    logger.debug(f"{label}: {len(items)} records in {pages} page(s)")
    return items
