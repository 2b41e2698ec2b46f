"""Core security — direct messages are never reachable.

Every code path that can reach a channel goes through SecurityPolicy. There
is no configuration that relaxes these rules:

- "@handle" targets are direct messages, rejected before any lookup
- IDs with the direct-message prefix ("D...") are rejected before any lookup
- channels flagged is_im / is_mpim in the directory are rejected
- search matches from blocked conversations are dropped

Rejection messages are fixed per category and never echo the metadata that
matched.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from .directory import ALLOWED_CHANNEL_TYPES, Channel, Directory
from .errors import NotFoundError, PostingDisabled, SecurityRejection, ValidationError

logger = logging.getLogger("slackgate.security")

DM_ALIAS_PREFIX = "@"
DM_ID_PREFIX = "D"
CHANNEL_ALIAS_PREFIX = "#"

DM_REJECTION = "Direct messages are not accessible for security reasons"
GROUP_DM_REJECTION = "Group direct messages are not accessible for security reasons"


class Classification(str, Enum):
    CHANNEL = "channel"
    DIRECT_MESSAGE = "direct_message"
    GROUP_DIRECT_MESSAGE = "group_direct_message"

    @property
    def blocked(self) -> bool:
        return self is not Classification.CHANNEL


_REJECTIONS = {
    Classification.DIRECT_MESSAGE: DM_REJECTION,
    Classification.GROUP_DIRECT_MESSAGE: GROUP_DM_REJECTION,
}


# ============================================================
# POSTING
# ============================================================
# Disabled unless explicitly enabled. An allow-list replaces the
# global flag: when one is configured, only its channels accept posts.

@dataclass(frozen=True)
class PostingPolicy:
    enabled_everywhere: bool = False
    allowed_channels: Optional[frozenset] = None

    @property
    def enabled(self) -> bool:
        if self.allowed_channels is not None:
            return bool(self.allowed_channels)
        return self.enabled_everywhere

    def permits(self, channel_id: str) -> bool:
        if self.allowed_channels is not None:
            return channel_id in self.allowed_channels
        return self.enabled_everywhere


class SecurityPolicy:
    """Single authority for "may this conversation be touched?"."""

    def __init__(
        self,
        directory: Directory,
        posting: Optional[PostingPolicy] = None,
        strict_channel_ids: bool = False,
    ):
        self.directory = directory
        self.posting = posting or PostingPolicy()
        self.strict_channel_ids = strict_channel_ids

    # ─── Classification ──────────────────────────────────────

    def classify(self, identifier: str, channel: Optional[Channel] = None) -> Classification:
        """Classify an identifier, using the cached channel when available.

        Args:
            identifier: raw ID, "#name" or "@handle"
            channel: matching cached channel, looked up by ID if omitted
        """
        if identifier.startswith(DM_ALIAS_PREFIX) or identifier.startswith(DM_ID_PREFIX):
            return Classification.DIRECT_MESSAGE

        if channel is None:
            channel = self.directory.channel_by_id(identifier)
        if channel is not None:
            if channel.is_im:
                return Classification.DIRECT_MESSAGE
            if channel.is_mpim:
                return Classification.GROUP_DIRECT_MESSAGE
        return Classification.CHANNEL

    def resolve_target(self, target: str) -> str:
        """Resolve a tool's channel argument to a channel ID.

        Returns:
            Channel ID. Raw IDs missing from the directory pass through
            unchanged unless strict_channel_ids is set.

        Raises:
            ValidationError: empty target
            SecurityRejection: direct message or group direct message
            NotFoundError: unknown "#name" (or unknown raw ID in strict mode)
        """
        target = (target or "").strip()
        if not target:
            raise ValidationError("channel_id is required")

        # Syntactic checks first — these forms may not be in the directory at all
        if target.startswith(DM_ALIAS_PREFIX) or target.startswith(DM_ID_PREFIX):
            self._reject(Classification.DIRECT_MESSAGE)

        if target.startswith(CHANNEL_ALIAS_PREFIX):
            channel = self.directory.channel_by_name(target)
            if channel is None:
                raise NotFoundError(f"Channel {target} not found")
            classification = self.classify(channel.id, channel)
            if classification.blocked:
                self._reject(classification)
            return channel.id

        channel = self.directory.channel_by_id(target)
        if channel is None:
            if self.strict_channel_ids:
                raise NotFoundError(f"Channel {target} not found")
            logger.debug(f"Channel {target} not in directory, passing through")
            return target

        classification = self.classify(target, channel)
        if classification.blocked:
            self._reject(classification)
        return target

    def is_blocked(self, channel_id: str, channel_name: Optional[str] = None) -> bool:
        """Non-raising check for filtering bulk results."""
        if channel_name and channel_name.startswith(DM_ALIAS_PREFIX):
            return True
        if channel_id.startswith(DM_ID_PREFIX):
            return True
        if self.classify(channel_id).blocked:
            return True
        if channel_name:
            alias = channel_name if channel_name.startswith(CHANNEL_ALIAS_PREFIX) else f"#{channel_name}"
            named = self.directory.channel_by_name(alias)
            if named is not None and named.is_direct:
                return True
        return False

    def is_blocked_record(self, raw: Optional[dict]) -> bool:
        """Check a channel object embedded in a Slack response (e.g. a search match).

        Records without an ID cannot be vetted and count as blocked.
        """
        if not raw or not raw.get("id"):
            return True
        if raw.get("is_im") or raw.get("is_mpim"):
            return True
        return self.is_blocked(raw["id"], raw.get("name"))

    def visible_channels(self, types: Iterable[str] = ALLOWED_CHANNEL_TYPES) -> list[Channel]:
        """Directory channels of the requested types, DMs never included."""
        wanted = set(types) & set(ALLOWED_CHANNEL_TYPES)
        visible = []
        for channel in self.directory.channels():
            if channel.is_direct or self.is_blocked(channel.id):
                continue
            kind = "private_channel" if channel.is_private else "public_channel"
            if kind in wanted:
                visible.append(channel)
        return visible

    # ─── Posting ─────────────────────────────────────────────

    def check_post_allowed(self, channel_id: str) -> None:
        """Raise PostingDisabled unless posting to channel_id is enabled."""
        if not self.posting.permits(channel_id):
            logger.warning(f"Posting blocked for channel {channel_id}")
            raise PostingDisabled(f"Posting to channel {channel_id} is not allowed.")

    def _reject(self, classification: Classification) -> None:
        logger.warning(f"Security rejection: {classification.value}")
        raise SecurityRejection(_REJECTIONS[classification])
