"""Slack Web API client — authenticated method calls over httpx."""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import httpx

from ..errors import RemoteServiceError

logger = logging.getLogger("slackgate.slack.client")

DEFAULT_BASE_URL = "https://slack.com/api"


@dataclass
class SlackPage:
    """One page of a cursor-paginated Slack response."""
    items: list[dict] = field(default_factory=list)
    next_cursor: Optional[str] = None
    has_more: bool = False


def _next_cursor(data: dict) -> Optional[str]:
    # Slack signals the last page with an empty string
    cursor = (data.get("response_metadata") or {}).get("next_cursor")
    return cursor or None


def _encode_params(params: dict[str, Any]) -> dict[str, str]:
    encoded = {}
    for key, value in params.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        encoded[key] = str(value)
    return encoded


class SlackClient:
    """Minimal Slack Web API wrapper.

    Every call is a form-encoded POST to ``<base_url>/<method>``. Failures of
    any sort (HTTP status, transport, non-JSON body, ``ok: false``) surface as
    RemoteServiceError carrying the upstream error code.
    """

    def __init__(
        self,
        token: str,
        cookie: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        headers = {"Authorization": f"Bearer {token}"}
        if cookie:
            headers["Cookie"] = cookie
        self._http = httpx.AsyncClient(
            base_url=base_url.rstrip("/") + "/",
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "SlackClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    async def call(self, method: str, **params: Any) -> dict:
        """Call a Slack API method and return the decoded response body.

        Raises:
            RemoteServiceError: on any non-success outcome
        """
        try:
            response = await self._http.post(method, data=_encode_params(params))
        except httpx.TimeoutException as e:
            raise RemoteServiceError("timeout", f"{method} timed out") from e
        except httpx.TransportError as e:
            raise RemoteServiceError("transport", f"{method}: {type(e).__name__}") from e

        if response.status_code == 429:
            retry_after = response.headers.get("Retry-After")
            detail = f"retry after {retry_after}s" if retry_after else None
            raise RemoteServiceError("ratelimited", detail)
        if response.status_code != 200:
            raise RemoteServiceError(f"http_{response.status_code}", method)

        try:
            data = response.json()
        except ValueError as e:
            raise RemoteServiceError("invalid_response", method) from e

        if not isinstance(data, dict):
            raise RemoteServiceError("invalid_response", method)
        if not data.get("ok"):
            raise RemoteServiceError(data.get("error") or "unknown_error")

        logger.debug(f"{method} ok")
        return data

    # ─── Typed operations ────────────────────────────────────

    async def auth_identity(self) -> dict:
        """auth.test — who the token belongs to and which workspace."""
        return await self.call("auth.test")

    async def list_channels(
        self, types: str, cursor: Optional[str] = None, limit: int = 1000,
    ) -> SlackPage:
        data = await self.call("conversations.list", types=types, limit=limit, cursor=cursor)
        return SlackPage(
            items=data.get("channels") or [],
            next_cursor=_next_cursor(data),
        )

    async def list_users(self, cursor: Optional[str] = None, limit: int = 1000) -> SlackPage:
        data = await self.call("users.list", limit=limit, cursor=cursor)
        return SlackPage(
            items=data.get("members") or [],
            next_cursor=_next_cursor(data),
        )

    async def get_history(
        self, channel: str, cursor: Optional[str] = None, limit: int = 50,
    ) -> SlackPage:
        data = await self.call("conversations.history", channel=channel, limit=limit, cursor=cursor)
        return SlackPage(
            items=data.get("messages") or [],
            next_cursor=_next_cursor(data),
            has_more=bool(data.get("has_more")),
        )

    async def get_replies(
        self, channel: str, thread_ts: str, cursor: Optional[str] = None, limit: int = 50,
    ) -> SlackPage:
        data = await self.call(
            "conversations.replies", channel=channel, ts=thread_ts, limit=limit, cursor=cursor,
        )
        return SlackPage(
            items=data.get("messages") or [],
            next_cursor=_next_cursor(data),
            has_more=bool(data.get("has_more")),
        )

    async def search(self, query: str, count: int = 20) -> list[dict]:
        data = await self.call("search.messages", query=query, count=count)
        return (data.get("messages") or {}).get("matches") or []

    async def post_message(self, channel: str, text: str, thread_ts: Optional[str] = None) -> dict:
        data = await self.call(
            "chat.postMessage", channel=channel, text=text, thread_ts=thread_ts, mrkdwn=True,
        )
        return {"ts": data.get("ts"), "channel": data.get("channel")}
