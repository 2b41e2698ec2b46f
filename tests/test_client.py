"""Tests for the Slack HTTP client."""

from urllib.parse import parse_qs

import httpx
import pytest

from slackgate.errors import RemoteServiceError
from slackgate.slack.client import SlackClient


def _client(handler, **kwargs):
    return SlackClient(token="xoxp-test", transport=httpx.MockTransport(handler), **kwargs)


def _form(request: httpx.Request) -> dict:
    return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}


class TestCall:

    @pytest.mark.asyncio
    async def test_posts_form_to_method_url(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers.get("Authorization")
            seen["cookie"] = request.headers.get("Cookie")
            seen["form"] = _form(request)
            return httpx.Response(200, json={"ok": True, "team": "Acme"})

        async with _client(handler) as client:
            data = await client.call("auth.test", limit=5, cursor=None, mrkdwn=True)

        assert data["team"] == "Acme"
        assert seen["url"] == "https://slack.com/api/auth.test"
        assert seen["auth"] == "Bearer xoxp-test"
        assert seen["cookie"] is None
        assert seen["form"] == {"limit": "5", "mrkdwn": "true"}

    @pytest.mark.asyncio
    async def test_browser_cookie_header(self):
        seen = {}

        def handler(request):
            seen["cookie"] = request.headers.get("Cookie")
            return httpx.Response(200, json={"ok": True})

        async with _client(handler, cookie="d=xoxd-abc") as client:
            await client.call("auth.test")
        assert seen["cookie"] == "d=xoxd-abc"

    @pytest.mark.asyncio
    async def test_not_ok_raises_with_code(self):
        def handler(request):
            return httpx.Response(200, json={"ok": False, "error": "channel_not_found"})

        async with _client(handler) as client:
            with pytest.raises(RemoteServiceError) as exc:
                await client.call("conversations.history", channel="C1")
        assert exc.value.code == "channel_not_found"

    @pytest.mark.asyncio
    async def test_rate_limited(self):
        def handler(request):
            return httpx.Response(429, headers={"Retry-After": "30"})

        async with _client(handler) as client:
            with pytest.raises(RemoteServiceError) as exc:
                await client.call("search.messages", query="x")
        assert exc.value.code == "ratelimited"
        assert "30" in str(exc.value)

    @pytest.mark.asyncio
    async def test_http_status_error(self):
        def handler(request):
            return httpx.Response(503, text="unavailable")

        async with _client(handler) as client:
            with pytest.raises(RemoteServiceError) as exc:
                await client.call("auth.test")
        assert exc.value.code == "http_503"

    @pytest.mark.asyncio
    async def test_invalid_json(self):
        def handler(request):
            return httpx.Response(200, text="<html>")

        async with _client(handler) as client:
            with pytest.raises(RemoteServiceError) as exc:
                await client.call("auth.test")
        assert exc.value.code == "invalid_response"

    @pytest.mark.asyncio
    async def test_transport_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        async with _client(handler) as client:
            with pytest.raises(RemoteServiceError) as exc:
                await client.call("auth.test")
        assert exc.value.code == "transport"


class TestTypedOperations:

    @pytest.mark.asyncio
    async def test_list_channels_page(self):
        def handler(request):
            form = _form(request)
            assert form["types"] == "public_channel,private_channel"
            assert form["cursor"] == "abc"
            return httpx.Response(200, json={
                "ok": True,
                "channels": [{"id": "C1", "name": "general"}],
                "response_metadata": {"next_cursor": "def"},
            })

        async with _client(handler) as client:
            page = await client.list_channels("public_channel,private_channel", cursor="abc")
        assert [c["id"] for c in page.items] == ["C1"]
        assert page.next_cursor == "def"

    @pytest.mark.asyncio
    async def test_empty_cursor_means_last_page(self):
        def handler(request):
            return httpx.Response(200, json={
                "ok": True,
                "members": [],
                "response_metadata": {"next_cursor": ""},
            })

        async with _client(handler) as client:
            page = await client.list_users()
        assert page.next_cursor is None

    @pytest.mark.asyncio
    async def test_history_has_more(self):
        def handler(request):
            return httpx.Response(200, json={
                "ok": True,
                "messages": [{"ts": "1.0", "text": "hi"}],
                "has_more": True,
                "response_metadata": {"next_cursor": "next"},
            })

        async with _client(handler) as client:
            page = await client.get_history("C1", limit=10)
        assert page.has_more is True
        assert page.next_cursor == "next"

    @pytest.mark.asyncio
    async def test_replies_sends_thread_ts(self):
        def handler(request):
            form = _form(request)
            assert form["ts"] == "1700.1"
            assert form["channel"] == "C1"
            return httpx.Response(200, json={"ok": True, "messages": []})

        async with _client(handler) as client:
            page = await client.get_replies("C1", "1700.1")
        assert page.items == []
        assert page.has_more is False

    @pytest.mark.asyncio
    async def test_search_matches(self):
        def handler(request):
            assert _form(request)["count"] == "5"
            return httpx.Response(200, json={
                "ok": True,
                "messages": {"matches": [{"ts": "1.0"}]},
            })

        async with _client(handler) as client:
            matches = await client.search("deploy", count=5)
        assert matches == [{"ts": "1.0"}]

    @pytest.mark.asyncio
    async def test_post_message(self):
        def handler(request):
            form = _form(request)
            assert form["mrkdwn"] == "true"
            assert "thread_ts" not in form
            return httpx.Response(200, json={"ok": True, "ts": "1.5", "channel": "C1"})

        async with _client(handler) as client:
            result = await client.post_message("C1", "hello")
        assert result == {"ts": "1.5", "channel": "C1"}
