"""Tests for gateway assembly and directory resources."""

import pytest

from slackgate.config import GatewaySettings
from slackgate.errors import NotFoundError, StartupFailure
from slackgate.gateway import Gateway
from slackgate.slack.client import SlackPage


def _settings(**kwargs):
    return GatewaySettings(_env_file=None, xoxp_token="xoxp-test", **kwargs)


class TestStart:

    @pytest.mark.asyncio
    async def test_builds_directory_before_serving(self, client_factory):
        client = client_factory(
            team="Initech",
            channel_pages=[SlackPage(items=[{"id": "C1", "name": "general"}])],
            user_pages=[SlackPage(items=[{"id": "U1", "name": "peter"}])],
        )
        gateway = await Gateway.start(client, _settings(add_message_tool="C1"))

        assert gateway.workspace == "Initech"
        assert gateway.policy.resolve_target("#general") == "C1"
        assert gateway.policy.posting.permits("C1")
        assert [c[0] for c in client.calls] == ["auth.test", "conversations.list", "users.list"]

    @pytest.mark.asyncio
    async def test_strict_mode_from_settings(self, client_factory):
        gateway = await Gateway.start(client_factory(), _settings(strict_channel_ids=True))
        result = await gateway.call_tool("conversations_history", {"channel_id": "C404"})
        assert result.kind.value == "not_found"

    @pytest.mark.asyncio
    async def test_page_cap_from_settings(self, client_factory):
        client = client_factory(channel_pages=[
            SlackPage(items=[{"id": "C1", "name": "a"}], next_cursor="A"),
            SlackPage(items=[{"id": "C2", "name": "b"}]),
        ])
        with pytest.raises(StartupFailure):
            await Gateway.start(client, _settings(max_directory_pages=1))


class TestResources:

    def test_catalog(self, gateway):
        uris = [r.uri for r in gateway.list_resources()]
        assert uris == ["slack://Acme/channels", "slack://Acme/users"]
        assert all(r.mime_type == "text/csv" for r in gateway.list_resources())

    def test_workspace_is_url_quoted(self, fake_client):
        from slackgate.directory import Directory

        gateway = Gateway(fake_client, Directory(workspace="Acme Corp"))
        assert gateway.list_resources()[0].uri == "slack://Acme%20Corp/channels"

    def test_read_channels(self, gateway):
        lines = gateway.read_resource("slack://Acme/channels").splitlines()
        assert lines[0] == "id,name,topic,purpose,members"
        assert [line.split(",")[0] for line in lines[1:]] == ["C1", "C2", "C100"]

    def test_read_users(self, gateway):
        lines = gateway.read_resource("slack://Acme/users").splitlines()
        assert lines == ["id,name,real_name", 'U1,alice,"Alice Liddell"', 'U2,bob,"bob"']

    def test_unknown_resource(self, gateway):
        with pytest.raises(NotFoundError):
            gateway.read_resource("slack://Acme/messages")
        with pytest.raises(NotFoundError):
            gateway.read_resource("http://Acme/channels")
