"""Tests for the MCP binding."""

import pytest
from mcp import types

from slackgate.server import create_server


async def _call(server, name, arguments):
    handler = server.request_handlers[types.CallToolRequest]
    request = types.CallToolRequest(
        method="tools/call",
        params=types.CallToolRequestParams(name=name, arguments=arguments),
    )
    return (await handler(request)).root


class TestServer:

    @pytest.mark.asyncio
    async def test_lists_tools(self, gateway):
        server = create_server(gateway)
        handler = server.request_handlers[types.ListToolsRequest]
        result = (await handler(types.ListToolsRequest(method="tools/list"))).root
        assert [t.name for t in result.tools] == [t.name for t in gateway.registry.list_tools()]

    @pytest.mark.asyncio
    async def test_successful_call(self, gateway):
        result = await _call(create_server(gateway), "channels_list", {"types": "public_channel"})
        assert result.isError is False
        assert result.content[0].text.startswith("id,name,topic,purpose,members")

    @pytest.mark.asyncio
    async def test_rejected_call_is_error_result(self, gateway):
        result = await _call(create_server(gateway), "conversations_history", {"channel_id": "@alice"})
        assert result.isError is True
        assert "Direct messages are not accessible" in result.content[0].text

    @pytest.mark.asyncio
    async def test_lists_resources(self, gateway):
        server = create_server(gateway)
        handler = server.request_handlers[types.ListResourcesRequest]
        result = (await handler(types.ListResourcesRequest(method="resources/list"))).root
        uris = [str(r.uri) for r in result.resources]
        assert uris[0].startswith("slack://") and uris[0].endswith("/channels")
        assert uris[1].endswith("/users")
