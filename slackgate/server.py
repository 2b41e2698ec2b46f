"""MCP server binding — exposes the gateway over stdio."""

import logging

from mcp import types
from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server

from . import __version__
from .gateway import Gateway

logger = logging.getLogger("slackgate.server")

SERVER_NAME = "slackgate"


class ToolCallFailed(Exception):
    """Carries a failed ToolResult to the MCP layer, which reports it as isError."""


def create_server(gateway: Gateway) -> Server:
    """Wire tool and resource handlers onto a low-level MCP server."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [
            types.Tool(name=tool.name, description=tool.description, inputSchema=tool.parameters)
            for tool in gateway.registry.list_tools()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict) -> list[types.TextContent]:
        result = await gateway.call_tool(name, arguments)
        if not result.ok:
            raise ToolCallFailed(result.text)
        return [types.TextContent(type="text", text=result.text)]

    @server.list_resources()
    async def list_resources() -> list[types.Resource]:
        return [
            types.Resource(
                uri=resource.uri,
                name=resource.name,
                description=resource.description,
                mimeType=resource.mime_type,
            )
            for resource in gateway.list_resources()
        ]

    @server.read_resource()
    async def read_resource(uri) -> list[ReadResourceContents]:
        text = gateway.read_resource(str(uri))
        return [ReadResourceContents(content=text, mime_type="text/csv")]

    return server


async def serve(gateway: Gateway) -> None:
    """Run the MCP server on stdin/stdout until the client disconnects."""
    server = create_server(gateway)
    async with stdio_server() as (read_stream, write_stream):
        logger.info(f"Server started for workspace: {gateway.workspace}")
        await server.run(read_stream, write_stream, server.create_initialization_options())
