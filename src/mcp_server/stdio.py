"""MCP JSON-RPC over stdio.

Registers the core server's tools and resources with the MCP SDK's
low-level server. Stdout carries protocol frames only; logs go to stderr.
"""

from typing import Any

from mcp.server import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server
from mcp.types import Resource, TextContent, Tool

from shared.logging import get_logger
from mcp_server.server import McpServer

logger = get_logger(__name__)


def build_protocol_server(core: McpServer) -> Server:
    """Wire the core server's operations into an MCP protocol server."""
    server = Server(core.name, version=core.version)

    @server.list_tools()
    async def list_tools() -> list[Tool]:
        return [
            Tool(name=t.name, description=t.description, inputSchema=t.input_schema)
            for t in core.list_tools()
        ]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        # Raised McpErrors are reported by the SDK as isError results.
        response = await core.call_tool({"name": name, "arguments": arguments or {}})
        return [TextContent(type="text", text=block.text) for block in response.content]

    @server.list_resources()
    async def list_resources() -> list[Resource]:
        return [
            Resource(uri=r.uri, name=r.name, description=r.description, mimeType=r.mime_type)
            for r in core.list_resources()
        ]

    @server.read_resource()
    async def read_resource(uri) -> list[ReadResourceContents]:
        response = core.read_resource({"uri": str(uri)})
        return [
            ReadResourceContents(content=block.text, mime_type=block.mime_type)
            for block in response.contents
        ]

    return server


async def run_stdio(core: McpServer) -> None:
    """Serve the core server over stdio until the client disconnects."""
    server = build_protocol_server(core)
    logger.info("MCP Server running on stdio", name=core.name)

    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )
    finally:
        await core.shutdown()
