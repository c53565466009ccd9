"""
Stdio binding: MCP list_tools / call_tool over stdin/stdout.

stdout carries JSON-RPC only; logs go to stderr.
"""
import asyncio
import logging
from typing import Any

import mcp.types as types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from browser_tools import Dispatcher, EmbeddedResource, ImageContent, ToolResult

_log = logging.getLogger(__name__)


def to_mcp_content(block) -> types.TextContent | types.ImageContent | types.EmbeddedResource:
    if isinstance(block, ImageContent):
        return types.ImageContent(type="image", data=block.data, mimeType=block.mime_type)
    if isinstance(block, EmbeddedResource):
        res = block.resource
        return types.EmbeddedResource(
            type="resource",
            resource=types.BlobResourceContents(uri=res.uri, mimeType=res.mime_type, blob=res.blob),
        )
    return types.TextContent(type="text", text=block.text)


def to_call_tool_result(result: ToolResult) -> types.CallToolResult:
    return types.CallToolResult(
        content=[to_mcp_content(b) for b in result.content],
        isError=result.is_error,
    )


def build_server(dispatcher: Dispatcher, name: str, version: str) -> Server:
    server = Server(name, version=version)
    # One call at a time, in arrival order
    call_lock = asyncio.Lock()

    @server.list_tools()
    async def handle_list_tools() -> list[types.Tool]:
        return [
            types.Tool(name=d.name, description=d.description, inputSchema=d.input_schema())
            for d in dispatcher.catalog.list()
        ]

    # Argument errors are reported by the dispatcher, not by SDK schema validation
    @server.call_tool(validate_input=False)
    async def handle_call_tool(name: str, arguments: dict[str, Any] | None) -> types.CallToolResult:
        async with call_lock:
            result = await asyncio.to_thread(dispatcher.execute, name, arguments)
        return to_call_tool_result(result)

    return server


async def serve_stdio(dispatcher: Dispatcher, name: str, version: str) -> None:
    """Serve until stdin closes."""
    server = build_server(dispatcher, name, version)
    async with stdio_server() as (read_stream, write_stream):
        _log.info("%s running on stdio", name)
        await server.run(read_stream, write_stream, server.create_initialization_options())
