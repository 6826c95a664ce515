"""
pvemcp MCP Server

Exposes the tool registry over the Model Context Protocol.

    stdio:  MCP client ⇄ stdin/stdout ⇄ Server ⇄ ToolRegistry
    http:   MCP client ⇄ uvicorn/FastAPI (/mcp) ⇄ session manager ⇄ Server

Only tools admitted by the registry are listed or callable. Error results
from the registry are raised as ToolExecutionError so the MCP layer marks
the response with isError; the text is already sanitized.

Usage:
    server = build_server(registry)
    await run_stdio(server)
    # or
    uvicorn.run(create_http_app(server), host=..., port=...)
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager

from pvemcp import __version__
from pvemcp.exceptions import ToolExecutionError
from pvemcp.logging import get_logger
from pvemcp.tools.registry import ToolRegistry

logger = get_logger("pvemcp.server")

SERVER_NAME = "mcp-pve"
MAX_BODY_BYTES = 4 * 1024 * 1024
MCP_PATH = "/mcp"


# ─── MCP handlers ────────────────────────────────────────────

def list_tool_schemas(registry: ToolRegistry) -> list[types.Tool]:
    """MCP tool descriptors for every admitted tool."""
    tools = []
    for tool in registry.get_all():
        definition = tool.definition
        tools.append(
            types.Tool(
                name=definition.name,
                description=definition.description,
                inputSchema=definition.input_schema,
                annotations=types.ToolAnnotations(
                    readOnlyHint=definition.read_only_hint,
                    destructiveHint=definition.destructive_hint,
                ),
            )
        )
    return tools


async def call_registry_tool(
    registry: ToolRegistry, name: str, arguments: dict[str, Any] | None
) -> list[types.TextContent]:
    """Run one tool call through the registry.

    Raises ToolExecutionError when the registry returns an error result.
    """
    result = await registry.execute(name, arguments)
    if result.is_error:
        raise ToolExecutionError(name, result.content)
    return [types.TextContent(type="text", text=result.content)]


def build_server(registry: ToolRegistry) -> Server:
    """Create the MCP server bound to an already filled registry."""
    server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return list_tool_schemas(registry)

    # Arguments are validated by each tool's input model in the registry.
    @server.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        return await call_registry_tool(registry, name, arguments)

    return server


# ─── stdio transport ─────────────────────────────────────────

async def run_stdio(server: Server) -> None:
    logger.info("%s v%s listening on stdio", SERVER_NAME, __version__)
    async with stdio_server() as (read_stream, write_stream):
        await server.run(read_stream, write_stream, server.create_initialization_options())


# ─── HTTP transport ──────────────────────────────────────────

class McpEndpoint:
    """ASGI endpoint for /mcp.

    Reads the whole request body first so oversized requests are refused
    with 413 before the session manager sees them, then replays the body.
    """

    def __init__(self, session_manager: StreamableHTTPSessionManager, max_body: int = MAX_BODY_BYTES):
        self.session_manager = session_manager
        self.max_body = max_body

    async def __call__(self, scope, receive, send) -> None:
        declared = _content_length(scope)
        if declared is not None and declared > self.max_body:
            await _too_large(scope, receive, send, self.max_body)
            return

        chunks: list[bytes] = []
        size = 0
        while True:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            chunk = message.get("body", b"")
            size += len(chunk)
            if size > self.max_body:
                await _too_large(scope, receive, send, self.max_body)
                return
            chunks.append(chunk)
            if not message.get("more_body", False):
                break

        body = b"".join(chunks)
        replayed = False

        async def replay():
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": body, "more_body": False}
            return await receive()

        await self.session_manager.handle_request(scope, replay, send)


def _content_length(scope) -> int | None:
    for key, value in scope.get("headers", []):
        if key == b"content-length":
            try:
                return int(value)
            except ValueError:
                return None
    return None


async def _too_large(scope, receive, send, limit: int) -> None:
    logger.warning("Rejected %s request larger than %d bytes", MCP_PATH, limit)
    response = JSONResponse({"error": "Request body too large"}, status_code=413)
    await response(scope, receive, send)


def create_http_app(server: Server, max_body: int = MAX_BODY_BYTES) -> FastAPI:
    """FastAPI app with /health and the streamable-HTTP MCP endpoint."""
    session_manager = StreamableHTTPSessionManager(app=server)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with session_manager.run():
            yield

    app = FastAPI(
        title="mcp-pve",
        description="Proxmox VE tools over the Model Context Protocol",
        version=__version__,
        lifespan=lifespan,
    )

    @app.get("/health")
    async def health() -> dict:
        return {"status": "ok", "server": SERVER_NAME, "version": __version__}

    app.router.add_route(
        MCP_PATH,
        McpEndpoint(session_manager, max_body),
        methods=["GET", "POST", "DELETE"],
        include_in_schema=False,
    )
    return app


async def run_http(server: Server, host: str, port: int) -> None:
    app = create_http_app(server)
    logger.info("%s v%s listening on http://%s:%d%s", SERVER_NAME, __version__, host, port, MCP_PATH)
    config = uvicorn.Config(app, host=host, port=port, log_level="warning")
    await uvicorn.Server(config).serve()
