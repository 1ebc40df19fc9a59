"""
hostwatch MCP server.

Run locally (stdio, for an MCP client that spawns the process):
    hostwatch-mcp

Run on the server with SSE transport and plain HTTP health endpoints:
    hostwatch-mcp --transport sse --port 8300

Connect from local machine via SSH tunnel:
    ssh -L 8300:localhost:8300 <ssh-alias> -N &
"""

import argparse
import asyncio
from datetime import datetime, timezone

import uvicorn
from mcp.server import Server
from mcp.server.sse import SseServerTransport
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool
from starlette.applications import Starlette
from starlette.responses import JSONResponse
from starlette.routing import Route

from shared.logging import get_safe_logger as get_logger

from . import __version__
from .config import MonitorConfig
from .mcp_handlers import handle_tool, reset_agent
from .mcp_tools import TOOLS


logger = get_logger(__name__)

SERVICE_NAME = "hostwatch-mcp"

# Create MCP server
server = Server(SERVICE_NAME)


@server.list_tools()
async def list_tools() -> list[Tool]:
    """List available tools."""
    return [
        Tool(
            name=tool["name"],
            description=tool["description"],
            inputSchema=tool["inputSchema"],
        )
        for tool in TOOLS
    ]


@server.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls on a worker thread; collectors block."""
    result = await asyncio.to_thread(handle_tool, name, arguments)
    return [TextContent(type="text", text=result.render())]


def create_sse_app(port: int = 8300) -> Starlette:
    """Create Starlette app with SSE transport and HTTP status routes."""
    sse = SseServerTransport("/messages/")

    async def handle_sse(request):
        async with sse.connect_sse(
            request.scope, request.receive, request._send
        ) as streams:
            await server.run(
                streams[0], streams[1],
                server.create_initialization_options()
            )

    async def handle_messages(request):
        await sse.handle_post_message(request.scope, request.receive, request._send)

    async def health(request):
        return JSONResponse({
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": SERVICE_NAME,
        })

    async def info(request):
        return JSONResponse({
            "name": "hostwatch",
            "version": __version__,
            "description": "MCP server for monitoring host resources and Docker containers",
            "port": port,
            "tools": [tool["name"] for tool in TOOLS],
        })

    async def index(request):
        return JSONResponse({
            "message": "hostwatch MCP server is running.",
            "endpoints": {
                "health": "/health",
                "info": "/info",
                "sse": "/sse",
            },
        })

    async def reload(request):
        """Reload configuration by clearing agent cache."""
        reset_agent()
        return JSONResponse({
            "status": "reloaded",
            "message": "Agent cache cleared. Next request will use fresh config.",
        })

    return Starlette(
        routes=[
            Route("/", index),
            Route("/health", health),
            Route("/info", info),
            Route("/reload", reload, methods=["POST"]),
            Route("/sse", handle_sse),
            Route("/messages/", handle_messages, methods=["POST"]),
        ],
    )


async def run_stdio():
    """Run with stdio transport (for local use)."""
    async with stdio_server() as (read_stream, write_stream):
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )


def run_sse(host: str = "127.0.0.1", port: int = 8300):
    """Run with SSE transport (for remote use)."""
    app = create_sse_app(port)

    logger.info(f"Starting MCP SSE server on http://{host}:{port}")
    logger.info(f"  Health: http://{host}:{port}/health")
    logger.info(f"  SSE:    http://{host}:{port}/sse")

    uvicorn.run(app, host=host, port=port, log_level="info")


def main(argv: list[str] | None = None):
    config = MonitorConfig.from_env()

    parser = argparse.ArgumentParser(description="hostwatch MCP Server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "sse"],
        default="stdio",
        help="Transport type (default: stdio)"
    )
    parser.add_argument(
        "--host",
        default=config.mcp_host,
        help=f"Host to bind (default: {config.mcp_host}, use 0.0.0.0 for all interfaces)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=config.mcp_port,
        help=f"Port for SSE transport (default: {config.mcp_port})"
    )

    args = parser.parse_args(argv)

    if args.transport == "sse":
        run_sse(args.host, args.port)
    else:
        asyncio.run(run_stdio())


if __name__ == "__main__":
    main()
