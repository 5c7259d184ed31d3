"""Main entry point for the file tree MCP server."""

import argparse
import asyncio
import logging
import signal
import sys
from typing import List, Optional

from file_tree_mcp.config import get_settings
from file_tree_mcp.server.protocol import MCPProtocolHandler, MCPServerInfo
from file_tree_mcp.server.stdio_server import MCPStdioServer
from file_tree_mcp.server.websocket_server import MCPWebSocketServer
from file_tree_mcp.tools.registry import get_tool_registry

logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    """Send all logging to stderr; stdout belongs to the stdio transport."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def setup_signal_handlers(server: MCPWebSocketServer, loop: asyncio.AbstractEventLoop) -> None:
    """Setup signal handlers for graceful shutdown."""

    def signal_handler(sig):
        logger.info(f"Received signal {sig}, shutting down...")
        loop.create_task(server.stop())

    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, lambda s=sig: signal_handler(s))
        except NotImplementedError:
            # Windows doesn't support add_signal_handler
            signal.signal(sig, lambda s, f: signal_handler(s))


async def run_server(
    transport: str = "stdio",
    host: str = "127.0.0.1",
    port: int = 8765,
    server_name: str = "mcp-file-tree",
) -> None:
    """
    Run the MCP server on the chosen transport.

    Args:
        transport: "stdio" or "websocket"
        host: Host to bind to (websocket only)
        port: Port to listen on (websocket only)
        server_name: Name reported in initialize and /health
    """
    registry = get_tool_registry()
    handler = MCPProtocolHandler(registry, MCPServerInfo(name=server_name))

    if transport == "stdio":
        await MCPStdioServer(handler).serve()
        return

    server = MCPWebSocketServer(handler, host=host, port=port)
    setup_signal_handlers(server, asyncio.get_running_loop())
    await server.start()
    logger.info(f"Server running on ws://{host}:{port}")
    logger.info("Press Ctrl+C to stop")
    await server.wait_closed()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    settings = get_settings()

    parser = argparse.ArgumentParser(description="File tree MCP server")
    parser.add_argument(
        "--transport",
        choices=["stdio", "websocket"],
        default=settings.transport,
        help=f"Transport to serve on (default: {settings.transport})",
    )
    parser.add_argument(
        "--host",
        default=settings.host,
        help=f"Host to bind to for websocket (default: {settings.host})",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.port,
        help=f"Port to listen on for websocket (default: {settings.port})",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    configure_logging("DEBUG" if args.debug else settings.log_level)

    try:
        asyncio.run(
            run_server(
                transport=args.transport,
                host=args.host,
                port=args.port,
                server_name=settings.server_name,
            )
        )
        return 0
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 0
    except Exception as e:
        logger.error(f"Fatal error running server: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
