"""WebSocket MCP Server implementation.

Serves the directory tools over MCP JSON-RPC on a WebSocket, with a plain
HTTP health endpoint next to it.
"""

import asyncio
import logging
from typing import Dict, Optional

import aiohttp
from aiohttp import web
from aiohttp.web_log import AccessLogger

from file_tree_mcp.server.jsonrpc import PARSE_ERROR, decode_message, jsonrpc_error
from file_tree_mcp.server.protocol import MCPProtocolHandler

logger = logging.getLogger(__name__)


class _HealthFilterAccessLogger(AccessLogger):
    """Suppress access logs for /health endpoint to reduce noise."""

    def log(self, request, response, req_time):
        if request.path == "/health":
            return
        super().log(request, response, req_time)


class MCPWebSocketServer:
    """
    WebSocket-based MCP Server.

    Features:
    - JSON-RPC 2.0 over WebSocket
    - Health endpoint at /health
    - Graceful shutdown

    Usage:
        server = MCPWebSocketServer(handler, host="127.0.0.1", port=8765)
        await server.start()
        await server.wait_closed()
    """

    def __init__(
        self,
        handler: MCPProtocolHandler,
        host: str = "127.0.0.1",
        port: int = 8765,
    ):
        """
        Initialize the MCP WebSocket server.

        Args:
            handler: Protocol handler shared with other transports
            host: Host to bind to
            port: Port to listen on
        """
        self.handler = handler
        self.host = host
        self.port = port

        self._app: Optional[web.Application] = None
        self._runner: Optional[web.AppRunner] = None
        self._site: Optional[web.TCPSite] = None

        self._clients: Dict[str, web.WebSocketResponse] = {}
        self._shutdown_event = asyncio.Event()

    def create_app(self) -> web.Application:
        """Build the aiohttp application."""
        app = web.Application()
        app.router.add_get("/", self._handle_websocket)
        app.router.add_get("/health", self._handle_health)
        return app

    async def start(self) -> None:
        """Start the WebSocket server."""
        self._app = self.create_app()
        self._runner = web.AppRunner(
            self._app,
            access_log=logging.getLogger("aiohttp.access"),
            access_log_class=_HealthFilterAccessLogger,
        )
        await self._runner.setup()

        self._site = web.TCPSite(self._runner, self.host, self.port)
        await self._site.start()

        logger.info(f"MCP WebSocket server started on ws://{self.host}:{self.port}")

    async def stop(self) -> None:
        """Stop the WebSocket server."""
        logger.info("Stopping MCP WebSocket server...")

        for client_id, ws in list(self._clients.items()):
            try:
                await ws.close(code=aiohttp.WSCloseCode.GOING_AWAY, message=b"Server shutdown")
            except Exception as e:
                logger.error(f"Error closing client {client_id}: {e}")
        self._clients.clear()

        if self._site:
            await self._site.stop()
        if self._runner:
            await self._runner.cleanup()

        self._shutdown_event.set()
        logger.info("MCP WebSocket server stopped")

    async def wait_closed(self) -> None:
        """Wait for the server to close."""
        await self._shutdown_event.wait()

    async def _handle_health(self, request: web.Request) -> web.Response:
        """Handle health check requests."""
        return web.json_response(
            {
                "status": "healthy",
                "server": self.handler.server_info.name,
                "version": self.handler.server_info.version,
                "tools_count": len(self.handler.registry),
                "clients_count": len(self._clients),
            }
        )

    async def _handle_websocket(self, request: web.Request) -> web.WebSocketResponse:
        """Handle incoming WebSocket connections."""
        ws = web.WebSocketResponse(heartbeat=300.0)
        await ws.prepare(request)

        client_id = f"client-{id(ws)}"
        self._clients[client_id] = ws
        logger.info(f"[MCP] Client CONNECTED - id={client_id} remote={request.remote or 'unknown'}")

        message_count = 0
        try:
            async for msg in ws:
                if msg.type == aiohttp.WSMsgType.TEXT:
                    message_count += 1
                    try:
                        data = decode_message(msg.data)
                    except (ValueError, RecursionError) as e:
                        logger.warning(f"[MCP] Invalid JSON from client {client_id}: {e}")
                        await ws.send_json(jsonrpc_error(None, PARSE_ERROR, f"Parse error: {e}"))
                        continue

                    response = await self.handler.handle_message(data)
                    if response is None:
                        continue
                    if ws.closed:
                        logger.debug(f"[MCP] WS closed before response for {client_id}")
                        break
                    try:
                        await ws.send_json(response)
                    except (ConnectionResetError, RuntimeError) as send_err:
                        logger.debug(f"[MCP] Cannot send response to {client_id}: {send_err}")
                        break
                elif msg.type == aiohttp.WSMsgType.ERROR:
                    logger.error(f"[MCP] WebSocket error for {client_id}: {ws.exception()}")
                    break

        except asyncio.CancelledError:
            logger.debug(f"[MCP] Client handler cancelled: {client_id}")
            raise
        finally:
            self._clients.pop(client_id, None)
            logger.info(
                f"[MCP] Client DISCONNECTED - id={client_id} messages_processed={message_count}"
            )

        return ws
