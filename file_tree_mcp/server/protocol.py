"""MCP JSON-RPC method handling shared by all transports."""

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from file_tree_mcp import __version__
from file_tree_mcp.server.jsonrpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
    jsonrpc_error,
    jsonrpc_response,
)
from file_tree_mcp.tools.executor import ToolExecutor
from file_tree_mcp.tools.registry import ToolRegistry, get_tool_registry

logger = logging.getLogger(__name__)


@dataclass
class MCPServerInfo:
    """MCP server information."""

    name: str = "mcp-file-tree"
    version: str = __version__
    protocol_version: str = "2024-11-05"


class MethodNotFoundError(Exception):
    """Raised for JSON-RPC methods the server does not implement."""


class InvalidParamsError(Exception):
    """Raised when JSON-RPC params have the wrong shape."""


class MCPProtocolHandler:
    """
    Dispatches MCP JSON-RPC messages.

    Transports hand over decoded messages and send back whatever
    ``handle_message`` returns. Tool failures are reported inside the
    ``tools/call`` result, not as JSON-RPC errors.
    """

    def __init__(
        self,
        registry: Optional[ToolRegistry] = None,
        server_info: Optional[MCPServerInfo] = None,
    ):
        self.registry = registry or get_tool_registry()
        self.executor = ToolExecutor(self.registry)
        self.server_info = server_info or MCPServerInfo()

    async def handle_message(self, data: Any) -> Optional[dict]:
        """
        Handle one incoming JSON-RPC message.

        Args:
            data: Parsed JSON-RPC message

        Returns:
            Response dict, or None for notifications
        """
        if not isinstance(data, dict) or not isinstance(data.get("method"), str):
            request_id = data.get("id") if isinstance(data, dict) else None
            return jsonrpc_error(request_id, INVALID_REQUEST, "Invalid request")

        method = data["method"]
        params = data.get("params") or {}
        request_id = data.get("id")

        # Notification (no id) - no response expected
        if request_id is None:
            await self._handle_notification(method, params)
            return None

        try:
            result = await self._dispatch_method(method, params)
            return jsonrpc_response(request_id, result)
        except MethodNotFoundError as e:
            logger.warning(f"[MCP] {e}")
            return jsonrpc_error(request_id, METHOD_NOT_FOUND, str(e))
        except InvalidParamsError as e:
            logger.warning(f"[MCP] {method} - {e}")
            return jsonrpc_error(request_id, INVALID_PARAMS, str(e))
        except Exception as e:
            logger.error(f"Error handling method {method}: {e}", exc_info=True)
            return jsonrpc_error(request_id, INTERNAL_ERROR, str(e))

    async def _handle_notification(self, method: str, params: Any) -> None:
        """Handle JSON-RPC notifications."""
        if method == "notifications/initialized":
            logger.info("Client initialized")
        else:
            logger.debug(f"Received notification: {method}")

    async def _dispatch_method(self, method: str, params: Any) -> Any:
        """Dispatch method call to appropriate handler."""
        if not isinstance(params, dict):
            raise InvalidParamsError("params must be an object")

        if method == "initialize":
            return self._handle_initialize(params)
        elif method == "tools/list":
            return self._handle_list_tools()
        elif method == "tools/call":
            return await self._handle_call_tool(params)
        elif method == "ping":
            return {}
        else:
            raise MethodNotFoundError(f"Method not found: {method}")

    def _handle_initialize(self, params: Dict[str, Any]) -> dict:
        """Handle MCP initialize request."""
        client_info = params.get("clientInfo") or {}
        logger.info(
            f"[MCP] initialize - client={client_info.get('name', 'unknown')} "
            f"version={client_info.get('version', 'unknown')} "
            f"protocol={params.get('protocolVersion', 'unknown')}"
        )
        return {
            "protocolVersion": self.server_info.protocol_version,
            "capabilities": {
                "tools": {"listChanged": False},
            },
            "serverInfo": {
                "name": self.server_info.name,
                "version": self.server_info.version,
            },
        }

    def _handle_list_tools(self) -> dict:
        """Handle tools/list request."""
        tools = self.registry.list_tools()
        logger.info(f"[MCP] tools/list - Returning {len(tools)} tools: {self.registry.list_names()}")
        return {"tools": tools}

    async def _handle_call_tool(self, params: Dict[str, Any]) -> dict:
        """Handle tools/call request."""
        if "name" not in params:
            raise InvalidParamsError("tools/call requires 'name'")
        result = await self.executor.call_tool(params["name"], params.get("arguments"))
        return result.to_dict()
