"""MCP protocol handling and transports."""

from .protocol import MCPProtocolHandler, MCPServerInfo

__all__ = ["MCPProtocolHandler", "MCPServerInfo"]
