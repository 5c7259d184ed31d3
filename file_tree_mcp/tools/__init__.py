"""MCP tools for directory inspection."""

from .base import MCPTool, ToolResult
from .executor import ToolArgumentsError, ToolExecutor
from .registry import ToolRegistry, get_tool_registry

__all__ = [
    "MCPTool",
    "ToolResult",
    "ToolArgumentsError",
    "ToolExecutor",
    "ToolRegistry",
    "get_tool_registry",
]
