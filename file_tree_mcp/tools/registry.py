"""Tool registry for MCP server.

Holds the fixed, ordered set of tools exposed by the server.
"""

import logging
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Optional, Tuple

from file_tree_mcp.tools.base import MCPTool
from file_tree_mcp.tools.directory_tools import (
    create_directory_tree_tool,
    create_list_directory_tool,
)

logger = logging.getLogger(__name__)


class ToolRegistry:
    """
    Read-only registry of MCP tools.

    Tools keep the order they were given in, which is the order
    ``tools/list`` reports them.
    """

    def __init__(self, tools: Iterable[MCPTool]):
        """
        Initialize the tool registry.

        Args:
            tools: Tools in declaration order

        Raises:
            ValueError: If two tools share a name
        """
        self._tools: Tuple[MCPTool, ...] = tuple(tools)
        self._by_name: Dict[str, MCPTool] = {}
        for tool in self._tools:
            if tool.name in self._by_name:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            self._by_name[tool.name] = tool

    def __len__(self) -> int:
        return len(self._tools)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def get(self, name: str) -> Optional[MCPTool]:
        """Get a tool by name."""
        return self._by_name.get(name)

    def get_all_tools(self) -> List[MCPTool]:
        """Get all registered tools."""
        return list(self._tools)

    def list_names(self) -> List[str]:
        """List all tool names."""
        return [tool.name for tool in self._tools]

    def list_tools(self) -> List[Dict[str, Any]]:
        """Return the ``tools/list`` descriptors in declaration order."""
        return [tool.to_descriptor() for tool in self._tools]


@lru_cache
def get_tool_registry() -> ToolRegistry:
    """
    Get the process-wide tool registry.

    Returns:
        Registry with list_directory and directory_tree
    """
    registry = ToolRegistry(
        [
            create_list_directory_tool(),
            create_directory_tree_tool(),
        ]
    )
    logger.info(f"Tool registry initialized with {len(registry)} tools: {registry.list_names()}")
    return registry
