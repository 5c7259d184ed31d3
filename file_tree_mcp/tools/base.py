"""Tool definition and result types shared by the registry and executor."""

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Type

from file_tree_mcp.tools.schemas import ToolArgs, input_schema_for


@dataclass(frozen=True)
class ToolResult:
    """Outcome of a single tool call.

    Either successful text or an error message; ``to_dict`` renders the MCP
    ``tools/call`` envelope with exactly one text block.
    """

    text: str
    is_error: bool = False

    @classmethod
    def ok(cls, text: str) -> "ToolResult":
        return cls(text=text, is_error=False)

    @classmethod
    def error(cls, message: str) -> "ToolResult":
        return cls(text=f"Error: {message}", is_error=True)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "content": [{"type": "text", "text": self.text}],
            "isError": self.is_error,
        }


ToolHandler = Callable[[Any], Awaitable[ToolResult]]


@dataclass(frozen=True)
class MCPTool:
    """MCP tool definition.

    Attributes:
        name: Unique tool name
        description: Human-readable description shown to callers
        args_model: Pydantic model validating the tool's arguments
        handler: Coroutine taking a validated ``args_model`` instance
    """

    name: str
    description: str
    args_model: Type[ToolArgs]
    handler: ToolHandler

    @property
    def input_schema(self) -> Dict[str, Any]:
        return input_schema_for(self.args_model)

    def to_descriptor(self) -> Dict[str, Any]:
        """Render the ``tools/list`` entry for this tool."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema,
        }
