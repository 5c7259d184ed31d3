"""Tool call execution.

Looks a tool up by name, validates its arguments and runs it. Whatever
happens, the caller gets a ToolResult back.
"""

import logging
import time
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from file_tree_mcp.tools.base import MCPTool, ToolResult
from file_tree_mcp.tools.registry import ToolRegistry
from file_tree_mcp.tools.schemas import ToolArgs

logger = logging.getLogger(__name__)


class ToolArgumentsError(Exception):
    """Raised when tool arguments fail validation."""

    def __init__(self, tool_name: str, errors: List[Dict[str, Any]]) -> None:
        self.tool_name = tool_name
        self.errors = errors
        detail = "; ".join(
            f"{_format_loc(e.get('loc', ()))}: {e.get('msg', 'invalid value')}" for e in errors
        )
        super().__init__(f"Invalid arguments for {tool_name}: {detail}")


def _format_loc(loc: Any) -> str:
    parts = [str(part) for part in loc or ()]
    return ".".join(parts) if parts else "arguments"


def validate_arguments(tool: MCPTool, arguments: Any) -> ToolArgs:
    """
    Validate raw arguments against a tool's argument model.

    Args:
        tool: Tool being called
        arguments: Raw ``arguments`` from the request; ``None`` means empty

    Returns:
        Validated argument model instance

    Raises:
        ToolArgumentsError: If the arguments do not match the model
    """
    if arguments is None:
        arguments = {}
    try:
        return tool.args_model.model_validate(arguments)
    except ValidationError as exc:
        raise ToolArgumentsError(tool.name, exc.errors()) from exc  # type: ignore[arg-type]


class ToolExecutor:
    """
    Runs tool calls against a registry.

    ``call_tool`` never raises for ordinary failures: unknown tools, bad
    arguments and handler errors all come back as error results.
    """

    def __init__(self, registry: ToolRegistry):
        self.registry = registry

    async def call_tool(self, name: Any, arguments: Optional[Any] = None) -> ToolResult:
        """
        Execute a tool call.

        Args:
            name: Tool name from the request
            arguments: Raw arguments from the request

        Returns:
            The tool's result, or an error result
        """
        logger.info(f"[MCP] tools/call START - tool={name}")
        logger.debug(f"[MCP] tools/call arguments: {arguments}")
        start_time = time.monotonic()

        try:
            result = await self._run(name, arguments)
        except ToolArgumentsError as e:
            logger.warning(f"[MCP] tools/call INVALID - {e}")
            result = ToolResult.error(str(e))
        except Exception as e:
            logger.error(f"[MCP] tools/call EXCEPTION - tool={name} error={e}", exc_info=True)
            result = ToolResult.error(str(e))

        elapsed_ms = (time.monotonic() - start_time) * 1000
        status = "ERROR" if result.is_error else "OK"
        logger.info(f"[MCP] tools/call END - tool={name} status={status} elapsed={elapsed_ms:.1f}ms")
        return result

    async def _run(self, name: Any, arguments: Any) -> ToolResult:
        tool = self.registry.get(name) if isinstance(name, str) else None
        if tool is None:
            logger.warning(f"[MCP] tools/call FAILED - Unknown tool: {name}")
            logger.debug(f"[MCP] Available tools: {self.registry.list_names()}")
            return ToolResult.error(f"Unknown tool: {name}")

        args = validate_arguments(tool, arguments)
        return await tool.handler(args)
