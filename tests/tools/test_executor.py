"""Tests for ToolExecutor dispatch, validation and failure containment."""

import json
import os

import pytest

from file_tree_mcp.tools.base import MCPTool, ToolResult
from file_tree_mcp.tools.executor import (
    ToolArgumentsError,
    ToolExecutor,
    validate_arguments,
)
from file_tree_mcp.tools.registry import ToolRegistry, get_tool_registry
from file_tree_mcp.tools.schemas import ListDirectoryArgs


@pytest.fixture
def executor():
    return ToolExecutor(get_tool_registry())


@pytest.fixture
def example_dir(tmp_path):
    """Directory ``a`` holding file ``x.txt`` and empty subdirectory ``b``."""
    root = tmp_path / "a"
    root.mkdir()
    (root / "x.txt").write_text("x")
    (root / "b").mkdir()
    return root


def _listing_order(path):
    return [entry.name for entry in os.scandir(path)]


class TestValidateArguments:
    """Test suite for validate_arguments."""

    def test_valid(self):
        tool = get_tool_registry().get("list_directory")
        args = validate_arguments(tool, {"path": "/tmp"})
        assert isinstance(args, ListDirectoryArgs)
        assert args.path == "/tmp"

    def test_missing_path(self):
        tool = get_tool_registry().get("list_directory")
        with pytest.raises(ToolArgumentsError) as exc_info:
            validate_arguments(tool, {})

        exc = exc_info.value
        assert exc.tool_name == "list_directory"
        assert exc.errors[0]["loc"] == ("path",)
        assert "path: Field required" in str(exc)

    def test_none_means_empty(self):
        tool = get_tool_registry().get("directory_tree")
        with pytest.raises(ToolArgumentsError, match="path"):
            validate_arguments(tool, None)

    def test_non_string_path_not_coerced(self):
        tool = get_tool_registry().get("list_directory")
        with pytest.raises(ToolArgumentsError, match="path: Input should be a valid string"):
            validate_arguments(tool, {"path": 42})

    def test_extra_field_rejected(self):
        tool = get_tool_registry().get("list_directory")
        with pytest.raises(ToolArgumentsError, match="recursive"):
            validate_arguments(tool, {"path": "/tmp", "recursive": True})

    def test_non_mapping_arguments(self):
        tool = get_tool_registry().get("list_directory")
        with pytest.raises(ToolArgumentsError, match="arguments: "):
            validate_arguments(tool, ["/tmp"])


class TestToolExecutor:
    """Test suite for ToolExecutor.call_tool."""

    @pytest.mark.asyncio
    async def test_list_directory_example(self, executor, example_dir):
        result = await executor.call_tool("list_directory", {"path": str(example_dir)})

        expected = {"x.txt": "[FILE] x.txt", "b": "[DIR] b"}
        assert not result.is_error
        assert result.text == "\n".join(expected[name] for name in _listing_order(example_dir))

    @pytest.mark.asyncio
    async def test_directory_tree_example(self, executor, example_dir):
        result = await executor.call_tool("directory_tree", {"path": str(example_dir)})

        nodes = {
            "x.txt": {"name": "x.txt", "type": "file"},
            "b": {"name": "b", "type": "directory", "children": []},
        }
        expected = [nodes[name] for name in _listing_order(example_dir)]
        assert not result.is_error
        assert json.loads(result.text) == expected
        assert result.text == json.dumps(expected, indent=2)

    @pytest.mark.asyncio
    async def test_unknown_tool(self, executor):
        result = await executor.call_tool("read_file", {"path": "/tmp"})

        assert result.is_error
        assert result.text == "Error: Unknown tool: read_file"

    @pytest.mark.asyncio
    async def test_non_string_tool_name(self, executor):
        result = await executor.call_tool(["list_directory"], {"path": "/tmp"})
        assert result.is_error
        assert "Unknown tool" in result.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool_name", ["list_directory", "directory_tree"])
    async def test_missing_path(self, executor, tool_name):
        result = await executor.call_tool(tool_name, {})

        assert result.is_error
        assert f"Invalid arguments for {tool_name}" in result.text
        assert "path" in result.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool_name", ["list_directory", "directory_tree"])
    async def test_non_string_path(self, executor, tool_name):
        result = await executor.call_tool(tool_name, {"path": 123})

        assert result.is_error
        assert "path" in result.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("tool_name", ["list_directory", "directory_tree"])
    async def test_nonexistent_path_is_error(self, executor, tmp_path, tool_name):
        result = await executor.call_tool(tool_name, {"path": str(tmp_path / "nope")})

        assert result.is_error
        assert result.text.startswith("Error: ")

    @pytest.mark.asyncio
    async def test_handler_exception_is_contained(self):
        async def broken(args):
            raise RuntimeError("handler exploded")

        registry = ToolRegistry(
            [MCPTool(name="broken", description="", args_model=ListDirectoryArgs, handler=broken)]
        )
        result = await ToolExecutor(registry).call_tool("broken", {"path": "/"})

        assert result == ToolResult.error("handler exploded")

    @pytest.mark.asyncio
    async def test_repeated_calls_identical(self, executor, example_dir):
        first = await executor.call_tool("list_directory", {"path": str(example_dir)})
        second = await executor.call_tool("list_directory", {"path": str(example_dir)})
        assert first == second
