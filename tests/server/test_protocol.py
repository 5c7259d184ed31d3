"""Tests for MCP JSON-RPC message handling."""

import pytest

from file_tree_mcp.server.jsonrpc import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
)
from file_tree_mcp.server.protocol import MCPProtocolHandler, MCPServerInfo


@pytest.fixture
def handler():
    return MCPProtocolHandler(server_info=MCPServerInfo(name="test-server", version="9.9.9"))


class TestMCPProtocolHandler:
    """Test suite for MCPProtocolHandler."""

    @pytest.mark.asyncio
    async def test_initialize(self, handler):
        response = await handler.handle_message(
            {
                "jsonrpc": "2.0",
                "id": 1,
                "method": "initialize",
                "params": {"protocolVersion": "2024-11-05", "clientInfo": {"name": "pytest"}},
            }
        )

        assert response["id"] == 1
        result = response["result"]
        assert result["serverInfo"] == {"name": "test-server", "version": "9.9.9"}
        assert result["protocolVersion"] == "2024-11-05"
        assert "tools" in result["capabilities"]

    @pytest.mark.asyncio
    async def test_ping(self, handler):
        response = await handler.handle_message({"jsonrpc": "2.0", "id": "p", "method": "ping"})
        assert response == {"jsonrpc": "2.0", "result": {}, "id": "p"}

    @pytest.mark.asyncio
    async def test_notification_has_no_response(self, handler):
        response = await handler.handle_message(
            {"jsonrpc": "2.0", "method": "notifications/initialized"}
        )
        assert response is None

    @pytest.mark.asyncio
    async def test_tools_list(self, handler):
        response = await handler.handle_message({"jsonrpc": "2.0", "id": 2, "method": "tools/list"})

        tools = response["result"]["tools"]
        assert [t["name"] for t in tools] == ["list_directory", "directory_tree"]
        assert all(t["inputSchema"]["required"] == ["path"] for t in tools)

    @pytest.mark.asyncio
    async def test_tools_call_success(self, handler, tmp_path):
        (tmp_path / "x.txt").write_text("x")
        response = await handler.handle_message(
            {
                "jsonrpc": "2.0",
                "id": 3,
                "method": "tools/call",
                "params": {"name": "list_directory", "arguments": {"path": str(tmp_path)}},
            }
        )

        assert response["result"] == {
            "content": [{"type": "text", "text": "[FILE] x.txt"}],
            "isError": False,
        }

    @pytest.mark.asyncio
    async def test_tools_call_unknown_tool_is_result_not_error(self, handler):
        response = await handler.handle_message(
            {
                "jsonrpc": "2.0",
                "id": 4,
                "method": "tools/call",
                "params": {"name": "delete_everything", "arguments": {}},
            }
        )

        assert "error" not in response
        assert response["result"]["isError"] is True
        assert "delete_everything" in response["result"]["content"][0]["text"]

    @pytest.mark.asyncio
    async def test_tools_call_without_arguments(self, handler):
        response = await handler.handle_message(
            {"jsonrpc": "2.0", "id": 5, "method": "tools/call", "params": {"name": "directory_tree"}}
        )

        assert response["result"]["isError"] is True
        assert "path" in response["result"]["content"][0]["text"]

    @pytest.mark.asyncio
    async def test_tools_call_without_name(self, handler):
        response = await handler.handle_message(
            {"jsonrpc": "2.0", "id": 6, "method": "tools/call", "params": {}}
        )
        assert response["error"]["code"] == INVALID_PARAMS

    @pytest.mark.asyncio
    async def test_unknown_method(self, handler):
        response = await handler.handle_message(
            {"jsonrpc": "2.0", "id": 7, "method": "resources/list"}
        )

        assert response["error"]["code"] == METHOD_NOT_FOUND
        assert "resources/list" in response["error"]["message"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", [[], "tools/list", {"id": 8}, {"id": 8, "method": 5}])
    async def test_invalid_request(self, handler, message):
        response = await handler.handle_message(message)
        assert response["error"]["code"] == INVALID_REQUEST

    @pytest.mark.asyncio
    async def test_non_object_params(self, handler):
        response = await handler.handle_message(
            {"jsonrpc": "2.0", "id": 9, "method": "tools/call", "params": ["list_directory"]}
        )
        assert response["error"]["code"] == INVALID_PARAMS

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_internal_error(self, handler, monkeypatch):
        def explode():
            raise RuntimeError("registry gone")

        monkeypatch.setattr(handler.registry, "list_tools", explode)
        response = await handler.handle_message({"jsonrpc": "2.0", "id": 10, "method": "tools/list"})

        assert response["error"] == {"code": INTERNAL_ERROR, "message": "registry gone"}
