"""Stdio MCP Server.

Serves MCP JSON-RPC over stdin/stdout, one message per line. Only protocol
messages are written to stdout; logging goes to stderr.
"""

import asyncio
import json
import logging
import sys
from typing import IO, Optional, TextIO

from file_tree_mcp.server.jsonrpc import PARSE_ERROR, decode_message, jsonrpc_error
from file_tree_mcp.server.protocol import MCPProtocolHandler

logger = logging.getLogger(__name__)


class MCPStdioServer:
    """Line-delimited JSON-RPC loop over a pair of streams.

    Input may be a binary stream (``sys.stdin.buffer`` by default) or a
    text stream.
    """

    def __init__(
        self,
        handler: MCPProtocolHandler,
        stdin: Optional[IO] = None,
        stdout: Optional[TextIO] = None,
    ):
        self.handler = handler
        self._stdin = stdin if stdin is not None else sys.stdin.buffer
        self._stdout = stdout if stdout is not None else sys.stdout
        self._message_count = 0

    @property
    def message_count(self) -> int:
        return self._message_count

    def _write(self, message: dict) -> None:
        self._stdout.write(json.dumps(message) + "\n")
        self._stdout.flush()

    async def serve(self) -> None:
        """Read requests until EOF on stdin."""
        logger.info(f"Secure MCP Filesystem Server running on stdio ({self.handler.server_info.name})")

        while True:
            line = await asyncio.to_thread(self._stdin.readline)
            if not line:
                break
            line = line.strip()
            if not line:
                continue

            self._message_count += 1
            try:
                request = decode_message(line)
            except (ValueError, RecursionError) as exc:
                logger.warning(f"[MCP] Invalid JSON on stdin: {exc}")
                self._write(jsonrpc_error(None, PARSE_ERROR, f"Parse error: {exc}"))
                continue

            response = await self.handler.handle_message(request)
            if response is not None:
                self._write(response)

        logger.info(f"[MCP] stdin closed - messages_processed={self._message_count}")
