"""JSON-RPC 2.0 helpers for MCP transports.

See: https://www.jsonrpc.org/specification
"""

import json
from typing import Any

# Standard JSON-RPC error codes
PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603


def jsonrpc_response(id: Any, result: Any) -> dict:
    """Create a JSON-RPC 2.0 success response.

    Args:
        id: Request ID (must match the request)
        result: The result payload

    Returns:
        JSON-RPC 2.0 response dict
    """
    return {"jsonrpc": "2.0", "result": result, "id": id}


def jsonrpc_error(id: Any, code: int, message: str) -> dict:
    """Create a JSON-RPC 2.0 error response.

    Args:
        id: Request ID (can be None for parse errors)
        code: Error code (negative integer)
        message: Human-readable error message

    Returns:
        JSON-RPC 2.0 error response dict
    """
    return {"jsonrpc": "2.0", "error": {"code": code, "message": message}, "id": id}


def decode_message(raw: Any) -> Any:
    """Decode one JSON-RPC message.

    Args:
        raw: Message text or UTF-8 bytes

    Returns:
        Parsed JSON value

    Raises:
        ValueError: If the message is not valid UTF-8 or JSON, or exceeds
            the interpreter's integer-conversion limit
        RecursionError: If the JSON is nested too deeply to decode
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8")
    return json.loads(raw)
