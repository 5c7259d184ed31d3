"""Read-only MCP server exposing directory listings and trees."""

__version__ = "0.0.1"
