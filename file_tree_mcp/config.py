"""Configuration management for the file tree MCP server."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Server settings."""

    server_name: str = Field(default="mcp-file-tree", alias="MCP_SERVER_NAME")

    # Transport Settings
    transport: Literal["stdio", "websocket"] = Field(default="stdio", alias="MCP_TRANSPORT")
    host: str = Field(default="127.0.0.1", alias="MCP_HOST")
    port: int = Field(default=8765, alias="MCP_PORT")

    # Logging
    log_level: str = Field(default="INFO", alias="MCP_LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("transport", mode="before")
    @classmethod
    def normalize_transport(cls, value: str | None) -> str:
        """Normalize transport value from environment."""
        if value is None:
            return "stdio"
        normalized = str(value).strip().lower()
        if normalized in {"stdio", "websocket"}:
            return normalized
        raise ValueError("MCP_TRANSPORT must be one of: stdio, websocket")

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, value: str | None) -> str:
        if value is None:
            return "INFO"
        return str(value).strip().upper()


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
