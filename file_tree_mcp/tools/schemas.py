"""Pydantic argument models for the directory tools.

Each model is both the validator for incoming ``tools/call`` arguments and
the source of the JSON Schema advertised by ``tools/list``.
"""

import copy
from typing import Any, Dict, Type

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class ToolArgs(BaseModel):
    """Base class for tool argument models.

    Unknown keys are rejected and values are not coerced, so ``{"path": 1}``
    fails instead of silently becoming ``"1"``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)


class ListDirectoryArgs(ToolArgs):
    """Arguments for ``list_directory``."""

    path: StrictStr = Field(description="Directory to list")


class DirectoryTreeArgs(ToolArgs):
    """Arguments for ``directory_tree``."""

    path: StrictStr = Field(description="Root directory of the tree")


def input_schema_for(model: Type[ToolArgs]) -> Dict[str, Any]:
    """Build the MCP ``inputSchema`` for an argument model."""
    schema = copy.deepcopy(model.model_json_schema())
    schema.pop("title", None)
    for prop in schema.get("properties", {}).values():
        prop.pop("title", None)
    return schema
