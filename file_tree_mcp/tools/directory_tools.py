"""Directory inspection tools for MCP server.

Implements list_directory and directory_tree. Both are read-only; every
filesystem failure is reported to the caller as an error result.
"""

import asyncio
import json
import logging
import os
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple, TypedDict

from file_tree_mcp.tools.base import MCPTool, ToolResult
from file_tree_mcp.tools.schemas import DirectoryTreeArgs, ListDirectoryArgs

logger = logging.getLogger(__name__)


class EntryKind(str, Enum):
    """Kind of a directory entry as reported to callers."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True)
class DirectoryEntryView:
    """A single entry of a directory listing."""

    name: str
    kind: EntryKind

    @property
    def label(self) -> str:
        tag = "[DIR]" if self.kind is EntryKind.DIRECTORY else "[FILE]"
        return f"{tag} {self.name}"


class _TreeNodeBase(TypedDict):
    name: str
    type: str


class TreeNode(_TreeNodeBase, total=False):
    """Tree entry; ``children`` is present only on directories."""

    children: List["TreeNode"]


def read_entries(path: str) -> List[DirectoryEntryView]:
    """
    Read the immediate entries of a directory.

    Entries come back in the order the OS yields them. Symbolic links are
    not followed, so a link to a directory is reported as a file.

    Args:
        path: Directory to read

    Returns:
        List of entry views

    Raises:
        OSError: If the directory cannot be read
    """
    with os.scandir(path) as it:
        return [
            DirectoryEntryView(
                name=entry.name,
                kind=EntryKind.DIRECTORY
                if entry.is_dir(follow_symlinks=False)
                else EntryKind.FILE,
            )
            for entry in it
        ]


def build_tree(path: str) -> List[TreeNode]:
    """
    Build the tree of everything below ``path``.

    Traversal is depth-first with siblings in listing order. An explicit
    stack is used instead of recursion so deep trees are not limited by the
    interpreter's recursion limit.

    Args:
        path: Root directory

    Returns:
        The root-level nodes

    Raises:
        OSError: If any directory in the tree cannot be read
    """
    roots: List[TreeNode] = []
    stack: List[Tuple[str, List[TreeNode]]] = [(path, roots)]

    while stack:
        dir_path, siblings = stack.pop()
        pending: List[Tuple[str, List[TreeNode]]] = []

        for entry in read_entries(dir_path):
            node: TreeNode = {"name": entry.name, "type": entry.kind.value}
            if entry.kind is EntryKind.DIRECTORY:
                node["children"] = []
                pending.append((os.path.join(dir_path, entry.name), node["children"]))
            siblings.append(node)

        # Reversed so the first subdirectory is expanded next
        stack.extend(reversed(pending))

    return roots


def dump_tree(nodes: List[TreeNode]) -> str:
    """
    Serialize tree nodes as 2-space indented JSON.

    Output is identical to ``json.dumps(nodes, indent=2, ensure_ascii=False)``
    but written with an explicit stack, since the stdlib encoder recurses
    once per nesting level when ``indent`` is set.

    Args:
        nodes: Root-level nodes from ``build_tree``

    Returns:
        JSON text
    """
    if not nodes:
        return "[]"

    out: List[str] = ["["]
    # Frames are [siblings, next index, indent level of the siblings]
    stack: List[list] = [[nodes, 0, 1]]

    while stack:
        frame = stack[-1]
        siblings, index, level = frame

        if index == len(siblings):
            stack.pop()
            out.append("\n" + "  " * (level - 1) + "]")
            if stack:
                # Closes the directory object owning this children list
                out.append("\n" + "  " * (level - 2) + "}")
            continue

        frame[1] = index + 1
        node = siblings[index]
        pad = "  " * level
        inner = "  " * (level + 1)

        out.append(("," if index else "") + "\n" + pad + "{")
        out.append("\n" + inner + '"name": ' + json.dumps(node["name"], ensure_ascii=False))
        out.append(",\n" + inner + '"type": ' + json.dumps(node["type"]))
        if "children" in node:
            if node["children"]:
                out.append(",\n" + inner + '"children": [')
                stack.append([node["children"], 0, level + 2])
                continue
            out.append(",\n" + inner + '"children": []')
        out.append("\n" + pad + "}")

    return "".join(out)


# =============================================================================
# LIST DIRECTORY TOOL
# =============================================================================


async def list_directory(args: ListDirectoryArgs) -> ToolResult:
    """
    List the immediate contents of a directory.

    Args:
        args: Validated arguments

    Returns:
        One ``[DIR] name`` / ``[FILE] name`` line per entry
    """
    try:
        entries = await asyncio.to_thread(read_entries, args.path)
    except OSError as e:
        logger.warning(f"Error listing directory {args.path}: {e}")
        return ToolResult.error(str(e))

    logger.debug(f"Listed {len(entries)} entries in {args.path}")
    return ToolResult.ok("\n".join(entry.label for entry in entries))


def create_list_directory_tool() -> MCPTool:
    """Create the list_directory tool."""
    return MCPTool(
        name="list_directory",
        description=(
            "Get a detailed listing of all files and directories in a specified path. "
            "Results clearly distinguish between files and directories with [FILE] and [DIR] "
            "prefixes. This tool is essential for understanding directory structure and "
            "finding specific files within a directory."
        ),
        args_model=ListDirectoryArgs,
        handler=list_directory,
    )


# =============================================================================
# DIRECTORY TREE TOOL
# =============================================================================


async def directory_tree(args: DirectoryTreeArgs) -> ToolResult:
    """
    Build a recursive JSON tree of a directory.

    Any read failure aborts the whole call; a partial tree is never
    returned.

    Args:
        args: Validated arguments

    Returns:
        The node list as JSON with 2-space indentation
    """
    try:
        tree = await asyncio.to_thread(build_tree, args.path)
    except OSError as e:
        logger.warning(f"Error building tree for {args.path}: {e}")
        return ToolResult.error(str(e))

    return ToolResult.ok(dump_tree(tree))


def create_directory_tree_tool() -> MCPTool:
    """Create the directory_tree tool."""
    return MCPTool(
        name="directory_tree",
        description=(
            "Get a recursive tree view of files and directories as a JSON structure. "
            "Each entry includes 'name', 'type' (file/directory), and 'children' for directories. "
            "Files have no children array, while directories always have a children array "
            "(which may be empty). The output is formatted with 2-space indentation for "
            "readability."
        ),
        args_model=DirectoryTreeArgs,
        handler=directory_tree,
    )
