"""File read/write tools."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Annotated, Any, Dict, Optional

from langchain_core.tools import tool

LOGGER = logging.getLogger(__name__)

__all__ = ["read_file", "write_file"]


def _join_lines(lines: list[str]) -> str:
    return "\n".join(lines).rstrip("\n")


@tool
def read_file(
    path: Annotated[str, "The file path to read"],
    head: Annotated[Optional[int], "If provided, returns only the first N lines of the file"] = None,
    tail: Annotated[Optional[int], "If provided, returns only the last N lines of the file"] = None,
) -> Dict[str, Any]:
    """Read the complete contents of a file from the file system. Handles various text encodings and provides detailed error messages if the file cannot be read."""
    if head is not None and tail is not None:
        return {"error": "Cannot specify both head and tail parameters"}

    target = Path(path)
    if not target.exists():
        return {"error": f"File not found: {path}"}
    if not target.is_file():
        return {"error": f"Path is not a file: {path}"}

    try:
        content = target.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        LOGGER.warning(f"Failed to read file {path}: {e}")
        return {"error": f"Failed to read file: {e}"}

    if head is not None:
        content = _join_lines(content.split("\n")[:head])
    elif tail is not None:
        lines = content.split("\n")
        content = _join_lines(lines[-tail:] if tail > 0 else [])

    LOGGER.info(f"Read file: {path} ({len(content)} chars)")
    return {"path": path, "content": content, "success": True}


@tool
def write_file(
    path: Annotated[str, "The file path to write to"],
    content: Annotated[str, "The content to write to the file"],
) -> Dict[str, Any]:
    """Create a new file or completely overwrite an existing file with new content. Use with caution as it will overwrite existing files without warning."""
    abs_path = Path(path).resolve()
    temp_path = abs_path.with_name(abs_path.name + ".tmp")

    try:
        abs_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            temp_path.write_text(content, encoding="utf-8")
            os.replace(temp_path, abs_path)
        except OSError:
            if temp_path.exists():
                temp_path.unlink()
            raise
    except OSError as e:
        LOGGER.warning(f"Failed to write file {path}: {e}")
        return {"error": f"Failed to write file: {e}"}

    LOGGER.info(f"Wrote file: {abs_path}")
    return {
        "path": str(abs_path),
        "bytes_written": len(content.encode("utf-8")),
        "success": True,
        "message": f"Successfully wrote to {path}",
    }
