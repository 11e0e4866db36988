"""pkgscout tools: component lookups over locally installed packages."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["ToolResult"]


@dataclass
class ToolResult:
    """Result from a tool execution.

    Attributes:
        success: Whether the tool executed successfully.
        output: The tool's output text.
        error: Error message if the tool failed.
    """

    success: bool
    output: str
    error: str | None = None
