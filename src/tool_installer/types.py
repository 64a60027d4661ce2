"""Shared data types for tool resolution."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import PurePath

from tool_installer.errors import ConfigurationError

__all__ = ["CURRENT_DIR", "ExecutableSearchRequest", "ToolHome", "fix_empty"]

# Relative offset meaning "the directory holding the executable"
CURRENT_DIR = "."


def fix_empty(value: str | None) -> str | None:
    """Normalize blank strings to None.

    Args:
        value: Raw configuration value.

    Returns:
        The value unchanged, or None if it was None, empty or whitespace only.
    """
    if value is None or not value.strip():
        return None
    return value


@dataclass(frozen=True)
class ExecutableSearchRequest:
    """A request to find an executable on an agent.

    Attributes:
        executable_name: Name of the executable to look for.
        search_path: Explicit search path. None searches the agent's PATH.
    """

    executable_name: str
    search_path: str | None = None

    def __post_init__(self) -> None:
        """Validate invariants."""
        if fix_empty(self.executable_name) is None:
            raise ConfigurationError("Executable name is empty")


@dataclass(frozen=True)
class ToolHome:
    """Result of resolving a tool on an agent.

    Attributes:
        executable: Path of the executable that was found.
        base_directory: Directory containing the executable.
        relative_offset: Offset applied to base_directory, None for none.
    """

    executable: PurePath
    base_directory: PurePath
    relative_offset: str | None = None

    @property
    def home(self) -> PurePath:
        """The tool home directory.

        The offset is appended as-is, so ".." segments are kept literally.
        """
        offset = self.relative_offset
        if offset is None or offset == CURRENT_DIR:
            return self.base_directory
        return self.base_directory / offset

    def __str__(self) -> str:
        return str(self.home)
