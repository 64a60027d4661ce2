"""Locate tools that are already installed on an agent's PATH."""

__version__ = "0.1.0"

# Export the public entry points for callers embedding the installer
from tool_installer.agents import LocalAgent, ProcessAgent
from tool_installer.errors import (
    AgentUnavailableError,
    ConfigurationError,
    ExecutableNotFoundError,
    InstallerStateError,
    ResolutionCancelledError,
    ToolInstallerError,
)
from tool_installer.installer import FindOnPathInstaller
from tool_installer.locator import PathExecutableLocator
from tool_installer.protocols import Agent

__all__ = [
    "__version__",
    "Agent",
    "AgentUnavailableError",
    "ConfigurationError",
    "ExecutableNotFoundError",
    "FindOnPathInstaller",
    "InstallerStateError",
    "LocalAgent",
    "PathExecutableLocator",
    "ProcessAgent",
    "ResolutionCancelledError",
    "ToolInstallerError",
]
