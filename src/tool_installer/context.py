"""Application context for dependency injection.

This module separates object creation from object use, so CLI commands can
be tested with a fake agent and an in-memory tools file.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path

from tool_installer.config import ToolsFile, default_config_path
from tool_installer.protocols import Agent

AgentFactory = Callable[[bool, Iterable[str]], Agent]


def _default_agent_factory(isolated: bool, labels: Iterable[str]) -> Agent:
    """Create the agent searches run on.

    Args:
        isolated: Run searches in a separate worker process.
        labels: Labels of the agent.

    Returns:
        A ProcessAgent when isolated, else a LocalAgent.
    """
    from tool_installer.agents import LocalAgent, ProcessAgent

    if isolated:
        return ProcessAgent(name="worker", labels=labels)
    return LocalAgent(name="local", labels=labels)


@dataclass
class AppContext:
    """Container for application dependencies.

    Provides a single injection point for the services used by CLI commands.
    """

    config_path: Path
    agent_factory: AgentFactory = field(default=_default_agent_factory)

    def load_tools(self) -> ToolsFile:
        """Load the tools file, or an empty one if it doesn't exist."""
        if not self.config_path.exists():
            return ToolsFile()
        return ToolsFile.from_file(self.config_path)

    def create_agent(self, isolated: bool = False, labels: Iterable[str] = ()) -> Agent:
        """Create an agent through the configured factory."""
        return self.agent_factory(isolated, labels)


def create_context(config_path: Path | None = None) -> AppContext:
    """Factory for application dependencies.

    Use this in production code. For tests, construct AppContext directly
    with test doubles.

    Args:
        config_path: Override the tools file location.

    Returns:
        Configured AppContext.
    """
    return AppContext(config_path=config_path or default_config_path())
