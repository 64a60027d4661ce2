"""Tool installer that locates an already present tool on an agent's PATH."""

from __future__ import annotations

import logging
from pathlib import PurePath

from tool_installer.errors import (
    AgentUnavailableError,
    InstallerStateError,
    ResolutionCancelledError,
)
from tool_installer.locator import DiagnosticSink, PathExecutableLocator
from tool_installer.protocols import Agent
from tool_installer.types import ExecutableSearchRequest, ToolHome, fix_empty

__all__ = ["FindOnPathInstaller"]

logger = logging.getLogger(__name__)


class FindOnPathInstaller:
    """Locates an existing tool on the agent, or fails.

    Nothing is downloaded: the tool home is derived from wherever the
    executable is found on the agent's search path.
    """

    def __init__(
        self,
        label: str | None = None,
        executable_name: str | None = None,
        relative_path: str | None = None,
        search_path: str | None = None,
    ) -> None:
        """Initialize the installer.

        Args:
            label: Agent label this installer is restricted to. None for any agent.
            executable_name: Name of the executable to locate.
            relative_path: Tool home relative to the executable's directory.
            search_path: Search path to scan instead of the agent's PATH.
        """
        self.label = fix_empty(label)
        self.executable_name = executable_name
        self.relative_path = relative_path
        self.search_path = search_path

    @property
    def executable_name(self) -> str | None:
        """Name of the executable to locate, or None if unset."""
        return self._executable_name

    @executable_name.setter
    def executable_name(self, value: str | None) -> None:
        self._executable_name = fix_empty(value)

    @property
    def relative_path(self) -> str | None:
        """Tool home relative to the executable's directory, None meaning "."."""
        return self._relative_path

    @relative_path.setter
    def relative_path(self, value: str | None) -> None:
        self._relative_path = fix_empty(value)

    def applies_to(self, agent: Agent) -> bool:
        """Check whether this installer should be used on an agent.

        Args:
            agent: Candidate agent.

        Returns:
            True if the installer has no label or the agent carries it.
        """
        return self.label is None or self.label in agent.labels

    def make_locator(
        self, request: ExecutableSearchRequest, log: DiagnosticSink | None
    ) -> PathExecutableLocator:
        """Build the unit of work dispatched to the agent.

        Args:
            request: Executable to locate and the search path to use.
            log: Optional diagnostic sink.

        Returns:
            Locator bound to the request.
        """
        return PathExecutableLocator(
            executable_name=request.executable_name,
            search_path=request.search_path,
            log=log,
        )

    def perform_installation(self, agent: Agent, log: DiagnosticSink | None = None) -> ToolHome:
        """Locate the tool on an agent and compute its home directory.

        Args:
            agent: Agent the tool must be found on.
            log: Optional sink for progress messages.

        Returns:
            The resolved tool home.

        Raises:
            ConfigurationError: If no executable name is configured.
            AgentUnavailableError: If the agent is offline.
            ExecutableNotFoundError: If the agent's search path has no
                acceptable candidate.
            ResolutionCancelledError: If the wait for the agent was interrupted.
            InstallerStateError: If the executable was found without a
                parent directory.
        """
        request = ExecutableSearchRequest(self.executable_name or "", self.search_path)
        exe_name = request.executable_name

        executable_path = self._find_executable_or_raise(request, agent, log)
        parent = executable_path.parent
        if parent == executable_path:
            # This shouldn't happen
            raise InstallerStateError(
                f"Executable ({exe_name}) found at '{executable_path}' has no parent folder"
            )

        result = ToolHome(
            executable=executable_path,
            base_directory=parent,
            relative_offset=self.relative_path,
        )
        logger.debug("Resolved '%s' on '%s' to %s", exe_name, agent.name, result.home)
        if log is not None:
            log(f"Using {exe_name} from {result.home}")
        return result

    def _find_executable_or_raise(
        self, request: ExecutableSearchRequest, agent: Agent, log: DiagnosticSink | None
    ) -> PurePath:
        """Dispatch the locator to the agent and translate its answer.

        Args:
            request: Executable to locate.
            agent: Agent to run the search on.
            log: Optional diagnostic sink.

        Returns:
            Path of the executable in the caller's representation.
        """
        if agent.root_path is None:
            raise AgentUnavailableError(agent.name)

        exe_name = request.executable_name
        locator = self.make_locator(request, log)
        try:
            absolute_path = agent.run(locator)
        except KeyboardInterrupt as e:
            raise ResolutionCancelledError(
                f"Interrupted while looking for '{exe_name}' on '{agent.name}'"
            ) from e

        executable_path = agent.create_path(absolute_path)
        if executable_path is None:
            raise AgentUnavailableError(agent.name, "agent went offline during the search")
        return executable_path
