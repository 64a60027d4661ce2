"""Exception hierarchy for tool resolution.

Every failure raised by the locator or the installer derives from
ToolInstallerError so callers can handle the whole family at once, while
the CLI maps each subclass to its own exit code.
"""

from __future__ import annotations

__all__ = [
    "AgentUnavailableError",
    "ConfigurationError",
    "ExecutableNotFoundError",
    "InstallerStateError",
    "RejectedCandidate",
    "ResolutionCancelledError",
    "ToolInstallerError",
]

# (candidate path, reason it was refused)
RejectedCandidate = tuple[str, str]


class ToolInstallerError(Exception):
    """Base class for tool installer errors."""

    pass


class ConfigurationError(ToolInstallerError, ValueError):
    """Required configuration is missing or invalid."""

    pass


class AgentUnavailableError(ToolInstallerError):
    """The agent is offline or stopped answering."""

    def __init__(self, agent_name: str, reason: str = "agent is offline") -> None:
        """Initialize the error.

        Args:
            agent_name: Name of the agent that could not be reached.
            reason: Why the agent is considered unavailable.
        """
        super().__init__(f"Agent '{agent_name}' is unavailable: {reason}")
        self.agent_name = agent_name
        self.reason = reason

    def __reduce__(self):
        return (type(self), (self.agent_name, self.reason))


class ExecutableNotFoundError(ToolInstallerError):
    """No acceptable executable was found on the search path.

    Attributes:
        executable_name: Name that was searched for.
        search_path: The literal search path string that was scanned.
        rejected: Candidates that matched by name but were refused, with the
            reason each one was refused.
    """

    def __init__(
        self,
        executable_name: str,
        search_path: str,
        rejected: tuple[RejectedCandidate, ...] | list[RejectedCandidate] = (),
    ) -> None:
        """Initialize the error.

        Args:
            executable_name: Name that was searched for.
            search_path: Search path string exactly as it was read.
            rejected: Partial matches that were skipped.
        """
        self.executable_name = executable_name
        self.search_path = search_path
        self.rejected = tuple(rejected)
        super().__init__(self._build_message())

    def _build_message(self) -> str:
        message = f"Executable '{self.executable_name}' not found on PATH '{self.search_path}'"
        if self.rejected:
            details = "; ".join(f"{path} ({reason})" for path, reason in self.rejected)
            message += f". Rejected candidates: {details}"
        return message

    def __reduce__(self):
        # Default exception pickling only replays self.args, which would lose the fields.
        return (type(self), (self.executable_name, self.search_path, self.rejected))


class InstallerStateError(ToolInstallerError, RuntimeError):
    """An internal invariant was violated."""

    pass


class ResolutionCancelledError(ToolInstallerError):
    """The wait for an agent's answer was interrupted."""

    pass
