"""Protocol definitions for core abstractions.

Agents are the execution contexts a search is dispatched to. The installer
only depends on this structural interface, so tests can substitute a
MagicMock or a recording double without inheritance.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import PurePath
from typing import Protocol, TypeVar, runtime_checkable

T = TypeVar("T")


@runtime_checkable
class Agent(Protocol):
    """Protocol for an execution context that work can be dispatched to.

    Implementations run units of work where the tool lives and translate
    the paths they return into the caller's path representation.
    """

    name: str
    labels: frozenset[str]

    @property
    def root_path(self) -> PurePath | None:
        """Get the agent's root directory.

        Returns:
            Root directory, or None if the agent is offline.
        """
        ...

    def run(self, work: Callable[[], T]) -> T:
        """Run a unit of work on the agent and wait for its result.

        Args:
            work: Picklable zero-argument callable.

        Returns:
            Whatever the work returned.

        Raises:
            AgentUnavailableError: If the agent cannot run the work.
            ResolutionCancelledError: If the wait was interrupted.
        """
        ...

    def create_path(self, absolute_path: str) -> PurePath | None:
        """Translate an absolute path string from the agent.

        Args:
            absolute_path: Path as reported by the agent.

        Returns:
            Path in the caller's representation, or None if the agent is
            no longer able to address it.
        """
        ...

    def close(self) -> None:
        """Release whatever the agent holds. The agent is offline afterwards."""
        ...
