"""Execution contexts that searches are dispatched to."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Iterable, Mapping
from concurrent.futures import ProcessPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from concurrent.futures.process import BrokenProcessPool
from pathlib import Path
from typing import TypeVar

from tool_installer.errors import AgentUnavailableError
from tool_installer.locator import PathExecutableLocator

__all__ = ["LocalAgent", "ProcessAgent"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LocalAgent:
    """Agent that runs work in-process on the calling thread.

    Satisfies the Agent protocol structurally.
    """

    def __init__(
        self,
        name: str = "local",
        root: Path | None = None,
        labels: Iterable[str] | None = None,
        online: bool = True,
    ) -> None:
        """Initialize the agent.

        Args:
            name: Agent name used in messages.
            root: Root directory. Defaults to the current working directory.
            labels: Labels installers can be matched against.
            online: False makes the agent behave as if it were disconnected.
        """
        self.name = name
        self.labels = frozenset(labels or ())
        self.online = online
        self._root = root

    @property
    def root_path(self) -> Path | None:
        """Get the agent's root directory, or None while offline."""
        if not self.online:
            return None
        return self._root or Path.cwd()

    def run(self, work: Callable[[], T]) -> T:
        """Run the work on the calling thread."""
        if not self.online:
            raise AgentUnavailableError(self.name)
        return work()

    def create_path(self, absolute_path: str) -> Path | None:
        """Translate a path string reported by the work."""
        if not self.online:
            return None
        return Path(absolute_path)

    def close(self) -> None:
        """Mark the agent offline."""
        self.online = False


def _apply_environment(env: Mapping[str, str]) -> None:
    """Worker initializer giving the agent process its own environment."""
    os.environ.update(env)


class ProcessAgent:
    """Agent backed by a dedicated worker process.

    The work is pickled, run in the worker and its result or exception is
    pickled back. Exceptions keep their structured fields across the
    boundary. The worker is started lazily on the first run() and owned
    until close().
    """

    def __init__(
        self,
        name: str = "worker",
        root: Path | None = None,
        labels: Iterable[str] | None = None,
        env: Mapping[str, str] | None = None,
        timeout: float | None = None,
    ) -> None:
        """Initialize the agent.

        Args:
            name: Agent name used in messages.
            root: Root directory. Defaults to the current working directory.
            labels: Labels installers can be matched against.
            env: Environment variables set in the worker before any work runs.
            timeout: Seconds to wait for an answer. None waits forever.
        """
        self.name = name
        self.labels = frozenset(labels or ())
        self.env = dict(env or {})
        self.timeout = timeout
        self._root = root or Path.cwd()
        self._executor: ProcessPoolExecutor | None = None
        self._closed = False

    def __enter__(self) -> ProcessAgent:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def root_path(self) -> Path | None:
        """Get the agent's root directory, or None once closed."""
        if self._closed:
            return None
        return self._root

    def _get_executor(self) -> ProcessPoolExecutor:
        if self._executor is None:
            logger.debug("Starting worker process for agent '%s'", self.name)
            self._executor = ProcessPoolExecutor(
                max_workers=1,
                initializer=_apply_environment,
                initargs=(self.env,),
            )
        return self._executor

    def run(self, work: Callable[[], T]) -> T:
        """Run the work in the worker process and block until it answers.

        Raises:
            AgentUnavailableError: If the agent is closed, the worker died or
                the timeout expired. A timed out worker is stopped and the
                agent is offline afterwards.
            KeyboardInterrupt: If the wait was interrupted. The worker is
                stopped first and the agent is offline afterwards.
        """
        if self._closed:
            raise AgentUnavailableError(self.name)
        if isinstance(work, PathExecutableLocator):
            # Sinks are bound to the caller's process and cannot be pickled
            work = work.without_log()

        try:
            future = self._get_executor().submit(work)
        except BrokenProcessPool as e:
            self._executor = None
            raise AgentUnavailableError(self.name, "worker process died") from e

        try:
            return future.result(timeout=self.timeout)
        except KeyboardInterrupt:
            logger.debug("Wait on agent '%s' interrupted, stopping worker", self.name)
            self._terminate()
            raise
        except FuturesTimeoutError as e:
            self._terminate()
            raise AgentUnavailableError(
                self.name, f"no answer within {self.timeout} seconds"
            ) from e
        except BrokenProcessPool as e:
            self._executor = None
            raise AgentUnavailableError(self.name, "worker process died") from e

    def create_path(self, absolute_path: str) -> Path | None:
        """Translate a path string reported by the worker."""
        if self._closed:
            return None
        return Path(absolute_path)

    def close(self) -> None:
        """Stop the worker process. The agent is offline afterwards."""
        self._closed = True
        if self._executor is not None:
            self._executor.shutdown(wait=True, cancel_futures=True)
            self._executor = None

    def _terminate(self) -> None:
        """Kill the worker without waiting for the running work to finish."""
        self._closed = True
        executor, self._executor = self._executor, None
        if executor is None:
            return
        # No public way to kill busy workers before Python 3.14
        workers = list((executor._processes or {}).values())
        executor.shutdown(wait=False, cancel_futures=True)
        for worker in workers:
            worker.terminate()
        for worker in workers:
            worker.join()
