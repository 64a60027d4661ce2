"""Find an executable on the search path of the process running the search.

A PathExecutableLocator is a small picklable value. Agents ship it to
wherever the tool will actually run and call it there, so the PATH and
filesystem that get inspected are the agent's, not the controller's.
"""

from __future__ import annotations

import logging
import os
import stat
from collections.abc import Callable
from dataclasses import dataclass, field, replace

from tool_installer.errors import ExecutableNotFoundError, RejectedCandidate

__all__ = [
    "DEFAULT_PATHEXT",
    "POSIX",
    "PathExecutableLocator",
    "WINDOWS",
    "DiagnosticSink",
]

logger = logging.getLogger(__name__)

POSIX = "posix"
WINDOWS = "windows"

# Used when the agent does not define PATHEXT
DEFAULT_PATHEXT = (".COM", ".EXE", ".BAT", ".CMD")

_ANY_EXECUTE_BIT = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH

DiagnosticSink = Callable[[str], None]


@dataclass(frozen=True)
class PathExecutableLocator:
    """Locate an executable the way a shell resolves a command name.

    Attributes:
        executable_name: Name of the executable to find.
        search_path: Explicit search path. None reads PATH at locate time.
        platform: Force "posix" or "windows" semantics. None detects the
            platform of the process running the search.
        log: Optional sink for human readable progress lines.
    """

    executable_name: str
    search_path: str | None = None
    platform: str | None = None
    log: DiagnosticSink | None = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        """Validate invariants."""
        if self.platform not in (None, POSIX, WINDOWS):
            raise ValueError(f"Unknown platform: {self.platform}. Supported: {[POSIX, WINDOWS]}")

    def __call__(self) -> str:
        return self.locate()

    def without_log(self) -> PathExecutableLocator:
        """Copy of this locator with no diagnostic sink, for shipping elsewhere."""
        return replace(self, log=None)

    def get_search_path(self) -> str:
        """Get the search path to scan.

        Returns:
            The explicit search path if one was given, else the live PATH
            value of the current process (empty string if unset).
        """
        if self.search_path is not None:
            return self.search_path
        return os.environ.get("PATH", "")

    def get_platform(self) -> str:
        """Get the resolution semantics to apply."""
        if self.platform is not None:
            return self.platform
        return WINDOWS if os.name == "nt" else POSIX

    def get_path_separator(self) -> str:
        """Get the separator between search path entries."""
        return ";" if self.get_platform() == WINDOWS else ":"

    def get_executable_extensions(self) -> tuple[str, ...]:
        """Get the extensions that make a file executable on Windows.

        Returns:
            Extensions from PATHEXT in declared order, or DEFAULT_PATHEXT.
        """
        pathext = os.environ.get("PATHEXT", "")
        extensions = tuple(ext.strip() for ext in pathext.split(";") if ext.strip())
        return extensions or DEFAULT_PATHEXT

    def locate(self) -> str:
        """Find the first acceptable executable on the search path.

        Returns:
            Absolute path of the executable.

        Raises:
            ExecutableNotFoundError: If no directory holds an acceptable
                candidate. The error carries the search path exactly as read.
        """
        search_path = self.get_search_path()
        name = self.executable_name
        rejected: list[RejectedCandidate] = []

        if not name or not name.strip():
            raise ExecutableNotFoundError(name, search_path)

        windows = self.get_platform() == WINDOWS
        self._emit(f"Looking for '{name}' on PATH '{search_path}'")

        for directory in search_path.split(self.get_path_separator()):
            if not directory:
                continue
            if windows:
                found = self._check_windows_directory(directory, name, rejected)
            else:
                found = self._check_posix_candidate(os.path.join(directory, name), rejected)
            if found is not None:
                absolute = os.path.abspath(found)
                self._emit(f"Found '{name}' at {absolute}")
                return absolute

        self._emit(f"'{name}' was not found on PATH")
        raise ExecutableNotFoundError(name, search_path, rejected)

    def _check_windows_directory(
        self, directory: str, name: str, rejected: list[RejectedCandidate]
    ) -> str | None:
        """Check every extension candidate of one directory.

        Args:
            directory: Search path entry.
            name: Executable name.
            rejected: Collector for refused candidates.

        Returns:
            The accepted candidate, or None.
        """
        extensions = self.get_executable_extensions()
        if name.upper().endswith(tuple(ext.upper() for ext in extensions)):
            candidates = [os.path.join(directory, name)]
        else:
            candidates = [os.path.join(directory, name + ext) for ext in extensions]

        for candidate in candidates:
            try:
                mode = os.stat(candidate).st_mode
            except OSError:
                continue
            if stat.S_ISREG(mode):
                return candidate
            self._reject(rejected, candidate, "not a regular file")
        return None

    def _check_posix_candidate(
        self, candidate: str, rejected: list[RejectedCandidate]
    ) -> str | None:
        """Check a single candidate for POSIX executability.

        Args:
            candidate: Path to test.
            rejected: Collector for refused candidates.

        Returns:
            The candidate if it is an executable regular file, else None.
        """
        try:
            mode = os.stat(candidate).st_mode
        except OSError:
            return None
        if not stat.S_ISREG(mode):
            self._reject(rejected, candidate, "not a regular file")
            return None
        if not mode & _ANY_EXECUTE_BIT:
            self._reject(rejected, candidate, "not executable")
            return None
        return candidate

    def _reject(self, rejected: list[RejectedCandidate], candidate: str, reason: str) -> None:
        rejected.append((candidate, reason))
        self._emit(f"Skipping {candidate}: {reason}")

    def _emit(self, message: str) -> None:
        logger.debug("%s", message)
        if self.log is not None:
            self.log(message)
