"""Shared test fixtures."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path, PurePosixPath
from unittest.mock import MagicMock

import pytest

MakeFile = Callable[..., Path]


@pytest.fixture
def make_file() -> MakeFile:
    """Create a file in a directory, creating the directory as needed.

    Call as make_file(directory, name, mode=0o755).
    """

    def _make(directory: Path, name: str, mode: int = 0o755) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text("#!/bin/sh\nexit 0\n")
        path.chmod(mode)
        return path

    return _make


@pytest.fixture
def bin_dirs(tmp_path: Path) -> tuple[Path, Path]:
    """Two empty directories standing in for /usr/bin and /usr/local/bin."""
    usr_bin = tmp_path / "usr" / "bin"
    usr_local_bin = tmp_path / "usr" / "local" / "bin"
    usr_bin.mkdir(parents=True)
    usr_local_bin.mkdir(parents=True)
    return usr_bin, usr_local_bin


@pytest.fixture
def search_path(bin_dirs: tuple[Path, Path]) -> str:
    """Search path made of the two bin directories, in order."""
    return os.pathsep.join(str(d) for d in bin_dirs)


# ============================================================================
# Mock Agent Fixtures
# ============================================================================


@pytest.fixture
def mock_agent() -> MagicMock:
    """Create a mock Agent that reports an executable under /opt/tools/bin.

    run() returns the reported path without running the work, so
    run.call_count tells how many dispatches happened.
    """
    agent = MagicMock()
    agent.name = "mock-agent"
    agent.labels = frozenset({"linux"})
    agent.root_path = PurePosixPath("/home/agent")
    agent.run.return_value = "/opt/tools/bin/widget"
    agent.create_path.side_effect = PurePosixPath
    return agent


@pytest.fixture
def offline_agent(mock_agent: MagicMock) -> MagicMock:
    """Create a mock Agent that is disconnected."""
    mock_agent.root_path = None
    return mock_agent
