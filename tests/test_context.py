"""Tests for context module."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock

from tool_installer.agents import LocalAgent, ProcessAgent
from tool_installer.config import CONFIG_ENV_VAR
from tool_installer.context import AppContext, create_context


class TestAppContext:
    """Tests for AppContext dataclass."""

    def test_create_with_all_dependencies(self, tmp_path: Path) -> None:
        """Test creating context with an injected agent factory."""
        agent = MagicMock()
        factory = MagicMock(return_value=agent)
        ctx = AppContext(config_path=tmp_path / "tools.yaml", agent_factory=factory)

        assert ctx.create_agent(isolated=True, labels=["linux"]) is agent
        factory.assert_called_once_with(True, ["linux"])

    def test_default_agent_factory(self, tmp_path: Path) -> None:
        """Test the default factory picks the agent kind by isolation."""
        ctx = AppContext(config_path=tmp_path / "tools.yaml")

        local = ctx.create_agent(labels=["linux"])
        isolated = ctx.create_agent(isolated=True)
        try:
            assert isinstance(local, LocalAgent)
            assert local.labels == frozenset({"linux"})
            assert isinstance(isolated, ProcessAgent)
        finally:
            isolated.close()

    def test_load_tools_missing_file(self, tmp_path: Path) -> None:
        """Test a missing tools file loads as empty."""
        ctx = AppContext(config_path=tmp_path / "missing.yaml")

        assert ctx.load_tools().tools == []

    def test_load_tools(self, tmp_path: Path) -> None:
        """Test the tools file is read."""
        path = tmp_path / "tools.yaml"
        path.write_text("tools:\n  - name: git\n    installers:\n      - executableName: git\n")
        ctx = AppContext(config_path=path)

        assert ctx.load_tools().get_tool("git") is not None


class TestCreateContext:
    """Tests for create_context factory function."""

    def test_respects_config_path(self, tmp_path: Path) -> None:
        """Test create_context uses the provided tools file."""
        ctx = create_context(tmp_path / "tools.yaml")

        assert ctx.config_path == tmp_path / "tools.yaml"

    def test_default_config_path(self, tmp_path: Path, monkeypatch) -> None:
        """Test create_context falls back to the default location."""
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path / "env.yaml"))

        assert create_context().config_path == tmp_path / "env.yaml"
