"""Tool definitions loaded from a YAML tools file."""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from tool_installer.errors import ConfigurationError
from tool_installer.installer import FindOnPathInstaller
from tool_installer.protocols import Agent
from tool_installer.types import fix_empty

# Default tools file location
CONFIG_DIR = Path.home() / ".tool-installer"
CONFIG_ENV_VAR = "TOOL_INSTALLER_CONFIG"


def default_config_path() -> Path:
    """Get the tools file used when none is given explicitly.

    Returns:
        $TOOL_INSTALLER_CONFIG if set, else ~/.tool-installer/tools.yaml.
    """
    override = fix_empty(os.environ.get(CONFIG_ENV_VAR))
    if override:
        return Path(override).expanduser()
    return CONFIG_DIR / "tools.yaml"


class InstallerConfig(BaseModel):
    """Configuration of a find-on-path installer."""

    model_config = ConfigDict(populate_by_name=True)

    label: str | None = None
    executable_name: str | None = Field(default=None, alias="executableName")
    relative_path: str | None = Field(default=None, alias="relativePath")

    @field_validator("label", "executable_name", "relative_path")
    @classmethod
    def _blank_to_none(cls, value: str | None) -> str | None:
        return fix_empty(value)

    def to_installer(self, search_path: str | None = None) -> FindOnPathInstaller:
        """Build the installer described by this configuration.

        Args:
            search_path: Optional search path override.

        Returns:
            Configured FindOnPathInstaller.
        """
        return FindOnPathInstaller(
            label=self.label,
            executable_name=self.executable_name,
            relative_path=self.relative_path,
            search_path=search_path,
        )


class ToolConfig(BaseModel):
    """A named tool and the installers that can provide it."""

    name: str
    installers: list[InstallerConfig] = Field(default_factory=list)

    def installer_for(self, agent: Agent) -> InstallerConfig | None:
        """Pick the first installer whose label applies to the agent.

        Args:
            agent: Agent the tool is needed on.

        Returns:
            Matching installer configuration, or None.
        """
        for installer in self.installers:
            if installer.to_installer().applies_to(agent):
                return installer
        return None


class ToolsFile(BaseModel):
    """Contents of a tools file."""

    version: str = "1.0"
    tools: list[ToolConfig] = Field(default_factory=list)

    @classmethod
    def from_file(cls, path: Path) -> ToolsFile:
        """Load tool definitions from a YAML file.

        Args:
            path: Path to the tools file.

        Returns:
            Parsed ToolsFile.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ConfigurationError: If the YAML or its structure is invalid.
        """
        if not path.exists():
            raise FileNotFoundError(f"Tools file not found: {path}")

        try:
            data = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid tools file {path}: {e}") from e

    def get_tool(self, name: str) -> ToolConfig | None:
        """Get a tool by name.

        Args:
            name: Tool name.

        Returns:
            ToolConfig if declared, None otherwise.
        """
        for tool in self.tools:
            if tool.name == name:
                return tool
        return None
