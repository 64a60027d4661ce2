"""CLI commands using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, NoReturn

import typer
from rich.logging import RichHandler

from tool_installer import __version__
from tool_installer.context import create_context
from tool_installer.errors import (
    AgentUnavailableError,
    ConfigurationError,
    ExecutableNotFoundError,
    InstallerStateError,
    ResolutionCancelledError,
    ToolInstallerError,
)
from tool_installer.installer import FindOnPathInstaller
from tool_installer.tui import TUI

if TYPE_CHECKING:
    from tool_installer.context import AppContext
    from tool_installer.protocols import Agent
    from tool_installer.types import ToolHome

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="tool-installer",
    help="Locate tools already installed on an agent's PATH",
    no_args_is_help=True,
)

tui = TUI()

# Exit codes per failure kind
EXIT_CONFIGURATION = 2
EXIT_AGENT_UNAVAILABLE = 3
EXIT_NOT_FOUND = 4
EXIT_INTERNAL = 5
EXIT_CANCELLED = 130

_EXIT_CODES: list[tuple[type[ToolInstallerError], int]] = [
    (ConfigurationError, EXIT_CONFIGURATION),
    (AgentUnavailableError, EXIT_AGENT_UNAVAILABLE),
    (ExecutableNotFoundError, EXIT_NOT_FOUND),
    (InstallerStateError, EXIT_INTERNAL),
    (ResolutionCancelledError, EXIT_CANCELLED),
]


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        tui.console.print(f"tool-installer v{__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records to stderr through rich.

    Args:
        verbose: Log at DEBUG instead of WARNING.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=tui.err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Log at debug level")
    ] = False,
) -> None:
    """Locate tools already installed on an agent's PATH."""
    configure_logging(verbose)


def exit_code_for(error: ToolInstallerError) -> int:
    """Map an error to the exit code of its kind."""
    for error_type, code in _EXIT_CODES:
        if isinstance(error, error_type):
            return code
    return EXIT_INTERNAL


def _fail(error: ToolInstallerError) -> NoReturn:
    """Report an error and exit with the code of its kind.

    Raises:
        typer.Exit: Always.
    """
    logger.debug("%s", type(error).__name__, exc_info=error)
    tui.show_error(f"{type(error).__name__}: {error}")
    raise typer.Exit(exit_code_for(error)) from error


def _progress_sink(progress: bool):
    return tui.show_progress if progress else None


def _run_installer(
    installer: FindOnPathInstaller, agent: Agent, progress: bool
) -> ToolHome:
    """Run an installer on an agent, releasing the agent afterwards."""
    try:
        return installer.perform_installation(agent, log=_progress_sink(progress))
    except ToolInstallerError as e:
        _fail(e)
    finally:
        agent.close()


@app.command()
def locate(
    executable: Annotated[str, typer.Argument(help="Executable name to find on PATH")],
    relative_path: Annotated[
        str | None,
        typer.Option("--relative-path", "-r", help="Tool home relative to the executable's folder"),
    ] = None,
    search_path: Annotated[
        str | None, typer.Option("--search-path", "-s", help="Search path to use instead of PATH")
    ] = None,
    isolated: Annotated[
        bool, typer.Option("--isolated", "-i", help="Search from a separate worker process")
    ] = False,
    progress: Annotated[
        bool, typer.Option("--progress", "-p", help="Show each directory checked")
    ] = False,
    _context=None,
) -> None:
    """Print the home directory of an executable found on PATH."""
    ctx = _context or create_context()
    installer = FindOnPathInstaller(
        executable_name=executable,
        relative_path=relative_path,
        search_path=search_path,
    )
    agent = ctx.create_agent(isolated=isolated)
    result = _run_installer(installer, agent, progress)
    tui.show_home(result)


def _load_tools_or_exit(ctx: AppContext):
    try:
        return ctx.load_tools()
    except ConfigurationError as e:
        _fail(e)


@app.command()
def resolve(
    tool: Annotated[str, typer.Argument(help="Tool name from the tools file")],
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Tools file (YAML)")
    ] = None,
    label: Annotated[
        list[str] | None, typer.Option("--label", "-l", help="Label of the local agent")
    ] = None,
    isolated: Annotated[
        bool, typer.Option("--isolated", "-i", help="Search from a separate worker process")
    ] = False,
    progress: Annotated[
        bool, typer.Option("--progress", "-p", help="Show each directory checked")
    ] = False,
    _context=None,
) -> None:
    """Print the home directory of a tool declared in the tools file."""
    ctx = _context or create_context(config)
    tools = _load_tools_or_exit(ctx)

    tool_config = tools.get_tool(tool)
    if tool_config is None:
        _fail(ConfigurationError(f"Tool '{tool}' is not declared in {ctx.config_path}"))

    agent = ctx.create_agent(isolated=isolated, labels=label or [])
    installer_config = tool_config.installer_for(agent)
    if installer_config is None:
        agent.close()
        _fail(ConfigurationError(f"No installer of '{tool}' applies to agent '{agent.name}'"))

    result = _run_installer(installer_config.to_installer(), agent, progress)
    tui.show_home(result)


@app.command("tools")
def list_tools(
    config: Annotated[
        Path | None, typer.Option("--config", "-c", help="Tools file (YAML)")
    ] = None,
    _context=None,
) -> None:
    """List tools declared in the tools file."""
    ctx = _context or create_context(config)
    tools = _load_tools_or_exit(ctx)
    tui.show_tools(tools.tools)


if __name__ == "__main__":
    app()
