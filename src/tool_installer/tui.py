"""Console output for the non-interactive CLI."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

if TYPE_CHECKING:
    from tool_installer.config import ToolConfig
    from tool_installer.types import ToolHome


class TUI:
    """Text User Interface for tool-installer."""

    def __init__(self, console: Console | None = None, err_console: Console | None = None) -> None:
        """Initialize TUI.

        Args:
            console: Console for results. Defaults to stdout.
            err_console: Console for diagnostics. Defaults to stderr.
        """
        self.console = console or Console()
        self.err_console = err_console or Console(stderr=True)

    def show_home(self, result: ToolHome) -> None:
        """Print a resolved tool home on its own line, unstyled, for scripts.

        Args:
            result: Resolved tool home.
        """
        self.console.print(str(result.home), markup=False, highlight=False, soft_wrap=True)

    def show_tools(self, tools: list[ToolConfig]) -> None:
        """Show declared tools in a table.

        Args:
            tools: Tools from the tools file.
        """
        if not tools:
            self.console.print("[yellow]No tools configured[/yellow]")
            return

        table = Table(title="Configured Tools")
        table.add_column("Tool", style="cyan")
        table.add_column("Label")
        table.add_column("Executable", style="green")
        table.add_column("Relative Path")

        for tool in tools:
            for installer in tool.installers:
                table.add_row(
                    escape(tool.name),
                    escape(installer.label or "(any)"),
                    escape(installer.executable_name or ""),
                    escape(installer.relative_path or "."),
                )

        self.console.print(table)

    def show_progress(self, message: str) -> None:
        """Show a diagnostic line from a search.

        Args:
            message: Progress message.
        """
        self.err_console.print(f"[dim]{escape(message)}[/dim]")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.err_console.print(f"[red]✗[/red] {escape(message)}")
