"""Rich console output for CLI commands."""

from __future__ import annotations

import yaml
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from dojo_marketplace.types import InstalledItem, InstallResult


class TUI:
    """Text output for dojo-marketplace (non-interactive)."""

    def __init__(self, console: Console | None = None) -> None:
        """Initialize TUI."""
        self.console = console or Console()

    def show_install_result(self, result: InstallResult) -> None:
        """Display the outcome of an install.

        Args:
            result: Result returned by the installer.
        """
        if not result.success:
            self.show_error(f"{result.item_name} {result.version_installed}: {result.error}")
            self.console.print(f"  [dim]computed sha256:[/dim] {result.file_hash}")
            return

        self.show_success(f"Installed {result.item_name} {result.version_installed}")

        table = Table(show_header=False, box=None)
        table.add_column("Field", style="cyan")
        table.add_column("Value")
        table.add_row("Path", str(result.installed_path))
        table.add_row("SHA-256", result.file_hash)
        self.console.print(table)

        if result.instructions:
            self.console.print(
                Panel(result.instructions, title="Instructions", border_style="blue")
            )
        if result.post_install_notes:
            self.console.print(
                Panel(result.post_install_notes, title="Post-install", border_style="yellow")
            )
        if result.config_snippet:
            snippet = yaml.safe_dump(result.config_snippet, sort_keys=False)
            self.console.print("\n[bold]Add to your configuration:[/bold]")
            self.console.print(Syntax(snippet, "yaml"))

    def show_installed(self, items: list[InstalledItem]) -> None:
        """Display installed items table.

        Args:
            items: List of installed items.
        """
        if not items:
            self.console.print("[yellow]No marketplace items installed[/yellow]")
            return

        table = Table(title="Installed Items")
        table.add_column("Slug", style="cyan")
        table.add_column("Category")
        table.add_column("Path")

        for item in items:
            table.add_row(item.slug, item.category.value, str(item.installed_path))

        self.console.print(table)

    def show_success(self, message: str) -> None:
        """Show success message.

        Args:
            message: Success message.
        """
        self.console.print(f"[green]✓[/green] {message}")

    def show_error(self, message: str) -> None:
        """Show error message.

        Args:
            message: Error message.
        """
        self.console.print(f"[red]✗[/red] {message}")

    def show_warning(self, message: str) -> None:
        """Show warning message.

        Args:
            message: Warning message.
        """
        self.console.print(f"[yellow]![/yellow] {message}")

    def show_info(self, message: str) -> None:
        """Show info message.

        Args:
            message: Info message.
        """
        self.console.print(f"[blue]i[/blue] {message}")
