"""CLI commands using Typer."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

if TYPE_CHECKING:
    from dojo_marketplace.context import AppContext

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn

from dojo_marketplace import __version__
from dojo_marketplace.config import LOG_LEVELS, MarketplaceConfig
from dojo_marketplace.console import TUI
from dojo_marketplace.context import create_context
from dojo_marketplace.errors import InvalidSlugError, MarketplaceError
from dojo_marketplace.hashing import compute_sha256
from dojo_marketplace.types import ItemCategory

app = typer.Typer(
    name="dojo-marketplace",
    help="Install skills, plugins and tools from the Dojo marketplace",
    no_args_is_help=True,
)

console = Console()
tui = TUI(console)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"dojo-marketplace v{__version__}")
        raise typer.Exit()


def configure_logging(level: str) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = False,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            envvar="DOJO_LOG_LEVEL",
            help="debug, info, warning or error (default: info)",
        ),
    ] = None,
) -> None:
    """Install skills, plugins and tools from the Dojo marketplace."""
    try:
        settings = MarketplaceConfig.model_validate({"log_level": log_level} if log_level else {})
    except ValidationError as e:
        raise typer.BadParameter(
            f"must be one of {', '.join(LOG_LEVELS)}", param_hint="--log-level"
        ) from e
    configure_logging(settings.log_level)


def _load_context() -> AppContext:
    """Build the production context, reporting bad settings."""
    try:
        return create_context(MarketplaceConfig.from_env())
    except ValidationError as e:
        tui.show_error(f"Invalid configuration: {e}")
        raise typer.Exit(1) from e


@app.command()
def install(
    slug: Annotated[str, typer.Argument(help="Slug of the item to install")],
    version: Annotated[
        str | None, typer.Option("--version", "-V", help="Version (latest if omitted)")
    ] = None,
    api_key: Annotated[
        str | None, typer.Option("--api-key", help="Marketplace API key (default: DOJO_API_KEY)")
    ] = None,
    _context=None,
) -> None:
    """Download, verify and install an item."""
    ctx = _context or _load_context()

    try:
        try:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
                transient=True,
            ) as progress:
                progress.add_task(f"Installing {slug}...", total=None)
                result = ctx.installer.install_item(slug, version, api_key)
        except MarketplaceError as e:
            tui.show_error(str(e))
            raise typer.Exit(1) from e

        tui.show_install_result(result)
        if not result.success:
            raise typer.Exit(1)
    finally:
        # Let a pending usage notification finish before the process exits
        ctx.installer.notifier.shutdown(wait=True)


@app.command()
def uninstall(
    category: Annotated[ItemCategory, typer.Argument(help="Item category")],
    slug: Annotated[str, typer.Argument(help="Slug of the item to remove")],
    _context=None,
) -> None:
    """Remove an installed item."""
    ctx = _context or _load_context()

    try:
        removed = ctx.installer.uninstall(category, slug)
    except MarketplaceError as e:
        tui.show_error(str(e))
        raise typer.Exit(1) from e

    if removed:
        tui.show_success(f"Uninstalled {slug} ({category.value})")
    else:
        tui.show_warning(f"Item '{slug}' is not installed")


@app.command("list")
def list_installed(
    _context=None,
) -> None:
    """Show installed items."""
    ctx = _context or _load_context()
    tui.show_installed(ctx.installer.list_installed())


@app.command()
def where(
    category: Annotated[ItemCategory, typer.Argument(help="Item category")],
    slug: Annotated[str, typer.Argument(help="Item slug")],
    _context=None,
) -> None:
    """Show the directory an item installs to."""
    ctx = _context or _load_context()
    try:
        path = ctx.layout.get_install_dir(category, slug)
    except InvalidSlugError as e:
        tui.show_error(str(e))
        raise typer.Exit(1) from e
    typer.echo(str(path))


@app.command("hash")
def hash_file(
    file: Annotated[Path, typer.Argument(help="File to hash")],
    _context=None,
) -> None:
    """Print the SHA-256 of a local archive."""
    ctx = _context or _load_context()
    if not ctx.filesystem.exists(file) or ctx.filesystem.is_dir(file):
        tui.show_error(f"File not found: {file}")
        raise typer.Exit(1)
    typer.echo(compute_sha256(ctx.filesystem.read_bytes(file)))


if __name__ == "__main__":
    app()
