"""
Main CLI entry point for mediatag.
"""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel

from mediatag import __version__
from mediatag.cli.commands.api import api_app
from mediatag.cli.commands.tags import tag_app
from mediatag.cli.commands.tv import tv_app
from mediatag.config.settings import get_settings

console = Console()

app = typer.Typer(
    name="mediatag",
    help="Hierarchical tagging for media libraries",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

# Add subcommands
app.add_typer(api_app, name="api", help="API server commands")
app.add_typer(tv_app, name="tv", help="TV filename capture commands")
app.add_typer(tag_app, name="tags", help="Tag text commands")


@app.command()
def version() -> None:
    """Show version information."""
    console.print(
        Panel(
            f"[bold blue]mediatag[/bold blue] v{__version__}",
            title="Version",
            border_style="blue",
        )
    )


@app.command()
def status() -> None:
    """Show application status."""
    settings = get_settings()
    console.print(
        Panel(
            "[green]✓[/green] mediatag is ready to use\n"
            f"[blue]i[/blue] API address: http://{settings.api_host}:{settings.api_port}/api/v1\n"
            f"[blue]i[/blue] Store lock timeout: {settings.lock_timeout_seconds:g}s\n"
            "[yellow]![/yellow] The tag store lives in memory and is empty on each start",
            title="Status",
            border_style="green",
        )
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", "-v", help="Show version and exit"
    ),
) -> None:
    """
    mediatag - hierarchical tagging for media libraries.

    Tag shows, seasons, episodes, movies, albums and songs; tags flow down
    the containment tree unless a nearer entity excludes them.
    """
    if version:
        console.print(f"mediatag v{__version__}")
        raise typer.Exit(code=0)

    if ctx.invoked_subcommand is None:
        console.print("[yellow]Use 'mediatag --help' for available commands[/yellow]")
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
