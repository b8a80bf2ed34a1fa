"""Tag text CLI commands for mediatag."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel

from mediatag.exceptions import EXIT_CODE_INVALID_ARGS
from mediatag.services.tag_normalization import TagNormalizer, clean_display_text

console = Console()

tag_app = typer.Typer(
    name="tags",
    help="Tag text utilities",
    no_args_is_help=True,
)


@tag_app.command("normalize")
def normalize(
    text: str = typer.Argument(..., help="Raw tag text"),
) -> None:
    """Show the registry key and display form tag text maps to."""
    normalized = TagNormalizer().normalize(text)
    if normalized is None:
        console.print(
            Panel(
                "[red]Tag text is empty after normalization[/red]",
                title="Invalid Tag",
                border_style="red",
            )
        )
        raise typer.Exit(EXIT_CODE_INVALID_ARGS)

    console.print(f"[bold]Key:[/bold] {normalized}")
    console.print(f"[bold]Display:[/bold] {clean_display_text(text)}")
