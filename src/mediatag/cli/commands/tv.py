"""
TV CLI commands for mediatag.

Capture season and episode numbers from episode file names without
touching the tag store, to check how a batch will be imported.
"""

from __future__ import annotations

import logging
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from mediatag.exceptions import EXIT_CODE_INVALID_ARGS, CaptureError
from mediatag.services.filename_capture import Capture, capture_many

logger = logging.getLogger(__name__)

console = Console()

tv_app = typer.Typer(
    name="tv",
    help="TV episode filename capture",
    no_args_is_help=True,
)


def _capture_table(captures: List[Capture], title: str) -> Table:
    table = Table(title=title, show_header=True, header_style="bold blue")
    table.add_column("File", style="cyan")
    table.add_column("Title", style="white")
    table.add_column("Season", style="green", justify="right")
    table.add_column("Episode", style="green", justify="right")
    for capture in captures:
        table.add_row(
            capture.file_path,
            capture.title,
            str(capture.season),
            str(capture.episode),
        )
    return table


def _fail(exc: CaptureError) -> NoReturn:
    console.print(
        Panel(
            f"[red]{exc.message}[/red]\nFile: {exc.file_path}",
            title="Capture Failed",
            border_style="red",
        )
    )
    raise typer.Exit(EXIT_CODE_INVALID_ARGS)


@tv_app.command("episode")
def episode(
    name: str = typer.Argument(..., help="Episode file name"),
    season: Optional[int] = typer.Option(
        None, "--season", "-s", min=0, help="Season number, skips parsing"
    ),
    episode_number: Optional[int] = typer.Option(
        None, "--episode", "-e", min=0, help="Episode number, skips parsing"
    ),
) -> None:
    """Capture season and episode numbers from one file name."""
    try:
        capture = Capture.from_file(name, season=season, episode=episode_number)
    except CaptureError as exc:
        _fail(exc)
    console.print(_capture_table([capture], title="Episode"))


@tv_app.command("season")
def season(
    names: List[str] = typer.Argument(..., help="Episode file names"),
    number: Optional[int] = typer.Option(
        None, "--number", "-n", min=0, help="Season number for every file"
    ),
) -> None:
    """Capture a whole season; the first unparseable name fails the batch."""
    try:
        captures = capture_many(names, season=number)
    except CaptureError as exc:
        _fail(exc)
    logger.debug("Captured %d files", len(captures))
    console.print(_capture_table(captures, title=f"Season ({len(captures)} files)"))
