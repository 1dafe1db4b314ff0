"""CLI UI components (rich).

Visual details live here so the commands only deal with flow.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from gh_asset.core.errors import AuthError, GhAssetError


def configure_logging(level: str, console: Console) -> None:
    """Route stdlib logging through rich on the given (stderr) console."""

    handler = RichHandler(console=console, show_path=False, rich_tracebacks=False)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )


def print_error(console: Console, exc: GhAssetError) -> None:
    console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}", highlight=False, soft_wrap=True)
    if isinstance(exc, AuthError):
        console.print("[dim]Run 'gh auth login' or 'gh-asset doctor' to check your setup.[/dim]")


def build_doctor_table() -> Table:
    table = Table(title="gh-asset Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")
    return table
