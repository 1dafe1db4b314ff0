"""gh-asset CLI entry point."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from gh_asset import __version__
from gh_asset.cli import doctor
from gh_asset.cli.ui_components import configure_logging, print_error
from gh_asset.core.config import AppSettings
from gh_asset.core.domain.models import DownloadResult
from gh_asset.core.domain.source_mode import SourceMode
from gh_asset.core.errors import GhAssetError
from gh_asset.core.services.download_pipeline import DownloadRequest, PipelineHooks, download

app = typer.Typer(
    name="gh-asset",
    no_args_is_help=True,
    help="Download assets from GitHub issues and pull requests using GitHub CLI authentication.",
    epilog=(
        "Requires the GitHub CLI (gh) to be installed and authenticated (gh auth login).\n\n"
        "Example: gh-asset download 1234abcd-1234-1234-1234-1234abcd1234 ./image.png"
    ),
)
app.add_typer(doctor.app, name="doctor")

_err_console = Console(stderr=True)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"gh-asset {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """Download GitHub issue/PR assets."""


def _load_settings() -> AppSettings:
    try:
        return AppSettings()
    except ValidationError as exc:
        _err_console.print(f"[bold red]Invalid configuration:[/bold red] {exc}", highlight=False)
        raise typer.Exit(code=2) from exc


def _announce_start(url: str, path: Path) -> None:
    typer.echo(f"Downloading {url} to {path}")


def _announce_done(result: DownloadResult) -> None:
    typer.echo(f"Successfully downloaded to {result.path}")


@app.command(name="download")
def download_command(
    source: str = typer.Argument(
        ...,
        help="GitHub asset ID (e.g. 1234abcd-1234-1234-1234-1234abcd1234) or asset URL.",
    ),
    destination: str = typer.Argument(
        ...,
        help="Local file path, or existing directory, where the asset will be saved.",
    ),
    mode: Optional[SourceMode] = typer.Option(
        None,
        "--mode",
        "-m",
        case_sensitive=False,
        help="How SOURCE is interpreted: auto, id or url. Defaults to GH_ASSET_SOURCE_MODE (auto).",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging on stderr."),
) -> None:
    """Download an asset by ID or URL."""

    settings = _load_settings()
    configure_logging("DEBUG" if verbose else settings.log_level, _err_console)

    request = DownloadRequest(source=source, destination=destination, mode=mode)
    hooks = PipelineHooks(on_start=_announce_start, on_done=_announce_done)
    try:
        asyncio.run(download(request, settings=settings, hooks=hooks))
    except GhAssetError as exc:
        print_error(_err_console, exc)
        raise typer.Exit(code=1) from exc


def run() -> None:
    app()


if __name__ == "__main__":
    run()
