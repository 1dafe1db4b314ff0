"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio
import shutil

import httpx
import typer
from rich.console import Console

from gh_asset.adapters.gh_cli import GhCliCredentialProvider
from gh_asset.adapters.http_client import build_async_client
from gh_asset.cli.ui_components import build_doctor_table
from gh_asset.core.config import AppSettings, get_user_env_file
from gh_asset.core.errors import AuthError

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

CONNECTIVITY_URL = "https://github.com"


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.head(url, timeout=httpx.Timeout(settings.probe_timeout_seconds))
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, str(exc) or exc.__class__.__name__


def _check_token(settings: AppSettings) -> tuple[bool, str]:
    """Ask gh for a token without ever showing it."""

    try:
        GhCliCredentialProvider(settings).fetch_token()
    except AuthError as exc:
        return False, str(exc)
    return True, "Token available (hidden)"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()
    table = build_doctor_table()

    gh_path = shutil.which(settings.gh_executable)
    table.add_row("GitHub CLI", "OK" if gh_path else "FAIL", gh_path or f"{settings.gh_executable} not found on PATH")

    ok_token, detail_token = _check_token(settings)
    table.add_row("gh auth token", "OK" if ok_token else "FAIL", detail_token)

    # Connectivity (best-effort)
    ok_http, detail_http = asyncio.run(_check_http(CONNECTIVITY_URL, settings))
    table.add_row("HTTP connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_token:
        _console.print("\n[yellow]Note:[/yellow] Run `gh auth login` to authenticate the GitHub CLI.")
        raise typer.Exit(code=1)


@app.command(name="config")
def show_config() -> None:
    """Show the effective configuration and where it is read from."""

    settings = AppSettings()
    table = build_doctor_table()
    table.title = "gh-asset Config"

    table.add_row("gh executable", "OK", settings.gh_executable)
    table.add_row("Source mode", "OK", settings.source_mode.label())
    table.add_row("Strict asset IDs", "OK", str(settings.strict_asset_ids))
    table.add_row("Download timeout", "OK", f"{settings.http_timeout_seconds:g}s")
    table.add_row("Probe timeout", "OK", f"{settings.probe_timeout_seconds:g}s")
    table.add_row("User-Agent", "OK", settings.user_agent)
    table.add_row("User config", "OK" if get_user_env_file().exists() else "OPTIONAL", str(get_user_env_file()))

    _console.print(table)
