"""Download orchestration.

One invocation, one flow:

    authenticate -> resolve source -> validate destination
        -> (directory only) probe extension -> fetch and write

The CLI delegates here and only supplies hooks for its progress lines, so
the flow stays free of printing and can be driven from tests.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

import httpx

from gh_asset.adapters.asset_writer import fetch_to_file
from gh_asset.adapters.extension_probe import probe_extension
from gh_asset.adapters.gh_cli import GhCliCredentialProvider
from gh_asset.adapters.http_client import build_async_client
from gh_asset.core.config import AppSettings
from gh_asset.core.domain.models import DownloadResult
from gh_asset.core.domain.source_mode import SourceMode
from gh_asset.core.interfaces.credentials import CredentialProvider
from gh_asset.core.paths import resolve_target_file, validate_destination
from gh_asset.core.sources import select_resolver

logger = logging.getLogger(__name__)


@dataclass
class DownloadRequest:
    """Parameters of a single download."""

    source: str
    destination: str
    mode: SourceMode | None = None
    cwd: Path | None = None


@dataclass
class PipelineHooks:
    """Callbacks for user-facing progress. All optional."""

    on_start: Callable[[str, Path], None] | None = None
    on_done: Callable[[DownloadResult], None] | None = None


async def download(
    request: DownloadRequest,
    *,
    settings: AppSettings | None = None,
    credentials: CredentialProvider | None = None,
    client: httpx.AsyncClient | None = None,
    hooks: PipelineHooks | None = None,
) -> DownloadResult:
    """Run one download; every failure propagates as a `GhAssetError`."""

    settings = settings or AppSettings()
    credentials = credentials or GhCliCredentialProvider(settings)
    hooks = hooks or PipelineHooks()
    mode = request.mode or settings.source_mode

    credential = credentials.fetch_token()

    reference = select_resolver(mode, request.source, settings).resolve(request.source)
    destination = validate_destination(request.destination, cwd=request.cwd)

    owns_client = client is None
    http = client if client is not None else build_async_client(settings)
    try:
        extension: str | None = None
        if destination.is_directory:
            extension = await probe_extension(http, reference.url, credential, settings)
        target = resolve_target_file(destination, reference, extension)

        if hooks.on_start:
            hooks.on_start(reference.url, target)
        logger.info("downloading %s to %s", reference.url, target)

        written = await fetch_to_file(http, reference.url, credential, target, settings)
    finally:
        if owns_client:
            await http.aclose()

    result = DownloadResult(
        reference=reference,
        path=target,
        bytes_written=written,
        extension=extension,
    )
    if hooks.on_done:
        hooks.on_done(result)
    return result
