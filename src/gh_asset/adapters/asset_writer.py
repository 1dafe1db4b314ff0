"""Fetch the asset and persist it to disk.

The body is streamed into `<name>.part` next to the destination, flushed and
fsynced, then renamed over the destination. A failed transfer removes the
`.part` file and leaves any previous destination file untouched; a rerun
overwrites the destination with the new bytes.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import httpx

from gh_asset.adapters.http_client import auth_headers
from gh_asset.core.config import AppSettings
from gh_asset.core.domain.models import Credential
from gh_asset.core.errors import FilesystemError, HttpStatusError, NetworkError

logger = logging.getLogger(__name__)

PART_SUFFIX = ".part"


def part_path_for(path: Path) -> Path:
    return path.with_name(path.name + PART_SUFFIX)


def _create_parent(path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise FilesystemError(f"Failed to create parent directories: {exc}") from exc


def _discard(part: Path) -> None:
    try:
        part.unlink(missing_ok=True)
    except OSError as exc:
        logger.warning("could not remove partial file %s: %s", part, exc)


async def _stream_to_file(response: httpx.Response, path: Path) -> int:
    part = part_path_for(path)
    written = 0
    try:
        with open(part, "wb") as fh:
            async for chunk in response.aiter_bytes():
                fh.write(chunk)
                written += len(chunk)
            fh.flush()
            os.fsync(fh.fileno())
        os.replace(part, path)
    except OSError as exc:
        _discard(part)
        raise FilesystemError(f"Failed to write to destination file: {exc}") from exc
    except BaseException:
        _discard(part)
        raise
    return written


async def fetch_to_file(
    client: httpx.AsyncClient,
    url: str,
    credential: Credential,
    path: Path,
    settings: AppSettings | None = None,
) -> int:
    """GET `url` with the credential and write the body to `path`.

    Returns the number of bytes written.

    Raises:
        HttpStatusError: non-2xx response (after redirects).
        NetworkError: the request could not be completed.
        FilesystemError: directories or the file could not be written.
    """

    settings = settings or AppSettings()
    try:
        async with client.stream(
            "GET",
            url,
            headers=auth_headers(credential),
            follow_redirects=True,
            timeout=httpx.Timeout(settings.http_timeout_seconds),
        ) as response:
            if not response.is_success:
                raise HttpStatusError(response.status_code, response.reason_phrase)
            _create_parent(path)
            written = await _stream_to_file(response, path)
    except httpx.HTTPError as exc:
        raise NetworkError(f"Failed to download {url}: {exc}") from exc

    logger.info("wrote %d bytes to %s", written, path)
    return written
