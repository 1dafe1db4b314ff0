"""HEAD probe that infers the extension for a directory destination.

Best-effort: any failure (network, timeout, odd headers) degrades to
`.bin` and the download carries on.
"""

from __future__ import annotations

import logging

import httpx

from gh_asset.adapters.http_client import auth_headers
from gh_asset.core.config import AppSettings
from gh_asset.core.domain.models import Credential
from gh_asset.core.extensions import DEFAULT_EXTENSION, infer_extension

logger = logging.getLogger(__name__)


async def probe_extension(
    client: httpx.AsyncClient,
    url: str,
    credential: Credential,
    settings: AppSettings | None = None,
) -> str:
    """Return the extension (with leading dot) for the asset at `url`. Never raises."""

    settings = settings or AppSettings()
    try:
        response = await client.head(
            url,
            headers=auth_headers(credential),
            follow_redirects=False,
            timeout=httpx.Timeout(settings.probe_timeout_seconds),
        )
    except httpx.HTTPError as exc:
        logger.info("extension probe failed for %s: %s; using %s", url, exc, DEFAULT_EXTENSION)
        return DEFAULT_EXTENSION

    extension = infer_extension(response.status_code, response.headers)
    logger.debug("probe %s -> %s, extension %s", url, response.status_code, extension)
    return extension
