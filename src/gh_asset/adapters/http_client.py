"""httpx client builder.

- One place for default headers (User-Agent, Accept) and timeouts.
- Callers choose timeout and redirect policy per request: the extension
  probe uses a short timeout without redirects, the download a long one
  with redirects.
- Tests pass an `httpx.MockTransport` through `transport`.
"""

from __future__ import annotations

import logging
import time

import httpx

from gh_asset.core.config import AppSettings
from gh_asset.core.domain.models import Credential

logger = logging.getLogger(__name__)


async def _log_request(request: httpx.Request) -> None:
    request.extensions["gh_asset_started"] = time.monotonic()
    logger.debug("%s %s", request.method, request.url)


async def _log_response(response: httpx.Response) -> None:
    request = response.request
    started = request.extensions.get("gh_asset_started")
    elapsed = time.monotonic() - started if started is not None else 0.0
    logger.debug(
        "%s %s -> %s (%.2fs)",
        request.method,
        request.url,
        response.status_code,
        elapsed,
    )


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` with gh-asset defaults."""

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": settings.accept,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
        event_hooks={"request": [_log_request], "response": [_log_response]},
    )


def auth_headers(credential: Credential) -> dict[str, str]:
    return {"Authorization": credential.authorization_header()}
