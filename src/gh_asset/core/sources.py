"""Source validation and resolution.

Two input shapes are supported, each as its own resolver:

- `AssetIdResolver`: an attachment identifier, embedded into the
  `user-attachments` URL template.
- `AssetUrlResolver`: a full URL on a GitHub host.

`select_resolver` picks one from the configured `SourceMode`.
"""

from __future__ import annotations

import logging
import re
from urllib.parse import urlsplit

from gh_asset.core.config import DEFAULT_ASSET_URL_TEMPLATE, AppSettings
from gh_asset.core.domain.models import AssetReference, SourceKind
from gh_asset.core.domain.source_mode import SourceMode
from gh_asset.core.errors import InvalidAssetIdError, InvalidSourceUrlError
from gh_asset.core.interfaces.source import SourceResolver

logger = logging.getLogger(__name__)

ASSET_ID_MIN_LENGTH = 20
ASSET_ID_MAX_LENGTH = 50

# Canonical 8-4-4-4-12 form, e.g. 1234abcd-1234-1234-1234-1234abcd1234
UUID_ASSET_ID = re.compile(
    r"[a-fA-F0-9]{8}-[a-fA-F0-9]{4}-[a-fA-F0-9]{4}-[a-fA-F0-9]{4}-[a-fA-F0-9]{12}"
)
# Identifiers GitHub hands out that are not canonical UUIDs.
LOOSE_ASSET_ID = re.compile(r"[a-zA-Z0-9][a-zA-Z0-9\-]{18,48}[a-zA-Z0-9]")
LOOSE_MIN_HYPHENS = 2


def is_valid_asset_id(asset_id: str, *, strict: bool = False) -> bool:
    """Check `asset_id` against the accepted identifier shapes.

    With `strict=True` only the canonical UUID shape is accepted.
    """

    if not ASSET_ID_MIN_LENGTH <= len(asset_id) <= ASSET_ID_MAX_LENGTH:
        return False
    if "-" not in asset_id:
        return False

    if UUID_ASSET_ID.fullmatch(asset_id):
        return True
    if strict:
        return False

    return bool(LOOSE_ASSET_ID.fullmatch(asset_id)) and asset_id.count("-") >= LOOSE_MIN_HYPHENS


def build_asset_url(
    asset_id: str,
    template: str = DEFAULT_ASSET_URL_TEMPLATE,
    *,
    strict: bool = False,
) -> str:
    if not is_valid_asset_id(asset_id, strict=strict):
        raise InvalidAssetIdError(
            "Invalid asset ID format. Expected format: xxxxxxxx-xxxx-xxxx-xxxx-xxxxxxxxxxxx"
        )
    return template.format(asset_id=asset_id)


def is_valid_asset_url(url: str) -> bool:
    """True for absolute http(s) URLs whose host mentions `github`.

    The host test is a plain substring match and accepts hosts such as
    `github.example.com`.
    """

    if not url.startswith(("http://", "https://")):
        return False
    try:
        parts = urlsplit(url)
        # Accessing `port` validates it; malformed ports raise ValueError.
        parts.port
    except ValueError:
        return False

    host = parts.hostname
    if not host:
        return False
    if any(ch.isspace() for ch in url):
        return False
    return "github" in host


class AssetIdResolver(SourceResolver):
    """Resolves asset identifiers through the attachment URL template."""

    def __init__(self, template: str = DEFAULT_ASSET_URL_TEMPLATE, *, strict: bool = False) -> None:
        self._template = template
        self._strict = strict

    def resolve(self, source: str) -> AssetReference:
        url = build_asset_url(source, self._template, strict=self._strict)
        logger.debug("resolved asset id %s to %s", source, url)
        return AssetReference(kind=SourceKind.ASSET_ID, value=source, url=url)


class AssetUrlResolver(SourceResolver):
    """Accepts full asset URLs hosted on GitHub."""

    def resolve(self, source: str) -> AssetReference:
        if not is_valid_asset_url(source):
            raise InvalidSourceUrlError(
                f"Invalid source URL: {source!r}. Expected an http(s) URL on a GitHub host."
            )
        return AssetReference(kind=SourceKind.ASSET_URL, value=source, url=source)


def select_resolver(
    mode: SourceMode,
    source: str,
    settings: AppSettings | None = None,
) -> SourceResolver:
    """Return the resolver for `mode`; `AUTO` looks at the shape of `source`."""

    settings = settings or AppSettings()
    if mode is SourceMode.AUTO:
        mode = SourceMode.sniff(source)
        logger.debug("source mode auto-detected as %s", mode.label())

    if mode is SourceMode.ASSET_URL:
        return AssetUrlResolver()
    return AssetIdResolver(settings.asset_url_template, strict=settings.strict_asset_ids)


def resolve_source(
    source: str,
    mode: SourceMode = SourceMode.AUTO,
    settings: AppSettings | None = None,
) -> AssetReference:
    return select_resolver(mode, source, settings).resolve(source)
