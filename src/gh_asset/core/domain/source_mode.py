"""Source input modes for gh-asset.

Kept in the domain layer so configuration, services and the CLI share one
definition without importing each other.
"""

from __future__ import annotations

from enum import Enum


class SourceMode(str, Enum):
    """How the `download` source argument is interpreted."""

    AUTO = "auto"
    ASSET_ID = "id"
    ASSET_URL = "url"

    @classmethod
    def default(cls) -> "SourceMode":
        """Return the mode used when nothing is configured."""

        return cls.AUTO

    @classmethod
    def sniff(cls, source: str) -> "SourceMode":
        """Pick a concrete mode from the shape of `source`."""

        lowered = source.strip().lower()
        if lowered.startswith(("http://", "https://")):
            return cls.ASSET_URL
        return cls.ASSET_ID

    def label(self) -> str:
        """Human readable label for help text and logging."""

        return {
            SourceMode.AUTO: "auto-detect",
            SourceMode.ASSET_ID: "asset ID",
            SourceMode.ASSET_URL: "asset URL",
        }[self]
