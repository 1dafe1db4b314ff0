"""Domain models (pydantic v2).

These describe *what* a download is made of, not *how* it is obtained. All
of them are frozen: a value is built once per invocation and never changes.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path, PurePosixPath
from urllib.parse import urlsplit

from pydantic import BaseModel, Field, SecretStr
from pydantic.config import ConfigDict

DEFAULT_ASSET_NAME = "asset"


class SourceKind(str, Enum):
    ASSET_ID = "asset_id"
    ASSET_URL = "asset_url"


class AssetReference(BaseModel):
    """A validated download source and the URL it resolves to."""

    model_config = ConfigDict(frozen=True)

    kind: SourceKind = Field(
        ...,
        description="Which representation the user supplied.",
    )
    value: str = Field(
        ...,
        min_length=1,
        description="The source exactly as supplied (asset ID or URL).",
    )
    url: str = Field(
        ...,
        min_length=1,
        description="Absolute URL the asset is downloaded from.",
    )

    @property
    def asset_name(self) -> str:
        """Base name for files written into a directory destination.

        The last path segment of the asset URL, without any suffix. Segments
        that cannot be used as a file name fall back to `asset`.
        """

        segment = urlsplit(self.url).path.rstrip("/").rsplit("/", 1)[-1]
        if segment in ("", ".", "..") or "\\" in segment or "\0" in segment:
            return DEFAULT_ASSET_NAME
        stem = PurePosixPath(segment).stem
        return stem or DEFAULT_ASSET_NAME


class ValidatedDestination(BaseModel):
    """A destination path that passed the safety checks."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(
        ...,
        description="Absolute destination path (working directory applied).",
    )
    is_directory: bool = Field(
        default=False,
        description="True when the path was an existing directory at validation time.",
    )


class Credential(BaseModel):
    """Bearer token for one invocation. Never persisted or logged."""

    model_config = ConfigDict(frozen=True)

    token: SecretStr = Field(
        ...,
        description="Opaque GitHub token.",
    )

    def authorization_header(self) -> str:
        return f"token {self.token.get_secret_value()}"


class DownloadResult(BaseModel):
    """Outcome of a successful download."""

    model_config = ConfigDict(frozen=True)

    reference: AssetReference
    path: Path
    bytes_written: int = Field(default=0, ge=0)
    extension: str | None = Field(
        default=None,
        description="Inferred extension when the destination was a directory.",
    )
