"""Source resolver contract."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from gh_asset.core.domain.models import AssetReference


@runtime_checkable
class SourceResolver(Protocol):
    """Turns a user-supplied source string into an `AssetReference`.

    Implementations raise a subclass of `gh_asset.core.errors.SourceError`
    when the input is not acceptable.
    """

    def resolve(self, source: str) -> AssetReference:
        ...
