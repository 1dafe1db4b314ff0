"""Credential provider contract.

A provider hands out the bearer token for one invocation. The production
implementation shells out to the GitHub CLI; tests plug in fakes that
return canned tokens or raise canned errors.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from gh_asset.core.domain.models import Credential


@runtime_checkable
class CredentialProvider(Protocol):
    """Minimal contract for a token source.

    Rules:
    - `fetch_token` is synchronous and called at most once per download.
    - Failures raise a subclass of `gh_asset.core.errors.AuthError`; there is no retry.
    """

    def fetch_token(self) -> Credential:
        """Return the current bearer token or raise `AuthError`."""

        ...
