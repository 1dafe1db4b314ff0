"""Core interfaces.

Contracts (Protocol) implemented by concrete adapters, so the core depends
on abstractions rather than on `gh` or httpx directly.
"""

from gh_asset.core.interfaces.credentials import CredentialProvider
from gh_asset.core.interfaces.source import SourceResolver

__all__ = ["CredentialProvider", "SourceResolver"]
