"""Credential provider backed by the GitHub CLI.

Runs `gh auth token` and uses its stdout as the bearer token. The login
flow and gh's own configuration are left entirely to gh.
"""

from __future__ import annotations

import logging
import subprocess

from gh_asset.core.config import AppSettings
from gh_asset.core.domain.models import Credential
from gh_asset.core.errors import AuthDeniedError, AuthEmptyError, AuthUnavailableError
from gh_asset.core.interfaces.credentials import CredentialProvider

logger = logging.getLogger(__name__)

GH_TOKEN_ARGS = ("auth", "token")
GH_TIMEOUT_SECONDS = 30.0


class GhCliCredentialProvider(CredentialProvider):
    """Fetches the token of the currently authenticated `gh` user."""

    def __init__(self, settings: AppSettings | None = None) -> None:
        self._settings = settings or AppSettings()

    @property
    def executable(self) -> str:
        return self._settings.gh_executable

    def fetch_token(self) -> Credential:
        return fetch_gh_token(self.executable)


def fetch_gh_token(executable: str = "gh") -> Credential:
    """Run `<executable> auth token` and wrap the output in a `Credential`."""

    command = [executable, *GH_TOKEN_ARGS]
    logger.debug("running %s", " ".join(command))
    try:
        completed = subprocess.run(
            command,
            capture_output=True,
            check=False,
            timeout=GH_TIMEOUT_SECONDS,
        )
    except (OSError, subprocess.SubprocessError) as exc:
        raise AuthUnavailableError(
            f"Failed to execute gh command: {exc}. "
            "Make sure GitHub CLI is installed and authenticated."
        ) from exc

    if completed.returncode != 0:
        diagnostic = completed.stderr.decode("utf-8", errors="replace").strip()
        raise AuthDeniedError(
            f"GitHub CLI authentication failed: {diagnostic}",
            diagnostic=diagnostic,
        )

    try:
        token = completed.stdout.decode("utf-8").strip()
    except UnicodeDecodeError as exc:
        raise AuthEmptyError(f"Failed to parse gh auth token output: {exc}") from exc

    if not token:
        raise AuthEmptyError("GitHub CLI token is empty. Please run 'gh auth login' first.")
    if any(ch.isspace() for ch in token):
        raise AuthEmptyError("Failed to parse gh auth token output: expected a single token.")

    return Credential(token=token)
