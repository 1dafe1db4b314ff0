"""Destination path safety checks.

Two phases:

1. Textual: reject `..` anywhere and absolute paths under well-known system
   roots.
2. Canonical: for relative input, resolve symlinks of the target (or of its
   parent when the target does not exist yet) and require the result to stay
   inside the working directory.

The system-root list is a plain prefix match. It is not a sandbox: paths such
as `/private/etc` on macOS are not covered.
"""

from __future__ import annotations

import logging
import stat
from pathlib import Path

from gh_asset.core.domain.models import AssetReference, ValidatedDestination
from gh_asset.core.errors import (
    DestinationError,
    InvalidFilenameError,
    OutsideWorkingDirectoryError,
    PathTraversalError,
    SystemDirectoryDeniedError,
)

logger = logging.getLogger(__name__)

SYSTEM_DIRECTORY_PREFIXES: tuple[str, ...] = (
    "/etc",
    "/usr",
    "/var",
    "/sys",
    "/proc",
    "/root",
    "/boot",
)


def _is_within(path: Path, root: Path) -> bool:
    return path == root or path.is_relative_to(root)


def _canonical(path: Path, *, strict: bool) -> Path:
    try:
        return path.resolve(strict=strict)
    except (OSError, RuntimeError) as exc:
        raise DestinationError(f"Failed to validate destination path: {exc}") from exc


def _stat(path: Path):
    try:
        return path.stat()
    except (FileNotFoundError, NotADirectoryError):
        return None
    except OSError as exc:
        raise DestinationError(f"Failed to validate destination path: {exc}") from exc


def _exists(path: Path) -> bool:
    return _stat(path) is not None


def _is_dir(path: Path) -> bool:
    info = _stat(path)
    return info is not None and stat.S_ISDIR(info.st_mode)


def _check_filename(raw: str, path: Path) -> None:
    if not raw or "\0" in raw:
        raise InvalidFilenameError("Invalid filename")
    name = path.name
    # An empty name means the path ends in `.` or is a root; whether that is
    # acceptable depends on it being a directory, checked once resolved.
    if name and not name.strip():
        raise InvalidFilenameError("Invalid filename")


def _ensure_inside(candidate: Path, cwd: Path) -> None:
    if not _is_within(candidate, cwd):
        logger.debug("rejecting %s: outside of %s", candidate, cwd)
        raise OutsideWorkingDirectoryError("Destination path must be within current directory")


def validate_destination(raw: str, *, cwd: Path | None = None) -> ValidatedDestination:
    """Validate a user-supplied destination and return it as an absolute path.

    Args:
        raw: Destination exactly as typed by the user.
        cwd: Working directory to resolve relative paths against. Defaults to
            the process working directory.

    Raises:
        PathTraversalError: `raw` contains `..`.
        SystemDirectoryDeniedError: `raw` is absolute and starts with a system root.
        OutsideWorkingDirectoryError: a relative `raw` resolves outside `cwd`.
        InvalidFilenameError: the final component is empty, blank or contains NUL.
    """

    if ".." in raw:
        raise PathTraversalError("Path traversal detected in destination path")

    path = Path(raw)
    _check_filename(raw, path)

    if path.is_absolute() and raw.startswith(SYSTEM_DIRECTORY_PREFIXES):
        raise SystemDirectoryDeniedError("Access to system directories is not allowed")

    root = _canonical(Path(cwd) if cwd is not None else Path.cwd(), strict=False)
    resolved = path if path.is_absolute() else root / path

    if not path.is_absolute():
        if _exists(resolved):
            _ensure_inside(_canonical(resolved, strict=True), root)
        else:
            parent = resolved.parent
            # A missing parent is created later by the writer; nothing to resolve yet.
            if _exists(parent):
                _ensure_inside(_canonical(parent, strict=True), root)

    is_directory = _is_dir(resolved)
    if not path.name and not is_directory:
        raise InvalidFilenameError("Invalid filename")

    logger.debug("validated destination %s (directory=%s)", resolved, is_directory)
    return ValidatedDestination(path=resolved, is_directory=is_directory)


def resolve_target_file(
    destination: ValidatedDestination,
    reference: AssetReference,
    extension: str | None = None,
) -> Path:
    """Final file path for a download.

    File destinations are used as-is; directory destinations get
    `<asset name><extension>` appended.
    """

    if not destination.is_directory:
        return destination.path
    return destination.path / f"{reference.asset_name}{extension or ''}"
