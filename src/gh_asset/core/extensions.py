"""File extension inference from HTTP response metadata.

Used only when the destination is a directory and the file name has to be
made up. Sources, in order of preference:

1. the path of a redirect `Location` (storage backends keep the real name),
2. the `filename=` parameter of `Content-Disposition`,
3. `Content-Type` through `MIME_EXTENSIONS`,
4. `DEFAULT_EXTENSION`.
"""

from __future__ import annotations

import re
from typing import Mapping
from urllib.parse import urlsplit

DEFAULT_EXTENSION = ".bin"

MIME_EXTENSIONS: dict[str, str] = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
    "image/bmp": ".bmp",
    "image/tiff": ".tiff",
    "image/svg+xml": ".svg",
    "application/pdf": ".pdf",
    "text/plain": ".txt",
    "text/html": ".html",
    "text/css": ".css",
    "text/javascript": ".js",
    "application/javascript": ".js",
    "application/json": ".json",
    "application/xml": ".xml",
    "application/zip": ".zip",
    "application/gzip": ".gz",
    "application/x-tar": ".tar",
    "video/mp4": ".mp4",
    "video/mpeg": ".mpg",
    "video/quicktime": ".mov",
    "audio/mpeg": ".mp3",
    "audio/wav": ".wav",
    "audio/ogg": ".ogg",
}

_REDIRECT_STATUSES = frozenset({301, 302, 303, 307, 308})
_FILENAME_PARAM = re.compile(r"filename=", re.IGNORECASE)


def extension_for_content_type(content_type: str | None) -> str:
    """Map a Content-Type header value to an extension; unknown types give `.bin`."""

    if not content_type:
        return DEFAULT_EXTENSION
    mime = content_type.split(";", 1)[0].strip().lower()
    return MIME_EXTENSIONS.get(mime, DEFAULT_EXTENSION)


def extension_from_filename(filename: str | None) -> str | None:
    """`.ext` from the last dot of `filename`, or None when there is none."""

    if not filename or "." not in filename:
        return None
    suffix = filename.rsplit(".", 1)[1].strip()
    if not suffix or any(ch in "/\\\0" or ch.isspace() for ch in suffix):
        return None
    return f".{suffix}"


def filename_from_content_disposition(header: str | None) -> str | None:
    """Extract the `filename=` parameter from a Content-Disposition value.

    >>> filename_from_content_disposition('attachment; filename="test.png"')
    'test.png'
    >>> filename_from_content_disposition("attachment; filename=test.jpg")
    'test.jpg'
    >>> filename_from_content_disposition("inline") is None
    True
    """

    if not header:
        return None
    # Parameter names are case-insensitive; the value keeps its case.
    match = _FILENAME_PARAM.search(header)
    if match is None:
        return None
    rest = header[match.end():]

    if rest.startswith('"'):
        end = rest.find('"', 1)
        if end == -1:
            return None
        filename = rest[1:end]
    else:
        filename = rest.split(";", 1)[0].strip()

    return filename or None


def extension_from_location(location: str | None) -> str | None:
    """Extension of the last path segment of a redirect target, query ignored."""

    if not location:
        return None
    try:
        path = urlsplit(location).path
    except ValueError:
        return None
    segment = path.rsplit("/", 1)[-1]
    return extension_from_filename(segment)


def infer_extension(status_code: int | None, headers: Mapping[str, str] | None) -> str:
    """Combine all sources for one probe response.

    `headers` must support case-insensitive lookup (e.g. `httpx.Headers`).
    A missing response (`status_code=None`) yields the default.
    """

    if status_code is None or headers is None:
        return DEFAULT_EXTENSION

    if status_code in _REDIRECT_STATUSES:
        ext = extension_from_location(headers.get("location"))
        if ext:
            return ext
        return DEFAULT_EXTENSION

    if 200 <= status_code < 300:
        filename = filename_from_content_disposition(headers.get("content-disposition"))
        ext = extension_from_filename(filename)
        if ext:
            return ext
        return extension_for_content_type(headers.get("content-type"))

    return DEFAULT_EXTENSION
