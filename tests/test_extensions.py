from __future__ import annotations

import httpx
import pytest

from gh_asset.core.extensions import (
    DEFAULT_EXTENSION,
    MIME_EXTENSIONS,
    extension_for_content_type,
    extension_from_filename,
    extension_from_location,
    filename_from_content_disposition,
    infer_extension,
)

EXPECTED_MIME_TABLE = {
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


def test_mime_table_matches_supported_types() -> None:
    assert MIME_EXTENSIONS == EXPECTED_MIME_TABLE


@pytest.mark.parametrize(("mime", "extension"), sorted(EXPECTED_MIME_TABLE.items()))
def test_content_type_lookup(mime: str, extension: str) -> None:
    assert extension_for_content_type(mime) == extension


@pytest.mark.parametrize(
    "content_type",
    ["application/octet-stream", "image/heic", "text/markdown", "", None, "garbage"],
)
def test_unmapped_content_types_fall_back_to_bin(content_type: str | None) -> None:
    assert extension_for_content_type(content_type) == DEFAULT_EXTENSION


def test_content_type_parameters_and_case_are_ignored() -> None:
    assert extension_for_content_type("text/plain; charset=utf-8") == ".txt"
    assert extension_for_content_type("Image/PNG") == ".png"


@pytest.mark.parametrize(
    ("header", "filename"),
    [
        ('attachment; filename="test.png"', "test.png"),
        ("attachment; filename=test.jpg", "test.jpg"),
        ("attachment; filename=test.jpg; size=10", "test.jpg"),
        ('attachment; filename="my report.final.pdf"; size=10', "my report.final.pdf"),
        ("inline", None),
        ("attachment; filename=", None),
        ('attachment; filename="unterminated.png', None),
        ("attachment; Filename=Test.PNG", "Test.PNG"),
        ('attachment; FILENAME="a.jpg"', "a.jpg"),
        (None, None),
    ],
)
def test_filename_from_content_disposition(header: str | None, filename: str | None) -> None:
    assert filename_from_content_disposition(header) == filename


@pytest.mark.parametrize(
    ("filename", "extension"),
    [
        ("test.png", ".png"),
        ("archive.tar.gz", ".gz"),
        ("noext", None),
        ("trailingdot.", None),
        ("x.png/nested/deeper", None),
        ("x.png\\nested", None),
        ("a.p ng", None),
        (None, None),
    ],
)
def test_extension_from_filename(filename: str | None, extension: str | None) -> None:
    assert extension_from_filename(filename) == extension


@pytest.mark.parametrize(
    ("location", "extension"),
    [
        ("https://host/path/file.png?X-Amz-Algorithm=AWS4-HMAC-SHA256&X-Amz-Date=1", ".png"),
        ("https://host/path/file.tar.gz", ".gz"),
        ("https://host/path.d/file", None),
        ("https://host/path/?name=file.png", None),
        ("https://host", None),
        (None, None),
    ],
)
def test_extension_from_location(location: str | None, extension: str | None) -> None:
    assert extension_from_location(location) == extension


def test_redirect_location_wins_over_other_headers() -> None:
    headers = httpx.Headers(
        {
            "Location": "https://objects.example.com/a/image.gif?sig=1",
            "Content-Type": "image/png",
            "Content-Disposition": 'attachment; filename="x.jpg"',
        }
    )
    assert infer_extension(302, headers) == ".gif"


def test_redirect_without_extension_defaults() -> None:
    headers = httpx.Headers({"Location": "https://objects.example.com/a/blob", "Content-Type": "text/html"})
    assert infer_extension(302, headers) == DEFAULT_EXTENSION


def test_content_disposition_wins_over_content_type() -> None:
    headers = httpx.Headers(
        {"Content-Disposition": 'attachment; filename="test.png"', "Content-Type": "application/pdf"}
    )
    assert infer_extension(200, headers) == ".png"


def test_inline_disposition_falls_through_to_content_type() -> None:
    headers = httpx.Headers({"Content-Disposition": "inline", "Content-Type": "application/pdf"})
    assert infer_extension(200, headers) == ".pdf"


def test_headers_are_case_insensitive() -> None:
    headers = httpx.Headers({"content-type": "video/mp4"})
    assert infer_extension(200, headers) == ".mp4"


@pytest.mark.parametrize("status", [404, 500, None])
def test_unsuccessful_probe_defaults(status: int | None) -> None:
    headers = httpx.Headers({"Content-Type": "image/png"})
    assert infer_extension(status, headers) == DEFAULT_EXTENSION


def test_success_without_headers_defaults() -> None:
    assert infer_extension(200, httpx.Headers()) == DEFAULT_EXTENSION
