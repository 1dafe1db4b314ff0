from __future__ import annotations

import asyncio
from pathlib import Path

import httpx
import pytest

from conftest import ASSET_URL, TOKEN
from gh_asset.adapters.asset_writer import fetch_to_file, part_path_for
from gh_asset.core.errors import FilesystemError, HttpStatusError, NetworkError

PAYLOAD = b"\x89PNG\r\n\x1a\n" + b"x" * 4096


def _fetch(make_client, credential, settings, handler, path: Path) -> int:
    async def _run() -> int:
        async with make_client(handler) as client:
            return await fetch_to_file(client, ASSET_URL, credential, path, settings)

    return asyncio.run(_run())


def test_writes_body_and_creates_parents(make_client, credential, settings, tmp_path: Path) -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=PAYLOAD)

    target = tmp_path / "nested" / "dir" / "image.png"
    written = _fetch(make_client, credential, settings, handler, target)

    assert written == len(PAYLOAD)
    assert target.read_bytes() == PAYLOAD
    assert not part_path_for(target).exists()
    assert seen[0].method == "GET"
    assert seen[0].headers["Authorization"] == f"token {TOKEN}"


def test_follows_redirects(make_client, credential, settings, tmp_path: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.host == "github.com":
            return httpx.Response(302, headers={"Location": "https://objects.githubusercontent.com/a/image.png"})
        return httpx.Response(200, content=PAYLOAD)

    target = tmp_path / "image.png"
    _fetch(make_client, credential, settings, handler, target)
    assert target.read_bytes() == PAYLOAD


def test_overwrites_existing_file(make_client, credential, settings, tmp_path: Path) -> None:
    target = tmp_path / "image.png"
    target.write_bytes(b"old contents that are longer than the new body" * 200)

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=PAYLOAD)

    _fetch(make_client, credential, settings, handler, target)
    _fetch(make_client, credential, settings, handler, target)
    assert target.read_bytes() == PAYLOAD


@pytest.mark.parametrize("status", [401, 404, 500])
def test_non_success_status_raises(make_client, credential, settings, tmp_path: Path, status: int) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status, content=b"nope")

    target = tmp_path / "image.png"
    with pytest.raises(HttpStatusError) as excinfo:
        _fetch(make_client, credential, settings, handler, target)

    assert excinfo.value.status == status
    assert str(status) in str(excinfo.value)
    assert not target.exists()


def test_transport_failure_raises_network_error(make_client, credential, settings, tmp_path: Path) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    target = tmp_path / "image.png"
    with pytest.raises(NetworkError):
        _fetch(make_client, credential, settings, handler, target)
    assert not target.exists()


def test_unwritable_parent_raises_filesystem_error(make_client, credential, settings, tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=PAYLOAD)

    with pytest.raises(FilesystemError):
        _fetch(make_client, credential, settings, handler, blocker / "image.png")


def test_failed_rename_keeps_previous_destination(make_client, credential, settings, tmp_path: Path) -> None:
    target = tmp_path / "taken"
    target.mkdir()
    (target / "keep.txt").write_text("keep")

    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=PAYLOAD)

    with pytest.raises(FilesystemError):
        _fetch(make_client, credential, settings, handler, target)

    assert (target / "keep.txt").read_text() == "keep"
    assert not part_path_for(target).exists()
