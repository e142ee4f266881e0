"""Tests for the static asset server."""

from pathlib import Path
from unittest.mock import Mock

import aiohttp
import pytest
from aiohttp import web

from murwren_e2e.errors import BindError
from murwren_e2e.models.config import HarnessConfig, ServerConfig
from murwren_e2e.server import (
    AssetHandler,
    ServerHandle,
    content_type_for,
    resolve_request_path,
    serve_assets,
    start_server,
)

CORS = "Access-Control-Allow-Origin"


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("index.html", "text/html"),
        ("app.js", "text/javascript"),
        ("style.css", "text/css"),
        ("sample.mp3", "audio/mpeg"),
        ("render.wav", "audio/wav"),
        ("SAMPLE.MP3", "audio/mpeg"),
        ("notes.txt", "application/octet-stream"),
        ("Makefile", "application/octet-stream"),
    ],
)
def test_content_type_for(name: str, expected: str) -> None:
    """Maps file suffixes to content types."""
    assert content_type_for(Path(name)) == expected


class TestResolveRequestPath:
    """Tests for resolve_request_path."""

    def test_empty_path_maps_to_index(self, tmp_path: Path) -> None:
        """The root URL serves the index file."""
        assert resolve_request_path(tmp_path, "/", "index.html") == (
            tmp_path / "index.html"
        )

    def test_nested_path(self, tmp_path: Path) -> None:
        """Nested paths resolve under root."""
        assert resolve_request_path(tmp_path, "/js/app.js", "index.html") == (
            tmp_path / "js" / "app.js"
        )

    @pytest.mark.parametrize(
        "request_path", ["/../secret.txt", "/js/../../secret.txt", "/../../etc/passwd"]
    )
    def test_rejects_paths_outside_root(
        self, tmp_path: Path, request_path: str
    ) -> None:
        """Paths escaping root resolve to None."""
        root = (tmp_path / "app").resolve()
        root.mkdir()

        assert resolve_request_path(root, request_path, "index.html") is None

    def test_rejects_nul_byte(self, tmp_path: Path) -> None:
        """A path that cannot name a file resolves to None instead of raising."""
        assert resolve_request_path(tmp_path, "/bad\x00name.js", "index.html") is None


class TestServing:
    """Tests for serving files over HTTP."""

    @pytest.mark.parametrize(
        ("path", "content_type", "body"),
        [
            ("/", "text/html", b"<!doctype html><title>Edward R. Mur-Wren</title>"),
            ("/js/app.js", "text/javascript", b"console.log('ready');"),
            ("/style.css", "text/css", b"body { margin: 0; }"),
            ("/sample.mp3", "audio/mpeg", b"ID3\x03\x00"),
            ("/sample.wav", "audio/wav", b"RIFF"),
            ("/notes.txt", "application/octet-stream", b"notes"),
        ],
    )
    async def test_serves_file(
        self,
        server: ServerHandle,
        http: aiohttp.ClientSession,
        path: str,
        content_type: str,
        body: bytes,
    ) -> None:
        """Serves file bytes with their content type and a CORS header."""
        async with http.get(server.base_url.with_path(path)) as response:
            assert response.status == 200
            assert response.headers["Content-Type"] == content_type
            assert response.headers[CORS] == "*"
            assert await response.read() == body

    async def test_missing_file(
        self, server: ServerHandle, http: aiohttp.ClientSession
    ) -> None:
        """Unknown files are 404 and still carry the CORS header."""
        async with http.get(server.base_url.with_path("/missing.js")) as response:
            assert response.status == 404
            assert response.headers[CORS] == "*"
            assert await response.text() == "File not found"

    async def test_unreadable_path(
        self, server: ServerHandle, http: aiohttp.ClientSession
    ) -> None:
        """Read failures other than a missing file are 500 with the error code."""
        async with http.get(server.base_url.with_path("/js")) as response:
            assert response.status == 500
            assert response.headers[CORS] == "*"
            assert await response.text() == "Server error: EISDIR"

    async def test_does_not_serve_outside_root(
        self, server: ServerHandle, http: aiohttp.ClientSession
    ) -> None:
        """Traversal never returns a file outside root."""
        url = f"{server.base_url}%2e%2e/secret.txt"
        async with http.get(url) as response:
            assert response.status in {403, 404}
            assert await response.text() != "outside root"

    async def test_symlink_out_of_root_is_forbidden(
        self, server: ServerHandle, http: aiohttp.ClientSession, app_root: Path
    ) -> None:
        """A link inside root pointing outside it is refused with 403."""
        (app_root / "leak.txt").symlink_to(app_root.parent / "secret.txt")

        async with http.get(server.base_url.with_path("/leak.txt")) as response:
            assert response.status == 403
            assert response.headers[CORS] == "*"
            assert await response.text() == "Forbidden"

    async def test_handler_forbids_nul_byte(self, app_root: Path) -> None:
        """The handler answers 403 for a path with an embedded NUL byte."""
        handler = AssetHandler(root=app_root.resolve(), index="index.html")
        request = Mock(spec=web.Request)
        request.path = "/bad\x00name.js"

        response = await handler(request)

        assert response.status == 403
        assert response.text == "Forbidden"


class TestLifecycle:
    """Tests for starting and stopping the server."""

    async def test_picks_free_port(self, app_root: Path) -> None:
        """Port 0 binds a free port and reports it."""
        handle = await start_server(app_root, 0, host="127.0.0.1")
        try:
            assert handle.port > 0
            assert handle.state == "listening"
            assert str(handle.base_url) == f"http://127.0.0.1:{handle.port}/"
        finally:
            await handle.stop()

    async def test_port_in_use(self, server: ServerHandle, app_root: Path) -> None:
        """A second server on a busy port raises BindError."""
        with pytest.raises(BindError, match=f"127.0.0.1:{server.port}"):
            await start_server(app_root, server.port, host="127.0.0.1")

    async def test_stop_is_idempotent(self, app_root: Path) -> None:
        """Stopping twice is a no-op the second time."""
        handle = await start_server(app_root, 0, host="127.0.0.1")

        await handle.stop()
        await handle.stop()

        assert handle.state == "stopped"

    async def test_restart_on_same_port(self, app_root: Path) -> None:
        """A stopped server releases its port."""
        first = await start_server(app_root, 0, host="127.0.0.1")
        port = first.port
        await first.stop()

        for _ in range(2):
            handle = await start_server(app_root, port, host="127.0.0.1")
            try:
                async with (
                    aiohttp.ClientSession() as http,
                    http.get(handle.base_url) as response,
                ):
                    assert response.status == 200
            finally:
                await handle.stop()

    async def test_stopped_server_refuses_connections(
        self, app_root: Path, http: aiohttp.ClientSession
    ) -> None:
        """No requests are answered after stop."""
        handle = await start_server(app_root, 0, host="127.0.0.1")
        await handle.stop()

        with pytest.raises(aiohttp.ClientConnectionError):
            await http.get(handle.base_url)

    async def test_serve_assets_context(self, app_root: Path) -> None:
        """The context manager stops the server on exit."""
        config = HarnessConfig(
            app_root=app_root, server=ServerConfig(host="127.0.0.1", port=0)
        )

        async with serve_assets(config) as handle:
            assert handle.state == "listening"
            assert handle.root == app_root.resolve()

        assert handle.state == "stopped"
