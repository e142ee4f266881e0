"""Static asset server hosting the app under test on a real origin."""

import asyncio
import errno
import logging
from collections.abc import AsyncGenerator, Mapping
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, TypeAlias

from aiohttp import web
from yarl import URL

from murwren_e2e.errors import BindError
from murwren_e2e.models.config import HarnessConfig

log = logging.getLogger(__name__)

ServerState: TypeAlias = Literal["stopped", "listening", "stopping"]

MIME_TYPES: Mapping[str, str] = {
    ".html": "text/html",
    ".js": "text/javascript",
    ".css": "text/css",
    ".mp3": "audio/mpeg",
    ".wav": "audio/wav",
}
DEFAULT_CONTENT_TYPE = "application/octet-stream"


def content_type_for(path: Path) -> str:
    """Return the content type served for a file."""
    return MIME_TYPES.get(path.suffix.lower(), DEFAULT_CONTENT_TYPE)


def resolve_request_path(root: Path, request_path: str, index: str) -> Path | None:
    """Map a URL path onto a file under root.

    Args:
        root: Resolved root directory
        request_path: Decoded URL path (e.g. "/js/app.js")
        index: File served for the empty path

    Returns:
        Canonical file path, or None when the path escapes root or cannot
        name a file

    """
    relative = request_path.lstrip("/") or index
    try:
        candidate = (root / relative).resolve()
    except ValueError:
        # embedded NUL byte
        return None
    if not candidate.is_relative_to(root):
        return None
    return candidate


@dataclass(frozen=True, kw_only=True)
class AssetHandler:
    """Request handler serving files from a root directory."""

    root: Path
    index: str

    async def __call__(self, request: web.Request) -> web.Response:
        """Serve the file the request path resolves to."""
        path = resolve_request_path(self.root, request.path, self.index)
        if path is None:
            log.warning("Rejected path outside root: %s", request.path)
            return web.Response(status=403, text="Forbidden")

        try:
            body = await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError:
            return web.Response(status=404, text="File not found")
        except OSError as exc:
            code = errno.errorcode.get(exc.errno or 0, type(exc).__name__)
            log.error("Failed to read %s: %s", path, exc)
            return web.Response(status=500, text=f"Server error: {code}")

        return web.Response(body=body, headers={"Content-Type": content_type_for(path)})


async def _allow_any_origin(
    request: web.Request, response: web.StreamResponse
) -> None:
    response.headers["Access-Control-Allow-Origin"] = "*"


@dataclass(kw_only=True)
class ServerHandle:
    """A running asset server."""

    root: Path
    index: str
    host: str
    port: int
    state: ServerState = "listening"
    runner: web.AppRunner = field(repr=False)

    @property
    def base_url(self) -> URL:
        """Origin URL the browser navigates to."""
        return URL.build(scheme="http", host=self.host, port=self.port, path="/")

    async def stop(self) -> None:
        """Stop accepting connections and wait for in-flight responses."""
        if self.state != "listening":
            return
        self.state = "stopping"
        try:
            await self.runner.cleanup()
        finally:
            self.state = "stopped"
        log.info("HTTP server stopped (port %d)", self.port)


async def start_server(
    root: Path,
    port: int,
    *,
    host: str = "localhost",
    index: str = "index.html",
) -> ServerHandle:
    """Start serving root on host:port.

    Args:
        root: Directory to serve
        port: TCP port, 0 picks a free one
        host: Interface to bind
        index: File served for "/"

    Returns:
        Handle of the listening server

    Raises:
        BindError: If the port cannot be bound

    """
    root = root.resolve()
    app = web.Application()
    app.router.add_get("/{path:.*}", AssetHandler(root=root, index=index))
    app.on_response_prepare.append(_allow_any_origin)

    runner = web.AppRunner(app)
    await runner.setup()
    try:
        await web.TCPSite(runner, host, port).start()
    except OSError as exc:
        await runner.cleanup()
        raise BindError(f"Cannot bind {host}:{port}: {exc.strerror or exc}") from exc

    bound_port = runner.addresses[0][1]
    handle = ServerHandle(
        root=root, index=index, host=host, port=bound_port, runner=runner
    )
    log.info("HTTP server running at %s serving %s", handle.base_url, root)
    return handle


@asynccontextmanager
async def serve_assets(config: HarnessConfig) -> AsyncGenerator[ServerHandle, None]:
    """Serve the app root for the duration of the block."""
    handle = await start_server(
        config.app_root,
        config.server.port,
        host=config.server.host,
        index=config.index,
    )
    try:
        yield handle
    finally:
        await handle.stop()
