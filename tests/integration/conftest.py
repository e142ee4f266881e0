"""Fixtures for integration tests."""

from collections.abc import AsyncGenerator
from pathlib import Path

import aiohttp
import pytest

from murwren_e2e.server import ServerHandle, start_server


@pytest.fixture
def app_root(tmp_path: Path) -> Path:
    """Create a directory laid out like the app."""
    root = tmp_path / "app"
    (root / "js").mkdir(parents=True)
    (root / "index.html").write_text("<!doctype html><title>Edward R. Mur-Wren</title>")
    (root / "js" / "app.js").write_text("console.log('ready');")
    (root / "style.css").write_text("body { margin: 0; }")
    (root / "sample.mp3").write_bytes(b"ID3\x03\x00")
    (root / "sample.wav").write_bytes(b"RIFF")
    (root / "notes.txt").write_text("notes")
    (tmp_path / "secret.txt").write_text("outside root")
    return root


@pytest.fixture
async def server(app_root: Path) -> AsyncGenerator[ServerHandle, None]:
    """Serve the app root on a free loopback port."""
    handle = await start_server(app_root, 0, host="127.0.0.1")
    try:
        yield handle
    finally:
        await handle.stop()


@pytest.fixture
async def http() -> AsyncGenerator[aiohttp.ClientSession, None]:
    """Create an HTTP client session."""
    async with aiohttp.ClientSession() as session:
        yield session
