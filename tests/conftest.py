"""
Pytest configuration and fixtures for addgitignore tests.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import httpx
import pytest

from addgitignore.cache import TTLCache
from addgitignore.config import Settings
from addgitignore.models import CatalogEntry, DownloadOperation, WriteMode
from addgitignore.transport import TransportResolver

API = "https://api.github.com/repos/github/gitignore/contents"


class FakeClock:
    """Manually advanced clock for cache expiration tests."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FailingStream(httpx.AsyncByteStream):
    """Response body that yields some bytes and then breaks."""

    def __init__(self, *chunks: bytes) -> None:
        self._chunks = chunks

    async def __aiter__(self):
        for chunk in self._chunks:
            yield chunk
        raise httpx.ReadError("Connection reset by peer")


def repo_item(name: str, path: str | None = None, type: str = "file") -> dict:
    """Raw contents-API item."""
    path = path or name
    return {
        "name": name,
        "path": path,
        "type": type,
        "download_url": (
            f"https://raw.githubusercontent.com/github/gitignore/main/{path}"
            if type == "file"
            else None
        ),
        "sha": "0" * 40,
        "size": 120,
    }


# ============================================================================
# Environment
# ============================================================================


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep host proxy and ADDGITIGNORE_* variables out of tests."""
    import os

    for name in list(os.environ):
        if name.upper() in ("HTTPS_PROXY", "HTTP_PROXY", "ALL_PROXY") or name.startswith(
            "ADDGITIGNORE_"
        ):
            monkeypatch.delenv(name, raising=False)

    from addgitignore.config import reset_settings

    reset_settings()
    yield
    reset_settings()
    _reset_package_logger()


def _reset_package_logger() -> None:
    """Undo setup_logging() so caplog sees package records again."""
    import logging

    root = logging.getLogger("addgitignore")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    root.setLevel(logging.NOTSET)
    root.propagate = True


# ============================================================================
# Core fixtures
# ============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def cache(clock) -> TTLCache:
    """Catalog cache with a one hour TTL and a fake clock."""
    return TTLCache(3600, clock=clock)


@pytest.fixture
def settings() -> Settings:
    return Settings()


@pytest.fixture
def listings() -> dict[str, list[dict]]:
    """Remote listing per sub-path."""
    return {
        "": [
            repo_item("Python.gitignore"),
            repo_item("Node.gitignore"),
            repo_item("README.md"),
            repo_item("Global", type="dir"),
            repo_item("community", type="dir"),
        ],
        "Global": [
            repo_item("macOS.gitignore", "Global/macOS.gitignore"),
            repo_item("Android.gitignore", "Global/Android.gitignore"),
            repo_item("Vim.gitignore", "Global/Vim.gitignore"),
        ],
    }


@pytest.fixture
def github(listings):
    """
    Fake GitHub: serves the contents API from ``listings`` and raw files.

    Records every request in ``github.requests``.
    """

    class FakeGitHub:
        def __init__(self) -> None:
            self.requests: list[httpx.Request] = []
            self.files: dict[str, bytes] = {}
            self.raw_handler: Callable[[httpx.Request], httpx.Response] | None = None

        def listing_requests(self, sub_path: str | None = None) -> list[httpx.Request]:
            found = [r for r in self.requests if r.url.host == "api.github.com"]
            if sub_path is None:
                return found
            url = f"{API}/{sub_path}" if sub_path else API
            return [r for r in found if str(r.url) == url]

        def handler(self, request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            url = str(request.url)

            if request.url.host == "api.github.com":
                sub_path = url[len(API):].lstrip("/")
                if sub_path not in listings:
                    return httpx.Response(404, json={"message": "Not Found"})
                return httpx.Response(
                    200,
                    json=listings[sub_path],
                    headers={"x-ratelimit-remaining": "59"},
                )

            if self.raw_handler is not None:
                return self.raw_handler(request)
            if url in self.files:
                return httpx.Response(200, content=self.files[url])
            return httpx.Response(404, text="404: Not Found")

    return FakeGitHub()


@pytest.fixture
def mock_transport(github) -> httpx.MockTransport:
    return httpx.MockTransport(github.handler)


@pytest.fixture
def resolver(mock_transport) -> TransportResolver:
    """Resolver with no proxy that talks to the fake GitHub."""
    return TransportResolver(environ={}, transport=mock_transport)


# ============================================================================
# Test data
# ============================================================================


@pytest.fixture
def python_entry() -> CatalogEntry:
    return CatalogEntry(
        label="Python",
        description="Python.gitignore",
        url="https://raw.githubusercontent.com/github/gitignore/main/Python.gitignore",
    )


@pytest.fixture
def make_operation(python_entry):
    """Factory for download operations on python_entry."""

    def _make(path: Path, mode: WriteMode = WriteMode.OVERWRITE) -> DownloadOperation:
        return DownloadOperation(mode=mode, target_path=path, entry=python_entry)

    return _make


@pytest.fixture
def failing_stream():
    """Factory for response bodies that break after the given chunks."""
    return FailingStream
