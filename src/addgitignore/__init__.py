"""
addgitignore - .gitignore templates from GitHub.

Usage:
    >>> from addgitignore import GitignoreClient, DownloadOperation, WriteMode
    >>>
    >>> async with GitignoreClient() as client:
    ...     entries = await client.catalog.list_merged(["", "Global"])
    ...     python = next(e for e in entries if e.label == "Python")
    ...     await client.downloads.download(
    ...         DownloadOperation(
    ...             mode=WriteMode.OVERWRITE,
    ...             target_path=Path(".gitignore"),
    ...             entry=python,
    ...         )
    ...     )
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

from addgitignore.cache import CacheItem, TTLCache
from addgitignore.client import GitignoreClient
from addgitignore.config import Settings, configure_settings, get_settings, reset_settings
from addgitignore.exceptions import (
    AddGitignoreError,
    ConfigurationError,
    DownloadError,
    RemoteFetchError,
    WorkspaceError,
)
from addgitignore.flow import AddGitignoreFlow, Cancelled, Prompter, Selected, Selection
from addgitignore.models import CatalogEntry, DownloadOperation, RepositoryItem, WriteMode
from addgitignore.services import CatalogClient, DownloadService
from addgitignore.transport import TransportResolver

try:
    __version__ = version("addgitignore")
except PackageNotFoundError:
    __version__ = "0.0.0"

__all__ = [
    # Client
    "GitignoreClient",
    # Core components
    "TTLCache",
    "CacheItem",
    "TransportResolver",
    "CatalogClient",
    "DownloadService",
    # Models
    "CatalogEntry",
    "DownloadOperation",
    "RepositoryItem",
    "WriteMode",
    # Flow
    "AddGitignoreFlow",
    "Prompter",
    "Selected",
    "Cancelled",
    "Selection",
    # Config
    "Settings",
    "get_settings",
    "configure_settings",
    "reset_settings",
    # Errors
    "AddGitignoreError",
    "ConfigurationError",
    "RemoteFetchError",
    "DownloadError",
    "WorkspaceError",
]
