"""
addgitignore client.

Owns the process-wide catalog cache and HTTP transport and hands them to
the catalog and download services.
"""

from __future__ import annotations

import time
from typing import TYPE_CHECKING, Any, Callable

from addgitignore.cache import TTLCache
from addgitignore.config import Settings, get_settings
from addgitignore.transport import TransportResolver

if TYPE_CHECKING:
    import httpx

    from addgitignore.models import CatalogEntry
    from addgitignore.services.catalog import CatalogClient
    from addgitignore.services.download import DownloadService


class GitignoreClient:
    """
    Entry point for library use.

    Services are created lazily and share one cache and one transport.

    Example:
        >>> async with GitignoreClient() as client:
        ...     entries = await client.catalog.list_merged(["", "Global"])
        ...     op = DownloadOperation(
        ...         mode=WriteMode.OVERWRITE,
        ...         target_path=Path(".gitignore"),
        ...         entry=entries[0],
        ...     )
        ...     await client.downloads.download(op)

        >>> # With explicit settings
        >>> client = GitignoreClient(Settings(proxy="http://proxy:3128"))
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Args:
            settings: Configuration (defaults to get_settings()).
            transport: Base httpx transport override, mainly for tests.
            clock: Time source for cache expiration.
        """
        self._settings = settings or get_settings()
        self._cache: TTLCache[list[CatalogEntry]] = TTLCache(
            self._settings.cache_expiration_interval, clock=clock
        )
        self._resolver = TransportResolver(
            proxy=self._settings.proxy,
            timeout=self._settings.request_timeout,
            transport=transport,
        )

        self._catalog: CatalogClient | None = None
        self._downloads: DownloadService | None = None

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def cache(self) -> TTLCache[list[CatalogEntry]]:
        return self._cache

    @property
    def resolver(self) -> TransportResolver:
        return self._resolver

    @property
    def catalog(self) -> CatalogClient:
        """Catalog listing service."""
        if self._catalog is None:
            from addgitignore.services.catalog import CatalogClient

            self._catalog = CatalogClient(
                self._resolver,
                self._cache,
                owner=self._settings.repository_owner,
                repository=self._settings.repository_name,
                api_base_url=self._settings.api_base_url,
                token=self._settings.github_token,
            )
        return self._catalog

    @property
    def downloads(self) -> DownloadService:
        """Download service."""
        if self._downloads is None:
            from addgitignore.services.download import DownloadService

            self._downloads = DownloadService(self._resolver)
        return self._downloads

    async def __aenter__(self) -> GitignoreClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the shared HTTP client."""
        await self._resolver.aclose()

    def __repr__(self) -> str:
        s = self._settings
        return (
            f"<GitignoreClient repo={s.repository_owner}/{s.repository_name!s} "
            f"ttl={s.cache_expiration_interval}>"
        )


__all__ = ["GitignoreClient"]
