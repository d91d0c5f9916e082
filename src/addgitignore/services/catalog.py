"""
Catalog of .gitignore templates from a GitHub repository.

Lists repository directories through the GitHub contents API, keeps only
``*.gitignore`` files and caches the result per sub-path.
"""

from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING, Iterable, Sequence

import httpx
from pydantic import ValidationError

from addgitignore.exceptions import RemoteFetchError
from addgitignore.logging import get_logger
from addgitignore.models import CatalogEntry, RepositoryItem

if TYPE_CHECKING:
    from addgitignore.cache import TTLCache
    from addgitignore.transport import TransportResolver

logger = get_logger(__name__)

CACHE_KEY_PREFIX = "gitignore/"

GITHUB_ACCEPT = "application/vnd.github+json"


def sort_entries(entries: Iterable[CatalogEntry]) -> list[CatalogEntry]:
    """Sort entries by label, ignoring case (``Android < macOS < Node``)."""
    return sorted(entries, key=lambda entry: (entry.label.casefold(), entry.label))


def parse_listing(items: Sequence[RepositoryItem]) -> list[CatalogEntry]:
    """Turn raw listing items into catalog entries, dropping non-templates."""
    return [CatalogEntry.from_item(item) for item in items if item.is_template]


class CatalogClient:
    """
    Lists templates from the remote repository.

    Example:
        >>> catalog = CatalogClient(resolver, cache)
        >>> entries = await catalog.list_merged(["", "Global"])
        >>> [e.label for e in entries][:3]
        ['Actionscript', 'Ada', 'Agda']
    """

    def __init__(
        self,
        resolver: TransportResolver,
        cache: TTLCache[list[CatalogEntry]],
        owner: str = "github",
        repository: str = "gitignore",
        api_base_url: str = "https://api.github.com",
        token: str | None = None,
    ) -> None:
        self._resolver = resolver
        self._cache = cache
        self._owner = owner
        self._repository = repository
        self._api_base_url = api_base_url.rstrip("/")
        self._token = token

    @staticmethod
    def cache_key(sub_path: str) -> str:
        return CACHE_KEY_PREFIX + sub_path

    def contents_url(self, sub_path: str) -> str:
        url = f"{self._api_base_url}/repos/{self._owner}/{self._repository}/contents"
        sub_path = sub_path.strip("/")
        return f"{url}/{sub_path}" if sub_path else url

    @property
    def _headers(self) -> dict[str, str]:
        headers = {"Accept": GITHUB_ACCEPT}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def list_entries(self, sub_path: str = "") -> list[CatalogEntry]:
        """
        List templates in one repository directory.

        Served from the cache while the cached copy is fresh; otherwise one
        listing request is made and its result cached. Failures are not
        cached.

        Args:
            sub_path: Directory inside the repository ("" is the root).

        Returns:
            Catalog entries in listing order.

        Raises:
            RemoteFetchError: If the request fails or GitHub returns an error.
            ConfigurationError: If the proxy configuration is malformed.
        """
        key = self.cache_key(sub_path)
        cached = self._cache.get(key)
        if cached is not None:
            logger.debug(f"Catalog cache hit for {key!r}")
            return list(cached)

        logger.debug(f"Catalog cache miss for {key!r}, fetching")
        items = await self._fetch(sub_path)
        entries = parse_listing(items)

        self._cache.put(key, entries)
        return list(entries)

    async def list_merged(self, sub_paths: Sequence[str]) -> list[CatalogEntry]:
        """
        List templates from several directories as one sorted catalog.

        Directories are fetched concurrently; labels present in more than
        one directory are kept as separate entries.
        """
        results = await asyncio.gather(*(self.list_entries(p) for p in sub_paths))
        return sort_entries(entry for entries in results for entry in entries)

    async def _fetch(self, sub_path: str) -> list[RepositoryItem]:
        client = self._resolver.get_transport()
        url = self.contents_url(sub_path)

        try:
            response = await client.get(url, headers=self._headers)
        except httpx.HTTPError as e:
            raise RemoteFetchError(
                f"Failed to list {url}: {e}", sub_path=sub_path, cause=e
            ) from e

        remaining = response.headers.get("x-ratelimit-remaining")
        if remaining is not None:
            logger.debug(f"GitHub API rate limit remaining: {remaining}")

        if not response.is_success:
            raise RemoteFetchError(
                _error_message(response),
                status_code=response.status_code,
                sub_path=sub_path,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise RemoteFetchError(
                f"Invalid JSON in listing of {url}", sub_path=sub_path, cause=e
            ) from e

        if not isinstance(data, list):
            raise RemoteFetchError(
                f"Expected a directory listing at {url}", sub_path=sub_path
            )

        try:
            return [RepositoryItem.model_validate(raw) for raw in data]
        except ValidationError as e:
            raise RemoteFetchError(
                f"Unexpected listing format at {url}", sub_path=sub_path, cause=e
            ) from e


def _error_message(response: httpx.Response) -> str:
    """Best-effort upstream message from an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason_phrase


__all__ = ["CatalogClient", "CACHE_KEY_PREFIX", "parse_listing", "sort_entries"]
