"""
Shared HTTP transport with proxy resolution.

The proxy is resolved once (explicit setting, then HTTPS_PROXY, then
HTTP_PROXY) and a single httpx.AsyncClient is built from it. Every request
made by the catalog and download services goes through that client.
"""

from __future__ import annotations

import os
import threading
from typing import Mapping

import httpx

from addgitignore.config import USER_AGENT
from addgitignore.exceptions import ConfigurationError
from addgitignore.logging import get_logger

logger = get_logger(__name__)

# Checked in order after the explicit setting
PROXY_ENV_VARS = ("HTTPS_PROXY", "HTTP_PROXY")


class TransportResolver:
    """
    Builds the shared HTTP client on first use and hands it out afterwards.

    Construction is guarded by a lock, so concurrent first callers still get
    one client. A malformed proxy fails every call with the same
    ConfigurationError; resolution is not attempted again.

    Example:
        >>> resolver = TransportResolver(proxy="http://proxy.local:3128")
        >>> client = resolver.get_transport()
        >>> client is resolver.get_transport()
        True
    """

    def __init__(
        self,
        proxy: str | None = None,
        timeout: float = 5.0,
        headers: Mapping[str, str] | None = None,
        environ: Mapping[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Args:
            proxy: Explicitly configured proxy URL (wins over environment).
            timeout: Request timeout in seconds.
            headers: Extra default headers (User-Agent is always set).
            environ: Environment to read proxy variables from (os.environ).
            transport: Base httpx transport override, mainly for tests.
        """
        self._configured_proxy = proxy
        self._timeout = timeout
        self._headers = {"User-Agent": USER_AGENT, **(headers or {})}
        self._environ = os.environ if environ is None else environ
        self._transport = transport

        self._lock = threading.Lock()
        self._client: httpx.AsyncClient | None = None
        self._error: ConfigurationError | None = None
        self._proxy_url: str | None = None

    def resolve_proxy(self) -> str | None:
        """Return the first non-empty proxy URL from settings or environment."""
        if self._configured_proxy:
            return self._configured_proxy
        for name in PROXY_ENV_VARS:
            value = self._environ.get(name) or self._environ.get(name.lower())
            if value:
                return value
        return None

    @property
    def proxy_url(self) -> str | None:
        """Proxy used by the built client (None before first use or if direct)."""
        return self._proxy_url

    @property
    def is_built(self) -> bool:
        return self._client is not None

    def get_transport(self) -> httpx.AsyncClient:
        """
        Get the shared client, building it on first call.

        Raises:
            ConfigurationError: If the resolved proxy URL is malformed.
        """
        if self._client is not None:
            return self._client

        with self._lock:
            if self._error is not None:
                raise self._error
            if self._client is None:
                try:
                    self._client = self._build()
                except ConfigurationError as e:
                    self._error = e
                    raise
            return self._client

    def _build(self) -> httpx.AsyncClient:
        proxy = self.resolve_proxy()
        httpx_proxy = _parse_proxy(proxy) if proxy else None

        if proxy:
            logger.debug(f"Using proxy {proxy}")
        else:
            logger.debug("No proxy configured, using direct connection")

        try:
            client = httpx.AsyncClient(
                proxy=httpx_proxy,
                transport=self._transport,
                headers=self._headers,
                timeout=self._timeout,
                follow_redirects=True,
                trust_env=False,
            )
        except ImportError as e:
            # socks5 proxies need the httpx[socks] extra
            raise ConfigurationError(
                f"Proxy {proxy!r} is not supported: {e}", proxy=proxy, cause=e
            ) from e

        self._proxy_url = proxy
        return client

    async def aclose(self) -> None:
        """Close the shared client if it was built."""
        with self._lock:
            client, self._client = self._client, None
        if client is not None:
            await client.aclose()


def _parse_proxy(proxy: str) -> httpx.Proxy:
    """Validate a proxy URL, raising ConfigurationError if it is malformed."""
    try:
        parsed = httpx.Proxy(proxy)
    except (ValueError, httpx.InvalidURL) as e:
        raise ConfigurationError(
            f"Invalid proxy URL {proxy!r}: {e}", proxy=proxy, cause=e
        ) from e
    if not parsed.url.host:
        raise ConfigurationError(f"Invalid proxy URL {proxy!r}: missing host", proxy=proxy)
    return parsed


__all__ = ["TransportResolver", "PROXY_ENV_VARS"]
