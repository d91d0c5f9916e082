"""
Download service.

Streams a template into a local file, appending to or overwriting it.
A failed overwrite removes the file it created or truncated; a failed
append leaves the existing file in place (bytes already appended may
remain).
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import IO, TYPE_CHECKING

import httpx

from addgitignore.config import USER_AGENT
from addgitignore.exceptions import DownloadError
from addgitignore.logging import get_logger
from addgitignore.models import DownloadOperation, WriteMode

if TYPE_CHECKING:
    from addgitignore.transport import TransportResolver

logger = get_logger(__name__)

SEPARATOR = b"\n"


class DownloadService:
    """
    Writes catalog entries to disk.

    No retries are made; a failure is reported once as DownloadError.

    Example:
        >>> downloads = DownloadService(resolver)
        >>> op = DownloadOperation(
        ...     mode=WriteMode.OVERWRITE,
        ...     target_path=Path("./.gitignore"),
        ...     entry=entry,
        ... )
        >>> done = await downloads.download(op)
        >>> print(done.success_message())
    """

    def __init__(self, resolver: TransportResolver) -> None:
        self._resolver = resolver

    async def download(self, operation: DownloadOperation) -> DownloadOperation:
        """
        Download operation.entry to operation.target_path.

        Once started the download runs to completion even if the awaiting
        task is cancelled, so rollback always happens.

        Returns:
            The same operation, after the file has been closed.

        Raises:
            DownloadError: If the file cannot be opened or the transfer fails.
            ConfigurationError: If the proxy configuration is malformed.
        """
        client = self._resolver.get_transport()
        task = asyncio.ensure_future(self._run(client, operation))
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            task.add_done_callback(_log_detached_result)
            raise

    async def _run(
        self,
        client: httpx.AsyncClient,
        operation: DownloadOperation,
    ) -> DownloadOperation:
        path = operation.target_path
        url = operation.entry.url

        try:
            httpx.URL(url)
        except httpx.InvalidURL as e:
            raise DownloadError(
                f"Invalid download URL {url!r}: {e}",
                url=url,
                target_path=path,
                cause=e,
            ) from e

        try:
            f = _open_target(path, operation.mode)
        except OSError as e:
            raise DownloadError(
                f"Cannot open {path}: {e.strerror or e}",
                url=url,
                target_path=path,
                cause=e,
            ) from e

        logger.debug(f"Downloading {url} -> {path} ({operation.mode.value})")
        written = 0
        try:
            with f:
                if operation.mode is WriteMode.APPEND and f.tell() > 0:
                    f.write(SEPARATOR)

                async with client.stream(
                    "GET", url, headers={"User-Agent": USER_AGENT}
                ) as response:
                    response.raise_for_status()
                    async for chunk in response.aiter_bytes():
                        f.write(chunk)
                        written += len(chunk)

        except (httpx.HTTPError, httpx.InvalidURL, OSError) as e:
            if operation.mode is WriteMode.OVERWRITE:
                _remove_quietly(path)
            raise DownloadError(
                _describe(e), url=url, target_path=path, cause=e
            ) from e

        logger.debug(f"Wrote {written:,} bytes to {path}")
        return operation


def _open_target(path: Path, mode: WriteMode) -> IO[bytes]:
    if mode is WriteMode.OVERWRITE:
        return open(path, "wb")
    return open(path, "ab")


def _log_detached_result(task: asyncio.Future) -> None:
    """Report the outcome of a download whose caller stopped waiting."""
    if task.cancelled():
        return
    error = task.exception()
    if error is not None:
        logger.error(f"Download failed after its caller was cancelled: {error}")
    else:
        logger.info(
            f"Download finished after its caller was cancelled: {task.result().target_path}"
        )


def _remove_quietly(path: Path) -> None:
    """Delete a partially written file; failures are logged only."""
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.error(f"Failed to remove partial download {path}: {e}")


def _describe(error: Exception) -> str:
    if isinstance(error, httpx.HTTPStatusError):
        response = error.response
        return f"{response.status_code} {response.reason_phrase}: {error.request.url}"
    return str(error) or type(error).__name__


__all__ = ["DownloadService", "SEPARATOR"]
