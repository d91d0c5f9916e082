"""
Exceptions for addgitignore.

All errors raised by the library derive from AddGitignoreError, so a host
can turn any of them into a single user-facing message with str(error).
"""

from __future__ import annotations

from pathlib import Path


class AddGitignoreError(Exception):
    """Base error for addgitignore."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.message = message
        self._original_cause = cause

    def __str__(self) -> str:
        return self.message


class ConfigurationError(AddGitignoreError):
    """Proxy configuration could not be turned into a transport."""

    def __init__(
        self,
        message: str,
        proxy: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.proxy = proxy


class RemoteFetchError(AddGitignoreError):
    """Listing the remote repository failed."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        sub_path: str = "",
        cause: BaseException | None = None,
    ) -> None:
        if status_code is not None:
            message = f"{status_code}: {message}"
        super().__init__(message, cause=cause)
        self.status_code = status_code
        self.sub_path = sub_path


class DownloadError(AddGitignoreError):
    """Downloading a template to disk failed."""

    def __init__(
        self,
        message: str,
        url: str | None = None,
        target_path: Path | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message, cause=cause)
        self.url = url
        self.target_path = target_path


class WorkspaceError(AddGitignoreError):
    """No project folder is available to write into."""


__all__ = [
    "AddGitignoreError",
    "ConfigurationError",
    "RemoteFetchError",
    "DownloadError",
    "WorkspaceError",
]
