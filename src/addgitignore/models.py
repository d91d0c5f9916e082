"""
Models for the template catalog and download operations.
"""

from __future__ import annotations

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

GITIGNORE_SUFFIX = ".gitignore"


class WriteMode(str, Enum):
    """How downloaded content is combined with an existing file."""

    APPEND = "append"
    OVERWRITE = "overwrite"


class RepositoryItem(BaseModel):
    """Raw entry from the repository contents listing."""

    model_config = ConfigDict(extra="ignore")

    name: str
    path: str
    type: str
    download_url: str | None = None

    @property
    def is_template(self) -> bool:
        """True for files named ``<label>.gitignore`` with a non-empty label."""
        return (
            self.type == "file"
            and self.download_url is not None
            and self.name.endswith(GITIGNORE_SUFFIX)
            and len(self.name) > len(GITIGNORE_SUFFIX)
        )


class CatalogEntry(BaseModel):
    """A selectable template."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(min_length=1)
    description: str
    url: str

    @classmethod
    def from_item(cls, item: RepositoryItem) -> CatalogEntry:
        return cls(
            label=item.name.removesuffix(GITIGNORE_SUFFIX),
            description=item.path,
            url=item.download_url or "",
        )

    def __str__(self) -> str:
        return self.label


class DownloadOperation(BaseModel):
    """
    A download request: which entry, where to, and how.

    Returned unchanged by the download service on success so the caller can
    build its message from it.
    """

    model_config = ConfigDict(frozen=True)

    mode: WriteMode
    target_path: Path
    entry: CatalogEntry

    def success_message(self) -> str:
        """Human-readable summary of a completed operation."""
        if self.mode is WriteMode.APPEND:
            return (
                f"Appended {self.entry.description} to the existing "
                ".gitignore in the project root"
            )
        return (
            "Created .gitignore file in the project root based on "
            f"{self.entry.description}"
        )


__all__ = [
    "GITIGNORE_SUFFIX",
    "WriteMode",
    "RepositoryItem",
    "CatalogEntry",
    "DownloadOperation",
]
