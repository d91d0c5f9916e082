"""
Interactive "add .gitignore" flow.

Each user choice is a Selection: Selected(value) or Cancelled(). A
Cancelled answer ends the flow quietly before anything is downloaded;
real failures are raised as AddGitignoreError subclasses.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Generic, Protocol, Sequence, TypeVar, Union

from addgitignore.exceptions import WorkspaceError
from addgitignore.logging import get_logger
from addgitignore.models import CatalogEntry, DownloadOperation, WriteMode

if TYPE_CHECKING:
    from addgitignore.client import GitignoreClient

logger = get_logger(__name__)

T = TypeVar("T")

GITIGNORE_FILENAME = ".gitignore"


@dataclass(frozen=True)
class Selected(Generic[T]):
    """The user picked value."""

    value: T


@dataclass(frozen=True)
class Cancelled:
    """The user backed out."""


Selection = Union[Selected[T], Cancelled]


class Prompter(Protocol):
    """Asks the user to choose. Implemented by the host (CLI, editor, ...)."""

    async def pick_entry(self, entries: Sequence[CatalogEntry]) -> Selection[CatalogEntry]: ...

    async def pick_folder(self, folders: Sequence[Path]) -> Selection[Path]: ...

    async def pick_mode(self, target_path: Path) -> Selection[WriteMode]: ...


class AddGitignoreFlow:
    """
    Pick a template, pick a folder, pick a write mode, download.

    Example:
        >>> flow = AddGitignoreFlow(client, prompter)
        >>> result = await flow.run([Path.cwd()])
        >>> if isinstance(result, Selected):
        ...     print(result.value.success_message())
    """

    def __init__(
        self,
        client: GitignoreClient,
        prompter: Prompter,
        catalog_paths: Sequence[str] | None = None,
    ) -> None:
        self._client = client
        self._prompter = prompter
        self._catalog_paths = list(
            catalog_paths if catalog_paths is not None else client.settings.catalog_paths
        )

    async def run(self, folders: Sequence[Path]) -> Selection[DownloadOperation]:
        """
        Run the whole flow.

        Args:
            folders: Candidate project folders.

        Returns:
            Selected(operation) once the file is written, or Cancelled().

        Raises:
            WorkspaceError: If no folder is available.
            RemoteFetchError: If the catalog cannot be listed.
            DownloadError: If writing the file fails.
        """
        if not folders:
            raise WorkspaceError("No workspace/directory open")

        entries = await self._client.catalog.list_merged(self._catalog_paths)
        entry = await self._prompter.pick_entry(entries)
        if isinstance(entry, Cancelled):
            return entry

        folder = await self.resolve_folder(folders)
        if isinstance(folder, Cancelled):
            return folder

        operation = await self.build_operation(entry.value, folder.value)
        if isinstance(operation, Cancelled):
            return operation

        done = await self._client.downloads.download(operation.value)
        return Selected(done)

    async def resolve_folder(self, folders: Sequence[Path]) -> Selection[Path]:
        """Use the only folder, or ask which one when there are several."""
        if not folders:
            return Cancelled()
        if len(folders) == 1:
            return Selected(folders[0])
        return await self._prompter.pick_folder(folders)

    async def build_operation(
        self,
        entry: CatalogEntry,
        folder: Path,
    ) -> Selection[DownloadOperation]:
        """Overwrite a missing .gitignore, otherwise ask how to write it."""
        logger.debug(f"Adding .gitignore for directory: {folder}")
        target = folder / GITIGNORE_FILENAME

        if not target.exists():
            mode: WriteMode = WriteMode.OVERWRITE
        else:
            choice = await self._prompter.pick_mode(target)
            if isinstance(choice, Cancelled):
                return choice
            mode = choice.value

        return Selected(DownloadOperation(mode=mode, target_path=target, entry=entry))


__all__ = [
    "Selected",
    "Cancelled",
    "Selection",
    "Prompter",
    "AddGitignoreFlow",
    "GITIGNORE_FILENAME",
]
