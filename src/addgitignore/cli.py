"""
addgitignore CLI.

Usage:
    addgitignore list
    addgitignore list --path Global
    addgitignore add Python
    addgitignore add Node --dir ./web --append
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Sequence

import click
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from addgitignore.client import GitignoreClient
from addgitignore.config import Settings, configure_settings, get_settings
from addgitignore.exceptions import AddGitignoreError
from addgitignore.flow import AddGitignoreFlow, Cancelled, Selected, Selection
from addgitignore.logging import setup_logging
from addgitignore.models import CatalogEntry, WriteMode

console = Console()
err_console = Console(stderr=True)


def get_cli_settings(ctx: click.Context) -> Settings:
    """Settings with command-line overrides applied."""
    overrides = ctx.obj.get("overrides") if ctx.obj else None
    if overrides:
        return configure_settings(**overrides)
    return get_settings()


@click.group()
@click.option("--proxy", help="Proxy URL (default: HTTPS_PROXY / HTTP_PROXY)")
@click.option("--cache-ttl", type=click.IntRange(min=0), help="Catalog cache lifetime in seconds")
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level",
)
@click.version_option(package_name="addgitignore")
@click.pass_context
def main(
    ctx: click.Context,
    proxy: str | None,
    cache_ttl: int | None,
    log_level: str | None,
) -> None:
    """Add .gitignore templates from github/gitignore to your project."""
    ctx.ensure_object(dict)
    overrides: dict[str, Any] = {}
    if proxy:
        overrides["proxy"] = proxy
    if cache_ttl is not None:
        overrides["cache_expiration_interval"] = cache_ttl
    if log_level:
        overrides["log_level"] = log_level.upper()
    ctx.obj["overrides"] = overrides


# =============================================================================
# List Command
# =============================================================================


@main.command("list")
@click.option(
    "--path",
    "-p",
    "paths",
    multiple=True,
    help="Repository sub-path to list (repeatable, default: root and Global)",
)
@click.pass_context
def list_(ctx: click.Context, paths: tuple[str, ...]) -> None:
    """List available .gitignore templates."""
    settings = get_cli_settings(ctx)
    setup_logging(settings.log_level, settings.log_json)
    code = asyncio.run(_list_async(settings, list(paths) or settings.catalog_paths))
    raise SystemExit(code)


async def _list_async(settings: Settings, paths: Sequence[str]) -> int:
    """Async list implementation."""
    async with GitignoreClient(settings) as client:
        try:
            entries = await client.catalog.list_merged(paths)
        except AddGitignoreError as e:
            err_console.print(f"[red]Error:[/red] {e}")
            return 1

    table = Table(show_header=True, header_style="bold")
    table.add_column("Template", style="cyan")
    table.add_column("Source")
    for entry in entries:
        table.add_row(entry.label, entry.description)

    console.print(table)
    console.print(f"[dim]{len(entries)} templates[/dim]")
    return 0


# =============================================================================
# Add Command
# =============================================================================


@main.command()
@click.argument("name", required=False)
@click.option(
    "--dir",
    "-d",
    "dirs",
    multiple=True,
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    help="Project folder (repeatable; prompts when several are given)",
)
@click.option("--append", "mode", flag_value=WriteMode.APPEND.value, help="Append to an existing .gitignore")
@click.option("--overwrite", "mode", flag_value=WriteMode.OVERWRITE.value, help="Overwrite an existing .gitignore")
@click.pass_context
def add(
    ctx: click.Context,
    name: str | None,
    dirs: tuple[Path, ...],
    mode: str | None,
) -> None:
    """Add a .gitignore template to a project folder.

    Without NAME an interactive list is shown. An empty answer to any
    prompt cancels without changing anything.

    Examples:

        addgitignore add Python

        addgitignore add macOS --append

        addgitignore add Node --dir ./api --dir ./web
    """
    settings = get_cli_settings(ctx)
    setup_logging(settings.log_level, settings.log_json)
    folders = list(dirs) or [Path.cwd()]
    prompter = ConsolePrompter(
        name=name,
        mode=WriteMode(mode) if mode else None,
    )
    code = asyncio.run(_add_async(settings, folders, prompter))
    raise SystemExit(code)


async def _add_async(
    settings: Settings,
    folders: Sequence[Path],
    prompter: ConsolePrompter,
) -> int:
    """Async add implementation."""
    async with GitignoreClient(settings) as client:
        flow = AddGitignoreFlow(client, prompter)
        try:
            result = await flow.run([folder.resolve() for folder in folders])
        except AddGitignoreError as e:
            err_console.print(f"[red]Error:[/red] {e}")
            return 1

    if isinstance(result, Cancelled):
        return 0

    console.print(f"[green]✓[/green] {result.value.success_message()}")
    return 0


# =============================================================================
# Prompts
# =============================================================================


class ConsolePrompter:
    """Terminal prompts for the add flow. Preset answers skip the prompt."""

    def __init__(
        self,
        name: str | None = None,
        mode: WriteMode | None = None,
        console: Console = console,
    ) -> None:
        self._name = name
        self._mode = mode
        self._console = console

    async def pick_entry(self, entries: Sequence[CatalogEntry]) -> Selection[CatalogEntry]:
        if self._name:
            entry = find_entry(entries, self._name)
            if entry is None:
                raise AddGitignoreError(f"No template named '{self._name}'")
            return Selected(entry)

        table = Table(show_header=True, header_style="bold")
        table.add_column("#", justify="right", style="dim")
        table.add_column("Template", style="cyan")
        table.add_column("Source")
        for i, entry in enumerate(entries, 1):
            table.add_row(str(i), entry.label, entry.description)
        self._console.print(table)

        while True:
            answer = self._ask("Template number or name (empty to cancel)")
            if not answer:
                return Cancelled()
            if answer.isdigit() and 1 <= int(answer) <= len(entries):
                return Selected(entries[int(answer) - 1])
            entry = find_entry(entries, answer)
            if entry is not None:
                return Selected(entry)
            self._console.print(f"[yellow]No template matches '{answer}'[/yellow]")

    async def pick_folder(self, folders: Sequence[Path]) -> Selection[Path]:
        for i, folder in enumerate(folders, 1):
            self._console.print(f"  [dim]{i}.[/dim] {folder}")

        while True:
            answer = self._ask("Folder number (empty to cancel)")
            if not answer:
                return Cancelled()
            if answer.isdigit() and 1 <= int(answer) <= len(folders):
                return Selected(folders[int(answer) - 1])
            self._console.print(f"[yellow]Pick a number from 1 to {len(folders)}[/yellow]")

    async def pick_mode(self, target_path: Path) -> Selection[WriteMode]:
        if self._mode is not None:
            return Selected(self._mode)

        self._console.print(f"[dim]{target_path} already exists.[/dim]")
        self._console.print("  [cyan]append[/cyan]     Append to existing .gitignore file")
        self._console.print("  [cyan]overwrite[/cyan]  Overwrite existing .gitignore file")

        while True:
            answer = self._ask("append/overwrite (empty to cancel)").lower()
            if not answer:
                return Cancelled()
            for mode in WriteMode:
                if mode.value.startswith(answer):
                    return Selected(mode)
            self._console.print("[yellow]Answer 'append' or 'overwrite'[/yellow]")

    def _ask(self, question: str) -> str:
        return Prompt.ask(question, console=self._console, default="", show_default=False).strip()


def find_entry(entries: Sequence[CatalogEntry], name: str) -> CatalogEntry | None:
    """Find an entry by label, ignoring case."""
    wanted = name.casefold().removesuffix(".gitignore")
    for entry in entries:
        if entry.label.casefold() == wanted:
            return entry
    return None


# =============================================================================
# Entry Point
# =============================================================================


if __name__ == "__main__":
    main()
