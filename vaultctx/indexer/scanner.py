"""Vault scanner - collects the text of every note that passes the filters."""

import asyncio
import fnmatch
import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from vaultctx.config import VaultContextSettings

logger = logging.getLogger(__name__)

ROOT_FOLDER = "/"


@dataclass(frozen=True)
class NoteRef:
    """A note as listed by a note source, before its content is read."""

    path: str
    folder: str


@dataclass(frozen=True)
class ScannedNote:
    """A single note with its raw text."""

    path: str
    folder: str
    content: str

    @property
    def char_count(self) -> int:
        return len(self.content)


@dataclass
class ScanResult:
    """Everything one scan produced."""

    notes: list[ScannedNote] = field(default_factory=list)
    total_characters: int = 0


class NoteSource(Protocol):
    """Read-only access to the notes of a vault."""

    async def list_notes(self) -> list[NoteRef]: ...

    async def read(self, path: str) -> str: ...


class FileSystemNoteSource:
    """Note source backed by a directory of markdown files."""

    def __init__(self, vault_path: Path) -> None:
        self.vault_path = vault_path

    async def list_notes(self) -> list[NoteRef]:
        return await asyncio.to_thread(lambda: list(self._walk()))

    def _walk(self) -> Iterator[NoteRef]:
        for md_file in self.vault_path.rglob("*.md"):
            rel = md_file.relative_to(self.vault_path)
            # Skip hidden folders
            if any(part.startswith(".") for part in rel.parts):
                continue

            rel_folder = rel.parent.as_posix()
            folder = rel_folder if rel_folder != "." else ROOT_FOLDER
            yield NoteRef(path=rel.as_posix(), folder=folder)

    async def read(self, path: str) -> str:
        file_path = self.vault_path / path
        # Undecodable bytes become U+FFFD instead of failing the scan
        return await asyncio.to_thread(file_path.read_text, encoding="utf-8", errors="replace")


def matches_pattern(path: str, pattern: str) -> bool:
    """Case-insensitive glob match of a vault-relative path.

    A pattern starting with ``**/`` also matches notes in the vault root.
    """
    path_lower = path.lower()
    pattern_lower = pattern.lower()

    if fnmatch.fnmatch(path_lower, pattern_lower):
        return True

    # Special case: **/*.md should also match root-level files
    if pattern_lower.startswith("**/"):
        return fnmatch.fnmatch(path_lower, pattern_lower[3:])

    return False


def is_included(path: str, include: Iterable[str], exclude: Iterable[str]) -> bool:
    """Apply include/exclude filters. Excludes always win."""
    include = list(include)
    if include and not any(matches_pattern(path, p) for p in include):
        return False
    return not any(matches_pattern(path, p) for p in exclude)


class VaultScanner:
    """Reads the content of every note that passes the configured filters."""

    def __init__(self, source: NoteSource, settings: VaultContextSettings) -> None:
        self.source = source
        self.settings = settings

    async def scan(self) -> ScanResult:
        """Perform a full scan of the vault.

        Filtering happens before any content is read. Read errors propagate
        to the caller.
        """
        include = self.settings.include_patterns
        exclude = self.settings.exclude_patterns
        logger.info(
            f"Scanning vault (include={include or 'all'}, exclude={exclude or 'none'})"
        )

        result = ScanResult()
        skipped = 0

        for ref in await self.source.list_notes():
            if not is_included(ref.path, include, exclude):
                logger.debug(f"Skipping filtered note: {ref.path}")
                skipped += 1
                continue

            content = await self.source.read(ref.path)
            note = ScannedNote(path=ref.path, folder=ref.folder, content=content)
            result.notes.append(note)
            result.total_characters += note.char_count

        logger.info(
            f"Scanned {len(result.notes)} notes ({result.total_characters} chars), "
            f"{skipped} filtered out"
        )
        return result
