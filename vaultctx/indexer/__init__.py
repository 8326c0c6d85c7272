"""Vault indexing - scans notes and compacts them into a context summary."""

from .compactor import ContextCompactor
from .scanner import (
    FileSystemNoteSource,
    NoteRef,
    NoteSource,
    ScannedNote,
    ScanResult,
    VaultScanner,
)

__all__ = [
    "ContextCompactor",
    "FileSystemNoteSource",
    "NoteRef",
    "NoteSource",
    "ScanResult",
    "ScannedNote",
    "VaultScanner",
]
