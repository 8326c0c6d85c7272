"""Persistent storage for the compacted vault context."""

import json
import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

STORAGE_FILE = "vault-context.json"
CURRENT_VERSION = 1


@dataclass
class VaultContext:
    """Summary of a vault, built by the compactor."""

    version: int
    built_at: float
    note_count: int
    total_characters: int
    topics: list[str] = field(default_factory=list)
    terminology: list[str] = field(default_factory=list)
    writing_style: str = ""
    folder_summary: dict[str, str] = field(default_factory=dict)
    compacted_context: str = ""

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "VaultContext":
        """Build from a decoded JSON record, rejecting malformed shapes.

        Raises:
            ValueError: if a field is missing or has the wrong type
        """
        if not isinstance(data, dict):
            raise ValueError(f"Expected an object, got {type(data).__name__}")

        for name in ("version", "note_count", "total_characters"):
            _require(data, name, int)
        _require(data, "built_at", (int, float))
        _require(data, "writing_style", str)
        _require(data, "compacted_context", str)

        for name in ("topics", "terminology"):
            items = _require(data, name, list)
            if not all(isinstance(item, str) for item in items):
                raise ValueError(f"Field '{name}' must be a list of strings")

        folders = _require(data, "folder_summary", dict)
        if not all(isinstance(k, str) and isinstance(v, str) for k, v in folders.items()):
            raise ValueError("Field 'folder_summary' must map strings to strings")

        return cls(
            version=data["version"],
            built_at=data["built_at"],
            note_count=data["note_count"],
            total_characters=data["total_characters"],
            topics=list(data["topics"]),
            terminology=list(data["terminology"]),
            writing_style=data["writing_style"],
            folder_summary=dict(folders),
            compacted_context=data["compacted_context"],
        )

    def describe(self) -> str:
        """One-line description for previews."""
        built = datetime.fromtimestamp(self.built_at).strftime("%Y-%m-%d %H:%M")
        return f"Last built: {built} ({self.note_count} notes)"


def _require(data: dict, name: str, expected: type | tuple[type, ...]):
    if name not in data:
        raise ValueError(f"Missing field '{name}'")
    value = data[name]
    # bool is an int subclass but never a valid count
    if isinstance(value, bool) or not isinstance(value, expected):
        raise ValueError(f"Field '{name}' has wrong type {type(value).__name__}")
    return value


class ContextStorage:
    """Stores the vault context as a single JSON file.

    Failures are logged and never raised: a broken file reads as no context.
    """

    def __init__(self, data_dir: Path) -> None:
        self.data_dir = data_dir
        self.context_file = data_dir / STORAGE_FILE

    def load(self) -> VaultContext | None:
        """Load the stored context, or None if missing, outdated or invalid."""
        try:
            if not self.context_file.exists():
                return None
            data = json.loads(self.context_file.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
            logger.warning(f"Failed to load vault context: {e}")
            return None

        if isinstance(data, dict) and data.get("version") != CURRENT_VERSION:
            logger.info(
                f"Ignoring vault context with version {data.get('version')!r} "
                f"(expected {CURRENT_VERSION})"
            )
            return None

        try:
            context = VaultContext.from_dict(data)
        except ValueError as e:
            logger.warning(f"Ignoring malformed vault context: {e}")
            return None

        logger.info(f"Loaded vault context ({context.note_count} notes)")
        return context

    def save(self, context: VaultContext) -> None:
        """Save context to disk."""
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
            self.context_file.write_text(
                json.dumps(context.to_dict(), ensure_ascii=False, indent=2),
                encoding="utf-8",
            )
            logger.info(f"Saved vault context to {self.context_file}")
        except (OSError, TypeError, ValueError) as e:
            logger.error(f"Failed to save vault context: {e}")

    def clear(self) -> None:
        """Remove the stored context file if present."""
        try:
            if self.context_file.exists():
                self.context_file.unlink()
                logger.info(f"Removed {self.context_file}")
        except OSError as e:
            logger.error(f"Failed to clear vault context: {e}")
