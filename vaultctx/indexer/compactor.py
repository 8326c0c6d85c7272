"""Compacts a vault scan into a bounded text summary."""

import logging
import math
import re
from collections.abc import Callable, Iterable
from datetime import datetime

from vaultctx.storage.vault_context import CURRENT_VERSION, VaultContext

from . import patterns
from .scanner import ROOT_FOLDER, ScannedNote, ScanResult

logger = logging.getLogger(__name__)

# Rough budget: one token is about four characters
CHARS_PER_TOKEN = 4

MAX_TOPICS = 30
MIN_TOPIC_FREQUENCY = 3
MAX_TERMS = 30
MIN_TERM_FREQUENCY = 2

TOPICS_SHOWN = 15
TERMS_SHOWN = 15
FOLDER_TOPICS = 5
FOLDERS_SHOWN = 10

TRUNCATION_MARKER = "..."

_LEADING_COUNT = re.compile(r"^\d+")


def folder_display_name(folder: str) -> str:
    """Display name for a folder; the vault root is shown as "Root"."""
    if folder == ROOT_FOLDER:
        return "Root"
    return folder.strip("/") or "Root"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def _most_frequent(items: Iterable[str], min_count: int, limit: int) -> list[str]:
    """Items seen at least min_count times, most frequent first.

    Ties keep first-encountered order (dicts preserve insertion order and
    sorted() is stable).
    """
    counts: dict[str, int] = {}
    for item in items:
        counts[item] = counts.get(item, 0) + 1

    frequent = [(item, n) for item, n in counts.items() if n >= min_count]
    frequent.sort(key=lambda x: -x[1])
    return [item for item, _ in frequent[:limit]]


def extract_topics(notes: Iterable[ScannedNote]) -> list[str]:
    """Most frequent meaningful words across headers and body text."""

    def words():
        for note in notes:
            headers = patterns.extract_headers(note.content)
            for word in patterns.tokenize(" ".join(headers) + " " + note.content):
                lower = word.lower()
                if len(lower) < 3 or lower in patterns.STOPWORDS:
                    continue
                yield lower

    return _most_frequent(words(), MIN_TOPIC_FREQUENCY, MAX_TOPICS)


def extract_terminology(notes: Iterable[ScannedNote]) -> list[str]:
    """Wiki links, tags and capitalized phrases that recur across notes."""

    def terms():
        for note in notes:
            yield from patterns.extract_wiki_links(note.content)
            yield from patterns.extract_tags(note.content)
            yield from patterns.extract_capitalized_phrases(note.content)

    return _most_frequent(terms(), MIN_TERM_FREQUENCY, MAX_TERMS)


def analyze_writing_style(notes: list[ScannedNote]) -> str:
    """Describe sentence length and markdown structure habits."""
    if not notes:
        return "No notes to analyze"

    total_sentences = 0
    total_words = 0
    bullet_count = 0
    header_count = 0
    code_block_count = 0.0

    for note in notes:
        total_sentences += len(patterns.split_sentences(note.content))
        total_words += len(patterns.tokenize(note.content))
        bullet_count += patterns.count_bullet_lines(note.content)
        header_count += patterns.count_header_lines(note.content)
        code_block_count += patterns.count_code_blocks(note.content)

    avg_words = _round_half_up(total_words / total_sentences) if total_sentences else 0
    avg_bullets = _round_half_up(bullet_count / len(notes))
    avg_headers = _round_half_up(header_count / len(notes))

    descriptors = []

    if avg_words < 12:
        descriptors.append("concise sentences")
    elif avg_words > 20:
        descriptors.append("detailed sentences")
    else:
        descriptors.append("moderate sentence length")

    if avg_bullets > 5:
        descriptors.append("heavy use of bullet points")
    elif avg_bullets > 0:
        descriptors.append("occasional bullet points")

    if avg_headers > 3:
        descriptors.append("well-structured with headers")

    if code_block_count > len(notes) * 0.1:
        descriptors.append("includes code blocks")

    return f"{avg_words} words/sentence avg, {', '.join(descriptors)}"


def summarize_folders(notes: Iterable[ScannedNote]) -> dict[str, str]:
    """Describe each folder by note count and its own top topics.

    Folders come out ordered by descending note count. When two folders
    share a display name ("/" and a top-level "Root", or "/X" and "X"), the
    larger one keeps the entry.
    """
    by_folder: dict[str, list[ScannedNote]] = {}
    for note in notes:
        by_folder.setdefault(note.folder, []).append(note)

    summary: dict[str, str] = {}
    for folder, folder_notes in sorted(by_folder.items(), key=lambda x: -len(x[1])):
        name = folder_display_name(folder)
        if name in summary:
            logger.debug(f"Folder {folder!r} shares display name {name!r}; skipping")
            continue

        top_words = extract_topics(folder_notes)[:FOLDER_TOPICS]
        description = f"{len(folder_notes)} notes"
        if top_words:
            description += f" about {', '.join(top_words)}"
        summary[name] = description

    return summary


def truncate(text: str, max_chars: int) -> str:
    """Cut text to max_chars, ending with a marker when anything was dropped."""
    if len(text) <= max_chars:
        return text
    if max_chars <= len(TRUNCATION_MARKER):
        return TRUNCATION_MARKER[:max_chars]
    return text[: max_chars - len(TRUNCATION_MARKER)] + TRUNCATION_MARKER


def _leading_count(description: str) -> int:
    match = _LEADING_COUNT.match(description)
    return int(match.group(0)) if match else 0


def assemble_context(
    note_count: int,
    topics: list[str],
    terminology: list[str],
    writing_style: str,
    folder_summary: dict[str, str],
    max_tokens: int,
) -> str:
    """Render the prompt-ready context, bounded to max_tokens * 4 characters."""
    lines = [
        f"VAULT CONTEXT ({note_count} notes):",
        f"Topics: {', '.join(topics[:TOPICS_SHOWN])}",
        f"Terms: {', '.join(terminology[:TERMS_SHOWN])}",
        f"Style: {writing_style}",
    ]

    folders = sorted(folder_summary.items(), key=lambda x: -_leading_count(x[1]))
    if folders:
        lines.append("Folders:")
        for folder, description in folders[:FOLDERS_SHOWN]:
            lines.append(f"  - {folder}: {description}")

    context = "\n".join(lines) + "\n"
    return truncate(context, max_tokens * CHARS_PER_TOKEN).strip()


class ContextCompactor:
    """Turns a scan result into a VaultContext.

    Apart from the build timestamp taken from ``clock``, compaction is a
    pure function of its inputs.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self.clock = clock or (lambda: datetime.now().timestamp())

    def compact(self, scan_result: ScanResult, max_tokens: int) -> VaultContext:
        notes = scan_result.notes

        topics = extract_topics(notes)
        terminology = extract_terminology(notes)
        writing_style = analyze_writing_style(notes)
        folder_summary = summarize_folders(notes)

        compacted = assemble_context(
            len(notes),
            topics,
            terminology,
            writing_style,
            folder_summary,
            max_tokens,
        )

        return VaultContext(
            version=CURRENT_VERSION,
            built_at=self.clock(),
            note_count=len(notes),
            total_characters=scan_result.total_characters,
            topics=topics,
            terminology=terminology,
            writing_style=writing_style,
            folder_summary=folder_summary,
            compacted_context=compacted,
        )
