"""Vault context manager - single-flight rebuild and cached access."""

import asyncio
import logging
from collections.abc import Callable
from enum import Enum

from vaultctx.config import VaultContextSettings
from vaultctx.indexer import ContextCompactor, NoteSource, VaultScanner
from vaultctx.storage import ContextStorage, VaultContext

logger = logging.getLogger(__name__)


class RebuildOutcome(Enum):
    """Result of a rebuild request."""

    BUILT = "built"
    IN_PROGRESS = "in_progress"
    FAILED = "failed"


def log_notice(message: str) -> None:
    """Default notification sink."""
    logger.info(message)


class VaultContextManager:
    """Owns the live VaultContext of one vault.

    Only one rebuild runs at a time; a rebuild requested while another is
    running is rejected, not queued. Reads are served from memory.
    """

    def __init__(
        self,
        source: NoteSource,
        settings: VaultContextSettings,
        storage: ContextStorage,
        notify: Callable[[str], None] = log_notice,
        compactor: ContextCompactor | None = None,
    ) -> None:
        self.source = source
        self.settings = settings
        self.storage = storage
        self.notify = notify
        self.compactor = compactor or ContextCompactor()
        self._context: VaultContext | None = None
        self._rebuilding = False

    @property
    def is_rebuilding(self) -> bool:
        return self._rebuilding

    def initialize(self) -> None:
        """Load the persisted context, if any."""
        self._context = self.storage.load()

    async def rebuild(self) -> RebuildOutcome:
        """Scan, compact and persist the vault context.

        Errors are reported through the notification sink and never raised;
        on failure the previous context is kept.
        """
        if self._rebuilding:
            self.notify("Vault context rebuild already in progress")
            return RebuildOutcome.IN_PROGRESS

        self._rebuilding = True
        self.notify("Building vault context...")

        try:
            # Let concurrent callers observe the flag even if the scan never suspends
            await asyncio.sleep(0)

            scanner = VaultScanner(self.source, self.settings)
            scan_result = await scanner.scan()

            context = self.compactor.compact(scan_result, self.settings.max_context_tokens)
            self._context = context
            self.storage.save(context)

            self.notify(f"Vault context built: {context.note_count} notes analyzed")
            return RebuildOutcome.BUILT
        except Exception:
            logger.exception("Failed to rebuild vault context")
            self.notify("Failed to build vault context. Check the log for details.")
            return RebuildOutcome.FAILED
        finally:
            self._rebuilding = False

    def get_context(self) -> str | None:
        """Compacted context for prompts, or None when disabled or not built."""
        if not self.settings.enabled or self._context is None:
            return None
        return self._context.compacted_context

    def get_full_context(self) -> VaultContext | None:
        """The full record, regardless of the enabled flag."""
        return self._context

    def clear(self) -> None:
        """Forget the context in memory and on disk."""
        self._context = None
        self.storage.clear()
