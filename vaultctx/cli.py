"""CLI interface for vaultctx - build and inspect the vault context from the terminal."""

import argparse
import asyncio
import json
import logging
import sys

from vaultctx.config import Settings, get_settings
from vaultctx.indexer import FileSystemNoteSource
from vaultctx.manager import RebuildOutcome, VaultContextManager
from vaultctx.storage import ContextStorage

# Preview length shown by --show
PREVIEW_CHARS = 2000


# ANSI color codes
class Colors:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    CYAN = "\033[36m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    RED = "\033[31m"


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for CLI."""
    logging.basicConfig(
        format="%(message)s",
        level=logging.DEBUG if verbose else logging.INFO,
    )


def print_notice(message: str) -> None:
    """Notification sink for the manager."""
    print(f"{Colors.CYAN}{message}{Colors.RESET}")


def create_manager(settings: Settings) -> VaultContextManager:
    """Wire a manager to the filesystem vault and its data directory."""
    manager = VaultContextManager(
        source=FileSystemNoteSource(settings.vault_path),
        settings=settings.vault_context,
        storage=ContextStorage(settings.context_dir),
        notify=print_notice,
    )
    manager.initialize()
    return manager


def show_context(manager: VaultContextManager) -> None:
    """Print build info and a preview of the compacted context."""
    context = manager.get_full_context()
    if context is None:
        print(f"{Colors.DIM}No context built yet{Colors.RESET}")
        return

    print(f"{Colors.BOLD}{context.describe()}{Colors.RESET}")
    if not manager.settings.enabled:
        print(f"{Colors.YELLOW}Vault context is disabled; prompts will skip it.{Colors.RESET}")
    print()
    print(context.compacted_context[:PREVIEW_CHARS])


def cli() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="vaultctx",
        description="Build a compact summary of your notes for priming an assistant.",
    )
    parser.add_argument(
        "--rebuild",
        action="store_true",
        help="Rescan the vault and rebuild the context",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Show when the context was built and preview it",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full stored context record as JSON",
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete the stored context and exit",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args()

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    # Load settings
    try:
        settings = get_settings()
        logger.info(f"{Colors.DIM}Vault: {settings.vault_path}{Colors.RESET}")
    except Exception as e:
        logger.error(f"{Colors.RED}Failed to load settings: {e}{Colors.RESET}")
        logger.error(f"{Colors.RED}Make sure you have a .env file with VAULT_PATH.{Colors.RESET}")
        sys.exit(1)

    manager = create_manager(settings)

    if args.clear:
        manager.clear()
        print(f"{Colors.GREEN}Vault context cleared.{Colors.RESET}")
        return

    if args.rebuild:
        outcome = asyncio.run(manager.rebuild())
        if outcome is RebuildOutcome.FAILED:
            sys.exit(1)

    if args.json:
        context = manager.get_full_context()
        print(json.dumps(context.to_dict() if context else None, ensure_ascii=False, indent=2))
        return

    if args.show or not args.rebuild:
        show_context(manager)


if __name__ == "__main__":
    cli()
