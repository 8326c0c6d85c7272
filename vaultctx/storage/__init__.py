"""Persistent storage for the vault context."""

from .vault_context import CURRENT_VERSION, STORAGE_FILE, ContextStorage, VaultContext

__all__ = [
    "CURRENT_VERSION",
    "STORAGE_FILE",
    "ContextStorage",
    "VaultContext",
]
