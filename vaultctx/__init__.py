"""Compact vault context for priming assistant prompts."""

from .manager import RebuildOutcome, VaultContextManager

__all__ = ["RebuildOutcome", "VaultContextManager"]
