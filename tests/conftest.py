"""Shared test fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from vaultctx.config import VaultContextSettings
from vaultctx.indexer import ScannedNote, ScanResult


@pytest.fixture
def tmp_vault(tmp_path: Path) -> Path:
    """Create a temporary vault directory with sample notes."""
    vault = tmp_path / "vault"
    vault.mkdir()

    # Create some sample notes
    (vault / "Note1.md").write_text("# Note 1\n\nThis is note 1 content.\n\n#tag1 #tag2")
    (vault / "Note2.md").write_text("Apollo budget notes. See [[Project Apollo]].")

    # Create a subfolder
    projects = vault / "Projects"
    projects.mkdir()
    (projects / "Apollo.md").write_text(
        "# Apollo\n\n- launch window\n- crew list\n\nThe apollo crew met. #space"
    )

    # Hidden folders are not part of the vault
    hidden = vault / ".obsidian"
    hidden.mkdir()
    (hidden / "workspace.md").write_text("internal state")

    return vault


@pytest.fixture
def context_settings() -> VaultContextSettings:
    """Vault context settings isolated from any .env file."""
    return VaultContextSettings(_env_file=None)


@pytest.fixture
def make_scan() -> Callable[..., ScanResult]:
    """Factory building a ScanResult from (folder, content) pairs."""

    def _make(*notes: tuple[str, str]) -> ScanResult:
        scanned = [
            ScannedNote(path=f"{folder}/note{i}.md".lstrip("/"), folder=folder, content=text)
            for i, (folder, text) in enumerate(notes)
        ]
        return ScanResult(notes=scanned, total_characters=sum(n.char_count for n in scanned))

    return _make


@pytest.fixture
def apollo_scan(make_scan) -> ScanResult:
    """Four notes: three in the root, one in Projects."""
    return make_scan(
        ("/", "Apollo launch notes. #space"),
        ("/", "The apollo mission was long. #space"),
        ("/", "Apollo rocket. Apollo crew. #space"),
        ("Projects", "apollo budget review."),
    )
