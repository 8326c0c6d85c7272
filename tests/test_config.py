"""Tests for config module."""

from pathlib import Path

import pytest

from vaultctx.config import DEFAULT_MAX_CONTEXT_TOKENS, Settings, VaultContextSettings


class TestVaultContextSettings:
    """Tests for VaultContextSettings class."""

    def test_defaults(self, monkeypatch):
        for name in ("ENABLED", "MAX_CONTEXT_TOKENS", "INCLUDE_PATTERNS", "EXCLUDE_PATTERNS"):
            monkeypatch.delenv(f"VAULT_CONTEXT_{name}", raising=False)

        settings = VaultContextSettings(_env_file=None)
        assert settings.enabled is True
        assert settings.max_context_tokens == 2000
        assert settings.include_patterns == []
        assert settings.exclude_patterns == []

    def test_patterns_from_env(self, monkeypatch):
        """Test parsing comma-separated patterns."""
        monkeypatch.setenv("VAULT_CONTEXT_INCLUDE_PATTERNS", "Projects/**, Journal/*,, ")
        monkeypatch.setenv("VAULT_CONTEXT_EXCLUDE_PATTERNS", "**/draft*")

        settings = VaultContextSettings(_env_file=None)
        assert settings.include_patterns == ["Projects/**", "Journal/*"]
        assert settings.exclude_patterns == ["**/draft*"]

    def test_patterns_from_list(self):
        settings = VaultContextSettings(_env_file=None, include_patterns=[" a/** ", ""])
        assert settings.include_patterns == ["a/**"]

    def test_enabled_from_env(self, monkeypatch):
        monkeypatch.setenv("VAULT_CONTEXT_ENABLED", "false")

        settings = VaultContextSettings(_env_file=None)
        assert settings.enabled is False

    @pytest.mark.parametrize("value", ["abc", "0", "-5", ""])
    def test_invalid_token_budget_uses_default(self, monkeypatch, value):
        monkeypatch.setenv("VAULT_CONTEXT_MAX_CONTEXT_TOKENS", value)

        settings = VaultContextSettings(_env_file=None)
        assert settings.max_context_tokens == DEFAULT_MAX_CONTEXT_TOKENS

    def test_custom_token_budget(self, monkeypatch):
        monkeypatch.setenv("VAULT_CONTEXT_MAX_CONTEXT_TOKENS", "500")

        settings = VaultContextSettings(_env_file=None)
        assert settings.max_context_tokens == 500


class TestSettings:
    """Tests for Settings class."""

    def test_default_context_dir(self, tmp_vault: Path, monkeypatch):
        monkeypatch.setenv("VAULT_PATH", str(tmp_vault))
        monkeypatch.delenv("DATA_DIR", raising=False)

        settings = Settings(_env_file=None)
        assert settings.vault_path == tmp_vault.resolve()
        assert settings.context_dir == tmp_vault.resolve() / ".vaultctx"

    def test_custom_data_dir(self, tmp_vault: Path, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("VAULT_PATH", str(tmp_vault))
        monkeypatch.setenv("DATA_DIR", str(tmp_path / "plugin"))

        settings = Settings(_env_file=None)
        assert settings.context_dir == tmp_path / "plugin"

    def test_nested_vault_context(self, tmp_vault: Path, monkeypatch):
        monkeypatch.setenv("VAULT_PATH", str(tmp_vault))
        monkeypatch.setenv("VAULT_CONTEXT_MAX_CONTEXT_TOKENS", "300")

        settings = Settings(_env_file=None)
        assert settings.vault_context.max_context_tokens == 300

    def test_vault_path_validation_not_exists(self, tmp_path: Path, monkeypatch):
        """Test vault path validation when path doesn't exist."""
        monkeypatch.setenv("VAULT_PATH", str(tmp_path / "nonexistent"))

        with pytest.raises(ValueError, match="does not exist"):
            Settings(_env_file=None)

    def test_vault_path_validation_not_directory(self, tmp_path: Path, monkeypatch):
        """Test vault path validation when path is not a directory."""
        file_path = tmp_path / "file.txt"
        file_path.touch()

        monkeypatch.setenv("VAULT_PATH", str(file_path))

        with pytest.raises(ValueError, match="not a directory"):
            Settings(_env_file=None)
