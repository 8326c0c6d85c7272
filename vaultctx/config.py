"""Configuration management using pydantic-settings."""

from pathlib import Path
from typing import Annotated

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_MAX_CONTEXT_TOKENS = 2000


class VaultContextSettings(BaseSettings):
    """Vault context options, read by the scanner and compactor."""

    model_config = SettingsConfigDict(
        env_prefix="VAULT_CONTEXT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    enabled: bool = True
    max_context_tokens: int = DEFAULT_MAX_CONTEXT_TOKENS

    # Stored as comma-separated strings in .env
    include_patterns: Annotated[list[str], NoDecode] = Field(default_factory=list)
    exclude_patterns: Annotated[list[str], NoDecode] = Field(default_factory=list)

    @field_validator("max_context_tokens", mode="before")
    @classmethod
    def clamp_max_context_tokens(cls, v: object) -> int:
        """Fall back to the default budget for non-numeric or non-positive values."""
        try:
            tokens = int(v)
        except (TypeError, ValueError):
            return DEFAULT_MAX_CONTEXT_TOKENS
        return tokens if tokens > 0 else DEFAULT_MAX_CONTEXT_TOKENS

    @field_validator("include_patterns", "exclude_patterns", mode="before")
    @classmethod
    def split_patterns(cls, v: object) -> list[str]:
        """Parse comma-separated glob patterns, dropping blanks."""
        if v is None:
            return []
        if isinstance(v, str):
            v = v.split(",")
        return [p.strip() for p in v if p and p.strip()]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Vault
    vault_path: Path

    # Where vault-context.json lives; defaults to <vault>/.vaultctx
    data_dir: Path | None = None

    vault_context: VaultContextSettings = Field(default_factory=VaultContextSettings)

    @property
    def context_dir(self) -> Path:
        """Resolved directory for persisted context data."""
        return self.data_dir if self.data_dir is not None else self.vault_path / ".vaultctx"

    @field_validator("vault_path")
    @classmethod
    def validate_vault_path(cls, v: Path) -> Path:
        """Ensure vault path exists and is a directory."""
        if not v.exists():
            raise ValueError(f"Vault path does not exist: {v}")
        if not v.is_dir():
            raise ValueError(f"Vault path is not a directory: {v}")
        return v.resolve()


def get_settings() -> Settings:
    """Load settings from environment."""
    return Settings()
