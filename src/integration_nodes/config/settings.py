"""Configuration and settings management using pydantic-settings."""
import json
from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable loading."""

    model_config = SettingsConfigDict(
        env_prefix="NODES_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Core settings
    env: str = Field(default="development", description="Environment name")
    log_level: str = Field(default="INFO", description="Log level")
    log_format: Literal["json", "text"] = Field(
        default="json",
        description="Log output format",
    )

    # HTTP transport
    http_timeout_s: float = Field(
        default=30,
        description="Timeout in seconds for every API request",
    )
    http_verify_ssl: bool = Field(
        default=True,
        description="Verify TLS certificates of API servers",
    )

    # Credential store
    credentials_file: str | None = Field(
        default=None,
        description="JSON file mapping credential names to credential values",
    )

    @field_validator("http_timeout_s")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        """Validate that the request timeout is positive."""
        if v <= 0:
            raise ValueError("http_timeout_s must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    def load_credentials(self) -> dict[str, dict[str, Any]]:
        """
        Load the credential store from credentials_file.

        Returns:
            Dict mapping credential name to its values (empty if no file is set)
        """
        if not self.credentials_file:
            return {}
        with open(Path(self.credentials_file), encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.credentials_file} must contain a JSON object")
        return data


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create the global settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset settings (useful for testing)."""
    global _settings
    _settings = None
