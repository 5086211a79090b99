"""Configuration management for GroupLedger."""

from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="GROUPLEDGER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Raise on ids missing from the roster instead of skipping them
    strict_participants: bool = False

    # Owner plus three others
    max_participants: int = 4

    # Display settings
    currency_symbol: str = "$"


def load_settings() -> Settings:
    """Load application settings from environment variables."""
    try:
        return Settings()
    except Exception as e:
        raise ConfigurationError(
            f"Failed to load settings. Check your GROUPLEDGER_* environment "
            f"variables or .env file.\n"
            f"Error: {e}"
        ) from e
