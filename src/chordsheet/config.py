"""Configuration for chordsheet, read from ``CHORDSHEET_*`` environment variables."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .recognizer import DEFAULT_SHORT_WORDS


class Settings(BaseSettings):
    """Settings loaded from the environment (and an optional ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_prefix="CHORDSHEET_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Recognition
    short_words: set[str] = Field(
        default_factory=lambda: set(DEFAULT_SHORT_WORDS),
        description="Chord-shaped short words (case-insensitive) that are not chords inside lyrics. "
        'Set as JSON, e.g. CHORDSHEET_SHORT_WORDS=\'["a", "am"]\'',
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Minimum loguru level written to stderr (DEBUG, INFO, WARNING, ERROR)",
    )

    # Sources
    fetch_timeout: float = Field(
        default=15.0,
        description="Seconds to wait for an HTTP source",
    )
    cache_ttl: float = Field(
        default=300.0,
        description="Seconds a fetched source stays fresh in a caller-held cache entry",
    )


def get_settings() -> Settings:
    """Build settings from the current environment."""
    return Settings()
