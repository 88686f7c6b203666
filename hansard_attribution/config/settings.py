"""Application settings using Pydantic."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .thresholds import (
    BROAD_MATCH_MIN_SCORE,
    BROAD_MATCH_MIN_SHARED_TOKENS,
    MAX_SUGGESTIONS,
    SUGGESTION_MIN_SCORE,
    SUGGESTION_MIN_SHARED_TOKENS,
)


class Settings(BaseSettings):
    """Engine configuration loaded from ``HANSARD_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HANSARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Header scanning
    scan_chunk_chars: int = Field(default=50_000, ge=1)
    scan_overlap_chars: int = Field(default=2_000, ge=0)

    # Unmatched-speaker suggestions
    suggestion_min_score: float = Field(default=SUGGESTION_MIN_SCORE, ge=0, le=1)
    suggestion_min_shared_tokens: int = Field(default=SUGGESTION_MIN_SHARED_TOKENS, ge=1)
    max_suggestions: int = Field(default=MAX_SUGGESTIONS, ge=0, le=3)

    # Statistics
    top_speakers_limit: int = Field(default=10, ge=1)
    broad_match_min_shared_tokens: int = Field(default=BROAD_MATCH_MIN_SHARED_TOKENS, ge=1)
    broad_match_min_score: float = Field(default=BROAD_MATCH_MIN_SCORE, ge=0, le=1)

    # Logging
    log_level: str = "INFO"
    log_json: bool = False


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
