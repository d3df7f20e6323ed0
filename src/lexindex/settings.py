# src/lexindex/settings.py
"""Behavioral settings for LexIndex.

Settings are passed programmatically; the library does not read environment
variables. Applications that want env-based config use ``lexindex.config``,
which reads ``LEXINDEX_*`` variables and YAML files at the application layer.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field

# Throughput profiles for embedding provider tiers
RATE_LIMIT_PROFILES: dict[str, dict[str, Any]] = {
    "aggressive": {
        "batch_size": 100,
        "inter_batch_delay_seconds": 0.1,
    },
    "conservative": {
        "batch_size": 20,
        "inter_batch_delay_seconds": 2.0,
        "max_rate_limit_attempts": 8,
    },
}


class Settings(BaseModel):
    """Behavioral settings for LexIndex.

    These settings control chunking, embedding throughput and retrieval,
    independent of which embedding provider is used.

    Example:
        settings = Settings(chunk_size=4000, default_k=20)

        # Or use a rate limit profile for free API tiers
        settings = Settings.with_profile("conservative")
    """

    # Chunking
    chunk_size: int = Field(default=5000, gt=0)

    # Embedding
    batch_size: int = Field(default=50, gt=0)
    max_input_chars: int = Field(default=32_000, gt=0)
    embedding_dimensions: int = Field(default=1536, gt=0)
    inter_batch_delay_seconds: float = Field(default=0.5, ge=0)

    # Rate limit handling (whole batch resubmitted after a fixed wait)
    rate_limit_backoff_seconds: float = Field(default=30.0, ge=0)
    max_rate_limit_attempts: int = Field(default=5, ge=1)

    # Retrieval
    default_k: int = Field(default=35, gt=0)

    @classmethod
    def with_profile(
        cls,
        profile: Literal["aggressive", "conservative"],
        **overrides: Any,
    ) -> Settings:
        """Create Settings with a rate limit profile.

        Profiles bundle throughput settings for different API tier limits:
        - "aggressive": For paid API tiers with high rate limits
        - "conservative": For free tiers or APIs with strict rate limits

        Args:
            profile: The rate limit profile to use.
            **overrides: Additional settings to override profile defaults.

        Example:
            settings = Settings.with_profile("conservative", default_k=10)
        """
        if profile not in RATE_LIMIT_PROFILES:
            raise ValueError(
                f"Unknown profile '{profile}'. "
                f"Available profiles: {list(RATE_LIMIT_PROFILES.keys())}"
            )

        profile_settings: dict[str, Any] = RATE_LIMIT_PROFILES[profile].copy()
        profile_settings.update(overrides)
        return cls(**profile_settings)
