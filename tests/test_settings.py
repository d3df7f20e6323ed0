"""Tests for behavioral settings."""

import pytest
from pydantic import ValidationError

from lexindex.settings import RATE_LIMIT_PROFILES, Settings


class TestSettings:
    def test_defaults(self):
        settings = Settings()
        assert settings.chunk_size == 5000
        assert settings.batch_size == 50
        assert settings.max_input_chars == 32_000
        assert settings.embedding_dimensions == 1536
        assert settings.rate_limit_backoff_seconds == 30.0
        assert settings.max_rate_limit_attempts == 5
        assert settings.inter_batch_delay_seconds == 0.5
        assert settings.default_k == 35

    def test_custom_values(self):
        settings = Settings(chunk_size=4000, default_k=10)
        assert settings.chunk_size == 4000
        assert settings.default_k == 10

    @pytest.mark.parametrize(
        "field",
        ["chunk_size", "batch_size", "max_input_chars", "embedding_dimensions", "default_k"],
    )
    def test_rejects_non_positive(self, field):
        with pytest.raises(ValidationError):
            Settings(**{field: 0})

    def test_rejects_zero_attempts(self):
        with pytest.raises(ValidationError):
            Settings(max_rate_limit_attempts=0)


class TestProfiles:
    def test_conservative(self):
        settings = Settings.with_profile("conservative")
        assert settings.batch_size == 20
        assert settings.inter_batch_delay_seconds == 2.0
        assert settings.max_rate_limit_attempts == 8

    def test_aggressive(self):
        settings = Settings.with_profile("aggressive")
        assert settings.batch_size == 100
        assert settings.inter_batch_delay_seconds == 0.1

    def test_overrides_win(self):
        settings = Settings.with_profile("conservative", batch_size=30, default_k=5)
        assert settings.batch_size == 30
        assert settings.default_k == 5
        assert settings.inter_batch_delay_seconds == 2.0

    def test_unknown_profile(self):
        with pytest.raises(ValueError, match="Unknown profile"):
            Settings.with_profile("reckless")  # type: ignore[arg-type]

    def test_profiles_not_mutated(self):
        Settings.with_profile("aggressive", batch_size=1)
        assert RATE_LIMIT_PROFILES["aggressive"]["batch_size"] == 100
