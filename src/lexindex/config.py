# src/lexindex/config.py
"""Configuration loading utilities for LexIndex.

This module provides configuration loading for applications that embed
LexIndex and want file- or env-based setup. It handles:
- Finding and loading lexindex.yaml config files
- Loading .env files for API keys
- Building Settings objects from multiple sources
- Creating LexIndex instances from configuration
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml  # type: ignore[import-untyped]

if TYPE_CHECKING:
    from lexindex.lexindex import LexIndex
    from lexindex.settings import Settings

logger = logging.getLogger(__name__)

# Default paths
DEFAULT_DATA_DIR = "./lexindex_data"
CONFIG_FILES = ["lexindex.yaml", "lexindex.yml", ".lexindexrc"]
ENV_FILE = ".env"


@dataclass
class ConfigError:
    """Error during configuration loading."""

    message: str
    suggestion: str | None = None


def load_env_file(env_path: str | Path = ENV_FILE) -> None:
    """Load environment variables from .env file if it exists.

    Existing environment variables are never overridden.

    Args:
        env_path: Path to .env file (default: .env in current directory)
    """
    path = Path(env_path)
    if not path.exists():
        return

    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#"):
                continue
            if "=" in line:
                key, _, value = line.partition("=")
                key = key.strip()
                value = value.strip().strip("\"'")
                if key not in os.environ:
                    os.environ[key] = value


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find configuration file in current directory or parent directories.

    Args:
        start_dir: Directory to start searching from (default: cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    current = start_dir or Path.cwd()
    for _ in range(10):  # Limit search depth
        for config_name in CONFIG_FILES:
            config_path = current / config_name
            if config_path.exists():
                return config_path
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


VALID_ROOT_KEYS = {
    "provider",
    "embedding_model",
    "data_dir",
    "settings",
}

VALID_SETTINGS_KEYS = {
    "chunk_size",
    "batch_size",
    "max_input_chars",
    "embedding_dimensions",
    "inter_batch_delay_seconds",
    "rate_limit_backoff_seconds",
    "max_rate_limit_attempts",
    "default_k",
    "rate_limit_profile",
}

# Env var suffix -> (settings key, parser)
_ENV_SETTINGS: dict[str, tuple[str, type]] = {
    "CHUNK_SIZE": ("chunk_size", int),
    "BATCH_SIZE": ("batch_size", int),
    "MAX_INPUT_CHARS": ("max_input_chars", int),
    "EMBEDDING_DIMENSIONS": ("embedding_dimensions", int),
    "INTER_BATCH_DELAY_SECONDS": ("inter_batch_delay_seconds", float),
    "RATE_LIMIT_BACKOFF_SECONDS": ("rate_limit_backoff_seconds", float),
    "MAX_RATE_LIMIT_ATTEMPTS": ("max_rate_limit_attempts", int),
    "DEFAULT_K": ("default_k", int),
}


def validate_config(config: dict[str, Any], config_path: Path | None = None) -> list[str]:
    """Validate config and return warnings about unknown keys.

    Args:
        config: The loaded configuration dictionary
        config_path: Path to config file (for error messages)

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings = []

    unknown_root = set(config.keys()) - VALID_ROOT_KEYS
    if unknown_root:
        path_str = str(config_path) if config_path else "config"
        warnings.append(f"Unknown config keys in {path_str}: {', '.join(sorted(unknown_root))}")

    settings = config.get("settings", {})
    if isinstance(settings, dict):
        unknown_settings = set(settings.keys()) - VALID_SETTINGS_KEYS
        if unknown_settings:
            warnings.append(f"Unknown settings keys: {', '.join(sorted(unknown_settings))}")

    return warnings


def load_config(config_path: Path | str | None = None) -> dict[str, Any]:
    """Load configuration from YAML file.

    Args:
        config_path: Explicit path to config file, or None to search

    Returns:
        Configuration dictionary (empty if no config found)
    """
    config_path = Path(config_path) if config_path is not None else find_config_file()

    if config_path is None:
        return {}

    with open(config_path, encoding="utf-8") as f:
        config = yaml.safe_load(f) or {}

    for warning in validate_config(config, config_path):
        logger.warning(warning)

    return config


def _safe_number(value: str | None, parse: type) -> Any:
    """Parse a number from string, returning None on invalid value."""
    if value is None:
        return None
    try:
        return parse(value)
    except ValueError:
        logger.warning("Ignoring invalid numeric value %r", value)
        return None


def get_settings_from_env() -> dict[str, Any]:
    """Read behavioral settings from LEXINDEX_* environment variables.

    Returns only values that are explicitly set, so YAML settings apply
    unless overridden by env vars.
    """
    result: dict[str, Any] = {}

    for suffix, (key, parse) in _ENV_SETTINGS.items():
        val = _safe_number(os.environ.get(f"LEXINDEX_{suffix}"), parse)
        if val is not None:
            result[key] = val
    if os.environ.get("LEXINDEX_RATE_LIMIT_PROFILE"):
        result["rate_limit_profile"] = os.environ["LEXINDEX_RATE_LIMIT_PROFILE"]

    return result


def get_settings_from_yaml(config: dict[str, Any]) -> dict[str, Any]:
    """Extract the known keys of the 'settings:' section of a YAML config."""
    yaml_settings = config.get("settings", {}) or {}
    return {key: value for key, value in yaml_settings.items() if key in VALID_SETTINGS_KEYS}


def build_settings(
    config: dict[str, Any] | None = None,
    env_settings: dict[str, Any] | None = None,
) -> Settings:
    """Build Settings object from YAML config and env vars.

    Precedence (highest to lowest):
    1. Environment variables
    2. YAML settings: section
    3. Rate limit profile, if one is named
    4. Settings class defaults

    Args:
        config: YAML configuration dictionary
        env_settings: Environment variable overrides (if None, reads from env)

    Returns:
        Configured Settings instance
    """
    from lexindex.settings import Settings

    config = config or {}
    yaml_settings = get_settings_from_yaml(config)
    env_settings = env_settings if env_settings is not None else get_settings_from_env()

    merged = {**yaml_settings, **env_settings}

    rate_limit_profile = merged.pop("rate_limit_profile", None)

    if rate_limit_profile:
        return Settings.with_profile(rate_limit_profile, **merged)
    return Settings(**merged)


@dataclass
class LexIndexConfig:
    """Configuration for creating a LexIndex instance."""

    provider: str
    embedding_model: str | None
    data_dir: str
    settings: Settings
    embedding_api_key: str | None = None


def get_lexindex_config(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> LexIndexConfig | ConfigError:
    """Get configuration for creating a LexIndex instance.

    The provider is "litellm" (needs an embedding model) or "none" (chunk
    only). With "litellm" and no LEXINDEX_EMBEDDING_API_KEY, LiteLLM falls
    back to the provider's own env vars (e.g. OPENAI_API_KEY).

    Args:
        data_dir: Override data directory
        config_path: Override config file path

    Returns:
        LexIndexConfig with all settings, or ConfigError if invalid
    """
    load_env_file()
    config = load_config(config_path)
    effective_data_dir = (
        data_dir
        or config.get("data_dir")
        or os.environ.get("LEXINDEX_DATA_DIR")
        or DEFAULT_DATA_DIR
    )
    provider = config.get("provider") or os.environ.get("LEXINDEX_PROVIDER") or "litellm"

    try:
        settings = build_settings(config)
    except ValueError as e:
        return ConfigError(
            message=f"Invalid settings: {e}",
            suggestion="Check the settings: section of lexindex.yaml and LEXINDEX_* variables",
        )

    if provider == "litellm":
        embedding_model = config.get("embedding_model") or os.environ.get(
            "LEXINDEX_EMBEDDING_MODEL"
        )
        if not embedding_model:
            return ConfigError(
                message="LiteLLM provider requires embedding_model.",
                suggestion="Set embedding_model in lexindex.yaml or LEXINDEX_EMBEDDING_MODEL",
            )
        return LexIndexConfig(
            provider=provider,
            embedding_model=embedding_model,
            data_dir=effective_data_dir,
            settings=settings,
            embedding_api_key=os.environ.get("LEXINDEX_EMBEDDING_API_KEY"),
        )

    elif provider == "none":
        return LexIndexConfig(
            provider=provider,
            embedding_model=None,
            data_dir=effective_data_dir,
            settings=settings,
        )

    else:
        return ConfigError(
            message=f"Unknown provider '{provider}'",
            suggestion="Supported providers: litellm, none",
        )


def create_lexindex(config: LexIndexConfig) -> LexIndex:
    """Create a LexIndex instance from configuration.

    Raises:
        ValueError: If the provider is unknown or incompletely configured
    """
    from lexindex.configuration import LiteLLMProvider, LocalStorage
    from lexindex.lexindex import LexIndex

    storage = LocalStorage(config.data_dir, dimensions=config.settings.embedding_dimensions)

    if config.provider == "litellm":
        if not config.embedding_model:
            raise ValueError("LiteLLM provider requires embedding_model")
        return LexIndex(
            provider=LiteLLMProvider(
                embedding=config.embedding_model,
                api_key=config.embedding_api_key,
            ),
            storage=storage,
            settings=config.settings,
        )

    elif config.provider == "none":
        return LexIndex(storage=storage, settings=config.settings)

    else:
        raise ValueError(f"Unknown provider: {config.provider}")


def get_lexindex(
    data_dir: str | None = None,
    config_path: str | Path | None = None,
) -> LexIndex | ConfigError:
    """Create a LexIndex instance based on configuration.

    Combines get_lexindex_config and create_lexindex.
    """
    config = get_lexindex_config(data_dir, config_path)
    if isinstance(config, ConfigError):
        return config
    return create_lexindex(config)
