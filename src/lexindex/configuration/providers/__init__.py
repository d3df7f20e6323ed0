# src/lexindex/configuration/providers/__init__.py
"""Provider configurations for LexIndex."""

from lexindex.configuration.providers.litellm import LiteLLMProvider

__all__ = ["LiteLLMProvider"]
