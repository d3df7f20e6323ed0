# src/lexindex/providers/litellm/models.py
"""Curated embedding model constants for the LiteLLM provider.

You can always pass any valid LiteLLM model string directly.
"""


class EmbeddingModels:
    """Embedding models for LiteLLMEmbeddingClient."""

    # OpenAI (support the `dimensions` parameter)
    TEXT_3_SMALL = "openai/text-embedding-3-small"
    TEXT_3_LARGE = "openai/text-embedding-3-large"

    # Google Gemini
    GEMINI_EMBEDDING_001 = "gemini/gemini-embedding-001"

    # AWS Bedrock
    BEDROCK_TITAN_V2 = "bedrock/amazon.titan-embed-text-v2:0"
