# src/lexindex/providers/litellm/client.py
"""LiteLLM embedding client."""

from collections.abc import Mapping, Sequence
from typing import Any

import litellm

from lexindex.exceptions import EmbeddingProviderError, RateLimitError
from lexindex.providers.base import DEFAULT_MAX_INPUT_CHARS, EmbeddingClient
from lexindex.providers.litellm.models import EmbeddingModels


class LiteLLMEmbeddingClient(EmbeddingClient):
    """LiteLLM-based embedding client.

    Supports any embedding model available through LiteLLM. LiteLLM's own
    retries are disabled: rate limits surface as RateLimitError so the
    caller's bounded backoff decides when to resubmit.

    Example:
        from lexindex.providers.litellm import LiteLLMEmbeddingClient, EmbeddingModels

        client = LiteLLMEmbeddingClient(model=EmbeddingModels.TEXT_3_SMALL, dimensions=1536)
        embeddings = client.embed(["Artikel 7:670 BW", "Ontslagverbod tijdens ziekte"])
    """

    def __init__(
        self,
        model: str = EmbeddingModels.TEXT_3_SMALL,
        dimensions: int | None = 1536,
        api_key: str | None = None,
        timeout: float | None = 60.0,
        max_input_chars: int = DEFAULT_MAX_INPUT_CHARS,
    ) -> None:
        """Initialize the LiteLLM embedding client.

        Args:
            model: LiteLLM embedding model identifier.
                   Examples: "openai/text-embedding-3-small", "gemini/gemini-embedding-001"
            dimensions: Requested vector size. None leaves it to the model.
            api_key: Optional API key; LiteLLM falls back to provider env vars.
            timeout: Request timeout in seconds.
            max_input_chars: Inputs longer than this are truncated.
        """
        super().__init__(max_input_chars=max_input_chars)
        self.model = model
        self.dimensions = dimensions
        self.api_key = api_key
        self.timeout = timeout

    def _request(self, texts: list[str]) -> Sequence[Mapping[str, Any]]:
        embedding_kwargs: dict[str, Any] = {
            "model": self.model,
            "input": texts,
            "num_retries": 0,
        }
        if self.dimensions is not None:
            embedding_kwargs["dimensions"] = self.dimensions
        if self.api_key:
            embedding_kwargs["api_key"] = self.api_key
        if self.timeout is not None:
            embedding_kwargs["timeout"] = self.timeout

        try:
            response = litellm.embedding(**embedding_kwargs)
        except litellm.RateLimitError as e:
            raise RateLimitError(f"Rate limited by {self.model}: {e}") from e
        except Exception as e:
            raise EmbeddingProviderError(f"Embedding request to {self.model} failed: {e}") from e

        data = getattr(response, "data", None)
        if data is None:
            raise EmbeddingProviderError(f"Embedding response from {self.model} has no data")
        return data
