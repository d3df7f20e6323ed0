# src/lexindex/providers/base.py
"""Abstract base class for embedding providers."""

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from typing import Any

from lexindex.exceptions import EmbeddingProviderError

DEFAULT_MAX_INPUT_CHARS = 32_000  # ~8000 tokens


class EmbeddingClient(ABC):
    """Abstract base class for embedding providers.

    Subclasses implement ``_request``, a single round-trip to the provider
    returning its ``data`` items (``{"index": int, "embedding": [...]}``).
    ``embed`` handles what every provider needs: truncation of oversized
    inputs and re-ordering of the response by ``index``. Providers are free
    to answer out of submission order.

    Example:
        class MyEmbeddingClient(EmbeddingClient):
            def _request(self, texts):
                return my_api.embed(texts)["data"]
    """

    def __init__(self, max_input_chars: int = DEFAULT_MAX_INPUT_CHARS) -> None:
        self.max_input_chars = max_input_chars

    def embed(self, texts: list[str]) -> list[list[float]]:
        """Generate embedding vectors for multiple texts in one request.

        Args:
            texts: List of texts to embed. Each is truncated to max_input_chars.

        Returns:
            List of embedding vectors, one per input text.
            Order is preserved (result[i] corresponds to texts[i]).

        Raises:
            RateLimitError: If the provider is rate limiting
            EmbeddingProviderError: On any other failure or a malformed response
        """
        if not texts:
            return []
        truncated = [text[: self.max_input_chars] for text in texts]
        items = self._request(truncated)
        return order_by_index(items, expected=len(truncated))

    @abstractmethod
    def _request(self, texts: list[str]) -> Sequence[Mapping[str, Any]]:
        """Submit one batch and return the provider's data items."""
        ...


def order_by_index(items: Sequence[Mapping[str, Any]], expected: int) -> list[list[float]]:
    """Sort provider items by their ``index`` and return the vectors.

    Raises:
        EmbeddingProviderError: If the items do not cover indices 0..expected-1 exactly
    """
    if len(items) != expected:
        raise EmbeddingProviderError(
            f"Embedding count mismatch: {expected} inputs, {len(items)} embeddings"
        )
    sorted_items = sorted(items, key=lambda item: item["index"])
    indices = [item["index"] for item in sorted_items]
    if indices != list(range(expected)):
        raise EmbeddingProviderError(f"Embedding response has unexpected indices: {indices}")
    return [list(item["embedding"]) for item in sorted_items]
