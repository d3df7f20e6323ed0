# src/lexindex/embedder/client.py
"""Client-based embedder with bounded rate-limit retry."""

import logging
import time
from collections.abc import Callable

from tenacity import Retrying, before_sleep_log, retry_if_exception_type, stop_after_attempt, wait_fixed

from lexindex.embedder.base import Embedder
from lexindex.exceptions import RateLimitError
from lexindex.providers.base import EmbeddingClient

logger = logging.getLogger(__name__)


class ClientEmbedder(Embedder):
    """Embedder that submits batches through an EmbeddingClient.

    A RateLimitError makes the embedder wait ``backoff_seconds`` and resubmit
    the same batch, at most ``max_attempts`` times in total. Other errors
    propagate immediately.

    Example:
        from lexindex.providers.litellm import LiteLLMEmbeddingClient
        from lexindex.embedder import ClientEmbedder

        client = LiteLLMEmbeddingClient(model="openai/text-embedding-3-small")
        embedder = ClientEmbedder(embedding_client=client, max_attempts=5)
    """

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        max_attempts: int = 5,
        backoff_seconds: float = 30.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the embedder.

        Args:
            embedding_client: Any EmbeddingClient implementation
            max_attempts: Total attempts per batch when rate limited (>= 1)
            backoff_seconds: Wait between attempts
            sleep: Sleep function, injectable for tests

        Raises:
            ValueError: If max_attempts < 1
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be >= 1, got {max_attempts}")
        self._client = embedding_client
        self.max_attempts = max_attempts
        self.backoff_seconds = backoff_seconds
        self._sleep = sleep

    def embed_batch(self, texts: list[str]) -> list[list[float]]:
        """Embed one batch, retrying the whole batch on rate limits.

        Raises:
            RateLimitError: If still rate limited after max_attempts
            EmbeddingProviderError: On any other provider failure
        """
        if not texts:
            return []

        retrying = Retrying(
            retry=retry_if_exception_type(RateLimitError),
            stop=stop_after_attempt(self.max_attempts),
            wait=wait_fixed(self.backoff_seconds),
            sleep=self._sleep,
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        return retrying(self._client.embed, texts)
