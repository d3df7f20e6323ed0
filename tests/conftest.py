"""Shared pytest fixtures."""

import hashlib
import os
import tempfile

import pytest

from lexindex.exceptions import EmbeddingProviderError, RateLimitError
from lexindex.providers.base import EmbeddingClient

DIMENSIONS = 8


def fake_vector(text: str, dimensions: int = DIMENSIONS) -> list[float]:
    """Deterministic non-zero vector derived from the text."""
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return [(byte % 17 + 1) / 17.0 for byte in digest[:dimensions]]


class FakeEmbeddingClient(EmbeddingClient):
    """Embedding client that answers in reverse order, like some real APIs do.

    ``failures`` is consumed one item per request: an exception instance is
    raised, None lets the request succeed.
    """

    def __init__(self, dimensions: int = DIMENSIONS, failures=None, max_input_chars=32_000):
        super().__init__(max_input_chars=max_input_chars)
        self.dimensions = dimensions
        self.failures = list(failures or [])
        self.requests: list[list[str]] = []

    def _request(self, texts):
        self.requests.append(list(texts))
        if self.failures:
            failure = self.failures.pop(0)
            if failure is not None:
                raise failure
        items = [
            {"index": i, "embedding": fake_vector(text, self.dimensions)}
            for i, text in enumerate(texts)
        ]
        return list(reversed(items))


@pytest.fixture
def temp_dir():
    """Create a temporary directory for stores."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield tmpdir


@pytest.fixture
def db_path(temp_dir):
    return os.path.join(temp_dir, "lexindex.db")


@pytest.fixture
def chunk_store(db_path):
    from lexindex.stores import SQLiteChunkStore

    return SQLiteChunkStore(db_path, dimensions=DIMENSIONS)


@pytest.fixture
def source_registry(db_path):
    from lexindex.stores import SQLiteSourceRegistry

    return SQLiteSourceRegistry(db_path)


@pytest.fixture
def sleeps():
    """Records requested sleeps instead of sleeping."""
    return []


@pytest.fixture
def fake_sleep(sleeps):
    return sleeps.append


@pytest.fixture
def embedding_client():
    return FakeEmbeddingClient()


@pytest.fixture
def embedder(embedding_client, fake_sleep):
    from lexindex.embedder import ClientEmbedder

    return ClientEmbedder(embedding_client, max_attempts=3, backoff_seconds=30.0, sleep=fake_sleep)


@pytest.fixture
def rate_limited():
    return RateLimitError("429 Too Many Requests")


@pytest.fixture
def provider_error():
    return EmbeddingProviderError("500 Internal Server Error")


@pytest.fixture
def make_embedding_client():
    """Factory for FakeEmbeddingClient instances."""
    return FakeEmbeddingClient


@pytest.fixture
def vectorize():
    """The deterministic text -> vector function used by FakeEmbeddingClient."""
    return fake_vector
