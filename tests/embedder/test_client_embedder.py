"""Tests for ClientEmbedder rate-limit handling."""

import logging

import pytest

from lexindex.embedder import ClientEmbedder, Embedder
from lexindex.exceptions import EmbeddingProviderError, RateLimitError


class TestClientEmbedder:
    def test_is_embedder(self, embedder):
        assert isinstance(embedder, Embedder)

    def test_rejects_zero_attempts(self, embedding_client):
        with pytest.raises(ValueError):
            ClientEmbedder(embedding_client, max_attempts=0)

    def test_embed_batch(self, embedder, vectorize):
        assert embedder.embed_batch(["a", "b"]) == [vectorize("a"), vectorize("b")]

    def test_embed_text(self, embedder, vectorize):
        assert embedder.embed_text("Artikel 1") == vectorize("Artikel 1")

    def test_empty_batch(self, embedder, embedding_client):
        assert embedder.embed_batch([]) == []
        assert embedding_client.requests == []

    def test_rate_limit_retries_same_batch(
        self, make_embedding_client, fake_sleep, sleeps, rate_limited
    ):
        client = make_embedding_client(failures=[rate_limited])
        embedder = ClientEmbedder(client, max_attempts=5, backoff_seconds=30.0, sleep=fake_sleep)
        texts = [f"chunk {i}" for i in range(50)]

        vectors = embedder.embed_batch(texts)

        assert len(vectors) == 50
        assert sleeps == [30.0]
        assert len(client.requests) == 2
        assert client.requests[0] == texts
        assert client.requests[1] == texts

    def test_rate_limit_attempts_bounded(
        self, make_embedding_client, fake_sleep, sleeps, rate_limited
    ):
        client = make_embedding_client(failures=[rate_limited] * 10)
        embedder = ClientEmbedder(client, max_attempts=3, backoff_seconds=30.0, sleep=fake_sleep)

        with pytest.raises(RateLimitError):
            embedder.embed_batch(["a"])

        assert len(client.requests) == 3
        assert sleeps == [30.0, 30.0]

    def test_provider_error_not_retried(
        self, make_embedding_client, fake_sleep, sleeps, provider_error
    ):
        client = make_embedding_client(failures=[provider_error])
        embedder = ClientEmbedder(client, sleep=fake_sleep)

        with pytest.raises(EmbeddingProviderError):
            embedder.embed_batch(["a"])

        assert len(client.requests) == 1
        assert sleeps == []

    def test_backoff_logged(self, make_embedding_client, fake_sleep, rate_limited, caplog):
        client = make_embedding_client(failures=[rate_limited])
        embedder = ClientEmbedder(client, sleep=fake_sleep)

        with caplog.at_level(logging.WARNING, logger="lexindex.embedder.client"):
            embedder.embed_batch(["a"])

        assert any("Retrying" in record.getMessage() for record in caplog.records)
