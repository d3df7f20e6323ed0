"""Tests for the LiteLLM embedding client."""

from unittest.mock import MagicMock, patch

import litellm
import pytest

from lexindex.exceptions import EmbeddingProviderError, RateLimitError
from lexindex.providers import EmbeddingClient
from lexindex.providers.litellm import EmbeddingModels, LiteLLMEmbeddingClient


def mock_embedding_response(embeddings: list[list[float]]):
    """Create a mock LiteLLM embedding response."""
    mock_response = MagicMock()
    mock_response.data = [{"index": i, "embedding": emb} for i, emb in enumerate(embeddings)]
    return mock_response


@pytest.fixture
def client():
    return LiteLLMEmbeddingClient(dimensions=3)


class TestLiteLLMEmbeddingClient:
    def test_is_embedding_client(self, client):
        assert isinstance(client, EmbeddingClient)

    def test_default_model(self, client):
        assert client.model == EmbeddingModels.TEXT_3_SMALL

    @patch("lexindex.providers.litellm.client.litellm.embedding")
    def test_embed(self, mock_embedding, client):
        mock_embedding.return_value = mock_embedding_response([[0.1, 0.2, 0.3]])

        result = client.embed(["Artikel 7:670 BW"])

        assert result == [[0.1, 0.2, 0.3]]
        mock_embedding.assert_called_once_with(
            model="openai/text-embedding-3-small",
            input=["Artikel 7:670 BW"],
            num_retries=0,
            dimensions=3,
            timeout=60.0,
        )

    @patch("lexindex.providers.litellm.client.litellm.embedding")
    def test_passes_api_key(self, mock_embedding):
        mock_embedding.return_value = mock_embedding_response([[1.0]])
        client = LiteLLMEmbeddingClient(dimensions=None, api_key="sk-test", timeout=None)

        client.embed(["x"])

        mock_embedding.assert_called_once_with(
            model="openai/text-embedding-3-small",
            input=["x"],
            num_retries=0,
            api_key="sk-test",
        )

    @patch("lexindex.providers.litellm.client.litellm.embedding")
    def test_permuted_response_reordered(self, mock_embedding, client):
        mock_response = MagicMock()
        mock_response.data = [
            {"index": 2, "embedding": [0.0, 0.0, 1.0]},
            {"index": 0, "embedding": [1.0, 0.0, 0.0]},
            {"index": 1, "embedding": [0.0, 1.0, 0.0]},
        ]
        mock_embedding.return_value = mock_response

        result = client.embed(["a", "b", "c"])

        assert result == [[1.0, 0.0, 0.0], [0.0, 1.0, 0.0], [0.0, 0.0, 1.0]]

    @patch("lexindex.providers.litellm.client.litellm.embedding")
    def test_truncates_inputs(self, mock_embedding):
        mock_embedding.return_value = mock_embedding_response([[1.0]])
        client = LiteLLMEmbeddingClient(max_input_chars=32_000)

        client.embed(["a" * 40_000])

        sent = mock_embedding.call_args.kwargs["input"]
        assert len(sent[0]) == 32_000

    @patch("lexindex.providers.litellm.client.litellm.embedding")
    def test_rate_limit_mapped(self, mock_embedding, client):
        mock_embedding.side_effect = litellm.RateLimitError(
            message="429", llm_provider="openai", model="text-embedding-3-small"
        )
        with pytest.raises(RateLimitError):
            client.embed(["x"])

    @patch("lexindex.providers.litellm.client.litellm.embedding")
    def test_other_errors_mapped(self, mock_embedding, client):
        mock_embedding.side_effect = RuntimeError("connection reset")
        with pytest.raises(EmbeddingProviderError, match="connection reset"):
            client.embed(["x"])

    @patch("lexindex.providers.litellm.client.litellm.embedding")
    def test_short_response_rejected(self, mock_embedding, client):
        mock_embedding.return_value = mock_embedding_response([[1.0, 0.0, 0.0]])
        with pytest.raises(EmbeddingProviderError):
            client.embed(["a", "b"])

    @patch("lexindex.providers.litellm.client.litellm.embedding")
    def test_missing_data_rejected(self, mock_embedding, client):
        mock_embedding.return_value = MagicMock(data=None)
        with pytest.raises(EmbeddingProviderError):
            client.embed(["a"])
