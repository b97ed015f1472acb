"""Tests for embeddings generation with mocked OpenAI API."""

from unittest.mock import MagicMock, patch

import pytest

from intervention_engine.core.embeddings import embed_text, embed_text_async, embed_texts
from intervention_engine.core.exceptions import UpstreamProviderFailure


@pytest.fixture
def mock_openai_response():
    """Create a mock OpenAI embeddings response."""

    def _create_response(num_embeddings: int, dimension: int = 1536):
        mock_response = MagicMock()
        mock_response.data = []

        for _ in range(num_embeddings):
            mock_embedding = MagicMock()
            mock_embedding.embedding = [0.1] * dimension
            mock_response.data.append(mock_embedding)

        return mock_response

    return _create_response


def test_embed_texts_multiple(mock_openai_response):
    """Test embedding multiple texts."""
    with patch("intervention_engine.core.embeddings._get_client") as mock_get_client:
        mock_client = MagicMock()
        mock_client.embeddings.create.return_value = mock_openai_response(3)
        mock_get_client.return_value = mock_client

        embeddings = embed_texts(["Text one", "Text two", "Text three"])

        assert len(embeddings) == 3
        for embedding in embeddings:
            assert len(embedding) == 1536
        mock_client.embeddings.create.assert_called_once_with(
            model="text-embedding-3-small",
            input=["Text one", "Text two", "Text three"],
        )


def test_embed_texts_empty():
    """Empty input never calls the provider."""
    with patch("intervention_engine.core.embeddings._get_client") as mock_get_client:
        assert embed_texts([]) == []
        mock_get_client.assert_not_called()


def test_embed_texts_dimension_validation(mock_openai_response):
    with patch("intervention_engine.core.embeddings._get_client") as mock_get_client:
        mock_client = MagicMock()
        mock_client.embeddings.create.return_value = mock_openai_response(1, dimension=512)
        mock_get_client.return_value = mock_client

        with pytest.raises(UpstreamProviderFailure, match="Embedding dimension mismatch"):
            embed_texts(["Test text"])


def test_embed_texts_count_validation(mock_openai_response):
    with patch("intervention_engine.core.embeddings._get_client") as mock_get_client:
        mock_client = MagicMock()
        mock_client.embeddings.create.return_value = mock_openai_response(1)
        mock_get_client.return_value = mock_client

        with pytest.raises(UpstreamProviderFailure, match="Expected 2 embeddings"):
            embed_texts(["one", "two"])


def test_embed_texts_api_failure():
    with patch("intervention_engine.core.embeddings._get_client") as mock_get_client:
        mock_client = MagicMock()
        mock_client.embeddings.create.side_effect = Exception("API Error")
        mock_get_client.return_value = mock_client

        with pytest.raises(UpstreamProviderFailure, match="API Error"):
            embed_texts(["Test text"])


def test_embed_text_single(mock_openai_response):
    with patch("intervention_engine.core.embeddings._get_client") as mock_get_client:
        mock_client = MagicMock()
        mock_client.embeddings.create.return_value = mock_openai_response(1)
        mock_get_client.return_value = mock_client

        assert len(embed_text("Hello world")) == 1536


@pytest.mark.asyncio
async def test_embed_text_async(mock_openai_response):
    with patch("intervention_engine.core.embeddings._get_client") as mock_get_client:
        mock_client = MagicMock()
        mock_client.embeddings.create.return_value = mock_openai_response(1)
        mock_get_client.return_value = mock_client

        embedding = await embed_text_async("Hello world")

        assert len(embedding) == 1536
