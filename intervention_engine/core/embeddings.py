"""OpenAI embeddings generation with validation."""

import asyncio

from openai import OpenAI

from intervention_engine.core.config import get_settings
from intervention_engine.core.exceptions import UpstreamProviderFailure
from intervention_engine.core.logging import get_logger

logger = get_logger(__name__)


def _get_client() -> OpenAI:
    """Get OpenAI client instance."""
    settings = get_settings()
    return OpenAI(api_key=settings.OPENAI_API_KEY)


def embed_texts(texts: list[str]) -> list[list[float]]:
    """
    Generate embeddings for a list of texts using OpenAI.

    Args:
        texts: List of text strings to embed

    Returns:
        List of embedding vectors, one per input text, in input order

    Raises:
        UpstreamProviderFailure: If the API call fails, or the response has the
            wrong number of vectors or a vector of the wrong dimension
    """
    if not texts:
        return []

    settings = get_settings()
    client = _get_client()

    try:
        response = client.embeddings.create(
            model=settings.EMBEDDING_MODEL,
            input=texts,
        )
    except Exception as e:
        logger.error(f"Failed to generate embeddings: {e}")
        raise UpstreamProviderFailure(f"Failed to generate embeddings: {e}") from e

    if len(response.data) != len(texts):
        logger.error(f"Expected {len(texts)} embeddings, got {len(response.data)}")
        raise UpstreamProviderFailure(
            f"Expected {len(texts)} embeddings, got {len(response.data)}"
        )

    embeddings = []
    for i, embedding_obj in enumerate(response.data):
        embedding = list(embedding_obj.embedding)

        if len(embedding) != settings.EMBEDDING_DIM:
            raise UpstreamProviderFailure(
                f"Embedding dimension mismatch for text {i}: "
                f"expected {settings.EMBEDDING_DIM}, got {len(embedding)}"
            )

        embeddings.append(embedding)

    logger.info(
        f"Generated {len(embeddings)} embeddings using {settings.EMBEDDING_MODEL}",
        extra={"model": settings.EMBEDDING_MODEL, "count": len(embeddings)},
    )

    return embeddings


def embed_text(text: str) -> list[float]:
    """Embed a single text."""
    return embed_texts([text])[0]


async def embed_texts_async(texts: list[str]) -> list[list[float]]:
    """Async wrapper around embed_texts using thread pool."""
    return await asyncio.to_thread(embed_texts, texts)


async def embed_text_async(text: str) -> list[float]:
    """Async wrapper around embed_text using thread pool."""
    return await asyncio.to_thread(embed_text, text)
