"""Database operations for the interventions catalog table.

Vector search goes through the ``match_interventions`` Postgres function
(pgvector, cosine distance), which returns catalog columns plus a
``similarity`` column in [-1, 1], highest first.
"""

import json
from typing import Any

from intervention_engine.core.config import get_settings
from intervention_engine.core.logging import get_logger
from intervention_engine.db.batch_writer import BatchWriteResult, ChunkedWriter
from intervention_engine.db.supabase_client import get_supabase

logger = get_logger(__name__)

TABLE = "interventions"


def _decode_row(row: dict[str, Any]) -> dict[str, Any]:
    """PostgREST returns pgvector columns as text; parse them back into lists."""
    embedding = row.get("embedding")
    if isinstance(embedding, str):
        row = {**row, "embedding": json.loads(embedding)}
    return row


def list_interventions(limit: int | None = None) -> list[dict[str, Any]]:
    """
    List catalog rows in storage order.

    Args:
        limit: Max rows to return (all rows when omitted)

    Returns:
        List of intervention row dicts
    """
    supabase = get_supabase()

    query = supabase.table(TABLE).select("*").order("id")
    if limit is not None:
        query = query.limit(limit)
    response = query.execute()

    rows = [_decode_row(row) for row in response.data or []]
    logger.info(f"Fetched {len(rows)} interventions", extra={"limit": limit})
    return rows


def get_intervention(intervention_id: str) -> dict[str, Any] | None:
    """Get a single intervention row, or None if not found."""
    supabase = get_supabase()

    response = (
        supabase.table(TABLE)
        .select("*")
        .eq("id", intervention_id)
        .maybe_single()
        .execute()
    )
    if not response or not response.data:
        return None
    return _decode_row(response.data)


def match_interventions(
    query_embedding: list[float],
    match_count: int | None = None,
) -> list[dict[str, Any]]:
    """
    Nearest catalog rows to ``query_embedding`` by cosine similarity.

    An empty result usually means the vector index has not caught up with
    recently written embeddings; it is logged and returned as-is.

    Args:
        query_embedding: Query vector
        match_count: Max rows (defaults to SEMANTIC_MATCH_COUNT)

    Returns:
        Rows with a ``similarity`` key, highest first
    """
    settings = get_settings()
    supabase = get_supabase()
    count = match_count or settings.SEMANTIC_MATCH_COUNT

    response = supabase.rpc(
        "match_interventions",
        {"query_embedding": query_embedding, "match_count": count},
    ).execute()

    rows = [_decode_row(row) for row in response.data or []]
    if not rows:
        logger.warning(
            "Vector search returned no interventions; the index may still be building",
            extra={"match_count": count},
        )
    else:
        logger.info(f"Vector search matched {len(rows)} interventions")
    return rows


def upsert_intervention_embeddings(
    rows: list[dict[str, Any]],
    chunk_size: int | None = None,
) -> BatchWriteResult:
    """
    Upsert full catalog rows with their embedding columns, keyed by id.

    Each row is the complete intervention record plus ``embedding``,
    ``embedding_text``, ``embedding_generated_at`` and ``updated_at``, so a
    chunk stays valid against the table's required columns.

    Raises:
        BatchWriteError: If a chunk fails
    """
    return ChunkedWriter(TABLE, chunk_size=chunk_size).write(rows)
