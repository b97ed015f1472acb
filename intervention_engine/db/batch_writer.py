"""Chunked upserts for bulk catalog writes.

Each chunk is a single upsert call, so a chunk lands entirely or not at all.
Chunks are committed in order; rows are keyed by a stable id, which makes a
re-run after a partial failure safe.
"""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from intervention_engine.core.config import get_settings
from intervention_engine.core.exceptions import BatchWriteError
from intervention_engine.core.logging import get_logger
from intervention_engine.db.supabase_client import get_supabase

logger = get_logger(__name__)


@dataclass(frozen=True)
class BatchWriteResult:
    written: int
    chunks_committed: int


class ChunkedWriter:
    """Upsert rows into ``table`` in chunks of at most ``chunk_size``."""

    def __init__(self, table: str, chunk_size: int | None = None, on_conflict: str = "id"):
        size = chunk_size if chunk_size is not None else get_settings().BATCH_WRITE_LIMIT
        if size < 1:
            raise ValueError(f"chunk_size must be positive, got {size}")
        self.table = table
        self.chunk_size = size
        self.on_conflict = on_conflict

    def chunks(self, rows: Sequence[dict[str, Any]]) -> list[Sequence[dict[str, Any]]]:
        return [rows[i:i + self.chunk_size] for i in range(0, len(rows), self.chunk_size)]

    def write(self, rows: Sequence[dict[str, Any]]) -> BatchWriteResult:
        """
        Upsert all rows, one call per chunk.

        Returns:
            BatchWriteResult with the row and chunk counts committed

        Raises:
            BatchWriteError: If a chunk fails; ``committed`` counts rows from earlier chunks
        """
        supabase = get_supabase()
        written = 0
        committed_chunks = 0

        for index, chunk in enumerate(self.chunks(rows)):
            try:
                supabase.table(self.table).upsert(
                    list(chunk), on_conflict=self.on_conflict
                ).execute()
            except Exception as e:
                logger.error(
                    f"Chunk {index} of {self.table} upsert failed after {written} rows: {e}"
                )
                raise BatchWriteError(
                    f"Failed to write chunk {index} to {self.table}: {e}", committed=written
                ) from e

            written += len(chunk)
            committed_chunks += 1
            logger.debug(f"Committed chunk {index} ({len(chunk)} rows) to {self.table}")

        logger.info(
            f"Wrote {written} rows to {self.table} in {committed_chunks} chunks",
            extra={"table": self.table, "rows": written, "chunks": committed_chunks},
        )
        return BatchWriteResult(written=written, chunks_committed=committed_chunks)
