"""Database operations for stored behavior datasets (aggregated event summaries)."""

from typing import Any

from intervention_engine.core.logging import get_logger
from intervention_engine.db.supabase_client import get_supabase

logger = get_logger(__name__)


def get_behavior_dataset(dataset_id: str) -> dict[str, Any] | None:
    """
    Get an aggregated behavior dataset by id.

    The ``summary`` column holds the camelCase dataset object
    (studentName, studentId, from, to, totalEvents, bySeverity, byType...).

    Returns:
        The dataset dict, or None if not found
    """
    supabase = get_supabase()

    response = (
        supabase.table("behavior_datasets")
        .select("id, summary")
        .eq("id", dataset_id)
        .maybe_single()
        .execute()
    )

    if not response or not response.data:
        logger.info(f"Behavior dataset {dataset_id} not found")
        return None

    return response.data.get("summary")
