"""FBA/BIP draft service: request envelope around the pure draft assembler."""

import logging
from datetime import UTC, datetime
from typing import Any

from intervention_engine.core.config import get_settings
from intervention_engine.core.draft_assembler import format_timestamp, synthesize_draft
from intervention_engine.core.exceptions import InvalidPayload
from intervention_engine.core.logging import get_logger, log_with_context
from intervention_engine.db.datasets import get_behavior_dataset

logger = get_logger(__name__)

RESPONSE_PATH = "validated-v2"


def resolve_dataset(payload: Any) -> Any:
    """
    Fill ``dataset`` from storage when the caller sent ``datasetId`` instead.

    Payloads that already carry a dataset, or are not objects, pass through
    unchanged and are validated downstream.

    Raises:
        InvalidPayload: If ``datasetId`` names no stored dataset
    """
    if not isinstance(payload, dict) or payload.get("dataset") is not None:
        return payload

    dataset_id = payload.get("datasetId")
    if not dataset_id:
        return payload

    dataset = get_behavior_dataset(str(dataset_id))
    if dataset is None:
        raise InvalidPayload({"dataset": [f"no stored dataset with id {dataset_id}"]})

    logger.info(f"Loaded stored behavior dataset {dataset_id}")
    return {**payload, "dataset": dataset}


def synthesize_draft_response(
    payload: Any,
    *,
    now: datetime | None = None,
) -> dict[str, Any]:
    """
    Build the draft and wrap it with request metadata.

    Caller metadata from ``_meta`` is echoed back, then ``serverReceivedAt``
    and ``path`` are stamped on top.

    Returns:
        ``{"meta": {...}, "draft": {...}}`` with camelCase keys

    Raises:
        InvalidPayload: If the payload or its stored dataset is missing or malformed
    """
    payload = resolve_dataset(payload)

    draft = synthesize_draft(payload, now=now, engine=get_settings().ENGINE_VERSION)

    caller_meta = payload.get("_meta") if isinstance(payload, dict) else None
    meta = dict(caller_meta) if isinstance(caller_meta, dict) else {}
    meta["serverReceivedAt"] = format_timestamp(now or datetime.now(UTC))
    meta["path"] = RESPONSE_PATH

    context = {"student_id": draft.student.id, "mode": payload.get("mode") or "BIP"}
    if meta.get("requestId"):
        context["request_id"] = meta["requestId"]
    log_with_context(logger, logging.INFO, "Draft response ready", **context)

    return {"meta": meta, "draft": draft.model_dump(by_alias=True)}
