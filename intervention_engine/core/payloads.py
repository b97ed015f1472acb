"""Validation gate for draft-synthesis payloads.

Turns a loosely-typed request body into ``DraftInputs`` or raises
``InvalidPayload`` listing every offending field group. Only the structural
requirements are enforced here; nested numeric fields are coerced with
``as_number`` instead of rejected.
"""

from typing import Any

from intervention_engine.core.coercion import as_number, number_map, recs_from
from intervention_engine.core.exceptions import InvalidPayload
from intervention_engine.core.narrative import parse_instant
from intervention_engine.core.schemas_drafts import (
    Dataset,
    DraftInputs,
    InsightFunction,
    Insights,
    Plan,
)

REQUIRED_DATASET_STRINGS = ("studentName", "studentId", "from", "to")
PLAN_CATEGORIES = ("antecedent", "teaching", "consequence", "reinforcement")
DEFAULT_MODE = "BIP"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _dataset_errors(raw: Any) -> list[str]:
    if not isinstance(raw, dict):
        return ["must be an object"]

    errors = []
    for key in REQUIRED_DATASET_STRINGS:
        if not isinstance(raw.get(key), str):
            errors.append(f"{key} must be a string")
    if not _is_number(raw.get("totalEvents")):
        errors.append("totalEvents must be a number")

    for key in ("from", "to"):
        value = raw.get(key)
        if isinstance(value, str):
            try:
                parse_instant(value)
            except ValueError:
                errors.append(f"{key} must be an ISO-8601 date or instant")
    return errors


def _parse_dataset(raw: dict[str, Any]) -> Dataset:
    return Dataset(
        student_name=raw["studentName"],
        student_id=raw["studentId"],
        from_=raw["from"],
        to=raw["to"],
        total_events=as_number(raw["totalEvents"]),
        total_duration_seconds=as_number(raw.get("totalDurationSeconds")),
        by_severity=number_map(raw.get("bySeverity")),
        by_type=number_map(raw.get("byType")),
    )


def _parse_insights(raw: dict[str, Any]) -> Insights:
    ranked = raw.get("rankedFunctions")
    functions = []
    if isinstance(ranked, list):
        for entry in ranked:
            entry = entry if isinstance(entry, dict) else {}
            name = entry.get("name")
            functions.append(
                InsightFunction(
                    name="" if name is None else str(name),
                    share=as_number(entry.get("share")),
                )
            )

    hypothesis = raw.get("hypothesis")
    return Insights(
        hypothesis=hypothesis if isinstance(hypothesis, str) else "",
        ranked_functions=functions,
        severity_share=number_map(raw.get("severityShare")),
        antecedent_counts=number_map(raw.get("antecedentCounts")),
        consequence_counts=number_map(raw.get("consequenceCounts")),
    )


def _parse_plan(raw: dict[str, Any]) -> Plan:
    return Plan(**{category: recs_from(raw.get(category)) for category in PLAN_CATEGORIES})


def parse_draft_payload(payload: Any) -> DraftInputs:
    """
    Validate and coerce a ``{dataset, insights, plan, mode?, teacherNote?}`` payload.

    Args:
        payload: Raw request body

    Returns:
        DraftInputs ready for the draft assembler

    Raises:
        InvalidPayload: If the payload, dataset, insights or plan is missing or malformed
    """
    if not isinstance(payload, dict):
        raise InvalidPayload({"payload": ["expected an object with dataset, insights, plan"]})

    errors: dict[str, list[str]] = {}

    dataset_errors = _dataset_errors(payload.get("dataset"))
    if dataset_errors:
        errors["dataset"] = dataset_errors
    if not isinstance(payload.get("insights"), dict):
        errors["insights"] = ["must be an object"]
    if not isinstance(payload.get("plan"), dict):
        errors["plan"] = ["must be an object"]

    if errors:
        raise InvalidPayload(errors)

    mode = payload.get("mode")
    mode = DEFAULT_MODE if mode is None else str(mode).upper()

    note = payload.get("teacherNote")
    if note is None:
        note = payload.get("prompt")

    return DraftInputs(
        dataset=_parse_dataset(payload["dataset"]),
        insights=_parse_insights(payload["insights"]),
        plan=_parse_plan(payload["plan"]),
        mode=mode,
        teacher_note="" if note is None else str(note),
    )
