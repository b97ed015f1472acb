"""FBA/BIP draft assembly from aggregated behavior data, insights and a partial plan.

Pure function of its inputs plus the generation timestamp. Pass ``now`` to
freeze the clock; with identical inputs the serialized draft is byte-identical.
"""

from datetime import UTC, datetime
from typing import Any

from intervention_engine.core.logging import get_logger
from intervention_engine.core.narrative import (
    CONSEQUENCE_SEEDS,
    REINFORCEMENT_SEEDS,
    TEACHING_SEEDS,
    build_narrative,
    seed_recommendations_for_type,
)
from intervention_engine.core.payloads import parse_draft_payload
from intervention_engine.core.recommendation_merger import merge_recommendations
from intervention_engine.core.schemas_drafts import (
    Draft,
    DraftInputs,
    DraftInsights,
    DraftMeta,
    DraftNarrative,
    DraftRecommendations,
    DraftStudent,
    DraftSummary,
    InsightFunction,
    Number,
    StudentWindow,
    TypeCount,
)

logger = get_logger(__name__)

DEFAULT_ENGINE_TAG = "validated-live-2"
DISCLAIMER = "Draft for educational purposes; review with your team."
MAX_TOP_TYPES = 5
MAX_TOP_FUNCTIONS = 2


def top_behavior_types(by_type: dict[str, Number], limit: int = MAX_TOP_TYPES) -> list[TypeCount]:
    """Most frequent behavior types, descending; ties keep insertion order."""
    ranked = sorted(
        (TypeCount(type=name, count=count) for name, count in by_type.items()),
        key=lambda t: t.count,
        reverse=True,
    )
    return ranked[:limit]


def top_functions(ranked: list[InsightFunction], limit: int = MAX_TOP_FUNCTIONS) -> list[InsightFunction]:
    return [f.model_copy() for f in ranked[:limit]]


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with milliseconds and a ``Z`` suffix."""
    utc = moment.astimezone(UTC)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def assemble_draft(
    inputs: DraftInputs,
    *,
    now: datetime | None = None,
    engine: str = DEFAULT_ENGINE_TAG,
) -> Draft:
    """
    Build a Draft from validated inputs.

    Args:
        inputs: Parsed dataset, insights, plan, mode and teacher note
        now: Generation time (defaults to the current UTC time)
        engine: Engine/version tag stamped into metadata

    Returns:
        Draft
    """
    dataset = inputs.dataset
    insights = inputs.insights
    plan = inputs.plan

    by_type_top = top_behavior_types(dataset.by_type)
    narrative = build_narrative(dataset, by_type_top, dataset.total_duration_seconds)

    teacher_line = f" Teacher note: {inputs.teacher_note}" if inputs.teacher_note else ""
    fba_summary = narrative.fba_summary
    bip_plan = narrative.bip_plan
    if inputs.mode == "FBA":
        fba_summary += teacher_line
    elif inputs.mode == "BIP":
        bip_plan += teacher_line

    dominant = by_type_top[0].type if by_type_top else "generic"
    antecedent_seeds = seed_recommendations_for_type(dominant)

    generated_at = format_timestamp(now or datetime.now(UTC))

    return Draft(
        student=DraftStudent(
            id=dataset.student_id,
            name=dataset.student_name,
            window=StudentWindow(from_=dataset.from_, to=dataset.to),
        ),
        summary=DraftSummary(
            total_events=dataset.total_events,
            total_duration_seconds=dataset.total_duration_seconds,
            by_severity=dict(dataset.by_severity),
            by_type_top=by_type_top,
        ),
        insights=DraftInsights(
            hypothesis=insights.hypothesis,
            top_functions=top_functions(insights.ranked_functions),
            severity_share=dict(insights.severity_share),
            antecedents=dict(insights.antecedent_counts),
            consequences=dict(insights.consequence_counts),
        ),
        recommendations=DraftRecommendations(
            antecedent=merge_recommendations(antecedent_seeds, plan.antecedent),
            teaching=merge_recommendations(TEACHING_SEEDS, plan.teaching),
            consequence=merge_recommendations(CONSEQUENCE_SEEDS, plan.consequence),
            reinforcement=merge_recommendations(REINFORCEMENT_SEEDS, plan.reinforcement),
        ),
        narrative=DraftNarrative(
            fba_summary=fba_summary,
            bip_plan=bip_plan,
            intervention_rationales=narrative.intervention_rationales,
            disclaimer=DISCLAIMER,
        ),
        meta=DraftMeta(generated_at=generated_at, engine=engine),
    )


def synthesize_draft(
    payload: Any,
    *,
    now: datetime | None = None,
    engine: str = DEFAULT_ENGINE_TAG,
) -> Draft:
    """
    Validate a raw ``{dataset, insights, plan, mode?, teacherNote?}`` payload and build the draft.

    Raises:
        InvalidPayload: If dataset, insights or plan is missing or malformed
    """
    inputs = parse_draft_payload(payload)
    draft = assemble_draft(inputs, now=now, engine=engine)

    logger.info(
        f"Synthesized {inputs.mode} draft for student {inputs.dataset.student_id}",
        extra={
            "total_events": inputs.dataset.total_events,
            "top_types": len(draft.summary.by_type_top),
            "engine": engine,
        },
    )
    return draft
