"""Deterministic narrative templates and seed recommendations for FBA/BIP drafts.

Everything here is fixed text with interpolated values. No randomness and no
model calls, so identical inputs give identical prose.
"""

import math
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import ROUND_HALF_UP, Decimal

from intervention_engine.core.coercion import format_number
from intervention_engine.core.schemas_drafts import Dataset, Number, Rec, TypeCount

MS_PER_DAY = 86_400_000
RATE_STEP = Decimal("0.1")


@dataclass(frozen=True)
class NarrativeParts:
    fba_summary: str
    bip_plan: str
    intervention_rationales: str


BIP_PLAN_TEXT = (
    "Interventions will target the highest-frequency behaviors using antecedent supports "
    "(structure, pre-corrections), explicit teaching of replacements (e.g., hand-raise, "
    "break card), and consistent consequence strategies (behavior-specific praise, planned "
    "ignoring for minor attention-seeking)."
)

INTERVENTION_RATIONALE_TEXT = (
    "Strategies are selected to compete with the presumed function(s) of behavior, increase "
    "access to reinforcement for appropriate responses, and reduce establishing operations "
    "that occasion problem behavior."
)

# Keyword looked up as a substring of the dominant behavior type, in order.
BEHAVIOR_SEEDS: tuple[tuple[str, tuple[Rec, ...]], ...] = (
    (
        "aggression",
        (
            Rec(title="Increase supervision during transitions", rationale="Reduce opportunities for escalation."),
            Rec(title="Pre-correct and offer choices", rationale="Choices can reduce power struggles."),
        ),
    ),
    (
        "noncompliance",
        (
            Rec(title="High-probability request sequence", rationale="Momentum improves compliance."),
            Rec(title="Clear, one-step directions", rationale="Reduces confusion and refusals."),
        ),
    ),
    (
        "elopement",
        (
            Rec(title="Visual boundaries & seating plan", rationale="Environmental cues reduce leaving area."),
            Rec(title="Teach break card use", rationale="Replacement for leaving without permission."),
        ),
    ),
    (
        "disruption",
        (
            Rec(title="Preferential seating", rationale="Minimizes peer attention and distraction."),
            Rec(title="Non-contingent attention", rationale="Satiates attention-seeking before disruption."),
        ),
    ),
)

GENERIC_SEEDS: tuple[Rec, ...] = (
    Rec(title="Advance organizer", rationale="Clarifies expectations and reduces uncertainty."),
    Rec(title="Non-contingent reinforcement (time-based)", rationale="Reduces motivation for problem behavior."),
)

TEACHING_SEEDS: tuple[Rec, ...] = (
    Rec(title="Teach explicit replacement behavior", rationale="Provide a functional alternative."),
    Rec(title="Rehearse with feedback", rationale="Build fluency and generalization."),
)

CONSEQUENCE_SEEDS: tuple[Rec, ...] = (
    Rec(title="Behavior-specific praise for replacements", rationale="Increase appropriate behavior."),
    Rec(title="Planned ignoring for minor attention-seeking", rationale="Reduce reinforcement of problem behavior."),
)

REINFORCEMENT_SEEDS: tuple[Rec, ...] = (
    Rec(title="Token economy with clear exchange rates", rationale="Sustain motivation across tasks."),
    Rec(title="Differential reinforcement (DRA/DRI)", rationale="Shift reinforcement to desired responses."),
)


def parse_instant(value: str) -> datetime:
    """
    Parse an ISO-8601 date or instant; naive values are taken as UTC.

    Raises:
        ValueError: If the string is not ISO-8601
    """
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def elapsed_days(start: str, end: str) -> int:
    """Whole days between two instants, rounded up, never less than 1."""
    delta_ms = (parse_instant(end) - parse_instant(start)).total_seconds() * 1000
    return max(1, math.ceil(delta_ms / MS_PER_DAY))


def events_per_day(total_events: Number, days: int) -> str:
    """Event rate to one decimal place; exact halves of the float round up."""
    rate = Decimal(total_events / days).quantize(RATE_STEP, rounding=ROUND_HALF_UP)
    return f"{rate:f}"


def build_narrative(
    dataset: Dataset,
    top_types: list[TypeCount],
    total_duration: Number,
) -> NarrativeParts:
    """
    Render the FBA summary, BIP plan and intervention rationale paragraphs.

    Args:
        dataset: Validated dataset (window, totals, student name)
        top_types: Most frequent behavior types, already ranked
        total_duration: Total duration in seconds

    Returns:
        NarrativeParts with the three prose blocks
    """
    days = elapsed_days(dataset.from_, dataset.to)
    rate = events_per_day(dataset.total_events, days)
    top_text = ", ".join(f"{t.type} ({format_number(t.count)})" for t in top_types)

    fba_summary = (
        f"Over the {days}-day window ({dataset.from_} to {dataset.to}), "
        f"{format_number(dataset.total_events)} events were logged for {dataset.student_name} "
        f"(≈{rate}/day; total duration {format_number(total_duration)}s). "
        f"The most frequent behaviors were {top_text}."
    )

    return NarrativeParts(
        fba_summary=fba_summary,
        bip_plan=BIP_PLAN_TEXT,
        intervention_rationales=INTERVENTION_RATIONALE_TEXT,
    )


def seed_recommendations_for_type(dominant_type: str) -> list[Rec]:
    """Fixed pair of antecedent recommendations for the dominant behavior type."""
    lowered = (dominant_type or "").lower()
    for keyword, seeds in BEHAVIOR_SEEDS:
        if keyword in lowered:
            return [seed.model_copy() for seed in seeds]
    return [seed.model_copy() for seed in GENERIC_SEEDS]
