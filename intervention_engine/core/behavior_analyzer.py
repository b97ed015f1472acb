"""Rule-based behavior-function classification and catalog recommendation.

Keyword rules assign hypothesized functions to a free-text behavior
description; the matching catalog categories plus the always-included
"general" category are filtered and prioritized by evidence level.
"""

from dataclasses import dataclass

from intervention_engine.core.intervention_catalog import InterventionCatalog
from intervention_engine.core.logging import get_logger
from intervention_engine.core.recommendation_merger import prioritize_by_evidence
from intervention_engine.core.schemas_interventions import (
    BehaviorAnalysis,
    Intervention,
    InterventionCategory,
)

logger = get_logger(__name__)

MAX_RECOMMENDATIONS = 5


@dataclass(frozen=True)
class FunctionRule:
    label: str
    category: InterventionCategory
    keywords: tuple[str, ...]


# Evaluated in order; every matching rule contributes its label.
FUNCTION_RULES: tuple[FunctionRule, ...] = (
    FunctionRule(
        label="attention-seeking",
        category=InterventionCategory.ATTENTION,
        keywords=("attention", "calling out", "interrupt", "blurt"),
    ),
    FunctionRule(
        label="escape/avoidance",
        category=InterventionCategory.ESCAPE,
        keywords=("avoid", "refuse", "won't", "escape"),
    ),
    FunctionRule(
        label="sensory-seeking",
        category=InterventionCategory.SENSORY,
        keywords=("movement", "fidget", "out of seat", "sensory"),
    ),
    FunctionRule(
        label="social difficulties",
        category=InterventionCategory.SOCIAL,
        keywords=("peer", "social", "friend"),
    ),
)


def classify_functions(behavior_text: str) -> list[FunctionRule]:
    """Return the rules whose keywords appear in the text (case-insensitive substring)."""
    lowered = (behavior_text or "").lower()
    return [
        rule for rule in FUNCTION_RULES
        if any(keyword in lowered for keyword in rule.keywords)
    ]


def describe_functions(labels: list[str]) -> str:
    """One-sentence function attribution."""
    if labels:
        return (
            "Based on the behavior description, this appears to serve the following "
            f"function(s): {', '.join(labels)}."
        )
    return (
        "The behavior function is unclear from the description. A comprehensive "
        "functional behavior assessment is recommended."
    )


def describe_filters(age_group: str | None, setting: str | None) -> str:
    """One-paragraph rationale naming the filters applied."""
    parts = [
        "Interventions were selected based on evidence-based practices for the "
        "identified behavior function(s)."
    ]
    if age_group:
        parts.append(f"Recommendations are appropriate for {age_group} age group.")
    if setting:
        parts.append(f"Interventions are suitable for {setting} setting.")
    parts.append("High evidence interventions are prioritized.")
    return " ".join(parts)


def recommend(
    catalog: InterventionCatalog,
    behavior_text: str,
    age_group: str | None = None,
    setting: str | None = None,
) -> BehaviorAnalysis:
    """
    Recommend catalog interventions for a behavior description.

    General interventions are always included, so a non-empty catalog with
    general items never yields an empty recommendation set unless the age or
    setting filters exclude everything.

    Args:
        catalog: Catalog to select from
        behavior_text: Free-text behavior description
        age_group: Keep only items applicable to this age group
        setting: Keep only items applicable to this setting

    Returns:
        BehaviorAnalysis with up to 5 interventions, attribution and rationale
    """
    rules = classify_functions(behavior_text)

    candidates: list[Intervention] = []
    for rule in rules:
        candidates.extend(catalog.by_category(rule.category.value))
    candidates.extend(catalog.by_category(InterventionCategory.GENERAL.value))

    if age_group:
        candidates = [i for i in candidates if age_group in i.age_groups]
    if setting:
        candidates = [i for i in candidates if setting in i.settings]

    prioritized = prioritize_by_evidence(candidates)[:MAX_RECOMMENDATIONS]
    labels = [rule.label for rule in rules]

    logger.info(
        f"Behavior analysis matched functions={labels or ['unclear']}, "
        f"recommending {len(prioritized)} interventions",
        extra={"age_group": age_group, "setting": setting},
    )

    return BehaviorAnalysis(
        recommended_interventions=prioritized,
        behavior_analysis=describe_functions(labels),
        rationale=describe_filters(age_group, setting),
        functions=labels,
    )
