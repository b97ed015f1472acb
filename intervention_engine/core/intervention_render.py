"""Markdown rendering of recommended interventions for display to educators."""

from collections.abc import Iterable
from typing import Any

from intervention_engine.core.schemas_interventions import Intervention

BULLET = "•"


def _field(item: Intervention | dict[str, Any], snake: str, camel: str) -> Any:
    if isinstance(item, Intervention):
        return getattr(item, snake)
    return item.get(camel, item.get(snake))


def format_intervention_recommendations(
    interventions: Iterable[Intervention | dict[str, Any]],
    behavior_analysis: str,
    rationale: str,
) -> str:
    """
    Render an analysis as markdown.

    Layout: behavior analysis header, one numbered block per intervention
    (name, evidence level, description, steps, data collection, materials,
    frequency, duration) separated by rules, then the selection rationale.
    """
    sections: list[str] = [f"**BEHAVIOR ANALYSIS:**\n{behavior_analysis}\n"]

    for index, item in enumerate(interventions, start=1):
        name = _field(item, "name", "name") or ""
        evidence = _field(item, "evidence_level", "evidenceLevel") or ""
        sections.append(f"**{index}. {name.upper()}**")
        sections.append(f"*Evidence Level: {evidence.upper()}*")
        sections.append(f"\n{_field(item, 'description', 'description') or ''}\n")

        steps = _field(item, "implementation", "implementation") or []
        if steps:
            sections.append("**Implementation Steps:**")
            sections.extend(f"{BULLET} {step}" for step in steps)
            sections.append("")

        data_collection = _field(item, "data_collection", "dataCollection") or []
        if data_collection:
            sections.append("\n**Data Collection:**")
            sections.extend(f"{BULLET} {entry}" for entry in data_collection)

        materials = _field(item, "materials", "materials") or []
        if materials:
            sections.append(f"\n**Materials Needed:** {', '.join(materials)}")

        frequency = _field(item, "frequency", "frequency")
        if frequency:
            sections.append(f"**Frequency:** {frequency}")

        duration = _field(item, "duration", "duration")
        if duration:
            sections.append(f"**Duration:** {duration}")

        sections.append("\n---\n")

    sections.append(f"**SELECTION RATIONALE:**\n{rationale}")
    return "\n".join(sections)
