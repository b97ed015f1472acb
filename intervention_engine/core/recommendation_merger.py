"""Deduplication and prioritization of recommendation lists."""

from collections.abc import Iterable, Sequence

from intervention_engine.core.schemas_drafts import Rec
from intervention_engine.core.schemas_interventions import EvidenceLevel, Intervention


def _title_key(title: str | None) -> str:
    return (title or "").strip().lower()


def merge_recommendations(seeds: Sequence[Rec], caller_recs: Iterable[Rec] | None) -> list[Rec]:
    """
    Merge seed recommendations with caller-supplied ones.

    Seeds come first, then caller recs in their given order. A caller rec is
    dropped when its title is empty after trimming or when an earlier entry
    already used the same lowercase title. Inputs are never mutated; every
    returned Rec is a copy.

    Args:
        seeds: Engine-provided recommendations
        caller_recs: Recommendations from the caller's plan (may be None)

    Returns:
        Ordered list with unique lowercase titles
    """
    merged: list[Rec] = []
    seen: set[str] = set()

    for seed in seeds:
        key = _title_key(seed.title)
        if key in seen:
            continue
        merged.append(seed.model_copy())
        seen.add(key)

    for rec in caller_recs or []:
        key = _title_key(rec.title)
        if not key or key in seen:
            continue
        merged.append(Rec(title=rec.title, rationale=rec.rationale))
        seen.add(key)

    return merged


def prioritize_by_evidence(interventions: Iterable[Intervention]) -> list[Intervention]:
    """
    Deduplicate by id (first occurrence wins) and move high-evidence items first.

    The sort is stable: within the high and non-high groups, input order is kept.
    """
    unique: dict[str, Intervention] = {}
    for item in interventions:
        if item.id not in unique:
            unique[item.id] = item

    return sorted(unique.values(), key=lambda i: i.evidence_level != EvidenceLevel.HIGH)
