"""Tests for recommendation merging and evidence prioritization."""

from intervention_engine.core.recommendation_merger import (
    merge_recommendations,
    prioritize_by_evidence,
)
from intervention_engine.core.schemas_drafts import Rec
from intervention_engine.core.schemas_interventions import Intervention


def test_merge_drops_case_insensitive_duplicate():
    seeds = [Rec(title="Token Economy", rationale="seed")]
    merged = merge_recommendations(seeds, [Rec(title="token economy", rationale="dup")])

    assert len(merged) == 1
    assert merged[0].rationale == "seed"


def test_merge_keeps_order_and_skips_blank_titles():
    seeds = [Rec(title="A"), Rec(title="B")]
    caller = [Rec(title="  "), Rec(title="C", rationale="new"), Rec(title=" b "), Rec(title="C")]

    merged = merge_recommendations(seeds, caller)

    assert [r.title for r in merged] == ["A", "B", "C"]
    assert len(merged) <= len(seeds) + len(caller)


def test_merge_does_not_mutate_inputs():
    seeds = [Rec(title="A", rationale="x")]
    merged = merge_recommendations(seeds, None)

    merged[0].rationale = "changed"
    assert seeds[0].rationale == "x"


def _intervention(item_id: str, evidence: str) -> Intervention:
    return Intervention(id=item_id, name=item_id, category="general", evidence_level=evidence)


def test_prioritize_by_evidence_is_stable_and_dedupes():
    items = [
        _intervention("m1", "moderate"),
        _intervention("h1", "high"),
        _intervention("e1", "emerging"),
        _intervention("h2", "high"),
        _intervention("h1", "moderate"),
    ]

    result = prioritize_by_evidence(items)

    assert [i.id for i in result] == ["h1", "h2", "m1", "e1"]
    assert result[0].evidence_level == "high"
