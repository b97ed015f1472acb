"""Tests for keyword/tag relevance scoring."""

from intervention_engine.core.keyword_scorer import (
    KeywordItem,
    clamp_top_k,
    extract_tags,
    score_catalog,
    score_item,
)


def _items():
    return [
        KeywordItem(id="kb-1", title="Group work supports", function="escape", tags=("escape", "whole-group")),
        KeywordItem(id="kb-2", title="Break card", function="escape", tags=("escape", "noncompliance")),
        KeywordItem(id="kb-3", title="Planned ignoring", function="attention", tags=("attention", "calling out")),
        KeywordItem(id="kb-4", title="Sensory breaks", function="sensory", tags=("sensory",)),
    ]


def test_extract_tags_is_literal_substring():
    assert extract_tags("Calling out during whole-group instruction") == ["calling out", "whole-group"]
    assert extract_tags("AGGRESSION at transition") == ["aggression", "transition"]


def test_avoid_does_not_match_escape_tag():
    """'avoids' is not a literal substring of any vocabulary tag."""
    query = "Student avoids group work"
    assert extract_tags(query) == []

    hits = score_catalog(query, _items(), top_k=4)
    by_id = {h.item.id: h.score for h in hits}

    # Only the title hit on "group"/"work" contributes
    assert by_id["kb-1"] == 1
    assert by_id["kb-2"] == 0


def test_score_item_weights():
    item = _items()[2]
    tags = extract_tags("calling out for attention")

    assert score_item(item, tags, ["calling"], preferred_function="Attention") == 3 + 2 + 2
    assert score_item(item, tags, ["planned"], preferred_function=None) == 2 + 2 + 1
    assert score_item(item, [], ["zzz"], preferred_function="escape") == 0


def test_score_catalog_orders_descending_and_keeps_ties_stable():
    hits = score_catalog("noncompliance", _items(), preferred_function="escape", top_k=10)

    assert [h.item.id for h in hits] == ["kb-2", "kb-1", "kb-3", "kb-4"]
    assert [h.score for h in hits] == [5, 3, 0, 0]


def test_score_catalog_is_deterministic():
    first = score_catalog("escape during transition", _items())
    second = score_catalog("escape during transition", _items())
    assert [(h.item.id, h.score) for h in first] == [(h.item.id, h.score) for h in second]


def test_clamp_top_k():
    assert clamp_top_k(None) == 5
    assert clamp_top_k(0) == 5
    assert clamp_top_k("abc") == 5
    assert clamp_top_k("3") == 3
    assert clamp_top_k(-4) == 1
    assert clamp_top_k(50) == 10


def test_clamp_top_k_non_finite():
    assert clamp_top_k(float("inf")) == 10
    assert clamp_top_k(float("-inf")) == 1
    assert clamp_top_k(float("nan")) == 5


def test_from_row_accepts_intervention_rows():
    item = KeywordItem.from_row(
        {
            "id": "escape-001",
            "name": "Task Modification",
            "category": "escape",
            "behavior_function": ["escape", "task avoidance"],
        }
    )

    assert item.title == "Task Modification"
    assert item.function == "escape"
    assert item.tags == ("escape", "task avoidance")
