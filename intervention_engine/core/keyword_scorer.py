"""Keyword/tag relevance scoring for catalog items.

Deterministic fallback for when no vector index is available, and a cheap
first pass otherwise. Matching is literal, case-insensitive substring
containment: no stemming and no synonym table, so "avoids" does not hit the
"escape" tag.
"""

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from intervention_engine.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_TAG_VOCABULARY: tuple[str, ...] = (
    "aggression",
    "noncompliance",
    "elopement",
    "disruption",
    "calling out",
    "transition",
    "whole-group",
    "unstructured",
    "escape",
    "attention",
    "tangible",
    "sensory",
)

# Score weights
FUNCTION_MATCH_POINTS = 3
TAG_HIT_POINTS = 2
TITLE_HIT_POINTS = 1

DEFAULT_TOP_K = 5
MIN_TOP_K = 1
MAX_TOP_K = 10


@dataclass(frozen=True)
class KeywordItem:
    """Scorable view of a catalog row."""
    id: str
    title: str
    function: str = ""
    tags: tuple[str, ...] = ()
    payload: dict[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_row(cls, row: dict[str, Any], fallback_id: str = "") -> "KeywordItem":
        """
        Build from a stored row.

        Knowledge-base rows carry ``title``/``function``/``tags``; intervention
        rows carry ``name``/``category``/``behavior_function``. Both are accepted.
        """
        tags = row.get("tags")
        if tags is None:
            tags = row.get("behavior_function") or row.get("behaviorFunction") or []
        return cls(
            id=str(row.get("id") or fallback_id),
            title=str(row.get("title") or row.get("name") or ""),
            function=str(row.get("function") or row.get("category") or ""),
            tags=tuple(str(t) for t in tags if t is not None),
            payload=row,
        )


@dataclass(frozen=True)
class KeywordHit:
    item: KeywordItem
    score: int


def clamp_top_k(top_k: Any) -> int:
    """
    Clamp a requested count to [1, 10]; missing, zero, NaN or non-numeric means 5.

    Infinite values clamp to the nearest bound.
    """
    if isinstance(top_k, float) and not math.isfinite(top_k):
        if math.isnan(top_k):
            return DEFAULT_TOP_K
        return MAX_TOP_K if top_k > 0 else MIN_TOP_K
    try:
        requested = int(top_k) if top_k is not None else 0
    except (TypeError, ValueError):
        requested = 0
    if requested == 0:
        requested = DEFAULT_TOP_K
    return max(MIN_TOP_K, min(MAX_TOP_K, requested))


def extract_tags(query: str, vocabulary: Iterable[str] = DEFAULT_TAG_VOCABULARY) -> list[str]:
    """Vocabulary tags appearing as case-insensitive substrings of the query, in vocabulary order."""
    lowered = query.lower()
    return [tag for tag in vocabulary if tag.lower() in lowered]


def _query_words(query: str) -> list[str]:
    return [word for word in query.lower().split() if word]


def score_item(
    item: KeywordItem,
    query_tags: Sequence[str],
    query_words: Sequence[str],
    preferred_function: str | None = None,
) -> int:
    """
    Integer relevance score for one item.

    +3 when the item's function equals the preferred function (case-insensitive),
    +2 for every recognized query tag found in the item's tags,
    +1 when any query word is a substring of the item's title.
    """
    score = 0

    pref = (preferred_function or "").strip().lower()
    if pref and item.function.strip().lower() == pref:
        score += FUNCTION_MATCH_POINTS

    item_tags = {t.lower() for t in item.tags}
    for tag in query_tags:
        if tag.lower() in item_tags:
            score += TAG_HIT_POINTS

    title = item.title.lower()
    if any(word in title for word in query_words):
        score += TITLE_HIT_POINTS

    return score


def score_catalog(
    query: str,
    items: Sequence[KeywordItem],
    *,
    preferred_function: str | None = None,
    top_k: Any = None,
    vocabulary: Iterable[str] = DEFAULT_TAG_VOCABULARY,
) -> list[KeywordHit]:
    """
    Score and rank catalog items against a free-text query.

    Ties keep catalog order; the result is truncated to the clamped ``top_k``.
    Identical catalog snapshots and query text always give identical output.
    """
    query_tags = extract_tags(query, vocabulary)
    query_words = _query_words(query)

    hits = [
        KeywordHit(item=item, score=score_item(item, query_tags, query_words, preferred_function))
        for item in items
    ]
    hits.sort(key=lambda h: h.score, reverse=True)

    limit = clamp_top_k(top_k)
    logger.debug(
        f"Keyword scoring: {len(items)} items, tags={query_tags}, returning {min(limit, len(hits))}"
    )
    return hits[:limit]
