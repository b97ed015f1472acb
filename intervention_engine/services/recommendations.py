"""Intervention recommendation service.

Entry points used by the API layer. Catalog snapshots come from storage
(``db.interventions``) except for ``analyze_behavior``, which runs over the
injected static catalog and needs no provider at all.
"""

from datetime import UTC, datetime
from typing import Any

from intervention_engine.chains.analyze_behavior import (
    analyze_behavior_function,
    generate_intervention_analysis,
)
from intervention_engine.core import behavior_analyzer
from intervention_engine.core.config import get_settings
from intervention_engine.core.embeddings import embed_text_async, embed_texts_async
from intervention_engine.core.exceptions import EmbeddingsUnavailable, InvalidPayload
from intervention_engine.core.intervention_catalog import InterventionCatalog
from intervention_engine.core.keyword_scorer import (
    KeywordItem,
    clamp_top_k,
    extract_tags,
    score_catalog,
)
from intervention_engine.core.logging import get_logger
from intervention_engine.core.schemas_interventions import (
    BehaviorAnalysis,
    ComprehensiveAnalysis,
    EmbeddingGenerationResult,
    EmbeddingRecommendation,
    EmbeddingSimilarityCheck,
    EmbeddingStatus,
    EmbeddingStatusItem,
    Intervention,
    KeywordRecommendation,
    SemanticMatch,
    SimilarityCheckItem,
)
from intervention_engine.core.similarity import RankedMatch, VectorCandidate, as_percent, rank
from intervention_engine.db import interventions as interventions_db

logger = get_logger(__name__)

KEYWORD_ENGINE = "kb-basic-v1"
COMPREHENSIVE_TOP_N = 3
EMBEDDING_TEXT_STEPS = 3
SAMPLE_EMBEDDING_VALUES = 5
CHECK_TOP_K = 5
CHECK_DESCRIPTION_CHARS = 100
DEFAULT_CHECK_TEXT = "Student gets out of seat frequently during lessons"


def _require_text(value: Any, field: str) -> str:
    text = value.strip() if isinstance(value, str) else ""
    if not text:
        raise InvalidPayload({field: ["must be a non-empty string"]})
    return text


def _embedded_catalog() -> tuple[InterventionCatalog, list[Intervention]]:
    catalog = InterventionCatalog.from_rows(interventions_db.list_interventions())
    embedded = catalog.with_embeddings()
    if not embedded:
        logger.error("No interventions with embeddings found")
        raise EmbeddingsUnavailable(
            "No interventions with embeddings found. Generate intervention embeddings first."
        )
    return catalog, embedded


def _rank_embedded(query_vector: list[float], embedded: list[Intervention]) -> list[RankedMatch]:
    candidates = [VectorCandidate(id=i.id, label=i.name, vector=i.embedding) for i in embedded]
    return rank(query_vector, candidates, top_k=get_settings().SEMANTIC_MATCH_COUNT)


def _matches_filters(item: Intervention, age_group: str | None, setting: str | None) -> bool:
    if age_group and age_group not in item.age_groups:
        return False
    if setting and setting not in item.settings:
        return False
    return True


def describe_similarity_range(matches: list[RankedMatch]) -> str:
    lowest = as_percent(matches[-1].score) if matches else 0
    highest = as_percent(matches[0].score) if matches else 0
    return (
        f"Semantic analysis identified {len(matches)} interventions with similarity "
        f"scores ranging from {lowest}% to {highest}%."
    )


def describe_semantic_rationale(age_group: str | None, setting: str | None) -> str:
    text = "Interventions selected using AI-powered semantic similarity matching from our evidence-based database. "
    if age_group:
        text += f"Filtered for {age_group} age group. "
    if setting:
        text += f"Appropriate for {setting} setting. "
    return text + "Higher similarity scores indicate better contextual matches."


def build_embedding_text(intervention: Intervention) -> str:
    """Text embedded for a catalog item: name, description, category, functions, first steps."""
    parts = [
        intervention.name,
        intervention.description,
        intervention.category,
        *intervention.behavior_function,
        *intervention.implementation[:EMBEDDING_TEXT_STEPS],
    ]
    return " ".join(part for part in parts if part)


def recommend(
    query: Any,
    preferred_function: str | None = None,
    top_k: Any = None,
) -> KeywordRecommendation:
    """
    Keyword/tag recommendation over a storage snapshot.

    Raises:
        InvalidPayload: If query is missing or blank
    """
    text = _require_text(query, "query")
    func_pref = (preferred_function or "").strip().lower()
    limit = clamp_top_k(top_k)

    settings = get_settings()
    rows = interventions_db.list_interventions(limit=settings.CATALOG_FETCH_LIMIT)
    items = [KeywordItem.from_row(row) for row in rows]

    hits = score_catalog(text, items, preferred_function=func_pref, top_k=limit)

    logger.info(
        f"Keyword recommendation returned {len(hits)} of {len(items)} items",
        extra={"func_pref": func_pref, "top_k": limit},
    )

    return KeywordRecommendation(
        items=[
            {
                **{k: v for k, v in hit.item.payload.items() if k != "embedding"},
                "id": hit.item.id,
                "_score": hit.score,
            }
            for hit in hits
        ],
        meta={
            "topK": limit,
            "engine": KEYWORD_ENGINE,
            "tags": extract_tags(text),
            "funcPref": func_pref,
        },
    )


async def recommend_by_embedding(
    behavior_text: Any,
    age_group: str | None = None,
    setting: str | None = None,
) -> EmbeddingRecommendation:
    """
    Rank embedded catalog items against the behavior text, then filter.

    Ranking keeps the top SEMANTIC_MATCH_COUNT first; the age/setting filter
    applies afterwards and may shrink the list.

    Raises:
        InvalidPayload: If behavior_text is blank
        EmbeddingsUnavailable: If no catalog item has an embedding
        UpstreamProviderFailure: If the embedding provider fails
    """
    text = _require_text(behavior_text, "behaviorDescription")
    catalog, embedded = _embedded_catalog()

    query_vector = await embed_text_async(text)
    matches = _rank_embedded(query_vector, embedded)

    recommended = [catalog.get(m.id) for m in matches]
    recommended = [i for i in recommended if i and _matches_filters(i, age_group, setting)]

    logger.info(
        f"Semantic recommendation: {len(matches)} matches, {len(recommended)} after filters",
        extra={"age_group": age_group, "setting": setting},
    )

    return EmbeddingRecommendation(
        recommended_interventions=recommended,
        behavior_analysis=describe_similarity_range(matches),
        rationale=describe_semantic_rationale(age_group, setting),
        embeddings_available=bool(embedded),
    )


def analyze_behavior(
    catalog: InterventionCatalog,
    behavior_text: Any,
    age_group: str | None = None,
    setting: str | None = None,
) -> BehaviorAnalysis:
    """Keyword-rule analysis over the static catalog."""
    text = _require_text(behavior_text, "behaviorDescription")
    return behavior_analyzer.recommend(catalog, text, age_group=age_group, setting=setting)


async def comprehensive_analysis(
    behavior_text: Any,
    student_info: dict[str, Any] | None = None,
    age_group: str | None = None,
    setting: str | None = None,
    include_detailed_analysis: bool = True,
) -> ComprehensiveAnalysis:
    """
    Semantic match plus optional generated analysis.

    Steps: embed and rank (top SEMANTIC_MATCH_COUNT), optionally generate the
    narrative analysis and the quick function hypothesis, filter by age group
    and setting, keep the top 3.

    Raises:
        InvalidPayload: If behavior_text is blank
        EmbeddingsUnavailable: If no catalog item has an embedding
        UpstreamProviderFailure: If a provider call fails
    """
    text = _require_text(behavior_text, "behaviorDescription")
    catalog, embedded = _embedded_catalog()

    query_vector = await embed_text_async(text)
    matches = _rank_embedded(query_vector, embedded)

    matched = [(catalog.get(m.id), m.score) for m in matches]
    matched = [(item, score) for item, score in matched if item is not None]
    detailed = [{**item.public_dict(), "similarity": score} for item, score in matched]

    analysis_text = ""
    behavior_function = ""
    if include_detailed_analysis:
        analysis_text = await generate_intervention_analysis(text, student_info, detailed)
        behavior_function = await analyze_behavior_function(text)

    filtered = [
        entry
        for entry, (item, _) in zip(detailed, matched)
        if _matches_filters(item, age_group, setting)
    ]

    logger.info(
        f"Comprehensive analysis: {len(embedded)} checked, {len(matches)} matched, "
        f"{len(filtered)} after filters",
        extra={"detailed": include_detailed_analysis, "analysis_chars": len(analysis_text)},
    )

    return ComprehensiveAnalysis(
        behavior_description=text,
        student_info=student_info,
        behavior_function=behavior_function,
        recommended_interventions=filtered[:COMPREHENSIVE_TOP_N],
        semantic_matches=[
            SemanticMatch(id=m.id, name=m.label, similarity=m.score) for m in matches
        ],
        comprehensive_analysis=analysis_text,
        metadata={
            "totalInterventionsChecked": len(embedded),
            "semanticMatches": len(matches),
            "finalRecommendations": len(filtered),
            "filtersApplied": {
                "ageGroup": age_group or None,
                "setting": setting or None,
            },
        },
    )


async def find_similar_interventions(behavior_text: Any, limit: int = 5) -> list[dict[str, Any]]:
    """
    Storage-side nearest-neighbour search for the behavior text.

    Returns camelCase intervention dicts with a ``similarity`` key; empty when
    the vector index has nothing to return yet.
    """
    text = _require_text(behavior_text, "behaviorDescription")
    query_vector = await embed_text_async(text)

    rows = interventions_db.match_interventions(query_vector, match_count=max(1, limit))

    results = []
    for row in rows:
        similarity = float(row.get("similarity") or 0.0)
        item = Intervention.model_validate(row)
        results.append({**item.public_dict(), "similarity": similarity})
    return results


async def generate_intervention_embeddings() -> EmbeddingGenerationResult:
    """
    (Re)embed every stored intervention and write the vectors back in chunks.

    Raises:
        UpstreamProviderFailure: If the embedding provider fails
        BatchWriteError: If a storage chunk fails
    """
    catalog = InterventionCatalog.from_rows(interventions_db.list_interventions())
    if not len(catalog):
        logger.warning("No interventions stored; nothing to embed")
        return EmbeddingGenerationResult(
            interventions_processed=0, embedding_dimensions=0, chunks_committed=0
        )

    texts = [build_embedding_text(item) for item in catalog]
    vectors = await embed_texts_async(texts)

    generated_at = datetime.now(UTC).isoformat()
    rows = [
        {
            **item.model_dump(mode="json"),
            "embedding": vector,
            "embedding_text": embedding_text,
            "embedding_generated_at": generated_at,
            "updated_at": generated_at,
        }
        for item, embedding_text, vector in zip(catalog, texts, vectors)
    ]
    result = interventions_db.upsert_intervention_embeddings(rows)

    logger.info(
        f"Generated embeddings for {result.written} interventions",
        extra={"chunks": result.chunks_committed},
    )

    return EmbeddingGenerationResult(
        interventions_processed=result.written,
        embedding_dimensions=len(vectors[0]),
        chunks_committed=result.chunks_committed,
        sample_embedding=vectors[0][:SAMPLE_EMBEDDING_VALUES],
    )


def embeddings_status() -> EmbeddingStatus:
    """Embedding coverage across the stored catalog."""
    catalog = InterventionCatalog.from_rows(interventions_db.list_interventions())
    embedded = catalog.with_embeddings()
    sample = embedded[0] if embedded else None

    return EmbeddingStatus(
        total_interventions=len(catalog),
        with_embeddings=len(embedded),
        embedding_dimensions=len(sample.embedding) if sample else 0,
        sample_intervention=sample.public_dict() if sample else None,
        sample_embedding=sample.embedding[:SAMPLE_EMBEDDING_VALUES] if sample else None,
        interventions_list=[
            EmbeddingStatusItem(
                id=item.id,
                name=item.name,
                has_embedding=item.has_embedding,
                embedding_length=len(item.embedding or []),
            )
            for item in catalog
        ],
    )


async def check_embedding_similarity(sample_text: Any = None) -> EmbeddingSimilarityCheck:
    """
    Embed a sample text and list the top 5 embedded interventions for it.

    Similarities are rounded to two decimals and descriptions cut to 100
    characters, for a quick manual look at index quality.

    Raises:
        EmbeddingsUnavailable: If no catalog item has an embedding
        UpstreamProviderFailure: If the embedding provider fails
    """
    text = sample_text.strip() if isinstance(sample_text, str) else ""
    text = text or DEFAULT_CHECK_TEXT

    catalog, embedded = _embedded_catalog()
    query_vector = await embed_text_async(text)

    candidates = [VectorCandidate(id=i.id, label=i.name, vector=i.embedding) for i in embedded]
    matches = rank(query_vector, candidates, top_k=CHECK_TOP_K)

    results = []
    for match in matches:
        item = catalog.get(match.id)
        results.append(
            SimilarityCheckItem(
                id=match.id,
                name=match.label,
                category=item.category,
                similarity=as_percent(match.score) / 100,
                description=item.description[:CHECK_DESCRIPTION_CHARS] + "...",
            )
        )

    logger.info(f"Embedding check for {text[:50]!r}: {len(results)} of {len(embedded)} embedded")

    return EmbeddingSimilarityCheck(
        test_text=text,
        test_embedding_dimensions=len(query_vector),
        results=results,
        total_interventions=len(embedded),
    )
