"""API endpoints for intervention recommendation and catalog embeddings."""

from typing import Any

from fastapi import APIRouter, Depends, HTTPException

from intervention_engine.api.errors import to_http_exception
from intervention_engine.core.exceptions import InterventionEngineError
from intervention_engine.core.intervention_catalog import InterventionCatalog, load_default_catalog
from intervention_engine.core.intervention_render import format_intervention_recommendations
from intervention_engine.core.logging import get_logger
from intervention_engine.core.schemas_interventions import (
    BehaviorAnalysis,
    ComprehensiveAnalysis,
    EmbeddingGenerationResult,
    EmbeddingSimilarityCheck,
    EmbeddingStatus,
    Intervention,
    KeywordRecommendation,
)
from intervention_engine.core.schemas_requests import (
    BehaviorRequest,
    ComprehensiveAnalysisRequest,
    EmbeddingCheckRequest,
    RecommendRequest,
    SimilarInterventionsRequest,
)
from intervention_engine.db import interventions as interventions_db
from intervention_engine.services import recommendations

logger = get_logger(__name__)

router = APIRouter()


def get_catalog() -> InterventionCatalog:
    """Static reference catalog; overridden in tests."""
    return load_default_catalog()


def _fail(error: Exception, action: str) -> HTTPException:
    if isinstance(error, InterventionEngineError):
        logger.warning(f"{action} rejected: {error}")
    else:
        logger.exception(f"{action} failed")
    return to_http_exception(error)


@router.post("/recommend", response_model=KeywordRecommendation)
async def recommend_interventions(request: RecommendRequest) -> KeywordRecommendation:
    """
    Keyword/tag recommendation over the stored catalog.

    Raises:
        HTTPException 400: If query is missing or blank
        HTTPException 500: If the lookup fails
    """
    try:
        return recommendations.recommend(
            request.query,
            preferred_function=request.function,
            top_k=request.top_k,
        )
    except Exception as e:
        raise _fail(e, "Keyword recommendation") from e


@router.post("/recommend-by-embedding")
async def recommend_by_embedding(request: BehaviorRequest) -> dict[str, Any]:
    """
    Semantic recommendation with a markdown rendering for display.

    Raises:
        HTTPException 400: If behaviorDescription is missing
        HTTPException 412: If no intervention has an embedding yet
        HTTPException 502: If the embedding provider fails
    """
    try:
        result = await recommendations.recommend_by_embedding(
            request.behavior_description,
            age_group=request.age_group,
            setting=request.setting,
        )
    except Exception as e:
        raise _fail(e, "Semantic recommendation") from e

    return {
        "success": True,
        **result.model_dump(by_alias=True),
        "interventions": format_intervention_recommendations(
            result.recommended_interventions,
            result.behavior_analysis,
            result.rationale,
        ),
        "recommendationCount": len(result.recommended_interventions),
    }


@router.post("/analyze", response_model=BehaviorAnalysis)
async def analyze_behavior(
    request: BehaviorRequest,
    catalog: InterventionCatalog = Depends(get_catalog),
) -> BehaviorAnalysis:
    """Keyword-rule analysis over the static catalog (no providers involved)."""
    try:
        return recommendations.analyze_behavior(
            catalog,
            request.behavior_description,
            age_group=request.age_group,
            setting=request.setting,
        )
    except Exception as e:
        raise _fail(e, "Behavior analysis") from e


@router.post("/comprehensive-analysis", response_model=ComprehensiveAnalysis)
async def comprehensive_analysis(request: ComprehensiveAnalysisRequest) -> ComprehensiveAnalysis:
    """
    Semantic match plus generated analysis and function hypothesis.

    Raises:
        HTTPException 400: If behaviorDescription is missing
        HTTPException 412: If no intervention has an embedding yet
        HTTPException 502: If a provider call fails
    """
    try:
        return await recommendations.comprehensive_analysis(
            request.behavior_description,
            student_info=request.student_info,
            age_group=request.age_group,
            setting=request.setting,
            include_detailed_analysis=request.include_detailed_analysis,
        )
    except Exception as e:
        raise _fail(e, "Comprehensive analysis") from e


@router.post("/similar")
async def similar_interventions(request: SimilarInterventionsRequest) -> dict[str, Any]:
    """Storage-side vector search; an empty list means nothing is indexed yet."""
    try:
        results = await recommendations.find_similar_interventions(
            request.behavior_description, limit=request.limit
        )
    except Exception as e:
        raise _fail(e, "Similar intervention search") from e

    return {"results": results, "count": len(results)}


@router.post("/embeddings", response_model=EmbeddingGenerationResult)
async def generate_embeddings() -> EmbeddingGenerationResult:
    """(Re)generate embeddings for every stored intervention."""
    try:
        return await recommendations.generate_intervention_embeddings()
    except Exception as e:
        raise _fail(e, "Embedding generation") from e


@router.post("/embeddings/test", response_model=EmbeddingSimilarityCheck)
async def check_embedding_similarity(
    request: EmbeddingCheckRequest | None = None,
) -> EmbeddingSimilarityCheck:
    """
    Top 5 embedded interventions for a sample text (stock sentence when omitted).

    Raises:
        HTTPException 412: If no intervention has an embedding yet
        HTTPException 502: If the embedding provider fails
    """
    try:
        return await recommendations.check_embedding_similarity(request.text if request else None)
    except Exception as e:
        raise _fail(e, "Embedding similarity check") from e


@router.get("/embeddings/status", response_model=EmbeddingStatus)
async def embeddings_status() -> EmbeddingStatus:
    """Embedding coverage across the stored catalog."""
    try:
        return recommendations.embeddings_status()
    except Exception as e:
        raise _fail(e, "Embedding status") from e


@router.get("/{intervention_id}")
async def get_intervention(intervention_id: str) -> dict[str, Any]:
    """
    Get a single stored intervention (camelCase, without its vector).

    Raises:
        HTTPException 404: If the intervention does not exist
    """
    try:
        row = interventions_db.get_intervention(intervention_id)
    except Exception as e:
        raise _fail(e, "Intervention lookup") from e

    if row is None:
        raise HTTPException(status_code=404, detail=f"Intervention {intervention_id} not found")

    return Intervention.model_validate(row).public_dict()
