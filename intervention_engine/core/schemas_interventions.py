"""Pydantic models for the intervention catalog and recommendation results.

Catalog rows are stored snake_case in Postgres; the same models serialize
camelCase towards callers (``behaviorFunction``, ``evidenceLevel``...).
"""

from enum import Enum
from typing import Any

from pydantic import ConfigDict, Field
from pydantic.alias_generators import to_camel

from intervention_engine.core.schemas_base import CamelModel


class InterventionCategory(str, Enum):
    """Behavior-function category an intervention primarily addresses."""

    ATTENTION = "attention"
    ESCAPE = "escape"
    SENSORY = "sensory"
    TANGIBLE = "tangible"
    SOCIAL = "social"
    GENERAL = "general"


class EvidenceLevel(str, Enum):
    """Research-support tier, used only as a sort priority."""

    HIGH = "high"
    MODERATE = "moderate"
    EMERGING = "emerging"


class Intervention(CamelModel):
    """One evidence-based behavioral strategy from the reference catalog."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        use_enum_values=True,
    )

    id: str = Field(..., min_length=1)
    name: str
    category: InterventionCategory
    behavior_function: list[str] = Field(default_factory=list)
    description: str = ""
    implementation: list[str] = Field(default_factory=list)
    data_collection: list[str] = Field(default_factory=list)
    evidence_level: EvidenceLevel = EvidenceLevel.MODERATE
    age_groups: list[str] = Field(default_factory=list)
    settings: list[str] = Field(default_factory=list)
    materials: list[str] | None = None
    frequency: str | None = None
    duration: str | None = None
    embedding: list[float] | None = Field(default=None, exclude=True)

    @property
    def has_embedding(self) -> bool:
        return bool(self.embedding)

    def with_embedding(self, embedding: list[float]) -> "Intervention":
        """Return a copy carrying ``embedding``; catalog entries are never mutated."""
        return self.model_copy(update={"embedding": list(embedding)})

    def public_dict(self) -> dict[str, Any]:
        """camelCase dict for responses; the raw vector is never serialized."""
        return self.model_dump(by_alias=True)


class BehaviorAnalysis(CamelModel):
    """Keyword-rule analysis of a behavior description against the static catalog."""

    recommended_interventions: list[Intervention] = Field(default_factory=list)
    behavior_analysis: str
    rationale: str
    functions: list[str] = Field(default_factory=list)


SEMANTIC_CONFIDENCE = (
    "Generated using AI-powered semantic analysis with evidence-based intervention database"
)


class EmbeddingRecommendation(CamelModel):
    """Result of semantic (embedding) recommendation."""

    recommended_interventions: list[Intervention] = Field(default_factory=list)
    behavior_analysis: str
    rationale: str
    method: str = "embeddings-semantic-analysis"
    confidence: str = SEMANTIC_CONFIDENCE
    embeddings_available: bool = True


class KeywordRecommendation(CamelModel):
    """Result of keyword/tag recommendation: ranked rows plus scoring metadata."""

    items: list[dict[str, Any]] = Field(default_factory=list)
    meta: dict[str, Any] = Field(default_factory=dict)


class SemanticMatch(CamelModel):
    """Compact view of a ranked match (id, name, similarity)."""

    id: str
    name: str
    similarity: float


class ComprehensiveAnalysis(CamelModel):
    """Embedding match plus optional generated narrative analysis."""

    behavior_description: str
    student_info: dict[str, Any] | None = None
    behavior_function: str = ""
    recommended_interventions: list[dict[str, Any]] = Field(default_factory=list)
    semantic_matches: list[SemanticMatch] = Field(default_factory=list)
    comprehensive_analysis: str = ""
    analysis_method: str = "embeddings-plus-llm"
    metadata: dict[str, Any] = Field(default_factory=dict)


class EmbeddingStatusItem(CamelModel):
    id: str
    name: str
    has_embedding: bool
    embedding_length: int


class EmbeddingStatus(CamelModel):
    """Coverage of embeddings across the stored catalog."""

    total_interventions: int
    with_embeddings: int
    embedding_dimensions: int
    sample_intervention: dict[str, Any] | None = None
    sample_embedding: list[float] | None = None
    interventions_list: list[EmbeddingStatusItem] = Field(default_factory=list)


class EmbeddingGenerationResult(CamelModel):
    """Outcome of (re)generating catalog embeddings."""

    interventions_processed: int
    embedding_dimensions: int
    chunks_committed: int
    sample_embedding: list[float] = Field(default_factory=list)


class SimilarityCheckItem(CamelModel):
    id: str
    name: str
    category: str
    similarity: float
    description: str


class EmbeddingSimilarityCheck(CamelModel):
    """Top catalog matches for a sample text, for checking the embedding index by eye."""

    success: bool = True
    test_text: str
    test_embedding_dimensions: int
    results: list[SimilarityCheckItem] = Field(default_factory=list)
    total_interventions: int
