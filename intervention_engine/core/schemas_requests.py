"""Request bodies for the v1 intervention endpoints.

Text fields are optional here so that blank or missing input reaches the
service layer and is reported as InvalidPayload (400) with its field group.
"""

from typing import Any

from pydantic import Field

from intervention_engine.core.schemas_base import CamelModel


class RecommendRequest(CamelModel):
    query: str | None = None
    function: str | None = Field(default=None, description="Preferred behavior function")
    top_k: Any = Field(default=None, description="Result count, clamped to [1, 10]")


class BehaviorRequest(CamelModel):
    behavior_description: str | None = None
    age_group: str | None = None
    setting: str | None = None


class ComprehensiveAnalysisRequest(BehaviorRequest):
    student_info: dict[str, Any] | None = None
    include_detailed_analysis: bool = True


class SimilarInterventionsRequest(CamelModel):
    behavior_description: str | None = None
    limit: int = Field(default=5, ge=1, le=50)


class EmbeddingCheckRequest(CamelModel):
    text: str | None = Field(default=None, description="Sample behavior text; a stock sentence when blank")
