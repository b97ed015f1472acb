"""Pydantic models for FBA/BIP draft synthesis.

Inputs are built by ``core.payloads.parse_draft_payload`` after validation and
numeric coercion; the Draft serializes camelCase for the invocation layer.
"""

from pydantic import Field

from intervention_engine.core.schemas_base import CamelModel

Number = int | float


class Rec(CamelModel):
    """A single recommendation; the title is the dedup key."""

    title: str
    rationale: str = ""


class Dataset(CamelModel):
    """Aggregated behavior-event statistics for one student and time window."""

    student_name: str
    student_id: str
    from_: str = Field(..., alias="from")
    to: str
    total_events: Number
    total_duration_seconds: Number = 0
    by_severity: dict[str, Number] = Field(default_factory=dict)
    by_type: dict[str, Number] = Field(default_factory=dict)


class InsightFunction(CamelModel):
    name: str
    share: Number


class Insights(CamelModel):
    """Caller-supplied functional-assessment insights."""

    hypothesis: str = ""
    ranked_functions: list[InsightFunction] = Field(default_factory=list)
    severity_share: dict[str, Number] = Field(default_factory=dict)
    antecedent_counts: dict[str, Number] = Field(default_factory=dict)
    consequence_counts: dict[str, Number] = Field(default_factory=dict)


class Plan(CamelModel):
    """Caller-supplied partial plan, one recommendation list per category."""

    antecedent: list[Rec] = Field(default_factory=list)
    teaching: list[Rec] = Field(default_factory=list)
    consequence: list[Rec] = Field(default_factory=list)
    reinforcement: list[Rec] = Field(default_factory=list)


class DraftInputs(CamelModel):
    """Validated, coerced inputs for the draft assembler."""

    dataset: Dataset
    insights: Insights
    plan: Plan
    mode: str = "BIP"
    teacher_note: str = ""


# =============================================================================
# Draft output
# =============================================================================


class TypeCount(CamelModel):
    type: str
    count: Number


class StudentWindow(CamelModel):
    from_: str = Field(..., alias="from")
    to: str


class DraftStudent(CamelModel):
    id: str
    name: str
    window: StudentWindow


class DraftSummary(CamelModel):
    total_events: Number
    total_duration_seconds: Number
    by_severity: dict[str, Number]
    by_type_top: list[TypeCount]


class DraftInsights(CamelModel):
    hypothesis: str
    top_functions: list[InsightFunction]
    severity_share: dict[str, Number]
    antecedents: dict[str, Number]
    consequences: dict[str, Number]


class DraftRecommendations(CamelModel):
    antecedent: list[Rec]
    teaching: list[Rec]
    consequence: list[Rec]
    reinforcement: list[Rec]


class DraftNarrative(CamelModel):
    fba_summary: str
    bip_plan: str
    intervention_rationales: str
    disclaimer: str


class DraftMeta(CamelModel):
    generated_at: str
    engine: str


class Draft(CamelModel):
    """Synthesized FBA/BIP draft; a pure function of its inputs and timestamp."""

    student: DraftStudent
    summary: DraftSummary
    insights: DraftInsights
    recommendations: DraftRecommendations
    narrative: DraftNarrative
    meta: DraftMeta
