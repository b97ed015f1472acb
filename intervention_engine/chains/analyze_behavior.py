"""Generative behavior analysis over semantically matched interventions.

Builds fixed-template prompts from the behavior description, optional student
context and the top-ranked interventions, and hands them to the LLM. Output
text is returned verbatim; provider failures propagate as
UpstreamProviderFailure.
"""

import logging
from typing import Any

from intervention_engine.core.config import get_settings
from intervention_engine.core.llm import generate_text
from intervention_engine.core.logging import get_logger, log_with_context
from intervention_engine.core.similarity import as_percent

logger = get_logger(__name__)

NOT_PROVIDED = "Not provided"


ANALYSIS_SYSTEM_PROMPT = "You are an expert behavioral analyst and special education consultant."

ANALYSIS_PROMPT = """Analyze the following behavior and provide comprehensive recommendations.

BEHAVIOR TO ANALYZE:
"{behavior}"
{student_info}

EVIDENCE-BASED INTERVENTIONS (Selected via semantic matching):
{interventions}

Please provide a comprehensive analysis in this format:

## BEHAVIOR ANALYSIS
**Function of Behavior:** [Identify the likely function - attention, escape, sensory, tangible]
**Contributing Factors:** [Environmental, academic, social, or medical factors]
**Patterns and Triggers:** [When, where, and why this behavior typically occurs]

## INTERVENTION RECOMMENDATIONS

### Primary Intervention
**Recommended Strategy:** [Select the most appropriate intervention from the list above]
**Why This Intervention:** [Explain the rationale based on behavior function and student needs]
**Implementation Steps:**
1. [Detailed step-by-step implementation]
2. [Include specific examples and modifications]
3. [Address potential challenges]

### Supporting Strategies
[Additional interventions that would complement the primary approach]

### Data Collection Plan
**What to Measure:** [Specific behaviors and outcomes to track]
**How to Measure:** [Methods and tools for data collection]
**Success Criteria:** [What success looks like]

## INDIVIDUALIZATION
**Student-Specific Considerations:** [How to adapt for this particular student]
**Environmental Modifications:** [Changes needed in the setting]
**Timeline:** [Expected implementation timeline and milestones]

## NEXT STEPS
[Specific action items for implementation]

Keep recommendations practical, evidence-based, and focused on positive behavior support principles."""


FUNCTION_PROMPT = """As a behavior analyst, quickly identify the most likely function of this behavior:

Behavior: "{behavior}"

Respond with one of these functions and a brief explanation:
- ATTENTION: Student seeks attention from adults or peers
- ESCAPE: Student wants to avoid or escape from demands/situations
- SENSORY: Student seeks sensory input or stimulation
- TANGIBLE: Student wants access to preferred items/activities

Format: FUNCTION: [Brief explanation]"""


def _join_list(value: Any) -> str:
    if isinstance(value, list) and value:
        return ", ".join(str(v) for v in value)
    return NOT_PROVIDED


def format_student_context(student_info: dict[str, Any] | None) -> str:
    """Student block for the analysis prompt; empty when no context was given."""
    if not student_info:
        return ""

    return (
        "\nStudent Information:\n"
        f"- Name: {student_info.get('name') or NOT_PROVIDED}\n"
        f"- Age: {student_info.get('age') or NOT_PROVIDED}\n"
        f"- Grade: {student_info.get('grade') or NOT_PROVIDED}\n"
        f"- Diagnosis: {student_info.get('diagnosis') or NOT_PROVIDED}\n"
        f"- Current Strengths: {_join_list(student_info.get('strengths'))}\n"
        f"- Current Concerns: {_join_list(student_info.get('behaviorConcerns'))}"
    )


def format_intervention_list(interventions: list[dict[str, Any]]) -> str:
    """Numbered intervention block: name, similarity, category, evidence, description, steps."""
    lines = []
    for index, item in enumerate(interventions, start=1):
        similarity = as_percent(float(item.get("similarity") or 0))
        steps = "; ".join(item.get("implementation") or [])
        lines.append(
            f"\n{index}. **{item.get('name', '')}** (Similarity: {similarity}%)\n"
            f"   - Category: {item.get('category', '')}\n"
            f"   - Evidence Level: {item.get('evidenceLevel', '')}\n"
            f"   - Description: {item.get('description', '')}\n"
            f"   - Implementation Steps: {steps}"
        )
    return "\n".join(lines)


def build_analysis_prompt(
    behavior_description: str,
    student_info: dict[str, Any] | None,
    interventions: list[dict[str, Any]],
) -> str:
    return ANALYSIS_PROMPT.format(
        behavior=behavior_description,
        student_info=format_student_context(student_info),
        interventions=format_intervention_list(interventions),
    )


async def generate_intervention_analysis(
    behavior_description: str,
    student_info: dict[str, Any] | None,
    interventions: list[dict[str, Any]],
) -> str:
    """
    Generate a narrative analysis and plan from matched interventions.

    Args:
        behavior_description: Free-text behavior description
        student_info: Optional student context (name, age, grade, diagnosis...)
        interventions: camelCase intervention dicts with a ``similarity`` score

    Returns:
        Generated markdown analysis

    Raises:
        UpstreamProviderFailure: If generation fails
    """
    settings = get_settings()
    prompt = build_analysis_prompt(behavior_description, student_info, interventions)

    log_with_context(
        logger,
        logging.INFO,
        f"Generating LLM analysis for {len(interventions)} interventions",
        behavior_preview=behavior_description[:50],
    )

    return await generate_text(
        prompt,
        system=ANALYSIS_SYSTEM_PROMPT,
        temperature=settings.ANALYSIS_TEMPERATURE,
        max_tokens=settings.ANALYSIS_MAX_TOKENS,
    )


async def analyze_behavior_function(behavior_description: str) -> str:
    """
    Quick one-line function hypothesis (ATTENTION/ESCAPE/SENSORY/TANGIBLE).

    Raises:
        UpstreamProviderFailure: If generation fails
    """
    settings = get_settings()
    return await generate_text(
        FUNCTION_PROMPT.format(behavior=behavior_description),
        temperature=settings.FUNCTION_TEMPERATURE,
        max_tokens=settings.FUNCTION_MAX_TOKENS,
    )
