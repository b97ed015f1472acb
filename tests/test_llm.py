"""Tests for text generation and the behavior-analysis prompts."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from langchain_core.messages import HumanMessage, SystemMessage

from intervention_engine.chains.analyze_behavior import (
    ANALYSIS_SYSTEM_PROMPT,
    analyze_behavior_function,
    build_analysis_prompt,
    format_student_context,
    generate_intervention_analysis,
)
from intervention_engine.core.exceptions import UpstreamProviderFailure
from intervention_engine.core.llm import build_messages, generate_text


def _mock_llm(content: str = "ESCAPE: avoids hard tasks") -> MagicMock:
    llm = MagicMock()
    llm.model_name = "gpt-4o-mini"
    llm.ainvoke = AsyncMock(return_value=MagicMock(content=content))
    return llm


@pytest.mark.asyncio
async def test_generate_text_returns_content():
    llm = _mock_llm("Generated text")
    with patch("intervention_engine.core.llm.get_llm", return_value=llm) as mock_get_llm:
        result = await generate_text("prompt", temperature=0.3, max_tokens=150)

    assert result == "Generated text"
    mock_get_llm.assert_called_once_with(model=None, temperature=0.3, max_tokens=150)
    messages = llm.ainvoke.await_args.args[0]
    assert len(messages) == 1
    assert isinstance(messages[0], HumanMessage)
    assert messages[0].content == "prompt"


@pytest.mark.asyncio
async def test_generate_text_sends_system_message_first():
    llm = _mock_llm("Generated text")
    with patch("intervention_engine.core.llm.get_llm", return_value=llm):
        await generate_text("prompt", system="You are an analyst.")

    messages = llm.ainvoke.await_args.args[0]
    assert [type(m) for m in messages] == [SystemMessage, HumanMessage]
    assert messages[0].content == "You are an analyst."


def test_build_messages_without_system():
    assert [type(m) for m in build_messages("hi")] == [HumanMessage]


@pytest.mark.asyncio
async def test_generate_text_empty_output_fails():
    with patch("intervention_engine.core.llm.get_llm", return_value=_mock_llm("   ")):
        with pytest.raises(UpstreamProviderFailure, match="No response generated"):
            await generate_text("prompt")


@pytest.mark.asyncio
async def test_generate_text_provider_error_fails():
    llm = _mock_llm()
    llm.ainvoke.side_effect = RuntimeError("rate limited")
    with patch("intervention_engine.core.llm.get_llm", return_value=llm):
        with pytest.raises(UpstreamProviderFailure, match="rate limited"):
            await generate_text("prompt")


def test_format_student_context():
    assert format_student_context(None) == ""

    block = format_student_context(
        {"name": "Jordan", "age": 9, "strengths": ["art", "math"], "behaviorConcerns": []}
    )
    assert "- Name: Jordan" in block
    assert "- Age: 9" in block
    assert "- Grade: Not provided" in block
    assert "- Current Strengths: art, math" in block
    assert "- Current Concerns: Not provided" in block


def test_build_analysis_prompt_lists_interventions():
    prompt = build_analysis_prompt(
        "Refuses to start writing tasks",
        None,
        [
            {
                "name": "Task Modification",
                "similarity": 0.875,
                "category": "escape",
                "evidenceLevel": "high",
                "description": "Adjust task demands",
                "implementation": ["Break tasks down", "Offer choices"],
            }
        ],
    )

    assert '"Refuses to start writing tasks"' in prompt
    assert "1. **Task Modification** (Similarity: 88%)" in prompt
    assert "Implementation Steps: Break tasks down; Offer choices" in prompt
    assert "Student Information" not in prompt


@pytest.mark.asyncio
async def test_generate_intervention_analysis_uses_analysis_settings():
    with patch(
        "intervention_engine.chains.analyze_behavior.generate_text",
        new=AsyncMock(return_value="## BEHAVIOR ANALYSIS"),
    ) as mock_generate:
        result = await generate_intervention_analysis("Hits peers", {"name": "Sam"}, [])

    assert result == "## BEHAVIOR ANALYSIS"
    kwargs = mock_generate.await_args.kwargs
    assert kwargs == {
        "system": ANALYSIS_SYSTEM_PROMPT,
        "temperature": 0.7,
        "max_tokens": 2048,
    }
    assert "expert behavioral analyst" not in mock_generate.await_args.args[0]


@pytest.mark.asyncio
async def test_analyze_behavior_function_uses_function_settings():
    with patch(
        "intervention_engine.chains.analyze_behavior.generate_text",
        new=AsyncMock(return_value="ATTENTION: seeks peer reaction"),
    ) as mock_generate:
        result = await analyze_behavior_function("Makes noises during lessons")

    assert result.startswith("ATTENTION")
    prompt = mock_generate.await_args.args[0]
    assert 'Behavior: "Makes noises during lessons"' in prompt
    assert mock_generate.await_args.kwargs == {"temperature": 0.3, "max_tokens": 150}
