"""LLM client utilities for LangChain integration."""

import logging

from langchain_core.messages import BaseMessage, HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from intervention_engine.core.config import get_settings
from intervention_engine.core.exceptions import UpstreamProviderFailure
from intervention_engine.core.logging import get_logger, log_with_context

logger = get_logger(__name__)


def get_llm(
    model: str | None = None,
    temperature: float = 0.1,
    max_tokens: int | None = None,
) -> ChatOpenAI:
    """
    Get configured LLM instance for LangChain chains.

    Args:
        model: Model name override (defaults to config setting)
        temperature: Temperature for generation (default 0.1)
        max_tokens: Optional cap on output tokens

    Returns:
        ChatOpenAI instance configured with API key and model
    """
    settings = get_settings()

    return ChatOpenAI(
        api_key=settings.OPENAI_API_KEY,
        model=model or settings.ANALYSIS_MODEL,
        temperature=temperature,
        max_tokens=max_tokens,
    )


def build_messages(prompt: str, system: str | None = None) -> list[BaseMessage]:
    messages: list[BaseMessage] = []
    if system:
        messages.append(SystemMessage(content=system))
    messages.append(HumanMessage(content=prompt))
    return messages


async def generate_text(
    prompt: str,
    *,
    system: str | None = None,
    temperature: float = 0.1,
    max_tokens: int | None = None,
    model: str | None = None,
) -> str:
    """
    Send a prompt (with an optional system role) to the generative model and return its text.

    The provider is a black box: no determinism is assumed about the output.

    Raises:
        UpstreamProviderFailure: If the call fails or returns no text
    """
    llm = get_llm(model=model, temperature=temperature, max_tokens=max_tokens)

    try:
        response = await llm.ainvoke(build_messages(prompt, system))
    except Exception as e:
        logger.error(f"Text generation failed: {e}")
        raise UpstreamProviderFailure(f"Text generation failed: {e}") from e

    content = response.content if isinstance(response.content, str) else ""
    if not content.strip():
        logger.error("Text generation returned no content")
        raise UpstreamProviderFailure("No response generated from LLM")

    log_with_context(
        logger, logging.INFO, f"Generated {len(content)} characters", model=llm.model_name
    )
    return content
