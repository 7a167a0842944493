"""OpenAI completion client for review commentary."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from openai import OpenAI, OpenAIError

from review_assistant.config import ReviewConfig

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """<role>You are an expert software engineer and architect with extensive \
experience in code review. Your task is to analyze pull request diffs and provide actionable \
insights to improve code quality, maintainability, and performance.</role>

<guidelines>
- Provide specific, actionable feedback with line numbers when possible
- Consider best practices, design patterns, and potential edge cases
- Highlight both areas for improvement and commendable code practices
- Prefix each insight with a category label such as Critical, Warning or Suggestion, \
followed by a colon
- You are not conducting a code review. You are helping another developer conduct a code review.
</guidelines>

<personality>
- No-nonsense
- Concise
- Pragmatic
- Cuts straight to the chase
- Slightly eccentric
- High agency
- Encyclopedic knowledge
- Security-conscious and slightly paranoid
</personality>"""

USER_PROMPT_TEMPLATE = """Analyze the following pull request diff. Focus on the most impactful \
insights that will help improve the overall quality of the code.

<diff>
{diff}
</diff>"""


class LLMError(RuntimeError):
    """Raised when the completion request fails or returns no content."""


@dataclass(frozen=True, slots=True)
class ReviewCompletion:
    """Text completion plus the usage numbers reported by the API."""

    text: str
    model: str
    prompt_tokens: int = 0
    completion_tokens: int = 0


def build_user_prompt(diff: str) -> str:
    """Wrap the unified diff in the review request."""
    return USER_PROMPT_TEMPLATE.format(diff=diff)


def build_messages(diff: str) -> list[dict[str, str]]:
    """Build the system + user message pair for one review."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {"role": "user", "content": build_user_prompt(diff)},
    ]


def build_openai_client(config: ReviewConfig) -> OpenAI:
    """Build an OpenAI client from explicit config. Retries are disabled."""
    return OpenAI(
        api_key=config.openai_key.get_secret_value(),
        timeout=config.timeout_seconds,
        max_retries=0,
    )


def generate_review(
    *,
    client: Any,
    config: ReviewConfig,
    diff: str,
) -> ReviewCompletion:
    """Submit the diff for review and return the single text completion."""
    logger.info("Requesting review completion from model %s", config.openai_model)
    try:
        response = client.chat.completions.create(
            model=config.openai_model,
            messages=build_messages(diff),
        )
    except OpenAIError as error:
        raise LLMError(f"OpenAI completion request failed: {error}") from error

    if not response.choices:
        raise LLMError("OpenAI completion returned no choices.")
    content = response.choices[0].message.content
    if not content:
        raise LLMError("OpenAI completion returned empty content.")

    usage = getattr(response, "usage", None)
    prompt_tokens = getattr(usage, "prompt_tokens", 0) or 0
    completion_tokens = getattr(usage, "completion_tokens", 0) or 0
    logger.debug(
        "Completion usage: prompt_tokens=%d completion_tokens=%d",
        prompt_tokens,
        completion_tokens,
    )
    return ReviewCompletion(
        text=content,
        model=getattr(response, "model", None) or config.openai_model,
        prompt_tokens=prompt_tokens,
        completion_tokens=completion_tokens,
    )
