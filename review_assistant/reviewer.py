"""Review orchestration entrypoints."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any

import httpx

from review_assistant.config import ReviewConfig
from review_assistant.github_client import (
    PullRequestMeta,
    fetch_pull_request_diff,
    fetch_pull_request_metadata,
    parse_repo_full_name,
    validate_pr_number,
)
from review_assistant.insights import ReviewInsight, parse_insights
from review_assistant.llm_client import generate_review
from review_assistant.observability import RunTelemetry

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReviewOutcome:
    """Everything needed to render one review."""

    repository: str
    metadata: PullRequestMeta
    insights: tuple[ReviewInsight, ...]
    telemetry: RunTelemetry


def review_pull_request(
    *,
    config: ReviewConfig,
    repo_full_name: str,
    pr_number: int,
    github_client: httpx.Client,
    llm_client: Any,
) -> ReviewOutcome:
    """Fetch the PR, request review commentary, and parse it into insights."""
    parse_repo_full_name(repo_full_name)
    validate_pr_number(pr_number)
    started_at = time.perf_counter()

    metadata = fetch_pull_request_metadata(
        client=github_client,
        repo_full_name=repo_full_name,
        pr_number=pr_number,
    )
    diff = fetch_pull_request_diff(
        client=github_client,
        repo_full_name=repo_full_name,
        pr_number=pr_number,
    )
    logger.info("Fetched diff for %s#%d (%d chars)", repo_full_name, pr_number, len(diff))

    llm_started_at = time.perf_counter()
    completion = generate_review(client=llm_client, config=config, diff=diff)
    llm_finished_at = time.perf_counter()

    telemetry = RunTelemetry(
        model_used=completion.model,
        prompt_tokens=completion.prompt_tokens,
        completion_tokens=completion.completion_tokens,
        latency_seconds_llm=llm_finished_at - llm_started_at,
        latency_seconds_e2e=llm_finished_at - started_at,
    )
    logger.info(
        "Review completed with %s: %d tokens in %.2fs",
        telemetry.model_used,
        telemetry.tokens_used,
        telemetry.latency_seconds_e2e,
    )
    return ReviewOutcome(
        repository=repo_full_name,
        metadata=metadata,
        insights=parse_insights(completion.text),
        telemetry=telemetry,
    )
