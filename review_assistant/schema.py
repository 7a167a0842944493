"""Schema contract for the JSON review report."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field


class OutputFormat(StrEnum):
    """Supported output formats."""

    TEXT = "text"
    JSON = "json"


class PullRequestSummary(BaseModel):
    """PR metadata block of the report."""

    model_config = ConfigDict(extra="forbid")

    repository: str = Field(min_length=3)
    number: int = Field(ge=1)
    title: str
    author: str
    changed_files: int = Field(ge=0)
    html_url: str


class InsightRecord(BaseModel):
    """One insight line, with its fenced snippet when present."""

    model_config = ConfigDict(extra="forbid")

    category: str | None = None
    content: str
    language: str | None = None
    code: str | None = None


class ReviewStats(BaseModel):
    """Rollup metrics for one review run."""

    model_config = ConfigDict(extra="forbid")

    model_used: str = Field(min_length=1)
    prompt_tokens: int = Field(default=0, ge=0)
    completion_tokens: int = Field(default=0, ge=0)
    latency_seconds_llm: float = Field(default=0.0, ge=0.0)
    latency_seconds_e2e: float = Field(default=0.0, ge=0.0)


class ReviewReport(BaseModel):
    """Structured review output contract."""

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default="v1", pattern=r"^v\d+$")
    pull_request: PullRequestSummary
    insights: list[InsightRecord] = Field(default_factory=list)
    stats: ReviewStats
