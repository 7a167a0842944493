"""Terminal and JSON rendering of a review outcome."""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol

import typer

from review_assistant.highlight import HighlightError, highlight_snippet
from review_assistant.insights import ReviewInsight
from review_assistant.reviewer import ReviewOutcome
from review_assistant.schema import (
    InsightRecord,
    PullRequestSummary,
    ReviewReport,
    ReviewStats,
)

Echo = Callable[[str], None]

METADATA_HEADER = "=== Pull Request Metadata ==="
INSIGHTS_HEADER = "=== Code Review Insights ==="
CATEGORY_COLORS = {
    "Critical": typer.colors.BRIGHT_RED,
    "Warning": typer.colors.BRIGHT_YELLOW,
    "Suggestion": typer.colors.BRIGHT_GREEN,
}
DEFAULT_CATEGORY_COLOR = typer.colors.BRIGHT_WHITE


class ReviewRenderer(Protocol):
    """Protocol for anything that can present a review outcome."""

    def render(self, outcome: ReviewOutcome) -> None:
        """Write the outcome to the renderer's output."""


def _default_echo(color: bool | None) -> Echo:
    def echo(message: str) -> None:
        typer.echo(message, color=color)

    return echo


class TerminalRenderer:
    """Colored text output with highlighted code snippets."""

    def __init__(self, echo: Echo | None = None, *, color: bool | None = None) -> None:
        self._echo = echo if echo is not None else _default_echo(color)

    def render(self, outcome: ReviewOutcome) -> None:
        self.render_metadata(outcome)
        self._echo("")
        self._echo(typer.style(INSIGHTS_HEADER, fg=typer.colors.BRIGHT_CYAN, bold=True))
        for insight in outcome.insights:
            self.render_insight(insight)

    def render_metadata(self, outcome: ReviewOutcome) -> None:
        metadata = outcome.metadata
        self._echo(typer.style(METADATA_HEADER, fg=typer.colors.BRIGHT_CYAN, bold=True))
        self._echo(f"{self._label('Title:')} {metadata.title}")
        self._echo(f"{self._label('Author:')} {metadata.author_login}")
        self._echo(f"{self._label('Files Changed:')} {metadata.changed_files}")
        self._echo(f"{self._label('URL:')} {metadata.html_url}")

    def render_insight(self, insight: ReviewInsight) -> None:
        if not insight.is_labeled:
            self._echo(insight.raw)
            return

        category = insight.category or ""
        color = CATEGORY_COLORS.get(category, DEFAULT_CATEGORY_COLOR)
        self._echo(f"{typer.style(category, fg=color, bold=True)}: {insight.content}")

        snippet = insight.snippet
        if snippet is None:
            return
        try:
            highlighted = highlight_snippet(snippet)
        except HighlightError as error:
            self._echo(typer.style(str(error), fg=typer.colors.RED))
            return
        self._echo("")
        self._echo(highlighted)
        self._echo("")

    @staticmethod
    def _label(text: str) -> str:
        return typer.style(text, fg=typer.colors.CYAN)


def build_review_report(outcome: ReviewOutcome) -> ReviewReport:
    """Convert a review outcome into the JSON report contract."""
    insights: list[InsightRecord] = []
    for insight in outcome.insights:
        snippet = insight.snippet
        insights.append(
            InsightRecord(
                category=insight.category,
                content=insight.content,
                language=snippet.language if snippet is not None else None,
                code=snippet.code if snippet is not None else None,
            )
        )

    metadata = outcome.metadata
    telemetry = outcome.telemetry
    return ReviewReport(
        pull_request=PullRequestSummary(
            repository=outcome.repository,
            number=metadata.number,
            title=metadata.title,
            author=metadata.author_login,
            changed_files=metadata.changed_files,
            html_url=metadata.html_url,
        ),
        insights=insights,
        stats=ReviewStats(
            model_used=telemetry.model_used,
            prompt_tokens=telemetry.prompt_tokens,
            completion_tokens=telemetry.completion_tokens,
            latency_seconds_llm=telemetry.latency_seconds_llm,
            latency_seconds_e2e=telemetry.latency_seconds_e2e,
        ),
    )


class JsonRenderer:
    """Machine-readable report output."""

    def __init__(self, echo: Echo | None = None) -> None:
        self._echo = echo if echo is not None else typer.echo

    def render(self, outcome: ReviewOutcome) -> None:
        self._echo(build_review_report(outcome).model_dump_json(indent=2))
