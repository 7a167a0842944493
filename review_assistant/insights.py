"""Parse model responses into classified review insights."""

from __future__ import annotations

from dataclasses import dataclass

FENCE = "```"
LABEL_SEPARATOR = ":"


@dataclass(frozen=True, slots=True)
class CodeSnippet:
    """Fenced code extracted from an insight."""

    language: str
    code: str


@dataclass(frozen=True, slots=True)
class ReviewInsight:
    """One line of review feedback with an optional category label."""

    raw: str
    category: str | None = None
    content: str = ""

    @property
    def is_labeled(self) -> bool:
        return self.category is not None

    @property
    def snippet(self) -> CodeSnippet | None:
        return extract_code_snippet(self.content) if self.is_labeled else None


def parse_insight_line(line: str) -> ReviewInsight:
    """Split a line on its first colon into category and content."""
    label, separator, content = line.partition(LABEL_SEPARATOR)
    if not separator:
        return ReviewInsight(raw=line, content=line)
    return ReviewInsight(raw=line, category=label.strip(), content=content.strip())


def parse_insights(response_text: str) -> tuple[ReviewInsight, ...]:
    """Parse a full model response, one insight per line, in order."""
    return tuple(parse_insight_line(line) for line in response_text.split("\n"))


def extract_code_snippet(content: str) -> CodeSnippet | None:
    """Return the fenced snippet in `content`, or None without a closed fence.

    The content splits into at most three parts on the fence: text before it
    (ignored), the language tag, and the code body after the closing fence.
    """
    parts = content.split(FENCE, 2)
    if len(parts) != 3:
        return None

    return CodeSnippet(language=parts[1].strip(), code=parts[2].strip())
