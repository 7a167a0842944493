"""Tests for Pygments-based snippet highlighting."""

from __future__ import annotations

import pytest
from pygments.lexers.special import TextLexer
from review_assistant.highlight import (
    HighlightError,
    highlight_code,
    highlight_snippet,
    resolve_lexer,
)
from review_assistant.insights import CodeSnippet


@pytest.mark.unit
def test_resolve_lexer_finds_registered_language() -> None:
    assert resolve_lexer("go").name == "Go"
    assert resolve_lexer("Python").name == "Python"


@pytest.mark.unit
@pytest.mark.parametrize("language", ["", "definitely-not-a-language", "python x = 1"])
def test_resolve_lexer_falls_back_to_plain_text(language: str) -> None:
    assert isinstance(resolve_lexer(language), TextLexer)


@pytest.mark.unit
def test_highlight_code_emits_ansi_sequences() -> None:
    highlighted = highlight_code('package main\n\nfunc main() { println("hi") }', "go")

    assert "\x1b[" in highlighted
    assert "println" in highlighted


@pytest.mark.unit
def test_highlight_code_with_unknown_language_keeps_text() -> None:
    highlighted = highlight_code("x = 1", "definitely-not-a-language")

    assert "x = 1" in highlighted


@pytest.mark.unit
def test_highlight_code_with_unknown_style_raises_highlight_error() -> None:
    with pytest.raises(HighlightError):
        highlight_code("x = 1", "python", style="no-such-style")


@pytest.mark.unit
def test_highlight_snippet_strips_trailing_newline() -> None:
    highlighted = highlight_snippet(CodeSnippet(language="python", code="print('hi')"))

    assert not highlighted.endswith("\n")
