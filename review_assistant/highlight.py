"""Terminal syntax highlighting for fenced code snippets."""

from __future__ import annotations

import logging

from pygments import highlight
from pygments.formatters import get_formatter_by_name
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.lexers.special import TextLexer
from pygments.util import ClassNotFound

from review_assistant.insights import CodeSnippet

logger = logging.getLogger(__name__)

DEFAULT_STYLE = "monokai"
DEFAULT_FORMATTER = "terminal256"


class HighlightError(RuntimeError):
    """Raised when a snippet cannot be tokenized or formatted."""


def resolve_lexer(language: str) -> Lexer:
    """Return the lexer registered for `language`, or the plain-text lexer."""
    if not language:
        return TextLexer()
    try:
        return get_lexer_by_name(language.lower())
    except ClassNotFound:
        logger.debug("No lexer for language '%s'; falling back to plain text", language)
        return TextLexer()


def highlight_code(code: str, language: str, *, style: str = DEFAULT_STYLE) -> str:
    """Render `code` as ANSI-colored text using the given style."""
    lexer = resolve_lexer(language)
    try:
        formatter = get_formatter_by_name(DEFAULT_FORMATTER, style=style)
        return highlight(code, lexer, formatter)
    except (ClassNotFound, ValueError, TypeError) as error:
        raise HighlightError(f"Failed to highlight {language or 'text'} snippet: {error}") from error


def highlight_snippet(snippet: CodeSnippet, *, style: str = DEFAULT_STYLE) -> str:
    """Highlight an extracted snippet, without the trailing newline."""
    return highlight_code(snippet.code, snippet.language, style=style).rstrip("\n")
