"""Pygments rendering of snippet code for the web page and the terminal."""

from __future__ import annotations

import logging

from pygments import highlight
from pygments.formatters import HtmlFormatter, Terminal256Formatter
from pygments.lexer import Lexer
from pygments.lexers import TextLexer, get_lexer_by_name
from pygments.util import ClassNotFound

logger = logging.getLogger("snippetboard")

DEFAULT_STYLE = "monokai"


def get_lexer(language: str | None) -> Lexer:
    """Lexer for ``language``; plain text when it is empty or unknown."""
    if not language or language == "text":
        return TextLexer()
    try:
        return get_lexer_by_name(language)
    except ClassNotFound:
        logger.debug("No lexer for language %r; rendering as plain text", language)
        return TextLexer()


def _formatter_style(style: str) -> str:
    try:
        HtmlFormatter(style=style)
    except ClassNotFound:
        logger.warning("Unknown highlight style %r; using %s", style, DEFAULT_STYLE)
        return DEFAULT_STYLE
    return style


def highlight_html(code: str, language: str | None, style: str = DEFAULT_STYLE) -> str:
    """Inline-styled HTML with line numbers, ready to embed in a page."""
    formatter = HtmlFormatter(
        style=_formatter_style(style),
        noclasses=True,
        linenos="inline",
        cssclass="highlight",
    )
    return highlight(code, get_lexer(language), formatter)


def highlight_terminal(code: str, language: str | None, style: str = DEFAULT_STYLE) -> str:
    formatter = Terminal256Formatter(style=_formatter_style(style))
    return highlight(code, get_lexer(language), formatter)


__all__ = ["DEFAULT_STYLE", "get_lexer", "highlight_html", "highlight_terminal"]
