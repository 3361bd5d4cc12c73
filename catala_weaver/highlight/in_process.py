"""Highlight delegate that calls the Pygments library directly.

WHY: Spawning pygmentize once per code fragment is slow on large
documents and needs the executable on PATH. When Pygments is importable,
the same markup can be produced in-process with the same options.

HOW: Lexers are resolved from the bundled Catala lexers first, then from
Pygments' own registry. Each fragment gets a fresh HtmlFormatter carrying
the fragment's start line and anchor name.

RULES:
- Formatter options mirror PygmentizeHighlighter exactly
- An unknown lexer or style raises HighlightError (exit code 1)
"""

from __future__ import annotations

import logging
from typing import Any

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import Lexer
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from catala_weaver.errors import HighlightError
from catala_weaver.highlight.base import BaseHighlighter, HighlightRequest, StylesheetRequest
from catala_weaver.highlight.lexers import LEXERS

logger = logging.getLogger(__name__)


def _get_lexer(alias: str) -> Lexer:
    if alias in LEXERS:
        return LEXERS[alias]()
    try:
        return get_lexer_by_name(alias)
    except ClassNotFound as e:
        raise HighlightError("pygments -l {}".format(alias), 1, str(e)) from e


def _get_formatter(**options: Any) -> HtmlFormatter:
    try:
        return HtmlFormatter(**options)
    except ClassNotFound as e:
        raise HighlightError("pygments -S {}".format(options.get("style")), 1, str(e)) from e


class PygmentsHighlighter(BaseHighlighter):
    """Highlighter backed by the Pygments library, without subprocesses."""

    @property
    def name(self) -> str:
        return "pygments"

    def highlight(self, request: HighlightRequest) -> str:
        lexer = _get_lexer(request.lexer)
        formatter = _get_formatter(
            style=self.style,
            anchorlinenos=True,
            lineanchors=request.source_file,
            linenos="table",
            linenostart=request.start_line,
        )
        logger.debug("Highlighting %d chars with %s in-process", len(request.text), request.lexer)
        return highlight(request.text, lexer, formatter)

    def stylesheet(self, request: StylesheetRequest) -> str:
        return _get_formatter(style=request.style).get_style_defs(request.css_scope)
