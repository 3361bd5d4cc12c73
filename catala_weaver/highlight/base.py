"""Abstract highlighter capability and its request types.

WHY: Syntax highlighting is delegated to an external tool that may be
missing or fail. The weaver must not care which tool runs, and tests must
be able to swap in doubles that return canned markup or simulate
failures without starting any process. This base class is that seam.

HOW: BaseHighlighter is an ABC with a ``name`` property and two
operations — ``highlight()`` for one code fragment, ``stylesheet()`` for
the CSS matching the markup. Requests are frozen dataclasses carrying
everything the tool needs: text, language, and the fragment's position.

RULES:
- Subclasses MUST implement ``name``, ``highlight()`` and ``stylesheet()``
- Failures MUST raise HighlightError; no fallback markup is ever returned
- Line numbers in the markup start at ``request.start_line``
- Line anchors are named after ``request.source_file``
- Implementations do not cache across calls
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from catala_weaver.config import CSS_SCOPE, DEFAULT_STYLE, lexer_for


@dataclass(frozen=True)
class HighlightRequest:
    """One code fragment to highlight.

    Attributes:
        text: The (already symbol-normalized) fragment text.
        language: Declared document language ("fr" or "en").
        source_file: File the fragment comes from, used for line anchors.
        start_line: Line number of the fragment's first line.
        output_mode: Always "html" for fragments.
    """

    text: str
    language: str
    source_file: str
    start_line: int
    output_mode: str = "html"

    @property
    def lexer(self) -> str:
        return lexer_for(self.language)


@dataclass(frozen=True)
class StylesheetRequest:
    """The CSS that goes with the fragment markup, scoped to ``css_scope``."""

    style: str = DEFAULT_STYLE
    css_scope: str = CSS_SCOPE


class BaseHighlighter(ABC):
    """Abstract base for all highlight delegates.

    To add a new highlighter:
    1. Create a new module in highlight/
    2. Subclass BaseHighlighter
    3. Implement name, highlight() and stylesheet()
    4. Register in HIGHLIGHTERS in highlight/__init__.py
    """

    def __init__(self, style: str = DEFAULT_STYLE) -> None:
        self.style = style

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable highlighter name, e.g. 'pygmentize'."""

    @abstractmethod
    def highlight(self, request: HighlightRequest) -> str:
        """Return the HTML markup for one code fragment.

        Raises:
            HighlightError: If the fragment could not be highlighted.
        """

    @abstractmethod
    def stylesheet(self, request: StylesheetRequest) -> str:
        """Return the CSS rules for the markup produced by highlight().

        Raises:
            HighlightError: If the stylesheet could not be produced.
        """
