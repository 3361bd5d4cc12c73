"""Highlighter registry — pluggable syntax highlighting delegates.

WHY: The CLI and the weaver need a single lookup to build the configured
highlighter. A central dict makes it trivial to add a new one: create
the class, import it here, add one line.

HOW: HIGHLIGHTERS maps string keys to highlighter *classes* (not
instances). make_highlighter() instantiates the one named by a
WeaveConfig, passing the executable override where it applies.

RULES:
- Keys are snake_case identifiers (used in CLI flags and .env)
- Values are BaseHighlighter subclasses (not instances)
- Every highlighter listed here must be importable without side effects
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from catala_weaver.highlight.in_process import PygmentsHighlighter
from catala_weaver.highlight.pygmentize import PygmentizeHighlighter

if TYPE_CHECKING:
    from catala_weaver.config import WeaveConfig
    from catala_weaver.highlight.base import BaseHighlighter

HIGHLIGHTERS: dict[str, type[BaseHighlighter]] = {
    "pygmentize": PygmentizeHighlighter,
    "pygments": PygmentsHighlighter,
}


def make_highlighter(config: WeaveConfig) -> BaseHighlighter:
    """Build the highlighter selected by ``config.highlighter``.

    RULES:
    - highlighter_override only applies to the pygmentize highlighter
    - Raises ValueError for an unknown registry key
    """
    try:
        cls = HIGHLIGHTERS[config.highlighter]
    except KeyError:
        raise ValueError(
            "Unknown highlighter '{}'. Available highlighters: {}".format(
                config.highlighter, ", ".join(sorted(HIGHLIGHTERS))
            )
        ) from None
    if cls is PygmentizeHighlighter:
        return PygmentizeHighlighter(command=config.highlighter_override, style=config.style)
    return cls(style=config.style)
