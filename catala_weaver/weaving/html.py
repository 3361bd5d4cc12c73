"""HTML weaving of a document item stream — the article state machine.

WHY: The item stream has no nesting markers, yet the rendered document
groups each article's text and code in a visual container. Whether a
container is open is the one piece of state that crosses items; it
decides when the previous article's container has to be closed.

HOW: render_item() is a pure transition function of (item, state) that
returns the item's markup and the next state. weave_items() is a left
fold of render_item() over the stream, starting OUTSIDE_ARTICLE, that
joins the fragments with a blank line. Code and metadata blocks are
symbol-normalized, wrapped as ``/*…*/`` and handed to the highlighter.

RULES:
- A heading or an article meeting INSIDE_ARTICLE is prefixed with the
  closing markup of the open container
- An article always leads to INSIDE_ARTICLE
- A heading leads to OUTSIDE_ARTICLE (closing the open article, if any)
- Text, code, metadata and includes never change the state
- An include renders as the empty string but keeps its place in the join
- The final state is discarded: an article still open at the end of the
  stream is never closed
- Legal reference links are dated with today's date at render time
- Highlighter failures propagate; nothing is returned for the document
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from datetime import date
from html import escape
from typing import Callable, Iterable, List, Optional

from catala_weaver.config import LEGAL_REFERENCE_LANGUAGE, LEGIFRANCE_BASE_URL, WeaveConfig
from catala_weaver.core.ast import (
    CodeBlock,
    DocumentItem,
    LawArticle,
    LawHeading,
    LawInclude,
    LawText,
    Marked,
    MetadataBlock,
    Program,
)
from catala_weaver.highlight import make_highlighter
from catala_weaver.highlight.base import BaseHighlighter, HighlightRequest
from catala_weaver.weaving.symbols import normalize_symbols

logger = logging.getLogger(__name__)

CLOSING_ARTICLE = "<!-- Closing article div -->\n</div>\n\n"
FRAGMENT_SEPARATOR = "\n\n"


class ContainmentState(str, enum.Enum):
    """Whether an article container is currently open."""

    INSIDE_ARTICLE = "inside_article"
    OUTSIDE_ARTICLE = "outside_article"


@dataclass(frozen=True)
class RenderedFragment:
    """The markup of one item and the state after it."""

    markup: str
    state: ContainmentState


def closes_article(item: DocumentItem, state: ContainmentState) -> bool:
    """True when ``item`` must close the container left open before it."""
    return isinstance(item, (LawHeading, LawArticle)) and state is ContainmentState.INSIDE_ARTICLE


def next_state(item: DocumentItem, state: ContainmentState) -> ContainmentState:
    if isinstance(item, LawArticle):
        return ContainmentState.INSIDE_ARTICLE
    if isinstance(item, LawHeading) and state is ContainmentState.INSIDE_ARTICLE:
        return ContainmentState.OUTSIDE_ARTICLE
    return state


def _literal(text: str) -> str:
    return escape(text, quote=False)


def article_href(article_id: Optional[str], language: str, today: Callable[[], date]) -> str:
    """Link target of an article title.

    French articles with an identifier point at their Légifrance version
    in force today; every other article gets the inert "#" target.
    """
    if article_id is None or language != LEGAL_REFERENCE_LANGUAGE:
        return "#"
    return "{}/{}/{}".format(LEGIFRANCE_BASE_URL, article_id, today().isoformat())


def _render_code(code: Marked, language: str, highlighter: BaseHighlighter) -> str:
    logger.debug("Pygmenting the code chunk %s", code.pos.describe())
    request = HighlightRequest(
        text="/*" + normalize_symbols(code.value) + "*/",
        language=language,
        source_file=code.pos.file,
        start_line=code.pos.start_line,
    )
    return "<div class='code-wrapper'>\n<div class='filename'>{}</div>\n{}\n</div>".format(
        _literal(code.pos.file), highlighter.highlight(request)
    )


def render_item(
    item: DocumentItem,
    state: ContainmentState,
    *,
    language: str,
    highlighter: BaseHighlighter,
    today: Callable[[], date] = date.today,
) -> RenderedFragment:
    """Render one item and compute the containment state that follows it.

    Args:
        item: The document item to render.
        state: Containment state before the item.
        language: Reduced document language ("fr" or "en").
        highlighter: Delegate used for code and metadata blocks.
        today: Clock used to date legal reference links.

    Returns:
        The item's markup (closing prefix included) and the next state.

    Raises:
        HighlightError: If a code fragment could not be highlighted.
        TypeError: If ``item`` is not a DocumentItem.
    """
    if isinstance(item, LawHeading):
        level = item.precedence + 2
        body = "<h{0} class='law-heading'>{1}</h{0}>".format(level, _literal(item.title))
    elif isinstance(item, LawText):
        body = "<p class='law-text'>{}</p>".format(_literal(item.body))
    elif isinstance(item, LawArticle):
        body = (
            "<div class='article-container'>\n\n"
            "<div class='article-title'><a href='{}'>{}</a></div>".format(
                escape(article_href(item.article_id, language, today)),
                _literal(item.name.value),
            )
        )
    elif isinstance(item, (CodeBlock, MetadataBlock)):
        body = _render_code(item.code, language, highlighter)
    elif isinstance(item, LawInclude):
        body = ""
    else:
        raise TypeError("Cannot weave {!r}: not a document item".format(item))

    prefix = CLOSING_ARTICLE if closes_article(item, state) else ""
    return RenderedFragment(markup=prefix + body, state=next_state(item, state))


def weave_items(
    items: Iterable[DocumentItem],
    *,
    language: str,
    highlighter: BaseHighlighter,
    today: Callable[[], date] = date.today,
) -> str:
    """Weave an item stream into one HTML body, in stream order.

    The containment state is threaded through the fold and dropped at the
    end; fragments are joined with a blank line.
    """
    fragments: List[str] = []
    state = ContainmentState.OUTSIDE_ARTICLE
    for item in items:
        fragment = render_item(
            item, state, language=language, highlighter=highlighter, today=today
        )
        fragments.append(fragment.markup)
        state = fragment.state
    logger.info("Woven %d items (%s at end of stream)", len(fragments), state.value)
    return FRAGMENT_SEPARATOR.join(fragments)


def weave_program(
    program: Program,
    config: WeaveConfig,
    highlighter: Optional[BaseHighlighter] = None,
    today: Callable[[], date] = date.today,
) -> str:
    """Weave a loaded Program with the highlighter named by ``config``."""
    if highlighter is None:
        highlighter = make_highlighter(config)
    return weave_items(
        program.items, language=config.language, highlighter=highlighter, today=today
    )
