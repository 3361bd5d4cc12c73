"""Unit tests for the item renderer and the document weaver.

WHY: The article containment state is the only state crossing items. A
wrong transition leaves containers unbalanced; a wrong fold reorders or
drops legislative text, which defeats the purpose of the document.

HOW: The transition table is checked exhaustively over every item kind
and both states. Rendering is checked per item kind, then the fold is
checked on whole streams with the recording and failing highlighters
from conftest.py.

RULES:
- No test starts a subprocess; highlighting goes through test doubles
- Legal links use the fixed clock from conftest.py
"""

from datetime import date

import pytest

from catala_weaver.config import LEGIFRANCE_BASE_URL, WeaveConfig
from catala_weaver.core.ast import (
    CodeBlock,
    LawArticle,
    LawHeading,
    LawInclude,
    LawText,
    Marked,
    MetadataBlock,
    Pos,
    Program,
)
from catala_weaver.errors import HighlightError
from catala_weaver.weaving.html import (
    CLOSING_ARTICLE,
    ContainmentState,
    closes_article,
    next_state,
    render_item,
    weave_items,
    weave_program,
)

INSIDE = ContainmentState.INSIDE_ARTICLE
OUTSIDE = ContainmentState.OUTSIDE_ARTICLE

ARTICLE_OPEN = "<div class='article-container'>"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_article(name, article_id=None, file="tax.catala_fr", line=1):
    return LawArticle(name=Marked(name, Pos(file, line)), article_id=article_id)


def make_code(text, file="tax.catala_fr", line=1):
    return CodeBlock(code=Marked(text, Pos(file, line)))


def make_metadata(text, file="tax.catala_fr", line=1):
    return MetadataBlock(code=Marked(text, Pos(file, line)))


def _weave(items, highlighter, language="en", today=lambda: date(2026, 10, 19)):
    return weave_items(items, language=language, highlighter=highlighter, today=today)


# =========================================================================
# Transition table
# =========================================================================

ALL_KINDS = [
    ("heading", LawHeading("Title", 0)),
    ("text", LawText("body")),
    ("article", make_article("Art. 1")),
    ("code", make_code("x")),
    ("metadata", make_metadata("x")),
    ("include", LawInclude("other.catala_fr")),
]

EXPECTED_TRANSITIONS = {
    # (kind, state before): (closes container, state after)
    ("heading", INSIDE): (True, OUTSIDE),
    ("heading", OUTSIDE): (False, OUTSIDE),
    ("article", INSIDE): (True, INSIDE),
    ("article", OUTSIDE): (False, INSIDE),
    ("text", INSIDE): (False, INSIDE),
    ("text", OUTSIDE): (False, OUTSIDE),
    ("code", INSIDE): (False, INSIDE),
    ("code", OUTSIDE): (False, OUTSIDE),
    ("metadata", INSIDE): (False, INSIDE),
    ("metadata", OUTSIDE): (False, OUTSIDE),
    ("include", INSIDE): (False, INSIDE),
    ("include", OUTSIDE): (False, OUTSIDE),
}


class TestTransitionTable:
    """Every (item kind, state) pair has exactly one outcome."""

    def test_table_is_exhaustive(self):
        pairs = {(kind, state) for kind, _ in ALL_KINDS for state in ContainmentState}
        assert pairs == set(EXPECTED_TRANSITIONS)

    @pytest.mark.parametrize("kind,item", ALL_KINDS)
    @pytest.mark.parametrize("state", list(ContainmentState))
    def test_transition(self, kind, item, state):
        expected_close, expected_state = EXPECTED_TRANSITIONS[(kind, state)]
        assert closes_article(item, state) is expected_close
        assert next_state(item, state) is expected_state

    @pytest.mark.parametrize("kind,item", ALL_KINDS)
    @pytest.mark.parametrize("state", list(ContainmentState))
    def test_render_item_agrees_with_table(self, kind, item, state, recording_highlighter):
        expected_close, expected_state = EXPECTED_TRANSITIONS[(kind, state)]
        fragment = render_item(item, state, language="en", highlighter=recording_highlighter)
        assert fragment.markup.startswith(CLOSING_ARTICLE) is expected_close
        assert fragment.state is expected_state


# =========================================================================
# Single items
# =========================================================================

class TestRenderItem:
    """Markup of each item kind."""

    @pytest.mark.parametrize("precedence,level", [(0, 2), (1, 3), (3, 5)])
    def test_heading_level(self, precedence, level, recording_highlighter):
        fragment = render_item(
            LawHeading("Livre I", precedence), OUTSIDE,
            language="fr", highlighter=recording_highlighter,
        )
        assert fragment.markup == "<h{0} class='law-heading'>Livre I</h{0}>".format(level)

    def test_negative_precedence_rejected(self):
        with pytest.raises(ValueError, match="precedence"):
            LawHeading("Bad", -1)

    def test_text_is_escaped(self, recording_highlighter):
        fragment = render_item(
            LawText("a < b & c > d"), OUTSIDE,
            language="en", highlighter=recording_highlighter,
        )
        assert fragment.markup == "<p class='law-text'>a &lt; b &amp; c &gt; d</p>"

    def test_article_without_reference(self, recording_highlighter):
        fragment = render_item(
            make_article("Article 3"), OUTSIDE,
            language="en", highlighter=recording_highlighter,
        )
        assert fragment.markup == (
            "<div class='article-container'>\n\n"
            "<div class='article-title'><a href='#'>Article 3</a></div>"
        )

    def test_french_article_links_to_legifrance(self, recording_highlighter, fixed_today):
        fragment = render_item(
            make_article("Article L511-7", article_id="LEGIARTI000038814944"), OUTSIDE,
            language="fr", highlighter=recording_highlighter, today=fixed_today,
        )
        href = "{}/LEGIARTI000038814944/2026-10-19".format(LEGIFRANCE_BASE_URL)
        assert "<a href='{}'>Article L511-7</a>".format(href) in fragment.markup

    def test_english_article_ignores_reference(self, recording_highlighter, fixed_today):
        fragment = render_item(
            make_article("Section 121", article_id="LEGIARTI000038814944"), OUTSIDE,
            language="en", highlighter=recording_highlighter, today=fixed_today,
        )
        assert "<a href='#'>" in fragment.markup

    def test_code_block_is_normalized_and_wrapped(self, recording_highlighter):
        fragment = render_item(
            make_code("a != b -> c", file="src/tax.catala_en", line=42), OUTSIDE,
            language="en", highlighter=recording_highlighter,
        )
        request = recording_highlighter.requests[0]
        assert request.text == "/*a ≠ b → c*/"
        assert request.source_file == "src/tax.catala_en"
        assert request.start_line == 42
        assert request.language == "en"
        assert request.lexer == "catala_en"
        assert request.output_mode == "html"
        assert fragment.markup == (
            "<div class='code-wrapper'>\n"
            "<div class='filename'>src/tax.catala_en</div>\n"
            "<pre>/*a ≠ b → c*/</pre>\n"
            "</div>"
        )

    def test_metadata_block_renders_like_code(self, recording_highlighter):
        fragment = render_item(
            make_metadata("x >= 0", file="meta.catala_fr", line=2), INSIDE,
            language="fr", highlighter=recording_highlighter,
        )
        assert recording_highlighter.requests[0].lexer == "catala_fr"
        assert "<div class='filename'>meta.catala_fr</div>" in fragment.markup
        assert "<pre>/*x ≥ 0*/</pre>" in fragment.markup

    @pytest.mark.parametrize("state", list(ContainmentState))
    def test_include_is_empty_no_op(self, state, recording_highlighter):
        fragment = render_item(
            LawInclude("annexe.pdf", page=3), state,
            language="fr", highlighter=recording_highlighter,
        )
        assert fragment.markup == ""
        assert fragment.state is state
        assert recording_highlighter.requests == []

    def test_unknown_item_rejected(self, recording_highlighter):
        with pytest.raises(TypeError, match="not a document item"):
            render_item("plain string", OUTSIDE, language="en", highlighter=recording_highlighter)


# =========================================================================
# Whole streams
# =========================================================================

class TestWeaveItems:
    """The fold over a stream of items."""

    def test_article_text_heading(self, recording_highlighter):
        items = [make_article("Art. 1"), LawText("hello"), LawHeading("Title", 0)]

        states = [OUTSIDE]
        for item in items:
            states.append(
                render_item(item, states[-1], language="en", highlighter=recording_highlighter).state
            )
        assert states == [OUTSIDE, INSIDE, INSIDE, OUTSIDE]

        output = _weave(items, recording_highlighter)
        assert output == (
            "<div class='article-container'>\n\n"
            "<div class='article-title'><a href='#'>Art. 1</a></div>"
            "\n\n"
            "<p class='law-text'>hello</p>"
            "\n\n"
            "<!-- Closing article div -->\n</div>\n\n"
            "<h2 class='law-heading'>Title</h2>"
        )
        assert output.count(ARTICLE_OPEN) == 1
        assert output.count("Closing article div") == 1

    def test_consecutive_headings_outside_never_close(self, recording_highlighter):
        output = _weave([LawHeading("Livre I", 0), LawHeading("Titre I", 1)], recording_highlighter)
        assert "Closing article div" not in output
        assert output == "<h2 class='law-heading'>Livre I</h2>\n\n<h3 class='law-heading'>Titre I</h3>"

    def test_article_after_article_closes_previous(self, recording_highlighter):
        output = _weave([make_article("Art. 1"), make_article("Art. 2")], recording_highlighter)
        first, second = output.split("\n\n<!-- Closing article div -->", 1)
        assert "Art. 1" in first
        assert "Art. 2" in second

    def test_trailing_article_is_left_open(self, recording_highlighter):
        output = _weave([LawText("intro"), make_article("Art. 9"), LawText("last")], recording_highlighter)
        assert "Closing article div" not in output
        assert output.count("<div") - output.count("</div>") == 1

    def test_include_keeps_its_slot(self, recording_highlighter):
        output = _weave(
            [LawText("a"), LawInclude("b.catala_fr"), LawText("c")], recording_highlighter
        )
        assert output == "<p class='law-text'>a</p>\n\n\n\n<p class='law-text'>c</p>"

    def test_include_does_not_change_state(self, recording_highlighter):
        output = _weave(
            [make_article("Art. 1"), LawInclude("b.catala_fr"), LawHeading("H", 0)],
            recording_highlighter,
        )
        assert CLOSING_ARTICLE + "<h2 class='law-heading'>H</h2>" in output

    def test_order_is_preserved(self, recording_highlighter):
        items = [LawText(str(i)) for i in range(5)] + [make_code("x", line=10)]
        forward = _weave(items, recording_highlighter)
        backward = _weave(list(reversed(items)), recording_highlighter)

        code_markup = (
            "<div class='code-wrapper'>\n"
            "<div class='filename'>tax.catala_fr</div>\n"
            "<pre>/*x*/</pre>\n"
            "</div>"
        )
        expected = ["<p class='law-text'>{}</p>".format(i) for i in range(5)] + [code_markup]
        assert forward.split("\n\n") == expected
        assert backward.split("\n\n") == list(reversed(expected))

    def test_each_fragment_highlighted_once_in_order(self, recording_highlighter):
        items = [make_code("first", line=1), LawText("t"), make_metadata("second", line=5)]
        _weave(items, recording_highlighter)
        assert [r.text for r in recording_highlighter.requests] == ["/*first*/", "/*second*/"]

    def test_links_are_dated_at_render_time(self, recording_highlighter):
        dates = iter([date(2026, 1, 1), date(2026, 1, 2)])
        output = _weave(
            [make_article("A", article_id="ID1"), make_article("B", article_id="ID2")],
            recording_highlighter,
            language="fr",
            today=lambda: next(dates),
        )
        assert "/ID1/2026-01-01'" in output
        assert "/ID2/2026-01-02'" in output

    def test_empty_stream(self, recording_highlighter):
        assert _weave([], recording_highlighter) == ""

    def test_highlight_failure_aborts_document(self, failing_highlighter):
        items = [LawText("before"), make_code("x"), LawText("after"), make_code("y")]
        with pytest.raises(HighlightError, match="returned with error code 1"):
            _weave(items, failing_highlighter)
        assert failing_highlighter.calls == 1


class TestWeaveProgram:
    """weave_program() applies a WeaveConfig."""

    def test_uses_config_language(self, recording_highlighter, fixed_today):
        program = Program(items=[make_code("x"), make_article("Art. 1", article_id="ID")])
        output = weave_program(
            program, WeaveConfig(language="fr"),
            highlighter=recording_highlighter, today=fixed_today,
        )
        assert recording_highlighter.requests[0].lexer == "catala_fr"
        assert "/ID/2026-10-19" in output

    def test_non_verbose_renders_as_english(self, recording_highlighter):
        program = Program(items=[make_code("x")])
        weave_program(program, WeaveConfig(language="non-verbose"), highlighter=recording_highlighter)
        assert recording_highlighter.requests[0].language == "en"
