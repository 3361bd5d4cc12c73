"""Shared test fixtures for the catala_weaver test suite.

WHY: Most test modules need the same test doubles for the highlight
delegate and the same small item streams. Centralizing them here avoids
duplication and keeps every test away from real external processes
unless it asks for one explicitly.

HOW: Pytest fixtures provide a recording highlighter that returns canned
markup, a highlighter that always fails like a non-zero pygmentize exit,
and a fixed clock.

RULES:
- No fixture here starts a subprocess
- The recording highlighter wraps each fragment text in <pre> unchanged,
  so tests can assert on exactly what was sent
- The fixed clock is 2026-10-19
"""

from datetime import date
from typing import List

import pytest

from catala_weaver.errors import HighlightError
from catala_weaver.highlight.base import BaseHighlighter, HighlightRequest, StylesheetRequest

FIXED_TODAY = date(2026, 10, 19)

FAKE_CSS = ".catala-code .k { color: #080 }"


class RecordingHighlighter(BaseHighlighter):
    """Highlighter double returning ``<pre>{text}</pre>`` for each fragment."""

    def __init__(self) -> None:
        super().__init__(style="colorful")
        self.requests: List[HighlightRequest] = []
        self.stylesheet_requests: List[StylesheetRequest] = []

    @property
    def name(self) -> str:
        return "recording"

    def highlight(self, request: HighlightRequest) -> str:
        self.requests.append(request)
        return "<pre>{}</pre>".format(request.text)

    def stylesheet(self, request: StylesheetRequest) -> str:
        self.stylesheet_requests.append(request)
        return FAKE_CSS


class FailingHighlighter(BaseHighlighter):
    """Highlighter double simulating a pygmentize exit status of 1."""

    def __init__(self) -> None:
        super().__init__(style="colorful")
        self.calls = 0

    @property
    def name(self) -> str:
        return "failing"

    def highlight(self, request: HighlightRequest) -> str:
        self.calls += 1
        raise HighlightError("pygmentize -l {} -f html".format(request.lexer), 1)

    def stylesheet(self, request: StylesheetRequest) -> str:
        raise HighlightError("pygmentize -f html -S {}".format(request.style), 1)


@pytest.fixture
def recording_highlighter():
    return RecordingHighlighter()


@pytest.fixture
def failing_highlighter():
    return FailingHighlighter()


@pytest.fixture
def fixed_today():
    """A clock that always returns FIXED_TODAY."""
    return lambda: FIXED_TODAY


@pytest.fixture
def sample_item_stream():
    """Item stream document as the upstream parser emits it."""
    return {
        "source_files": ["tax.catala_fr"],
        "items": [
            {"kind": "law_heading", "title": "Code général des impôts", "precedence": 0},
            {
                "kind": "law_article",
                "name": {"value": "Article 1", "pos": {"file": "tax.catala_fr", "start_line": 3}},
                "article_id": "LEGIARTI000006308740",
            },
            {"kind": "law_text", "body": "L'impôt est dû."},
            {
                "kind": "code_block",
                "code": {
                    "value": "champ d'application Impot:\n  définition montant égal à revenu * 0,1\n",
                    "pos": {"file": "tax.catala_fr", "start_line": 7, "end_line": 9},
                },
            },
            {"kind": "law_include", "path": "annexe.catala_fr"},
            {
                "kind": "metadata_block",
                "code": {
                    "value": "déclaration structure Foyer:\n  donnée revenu contenu argent\n",
                    "pos": {"file": "tax.catala_fr", "start_line": 12},
                },
            },
        ],
    }
