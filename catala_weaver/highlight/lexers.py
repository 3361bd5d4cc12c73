"""Pygments lexers for literate Catala fragments (catala_en, catala_fr).

WHY: Both highlight delegates ask Pygments for the ``catala_en`` or
``catala_fr`` lexer. Pygments does not ship them, so the package provides
them: in-process through LEXERS, and to the pygmentize executable through
the ``pygments.lexers`` entry-point group declared in pyproject.toml.

HOW: The weaver hands each fragment over as ``/*`` code ``*/``, the literate
file convention. Outside the delimiters everything is law text; inside,
one ``code`` state tokenizes comments, literals, keywords, types,
operators and names. The English and French lexers share the state
machine and differ only in their word lists.

RULES:
- Multi-word keywords ("depends on", "sous condition") match as one token
- The symbol glyphs produced by the normalizer (≠ ≤ ≥ — → × ÷) are operators
- Unknown characters inside code are plain Text, never Error tokens
"""

from __future__ import annotations

from typing import Dict, List, Sequence

from pygments.lexer import RegexLexer, words
from pygments.token import (
    Comment,
    Generic,
    Keyword,
    Name,
    Number,
    Operator,
    Punctuation,
    String,
    Text,
    Whitespace,
)

_OPERATORS = r"(?:[≠≤≥—→×÷]|!=|<=|>=|->|--|[-+*/<>][.$@^]?|=|\^)"


def _code_state(
    keywords: Sequence[str],
    types: Sequence[str],
    constants: Sequence[str],
    units: Sequence[str],
) -> List[tuple]:
    return [
        (r"\*/", Punctuation, "#pop"),
        (r"\s+", Whitespace),
        (r"#(?:(?!\*/)[^\n])*", Comment.Single),
        (r'"(?:\\.|[^"\\])*"', String),
        (r"\|\d{4}-\d{2}-\d{2}\|", String.Other),
        (r"\d{2}/\d{2}/\d{4}", String.Other),
        (r"\$\s?\d[\d,]*(?:\.\d+)?", Number),
        (r"\d[\d ]*(?:,\d+)?\s?€", Number),
        (r"\d+\.\d+", Number.Float),
        (r"\d+", Number.Integer),
        (words(keywords, prefix=r"\b", suffix=r"\b"), Keyword),
        (words(types, prefix=r"\b", suffix=r"\b"), Keyword.Type),
        (words(constants, prefix=r"\b", suffix=r"\b"), Keyword.Constant),
        (words(units, prefix=r"\b", suffix=r"\b"), Name.Builtin),
        (_OPERATORS, Operator),
        (r"[()\[\]{},;:.]", Punctuation),
        (r"[A-ZÀ-ÖØ-Þ][\w']*", Name.Class),
        (r"[a-zß-öø-ÿ_][\w']*", Name.Variable),
        (r".", Text),
    ]


_LAW_STATE = [
    (r"/\*", Punctuation, "code"),
    (r"@@[^@\n]+@@\+*", Generic.Heading),
    (r"@[^@\n]+@", Generic.Subheading),
    (r"[^/@]+", Text),
    (r"[/@]", Text),
]


class CatalaEnLexer(RegexLexer):
    """Lexer for Catala with English keywords."""

    name = "Catala (English)"
    aliases = ["catala_en"]
    filenames = ["*.catala_en"]
    mimetypes = ["text/x-catala-en"]

    tokens = {
        "root": list(_LAW_STATE),
        "code": _code_state(
            keywords=(
                "scope", "consequence", "data", "depends on", "declaration",
                "context", "decreasing", "increasing", "of", "collection",
                "enumeration", "sum", "fulfilled", "not fulfilled", "definition",
                "label", "exception", "equals", "match", "with pattern",
                "under condition", "if", "then", "else", "condition", "content",
                "structure", "assertion", "varies", "with", "for", "all",
                "we have", "fixed", "by", "rule", "exists", "such", "that",
                "and", "or", "xor", "not", "maximum", "minimum", "filter", "map",
                "init", "number", "in", "now",
            ),
            types=("integer", "boolean", "date", "duration", "money", "text", "decimal"),
            constants=("true", "false"),
            units=("year", "month", "day"),
        ),
    }


class CatalaFrLexer(RegexLexer):
    """Lexer for Catala with French keywords."""

    name = "Catala (French)"
    aliases = ["catala_fr"]
    filenames = ["*.catala_fr"]
    mimetypes = ["text/x-catala-fr"]

    tokens = {
        "root": list(_LAW_STATE),
        "code": _code_state(
            keywords=(
                "champ d'application", "conséquence", "donnée", "dépend de",
                "déclaration", "contexte", "décroissant", "croissant", "de",
                "liste de", "collection", "énumération", "somme", "rempli",
                "non rempli", "définition", "étiquette", "exception", "égal à",
                "selon", "sous forme", "sous condition", "si", "alors", "sinon",
                "condition", "contenu", "structure", "assertion", "varie",
                "avec", "pour", "tout", "on a", "fixé", "par", "règle", "existe",
                "tel", "que", "et", "ou", "ou bien", "non", "maximum", "minimum",
                "filtre", "nombre", "dans", "maintenant", "initial",
            ),
            types=("entier", "booléen", "date", "durée", "argent", "texte", "décimal"),
            constants=("vrai", "faux"),
            units=("an", "mois", "jour"),
        ),
    }


LEXERS: Dict[str, type] = {
    "catala_en": CatalaEnLexer,
    "catala_fr": CatalaFrLexer,
}
