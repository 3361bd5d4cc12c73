"""ASCII operator tokens rewritten as display glyphs.

WHY: Law professionals read "a ≤ b" more easily than "a <= b". Code
fragments are rewritten before highlighting so the rendered document
shows mathematical glyphs.

HOW: One regex, alternatives tried left to right at each position, so
the first listed alternative wins ("--" before "->", "-->" → "—>").
Matches never overlap. Dates in DD/MM/YYYY form are matched first and
kept as they are, which keeps their slashes from becoming "÷".

RULES:
- "!=" → "≠", "<=" → "≤", ">=" → "≥", "--" → "—", "->" → "→",
  "*" → "×", "/" → "÷"; a DD/MM/YYYY date is left unchanged
- Purely lexical: a "/" inside a string literal or comment is rewritten too
- Total and idempotent — the glyphs themselves are never matched
"""

from __future__ import annotations

import re

_DATE = r"\d\d/\d\d/\d\d\d\d"

SYMBOLS_RE = re.compile(_DATE + r"|!=|<=|>=|--|->|\*|/")

SYMBOL_GLYPHS: dict[str, str] = {
    "!=": "≠",
    "<=": "≤",
    ">=": "≥",
    "--": "—",
    "->": "→",
    "*": "×",
    "/": "÷",
}


def _substitute(match: re.Match[str]) -> str:
    token = match.group(0)
    return SYMBOL_GLYPHS.get(token, token)


def normalize_symbols(code: str) -> str:
    """Replace operator tokens in ``code`` with their display glyphs."""
    return SYMBOLS_RE.sub(_substitute, code)
