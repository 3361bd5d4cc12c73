"""Weaving of an item stream into an HTML document.

WHY: Weaving is the one stateful step of the pipeline: items render in
order while an article container opens and closes around them.

HOW: symbols.py rewrites operator tokens in code, html.py holds the item
renderer and the fold over the stream, page.py wraps the result in the
page shell.

RULES:
- No module here parses law or code syntax
- HTML is the only output format
"""

from catala_weaver.weaving.html import ContainmentState, RenderedFragment, render_item, weave_items, weave_program
from catala_weaver.weaving.page import wrap_html
from catala_weaver.weaving.symbols import normalize_symbols

__all__ = [
    "ContainmentState",
    "RenderedFragment",
    "normalize_symbols",
    "render_item",
    "weave_items",
    "weave_program",
    "wrap_html",
]
