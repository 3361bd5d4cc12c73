"""Catala literate weaver — legislative text and code woven into HTML.

WHY: A Catala source file interleaves the law it implements with the code
that implements it. Law professionals need to review both side by side,
in the original order, without reading raw source files.

HOW: Three-stage pipeline — load (item stream from the upstream parser),
weave (fold every item into markup, threading the article containment
state), wrap (page shell with stylesheet and source file list). Code
fragments are handed to a pluggable highlighter.

RULES:
- The item stream is never reordered; every item renders exactly once
- Highlighting failures abort the whole document (no partial HTML)
- Adding a highlighter = one new module in highlight/, no weaving changes
"""

__version__ = "0.1.0"
