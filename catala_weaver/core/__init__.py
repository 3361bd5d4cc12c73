"""Core item stream model and loading.

WHY: The core package holds the stable contract between the upstream
parser and the weaver — the document item dataclasses — and the loader
that builds them from the parser's JSON output.

HOW: ast.py defines the data structures, loader.py validates a JSON
item stream against item_stream.schema.json and converts it.

RULES:
- Item dataclasses are the contract — change with care
- Loading is format-agnostic — no HTML or highlighting logic here
"""
