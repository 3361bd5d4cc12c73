"""Loading the upstream parser's item stream from JSON.

WHY: Parsing literate Catala files happens upstream; the weaver receives
the resulting item stream as a JSON document. A malformed document must
be rejected with a message that points at the offending item, before
any external highlighter is started.

HOW: The raw dict is validated with jsonschema against the bundled
item_stream.schema.json, then each item is converted to its dataclass
in a single in-order pass.

RULES:
- Validation happens before conversion; conversion never sees bad input
- Item order in the JSON array is preserved exactly
- source_files defaults to the distinct files named by item positions,
  in order of first appearance, when the document does not list them
- All failures raise ItemStreamError naming the file and JSON path
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import jsonschema

from catala_weaver.core.ast import (
    CodeBlock,
    DocumentItem,
    LawArticle,
    LawHeading,
    LawInclude,
    LawText,
    Marked,
    MetadataBlock,
    Pos,
    Program,
)
from catala_weaver.errors import ItemStreamError

_SCHEMA_PATH = Path(__file__).resolve().parent / "item_stream.schema.json"

_CACHED_SCHEMA: Optional[Dict[str, Any]] = None


def _get_schema() -> Dict[str, Any]:
    global _CACHED_SCHEMA
    if _CACHED_SCHEMA is None:
        with open(_SCHEMA_PATH, encoding="utf-8") as f:
            _CACHED_SCHEMA = json.load(f)
    return _CACHED_SCHEMA


def _json_path(error: jsonschema.ValidationError) -> str:
    """Render a validation error's location as "$.items[2].title"."""
    parts = ["$"]
    for element in error.absolute_path:
        if isinstance(element, int):
            parts.append("[{}]".format(element))
        else:
            parts.append(".{}".format(element))
    return "".join(parts)


def _pos(data: Dict[str, Any]) -> Pos:
    return Pos(
        file=data["file"],
        start_line=data["start_line"],
        start_column=data.get("start_column", 1),
        end_line=data.get("end_line"),
        end_column=data.get("end_column"),
    )


def _marked(data: Dict[str, Any]) -> Marked:
    return Marked(value=data["value"], pos=_pos(data["pos"]))


def _item(data: Dict[str, Any]) -> DocumentItem:
    kind = data["kind"]
    if kind == "law_heading":
        return LawHeading(title=data["title"], precedence=data.get("precedence", 0))
    if kind == "law_text":
        return LawText(body=data["body"])
    if kind == "law_article":
        return LawArticle(name=_marked(data["name"]), article_id=data.get("article_id"))
    if kind == "code_block":
        return CodeBlock(code=_marked(data["code"]))
    if kind == "metadata_block":
        return MetadataBlock(code=_marked(data["code"]))
    if kind == "law_include":
        return LawInclude(path=data["path"], page=data.get("page"))
    # Unreachable once the schema has accepted the document
    raise ItemStreamError("Unknown item kind '{}'".format(kind))


def _positioned_files(items: List[DocumentItem]) -> List[str]:
    seen: Dict[str, None] = {}
    for item in items:
        if isinstance(item, (CodeBlock, MetadataBlock)):
            seen.setdefault(item.code.pos.file, None)
        elif isinstance(item, LawArticle):
            seen.setdefault(item.name.pos.file, None)
    return list(seen)


def program_from_dict(data: Dict[str, Any], origin: str = "<item stream>") -> Program:
    """Validate and convert a decoded item stream document.

    Args:
        data: The decoded JSON document.
        origin: Name used in error messages (usually the file path).

    Returns:
        The Program with items in document order.

    Raises:
        ItemStreamError: If the document does not match the schema.
    """
    try:
        jsonschema.validate(instance=data, schema=_get_schema())
    except jsonschema.ValidationError as e:
        raise ItemStreamError(
            "Invalid item stream {} at {}: {}".format(origin, _json_path(e), e.message)
        ) from e

    items = [_item(raw) for raw in data["items"]]
    source_files = data.get("source_files")
    if source_files is None:
        source_files = _positioned_files(items)
    return Program(items=items, source_files=list(source_files))


def load_program(path: str | Path) -> Program:
    """Read an item stream JSON file into a Program.

    RULES:
    - File must be UTF-8 encoded JSON
    - Raises ItemStreamError for unreadable, undecodable or invalid files
    """
    path = Path(path)
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ItemStreamError("Cannot read item stream {}: {}".format(path, e)) from e
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ItemStreamError("Item stream {} is not valid JSON: {}".format(path, e)) from e
    return program_from_dict(data, origin=str(path))
