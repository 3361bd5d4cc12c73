"""Document item dataclasses for a parsed literate Catala program.

WHY: The upstream parser turns a literate source file into a flat,
ordered stream of items — law headings, law text, article boundaries,
code blocks, metadata blocks and includes. The weaver needs a single,
well-typed form of that stream, decoupled from how it was parsed.

HOW: One frozen dataclass per item kind, plus Pos/Marked for the source
positions attached to article names and code fragments:
  LawHeading    — a section header with a precedence (nesting depth)
  LawText       — literal legislative prose
  LawArticle    — opens an article; may carry a legal reference id
  CodeBlock     — a fragment of Catala code
  MetadataBlock — a fragment of metadata code (declarations)
  LawInclude    — a reference to another source file
DocumentItem is the closed union of these six; ITEM_TYPES lists them
for isinstance dispatch.

RULES:
- Items are immutable; the stream order is the source order
- Line numbers are 1-based
- precedence is >= 0 (heading level is precedence + 2)
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Union


@dataclass(frozen=True)
class Pos:
    """A span in a source file.

    RULES:
    - file: path of the source file as given to the parser
    - start_line / start_column: 1-based start of the span
    - end_line / end_column: optional end of the span
    """

    file: str
    start_line: int
    start_column: int = 1
    end_line: Optional[int] = None
    end_column: Optional[int] = None

    def describe(self) -> str:
        """Human-readable location, e.g. "in file a.catala_fr, from line 3 to line 9"."""
        if self.end_line is None or self.end_line == self.start_line:
            return "in file {}, line {}".format(self.file, self.start_line)
        return "in file {}, from line {} to line {}".format(
            self.file, self.start_line, self.end_line
        )


@dataclass(frozen=True)
class Marked:
    """A piece of text together with the position it was read from."""

    value: str
    pos: Pos


@dataclass(frozen=True)
class LawHeading:
    title: str
    precedence: int = 0

    def __post_init__(self) -> None:
        if self.precedence < 0:
            raise ValueError(
                "Heading precedence must be >= 0, got {}".format(self.precedence)
            )


@dataclass(frozen=True)
class LawText:
    body: str


@dataclass(frozen=True)
class LawArticle:
    """An article boundary.

    article_id is the legal database identifier (e.g. "LEGIARTI000006…")
    used to link the article title to its official text.
    """

    name: Marked
    article_id: Optional[str] = None


@dataclass(frozen=True)
class CodeBlock:
    code: Marked


@dataclass(frozen=True)
class MetadataBlock:
    code: Marked


@dataclass(frozen=True)
class LawInclude:
    """A reference to another source file (catala, PDF or other)."""

    path: str
    page: Optional[int] = None


DocumentItem = Union[LawHeading, LawText, LawArticle, CodeBlock, MetadataBlock, LawInclude]

ITEM_TYPES = (LawHeading, LawText, LawArticle, CodeBlock, MetadataBlock, LawInclude)


@dataclass
class Program:
    """The complete item stream of a woven document.

    RULES:
    - items: in source order, includes not expanded
    - source_files: every file the parser read, listed in the page footer
    """

    items: List[DocumentItem] = field(default_factory=list)
    source_files: List[str] = field(default_factory=list)
