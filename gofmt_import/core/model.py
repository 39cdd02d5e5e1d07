"""Import entries, groups and blocks as produced by the parser and mutated by the refactor pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from .line_table import LineTable


@dataclass(frozen=True)
class Span:
    """Half-open byte range [start, end) in the file."""

    start: int
    end: int

    @property
    def width(self) -> int:
        return self.end - self.start


@dataclass
class ImportEntry:
    """
    One import spec inside a declaration.

    path keeps its quote characters exactly as written ("fmt" or `fmt`).
    text_lines are the rendered lines of the entry with indentation stripped:
    leading comment lines first, then `[alias] path [comment]`.
    line_offsets hold, relative to span.start, the start of every line after
    the first one the entry occupies. Only span is rewritten by the pipeline.
    """

    path: str
    span: Span
    alias: Optional[str] = None
    leading_comments: Tuple[str, ...] = ()
    trailing_comment: Optional[str] = None
    text_lines: Tuple[str, ...] = ()
    line_offsets: Tuple[int, ...] = ()

    @property
    def unquoted(self) -> str:
        return self.path[1:-1] if len(self.path) >= 2 else self.path

    @property
    def line_count(self) -> int:
        return 1 + len(self.line_offsets)


@dataclass(frozen=True)
class Group:
    """Entries that matched the same rule; rank is the rule's position in priority order."""

    label: str
    rank: int
    entries: Tuple[ImportEntry, ...]

    def __len__(self) -> int:
        return len(self.entries)


@dataclass
class ImportBlock:
    """
    One `import` declaration.

    lparen/rparen are None for the single-spec form (`import "fmt"`).
    groups is filled by the block transformer; rewritten tells the renderer
    that entries and spans were synthesized and must be laid out from the
    line table.
    """

    start: int
    end: int
    entries: List[ImportEntry] = field(default_factory=list)
    lparen: Optional[int] = None
    rparen: Optional[int] = None
    dangling_comments: bool = False
    groups: List[Group] = field(default_factory=list)
    rewritten: bool = False

    @property
    def grouped(self) -> bool:
        return self.lparen is not None and self.rparen is not None

    @property
    def body_start(self) -> int:
        """Offset right after the opening parenthesis: anchor for layout synthesis."""
        if self.lparen is None:
            raise ValueError("single-spec import has no body")
        return self.lparen + 1


@dataclass
class SourceFile:
    """Parsed prologue of one Go file. line_table is replaced wholesale as blocks are rewritten."""

    filename: str
    source: str
    line_table: LineTable
    blocks: List[ImportBlock] = field(default_factory=list)
