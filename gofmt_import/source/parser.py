"""
Parse the package clause and import declarations of a Go file.

Produces a SourceFile whose blocks carry entries with their original spans,
the delimiter offsets, and the text each entry renders to. Parsing stops at
the first token that is not part of an import declaration; the rest of the
file is never looked at.
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence, Tuple

from gofmt_import.core.line_table import LineTable
from gofmt_import.core.model import ImportBlock, ImportEntry, SourceFile, Span
from gofmt_import.errors import GoSyntaxError

from .scanner import COMMENT, IDENT, NEWLINE, SPACE, STRING, Token, scan


def parse_source(source: str, filename: str = "<input>") -> SourceFile:
    """Parse the import prologue of source. Raises GoSyntaxError on malformed input."""
    return _Parser(source, filename).parse()


class _Parser:
    def __init__(self, source: str, filename: str) -> None:
        self.source = source
        self.filename = filename
        self.table = LineTable.from_source(source)
        self._tokens: Iterator[Token] = scan(source)
        self._peeked: Optional[Token] = None

    # -- token cursor -------------------------------------------------------

    def peek(self) -> Optional[Token]:
        if self._peeked is None:
            self._peeked = next(self._tokens, None)
        return self._peeked

    def advance(self) -> Token:
        tok = self.peek()
        if tok is None:
            raise self.error(len(self.source), "unexpected end of file")
        self._peeked = None
        return tok

    def skip(self, *kinds: str) -> Optional[Token]:
        """Consume tokens of the given kinds; return the first other token (not consumed)."""
        tok = self.peek()
        while tok is not None and tok.kind in kinds:
            self.advance()
            tok = self.peek()
        return tok

    def skip_separators(self) -> Optional[Token]:
        tok = self.peek()
        while tok is not None and (tok.kind in (SPACE, NEWLINE, COMMENT) or tok.is_punct(";")):
            self.advance()
            tok = self.peek()
        return tok

    def error(self, offset: int, message: str) -> GoSyntaxError:
        line = self.table.line_of(min(offset, max(len(self.source) - 1, 0)))
        column = offset - self.table.line_start(line) + 1
        return GoSyntaxError(self.filename, line, column, message)

    # -- grammar ------------------------------------------------------------

    def parse(self) -> SourceFile:
        tok = self.skip_separators()
        if tok is None or not tok.is_keyword("package"):
            raise self.error(tok.start if tok else 0, "expected 'package'")
        self.advance()
        tok = self.skip(SPACE, COMMENT)
        if tok is None or tok.kind != IDENT:
            raise self.error(tok.start if tok else len(self.source), "expected package name")
        self.advance()

        blocks: List[ImportBlock] = []
        tok = self.skip_separators()
        while tok is not None and tok.is_keyword("import"):
            blocks.append(self.parse_decl())
            tok = self.skip_separators()
        return SourceFile(self.filename, self.source, self.table, blocks)

    def parse_decl(self) -> ImportBlock:
        keyword = self.advance()
        tok = self.skip(SPACE, NEWLINE, COMMENT)
        if tok is not None and tok.is_punct("("):
            return self.parse_group(keyword)
        entry = self.parse_spec(leading=())
        return ImportBlock(start=keyword.start, end=entry.span.end, entries=[entry])

    def parse_group(self, keyword: Token) -> ImportBlock:
        lparen = self.advance()
        lparen_line = self.table.line_of(lparen.start)
        entries: List[ImportEntry] = []
        pending: List[Token] = []
        while True:
            tok = self.peek()
            if tok is None:
                raise self.error(len(self.source), "expected ')' to close import block")
            if tok.kind in (SPACE, NEWLINE) or tok.is_punct(";"):
                self.advance()
            elif tok.kind == COMMENT:
                self.advance()
                # a comment on the `(` line stays with the header
                if entries or pending or tok.spans_lines or self.table.line_of(tok.start) != lparen_line:
                    pending.append(tok)
            elif tok.is_punct(")"):
                rparen = self.advance()
                break
            elif tok.kind in (IDENT, STRING) or tok.is_punct("."):
                entries.append(self.parse_spec(leading=pending))
                pending = []
            else:
                raise self.error(tok.start, f"expected import spec, found {tok.text!r}")
        return ImportBlock(
            start=keyword.start,
            end=rparen.end,
            entries=entries,
            lparen=lparen.start,
            rparen=rparen.start,
            dangling_comments=bool(pending),
        )

    def parse_spec(self, leading: Sequence[Token]) -> ImportEntry:
        tok = self.peek()
        if tok is None:
            raise self.error(len(self.source), "expected import path")
        spec_start = tok.start
        alias = None
        if tok.kind == IDENT or tok.is_punct("."):
            alias = self.advance().text
            tok = self.skip(SPACE, COMMENT)
        if tok is None or tok.kind != STRING:
            raise self.error(tok.start if tok else len(self.source), "expected import path")
        path = self.advance()
        end = path.end
        trailing = None
        tok = self.skip(SPACE)
        if tok is not None and tok.kind == COMMENT and not tok.spans_lines:
            trailing = self.advance().text
            end = tok.end
        start = leading[0].start if leading else spec_start
        return self._entry(path.text, alias, start, end, tuple(c.text for c in leading), trailing)

    def _entry(
        self,
        path: str,
        alias: Optional[str],
        start: int,
        end: int,
        leading: Tuple[str, ...],
        trailing: Optional[str],
    ) -> ImportEntry:
        text = self.source[start:end]
        text_lines: List[str] = []
        line_offsets: List[int] = []
        rel = 0
        for raw in text.split("\n"):
            line = raw.strip()
            # blank lines between a leading comment and its spec are dropped
            if line:
                if text_lines:
                    line_offsets.append(rel)
                text_lines.append(line)
            rel += len(raw) + 1
        return ImportEntry(
            path=path,
            span=Span(start, end),
            alias=alias,
            leading_comments=leading,
            trailing_comment=trailing,
            text_lines=tuple(text_lines),
            line_offsets=tuple(line_offsets),
        )
