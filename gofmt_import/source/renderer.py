"""
Render a parsed file back to text.

Text outside rewritten import blocks is copied verbatim. Inside a rewritten
block, line breaks come only from the line table: the number of newlines
before an entry (or before the closing parenthesis) is the distance between
line numbers, clamped so at most one blank line is ever emitted. The block
uses the line ending of its `import (` line, so CRLF files stay CRLF.
"""

from __future__ import annotations

from typing import List

from gofmt_import.core.line_table import LineTable
from gofmt_import.core.model import ImportBlock, SourceFile

# gofmt never emits more than one blank line in a row
MAX_NEWLINES = 2


def _breaks(line_delta: int, newline: str = "\n") -> str:
    return newline * max(1, min(line_delta, MAX_NEWLINES))


def render(source_file: SourceFile) -> str:
    """Return the file text with every rewritten block laid out from source_file.line_table."""
    src = source_file.source
    out: List[str] = []
    cursor = 0
    for block in source_file.blocks:
        if not block.rewritten:
            continue
        header_end = src.find("\n", block.lparen)
        newline = "\n"
        if header_end > 0 and src[header_end - 1] == "\r":
            header_end -= 1
            newline = "\r\n"
        out.append(src[cursor:header_end])
        out.append(_render_body(block, source_file.line_table, newline))
        cursor = block.rparen
    out.append(src[cursor:])
    return "".join(out)


def _render_body(block: ImportBlock, table: LineTable, newline: str = "\n") -> str:
    parts: List[str] = []
    prev_line = table.line_of(block.lparen)
    for entry in block.entries:
        parts.append(_breaks(table.line_of(entry.span.start) - prev_line, newline))
        parts.append(newline.join("\t" + line for line in entry.text_lines))
        prev_line = table.line_of(entry.span.end)
    parts.append(_breaks(table.line_of(block.rparen) - prev_line, newline))
    return "".join(parts)
