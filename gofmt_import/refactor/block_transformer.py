"""
Driver for one import block: classify -> sort -> synthesize layout.

Only parenthesised declarations with more than one entry, one entry per
line, are touched. Everything else (single-spec imports, one-entry blocks,
`;`-separated entries, comments trailing the last entry, blocks too compact
to receive separators) is left exactly as parsed.
"""

from __future__ import annotations

from typing import Optional

from gofmt_import.core.line_table import LineTable
from gofmt_import.core.model import ImportBlock, SourceFile
from gofmt_import.orchestration.logging import get_logger
from gofmt_import.rules.engine import RuleEngine

from .classifier import classify
from .layout import plan_fits, plan_layout, synthesize_layout
from .sorter import sort_group

_log = get_logger("refactor")


def skip_reason(block: ImportBlock, table: LineTable) -> Optional[str]:
    """Why the block must stay untouched, or None if it can be regrouped."""
    if not block.grouped:
        return "not a parenthesised block"
    if len(block.entries) <= 1:
        return "fewer than two entries"
    if block.dangling_comments:
        return "comments after the last entry"
    prev_line = table.line_of(block.lparen)
    for entry in block.entries:
        if table.line_of(entry.span.start) <= prev_line:
            return "entries do not each start on their own line"
        prev_line = table.line_of(entry.span.end)
    if table.line_of(block.rparen) <= prev_line:
        return "closing parenthesis shares a line with an entry"
    return None


def transform_block(block: ImportBlock, table: LineTable, engine: RuleEngine, *, sort: bool = True) -> LineTable:
    """
    Regroup one block in place and return the file's new line table.

    When the block is skipped, the same table object is returned and the
    block is not modified at all.
    """
    reason = skip_reason(block, table)
    if reason is not None:
        _log.debug("gofmt-import: import block at line %d left as is: %s", table.line_of(block.start), reason)
        return table

    groups = classify(block.entries, engine)
    if sort:
        groups = [sort_group(g) for g in groups]
    if not plan_fits(plan_layout(groups, block.body_start), block):
        _log.debug(
            "gofmt-import: import block at line %d left as is: no room for %d group separator(s)",
            table.line_of(block.start),
            len(groups),
        )
        return table

    new_table = synthesize_layout(groups, block, table)
    block.groups = list(groups)
    block.entries = [entry for group in groups for entry in group.entries]
    block.rewritten = True
    return new_table


def transform_file(source_file: SourceFile, engine: RuleEngine, *, sort: bool = True) -> SourceFile:
    """Transform every import block of a parsed file, threading the line table through each one."""
    table = source_file.line_table
    for block in source_file.blocks:
        table = transform_block(block, table, engine, sort=sort)
    source_file.line_table = table
    return source_file
