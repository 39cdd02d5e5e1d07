"""Tests for gofmt_import.refactor.layout (span and line-table synthesis)."""

import pytest

from gofmt_import.core.model import Group, ImportBlock, ImportEntry, Span
from gofmt_import.errors import InvariantViolation
from gofmt_import.refactor.classifier import classify
from gofmt_import.refactor.layout import plan_fits, plan_layout, synthesize_layout
from gofmt_import.refactor.sorter import sort_group
from gofmt_import.rules.engine import RuleEngine
from gofmt_import.source.parser import parse_source

SCENARIO_A = (
    "package main\n"
    "\n"
    "import (\n"
    '\t"fmt"\n'
    '\t"github.com/foo"\n'
    '\t"github.com/bar"\n'
    '\tk8sfoo "k8s.io/foo"\n'
    ")\n"
    "\n"
    "func main() {}\n"
)


def _sorted_groups(block: ImportBlock, engine: RuleEngine) -> list:
    return [sort_group(g) for g in classify(block.entries, engine)]


def test_plan_layout_slot_arithmetic() -> None:
    """Each entry gets width + 1 bytes; each group is followed by a one-byte separator slot."""
    a = ImportEntry(path='"a"', span=Span(50, 53))
    bb = ImportEntry(path='"bb"', span=Span(60, 64))
    c = ImportEntry(path='"c"', span=Span(70, 73), line_offsets=(2,))
    groups = [Group("g1", 0, (a, bb)), Group("g2", 1, (c,))]
    plan = plan_layout(groups, body_start=10)
    assert plan.spans == (Span(10, 13), Span(14, 18), Span(20, 23))
    # a, bb, separator, c (two lines), separator/closing
    assert plan.slots == (10, 14, 19, 20, 22, 24)
    assert plan.closing_slot == 24
    assert plan.entries == (a, bb, c)


def test_plan_layout_requires_groups() -> None:
    with pytest.raises(ValueError):
        plan_layout([], body_start=0)


def test_synthesize_scenario_a() -> None:
    """Offsets and line table for the three-group layout; head and tail lines copied by value."""
    parsed = parse_source(SCENARIO_A)
    block = parsed.blocks[0]
    table = parsed.line_table
    groups = _sorted_groups(block, RuleEngine.buckets(ecosystem="k8s.io"))

    new_table = synthesize_layout(groups, block, table)

    assert table.starts == (0, 13, 14, 23, 30, 48, 66, 87, 89, 90)
    assert new_table.starts == (0, 13, 14, 22, 28, 29, 46, 63, 64, 84, 89, 90)
    assert new_table.is_strictly_increasing()
    fmt, bar, foo, k8s = (e for g in groups for e in g.entries)
    assert (fmt.span, bar.span, foo.span, k8s.span) == (Span(22, 27), Span(29, 45), Span(46, 62), Span(64, 83))
    # closing paren falls on the line of the last separator slot
    assert new_table.line_of(block.rparen) == new_table.line_of(k8s.span.end) + 1


def test_blank_separator_between_groups_only() -> None:
    """Line numbers jump by two between groups and by one inside a group."""
    parsed = parse_source(SCENARIO_A)
    block = parsed.blocks[0]
    groups = _sorted_groups(block, RuleEngine.buckets(ecosystem="k8s.io"))
    table = synthesize_layout(groups, block, parsed.line_table)
    lines = [table.line_of(e.span.start) for g in groups for e in g.entries]
    assert lines == [4, 6, 7, 9]
    assert table.line_of(block.lparen) == 3


def test_single_group_keeps_table_consistent() -> None:
    src = 'package p\n\nimport (\n\t"os"\n\t"fmt"\n)\n'
    parsed = parse_source(src)
    block = parsed.blocks[0]
    groups = _sorted_groups(block, RuleEngine.buckets())
    assert len(groups) == 1
    table = synthesize_layout(groups, block, parsed.line_table)
    assert table.is_strictly_increasing()
    assert table.line_count == parsed.line_table.line_count


def test_plan_fits_rejects_compact_blocks() -> None:
    """Unindented entries leave no bytes for separators between three groups."""
    src = 'package p\nimport (\n"fmt"\n"github.com/a"\n"k8s.io/b"\n)\n'
    parsed = parse_source(src)
    block = parsed.blocks[0]
    groups = _sorted_groups(block, RuleEngine.buckets(ecosystem="k8s.io"))
    assert not plan_fits(plan_layout(groups, block.body_start), block)
    spans = [e.span for e in block.entries]
    with pytest.raises(InvariantViolation):
        synthesize_layout(groups, block, parsed.line_table)
    assert [e.span for e in block.entries] == spans


def test_synthesize_requires_parenthesised_block() -> None:
    parsed = parse_source('package p\nimport "fmt"\n')
    block = parsed.blocks[0]
    with pytest.raises(ValueError):
        synthesize_layout([Group("standard", 0, tuple(block.entries))], block, parsed.line_table)
