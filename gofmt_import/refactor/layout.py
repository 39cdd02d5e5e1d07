"""
Layout synthesis for a regrouped import block.

The renderer places line breaks only from the line table, so after entries
move, a new table slice is fabricated for the block: one slot per emitted
line, a separator slot after every group, and the separator after the last
group doubling as the line of the closing parenthesis.

Offsets inside the block are synthetic. Each entry keeps its original width
so its own text (alias, path, comments) still fits between its slots, and
the whole plan must fit in the bytes the original block occupied; otherwise
the slots would overtake the closing parenthesis and the lines after it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from gofmt_import.core.line_table import LineTable
from gofmt_import.core.model import Group, ImportBlock, ImportEntry, Span
from gofmt_import.errors import InvariantViolation


@dataclass(frozen=True)
class LayoutPlan:
    """New spans (aligned with entries) and the line-start slots for the block body."""

    entries: Tuple[ImportEntry, ...]
    spans: Tuple[Span, ...]
    slots: Tuple[int, ...]

    @property
    def closing_slot(self) -> int:
        return self.slots[-1]


def plan_layout(groups: Sequence[Group], body_start: int) -> LayoutPlan:
    """Assign synthetic spans and line slots, starting at the offset right after `(`."""
    if not groups:
        raise ValueError("nothing to lay out: no non-empty groups")
    running = body_start
    entries: List[ImportEntry] = []
    spans: List[Span] = []
    slots: List[int] = []
    for group in groups:
        for entry in group.entries:
            start = running
            end = start + entry.span.width
            slots.append(start)
            slots.extend(start + rel for rel in entry.line_offsets)
            entries.append(entry)
            spans.append(Span(start, end))
            # one newline unit after the entry's text
            running = end + 1
        # blank separator; after the last group this is the `)` line
        slots.append(running)
        running += 1
    return LayoutPlan(tuple(entries), tuple(spans), tuple(slots))


def plan_fits(plan: LayoutPlan, block: ImportBlock) -> bool:
    """True if the closing slot does not pass the `)` offset, so `)` lands on that slot's line."""
    return block.rparen is not None and plan.closing_slot <= block.rparen


def synthesize_layout(groups: Sequence[Group], block: ImportBlock, table: LineTable) -> LineTable:
    """
    Rewrite every entry's span and return the spliced line table.

    Lines up to and including the `(` line and every line after the `)` line
    are copied unchanged; the lines in between are replaced by the plan's
    slots. Nothing is mutated unless the plan fits and the new table is
    strictly increasing.
    """
    if not block.grouped:
        raise ValueError("layout synthesis needs a parenthesised import block")
    plan = plan_layout(groups, block.body_start)
    if not plan_fits(plan, block):
        raise InvariantViolation(
            f"layout needs {plan.closing_slot - block.body_start} bytes, block body has {block.rparen - block.body_start}"
        )
    open_line = table.line_of(block.lparen)
    close_line = table.line_of(block.rparen)
    new_table = table.splice(open_line, close_line, plan.slots)
    if not new_table.is_strictly_increasing():
        raise InvariantViolation(f"synthesized line table is not strictly increasing near line {open_line}")
    for entry, span in zip(plan.entries, plan.spans):
        entry.span = span
    return new_table
