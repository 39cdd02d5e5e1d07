"""Per-file line table: line number -> byte offset of the line start."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterable, Tuple


@dataclass(frozen=True)
class LineTable:
    """
    Immutable, 1-based line table.

    starts[i] is the offset where line i + 1 begins; starts[0] is always 0.
    Replacing a slice yields a new table, the original is never touched.
    """

    starts: Tuple[int, ...]
    size: int

    @classmethod
    def from_source(cls, source: str) -> "LineTable":
        starts = [0]
        for idx, ch in enumerate(source):
            if ch == "\n" and idx + 1 < len(source):
                starts.append(idx + 1)
        return cls(tuple(starts), len(source))

    @property
    def line_count(self) -> int:
        return len(self.starts)

    def line_of(self, offset: int) -> int:
        """Line number containing offset (offsets past the last start belong to the last line)."""
        if offset < 0:
            raise ValueError(f"negative offset: {offset}")
        return bisect_right(self.starts, offset)

    def line_start(self, line: int) -> int:
        if line < 1 or line > len(self.starts):
            raise IndexError(f"line {line} out of range 1..{len(self.starts)}")
        return self.starts[line - 1]

    def is_strictly_increasing(self) -> bool:
        return all(a < b for a, b in zip(self.starts, self.starts[1:]))

    def splice(self, keep_through: int, resume_after: int, slots: Iterable[int]) -> "LineTable":
        """
        Keep lines 1..keep_through, then slots, then lines resume_after + 1 .. end.

        Offsets of kept lines are copied by value; only their numbering changes.
        """
        if keep_through < 0 or resume_after < keep_through or resume_after > len(self.starts):
            raise IndexError(f"bad splice range: keep 1..{keep_through}, resume after {resume_after}")
        head = self.starts[:keep_through]
        tail = self.starts[resume_after:]
        return LineTable(head + tuple(slots) + tail, self.size)
