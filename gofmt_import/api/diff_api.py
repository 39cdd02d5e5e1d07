"""Unified diff between the original and the regrouped file."""

from __future__ import annotations

import difflib


def unified_diff(old_content: str, new_content: str, filename: str) -> str:
    """Diff in `diff -u <name>.orig <name>` form; empty string when the contents are equal."""
    lines = difflib.unified_diff(
        old_content.splitlines(keepends=True),
        new_content.splitlines(keepends=True),
        fromfile=f"{filename}.orig",
        tofile=filename,
    )
    return "".join(_terminated(line) for line in lines)


def _terminated(line: str) -> str:
    return line if line.endswith("\n") else line + "\n\\ No newline at end of file\n"
