"""Order entries inside one group."""

from __future__ import annotations

from dataclasses import replace

from gofmt_import.core.model import Group
from gofmt_import.errors import InvariantViolation


def sort_group(group: Group) -> Group:
    """Return the group with entries in ascending path order; equal paths keep their relative order."""
    ordered = tuple(sorted(group.entries, key=lambda e: e.path))
    if len(ordered) != len(group.entries):
        raise InvariantViolation(f"group {group.label!r} changed size while sorting")
    return replace(group, entries=ordered)
