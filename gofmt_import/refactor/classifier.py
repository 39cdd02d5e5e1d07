"""Partition a flat entry list into rule-ordered groups (first match wins)."""

from __future__ import annotations

from typing import List, Sequence

from gofmt_import.core.model import Group, ImportEntry
from gofmt_import.errors import InvariantViolation
from gofmt_import.rules.engine import RuleEngine


def classify(entries: Sequence[ImportEntry], engine: RuleEngine) -> List[Group]:
    """
    Assign each entry to the first rule that matches its path.

    Entries keep their visit order inside a group; groups come out in rule
    order and empty ones are omitted. An entry no rule accepts means the rule
    list has no catch-all, which is a configuration fault, not a skip.
    """
    buckets: List[List[ImportEntry]] = [[] for _ in engine.rules]
    for entry in entries:
        for rank, rule in enumerate(engine.rules):
            if rule.matches(entry.path):
                buckets[rank].append(entry)
                break
        else:
            raise InvariantViolation(f"import {entry.path} matched no rule ({', '.join(engine.labels)})")
    return [
        Group(label=rule.label, rank=rank, entries=tuple(bucket))
        for rank, (rule, bucket) in enumerate(zip(engine.rules, buckets))
        if bucket
    ]
