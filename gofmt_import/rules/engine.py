"""
Ordered classification rules for import paths.

Two policies are supported:

- buckets (default): standard, external, ecosystem, local, a closed set of
  predicates that partition every path;
- patterns: the standard-library rule, then caller regexes in the order
  given, then a catch-all.

Rules are evaluated in order and the first match wins, so the rule order is
also the group emission order.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Iterable, Optional, Tuple

from gofmt_import.errors import RuleConfigError

if TYPE_CHECKING:
    from gofmt_import.config import GroupingConfig

STANDARD = "standard"
EXTERNAL = "external"
ECOSYSTEM = "ecosystem"
LOCAL = "local"
CATCH_ALL = "other"


@dataclass(frozen=True)
class Rule:
    """Label (diagnostics only) plus a predicate over the quoted path literal."""

    label: str
    matcher: Callable[[str], bool]

    def matches(self, path: str) -> bool:
        return bool(self.matcher(path))


@dataclass(frozen=True)
class RuleEngine:
    """Immutable rule list; safe to share between files processed concurrently."""

    rules: Tuple[Rule, ...]
    policy: str

    def __iter__(self):
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(r.label for r in self.rules)

    @classmethod
    def buckets(cls, local_root: Optional[str] = None, ecosystem: Optional[str] = None) -> "RuleEngine":
        """Fixed four-bucket policy: standard, external, ecosystem, local."""
        local = _normalize_root(local_root)
        token = (ecosystem or "").strip() or None

        def is_local(path: str) -> bool:
            return local is not None and _under_root(_unquote(path), local)

        def is_ecosystem(path: str) -> bool:
            return token is not None and _first_segment(path) == token and not is_local(path)

        def is_standard(path: str) -> bool:
            return _is_standard(path) and not is_local(path)

        def is_external(path: str) -> bool:
            return not (is_standard(path) or is_ecosystem(path) or is_local(path))

        return cls(
            rules=(
                Rule(STANDARD, is_standard),
                Rule(EXTERNAL, is_external),
                Rule(ECOSYSTEM, is_ecosystem),
                Rule(LOCAL, is_local),
            ),
            policy="buckets",
        )

    @classmethod
    def from_patterns(cls, patterns: Iterable[str]) -> "RuleEngine":
        """
        Pattern policy: standard library, then each regex in order, then a catch-all.

        Patterns are searched (not anchored) in the quoted path literal, e.g.
        '^"github.*"$'. A pattern that does not compile raises RuleConfigError;
        nothing is dropped silently.
        """
        rules = [Rule(STANDARD, _is_standard)]
        for pattern in patterns:
            try:
                compiled = re.compile(pattern)
            except re.error as e:
                raise RuleConfigError(pattern, str(e)) from e
            rules.append(Rule(pattern, compiled.search))
        rules.append(Rule(CATCH_ALL, lambda path: True))
        return cls(rules=tuple(rules), policy="patterns")


def build_rule_engine(config: "GroupingConfig") -> RuleEngine:
    """Build the engine for a configuration. Call once, before any file is processed."""
    if config.patterns:
        return RuleEngine.from_patterns(config.patterns)
    return RuleEngine.buckets(local_root=config.local_root, ecosystem=config.ecosystem)


def _unquote(path: str) -> str:
    if len(path) >= 2 and path[0] == path[-1] and path[0] in "\"`":
        return path[1:-1]
    return path


def _first_segment(path: str) -> str:
    return _unquote(path).split("/", 1)[0]


def _is_standard(path: str) -> bool:
    # Standard library paths never carry a domain in their first segment.
    return "." not in _first_segment(path)


def _normalize_root(root: Optional[str]) -> Optional[str]:
    if root is None:
        return None
    root = root.strip().strip("\"`").rstrip("/")
    return root or None


def _under_root(path: str, root: str) -> bool:
    return path == root or path.startswith(root + "/")
