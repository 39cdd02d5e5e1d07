"""Exception taxonomy for gofmt-import."""

from __future__ import annotations


class GofmtImportError(Exception):
    """Base class for every error raised by gofmt_import."""


class RuleConfigError(GofmtImportError):
    """A custom rule pattern could not be compiled."""

    def __init__(self, pattern: str, reason: str) -> None:
        super().__init__(f"invalid rule pattern {pattern!r}: {reason}")
        self.pattern = pattern
        self.reason = reason


class InvariantViolation(GofmtImportError):
    """Internal fault: an entry matched no rule, a group lost entries, or a line table went non-monotonic."""


class GoSyntaxError(GofmtImportError):
    """The import prologue of a Go file could not be parsed."""

    def __init__(self, filename: str, line: int, column: int, message: str) -> None:
        super().__init__(f"{filename}:{line}:{column}: {message}")
        self.filename = filename
        self.line = line
        self.column = column
        self.message = message
