"""Data model shared by the rule engine, the refactor pipeline and the renderer."""

from .line_table import LineTable
from .model import Group, ImportBlock, ImportEntry, SourceFile, Span

__all__ = ["Group", "ImportBlock", "ImportEntry", "LineTable", "SourceFile", "Span"]
