"""Go source collaborators: prologue parser and line-table driven renderer."""

from .parser import parse_source
from .renderer import render

__all__ = ["parse_source", "render"]
