"""CLI handlers facade: re-exports the concrete handlers from cli.format_handlers."""
from __future__ import annotations
from .format_handlers import handle_format, handle_help, handle_rules
__all__ = ['handle_help', 'handle_format', 'handle_rules']
