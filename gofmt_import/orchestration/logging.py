"""Centralized logging helpers: plain messages on stderr under the gofmt_import.* namespace."""

from __future__ import annotations

import logging
import os
import sys

_configured = False
_ROOT = "gofmt_import"


def _resolve_level() -> int:
    raw = os.environ.get("GOFMT_IMPORT_LOG_LEVEL", "").strip().upper()
    if raw:
        return getattr(logging, raw, logging.INFO)
    return logging.INFO


def _package_root() -> logging.Logger:
    """The gofmt_import logger: owns the only handler; child loggers keep NOTSET and inherit its level."""
    root = logging.getLogger(_ROOT)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
        root.propagate = False
    return root


def configure_cli_logging(*, quiet: bool = False, verbose: bool = False) -> None:
    """Set the gofmt_import level from CLI flags; --quiet/--verbose override GOFMT_IMPORT_LOG_LEVEL."""
    global _configured
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = _resolve_level()
    _package_root().setLevel(level)
    _configured = True


def get_logger(name: str) -> logging.Logger:
    """Return gofmt_import.<name>; until the CLI configures logging the level comes from the environment."""
    root = _package_root()
    if not _configured:
        root.setLevel(_resolve_level())
    return logging.getLogger(f"{_ROOT}.{name}")
