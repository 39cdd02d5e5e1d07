"""Handlers for the format / rules / help commands."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Optional, Tuple

from gofmt_import.errors import GofmtImportError, GoSyntaxError


def _err(msg: str) -> None:
    """Log unified error message (via logger, respects --quiet)."""
    _clog().error("gofmt-import: %s", msg)


def _clog() -> Any:
    from gofmt_import.orchestration.logging import get_logger

    return get_logger("cli")


def _engine_from_args(args: Any) -> Tuple[Optional[Any], Optional[Any]]:
    """Resolve config and build the rule engine. Returns (config, engine) or (None, None) after reporting."""
    from gofmt_import.config import load_config, split_rules
    from gofmt_import.rules import build_rule_engine

    raw_rules = getattr(args, "rules", None)
    try:
        config = load_config(
            Path(getattr(args, "config_root", None) or "."),
            rules=split_rules(raw_rules) if raw_rules is not None else None,
            local_root=getattr(args, "local_root", None),
            ecosystem=getattr(args, "ecosystem", None),
            sort=getattr(args, "sort", None),
        )
        engine = build_rule_engine(config)
    except GofmtImportError as e:
        _err(str(e))
        return None, None
    return config, engine


def handle_help(parser: Any) -> int:
    """Print command overview and detailed argparse help."""
    print("gofmt-import — regroup and sort Go import blocks")
    print()
    print("Commands:")
    print("  format [paths]    regroup imports (-l list, -d diff, -w write; stdin when no paths)")
    print("  rules             show the effective rules in priority order")
    print()
    print("Grouping:")
    print("  default           standard | external | ecosystem (--ecosystem) | local (--local or go.mod)")
    print("  -r RULES          standard | each pattern in order | everything else")
    print()
    parser.print_help()
    return 0


def handle_format(args: Any) -> int:
    """Regroup import blocks; exit 2 if configuration or any file failed."""
    from gofmt_import.api import STDIN_NAME, process_paths, process_stream

    config, engine = _engine_from_args(args)
    if engine is None:
        return 2
    list_only = getattr(args, "list_only", False)
    diff = getattr(args, "diff", False)
    write = getattr(args, "write", False)
    paths = list(getattr(args, "paths", None) or [])
    if not paths:
        if write:
            _err("cannot use -w with standard input")
            return 2
        try:
            process_stream(sys.stdin, engine, sort=config.sort, list_only=list_only, diff=diff, out=sys.stdout)
        except GoSyntaxError as e:
            _err(str(e))
            return 2
        except (GofmtImportError, OSError, UnicodeDecodeError) as e:
            _err(f"{STDIN_NAME}: {e}")
            return 2
        return 0
    return process_paths(paths, engine, sort=config.sort, list_only=list_only, write=write, diff=diff, out=sys.stdout)


def handle_rules(args: Any) -> int:
    """Print the rule list the format command would use."""
    config, engine = _engine_from_args(args)
    if engine is None:
        return 2
    print(f"mode: {engine.policy} (sort within groups: {'on' if config.sort else 'off'})")
    if config.mode == "buckets":
        print(f"local root: {config.local_root or '-'}")
        print(f"ecosystem: {config.ecosystem or '-'}")
    for rank, label in enumerate(engine.labels, start=1):
        print(f"  {rank}. {label}")
    return 0
