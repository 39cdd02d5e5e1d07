"""
File-level API: regroup import blocks of Go sources, optionally list, diff or write.

The rule engine is built by the caller once (so a bad pattern is reported
before any file is touched) and shared read-only by every file.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, List, Optional, TextIO

from gofmt_import.errors import GofmtImportError, GoSyntaxError
from gofmt_import.orchestration.logging import get_logger
from gofmt_import.refactor.block_transformer import transform_file
from gofmt_import.rules.engine import RuleEngine
from gofmt_import.source.parser import parse_source
from gofmt_import.source.renderer import render
from gofmt_import.storage.backup import write_with_backup

from .diff_api import unified_diff

STDIN_NAME = "<standard input>"
_SKIP_DIRS = {"vendor", "testdata", "node_modules"}


def format_source(source: str, engine: RuleEngine, *, sort: bool = True, filename: str = "<input>") -> str:
    """Return source with every qualifying import block regrouped."""
    parsed = parse_source(source, filename)
    transform_file(parsed, engine, sort=sort)
    return render(parsed)


def is_go_file(path: Path) -> bool:
    return path.is_file() and not path.name.startswith(".") and path.suffix == ".go"


def scan_go_files(root: Path) -> List[Path]:
    """All .go files under root, skipping hidden entries and vendor/testdata trees, sorted."""
    root = Path(root)
    files: List[Path] = []
    for p in root.rglob("*.go"):
        rel_parts = p.relative_to(root).parts
        if any(part.startswith(".") for part in rel_parts):
            continue
        if any(part in _SKIP_DIRS for part in rel_parts[:-1]):
            continue
        if is_go_file(p):
            files.append(p)
    return sorted(files)


def process_file(
    path: Path,
    engine: RuleEngine,
    *,
    sort: bool = True,
    list_only: bool = False,
    write: bool = False,
    diff: bool = False,
    out: Optional[TextIO] = None,
) -> bool:
    """
    Regroup one file. Returns True if its content would change.

    list_only prints the file name, write rewrites it in place (with a
    temporary backup), diff prints a unified diff. With none of them set the
    formatted text is written to out.
    """
    out = out if out is not None else sys.stdout
    path = Path(path)
    src = path.read_bytes().decode("utf-8")
    res = format_source(src, engine, sort=sort, filename=str(path))
    changed = res != src
    if changed:
        if list_only:
            print(path, file=out)
        if write:
            write_with_backup(path, src, res)
            get_logger("api").info("gofmt-import: regrouped imports in %s", path)
        if diff:
            name = path.as_posix()
            out.write(f"diff -u {name}.orig {name}\n")
            out.write(unified_diff(src, res, name))
    if not (list_only or write or diff):
        out.write(res)
    return changed


def process_stream(
    stream: TextIO,
    engine: RuleEngine,
    *,
    sort: bool = True,
    list_only: bool = False,
    diff: bool = False,
    out: Optional[TextIO] = None,
) -> bool:
    """Regroup source read from a stream (standard input); never writes files."""
    out = out if out is not None else sys.stdout
    src = stream.read()
    res = format_source(src, engine, sort=sort, filename=STDIN_NAME)
    changed = res != src
    if changed and list_only:
        print(STDIN_NAME, file=out)
    if changed and diff:
        out.write(f"diff -u {STDIN_NAME}.orig {STDIN_NAME}\n")
        out.write(unified_diff(src, res, STDIN_NAME))
    if not (list_only or diff):
        out.write(res)
    return changed


def process_paths(
    paths: Iterable[Path],
    engine: RuleEngine,
    *,
    sort: bool = True,
    list_only: bool = False,
    write: bool = False,
    diff: bool = False,
    out: Optional[TextIO] = None,
) -> int:
    """
    Process files and directories (walked recursively for .go files).

    A failing file is reported and processing moves on; the return value is
    2 if anything failed, else 0.
    """
    log = get_logger("api")
    exit_code = 0
    for raw in paths:
        path = Path(raw)
        if not path.exists():
            log.error("gofmt-import: %s: no such file or directory", path)
            exit_code = 2
            continue
        targets = scan_go_files(path) if path.is_dir() else [path]
        for target in targets:
            try:
                process_file(target, engine, sort=sort, list_only=list_only, write=write, diff=diff, out=out)
            except FileNotFoundError:
                # removed while walking the tree
                continue
            except GoSyntaxError as e:
                log.error("gofmt-import: %s", e)
                exit_code = 2
            except (GofmtImportError, OSError, UnicodeDecodeError) as e:
                log.error("gofmt-import: %s: %s", target, e)
                exit_code = 2
    return exit_code
