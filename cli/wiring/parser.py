"""Parser wiring for the gofmt-import entry point."""

from __future__ import annotations

import argparse
from pathlib import Path


def build_parser(*, version: str) -> argparse.ArgumentParser:
    """Configure top-level CLI parser and subcommands."""
    parser = argparse.ArgumentParser(
        prog="gofmt-import",
        description="gofmt-import — regroup and sort Go import blocks",
        epilog="Commands: format | rules. Use gofmt-import help for an overview.",
    )
    parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {version}")
    subparsers = parser.add_subparsers(dest="command")

    format_parser = subparsers.add_parser("format", help="Regroup imports of files, directories or stdin")
    format_parser.add_argument("paths", nargs="*", type=Path, help="Go files or directories (default: stdin)")
    format_parser.add_argument("-l", dest="list_only", action="store_true", help="List files whose imports would change")
    format_parser.add_argument("-d", dest="diff", action="store_true", help="Display diffs instead of rewriting files")
    format_parser.add_argument("-w", dest="write", action="store_true", help="Write result to (source) file instead of stdout")
    _add_rule_options(format_parser)

    rules_parser = subparsers.add_parser("rules", help="Show the effective rules in priority order")
    _add_rule_options(rules_parser)

    subparsers.add_parser("help", help="Show gofmt-import command overview")

    return parser


def _add_rule_options(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "-r",
        "--rules",
        type=str,
        default=None,
        metavar="RULES",
        help="Order rules, space separated (e.g. '^\"github.*\"$ ^\"k8s.*\"$'); switches to pattern grouping",
    )
    p.add_argument("--local", dest="local_root", type=str, default=None, metavar="PREFIX", help="Local import path prefix (default: [tool.gofmt-import] local or go.mod module)")
    p.add_argument("--ecosystem", type=str, default=None, metavar="DOMAIN", help="Ecosystem domain grouped after external imports (e.g. k8s.io)")
    p.add_argument("--no-sort", dest="sort", action="store_false", default=None, help="Keep source order inside each group")
    p.add_argument("--config-root", type=Path, default=Path("."), metavar="DIR", help="Where to look for .gofmt-import.toml / pyproject.toml / go.mod (default: .)")
    p.add_argument("--quiet", "-q", action="store_true", help="Only report errors")
    p.add_argument("--verbose", "-v", action="store_true", help="Debug output (skipped blocks, config sources)")
