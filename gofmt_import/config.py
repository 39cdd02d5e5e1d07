"""
Grouping configuration.

Resolution order (lowest to highest): project file -> go.mod module path
(local root only) -> environment -> explicit overrides (CLI flags).

Project file: `.gofmt-import.toml` (top-level keys) or `pyproject.toml`
under `[tool.gofmt-import]`:

    rules = ['^"github.*"$', '^"k8s.*"$']
    local = "example.com/me/project"
    ecosystem = "k8s.io"
    sort = true
"""

from __future__ import annotations

import os
import re
import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Iterable, Mapping, Optional, Tuple

from gofmt_import.errors import GofmtImportError
from gofmt_import.orchestration.logging import get_logger

CONFIG_FILE = ".gofmt-import.toml"
TOOL_KEY = "gofmt-import"

ENV_RULES = "GOFMT_IMPORT_RULES"
ENV_LOCAL = "GOFMT_IMPORT_LOCAL"
ENV_ECOSYSTEM = "GOFMT_IMPORT_ECOSYSTEM"
ENV_SORT = "GOFMT_IMPORT_SORT"

_MODULE_RE = re.compile(r"^\s*module\s+(\"[^\"]+\"|\S+)", re.MULTILINE)
_FALSE = {"0", "false", "no", "off"}
_TRUE = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class GroupingConfig:
    """Per-invocation configuration; passed explicitly, never stored globally."""

    patterns: Tuple[str, ...] = field(default_factory=tuple)
    local_root: Optional[str] = None
    ecosystem: Optional[str] = None
    sort: bool = True

    @property
    def mode(self) -> str:
        return "patterns" if self.patterns else "buckets"


def split_rules(raw: str) -> Tuple[str, ...]:
    """Split a whitespace-separated rule string ('^"github.*"$ ^"k8s.*"$'); empty items are dropped."""
    return tuple(raw.split())


def _parse_bool(raw: Any, source: str) -> bool:
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise GofmtImportError(f"{source}: expected a boolean, got {raw!r}")


def _coerce_rules(raw: Any, source: str) -> Tuple[str, ...]:
    if isinstance(raw, str):
        return split_rules(raw)
    if isinstance(raw, list) and all(isinstance(r, str) for r in raw):
        return tuple(raw)
    raise GofmtImportError(f"{source}: 'rules' must be a string or a list of strings")


def _load_toml(path: Path) -> dict:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise GofmtImportError(f"cannot read {path}: {e}") from e


def read_project_file(root: Path) -> Tuple[dict, Optional[Path]]:
    """Return (settings, file) from .gofmt-import.toml or pyproject [tool.gofmt-import]; ({}, None) if absent."""
    own = root / CONFIG_FILE
    if own.is_file():
        return _load_toml(own), own
    pyproject = root / "pyproject.toml"
    if pyproject.is_file():
        tool = _load_toml(pyproject).get("tool") or {}
        section = tool.get(TOOL_KEY)
        if isinstance(section, dict):
            return section, pyproject
    return {}, None


def read_go_module(root: Path) -> Optional[str]:
    """Module path declared in root/go.mod, if any."""
    go_mod = root / "go.mod"
    if not go_mod.is_file():
        return None
    try:
        text = go_mod.read_text(encoding="utf-8")
    except OSError:
        return None
    m = _MODULE_RE.search(text)
    if not m:
        return None
    return m.group(1).strip('"')


def _from_mapping(base: GroupingConfig, data: dict, source: str) -> GroupingConfig:
    cfg = base
    if "rules" in data:
        cfg = replace(cfg, patterns=_coerce_rules(data["rules"], source))
    if "local" in data:
        cfg = replace(cfg, local_root=str(data["local"]).strip() or None)
    if "ecosystem" in data:
        cfg = replace(cfg, ecosystem=str(data["ecosystem"]).strip() or None)
    if "sort" in data:
        cfg = replace(cfg, sort=_parse_bool(data["sort"], source))
    return cfg


def _from_environ(base: GroupingConfig, environ: Mapping[str, str]) -> GroupingConfig:
    data: dict = {}
    if environ.get(ENV_RULES):
        data["rules"] = environ[ENV_RULES]
    if environ.get(ENV_LOCAL):
        data["local"] = environ[ENV_LOCAL]
    if environ.get(ENV_ECOSYSTEM):
        data["ecosystem"] = environ[ENV_ECOSYSTEM]
    if environ.get(ENV_SORT):
        data["sort"] = environ[ENV_SORT]
    return _from_mapping(base, data, "environment")


def load_config(
    root: Path,
    *,
    rules: Optional[Iterable[str]] = None,
    local_root: Optional[str] = None,
    ecosystem: Optional[str] = None,
    sort: Optional[bool] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> GroupingConfig:
    """Resolve the configuration for a project root; keyword arguments are CLI overrides."""
    log = get_logger("config")
    root = Path(root)
    data, found = read_project_file(root)
    cfg = _from_mapping(GroupingConfig(), data, str(found) if found else "defaults")
    if found:
        log.debug("gofmt-import: config from %s", found)
    if cfg.local_root is None:
        module = read_go_module(root)
        if module:
            log.debug("gofmt-import: local root from go.mod: %s", module)
            cfg = replace(cfg, local_root=module)
    cfg = _from_environ(cfg, os.environ if environ is None else environ)
    if rules is not None:
        cfg = replace(cfg, patterns=tuple(rules))
    if local_root is not None:
        cfg = replace(cfg, local_root=local_root.strip() or None)
    if ecosystem is not None:
        cfg = replace(cfg, ecosystem=ecosystem.strip() or None)
    if sort is not None:
        cfg = replace(cfg, sort=sort)
    return cfg
