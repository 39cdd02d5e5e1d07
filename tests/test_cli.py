"""Tests for the gofmt-import CLI (parser, dispatch, handlers, .env loading)."""

import io
import os
import sys
from pathlib import Path

import pytest

from gofmt_import_cli import _load_environment, main

UNSORTED = 'package p\n\nimport (\n\t"github.com/b"\n\t"os"\n\t"github.com/a"\n)\n'
SORTED = 'package p\n\nimport (\n\t"os"\n\n\t"github.com/a"\n\t"github.com/b"\n)\n'


@pytest.fixture
def project(tmp_path: Path, monkeypatch) -> Path:
    """Empty project dir as cwd, with no GOFMT_IMPORT_* variables exported."""
    for key in list(os.environ):
        if key.startswith("GOFMT_IMPORT_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_format_prints_result(project: Path, capsys) -> None:
    target = project / "a.go"
    target.write_text(UNSORTED, encoding="utf-8")
    assert main(["format", str(target)]) == 0
    assert capsys.readouterr().out == SORTED
    assert target.read_text(encoding="utf-8") == UNSORTED


def test_format_write(project: Path, capsys) -> None:
    target = project / "a.go"
    target.write_text(UNSORTED, encoding="utf-8")
    assert main(["format", "-w", str(project)]) == 0
    assert target.read_text(encoding="utf-8") == SORTED
    assert capsys.readouterr().out == ""


def test_format_list(project: Path, capsys) -> None:
    target = project / "a.go"
    target.write_text(UNSORTED, encoding="utf-8")
    assert main(["format", "-l", str(target)]) == 0
    assert capsys.readouterr().out.strip() == str(target)


def test_bad_rule_touches_nothing(project: Path, capsys) -> None:
    """An invalid pattern fails the run before any file is read."""
    target = project / "a.go"
    target.write_text(UNSORTED, encoding="utf-8")
    assert main(["format", "-w", "-r", '^"github.*"$ ([', str(target)]) == 2
    assert target.read_text(encoding="utf-8") == UNSORTED
    assert capsys.readouterr().out == ""


def test_rules_flag_switches_to_patterns(project: Path, capsys) -> None:
    target = project / "a.go"
    target.write_text('package p\n\nimport (\n\t"k8s.io/x"\n\t"github.com/a"\n\t"os"\n)\n', encoding="utf-8")
    assert main(["format", "-r", '^"github.*"$ ^"k8s.*"$', str(target)]) == 0
    assert capsys.readouterr().out == (
        'package p\n\nimport (\n\t"os"\n\n\t"github.com/a"\n\n\t"k8s.io/x"\n)\n'
    )


def test_no_sort(project: Path, capsys) -> None:
    target = project / "a.go"
    target.write_text(UNSORTED, encoding="utf-8")
    assert main(["format", "--no-sort", str(target)]) == 0
    assert capsys.readouterr().out == 'package p\n\nimport (\n\t"os"\n\n\t"github.com/b"\n\t"github.com/a"\n)\n'


def test_write_with_stdin_rejected(project: Path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO(UNSORTED))
    assert main(["format", "-w"]) == 2
    assert capsys.readouterr().out == ""


def test_format_stdin(project: Path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO(UNSORTED))
    assert main(["format"]) == 0
    assert capsys.readouterr().out == SORTED


def test_rules_command(project: Path, capsys) -> None:
    (project / "go.mod").write_text("module example.com/me/project\n", encoding="utf-8")
    assert main(["rules", "--ecosystem", "k8s.io"]) == 0
    out = capsys.readouterr().out
    assert "mode: buckets (sort within groups: on)" in out
    assert "local root: example.com/me/project" in out
    assert "ecosystem: k8s.io" in out
    assert "1. standard" in out
    assert "4. local" in out


def test_help_and_no_command(project: Path, capsys) -> None:
    assert main(["help"]) == 0
    assert "format" in capsys.readouterr().out
    assert main([]) == 0


def test_version(project: Path, capsys) -> None:
    with pytest.raises(SystemExit) as exc:
        main(["--version"])
    assert exc.value.code == 0
    assert "gofmt-import" in capsys.readouterr().out


def test_load_environment_keeps_exported_values(tmp_path: Path, monkeypatch) -> None:
    """.env fills missing GOFMT_IMPORT_* settings; exported ones win."""
    env_file = tmp_path / ".env"
    env_file.write_text("GOFMT_IMPORT_ECOSYSTEM=k8s.io\nGOFMT_IMPORT_LOCAL=example.com/dotenv\n", encoding="utf-8")
    monkeypatch.setenv("GOFMT_IMPORT_LOCAL", "example.com/shell")
    # recorded so monkeypatch removes what load_dotenv sets
    monkeypatch.setenv("GOFMT_IMPORT_ECOSYSTEM", "")
    monkeypatch.delenv("GOFMT_IMPORT_ECOSYSTEM")

    _load_environment(env_file)

    assert os.environ["GOFMT_IMPORT_ECOSYSTEM"] == "k8s.io"
    assert os.environ["GOFMT_IMPORT_LOCAL"] == "example.com/shell"


class _UndecodableStdin:
    def read(self) -> str:
        raise UnicodeDecodeError("utf-8", b"\xff", 0, 1, "invalid start byte")


def test_undecodable_stdin_exits_2(project: Path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "stdin", _UndecodableStdin())
    assert main(["format"]) == 2
    assert capsys.readouterr().out == ""


def test_stdin_syntax_error_exits_2(project: Path, monkeypatch, capsys) -> None:
    monkeypatch.setattr(sys, "stdin", io.StringIO("import (\n"))
    assert main(["format"]) == 2
    assert capsys.readouterr().out == ""


def test_all_errors_flag_not_accepted(project: Path) -> None:
    """The parser stops at the first error, so there is no -e switch."""
    with pytest.raises(SystemExit) as exc:
        main(["format", "-e"])
    assert exc.value.code == 2
