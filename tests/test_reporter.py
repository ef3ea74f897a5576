"""Tests for styleguard.reporter module."""

from __future__ import annotations

import json
from pathlib import Path

from _pytest.capture import CaptureFixture

from styleguard.registry import default_registry
from styleguard.reporter import (
    EXIT_FAULT,
    EXIT_OK,
    EXIT_VIOLATIONS,
    FileReport,
    exit_code,
    format_fault,
    format_json,
    format_text,
    format_violation,
    report,
    summarize,
)
from styleguard.rules import ToolingFault, Violation
from styleguard.runner import lint_source

NAMES = ("Strings", "Hashes")


def _violation(path: str, line: int, rule: str = "Strings") -> Violation:
    return Violation(
        file=Path(path),
        line_no=line,
        col=5,
        rule=rule,
        message="Prefer double-quoted strings",
        severity="error",
        line="x = 'a'",
    )


def _clean(path: str = "ok.rb") -> FileReport:
    return FileReport(path=Path(path), violations=[])


class TestExitCode:
    """Tests for exit_code."""

    def test_no_violations_is_zero(self) -> None:
        """Test empty results exit 0."""
        assert exit_code([]) == EXIT_OK
        assert exit_code([_clean(), _clean("b.rb")]) == EXIT_OK

    def test_violations_are_nonzero(self) -> None:
        """Test style violations exit 1."""
        rep = FileReport(path=Path("a.rb"), violations=[_violation("a.rb", 1)])
        assert exit_code([_clean(), rep]) == EXIT_VIOLATIONS

    def test_fault_wins(self) -> None:
        """Test a tooling fault exits 2 even with violations elsewhere."""
        bad = FileReport(
            path=Path("bad.rb"),
            violations=[],
            fault=ToolingFault(file=Path("bad.rb"), kind="parse-error", message="x"),
        )
        rep = FileReport(path=Path("a.rb"), violations=[_violation("a.rb", 1)])
        assert exit_code([rep, bad]) == EXIT_FAULT


class TestFormatting:
    """Tests for line formatting."""

    def test_format_violation(self) -> None:
        """Test the one-line violation format."""
        line = format_violation(_violation("lib/a.rb", 3))
        assert line == "lib/a.rb:3:5: Strings [error] Prefer double-quoted strings"

    def test_format_fault(self) -> None:
        """Test fault lines carry kind and message."""
        f = ToolingFault(file=Path("b.rb"), kind="parse-error", message="syntax error", line_no=4)
        assert format_fault(f) == "b.rb:4: parse-error: syntax error"
        g = ToolingFault(file=Path("c.rb"), kind="read-error", message="gone")
        assert format_fault(g) == "c.rb: read-error: gone"

    def test_every_violation_is_one_line(self) -> None:
        """Test no violation is dropped or merged."""
        reports = [
            FileReport(
                path=Path("a.rb"), violations=[_violation("a.rb", 1), _violation("a.rb", 1)]
            ),
            FileReport(path=Path("b.rb"), violations=[_violation("b.rb", 2, "Hashes")]),
        ]
        lines = format_text(reports)
        assert len(lines) == 3
        assert lines[2].startswith("b.rb:2:5: Hashes")

    def test_multi_line_source_stays_one_line_per_violation(self) -> None:
        """Test a violation on a multi-line key still formats as one line."""
        rep = lint_source('value = table["a\nb"]\n', default_registry(), Path("k.rb"))
        lines = format_text([rep])
        assert len(rep.violations) == 1
        assert lines == ['k.rb:1:9: Hashes [error] Use fetch("a b") to read hash elements']

    def test_summarize(self) -> None:
        """Test per-rule counts keep rule order and include zero counts."""
        reports = [
            FileReport(path=Path("a.rb"), violations=[_violation("a.rb", 1, "Hashes")]),
            FileReport(path=Path("b.rb"), violations=[_violation("b.rb", 1, "Hashes")]),
        ]
        summary = summarize(reports, NAMES)
        assert [(r.name, r.violations) for r in summary] == [("Strings", 0), ("Hashes", 2)]

    def test_format_json(self) -> None:
        """Test the JSON document."""
        fault = ToolingFault(file=Path("bad.rb"), kind="parse-error", message="oops", line_no=2)
        reports = [
            FileReport(path=Path("a.rb"), violations=[_violation("a.rb", 1)]),
            FileReport(path=Path("bad.rb"), violations=[], fault=fault),
        ]
        data = json.loads(format_json(reports, NAMES))
        assert data["files_checked"] == 2
        assert data["violations"][0]["rule"] == "Strings"
        assert data["violations"][0]["line"] == 1
        assert data["faults"] == [
            {"file": "bad.rb", "kind": "parse-error", "line": 2, "message": "oops"}
        ]
        assert data["summary"] == {"Strings": 1, "Hashes": 0}
        assert data["exit_code"] == EXIT_FAULT


class TestReport:
    """Tests for report output."""

    def test_clean_run(self, capsys: CaptureFixture[str]) -> None:
        """Test a clean run prints the pass message and returns 0."""
        code = report([_clean()], NAMES)
        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert "Style checks passed: 1 file(s), no violations found." in out

    def test_violations_and_faults(self, capsys: CaptureFixture[str]) -> None:
        """Test violations go to stdout and faults to stderr."""
        fault = ToolingFault(file=Path("bad.rb"), kind="parse-error", message="oops", line_no=2)
        reports = [
            FileReport(path=Path("a.rb"), violations=[_violation("a.rb", 1)]),
            FileReport(path=Path("bad.rb"), violations=[], fault=fault),
        ]
        code = report(reports, NAMES, show_summary=False)
        captured = capsys.readouterr()
        assert code == EXIT_FAULT
        assert "a.rb:1:5: Strings [error] Prefer double-quoted strings" in captured.out.splitlines()
        assert "bad.rb:2: parse-error: oops" in captured.err.splitlines()
        assert "Style rule summary" not in captured.out

    def test_json_output(self, capsys: CaptureFixture[str]) -> None:
        """Test JSON output is a single parseable document."""
        code = report([_clean()], NAMES, output_format="json")
        data = json.loads(capsys.readouterr().out)
        assert code == EXIT_OK
        assert data["violations"] == []
