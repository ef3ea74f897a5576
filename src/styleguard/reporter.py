"""Violation reporting and exit status."""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path
from typing import Literal, NamedTuple, TypedDict

from styleguard._console import (
    log_error,
    log_error_line,
    log_header,
    log_line,
    log_rule_summary,
    log_success,
)
from styleguard.rules import RuleReport, ToolingFault, Violation

OutputFormat = Literal["text", "json"]

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_FAULT = 2


class FileReport(NamedTuple):
    """Outcome of linting one file: violations, or the fault that skipped it."""

    path: Path
    violations: list[Violation]
    fault: ToolingFault | None = None


class ViolationJson(TypedDict):
    """Schema for one violation in JSON output."""

    file: str
    line: int
    col: int
    rule: str
    severity: str
    message: str
    source: str


class FaultJson(TypedDict):
    """Schema for one tooling fault in JSON output."""

    file: str
    kind: str
    line: int
    message: str


class ReportJson(TypedDict):
    """Schema for the JSON report."""

    files_checked: int
    violations: list[ViolationJson]
    faults: list[FaultJson]
    summary: dict[str, int]
    exit_code: int


def all_violations(reports: Sequence[FileReport]) -> list[Violation]:
    """Concatenate violations in file order."""
    return [v for r in reports for v in r.violations]


def all_faults(reports: Sequence[FileReport]) -> list[ToolingFault]:
    return [r.fault for r in reports if r.fault is not None]


def exit_code(reports: Sequence[FileReport]) -> int:
    """Return 0 when clean, 1 for violations only, 2 if any tool fault occurred."""
    if all_faults(reports):
        return EXIT_FAULT
    if all_violations(reports):
        return EXIT_VIOLATIONS
    return EXIT_OK


def format_violation(v: Violation) -> str:
    return f"{v.file}:{v.line_no}:{v.col}: {v.rule} [{v.severity}] {v.message}"


def format_fault(f: ToolingFault) -> str:
    where = f"{f.file}:{f.line_no}" if f.line_no else str(f.file)
    return f"{where}: {f.kind}: {f.message}"


def summarize(reports: Sequence[FileReport], rule_names: Sequence[str]) -> list[RuleReport]:
    """Count violations per rule, in ``rule_names`` order."""
    counts: dict[str, int] = {name: 0 for name in rule_names}
    for v in all_violations(reports):
        counts[v.rule] = counts.get(v.rule, 0) + 1
    return [RuleReport(name=name, violations=n) for name, n in counts.items()]


def format_text(reports: Sequence[FileReport]) -> list[str]:
    """One line per violation, in file order then location order."""
    return [format_violation(v) for v in all_violations(reports)]


def format_json(reports: Sequence[FileReport], rule_names: Sequence[str]) -> str:
    """Render the whole run as a JSON document."""
    payload: ReportJson = {
        "files_checked": len(reports),
        "violations": [
            {
                "file": str(v.file),
                "line": v.line_no,
                "col": v.col,
                "rule": v.rule,
                "severity": v.severity,
                "message": v.message,
                "source": v.line,
            }
            for v in all_violations(reports)
        ],
        "faults": [
            {"file": str(f.file), "kind": f.kind, "line": f.line_no, "message": f.message}
            for f in all_faults(reports)
        ],
        "summary": {rep.name: rep.violations for rep in summarize(reports, rule_names)},
        "exit_code": exit_code(reports),
    }
    return json.dumps(payload, indent=2, sort_keys=True)


def report(
    reports: Sequence[FileReport],
    rule_names: Sequence[str],
    output_format: OutputFormat = "text",
    show_summary: bool = True,
) -> int:
    """Write the report for a run and return the process exit status."""
    code = exit_code(reports)
    if output_format == "json":
        log_line(format_json(reports, rule_names))
        return code

    for line in format_text(reports):
        log_line(line)
    faults = all_faults(reports)
    for fault in faults:
        log_error_line(format_fault(fault))

    if show_summary:
        log_header("Style rule summary:")
        for rep in summarize(reports, rule_names):
            log_rule_summary(rep.name, rep.violations)

    violations = all_violations(reports)
    if faults:
        log_error(f"{len(faults)} file(s) could not be checked.")
    if violations:
        files = len({v.file for v in violations})
        log_error(f"{len(violations)} violation(s) in {files} file(s).")
    elif not faults:
        log_success(f"Style checks passed: {len(reports)} file(s), no violations found.")
    return code


__all__ = [
    "EXIT_FAULT",
    "EXIT_OK",
    "EXIT_VIOLATIONS",
    "FileReport",
    "OutputFormat",
    "all_faults",
    "all_violations",
    "exit_code",
    "format_fault",
    "format_json",
    "format_text",
    "format_violation",
    "report",
    "summarize",
]
