"""Style rules for Ruby source.

This module provides the rule protocol and the value types rules produce.
Concrete rules live in ``literals`` and ``definitions``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal, NamedTuple, Protocol

from styleguard.syntax import SyntaxNode

Severity = Literal["error", "warning", "info"]
SEVERITIES: tuple[Severity, ...] = ("error", "warning", "info")

FaultKind = Literal["read-error", "parse-error", "rule-error"]


class Violation(NamedTuple):
    """A single style violation."""

    file: Path
    line_no: int
    col: int
    rule: str
    message: str
    severity: Severity
    line: str


class ToolingFault(NamedTuple):
    """A failure of the tool itself while processing one file."""

    file: Path
    kind: FaultKind
    message: str
    line_no: int = 0


class RuleReport(NamedTuple):
    """Summary of violations for a rule."""

    name: str
    violations: int


class NodeContext(NamedTuple):
    """Where a node sits: its file, enclosing node chain and source lines."""

    path: Path
    ancestors: tuple[SyntaxNode, ...]
    lines: tuple[str, ...]

    @property
    def parent(self) -> SyntaxNode | None:
        return self.ancestors[-1] if self.ancestors else None


class Rule(Protocol):
    """Protocol for style rules.

    ``check`` must be pure: no mutation of the node, the context or the rule.
    """

    @property
    def name(self) -> str: ...

    @property
    def description(self) -> str: ...

    @property
    def kinds(self) -> frozenset[str]: ...

    @property
    def severity(self) -> Severity: ...

    def check(self, node: SyntaxNode, ctx: NodeContext) -> list[Violation]: ...


__all__ = [
    "SEVERITIES",
    "FaultKind",
    "NodeContext",
    "Rule",
    "RuleReport",
    "Severity",
    "ToolingFault",
    "Violation",
]
