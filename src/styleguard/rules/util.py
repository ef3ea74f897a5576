"""Utility functions for style rules."""

from __future__ import annotations

from abc import ABC, abstractmethod

from styleguard.rules import NodeContext, Severity, Violation
from styleguard.syntax import SyntaxNode

_CALL_OPERATORS = frozenset({".", "&.", "::"})


def get_line(lines: tuple[str, ...], line_no: int) -> str:
    """Get source line content by line number (1-indexed)."""
    idx = line_no - 1
    if 0 <= idx < len(lines):
        return lines[idx].strip()
    return ""


def call_target(node: SyntaxNode) -> tuple[str, str] | None:
    """Return (receiver text, method name) for a ``recv.meth`` call node.

    Calls without an explicit receiver return None.
    """
    if node.kind != "call":
        return None
    receiver: SyntaxNode | None = None
    seen_operator = False
    for child in node.children:
        if not child.named:
            if child.kind in _CALL_OPERATORS and receiver is not None:
                seen_operator = True
            continue
        if receiver is None:
            receiver = child
        elif seen_operator:
            return receiver.text, child.text
    return None


def assignment_sides(node: SyntaxNode) -> tuple[SyntaxNode, SyntaxNode] | None:
    """Return (left, right) for an assignment or operator assignment."""
    left = node.child_by_field("left")
    right = node.child_by_field("right")
    if left is not None and right is not None:
        return left, right
    named = node.named_children
    if len(named) < 2:
        return None
    return named[0], named[-1]


def is_assignment_target(node: SyntaxNode, ctx: NodeContext) -> bool:
    """Whether ``node`` is written to rather than read."""
    parent = ctx.parent
    if parent is None:
        return False
    if parent.kind == "left_assignment_list":
        return True
    if parent.kind not in ("assignment", "operator_assignment"):
        return False
    if node.field == "left":
        return True
    return bool(parent.children) and parent.children[0] is node


class StyleRule(ABC):
    """Abstract base for the concrete rules.

    Subclasses set ``name``, ``description``, ``kinds`` and
    ``default_severity`` and implement ``check``, which makes them satisfy
    the ``Rule`` protocol.
    """

    name = ""
    description = ""
    kinds: frozenset[str] = frozenset()
    default_severity: Severity = "error"

    def __init__(self, severity: Severity | None = None) -> None:
        self.severity: Severity = severity if severity is not None else self.default_severity

    def violation(self, node: SyntaxNode, ctx: NodeContext, message: str) -> Violation:
        """Build a violation located at the start of ``node``."""
        return Violation(
            file=ctx.path,
            line_no=node.start.line,
            col=node.start.column,
            rule=self.name,
            message=message,
            severity=self.severity,
            line=get_line(ctx.lines, node.start.line),
        )

    @abstractmethod
    def check(self, node: SyntaxNode, ctx: NodeContext) -> list[Violation]:
        """Return the violations found at ``node``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(severity={self.severity!r})"


__all__ = [
    "StyleRule",
    "assignment_sides",
    "call_target",
    "get_line",
    "is_assignment_target",
]
