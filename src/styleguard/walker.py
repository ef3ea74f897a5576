"""Single-pass syntax tree traversal that applies the registered rules."""

from __future__ import annotations

import re
from collections.abc import Sequence
from pathlib import Path
from typing import NamedTuple

from styleguard.registry import RuleRegistry
from styleguard.rules import NodeContext, ToolingFault, Violation
from styleguard.syntax import SyntaxNode

ALL_RULES = "all"

_DIRECTIVE = re.compile(r"#\s*styleguard:\s*disable\s+([A-Za-z][\w\s,]*)")


class WalkResult(NamedTuple):
    """Violations found in one tree, or the fault that stopped the walk."""

    violations: list[Violation]
    fault: ToolingFault | None = None


def _parse_directive(comment: SyntaxNode, lines: Sequence[str]) -> tuple[int, set[str]] | None:
    """Return (target line, rule names) for a disable comment.

    A comment sharing its line with code applies to that line; a comment on
    a line of its own applies to the next line.
    """
    match = _DIRECTIVE.search(comment.text)
    if match is None:
        return None
    names = {n for n in re.split(r"[\s,]+", match.group(1)) if n}
    idx = comment.start.line - 1
    prefix = lines[idx][: comment.start.column - 1] if 0 <= idx < len(lines) else ""
    target = comment.start.line + 1 if prefix.strip() == "" else comment.start.line
    return target, names


def _is_suppressed(v: Violation, suppressed: dict[int, set[str]]) -> bool:
    names = suppressed.get(v.line_no)
    if not names:
        return False
    return ALL_RULES in names or v.rule in names


def walk(
    root: SyntaxNode,
    registry: RuleRegistry,
    path: Path,
    lines: Sequence[str],
) -> WalkResult:
    """Apply every registered rule to every node of ``root``.

    Nodes are visited once each, pre-order, left to right. At each node the
    rules registered for its kind run in registry order. The collected
    violations are then stable-sorted by (line, column), so violations at
    the same location keep traversal order.

    A rule that raises stops the walk: the result carries a ``rule-error``
    fault and no violations.

    Args:
        root: Tree to traverse.
        registry: Rules to apply.
        path: File the tree came from, recorded on each violation.
        lines: Source lines, used for snippets and suppression comments.

    Returns:
        WalkResult with sorted violations, or a fault.
    """
    line_tuple = tuple(lines)
    violations: list[Violation] = []
    suppressed: dict[int, set[str]] = {}

    stack: list[tuple[SyntaxNode, tuple[SyntaxNode, ...]]] = [(root, ())]
    while stack:
        node, ancestors = stack.pop()

        if node.kind == "comment":
            directive = _parse_directive(node, line_tuple)
            if directive is not None:
                target, names = directive
                suppressed.setdefault(target, set()).update(names)

        rules = registry.rules_for(node.kind)
        if rules:
            ctx = NodeContext(path=path, ancestors=ancestors, lines=line_tuple)
            for rule in rules:
                try:
                    found = rule.check(node, ctx)
                except Exception as exc:
                    fault = ToolingFault(
                        file=path,
                        kind="rule-error",
                        message=(
                            f"rule {rule.name} failed on {node.kind} at "
                            f"{node.start.line}:{node.start.column}: "
                            f"{type(exc).__name__}: {exc}"
                        ),
                        line_no=node.start.line,
                    )
                    return WalkResult(violations=[], fault=fault)
                violations.extend(found)

        if node.children:
            child_ancestors = (*ancestors, node)
            for child in reversed(node.children):
                stack.append((child, child_ancestors))

    kept = [v for v in violations if not _is_suppressed(v, suppressed)]
    kept.sort(key=lambda v: (v.line_no, v.col))
    return WalkResult(violations=kept)


__all__ = ["ALL_RULES", "WalkResult", "walk"]
