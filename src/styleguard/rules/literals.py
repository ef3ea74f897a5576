"""Rules for literal values: strings, collections and hash access.

Violations:
- Strings: single-quoted literal that could be written with double quotes
- Collections: multi-element array or hash literal not laid out one element
  per line with a trailing comma
- Hashes: hash element read through ``[]`` instead of ``fetch``
"""

from __future__ import annotations

from styleguard.rules import NodeContext, Violation
from styleguard.rules.util import StyleRule, is_assignment_target
from styleguard.syntax import SyntaxNode

# Content that changes meaning, or needs escaping, inside double quotes.
_DOUBLE_QUOTE_HAZARDS = ('"', "\\", "#{", "#@", "#$")

_CLOSING_BRACKETS = frozenset({"]", "}"})

_HASH_KEY_KINDS = frozenset({"simple_symbol", "delimited_symbol", "string"})


def _single_quoted_content(text: str) -> str | None:
    """Return the content of a single-quoted literal, or None if not one."""
    if text.startswith("'") and text.endswith("'") and len(text) >= 2:
        return text[1:-1]
    if text.startswith("%q") and len(text) >= 4:
        return text[3:-1]
    return None


class StringsRule(StyleRule):
    """Prefer double-quoted string literals."""

    name = "Strings"
    description = "Prefer double-quoted strings unless the content needs single quotes."
    kinds = frozenset({"string"})

    def check(self, node: SyntaxNode, ctx: NodeContext) -> list[Violation]:
        content = _single_quoted_content(node.text)
        if content is None:
            return []
        if any(hazard in content for hazard in _DOUBLE_QUOTE_HAZARDS):
            return []
        return [self.violation(node, ctx, "Prefer double-quoted strings")]


class CollectionsRule(StyleRule):
    """Lay out multi-element array and hash literals one element per line.

    A literal with two or more elements must span several lines, give each
    element its own line, and end the last element with a comma.
    At most one violation is reported per literal.
    """

    name = "Collections"
    description = (
        "Write multi-element array and hash literals one element per line "
        "with a trailing comma."
    )
    kinds = frozenset({"array", "hash"})

    def check(self, node: SyntaxNode, ctx: NodeContext) -> list[Violation]:
        elements = node.named_children
        if len(elements) < 2:
            return []
        noun = "array" if node.kind == "array" else "hash"

        if node.is_single_line:
            return [
                self.violation(
                    node, ctx, f"Put each element of a multi-element {noun} on its own line"
                )
            ]

        for prev, cur in zip(elements, elements[1:]):
            if cur.start.line <= prev.end.line:
                return [
                    self.violation(
                        cur, ctx, f"Put each element of a multi-element {noun} on its own line"
                    )
                ]

        if not self._has_trailing_comma(node):
            return [
                self.violation(
                    elements[-1], ctx, f"Add a trailing comma after the last {noun} element"
                )
            ]
        return []

    def _has_trailing_comma(self, node: SyntaxNode) -> bool:
        tokens = [c for c in node.children if c.kind != "comment"]
        if tokens and not tokens[-1].named and tokens[-1].kind in _CLOSING_BRACKETS:
            tokens = tokens[:-1]
        return bool(tokens) and not tokens[-1].named and tokens[-1].kind == ","


class HashesRule(StyleRule):
    """Read hash elements with ``fetch`` rather than ``[]``.

    Only keyed reads are flagged: the single index must be a symbol or a
    string. Integer indexes are array access; writes through ``[]=`` are fine.
    """

    name = "Hashes"
    description = "Use Hash#fetch instead of [] to read hash elements."
    kinds = frozenset({"element_reference"})

    def check(self, node: SyntaxNode, ctx: NodeContext) -> list[Violation]:
        named = node.named_children
        if len(named) != 2:
            return []
        key = named[1]
        if key.kind not in _HASH_KEY_KINDS:
            return []
        if is_assignment_target(node, ctx):
            return []
        key_text = " ".join(key.text.split())
        return [self.violation(node, ctx, f"Use fetch({key_text}) to read hash elements")]


__all__ = ["CollectionsRule", "HashesRule", "StringsRule"]
