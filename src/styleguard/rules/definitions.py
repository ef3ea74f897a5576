"""Rules for blocks, methods, classes, constants and inheritance."""

from __future__ import annotations

import re

from styleguard.rules import NodeContext, Violation
from styleguard.rules.util import StyleRule, assignment_sides, call_target
from styleguard.syntax import SyntaxNode

_SCREAMING_SNAKE = re.compile(r"[A-Z][A-Z0-9_]*")

# Receiver/method pairs that build a class or module; the result is named
# like a class, not like a value constant.
_CLASS_FACTORIES = frozenset(
    {
        ("Class", "new"),
        ("Module", "new"),
        ("Struct", "new"),
        ("Data", "define"),
    }
)

_STRUCT_FACTORIES = frozenset({("Struct", "new"), ("Data", "define")})

_CORE_COLLECTIONS = frozenset({"Array", "Hash", "String"})

_MUTABLE_LITERALS = frozenset(
    {"array", "string_array", "symbol_array", "hash", "string", "chained_string"}
)

_FROZEN_STRING_MAGIC = re.compile(r"#\s*frozen_string_literal:\s*true", re.IGNORECASE)


class BlocksRule(StyleRule):
    """Braces for single-line blocks, ``do...end`` for multi-line blocks."""

    name = "Blocks"
    description = "Use {...} for single-line blocks and do...end for multi-line blocks."
    kinds = frozenset({"block", "do_block"})

    def check(self, node: SyntaxNode, ctx: NodeContext) -> list[Violation]:
        if node.kind == "block" and not node.is_single_line:
            return [self.violation(node, ctx, "Use do...end for multi-line blocks")]
        if node.kind == "do_block" and node.is_single_line:
            return [self.violation(node, ctx, "Use {...} for single-line blocks")]
        return []


class MethodsRule(StyleRule):
    """Parenthesize method parameters; omit empty parentheses."""

    name = "Methods"
    description = (
        "Use parentheses around method parameters and omit them when there are none."
    )
    kinds = frozenset({"method", "singleton_method"})

    def check(self, node: SyntaxNode, ctx: NodeContext) -> list[Violation]:
        params = node.child_by_field("parameters")
        if params is None:
            params = node.first_child_of_kind("method_parameters")
        if params is None:
            return []
        parenthesized = params.text.startswith("(")
        if parenthesized and not params.named_children:
            return [
                self.violation(
                    params, ctx, "Omit the parentheses when the method takes no parameters"
                )
            ]
        if not parenthesized:
            return [self.violation(params, ctx, "Use parentheses around method parameters")]
        return []


class ClassesRule(StyleRule):
    """Define classes with the ``class`` keyword and class methods with ``def self.``."""

    name = "Classes"
    description = (
        "Define classes with the class keyword and class methods with def self.name."
    )
    kinds = frozenset({"singleton_class", "assignment"})

    def check(self, node: SyntaxNode, ctx: NodeContext) -> list[Violation]:
        if node.kind == "singleton_class":
            target = node.named_children[0] if node.named_children else None
            if target is not None and target.kind == "self":
                return [
                    self.violation(
                        node, ctx, "Define class methods with def self.name, not class << self"
                    )
                ]
            return []

        sides = assignment_sides(node)
        if sides is None:
            return []
        left, right = sides
        if left.kind not in ("constant", "scope_resolution"):
            return []
        if call_target(right) == ("Class", "new"):
            return [self.violation(node, ctx, "Use the class keyword instead of Class.new")]
        return []


class ConstantsRule(StyleRule):
    """Name constants in SCREAMING_SNAKE_CASE and freeze mutable values.

    Constants bound to a class or module factory (``Class.new``,
    ``Struct.new``) are class names and keep CamelCase. String values are
    already frozen when the file carries the ``frozen_string_literal``
    magic comment.
    """

    name = "Constants"
    description = "Use SCREAMING_SNAKE_CASE for constants and freeze mutable constant values."
    kinds = frozenset({"assignment", "operator_assignment"})

    def check(self, node: SyntaxNode, ctx: NodeContext) -> list[Violation]:
        sides = assignment_sides(node)
        if sides is None:
            return []
        left, right = sides
        name_node = self._constant_name(left)
        if name_node is None:
            return []

        out: list[Violation] = []
        if call_target(right) not in _CLASS_FACTORIES and not _SCREAMING_SNAKE.fullmatch(
            name_node.text
        ):
            out.append(
                self.violation(
                    name_node,
                    ctx,
                    f"Use SCREAMING_SNAKE_CASE for constant {name_node.text}",
                )
            )
        if right.kind in _MUTABLE_LITERALS and not self._strings_frozen(right, ctx):
            out.append(self.violation(right, ctx, f"Freeze the mutable value of {name_node.text}"))
        return out

    def _constant_name(self, left: SyntaxNode) -> SyntaxNode | None:
        if left.kind == "constant":
            return left
        if left.kind == "scope_resolution":
            name = left.child_by_field("name")
            if name is None and left.named_children:
                name = left.named_children[-1]
            if name is not None and name.kind == "constant":
                return name
        return None

    def _strings_frozen(self, value: SyntaxNode, ctx: NodeContext) -> bool:
        if value.kind not in ("string", "chained_string"):
            return False
        # Magic comments live in the file header.
        for line in ctx.lines[:3]:
            if _FROZEN_STRING_MAGIC.search(line):
                return True
        return False


class InheritanceRule(StyleRule):
    """Inherit only from ordinary classes.

    Struct.new/Data.define results belong in a constant, and core
    collection classes are wrapped rather than subclassed.
    """

    name = "Inheritance"
    description = (
        "Do not inherit from Struct.new or Data.define, or from core collection classes."
    )
    kinds = frozenset({"class"})

    def check(self, node: SyntaxNode, ctx: NodeContext) -> list[Violation]:
        superclass = node.first_child_of_kind("superclass")
        if superclass is None or not superclass.named_children:
            return []
        parent = superclass.named_children[0]

        target = call_target(parent)
        if target is not None and target in _STRUCT_FACTORIES:
            return [
                self.violation(
                    superclass,
                    ctx,
                    f"Assign {target[0]}.{target[1]} to a constant instead of inheriting from it",
                )
            ]
        core = self._core_collection(parent)
        if core is not None:
            return [
                self.violation(
                    superclass,
                    ctx,
                    f"Wrap {core} instead of inheriting from it",
                )
            ]
        return []

    def _core_collection(self, parent: SyntaxNode) -> str | None:
        """Return the core class name for ``Array`` or ``::Array``, else None.

        A scoped name such as ``Legacy::Array`` is a different class.
        """
        if parent.kind == "scope_resolution":
            if parent.child_by_field("scope") is not None or len(parent.named_children) != 1:
                return None
            parent = parent.named_children[0]
        if parent.kind == "constant" and parent.text in _CORE_COLLECTIONS:
            return parent.text
        return None


__all__ = ["BlocksRule", "ClassesRule", "ConstantsRule", "InheritanceRule", "MethodsRule"]
