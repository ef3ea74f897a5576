"""Ruby syntax tree adapter.

Wraps the tree-sitter Ruby parser and converts its tree into immutable
SyntaxNode values. Rules and the walker only ever see SyntaxNode; nothing
outside this module touches tree-sitter objects.
"""

from __future__ import annotations

from pathlib import Path
from typing import NamedTuple

from styleguard._types import _get_ruby_parser, _TSCursor, _TSNode

ERROR_KIND = "ERROR"


class Position(NamedTuple):
    """A 1-based source position. Columns count characters."""

    line: int
    column: int


class SyntaxNode(NamedTuple):
    """Read-only syntax tree node.

    Anonymous tokens (brackets, commas, keywords) are kept as children with
    ``named=False`` and their literal text as ``kind``.
    """

    kind: str
    text: str
    start: Position
    end: Position
    field: str | None = None
    named: bool = True
    missing: bool = False
    children: tuple[SyntaxNode, ...] = ()

    @property
    def named_children(self) -> tuple[SyntaxNode, ...]:
        """Named children, excluding comments."""
        return tuple(c for c in self.children if c.named and c.kind != "comment")

    @property
    def is_single_line(self) -> bool:
        """Whether the node starts and ends on the same line."""
        return self.start.line == self.end.line

    def child_by_field(self, name: str) -> SyntaxNode | None:
        """Return the first child stored under grammar field ``name``."""
        for child in self.children:
            if child.field == name:
                return child
        return None

    def first_child_of_kind(self, kind: str) -> SyntaxNode | None:
        """Return the first direct child whose kind is ``kind``."""
        for child in self.children:
            if child.kind == kind:
                return child
        return None


class ParseError(Exception):
    """Raised when the source contains a syntax error."""

    def __init__(self, message: str, line: int, column: int) -> None:
        super().__init__(f"{message} at {line}:{column}")
        self.line = line
        self.column = column


def read_source(path: Path) -> str:
    """Read a source file as text.

    Uses utf-8-sig to handle optional BOM.

    Raises:
        RuntimeError: If the file cannot be read or decoded.
    """
    try:
        return path.read_text(encoding="utf-8-sig", errors="strict")
    except (OSError, UnicodeDecodeError) as exc:
        raise RuntimeError(f"failed to read {path}: {exc}") from exc


class _Converter:
    """Builds SyntaxNode trees from a tree-sitter cursor."""

    def __init__(self, source: bytes) -> None:
        self.source = source
        self.lines = source.split(b"\n")

    def _position(self, point: tuple[int, int]) -> Position:
        row, col = point[0], point[1]
        line_bytes = self.lines[row] if row < len(self.lines) else b""
        col_chars = len(line_bytes[:col].decode("utf-8", errors="replace"))
        return Position(line=row + 1, column=col_chars + 1)

    def convert(self, cursor: _TSCursor) -> SyntaxNode:
        """Convert the subtree under ``cursor`` without recursing.

        Each open frame holds a node whose children are still being built.
        """
        frames: list[tuple[_TSNode, str | None, list[SyntaxNode]]] = [
            (cursor.node, cursor.field_name, [])
        ]
        while True:
            if cursor.goto_first_child():
                frames.append((cursor.node, cursor.field_name, []))
                continue
            while True:
                ts_node, field, children = frames.pop()
                built = self._build(ts_node, field, children)
                if not frames:
                    return built
                frames[-1][2].append(built)
                if cursor.goto_next_sibling():
                    frames.append((cursor.node, cursor.field_name, []))
                    break
                cursor.goto_parent()

    def _build(
        self, ts_node: _TSNode, field: str | None, children: list[SyntaxNode]
    ) -> SyntaxNode:
        text = self.source[ts_node.start_byte : ts_node.end_byte].decode("utf-8", errors="replace")
        return SyntaxNode(
            kind=ts_node.type,
            text=text,
            start=self._position(ts_node.start_point),
            end=self._position(ts_node.end_point),
            field=field,
            named=ts_node.is_named,
            missing=ts_node.is_missing,
            children=tuple(children),
        )


def find_error(root: SyntaxNode) -> SyntaxNode | None:
    """Return the first ERROR or missing node in pre-order, if any."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.kind == ERROR_KIND or node.missing:
            return node
        stack.extend(reversed(node.children))
    return None


def parse_source(text: str) -> SyntaxNode:
    """Parse Ruby source into a SyntaxNode tree.

    Args:
        text: Ruby source code.

    Returns:
        Root node of the tree (kind ``program``).

    Raises:
        ParseError: If the source contains a syntax error.
    """
    source = text.encode("utf-8")
    tree = _get_ruby_parser().parse(source)
    root = _Converter(source).convert(tree.walk())
    bad = find_error(root)
    if bad is None:
        if tree.root_node.has_error:
            raise ParseError("syntax error", 1, 1)
        return root
    if bad.missing:
        raise ParseError(f"missing {bad.kind!r}", bad.start.line, bad.start.column)
    raise ParseError("syntax error", bad.start.line, bad.start.column)


__all__ = [
    "ERROR_KIND",
    "ParseError",
    "Position",
    "SyntaxNode",
    "find_error",
    "parse_source",
    "read_source",
]
