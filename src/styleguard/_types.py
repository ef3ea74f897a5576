"""Internal type aliases and protocols for strict typing.

These types enable strict typing of the tree-sitter bindings without Any,
object, or cast.
"""

from __future__ import annotations

from typing import Protocol

# Recursive type for JSON data - only for internal _load*/_decode* functions
UnknownJson = dict[str, "UnknownJson"] | list["UnknownJson"] | str | int | float | bool | None


class _TSNode(Protocol):
    """Protocol for the subset of tree_sitter.Node used by the adapter."""

    @property
    def type(self) -> str: ...

    @property
    def is_named(self) -> bool: ...

    @property
    def is_missing(self) -> bool: ...

    @property
    def has_error(self) -> bool: ...

    @property
    def start_byte(self) -> int: ...

    @property
    def end_byte(self) -> int: ...

    @property
    def start_point(self) -> tuple[int, int]: ...

    @property
    def end_point(self) -> tuple[int, int]: ...


class _TSCursor(Protocol):
    """Protocol for tree_sitter.TreeCursor."""

    @property
    def node(self) -> _TSNode: ...

    @property
    def field_name(self) -> str | None: ...

    def goto_first_child(self) -> bool: ...

    def goto_next_sibling(self) -> bool: ...

    def goto_parent(self) -> bool: ...


class _TSTree(Protocol):
    """Protocol for tree_sitter.Tree."""

    @property
    def root_node(self) -> _TSNode: ...

    def walk(self) -> _TSCursor: ...


class _TSParser(Protocol):
    """Protocol for tree_sitter.Parser bound to a language."""

    def parse(self, source: bytes) -> _TSTree: ...


def _get_ruby_parser() -> _TSParser:
    """Create a tree-sitter parser for Ruby via dynamic import.

    A fresh parser is returned on every call; parsers are not shared
    between worker threads.
    """
    ts_mod = __import__("tree_sitter")
    ruby_mod = __import__("tree_sitter_ruby")
    language = ts_mod.Language(ruby_mod.language())
    parser: _TSParser = ts_mod.Parser(language)
    return parser


__all__ = ["UnknownJson", "_TSCursor", "_TSNode", "_TSParser", "_TSTree", "_get_ruby_parser"]
