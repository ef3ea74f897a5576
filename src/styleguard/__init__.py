"""Style-rule linter for Ruby source code."""

from styleguard.registry import RuleRegistry, build_registry, default_registry
from styleguard.reporter import FileReport
from styleguard.rules import RuleReport, ToolingFault, Violation
from styleguard.runner import lint_file, lint_paths, lint_source
from styleguard.syntax import ParseError, SyntaxNode, parse_source

__all__ = [
    "FileReport",
    "ParseError",
    "RuleRegistry",
    "RuleReport",
    "SyntaxNode",
    "ToolingFault",
    "Violation",
    "build_registry",
    "default_registry",
    "lint_file",
    "lint_paths",
    "lint_source",
    "parse_source",
]
