"""Rich console wrapper for styled terminal output.

This module provides typed console functions for linter output.
All print statements in the codebase should use these functions instead.
"""

from __future__ import annotations

from typing import Protocol


class _RichConsole(Protocol):
    """Protocol for rich.console.Console interface."""

    def print(
        self,
        *objects: str,
        style: str | None = None,
        highlight: bool | None = None,
        markup: bool | None = None,
        emoji: bool | None = None,
        soft_wrap: bool | None = None,
    ) -> None:
        """Print styled output to console."""
        ...


def _get_console(*, stderr: bool = False) -> _RichConsole:
    """Get rich Console instance with strict typing."""
    rich_console_mod = __import__("rich.console", fromlist=["Console"])
    console_cls = rich_console_mod.Console
    console: _RichConsole = console_cls(stderr=stderr)
    return console


# Module-level console instances
_console: _RichConsole = _get_console()
_err_console: _RichConsole = _get_console(stderr=True)


# =============================================================================
# Style Constants
# =============================================================================

STYLE_HEADER = "bold cyan"
STYLE_RULE = "yellow"
STYLE_COUNT = "magenta"
STYLE_WARNING = "yellow"
STYLE_ERROR = "bold red"
STYLE_SUCCESS = "bold green"
STYLE_INFO = "cyan"


# =============================================================================
# Output Functions
# =============================================================================


def _emit_plain(console: _RichConsole, text: str) -> None:
    """Write text verbatim: no markup, no highlighting, no wrapping."""
    console.print(text, highlight=False, markup=False, emoji=False, soft_wrap=True)


def log_header(text: str) -> None:
    """Print a section header."""
    _console.print(f"\n{text}", style=STYLE_HEADER)


def log_info(text: str) -> None:
    """Print an informational message."""
    _console.print(text, style=STYLE_INFO, highlight=False, markup=False)


def log_line(text: str) -> None:
    """Print one line of report output exactly as given."""
    _emit_plain(_console, text)


def log_error_line(text: str) -> None:
    """Print one line of report output to stderr exactly as given."""
    _emit_plain(_err_console, text)


def log_rule_summary(name: str, violations: int) -> None:
    """Print the violation count for one rule."""
    _console.print(
        f"  [{STYLE_RULE}]{name}[/{STYLE_RULE}]: "
        f"[{STYLE_COUNT}]{violations}[/{STYLE_COUNT}] violations",
        highlight=False,
    )


def log_success(text: str) -> None:
    """Print a success message."""
    _console.print(text, style=STYLE_SUCCESS, highlight=False, markup=False)


def log_warning(text: str) -> None:
    """Print a warning message to stderr."""
    _err_console.print(text, style=STYLE_WARNING, highlight=False, markup=False)


def log_error(text: str) -> None:
    """Print an error message to stderr."""
    _err_console.print(text, style=STYLE_ERROR, highlight=False, markup=False)


__all__ = [
    "log_error",
    "log_error_line",
    "log_header",
    "log_info",
    "log_line",
    "log_rule_summary",
    "log_success",
    "log_warning",
]
