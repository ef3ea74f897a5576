"""Command-line entry point for the Ruby style linter."""

from __future__ import annotations

import argparse
from collections.abc import Sequence
from pathlib import Path
from typing import TypedDict

from styleguard._console import log_error, log_header, log_info
from styleguard.config import ConfigError, load_config
from styleguard.registry import RuleRegistry, build_registry
from styleguard.reporter import EXIT_FAULT, EXIT_OK, OutputFormat, report
from styleguard.runner import lint_paths


class ParsedArgs(TypedDict):
    """Parsed command-line arguments."""

    paths: list[str]
    config: str | None
    output_format: OutputFormat
    select: list[str] | None
    ignore: list[str] | None
    jobs: int | None
    list_rules: bool
    summary: bool


def _split_names(value: str) -> list[str]:
    """Split a comma-separated rule list."""
    return [name.strip() for name in value.split(",") if name.strip()]


def _str_list_or_none(value: list[str] | None, name: str) -> list[str] | None:
    """Validate an optional list-of-str argument."""
    if value is None:
        return None
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        msg = f"Expected list of str or None for {name}, got {type(value).__name__}"
        raise TypeError(msg)
    return list(value)


def _extract_args(args: argparse.Namespace) -> ParsedArgs:
    """Extract and validate arguments from Namespace.

    Args:
        args: Parsed argparse.Namespace.

    Returns:
        TypedDict with validated arguments.

    Raises:
        TypeError: If argument types are incorrect.
    """
    paths = _str_list_or_none(args.paths, "paths")
    if paths is None:
        msg = "Expected list of str for paths, got None"
        raise TypeError(msg)

    config = args.config
    if config is not None and not isinstance(config, str):
        msg = f"Expected str or None for config, got {type(config).__name__}"
        raise TypeError(msg)
    config_typed: str | None = config

    fmt = args.format
    output_format: OutputFormat
    if fmt == "json":
        output_format = "json"
    elif fmt == "text":
        output_format = "text"
    else:
        msg = f"Expected 'text' or 'json' for format, got {fmt!r}"
        raise TypeError(msg)

    jobs = args.jobs
    if jobs is not None and not isinstance(jobs, int):
        msg = f"Expected int or None for jobs, got {type(jobs).__name__}"
        raise TypeError(msg)
    jobs_typed: int | None = jobs

    list_rules = args.list_rules
    if not isinstance(list_rules, bool):
        msg = f"Expected bool for list_rules, got {type(list_rules).__name__}"
        raise TypeError(msg)

    summary = args.summary
    if not isinstance(summary, bool):
        msg = f"Expected bool for summary, got {type(summary).__name__}"
        raise TypeError(msg)

    return {
        "paths": paths,
        "config": config_typed,
        "output_format": output_format,
        "select": _str_list_or_none(args.select, "select"),
        "ignore": _str_list_or_none(args.ignore, "ignore"),
        "jobs": jobs_typed,
        "list_rules": list_rules,
        "summary": summary,
    }


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from exc
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="styleguard",
        description="Check Ruby source files against the style guide rules",
    )
    parser.add_argument(
        "paths",
        nargs="*",
        default=["."],
        help="Files or directories to check (directories are scanned recursively)",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a JSON configuration file (default: ./.styleguard.json if present)",
    )
    parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text)",
    )
    parser.add_argument(
        "--select",
        type=_split_names,
        default=None,
        help="Comma-separated rules to run, replacing the configured selection",
    )
    parser.add_argument(
        "--ignore",
        type=_split_names,
        default=None,
        help="Comma-separated rules to skip",
    )
    parser.add_argument(
        "--jobs",
        type=_positive_int,
        default=None,
        help="Number of files linted in parallel (default: automatic)",
    )
    parser.add_argument(
        "--list-rules",
        action="store_true",
        help="List the enabled rules and exit",
    )
    parser.add_argument(
        "--no-summary",
        dest="summary",
        action="store_false",
        help="Do not print the per-rule summary",
    )
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)


def print_rules(registry: RuleRegistry) -> None:
    """Print the enabled rules with their severity and description."""
    log_header(f"Enabled rules ({len(registry)}):")
    for rule in registry:
        log_info(f"  {rule.name} [{rule.severity}] {rule.description}")


def main(argv: Sequence[str] | None = None) -> int:
    """Main linter entry point. Returns the process exit status."""
    args = _extract_args(parse_args(argv))

    try:
        config = load_config(args["config"])
        registry = build_registry(config, select=args["select"], ignore=args["ignore"])
    except ConfigError as exc:
        log_error(f"Configuration error: {exc}")
        return EXIT_FAULT

    if args["list_rules"]:
        print_rules(registry)
        return EXIT_OK

    reports = lint_paths(
        [Path(p) for p in args["paths"]],
        registry,
        extensions=config["extensions"],
        exclude=config["exclude"],
        jobs=args["jobs"],
    )
    return report(
        reports,
        registry.names,
        output_format=args["output_format"],
        show_summary=args["summary"],
    )


__all__ = ["ParsedArgs", "build_parser", "main", "parse_args", "print_rules"]
