"""File discovery and the per-file read, parse, walk pipeline."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from pathlib import Path

from styleguard.registry import RuleRegistry
from styleguard.reporter import FileReport
from styleguard.rules import ToolingFault
from styleguard.syntax import ParseError, parse_source, read_source
from styleguard.walker import walk

DEFAULT_EXCLUDE_DIRS = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        ".bundle",
        "vendor",
        "node_modules",
        "coverage",
        "tmp",
        "log",
        "pkg",
    }
)

STRING_PATH = Path("<string>")


def iter_source_files(
    paths: Iterable[Path],
    extensions: Sequence[str],
    exclude: Iterable[str] = (),
) -> list[Path]:
    """Expand paths into the list of files to lint.

    Directories are scanned recursively for files with one of
    ``extensions``, skipping excluded directory names. Explicit file paths
    are always kept, whatever their extension, so that a missing file is
    reported rather than ignored. Duplicates are dropped; order is stable.
    """
    excluded = DEFAULT_EXCLUDE_DIRS | frozenset(exclude)
    exts = frozenset(extensions)
    seen: set[Path] = set()
    out: list[Path] = []

    def add(fp: Path) -> None:
        if fp not in seen:
            seen.add(fp)
            out.append(fp)

    for p in paths:
        if p.is_dir():
            for fp in sorted(p.rglob("*")):
                if not fp.is_file() or fp.suffix not in exts:
                    continue
                if any(part in excluded for part in fp.relative_to(p).parts[:-1]):
                    continue
                add(fp)
        else:
            add(p)
    return out


def lint_source(text: str, registry: RuleRegistry, path: Path = STRING_PATH) -> FileReport:
    """Lint Ruby source text.

    A syntax error, or any failure while building the tree, yields a report
    with a ``parse-error`` fault and no violations. Source lines are split on
    ``\\n`` only, matching the parser's line numbering.
    """
    try:
        root = parse_source(text)
    except ParseError as exc:
        fault = ToolingFault(file=path, kind="parse-error", message=str(exc), line_no=exc.line)
        return FileReport(path=path, violations=[], fault=fault)
    except Exception as exc:
        fault = ToolingFault(
            file=path,
            kind="parse-error",
            message=f"parser failed: {type(exc).__name__}: {exc}",
        )
        return FileReport(path=path, violations=[], fault=fault)
    result = walk(root, registry, path, text.split("\n"))
    return FileReport(path=path, violations=result.violations, fault=result.fault)


def lint_file(path: Path, registry: RuleRegistry) -> FileReport:
    """Lint one file; unreadable files yield a ``read-error`` fault."""
    try:
        text = read_source(path)
    except RuntimeError as exc:
        fault = ToolingFault(file=path, kind="read-error", message=str(exc))
        return FileReport(path=path, violations=[], fault=fault)
    return lint_source(text, registry, path)


def lint_files(
    files: Sequence[Path],
    registry: RuleRegistry,
    jobs: int | None = None,
) -> list[FileReport]:
    """Lint files, one task per file, returning reports in input order.

    Args:
        files: Files to lint.
        registry: Rules to apply; shared read-only by all tasks.
        jobs: Worker threads. None picks the executor default; 1 runs inline.
    """
    if jobs == 1 or len(files) <= 1:
        return [lint_file(fp, registry) for fp in files]
    with ThreadPoolExecutor(max_workers=jobs) as pool:
        return list(pool.map(partial(lint_file, registry=registry), files))


def lint_paths(
    paths: Iterable[Path],
    registry: RuleRegistry,
    extensions: Sequence[str],
    exclude: Iterable[str] = (),
    jobs: int | None = None,
) -> list[FileReport]:
    """Discover files under ``paths`` and lint them."""
    files = iter_source_files(paths, extensions, exclude)
    return lint_files(files, registry, jobs)


__all__ = [
    "DEFAULT_EXCLUDE_DIRS",
    "STRING_PATH",
    "iter_source_files",
    "lint_file",
    "lint_files",
    "lint_paths",
    "lint_source",
]
