"""Tests for styleguard.runner module."""

from __future__ import annotations

from pathlib import Path

import pytest

from styleguard.registry import RuleRegistry
from styleguard.reporter import EXIT_FAULT, exit_code
from styleguard.runner import (
    STRING_PATH,
    iter_source_files,
    lint_file,
    lint_files,
    lint_paths,
    lint_source,
)
from styleguard.syntax import SyntaxNode

CLEAN = 'greeting = "hello"\n'
DIRTY = "greeting = 'hello'\nitems = [1, 2, 3]\n"
BROKEN = "def broken(\n  1 +\n"


def _write(path: Path, text: str) -> Path:
    """Helper to write a file, creating parent dirs as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


class TestLintSource:
    """Tests for lint_source."""

    def test_clean_source(self, registry: RuleRegistry) -> None:
        """Test clean source has no violations and no fault."""
        rep = lint_source(CLEAN, registry)
        assert rep.path == STRING_PATH
        assert rep.violations == []
        assert rep.fault is None

    def test_violations_in_location_order(self, registry: RuleRegistry) -> None:
        """Test violations come back sorted by location."""
        rep = lint_source(DIRTY, registry, Path("d.rb"))
        assert [(v.rule, v.line_no, v.col) for v in rep.violations] == [
            ("Strings", 1, 12),
            ("Collections", 2, 9),
        ]
        assert all(v.file == Path("d.rb") for v in rep.violations)

    def test_hash_access_example(self, registry: RuleRegistry) -> None:
        """Test an index-style hash read yields exactly one Hashes violation."""
        rep = lint_source("settings = {}\ntimeout = settings[:timeout]\n", registry)
        assert [(v.rule, v.line_no, v.col) for v in rep.violations] == [("Hashes", 2, 11)]

    def test_collections_example(self, registry: RuleRegistry) -> None:
        """Test the single-line array and its reformatted version."""
        one_line = lint_source("sizes = [10, 20, 30]\n", registry)
        assert [v.rule for v in one_line.violations] == ["Collections"]
        reformatted = lint_source("sizes = [\n  10,\n  20,\n  30,\n]\n", registry)
        assert reformatted.violations == []

    def test_parse_error_is_a_fault(self, registry: RuleRegistry) -> None:
        """Test syntax errors yield a parse-error fault and no violations."""
        rep = lint_source(BROKEN, registry, Path("b.rb"))
        assert rep.violations == []
        assert rep.fault is not None
        assert rep.fault.kind == "parse-error"
        assert rep.fault.file == Path("b.rb")

    def test_unexpected_parser_failure_is_a_fault(
        self, registry: RuleRegistry, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Test a crash while building the tree becomes a parse-error fault."""

        def _explode(text: str) -> SyntaxNode:
            raise RecursionError("maximum recursion depth exceeded")

        monkeypatch.setattr("styleguard.runner.parse_source", _explode)
        rep = lint_source(CLEAN, registry, Path("c.rb"))
        assert rep.violations == []
        assert rep.fault is not None
        assert rep.fault.kind == "parse-error"
        assert "RecursionError" in rep.fault.message

    def test_form_feed_does_not_shift_snippets(self, registry: RuleRegistry) -> None:
        """Test source lines follow the parser's newline-only numbering."""
        rep = lint_source("# \x0c page\nport = config[:port]\n", registry)
        assert [(v.rule, v.line_no, v.line) for v in rep.violations] == [
            ("Hashes", 2, "port = config[:port]")
        ]

    def test_form_feed_does_not_shift_suppression(self, registry: RuleRegistry) -> None:
        """Test a trailing directive after a form feed applies to its own line."""
        src = "# \x0c\nport = config[:port] # styleguard:disable Hashes\n"
        assert lint_source(src, registry).violations == []

    def test_same_input_same_output(self, registry: RuleRegistry) -> None:
        """Test two runs over the same source are identical."""
        assert lint_source(DIRTY, registry) == lint_source(DIRTY, registry)


class TestLintFile:
    """Tests for lint_file."""

    def test_reads_and_lints(self, ruby_dir: Path, registry: RuleRegistry) -> None:
        """Test a file on disk is linted."""
        path = _write(ruby_dir / "a.rb", DIRTY)
        rep = lint_file(path, registry)
        assert rep.path == path
        assert len(rep.violations) == 2

    def test_missing_file_is_read_error(self, ruby_dir: Path, registry: RuleRegistry) -> None:
        """Test unreadable files become read-error faults."""
        rep = lint_file(ruby_dir / "missing.rb", registry)
        assert rep.fault is not None
        assert rep.fault.kind == "read-error"
        assert "failed to read" in rep.fault.message


class TestIterSourceFiles:
    """Tests for iter_source_files."""

    def test_scans_directories_for_extensions(self, ruby_dir: Path) -> None:
        """Test recursive discovery filtered by extension, sorted."""
        _write(ruby_dir / "b.rb", CLEAN)
        _write(ruby_dir / "lib" / "a.rb", CLEAN)
        _write(ruby_dir / "Rakefile.rake", CLEAN)
        _write(ruby_dir / "notes.txt", "x")
        files = iter_source_files([ruby_dir], [".rb", ".rake"])
        assert [f.relative_to(ruby_dir).as_posix() for f in files] == [
            "Rakefile.rake",
            "b.rb",
            "lib/a.rb",
        ]

    def test_skips_excluded_directories(self, ruby_dir: Path) -> None:
        """Test default and configured excludes are skipped."""
        _write(ruby_dir / "vendor" / "gem.rb", CLEAN)
        _write(ruby_dir / "generated" / "g.rb", CLEAN)
        _write(ruby_dir / "app.rb", CLEAN)
        files = iter_source_files([ruby_dir], [".rb"], exclude=["generated"])
        assert [f.name for f in files] == ["app.rb"]

    def test_explicit_files_always_kept(self, ruby_dir: Path) -> None:
        """Test explicit paths are kept regardless of extension or existence."""
        script = _write(ruby_dir / "Gemfile", CLEAN)
        missing = ruby_dir / "missing.rb"
        files = iter_source_files([script, missing, script], [".rb"])
        assert files == [script, missing]


class TestBatch:
    """Tests for linting several files."""

    def test_parse_failure_does_not_stop_the_batch(
        self, ruby_dir: Path, registry: RuleRegistry
    ) -> None:
        """Test a broken file among three still lets the other two be linted."""
        a = _write(ruby_dir / "a.rb", DIRTY)
        b = _write(ruby_dir / "b.rb", BROKEN)
        c = _write(ruby_dir / "c.rb", "port = config[:port]\n")
        reports = lint_files([a, b, c], registry, jobs=3)
        assert [r.path for r in reports] == [a, b, c]
        assert len(reports[0].violations) == 2
        assert reports[1].fault is not None
        assert reports[1].fault.kind == "parse-error"
        assert [v.rule for v in reports[2].violations] == ["Hashes"]
        assert exit_code(reports) == EXIT_FAULT

    def test_deeply_nested_file_does_not_stop_the_batch(
        self, ruby_dir: Path, registry: RuleRegistry
    ) -> None:
        """Test a long operator chain converts and lints like any other file."""
        first = _write(ruby_dir / "a.rb", DIRTY)
        deep = _write(ruby_dir / "deep.rb", "x = 1" + " + 1" * 1500 + "\n")
        last = _write(ruby_dir / "z.rb", "port = config[:port]\n")
        reports = lint_files([first, deep, last], registry, jobs=1)
        assert [r.fault for r in reports] == [None, None, None]
        assert len(reports[0].violations) == 2
        assert reports[1].violations == []
        assert [v.rule for v in reports[2].violations] == ["Hashes"]

    def test_parallel_matches_sequential(self, ruby_dir: Path, registry: RuleRegistry) -> None:
        """Test worker-pool results equal inline results."""
        for i in range(6):
            _write(ruby_dir / f"f{i}.rb", DIRTY if i % 2 else CLEAN)
        parallel = lint_paths([ruby_dir], registry, [".rb"], jobs=4)
        sequential = lint_paths([ruby_dir], registry, [".rb"], jobs=1)
        assert parallel == sequential
        assert sum(len(r.violations) for r in parallel) == 6
