"""Pytest fixtures for styleguard tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from styleguard.registry import RuleRegistry, default_registry


@pytest.fixture
def registry() -> RuleRegistry:
    """Registry with every rule at its default severity."""
    return default_registry()


@pytest.fixture
def ruby_dir(tmp_path: Path) -> Path:
    """Create an empty project directory for Ruby sources."""
    project = tmp_path / "project"
    project.mkdir()
    return project
