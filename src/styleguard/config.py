"""Linter configuration loading.

Configuration lives in a JSON file (``.styleguard.json`` in the working
directory by default)::

    {
      "enable": [],
      "disable": ["Hashes"],
      "severity": {"Strings": "warning"},
      "extensions": [".rb", ".rake"],
      "exclude": ["vendor"]
    }

Every key is optional. An empty ``enable`` list means all rules.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TypedDict

from styleguard._types import UnknownJson
from styleguard.rules import SEVERITIES, Severity

CONFIG_FILENAME = ".styleguard.json"

DEFAULT_EXTENSIONS: tuple[str, ...] = (".rb", ".rake", ".gemspec", ".ru")

_KEYS = frozenset({"enable", "disable", "severity", "extensions", "exclude"})


class ConfigError(ValueError):
    """Raised when a configuration file or rule selection is invalid."""


class LintConfig(TypedDict):
    """Validated linter configuration."""

    enable: list[str]
    disable: list[str]
    severity: dict[str, Severity]
    extensions: list[str]
    exclude: list[str]


def default_config() -> LintConfig:
    """Return the configuration used when no file is present."""
    return {
        "enable": [],
        "disable": [],
        "severity": {},
        "extensions": list(DEFAULT_EXTENSIONS),
        "exclude": [],
    }


def _decode_str_list(raw: UnknownJson, key: str) -> list[str]:
    if not isinstance(raw, list):
        msg = f"Expected list for '{key}', got {type(raw).__name__}"
        raise ConfigError(msg)
    out: list[str] = []
    for i, item in enumerate(raw):
        if not isinstance(item, str):
            msg = f"Expected str at {key}[{i}], got {type(item).__name__}"
            raise ConfigError(msg)
        out.append(item)
    return out


def _decode_severity(raw: UnknownJson, where: str) -> Severity:
    for sev in SEVERITIES:
        if raw == sev:
            return sev
    msg = f"Expected one of {', '.join(SEVERITIES)} for {where}, got {raw!r}"
    raise ConfigError(msg)


def _normalize_extension(ext: str) -> str:
    ext = ext.strip()
    return ext if ext.startswith(".") else f".{ext}"


def _decode_config(raw: UnknownJson) -> LintConfig:
    """Decode raw JSON data as LintConfig.

    Internal function for JSON validation - uses UnknownJson type.

    Args:
        raw: Parsed JSON data to validate.

    Returns:
        Validated configuration, defaults filled in for missing keys.

    Raises:
        ConfigError: If the structure or a value is incorrect.
    """
    if not isinstance(raw, dict):
        msg = f"Expected dict, got {type(raw).__name__}"
        raise ConfigError(msg)

    unknown = sorted(set(raw) - _KEYS)
    if unknown:
        msg = f"Unknown configuration key(s): {', '.join(unknown)}"
        raise ConfigError(msg)

    config = default_config()
    if "enable" in raw:
        config["enable"] = _decode_str_list(raw["enable"], "enable")
    if "disable" in raw:
        config["disable"] = _decode_str_list(raw["disable"], "disable")
    if "exclude" in raw:
        config["exclude"] = _decode_str_list(raw["exclude"], "exclude")
    if "extensions" in raw:
        exts = _decode_str_list(raw["extensions"], "extensions")
        config["extensions"] = [_normalize_extension(e) for e in exts if e.strip()]

    if "severity" in raw:
        sev_raw = raw["severity"]
        if not isinstance(sev_raw, dict):
            msg = f"Expected dict for 'severity', got {type(sev_raw).__name__}"
            raise ConfigError(msg)
        config["severity"] = {
            name: _decode_severity(value, f"severity.{name}") for name, value in sev_raw.items()
        }

    return config


def _load_config_data(path: Path) -> LintConfig:
    """Load and validate config JSON data from file.

    Raises:
        ConfigError: If the file cannot be read, is not JSON, or is invalid.
    """
    try:
        content = path.read_text(encoding="utf-8-sig")
    except OSError as exc:
        raise ConfigError(f"failed to read {path}: {exc}") from exc
    try:
        raw: UnknownJson = json.loads(content)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"{path} is not valid JSON: {exc}") from exc
    return _decode_config(raw)


def load_config(path: str | Path | None = None, cwd: Path | None = None) -> LintConfig:
    """Load the linter configuration.

    Args:
        path: Explicit configuration file. Must exist when given.
        cwd: Directory searched for ``.styleguard.json`` when ``path`` is None.

    Returns:
        Validated configuration; defaults when no file is found.
    """
    if path is not None:
        return _load_config_data(Path(path))
    candidate = (cwd if cwd is not None else Path.cwd()) / CONFIG_FILENAME
    if candidate.is_file():
        return _load_config_data(candidate)
    return default_config()


__all__ = [
    "CONFIG_FILENAME",
    "DEFAULT_EXTENSIONS",
    "ConfigError",
    "LintConfig",
    "default_config",
    "load_config",
]
