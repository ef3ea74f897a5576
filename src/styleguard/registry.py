"""Ordered, immutable rule registry with dispatch by node kind."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from types import MappingProxyType

from styleguard.config import ConfigError, LintConfig
from styleguard.rules import Rule, Severity
from styleguard.rules.definitions import (
    BlocksRule,
    ClassesRule,
    ConstantsRule,
    InheritanceRule,
    MethodsRule,
)
from styleguard.rules.literals import CollectionsRule, HashesRule, StringsRule
from styleguard.rules.util import StyleRule

# Guide order: one rule per guideline.
RULE_CLASSES: tuple[type[StyleRule], ...] = (
    StringsRule,
    BlocksRule,
    CollectionsRule,
    HashesRule,
    MethodsRule,
    ClassesRule,
    ConstantsRule,
    InheritanceRule,
)

RULE_NAMES: tuple[str, ...] = tuple(cls.name for cls in RULE_CLASSES)


class RuleRegistry:
    """An ordered collection of rules, fixed at construction.

    Rules for a node kind are returned in registration order.
    """

    def __init__(self, rules: Sequence[Rule]) -> None:
        names = [r.name for r in rules]
        dupes = sorted({n for n in names if names.count(n) > 1})
        if dupes:
            msg = f"Duplicate rule names: {', '.join(dupes)}"
            raise ValueError(msg)

        self._rules: tuple[Rule, ...] = tuple(rules)
        index: dict[str, list[Rule]] = {}
        for rule in self._rules:
            for kind in sorted(rule.kinds):
                index.setdefault(kind, []).append(rule)
        self._by_kind = MappingProxyType({k: tuple(v) for k, v in index.items()})

    @property
    def rules(self) -> tuple[Rule, ...]:
        return self._rules

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(r.name for r in self._rules)

    def rules_for(self, kind: str) -> tuple[Rule, ...]:
        """Return the rules registered for ``kind``, possibly none."""
        return self._by_kind.get(kind, ())

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)


def _check_names(names: Iterable[str], where: str) -> None:
    unknown = sorted(set(names) - set(RULE_NAMES))
    if unknown:
        msg = f"Unknown rule(s) in {where}: {', '.join(unknown)}"
        raise ConfigError(msg)


def default_registry() -> RuleRegistry:
    """Return a registry holding every rule at its default severity."""
    return RuleRegistry([cls() for cls in RULE_CLASSES])


def build_registry(
    config: LintConfig,
    select: Sequence[str] | None = None,
    ignore: Sequence[str] | None = None,
) -> RuleRegistry:
    """Build the registry for one run.

    Args:
        config: Loaded configuration.
        select: Rules to run, replacing the configured ``enable`` list.
        ignore: Rules to skip, in addition to the configured ``disable`` list.

    Returns:
        Registry with the enabled rules in guide order.

    Raises:
        ConfigError: If a rule name is unknown.
    """
    enable = list(select) if select is not None else config["enable"]
    disable = set(config["disable"]) | set(ignore or ())
    _check_names(enable, "enable")
    _check_names(disable, "disable")
    _check_names(config["severity"], "severity")

    severities: dict[str, Severity] = config["severity"]
    rules: list[Rule] = []
    for cls in RULE_CLASSES:
        if enable and cls.name not in enable:
            continue
        if cls.name in disable:
            continue
        rules.append(cls(severities.get(cls.name)))
    return RuleRegistry(rules)


__all__ = ["RULE_CLASSES", "RULE_NAMES", "RuleRegistry", "build_registry", "default_registry"]
