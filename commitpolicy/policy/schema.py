from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Any, Mapping


class Severity(IntEnum):
    OFF = 0
    WARNING = 1
    ERROR = 2

    @property
    def label(self) -> str:
        return self.name.lower()


class Applicability(str, Enum):
    ALWAYS = "always"  # condition must hold
    NEVER = "never"  # condition must not hold


RuleOptions = Any


@dataclass(frozen=True)
class RuleSpec:
    severity: Severity
    applicability: Applicability = Applicability.ALWAYS
    options: RuleOptions = None

    def to_config(self) -> list[Any]:
        """Render the public ``[severity, when, options?]`` array."""
        out: list[Any] = [int(self.severity), self.applicability.value]
        if self.options is not None:
            out.append(list(self.options) if isinstance(self.options, tuple) else self.options)
        return out


@dataclass(frozen=True)
class CommitPolicy:
    """
    Rule name -> RuleSpec, composed from named base policies plus overrides.

    The mapping is exposed read-only; a policy is never mutated after
    construction.
    """

    rules: Mapping[str, RuleSpec] = field(default_factory=dict)
    extends: tuple[str, ...] = ()
    default_ignores: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "rules", MappingProxyType(dict(self.rules)))
        object.__setattr__(self, "extends", tuple(self.extends))

    def resolve(self, rule_name: str) -> RuleSpec | None:
        """Return the rule's spec, or None when no layer defines it."""
        return self.rules.get(rule_name)

    def enabled(self) -> list[tuple[str, RuleSpec]]:
        return sorted(
            ((name, spec) for name, spec in self.rules.items() if spec.severity > Severity.OFF),
            key=lambda item: item[0],
        )

    def to_config(self) -> dict[str, Any]:
        return {
            "extends": list(self.extends),
            "rules": {name: self.rules[name].to_config() for name in sorted(self.rules)},
        }


def merge(base: CommitPolicy, overrides: Mapping[str, RuleSpec]) -> CommitPolicy:
    """
    Layer ``overrides`` on top of ``base``.

    An override replaces the base entry wholesale; fields are never combined.
    """
    rules = dict(base.rules)
    rules.update(overrides)
    return CommitPolicy(rules=rules, extends=base.extends, default_ignores=base.default_ignores)
