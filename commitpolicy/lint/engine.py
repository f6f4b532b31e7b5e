from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable

from ..errors import ParseError
from ..message.ignores import is_ignored
from ..message.parser import CommitMessage, parse_message, strip_comments
from ..policy.schema import CommitPolicy, Severity
from ..rules import RULES

logger = logging.getLogger(__name__)


@dataclass
class RuleViolation:
    """A single failed rule for one message."""

    rule: str
    severity: Severity
    message: str

    @property
    def level(self) -> str:
        return self.severity.label

    def __str__(self) -> str:
        return f"{self.level.upper()}: [{self.rule}] {self.message}"


@dataclass
class LintOutcome:
    """Everything learned about one commit message."""

    input: str
    ref: str | None = None
    parsed: CommitMessage | None = None
    parse_error: str | None = None
    ignored: bool = False
    violations: list[RuleViolation] = field(default_factory=list)

    @property
    def errors(self) -> list[RuleViolation]:
        return [v for v in self.violations if v.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[RuleViolation]:
        return [v for v in self.violations if v.severity == Severity.WARNING]

    @property
    def valid(self) -> bool:
        return self.parse_error is None and not self.errors

    @property
    def header(self) -> str:
        if self.parsed is not None:
            return self.parsed.header
        return self.input.split("\n", 1)[0]


def evaluate(policy: CommitPolicy, message: CommitMessage) -> list[RuleViolation]:
    """
    Apply every enabled rule of ``policy`` to a parsed message.

    Rules are independent: no rule reads another's outcome and every enabled
    rule runs.
    """
    violations: list[RuleViolation] = []
    for name, spec in policy.enabled():
        rule = RULES.get(name)
        if rule is None:
            logger.debug("no implementation for enabled rule %s, skipping", name)
            continue
        passed, description = rule.fn(message, spec.applicability, spec.options)
        if not passed:
            violations.append(RuleViolation(rule=name, severity=spec.severity, message=description))
    return violations


def lint_message(policy: CommitPolicy, text: str, *, ref: str | None = None) -> LintOutcome:
    """Lint one raw commit message. Parse failures are captured, not raised."""
    outcome = LintOutcome(input=text, ref=ref)

    if is_ignored(strip_comments(text).lstrip("\n"), defaults=policy.default_ignores):
        logger.debug("ignoring message %s", ref or repr(text.split("\n", 1)[0]))
        outcome.ignored = True
        return outcome

    try:
        outcome.parsed = parse_message(text)
    except ParseError as e:
        outcome.parse_error = str(e)
        return outcome

    outcome.violations = evaluate(policy, outcome.parsed)
    return outcome


def lint_messages(policy: CommitPolicy, messages: Iterable[tuple[str | None, str]]) -> list[LintOutcome]:
    """Lint ``(ref, text)`` pairs independently; results keep input order."""
    return [lint_message(policy, text, ref=ref) for ref, text in messages]
