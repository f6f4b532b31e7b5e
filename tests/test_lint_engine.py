from __future__ import annotations

import logging

import pytest

from commitpolicy.lint import lint_message, lint_messages
from commitpolicy.policy import Applicability, CommitPolicy, RuleSpec, Severity, merge, policy_from_config
from commitpolicy.policy.presets import PROJECT_CONFIG

ALLOWED_TYPES = ["feat", "fix", "perf", "refactor", "test", "docs", "chore", "ci", "build", "revert"]


def _rules(outcome) -> set[str]:
    return {v.rule for v in outcome.violations}


def test_clean_message_has_no_violations(project_policy) -> None:
    outcome = lint_message(project_policy, "feat: add login")
    assert outcome.valid
    assert outcome.violations == []
    assert outcome.parsed.type == "feat"


@pytest.mark.parametrize("type_", ALLOWED_TYPES)
def test_every_allowed_type_passes(project_policy, type_: str) -> None:
    for subject in ("add login", "handle 2FA tokens", "Bump deps", "x"):
        outcome = lint_message(project_policy, f"{type_}: {subject}")
        assert outcome.violations == [], (type_, subject)


@pytest.mark.parametrize("type_", ["style", "feature", "wip", "bugfix"])
def test_unknown_type_fires_type_enum(project_policy, type_: str) -> None:
    outcome = lint_message(project_policy, f"{type_}: add login")
    violation = next(v for v in outcome.violations if v.rule == "type-enum")
    assert violation.severity == Severity.ERROR
    assert not outcome.valid


def test_upper_case_type_fires_type_case(project_policy) -> None:
    outcome = lint_message(project_policy, "Feat: add login")
    assert "type-case" in _rules(outcome)
    assert not outcome.valid


def test_type_case_independent_of_type_enum() -> None:
    # Even when the enum accepts the upper-case spelling, type-case still fires.
    policy = policy_from_config(
        {"rules": {"type-enum": [2, "always", ["FEAT"]], "type-case": [2, "always", "lower-case"]}}
    )
    outcome = lint_message(policy, "FEAT: add login")
    assert _rules(outcome) == {"type-case"}


def test_leading_capital_and_full_stop(project_policy) -> None:
    outcome = lint_message(project_policy, "feat: Add login.")
    assert _rules(outcome) == {"subject-full-stop"}


def test_upper_case_subject_fires_subject_case(project_policy) -> None:
    outcome = lint_message(project_policy, "feat: ADD LOGIN")
    assert _rules(outcome) == {"subject-case"}


def test_empty_type_and_subject(project_policy) -> None:
    outcome = lint_message(project_policy, ": ")
    rules = _rules(outcome)
    assert {"type-empty", "subject-empty"} <= rules
    # type-enum and type-case leave empty types to type-empty.
    assert "type-enum" not in rules
    assert "type-case" not in rules


def test_empty_subject_only(project_policy) -> None:
    outcome = lint_message(project_policy, "fix: ")
    rules = _rules(outcome)
    assert "subject-empty" in rules
    assert "type-empty" not in rules


def test_empty_type_only(project_policy) -> None:
    outcome = lint_message(project_policy, ": add login")
    rules = _rules(outcome)
    assert rules == {"type-empty"}


def test_override_to_off_disables_rule(project_policy) -> None:
    relaxed = merge(project_policy, {"subject-full-stop": RuleSpec(Severity.OFF)})
    assert relaxed.resolve("subject-full-stop").severity == Severity.OFF
    assert lint_message(relaxed, "feat: add login.").valid


def test_warnings_do_not_fail(project_policy) -> None:
    outcome = lint_message(project_policy, "feat: add login\nbody without blank line")
    assert outcome.valid
    assert [v.rule for v in outcome.warnings] == ["body-leading-blank"]
    assert outcome.errors == []


def test_all_rules_are_evaluated(project_policy) -> None:
    outcome = lint_message(project_policy, "Style: ADD LOGIN.")
    assert {"type-enum", "type-case", "subject-case", "subject-full-stop"} <= _rules(outcome)


def test_parse_error_is_reported_separately(project_policy) -> None:
    outcome = lint_message(project_policy, "add login")
    assert outcome.parse_error is not None
    assert outcome.violations == []
    assert not outcome.valid
    assert outcome.header == "add login"


def test_ignored_messages_pass(project_policy) -> None:
    outcome = lint_message(project_policy, "Merge branch 'main' into feature")
    assert outcome.ignored
    assert outcome.valid


def test_default_ignores_can_be_disabled() -> None:
    policy = policy_from_config({**PROJECT_CONFIG, "default_ignores": False})
    outcome = lint_message(policy, "Merge branch 'main' into feature")
    assert not outcome.ignored
    assert outcome.parse_error is not None


def test_batch_keeps_order_and_isolates_parse_errors(project_policy) -> None:
    outcomes = lint_messages(
        project_policy,
        [("a1", "feat: add login"), ("b2", "not conventional"), ("c3", "Feat: add login")],
    )
    assert [o.ref for o in outcomes] == ["a1", "b2", "c3"]
    assert outcomes[0].valid
    assert outcomes[1].parse_error is not None
    assert "type-case" in _rules(outcomes[2])


def test_violation_str(project_policy) -> None:
    outcome = lint_message(project_policy, "feat: add login.")
    assert str(outcome.violations[0]) == "ERROR: [subject-full-stop] subject must not end with full stop '.'"


def test_uncased_subject_passes(project_policy) -> None:
    assert lint_message(project_policy, "feat: 日本語のサポートを追加").violations == []


def test_digit_leading_type_fires_type_case(project_policy) -> None:
    outcome = lint_message(project_policy, "1Fix: add login")
    assert {"type-enum", "type-case"} <= _rules(outcome)


def test_unimplemented_rule_is_skipped_and_logged(caplog: pytest.LogCaptureFixture) -> None:
    policy = CommitPolicy(
        rules={
            "type-emoji": RuleSpec(Severity.ERROR),
            "type-empty": RuleSpec(Severity.ERROR, Applicability.NEVER),
        }
    )
    with caplog.at_level(logging.DEBUG, logger="commitpolicy.lint.engine"):
        outcome = lint_message(policy, ": add login")
    assert _rules(outcome) == {"type-empty"}
    assert "type-emoji" in caplog.text
