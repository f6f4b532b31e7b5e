from __future__ import annotations

import pytest

from commitpolicy.policy import Applicability, CommitPolicy, RuleSpec, Severity, merge


def _base() -> CommitPolicy:
    return CommitPolicy(
        rules={
            "type-empty": RuleSpec(Severity.ERROR, Applicability.NEVER),
            "subject-full-stop": RuleSpec(Severity.ERROR, Applicability.NEVER, "."),
            "body-leading-blank": RuleSpec(Severity.WARNING, Applicability.ALWAYS),
        },
        extends=("config-conventional",),
    )


def test_resolve_returns_spec_or_none() -> None:
    policy = _base()
    assert policy.resolve("type-empty") == RuleSpec(Severity.ERROR, Applicability.NEVER)
    assert policy.resolve("scope-enum") is None


def test_merge_with_empty_overrides_is_identity() -> None:
    base = _base()
    merged = merge(base, {})
    for name in ("type-empty", "subject-full-stop", "body-leading-blank", "scope-enum"):
        assert merged.resolve(name) == base.resolve(name)
    assert merged.extends == base.extends


def test_override_replaces_whole_spec() -> None:
    merged = merge(_base(), {"subject-full-stop": RuleSpec(Severity.OFF)})
    spec = merged.resolve("subject-full-stop")
    assert spec is not None
    assert spec.severity == Severity.OFF
    # Nothing from the base entry survives.
    assert spec.applicability is Applicability.ALWAYS
    assert spec.options is None


def test_merge_adds_new_rules_and_keeps_others() -> None:
    merged = merge(_base(), {"scope-empty": RuleSpec(Severity.WARNING, Applicability.NEVER)})
    assert merged.resolve("scope-empty") is not None
    assert merged.resolve("type-empty") == _base().resolve("type-empty")


def test_merge_does_not_touch_inputs() -> None:
    base = _base()
    overrides = {"type-empty": RuleSpec(Severity.OFF)}
    merge(base, overrides)
    assert base.resolve("type-empty").severity == Severity.ERROR
    assert list(overrides) == ["type-empty"]


def test_policy_rules_are_read_only() -> None:
    policy = _base()
    with pytest.raises(TypeError):
        policy.rules["type-empty"] = RuleSpec(Severity.OFF)  # type: ignore[index]


def test_enabled_skips_off_rules_and_sorts() -> None:
    policy = merge(_base(), {"type-empty": RuleSpec(Severity.OFF)})
    names = [name for name, _ in policy.enabled()]
    assert names == ["body-leading-blank", "subject-full-stop"]


def test_to_config_renders_public_shape() -> None:
    spec = RuleSpec(Severity.ERROR, Applicability.ALWAYS, ("feat", "fix"))
    assert spec.to_config() == [2, "always", ["feat", "fix"]]
    assert RuleSpec(Severity.WARNING, Applicability.NEVER).to_config() == [1, "never"]

    config = _base().to_config()
    assert config["extends"] == ["config-conventional"]
    assert config["rules"]["subject-full-stop"] == [2, "never", "."]
