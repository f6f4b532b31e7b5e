from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Literal

from ..message.parser import CommitMessage
from ..policy.schema import Applicability
from .case import CASE_TRANSFORMS, ensure_case

OptionKind = Literal["none", "values", "case", "char", "length"]

# (passed, description). The description reads correctly whether or not the rule passed.
RuleOutcome = tuple[bool, str]
RuleFn = Callable[[CommitMessage, Applicability, Any], RuleOutcome]

_URL_LINE_RE = re.compile(r"^\s*\S+://\S+\s*$")
_LEADING_LETTER_RE = re.compile(r"[a-z]", re.IGNORECASE)


@dataclass(frozen=True)
class RuleDef:
    name: str
    fn: RuleFn
    description: str
    options: OptionKind = "none"


def _verdict(when: Applicability, condition: bool, subject: str, phrase: str) -> RuleOutcome:
    negated = when is Applicability.NEVER
    passed = not condition if negated else condition
    verb = "must not" if negated else "must"
    return passed, f"{subject} {verb} {phrase}"


def _as_list(options: Any) -> list[str]:
    if options is None:
        return []
    if isinstance(options, str):
        return [options]
    return [str(o) for o in options]


# --- enum -----------------------------------------------------------------


def _enum_rule(field: str) -> RuleFn:
    def check(message: CommitMessage, when: Applicability, options: Any) -> RuleOutcome:
        value = getattr(message, field)
        allowed = _as_list(options)
        if not value:
            return True, f"{field} is empty"
        return _verdict(when, value in allowed, field, f"be one of [{', '.join(allowed)}]")

    return check


# --- case -----------------------------------------------------------------


def _case_rule(field: str, *, letters_only: bool = False) -> RuleFn:
    def check(message: CommitMessage, when: Applicability, options: Any) -> RuleOutcome:
        value = getattr(message, field)
        cases = _as_list(options)
        if not value:
            return True, f"{field} is empty"
        if letters_only and not _LEADING_LETTER_RE.match(value):
            return True, f"{field} does not start with a letter"
        # Any listed style satisfies the rule; NEVER forbids all of them.
        matched = any(ensure_case(value, c) for c in cases)
        return _verdict(when, matched, field, f"be {', '.join(cases)}")

    return check


# --- empty ----------------------------------------------------------------


def _empty_rule(field: str) -> RuleFn:
    def check(message: CommitMessage, when: Applicability, options: Any) -> RuleOutcome:
        value = getattr(message, field)
        return _verdict(when, not value, field, "be empty")

    return check


# --- length ---------------------------------------------------------------


def _max_length_rule(field: str) -> RuleFn:
    def check(message: CommitMessage, when: Applicability, options: Any) -> RuleOutcome:
        value = getattr(message, field)
        limit = int(options)
        return _verdict(when, len(value) <= limit, field, f"not be longer than {limit} characters, current length is {len(value)}")

    return check


def _min_length_rule(field: str) -> RuleFn:
    def check(message: CommitMessage, when: Applicability, options: Any) -> RuleOutcome:
        value = getattr(message, field)
        limit = int(options)
        if not value:
            return True, f"{field} is empty"
        return _verdict(when, len(value) >= limit, field, f"not be shorter than {limit} characters, current length is {len(value)}")

    return check


def _max_line_length_rule(field: str) -> RuleFn:
    def check(message: CommitMessage, when: Applicability, options: Any) -> RuleOutcome:
        value = getattr(message, field)
        limit = int(options)
        if not value:
            return True, f"{field} is empty"
        lines = [line for line in value.split("\n") if not _URL_LINE_RE.match(line)]
        ok = all(len(line) <= limit for line in lines)
        return _verdict(when, ok, f"{field}'s lines", f"not be longer than {limit} characters")

    return check


# --- one-offs -------------------------------------------------------------


def check_subject_full_stop(message: CommitMessage, when: Applicability, options: Any) -> RuleOutcome:
    stop = "." if options is None else str(options)
    if not message.subject:
        return True, "subject is empty"
    return _verdict(when, message.subject.endswith(stop), "subject", f"end with full stop {stop!r}")


def check_header_trim(message: CommitMessage, when: Applicability, options: Any) -> RuleOutcome:
    header = message.header
    return _verdict(when, header == header.strip(), "header", "not be surrounded by whitespace")


def _leading_blank(message: CommitMessage, section: str) -> bool:
    lines = message.lines
    text = getattr(message, section)
    if section == "body":
        return len(lines) < 2 or not lines[1].strip()
    start = len(lines) - len(text.split("\n"))
    return start >= 1 and not lines[start - 1].strip()


def check_body_leading_blank(message: CommitMessage, when: Applicability, options: Any) -> RuleOutcome:
    if not message.body:
        return True, "body is empty"
    return _verdict(when, _leading_blank(message, "body"), "body", "have leading blank line")


def check_footer_leading_blank(message: CommitMessage, when: Applicability, options: Any) -> RuleOutcome:
    if not message.footer:
        return True, "footer is empty"
    return _verdict(when, _leading_blank(message, "footer"), "footer", "have leading blank line")


RULES: dict[str, RuleDef] = {
    r.name: r
    for r in (
        RuleDef("type-enum", _enum_rule("type"), "type is one of the allowed values", "values"),
        RuleDef("type-case", _case_rule("type"), "type is in the given case", "case"),
        RuleDef("type-empty", _empty_rule("type"), "type is empty"),
        RuleDef("scope-enum", _enum_rule("scope"), "scope is one of the allowed values", "values"),
        RuleDef("scope-case", _case_rule("scope"), "scope is in the given case", "case"),
        RuleDef("scope-empty", _empty_rule("scope"), "scope is empty"),
        RuleDef("subject-case", _case_rule("subject", letters_only=True), "subject is in the given case", "case"),
        RuleDef("subject-empty", _empty_rule("subject"), "subject is empty"),
        RuleDef("subject-full-stop", check_subject_full_stop, "subject ends with the given character", "char"),
        RuleDef("subject-max-length", _max_length_rule("subject"), "subject is at most N characters", "length"),
        RuleDef("header-max-length", _max_length_rule("header"), "header is at most N characters", "length"),
        RuleDef("header-min-length", _min_length_rule("header"), "header is at least N characters", "length"),
        RuleDef("header-trim", check_header_trim, "header has no surrounding whitespace"),
        RuleDef("body-empty", _empty_rule("body"), "body is empty"),
        RuleDef("body-leading-blank", check_body_leading_blank, "body is preceded by a blank line"),
        RuleDef("body-max-line-length", _max_line_length_rule("body"), "body lines are at most N characters", "length"),
        RuleDef("footer-leading-blank", check_footer_leading_blank, "footer is preceded by a blank line"),
        RuleDef("footer-max-line-length", _max_line_length_rule("footer"), "footer lines are at most N characters", "length"),
    )
}


def check_options(rule: RuleDef, options: Any) -> str | None:
    """Return a problem description when ``options`` do not fit the rule, else None."""
    kind = rule.options
    if kind == "none":
        return None
    if kind == "values":
        if not isinstance(options, (list, tuple)) or not all(isinstance(v, str) for v in options):
            return "expects a list of allowed values"
        return None
    if kind == "case":
        cases = _as_list(options) if isinstance(options, (str, list, tuple)) else []
        if not cases:
            return "expects a case style or a list of case styles"
        unknown = [c for c in cases if c not in CASE_TRANSFORMS]
        if unknown:
            return f"unknown case style(s): {', '.join(unknown)}"
        return None
    if kind == "char":
        if options is not None and not isinstance(options, str):
            return "expects a string"
        return None
    if kind == "length":
        if isinstance(options, bool) or not isinstance(options, int) or options < 0:
            return "expects a non-negative integer"
        return None
    return None
