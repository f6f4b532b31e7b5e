"""Evaluate commit messages against a policy."""

from .engine import LintOutcome, RuleViolation, evaluate, lint_message, lint_messages

__all__ = ["LintOutcome", "RuleViolation", "evaluate", "lint_message", "lint_messages"]
