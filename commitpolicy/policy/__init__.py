"""Commit policy: rules as data, evaluation as code."""

from .load import load_policy, load_project_policy, policy_from_config
from .schema import Applicability, CommitPolicy, RuleSpec, Severity, merge

__all__ = [
    "Applicability",
    "CommitPolicy",
    "RuleSpec",
    "Severity",
    "load_policy",
    "load_project_policy",
    "merge",
    "policy_from_config",
]
