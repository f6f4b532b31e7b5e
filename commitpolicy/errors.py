"""Error taxonomy shared by the loader, parser and git helpers."""

from __future__ import annotations


class CommitPolicyError(Exception):
    """Base class for all commitpolicy errors."""


class ConfigError(CommitPolicyError):
    """The policy configuration is malformed. Raised before any message is linted."""

    def __init__(self, message: str, *, rule: str | None = None, source: str | None = None):
        self.rule = rule
        self.source = source
        prefix = ""
        if source:
            prefix += f"{source}: "
        if rule:
            prefix += f"rule {rule!r}: "
        super().__init__(f"{prefix}{message}")


class ParseError(CommitPolicyError):
    """A commit message header does not match the conventional grammar."""

    def __init__(self, message: str, *, header: str = ""):
        self.header = header
        super().__init__(message)


class GitError(CommitPolicyError):
    """A git invocation failed."""
