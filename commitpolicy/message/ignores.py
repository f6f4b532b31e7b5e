"""Messages written by git or release tooling (merges, reverts, autosquash, version bumps) are not linted."""

from __future__ import annotations

import re

DEFAULT_IGNORES: tuple[re.Pattern[str], ...] = (
    re.compile(r"^((Merge pull request(.*?))|(Merge (.*?) into (.*?))|(Merge branch (.*?)))(?:\r?\n)*$", re.M),
    re.compile(r"^v?\d+\.\d+\.\d+(?:[-+][\w.-]+)?\s*(?:\r?\n|$)"),
    re.compile(r"^(Merge tag (.*?))(?:\r?\n)*$", re.M),
    re.compile(r"^(R|r)evert (.*)"),
    re.compile(r"^(amend|fixup|squash)!"),
    re.compile(r"^(Merged (.*?)(in|into) (.*)|Merged PR (.*): (.*))"),
    re.compile(r"^Merge remote-tracking branch(\s*)(.*)"),
    re.compile(r"^Automatic merge(.*)"),
    re.compile(r"^Auto-merged (.*?) into (.*)"),
)


def is_ignored(text: str, *, defaults: bool = True) -> bool:
    if not defaults or not text:
        return False
    return any(pattern.match(text) for pattern in DEFAULT_IGNORES)
