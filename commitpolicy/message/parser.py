"""
Conventional commit message parsing.

Header grammar: ``type(scope)!: subject`` with scope and ``!`` optional.
Body is everything between the header and the footer; the footer is the
trailing paragraph that opens with a git trailer or a breaking-change note.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field

from ..errors import ParseError

HEADER_PATTERN = re.compile(r"^(\w*)(?:\((.*)\))?(!)?: (.*)$")
TRAILER_PATTERN = re.compile(r"^(?:BREAKING[ -]CHANGE|[\w-]+)(?:: | #)")
NOTE_PATTERN = re.compile(r"^BREAKING[ -]CHANGE: ?(.*)$")
SCISSORS_LINE = "# ------------------------ >8 ------------------------"
COMMENT_CHAR = "#"


@dataclass(frozen=True)
class CommitMessage:
    raw: str
    header: str
    type: str
    scope: str
    subject: str
    body: str = ""
    footer: str = ""
    breaking: bool = False
    notes: tuple[str, ...] = field(default_factory=tuple)

    @property
    def lines(self) -> list[str]:
        return self.raw.split("\n")


def strip_comments(text: str) -> str:
    """Drop git comment lines and anything below the scissors line."""
    kept: list[str] = []
    for line in text.replace("\r\n", "\n").split("\n"):
        if line.rstrip() == SCISSORS_LINE:
            break
        if line.startswith(COMMENT_CHAR):
            continue
        kept.append(line)
    return "\n".join(kept)


def _split_footer(lines: list[str]) -> tuple[list[str], list[str]]:
    """Split the lines after the header into (body, footer)."""
    # The footer paragraph starts after the last blank line and must open with a trailer.
    last_blank = None
    for i, line in enumerate(lines):
        if not line.strip():
            last_blank = i
    start = 0 if last_blank is None else last_blank + 1
    if start < len(lines) and TRAILER_PATTERN.match(lines[start]):
        return lines[:start], lines[start:]
    return lines, []


def parse_message(text: str) -> CommitMessage:
    """
    Parse a commit message.

    Raises:
        ParseError: the message is empty or its header does not match the grammar.
    """
    raw = strip_comments(text).rstrip("\n")
    # Leading blank lines are not part of the header; git drops them too.
    raw = raw.lstrip("\n")
    if not raw.strip():
        raise ParseError("commit message is empty")

    lines = raw.split("\n")
    header = lines[0]
    match = HEADER_PATTERN.match(header)
    if match is None:
        raise ParseError(f"header does not match 'type(scope): subject': {header!r}", header=header)

    type_, scope, bang, subject = match.groups()

    body_lines, footer_lines = _split_footer(lines[1:])
    body = "\n".join(body_lines).strip("\n")
    footer = "\n".join(footer_lines).strip("\n")

    notes: list[str] = []
    for line in footer_lines:
        note = NOTE_PATTERN.match(line)
        if note:
            notes.append(note.group(1).strip())

    return CommitMessage(
        raw=raw,
        header=header,
        type=type_ or "",
        scope=scope or "",
        subject=subject or "",
        body=body,
        footer=footer,
        breaking=bool(bang) or bool(notes),
        notes=tuple(notes),
    )
