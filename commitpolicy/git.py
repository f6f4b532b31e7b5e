"""Read commit messages out of a git repository."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from .errors import GitError

logger = logging.getLogger(__name__)

# Emitted by git for the %x00 placeholder after each message.
_RECORD_SEP = "\x00"


def _git(args: list[str], cwd: Path | None = None) -> str:
    cmd = ["git", *args]
    logger.debug("running %s", " ".join(cmd))
    try:
        result = subprocess.run(
            cmd,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=30,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        raise GitError(f"cannot run git: {e}") from e
    if result.returncode != 0:
        raise GitError(result.stderr.strip() or f"git {' '.join(args)} exited with {result.returncode}")
    return result.stdout


def read_commit_messages(
    from_ref: str | None = None,
    to_ref: str = "HEAD",
    *,
    cwd: Path | None = None,
) -> list[tuple[str, str]]:
    """
    Return ``(sha, message)`` pairs for the commits in ``from_ref..to_ref``.

    With no ``from_ref`` only ``to_ref`` itself is returned.
    """
    if from_ref:
        rev_args = [f"{from_ref}..{to_ref}"]
    else:
        rev_args = ["-1", to_ref]
    out = _git(["log", "--format=%H%n%B%x00", *rev_args], cwd=cwd)

    messages: list[tuple[str, str]] = []
    for record in out.split(_RECORD_SEP):
        record = record.lstrip("\n")
        if not record.strip():
            continue
        sha, _, body = record.partition("\n")
        messages.append((sha.strip(), body.rstrip("\n")))
    return messages


def edit_message_path(cwd: Path | None = None) -> Path:
    """Path of the message being edited (``COMMIT_EDITMSG``) in the current repository."""
    git_dir = Path(_git(["rev-parse", "--git-dir"], cwd=cwd).strip())
    if not git_dir.is_absolute():
        git_dir = (cwd or Path.cwd()) / git_dir
    return git_dir / "COMMIT_EDITMSG"
