from .ignores import is_ignored
from .parser import CommitMessage, parse_message, strip_comments

__all__ = ["CommitMessage", "is_ignored", "parse_message", "strip_comments"]
