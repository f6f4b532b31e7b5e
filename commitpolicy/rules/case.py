"""Case styles understood by the ``*-case`` rules."""

from __future__ import annotations

import re
from typing import Callable

_QUOTED_RE = re.compile(r"`.*?`|\".*?\"|'.*?'")
_WORD_RE = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+")
_DIRECT_CASES = frozenset({"lower-case", "lowercase", "upper-case", "uppercase"})


def _words(value: str) -> list[str]:
    return _WORD_RE.findall(value)


def _camel(value: str) -> str:
    words = [w.lower() for w in _words(value)]
    if not words:
        return ""
    return words[0] + "".join(w[:1].upper() + w[1:] for w in words[1:])


def _pascal(value: str) -> str:
    return "".join(w[:1].upper() + w[1:].lower() for w in _words(value))


def _kebab(value: str) -> str:
    return "-".join(w.lower() for w in _words(value))


def _snake(value: str) -> str:
    return "_".join(w.lower() for w in _words(value))


def _start(value: str) -> str:
    return " ".join(w[:1].upper() + w[1:].lower() for w in _words(value))


def _sentence(value: str) -> str:
    return value[:1].upper() + value[1:].lower()


CASE_TRANSFORMS: dict[str, Callable[[str], str]] = {
    "lower-case": str.lower,
    "lowercase": str.lower,
    "upper-case": str.upper,
    "uppercase": str.upper,
    "camel-case": _camel,
    "kebab-case": _kebab,
    "pascal-case": _pascal,
    "sentence-case": _sentence,
    "sentencecase": _sentence,
    "snake-case": _snake,
    "start-case": _start,
}


def ensure_case(raw: str, case: str) -> bool:
    """
    True when ``raw`` is already written in ``case``.

    Quoted and backticked spans are ignored (they usually hold proper names).
    A value with nothing to transform matches every case. For the word styles
    (camel, pascal, start and the like) a value starting with a digit does too;
    lower-case and upper-case are compared directly.
    """
    transform = CASE_TRANSFORMS.get(case)
    if transform is None:
        raise ValueError(f"unknown case style: {case!r}")
    value = _QUOTED_RE.sub("", raw).strip()
    transformed = transform(value)
    if transformed == "":
        return True
    if case not in _DIRECT_CASES and transformed[:1].isdigit():
        return True
    return transformed == value
