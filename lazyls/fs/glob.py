"""Shell-style glob patterns matched against single file names.

``*`` matches any run of characters except ``/``, ``?`` matches exactly one
such character, and ``[...]``/``[!...]`` are character classes. Matching is
case-sensitive and anchored to the whole name.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


class PatternError(ValueError):
    """Raised when a glob pattern cannot be compiled."""

    def __init__(self, pattern: str, position: int, message: str) -> None:
        super().__init__(f"invalid glob {pattern!r} at position {position}: {message}")
        self.pattern = pattern
        self.position = position
        self.message = message


def _translate_class(pattern: str, start: int) -> tuple[str, int]:
    """Translate the class opening at ``pattern[start] == '['``.

    Returns ``(regex, index_after_class)``.
    """
    i = start + 1
    negate = False
    if i < len(pattern) and pattern[i] in "!^":
        negate = True
        i += 1

    items: list[str] = []
    first = True
    while True:
        if i >= len(pattern):
            raise PatternError(pattern, start, "unterminated character class")
        ch = pattern[i]
        if ch == "]" and not first:
            i += 1
            break
        first = False
        if ch == "\\":
            if i + 1 >= len(pattern):
                raise PatternError(pattern, i, "dangling escape")
            ch = pattern[i + 1]
            i += 1
        if i + 2 < len(pattern) and pattern[i + 1] == "-" and pattern[i + 2] != "]":
            low = ch
            high = pattern[i + 2]
            if high == "\\":
                if i + 3 >= len(pattern):
                    raise PatternError(pattern, i + 2, "dangling escape")
                high = pattern[i + 3]
                i += 1
            if low > high:
                raise PatternError(pattern, i, f"reversed range {low}-{high}")
            items.append(f"{re.escape(low)}-{re.escape(high)}")
            i += 3
            continue
        items.append(re.escape(ch))
        i += 1

    body = "".join(items)
    if negate:
        return f"[^/{body}]", i
    return f"[{body}]", i


def translate(pattern: str) -> str:
    """Translate a glob into an anchored regular expression source string."""
    out: list[str] = []
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "*":
            while i < n and pattern[i] == "*":
                i += 1
            out.append("[^/]*")
            continue
        if ch == "?":
            out.append("[^/]")
            i += 1
            continue
        if ch == "[":
            regex, i = _translate_class(pattern, i)
            out.append(regex)
            continue
        if ch == "\\":
            if i + 1 >= n:
                raise PatternError(pattern, i, "dangling escape")
            out.append(re.escape(pattern[i + 1]))
            i += 2
            continue
        out.append(re.escape(ch))
        i += 1
    return "".join(out)


@dataclass(frozen=True)
class GlobPattern:
    """One compiled glob pattern."""

    source: str
    regex: re.Pattern[str]

    @classmethod
    def compile(cls, source: str) -> GlobPattern:
        return cls(source=source, regex=re.compile(translate(source), re.DOTALL))

    def matches(self, name: str) -> bool:
        return self.regex.fullmatch(name) is not None
