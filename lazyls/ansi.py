"""ANSI-aware text measurement helpers.

Strips escape sequences and counts terminal cells for styled fragments.
Grid and table layout rely on these widths to keep columns aligned.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")


def char_display_width(ch: str) -> int:
    """Return terminal column width for one printable character.

    Combining marks consume no columns, East Asian wide/fullwidth characters
    consume two, and everything else consumes one regardless of how many
    bytes its encoding takes.
    """
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in {"W", "F"}:
        return 2
    return 1


def strip_ansi(text: str) -> str:
    """Remove every ANSI escape sequence from ``text``."""
    if "\x1b" not in text:
        return text
    return ANSI_ESCAPE_RE.sub("", text)


def plain_display_width(text: str) -> int:
    if text.isascii():
        return len(text)
    return sum(char_display_width(ch) for ch in text)


def display_width(text: str) -> int:
    """Return the number of terminal cells ``text`` occupies once unstyled."""
    return plain_display_width(strip_ansi(text))
