"""Natural-order string comparison.

Digit runs compare by numeric value, so ``file2`` sorts before ``file10``.
Used by the name, extension, and type sort fields.
"""

from __future__ import annotations

from functools import cmp_to_key


def _is_ascii_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def _digit_run_end(text: str, start: int) -> int:
    end = start
    while end < len(text) and _is_ascii_digit(text[end]):
        end += 1
    return end


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def natural_compare(left: str, right: str, ignore_case: bool = False) -> int:
    """Compare two strings in natural order, returning -1, 0, or 1.

    Case-sensitive comparison orders by code point, so uppercase letters come
    before lowercase ones. Case-insensitive comparison folds case and reports
    names that differ only in case as equal, leaving their relative order to
    the stability of the caller's sort. Digit runs with the same value but a
    different number of leading zeros compare shorter-first only when the rest
    of both strings is equal.
    """
    a = left.casefold() if ignore_case else left
    b = right.casefold() if ignore_case else right
    i = 0
    j = 0
    zero_bias = 0
    while i < len(a) and j < len(b):
        ca = a[i]
        cb = b[j]
        if _is_ascii_digit(ca) and _is_ascii_digit(cb):
            end_a = _digit_run_end(a, i)
            end_b = _digit_run_end(b, j)
            value_a = int(a[i:end_a])
            value_b = int(b[j:end_b])
            if value_a != value_b:
                return -1 if value_a < value_b else 1
            if zero_bias == 0:
                zero_bias = _sign((end_a - i) - (end_b - j))
            i = end_a
            j = end_b
            continue
        if ca != cb:
            return -1 if ca < cb else 1
        i += 1
        j += 1

    remaining = _sign((len(a) - i) - (len(b) - j))
    if remaining:
        return remaining
    return zero_bias


def natural_key(ignore_case: bool = False):
    """Return a ``sort`` key callable ordering strings naturally."""
    return cmp_to_key(lambda a, b: natural_compare(a, b, ignore_case))
