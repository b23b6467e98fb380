"""
Natural filename ordering.

Names are split into runs of ASCII digits and runs of everything else. Runs are
compared pairwise from the start: two digit runs by integer value, any other
pair case-insensitively as text. When every compared pair is equal the shorter
name sorts first, so ``img2.png`` < ``img10.png`` and ``a`` < ``a2``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from functools import cmp_to_key

_RUN_PATTERN = re.compile(r"[0-9]+|[^0-9]+")


def split_runs(name: str) -> list[str]:
    """Split a name into its maximal digit and non-digit runs."""
    return _RUN_PATTERN.findall(name)


def _is_digit_run(run: str) -> bool:
    # non-digit runs such as "²" still pass str.isdigit(), and int() rejects them
    return run.isascii() and run.isdigit()


def _compare_runs(left: str, right: str) -> int:
    if _is_digit_run(left) and _is_digit_run(right):
        a: int | str = int(left)
        b: int | str = int(right)
    else:
        a = left.lower()
        b = right.lower()
    return (a > b) - (a < b)


def natural_compare(left: str, right: str) -> int:
    """
    Compare two filenames in natural order.

    Returns:
        A negative number, zero or a positive number when ``left`` sorts
        before, together with or after ``right``.
    """
    for left_run, right_run in zip(split_runs(left), split_runs(right)):
        result = _compare_runs(left_run, right_run)
        if result != 0:
            return result

    return (len(left) > len(right)) - (len(left) < len(right))


natural_sort_key = cmp_to_key(natural_compare)


def natural_sorted(names: Iterable[str]) -> list[str]:
    """Return the names sorted in natural order."""
    return sorted(names, key=natural_sort_key)
