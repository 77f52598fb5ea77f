"""Small text helpers."""

from __future__ import annotations


def ordinalize(number: int) -> str:
    """Render an integer with its English ordinal suffix.

    11, 12 and 13 always take "th"; otherwise the last digit decides
    (1st, 2nd, 3rd, 4th...).
    """
    mod_100 = abs(number) % 100
    if 11 <= mod_100 <= 13:
        return f"{number}th"

    suffix = {1: "st", 2: "nd", 3: "rd"}.get(abs(number) % 10, "th")
    return f"{number}{suffix}"
