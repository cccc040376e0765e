"""Approximate substring matching for typo-tolerant search.

Uses Myers' bit-parallel algorithm (a bitap variant): the pattern is encoded
as one bitmask per character and the text is scanned once, tracking the edit
distance of the best alignment of the whole pattern against any substring
ending at each text position. Cost is O(len(text)) big-int operations per
field, independent of the number of allowed errors.
"""

from __future__ import annotations

from typing import NamedTuple


class FuzzyMatch(NamedTuple):
    """Best approximate occurrence of a pattern inside a text."""

    distance: int
    start: int
    end: int

    def normalized(self, pattern_length: int) -> float:
        """Edit distance scaled to [0, 1] by the pattern length."""
        if pattern_length == 0:
            return 1.0
        return min(self.distance / pattern_length, 1.0)


def best_substring_match(pattern: str, text: str) -> FuzzyMatch | None:
    """Find the substring of text with the smallest edit distance to pattern.

    Args:
        pattern: String to look for (compared as given; lowercase both sides
            for case-insensitive matching).
        text: String to search in.

    Returns:
        The best match, or None when pattern or text is empty. ``start`` is
        estimated from the pattern length since only end positions are
        tracked. The earliest end position wins ties.

    Examples:
        >>> best_substring_match("typescript", "notes on typscript")
        FuzzyMatch(distance=1, start=8, end=18)
        >>> best_substring_match("abc", "xxabcxx").distance
        0
    """
    m = len(pattern)
    if m == 0 or not text:
        return None

    peq: dict[str, int] = {}
    for i, char in enumerate(pattern):
        peq[char] = peq.get(char, 0) | (1 << i)

    full = (1 << m) - 1
    high_bit = 1 << (m - 1)
    pv = full
    mv = 0
    score = m
    best = m
    best_end = -1

    for j, char in enumerate(text):
        eq = peq.get(char, 0)
        xv = eq | mv
        xh = ((((eq & pv) + pv) & full) ^ pv) | eq
        ph = (mv | ~(xh | pv)) & full
        mh = pv & xh

        if ph & high_bit:
            score += 1
        elif mh & high_bit:
            score -= 1

        ph = (ph << 1) & full
        mh = (mh << 1) & full
        pv = (mh | ~(xv | ph)) & full
        mv = ph & xv

        if score < best:
            best = score
            best_end = j
            if best == 0:
                break

    if best_end < 0:
        # No position improved on deleting the whole pattern.
        return FuzzyMatch(distance=m, start=0, end=0)

    end = best_end + 1
    return FuzzyMatch(distance=best, start=max(0, end - m), end=end)
