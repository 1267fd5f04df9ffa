"""
String and sequence similarity primitives.

Edit distance comes from rapidfuzz. The sequence helpers are O(n*m) at worst
and allocate their own DP tables, so everything here is safe to call
concurrently.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Hashable

from rapidfuzz.distance import Levenshtein


def levenshtein_distance(a: str, b: str) -> int:
    """Edit distance with unit-cost insertion, deletion and substitution."""
    return Levenshtein.distance(a, b)


def string_similarity(a: str, b: str, case_sensitive: bool = False) -> float:
    """
    Normalized Levenshtein similarity: 1 - distance / max length.

    Identical strings score 1.0; if either string is empty (and they differ)
    the score is 0.0.
    """
    if not case_sensitive:
        a, b = a.lower(), b.lower()

    if a == b:
        return 1.0
    if not a or not b:
        return 0.0

    return Levenshtein.normalized_similarity(a, b)


def longest_common_subsequence(a: Sequence[Hashable], b: Sequence[Hashable]) -> int:
    """Length of the longest common (not necessarily contiguous) subsequence."""
    if not a or not b:
        return 0

    m, n = len(a), len(b)
    dp = [[0] * (n + 1) for _ in range(m + 1)]

    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if a[i - 1] == b[j - 1]:
                dp[i][j] = dp[i - 1][j - 1] + 1
            else:
                dp[i][j] = max(dp[i - 1][j], dp[i][j - 1])

    return dp[m][n]


def positional_matches(a: Sequence[Hashable], b: Sequence[Hashable]) -> int:
    """Number of indices at which both sequences hold the same element."""
    return sum(1 for x, y in zip(a, b) if x == y)


def adjacent_pair_overlap(user: Sequence[Hashable], correct: Sequence[Hashable]) -> int:
    """Count consecutive pairs of `correct` that also appear consecutively in `user`."""
    if len(correct) < 2:
        return 0

    user_pairs = {(user[i], user[i + 1]) for i in range(len(user) - 1)}
    return sum(
        1 for i in range(len(correct) - 1)
        if (correct[i], correct[i + 1]) in user_pairs
    )
