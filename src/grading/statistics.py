"""
Aggregate statistics over many responses.

Statistics are recomputed on demand from their inputs and never mutated.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from config import get_settings

from .base import DropdownGradingResult
from .utils import round_half_up


@dataclass(frozen=True)
class RatingStatistics:
    """Summary of raw ratings for a survey-style question."""

    average: float = 0.0
    median: float = 0.0
    mode: list[int] = field(default_factory=list)  # every value tied at the highest count
    distribution: dict[int, int] = field(default_factory=dict)
    total: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "average": self.average,
            "median": self.median,
            "mode": list(self.mode),
            "distribution": dict(self.distribution),
            "total": self.total,
        }


@dataclass(frozen=True)
class DropdownStatistics:
    """Performance summary for a dropdown question."""

    total_attempts: int = 0
    correct_answers: int = 0
    incorrect_answers: int = 0
    partial_credit_answers: int = 0
    average_score: float = 0.0
    accuracy_rate: float = 0.0  # percent
    common_incorrect_answers: list[tuple[str, int]] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalAttempts": self.total_attempts,
            "correctAnswers": self.correct_answers,
            "incorrectAnswers": self.incorrect_answers,
            "partialCreditAnswers": self.partial_credit_answers,
            "averageScore": self.average_score,
            "accuracyRate": self.accuracy_rate,
            "commonIncorrectAnswers": [
                {"option": option, "count": count}
                for option, count in self.common_incorrect_answers
            ],
        }


def calculate_rating_statistics(ratings: Iterable[int]) -> RatingStatistics:
    """
    Compute average, median, mode and distribution for a list of ratings.

    An empty list yields zeros and empty collections.
    """
    values = list(ratings)
    if not values:
        return RatingStatistics()

    ordered = sorted(values)
    middle = len(ordered) // 2
    if len(ordered) % 2 == 0:
        median = (ordered[middle - 1] + ordered[middle]) / 2
    else:
        median = ordered[middle]

    counts = Counter(values)
    distribution = {value: counts[value] for value in sorted(counts)}
    top = max(distribution.values())

    return RatingStatistics(
        average=round_half_up(sum(values) / len(values), 2),
        median=median,
        mode=[value for value, count in distribution.items() if count == top],
        distribution=distribution,
        total=len(values),
    )


def generate_dropdown_statistics(
    results: Iterable[DropdownGradingResult],
    top_n: int | None = None,
) -> DropdownStatistics:
    """
    Summarize a batch of dropdown results.

    Partial-credit results count towards partial_credit_answers rather than
    incorrect_answers, but their selections still appear among the common
    incorrect answers. Ties keep first-encounter order.
    """
    results = list(results)
    limit = top_n if top_n is not None else get_settings().dropdown_common_incorrect_limit

    total = len(results)
    correct = sum(1 for r in results if r.is_correct)
    partial = sum(1 for r in results if r.partial_credit)
    total_score = sum(r.score for r in results)

    # Counter preserves first-insertion order and most_common() sorts stably
    misses = Counter(r.selected_option for r in results if not r.is_correct and r.selected_option)

    return DropdownStatistics(
        total_attempts=total,
        correct_answers=correct,
        incorrect_answers=total - correct - partial,
        partial_credit_answers=partial,
        average_score=round_half_up(total_score / total, 2) if total else 0.0,
        accuracy_rate=round_half_up(correct / total * 100, 2) if total else 0.0,
        common_incorrect_answers=misses.most_common(limit),
    )
