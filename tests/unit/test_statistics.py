"""
Unit tests for rating and dropdown aggregate statistics.

Run: pytest tests/unit/test_statistics.py -v
"""

import pytest

from src.grading.base import DropdownGradingResult
from src.grading.statistics import (
    DropdownStatistics,
    RatingStatistics,
    calculate_rating_statistics,
    generate_dropdown_statistics,
)


def dropdown_result(selected, correct="Paris", is_correct=False, score=0.0, partial=False):
    return DropdownGradingResult(
        is_correct=is_correct,
        score=score,
        feedback="",
        selected_option=selected,
        correct_option=correct,
        partial_credit=partial,
        answer_type="correct" if is_correct else "incorrect",
        match_type="exact" if is_correct else "none",
    )


class TestRatingStatistics:
    """Test calculate_rating_statistics function."""

    def test_empty(self):
        stats = calculate_rating_statistics([])
        assert stats == RatingStatistics()
        assert stats.to_dict() == {
            "average": 0.0,
            "median": 0.0,
            "mode": [],
            "distribution": {},
            "total": 0,
        }

    def test_odd_count(self):
        stats = calculate_rating_statistics([4, 5, 3, 5, 2])
        assert stats.average == 3.8
        assert stats.median == 4
        assert stats.mode == [5]
        assert stats.distribution == {2: 1, 3: 1, 4: 1, 5: 2}
        assert stats.total == 5

    def test_even_count_median_is_mean_of_middle(self):
        stats = calculate_rating_statistics([1, 4, 2, 3])
        assert stats.median == 2.5

    def test_mode_lists_every_tie_in_ascending_order(self):
        stats = calculate_rating_statistics([5, 1, 5, 1, 3])
        assert stats.mode == [1, 5]

    def test_average_rounded_to_two_places(self):
        assert calculate_rating_statistics([1, 2, 2]).average == 1.67

    def test_distribution_sorted_by_value(self):
        stats = calculate_rating_statistics([3, 1, 2, 1])
        assert list(stats.distribution) == [1, 2, 3]

    def test_accepts_any_iterable(self):
        assert calculate_rating_statistics(iter([2, 2])).total == 2


class TestDropdownStatistics:
    """Test generate_dropdown_statistics function."""

    @pytest.fixture
    def results(self):
        return [
            dropdown_result("Paris", is_correct=True, score=1.0),
            dropdown_result("London"),
            dropdown_result("Berlin"),
            dropdown_result("Pariss", score=0.83, partial=True),
            dropdown_result("London"),
            dropdown_result("Paris", is_correct=True, score=1.0),
        ]

    def test_counts(self, results):
        stats = generate_dropdown_statistics(results)
        assert stats.total_attempts == 6
        assert stats.correct_answers == 2
        assert stats.partial_credit_answers == 1
        assert stats.incorrect_answers == 3

    def test_rates(self, results):
        stats = generate_dropdown_statistics(results)
        assert stats.average_score == 0.47
        assert stats.accuracy_rate == 33.33

    def test_common_incorrect_answers(self, results):
        stats = generate_dropdown_statistics(results)
        # Partial-credit selections are still misses
        assert stats.common_incorrect_answers == [("London", 2), ("Berlin", 1), ("Pariss", 1)]

    def test_ties_keep_first_encounter_order(self):
        names = ["Rome", "Oslo", "Lima", "Kyiv", "Bern", "Doha", "Riga"]
        stats = generate_dropdown_statistics([dropdown_result(n) for n in names])
        assert [option for option, _ in stats.common_incorrect_answers] == names[:5]

    def test_top_n_override(self, results):
        stats = generate_dropdown_statistics(results, top_n=1)
        assert stats.common_incorrect_answers == [("London", 2)]

    def test_empty_selection_not_counted_as_common_answer(self):
        stats = generate_dropdown_statistics([dropdown_result("")])
        assert stats.incorrect_answers == 1
        assert stats.common_incorrect_answers == []

    def test_empty(self):
        stats = generate_dropdown_statistics([])
        assert stats == DropdownStatistics()

    def test_to_dict(self, results):
        data = generate_dropdown_statistics(results, top_n=2).to_dict()
        assert data["totalAttempts"] == 6
        assert data["accuracyRate"] == 33.33
        assert data["commonIncorrectAnswers"] == [
            {"option": "London", "count": 2},
            {"option": "Berlin", "count": 1},
        ]
