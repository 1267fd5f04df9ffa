"""
Unit tests for the sequence grader.

Covers:
- Exact ordering
- Partial credit as the best of positional, LCS and adjacency scores
- Permutation validation
- Feedback generation with and without item labels

Run: pytest tests/unit/test_sequence_grader.py -v
"""

import pytest

from src.grading import QuestionType, get_grader
from src.grading.models import SequenceQuestion
from src.grading.sequence import (
    adjacency_score,
    calculate_partial_credit,
    generate_sequence_feedback,
    grade_sequence_question,
    lcs_score,
    positional_score,
)

ABCD = ["a", "b", "c", "d"]


def answer(*items):
    return {"type": "SEQUENCE", "sequence": list(items)}


class TestPartialCreditHeuristics:
    """Test the three partial credit heuristics."""

    def test_reversed_triple(self):
        user, correct = ["c", "b", "a"], ["a", "b", "c"]
        assert positional_score(user, correct) == pytest.approx(1 / 3)
        assert lcs_score(user, correct) == pytest.approx(1 / 3)
        assert adjacency_score(user, correct) == 0.0
        assert calculate_partial_credit(user, correct) == pytest.approx(1 / 3)

    def test_lcs_wins_for_rotation(self):
        user = ["d", "a", "b", "c"]
        assert positional_score(user, ABCD) == 0.0
        assert lcs_score(user, ABCD) == pytest.approx(0.75)
        assert adjacency_score(user, ABCD) == pytest.approx(2 / 3)
        assert calculate_partial_credit(user, ABCD) == pytest.approx(0.75)

    def test_adjacency_wins_for_swapped_halves(self):
        user = ["c", "d", "a", "b"]
        assert positional_score(user, ABCD) == 0.0
        assert lcs_score(user, ABCD) == pytest.approx(0.5)
        assert adjacency_score(user, ABCD) == pytest.approx(2 / 3)
        assert calculate_partial_credit(user, ABCD) == pytest.approx(2 / 3)

    def test_positional_ties_lcs_for_swapped_pair(self):
        user = ["b", "a", "c", "d"]
        assert positional_score(user, ABCD) == pytest.approx(0.5)
        assert calculate_partial_credit(user, ABCD) == pytest.approx(0.75)

    def test_exact_order_scores_one_everywhere(self):
        assert positional_score(ABCD, ABCD) == 1.0
        assert lcs_score(ABCD, ABCD) == 1.0
        assert adjacency_score(ABCD, ABCD) == 1.0


class TestGradeSequenceQuestion:
    """Test grade_sequence_question function."""

    def test_exact_match(self):
        result = grade_sequence_question(answer("a", "b", "c", "d"), ABCD)
        assert result.is_correct is True
        assert result.score == 1.0
        assert result.feedback == "Perfect! You got the sequence exactly right."
        assert result.partial_credit is None

    def test_reversed_gets_one_third(self):
        result = grade_sequence_question(answer("c", "b", "a"), ["a", "b", "c"])
        assert result.is_correct is False
        assert result.score == pytest.approx(1 / 3)
        assert result.partial_credit == pytest.approx(1 / 3)
        assert result.feedback == "Partially correct. You got 33% of the sequence right."

    def test_percentage_rounds_half_up(self):
        result = grade_sequence_question(answer("c", "d", "a", "b"), ABCD)
        assert result.feedback == "Partially correct. You got 67% of the sequence right."

    def test_no_partial_credit(self):
        result = grade_sequence_question(answer("b", "a", "c", "d"), ABCD, allow_partial_credit=False)
        assert result.is_correct is False
        assert result.score == 0.0
        assert result.partial_credit is None
        assert result.feedback == (
            "Incorrect sequence. Try to think about the logical order of events or steps."
        )

    def test_score_within_unit_interval(self):
        for user in (["d", "c", "b", "a"], ["b", "c", "d", "a"], ["a", "c", "b", "d"]):
            result = grade_sequence_question(answer(*user), ABCD)
            assert 0.0 < result.score < 1.0

    def test_idempotent(self):
        first = grade_sequence_question(answer("d", "a", "b", "c"), ABCD)
        second = grade_sequence_question(answer("d", "a", "b", "c"), ABCD)
        assert first == second
        assert first.to_dict() == second.to_dict()

    def test_result_carries_both_sequences(self):
        result = grade_sequence_question(answer("b", "a", "c", "d"), ABCD)
        assert result.user_sequence == ["b", "a", "c", "d"]
        assert result.correct_sequence == ABCD
        data = result.to_dict()
        assert data["userSequence"] == ["b", "a", "c", "d"]
        assert data["partialCredit"] == pytest.approx(0.75)

    # ========================================
    # Validation
    # ========================================

    def test_wrong_length(self):
        result = grade_sequence_question(answer("a", "b"), ABCD)
        assert result.score == 0.0
        assert result.error == "Answer must contain exactly 4 items"
        assert result.feedback == "Answer must contain exactly 4 items"

    def test_duplicates(self):
        result = grade_sequence_question(answer("a", "a", "b", "c"), ABCD)
        assert result.error == "Answer contains duplicate or missing items"

    def test_unknown_items(self):
        result = grade_sequence_question(answer("a", "b", "c", "x"), ABCD)
        assert result.error == "Answer contains invalid items"

    @pytest.mark.parametrize(
        "payload",
        [None, "abcd", ["a", "b", "c", "d"], {"sequence": ABCD}, {"type": "SEQUENCE", "sequence": []}],
    )
    def test_malformed_payload(self, payload):
        result = grade_sequence_question(payload, ABCD)
        assert result.is_correct is False
        assert result.error == "Invalid answer format"
        assert result.user_sequence == []


class TestGenerateSequenceFeedback:
    """Test generate_sequence_feedback function."""

    LABELS = {"a": "Requirements", "b": "Design", "c": "Implementation", "d": "Testing"}

    def test_correct(self):
        result = grade_sequence_question(answer(*ABCD), ABCD)
        assert generate_sequence_feedback(result, self.LABELS) == (
            "Excellent! You arranged all items in the correct sequence."
        )

    def test_zero_score_shows_correct_order(self):
        result = grade_sequence_question(answer("d", "c", "b", "a"), ABCD, allow_partial_credit=False)
        assert generate_sequence_feedback(result, self.LABELS) == (
            "The correct sequence is: Requirements → Design → Implementation → Testing"
        )

    def test_counts_items_in_place(self):
        result = grade_sequence_question(answer("b", "a", "c", "d"), ABCD)
        assert generate_sequence_feedback(result, self.LABELS) == (
            "You got 2 out of 4 items in the right position. "
            "The correct sequence is: Requirements → Design → Implementation → Testing"
        )

    def test_nothing_in_place_shows_both_orders(self):
        result = grade_sequence_question(answer("d", "a", "b", "c"), ABCD)
        assert generate_sequence_feedback(result, self.LABELS) == (
            "Your sequence: Testing → Requirements → Design → Implementation. "
            "Correct sequence: Requirements → Design → Implementation → Testing"
        )

    def test_missing_labels_fall_back_to_ids(self):
        result = grade_sequence_question(answer("b", "a"), ["a", "b"], allow_partial_credit=False)
        assert generate_sequence_feedback(result) == "The correct sequence is: Item a → Item b"


class TestSequenceGrader:
    """Test the registered sequence grader."""

    @pytest.fixture
    def grader(self):
        return get_grader(QuestionType.SEQUENCE)

    def test_grades_question_payload(self, grader, sequence_question):
        result = grader.grade(sequence_question, answer("a", "b", "c", "d"))
        assert result.is_correct is True

    def test_question_disables_partial_credit(self, grader, sequence_question):
        question = {**sequence_question, "allowPartialCredit": False}
        result = grader.grade(question, answer("b", "a", "c", "d"))
        assert result.score == 0.0

    def test_option_overrides_question(self, grader, sequence_question):
        question = SequenceQuestion.model_validate({**sequence_question, "allowPartialCredit": False})
        result = grader.grade(question, answer("b", "a", "c", "d"), allow_partial_credit=True)
        assert result.score == pytest.approx(0.75)

    def test_validate(self, grader, sequence_question):
        assert grader.validate(sequence_question, answer("a", "b", "c", "d")).is_valid is True
        assert grader.validate(sequence_question, answer("a")).is_valid is False
