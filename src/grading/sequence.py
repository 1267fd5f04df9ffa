"""
Sequence (ordering) question grader.

The answer must be a permutation of the correct sequence. An exact match scores
1.0. Otherwise, when partial credit is allowed, three independent heuristics
are computed and the most generous one is awarded:

- positional: fraction of items in their correct slot
- LCS: longest common subsequence length / sequence length
- adjacency: fraction of the correct consecutive pairs kept together
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from loguru import logger

from config import get_settings

from . import QuestionType, register
from .base import SequenceGradingResult, ValidationResult
from .similarity import adjacent_pair_overlap, longest_common_subsequence, positional_matches
from .models import SequenceQuestion
from .utils import round_half_up
from .validation import coerce_question, validate_sequence_answer

ARROW = " → "


# =============================================================================
# Partial Credit Heuristics
# =============================================================================


def positional_score(user_sequence: Sequence[str], correct_sequence: Sequence[str]) -> float:
    """Fraction of positions holding the correct item."""
    if not correct_sequence:
        return 0.0
    return positional_matches(user_sequence, correct_sequence) / len(correct_sequence)


def lcs_score(user_sequence: Sequence[str], correct_sequence: Sequence[str]) -> float:
    """Longest common subsequence length over the correct sequence length."""
    if not correct_sequence:
        return 0.0
    return longest_common_subsequence(user_sequence, correct_sequence) / len(correct_sequence)


def adjacency_score(user_sequence: Sequence[str], correct_sequence: Sequence[str]) -> float:
    """Fraction of the correct consecutive pairs that the user kept consecutive."""
    if len(correct_sequence) < 2:
        return 0.0
    return adjacent_pair_overlap(user_sequence, correct_sequence) / (len(correct_sequence) - 1)


def calculate_partial_credit(user_sequence: Sequence[str], correct_sequence: Sequence[str]) -> float:
    """Best of the positional, LCS and adjacency scores."""
    return max(
        positional_score(user_sequence, correct_sequence),
        lcs_score(user_sequence, correct_sequence),
        adjacency_score(user_sequence, correct_sequence),
    )


# =============================================================================
# Grading
# =============================================================================


def grade_sequence_question(
    user_answer: Any,
    correct_sequence: Sequence[str],
    allow_partial_credit: bool = True,
) -> SequenceGradingResult:
    """
    Grade a sequence answer.

    Args:
        user_answer: Raw answer payload ({"type": "SEQUENCE", "sequence": [...]})
        correct_sequence: Item ids in the correct order
        allow_partial_credit: Award the best heuristic score for near misses

    Returns:
        SequenceGradingResult with score in [0, 1]
    """
    correct = list(correct_sequence)
    validation = validate_sequence_answer(user_answer, correct)

    if not validation.is_valid:
        logger.debug(f"Sequence answer rejected: {validation.error}")
        return SequenceGradingResult(
            is_correct=False,
            score=0.0,
            feedback=validation.error or "Invalid answer format",
            error=validation.error,
            correct_sequence=correct,
            user_sequence=[],
        )

    user_sequence = list(validation.value.sequence)

    if user_sequence == correct:
        return SequenceGradingResult(
            is_correct=True,
            score=1.0,
            feedback="Perfect! You got the sequence exactly right.",
            correct_sequence=correct,
            user_sequence=user_sequence,
        )

    if allow_partial_credit:
        partial = calculate_partial_credit(user_sequence, correct)
        logger.debug(f"Sequence partial credit: {partial:.3f}")

        if partial > 0:
            percent = int(round_half_up(partial * 100))
            return SequenceGradingResult(
                is_correct=False,
                score=partial,
                feedback=f"Partially correct. You got {percent}% of the sequence right.",
                partial_credit=partial,
                correct_sequence=correct,
                user_sequence=user_sequence,
            )

    return SequenceGradingResult(
        is_correct=False,
        score=0.0,
        feedback="Incorrect sequence. Try to think about the logical order of events or steps.",
        correct_sequence=correct,
        user_sequence=user_sequence,
    )


def generate_sequence_feedback(
    result: SequenceGradingResult,
    item_labels: Mapping[str, str] | None = None,
) -> str:
    """Describe a graded sequence using item labels where available."""
    if result.is_correct:
        return "Excellent! You arranged all items in the correct sequence."

    def label(item_id: str) -> str:
        return (item_labels or {}).get(item_id) or f"Item {item_id}"

    correct_text = ARROW.join(label(i) for i in result.correct_sequence)

    if result.score == 0:
        return f"The correct sequence is: {correct_text}"

    in_place = positional_matches(result.user_sequence, result.correct_sequence)
    if in_place > 0:
        return (
            f"You got {in_place} out of {len(result.correct_sequence)} items in the right "
            f"position. The correct sequence is: {correct_text}"
        )

    user_text = ARROW.join(label(i) for i in result.user_sequence)
    return f"Your sequence: {user_text}. Correct sequence: {correct_text}"


@register(QuestionType.SEQUENCE)
class SequenceGrader:
    """Grader for sequence questions."""

    def validate(self, question: SequenceQuestion | dict, answer: Any) -> ValidationResult:
        question = coerce_question(SequenceQuestion, question)
        return validate_sequence_answer(answer, question.correct_sequence)

    def grade(self, question: SequenceQuestion | dict, answer: Any, **options: Any) -> SequenceGradingResult:
        """Grade using the question's partial credit policy unless overridden."""
        question = coerce_question(SequenceQuestion, question)
        allow_partial = options.get("allow_partial_credit")
        if allow_partial is None:
            allow_partial = question.allow_partial_credit and get_settings().sequence_allow_partial_credit
        return grade_sequence_question(answer, question.correct_sequence, allow_partial)
