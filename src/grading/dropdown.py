"""
Dropdown question grader.

Matches the selected option text against the question's correct option,
case-insensitively unless asked otherwise. Near misses can earn partial credit
from normalized Levenshtein similarity, but the match type stays "none": only
an exact match is ever reported as "exact".
"""

from __future__ import annotations

from typing import Any

from loguru import logger

from config import get_settings

from . import QuestionType, register
from .base import DropdownGradingResult, ValidationResult
from .models import DropdownQuestion
from .similarity import string_similarity
from .utils import round_half_up
from .validation import coerce_question, validate_dropdown_answer


def _feedback_correct(selected: str) -> str:
    return (
        f'Excellent! You correctly selected "{selected}". '
        "This demonstrates good understanding of the concept."
    )


def _feedback_partial(selected: str, correct: str, similarity: float) -> str:
    percentage = int(round_half_up(similarity * 100))
    return (
        f'Your selection "{selected}" is close to the correct answer "{correct}" '
        f"({percentage}% match). Review the options more carefully."
    )


def _feedback_incorrect(selected: str, correct: str, option_count: int) -> str:
    if option_count > get_settings().dropdown_large_option_count:
        encouragement = "With many options available, take time to read each one carefully."
    else:
        encouragement = "Consider reviewing the question and available options."
    return (
        f'Your selection "{selected}" is not correct. '
        f'The correct answer is "{correct}". {encouragement}'
    )


def grade_dropdown_question(
    question: DropdownQuestion | dict,
    answer: Any,
    case_sensitive: bool = False,
    allow_partial_credit: bool = False,
    max_score: float = 1.0,
) -> DropdownGradingResult:
    """
    Grade a dropdown selection.

    Args:
        question: Dropdown question with its options
        answer: Raw answer payload ({"type": "DROPDOWN", "selectedOption": "..."})
        case_sensitive: Compare option text case-sensitively
        allow_partial_credit: Award scaled credit for near-miss selections
        max_score: Score awarded for a correct selection

    Returns:
        DropdownGradingResult with score in [0, max_score]
    """
    question = coerce_question(DropdownQuestion, question)
    correct_option = question.correct_option_text
    if not correct_option:
        logger.warning("Dropdown question has no option flagged correct; grading against empty text")

    validation = validate_dropdown_answer(answer)
    if not validation.is_valid:
        logger.debug(f"Dropdown answer rejected: {validation.error}")
        return DropdownGradingResult(
            is_correct=False,
            score=0.0,
            feedback=f"Invalid answer format: {validation.error}",
            error=validation.error,
            max_score=max_score,
            selected_option="",
            correct_option=correct_option,
            case_sensitive=case_sensitive,
        )

    selected = validation.value.selected_option.strip()

    if case_sensitive:
        is_exact = selected == correct_option
    else:
        is_exact = selected.lower() == correct_option.lower()

    if is_exact:
        return DropdownGradingResult(
            is_correct=True,
            score=max_score,
            feedback=_feedback_correct(selected),
            max_score=max_score,
            selected_option=selected,
            correct_option=correct_option,
            answer_type="correct",
            match_type="exact",
            case_sensitive=case_sensitive,
        )

    if allow_partial_credit:
        similarity = string_similarity(selected, correct_option, case_sensitive)
        if similarity > get_settings().dropdown_similarity_threshold:
            logger.debug(f"Dropdown near miss '{selected}' ~ '{correct_option}': {similarity:.3f}")
            return DropdownGradingResult(
                is_correct=False,
                score=round_half_up(max_score * similarity, 2),
                feedback=_feedback_partial(selected, correct_option, similarity),
                max_score=max_score,
                selected_option=selected,
                correct_option=correct_option,
                partial_credit=True,
                case_sensitive=case_sensitive,
            )

    return DropdownGradingResult(
        is_correct=False,
        score=0.0,
        feedback=_feedback_incorrect(selected, correct_option, len(question.options)),
        max_score=max_score,
        selected_option=selected,
        correct_option=correct_option,
        case_sensitive=case_sensitive,
    )


@register(QuestionType.DROPDOWN)
class DropdownGrader:
    """Grader for dropdown questions."""

    def validate(self, question: DropdownQuestion | dict, answer: Any) -> ValidationResult:
        return validate_dropdown_answer(answer)

    def grade(self, question: DropdownQuestion | dict, answer: Any, **options: Any) -> DropdownGradingResult:
        return grade_dropdown_question(
            question,
            answer,
            case_sensitive=options.get("case_sensitive", False),
            allow_partial_credit=options.get("allow_partial_credit", False),
            max_score=options.get("max_score", 1.0),
        )
