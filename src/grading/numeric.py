"""
Numeric question grader.

An answer is correct when it lies within the question's tolerance of the
correct answer, boundary included. There is no partial credit. Feedback shows
both values rounded half away from zero to the question's decimal places.
"""

from __future__ import annotations

from typing import Any

from loguru import logger
from pydantic import ValidationError

from . import QuestionType, register
from .base import NumericGradingResult, ValidationResult
from .models import NumericAnswer, NumericQuestion
from .utils import format_number, round_half_up, within_tolerance
from .validation import coerce_question, validate_numeric_input


def _with_unit(value: float, unit: str | None) -> str:
    return f"{format_number(value)} {unit}" if unit else format_number(value)


def grade_numeric_question(user_answer: float, question: NumericQuestion | dict) -> NumericGradingResult:
    """
    Grade a numeric answer.

    Args:
        user_answer: The student's parsed numeric answer
        question: Question with correct answer, tolerance and decimal places

    Returns:
        NumericGradingResult with score 1.0 or 0.0
    """
    question = coerce_question(NumericQuestion, question)
    correct = question.correct_answer
    tolerance = question.tolerance
    unit = question.unit

    is_correct = within_tolerance(user_answer, correct, tolerance)
    rounded_user = round_half_up(user_answer, question.decimal_places)
    rounded_correct = round_half_up(correct, question.decimal_places)

    if is_correct:
        if user_answer == correct:
            feedback = f"Correct! The exact answer is {_with_unit(rounded_correct, unit)}."
        else:
            feedback = (
                f"Correct! Your answer {_with_unit(rounded_user, unit)} is within the "
                f"acceptable range of {_with_unit(rounded_correct, unit)} ± {format_number(tolerance)}."
            )
    else:
        feedback = (
            f"Incorrect. Your answer was {_with_unit(rounded_user, unit)}. "
            f"The correct answer is {_with_unit(rounded_correct, unit)}"
        )
        if tolerance > 0:
            feedback += f" (± {format_number(tolerance)})"
        feedback += "."

    logger.debug(f"Numeric answer {user_answer} vs {correct} ±{tolerance}: correct={is_correct}")

    return NumericGradingResult(
        is_correct=is_correct,
        score=1.0 if is_correct else 0.0,
        feedback=feedback,
        user_answer=rounded_user,
        correct_answer=rounded_correct,
    )


@register(QuestionType.NUMERIC)
class NumericGrader:
    """Grader for numeric questions."""

    def validate(self, question: NumericQuestion | dict, answer: Any) -> ValidationResult:
        """Accept a typed string, a bare number, or a NUMERIC answer payload."""
        question = coerce_question(NumericQuestion, question)

        if isinstance(answer, str):
            return validate_numeric_input(answer, question.min_value, question.max_value)

        if isinstance(answer, (int, float)) and not isinstance(answer, bool):
            try:
                raw = repr(float(answer))
            except OverflowError:
                return ValidationResult(is_valid=False, error="Please enter a valid number")
        else:
            try:
                raw = repr(NumericAnswer.model_validate(answer).value)
            except ValidationError:
                return ValidationResult(is_valid=False, error="Please enter a valid number")

        return validate_numeric_input(raw, question.min_value, question.max_value)

    def grade(self, question: NumericQuestion | dict, answer: Any, **options: Any) -> NumericGradingResult:
        """Validate, then grade with tolerance."""
        question = coerce_question(NumericQuestion, question)
        validation = self.validate(question, answer)

        if not validation.is_valid:
            logger.debug(f"Numeric answer rejected: {validation.error}")
            return NumericGradingResult(
                is_correct=False,
                score=0.0,
                feedback=validation.error or "Please enter a valid number",
                error=validation.error,
                user_answer=None,
                correct_answer=round_half_up(question.correct_answer, question.decimal_places),
            )

        return grade_numeric_question(validation.value, question)
