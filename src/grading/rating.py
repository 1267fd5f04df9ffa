"""
Rating question grader.

Two grading modes:
1. Subjective (default, surveys/feedback) - any rating inside the scale is correct
2. Objective - compared against an expected rating with an optional tolerance,
   with partial credit that falls off linearly with distance

Objective mode without an expected rating falls back to subjective.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from loguru import logger

from . import QuestionType, register
from .base import ConfigurationError, RatingGradingResult, ValidationResult
from .models import RatingQuestion, RatingType
from .utils import format_number, round_half_up
from .validation import coerce_question, validate_rating_answer

if TYPE_CHECKING:
    from .statistics import RatingStatistics


# Sentiment buckets by percentile position on the scale, highest first
SENTIMENT_BUCKETS = [
    (80, "very positive"),
    (60, "positive"),
    (40, "neutral"),
    (20, "somewhat negative"),
]

PARTIAL_CREDIT_BANDS = [
    (0.8, "You were quite close to the expected rating."),
    (0.6, "You were moderately close to the expected rating."),
    (0.4, "Your rating was somewhat different from what was expected."),
    (0.2, "Your rating was quite different from the expected value."),
]


def _percentile(rating: int, rating_min: int, rating_max: int) -> float:
    return (rating - rating_min) / (rating_max - rating_min) * 100


def sentiment_for(rating: int, rating_min: int, rating_max: int) -> str:
    """Sentiment bucket for a rating's position on its scale."""
    percentage = _percentile(rating, rating_min, rating_max)
    for threshold, word in SENTIMENT_BUCKETS:
        if percentage >= threshold:
            return word
    return "negative"


def _type_specific_remark(rating_type: str, rating: int, rating_min: int, rating_max: int) -> str:
    span = rating_max - rating_min
    high = span * 0.8 + rating_min
    low = span * 0.2 + rating_min

    if rating_type == RatingType.STARS.value:
        if rating == rating_max:
            return "Excellent rating!"
        if rating == rating_min:
            return "We appreciate your honest feedback"
    elif rating_type == RatingType.EMOJI.value:
        if rating >= high:
            return "Great to see you're happy!"
        if rating <= low:
            return "We'll work to improve your experience"
    elif rating_type == RatingType.LIKERT.value:
        if rating >= high:
            return "Strong agreement noted"
        if rating <= low:
            return "Your disagreement is valuable feedback"
    elif rating_type == RatingType.NUMBERS.value:
        percentage = round_half_up(_percentile(rating, rating_min, rating_max))
        return f"That's {format_number(percentage)}% on our scale"

    return ""


def _subjective_feedback(rating: int, rating_type: str, rating_min: int, rating_max: int) -> str:
    sentiment = sentiment_for(rating, rating_min, rating_max)
    remark = _type_specific_remark(rating_type, rating, rating_min, rating_max)
    tail = f". {remark}" if remark else "."
    return f"Thank you for your {sentiment} rating of {rating}{tail} Your feedback has been recorded."


def _partial_credit_feedback(score: float) -> str:
    for threshold, text in PARTIAL_CREDIT_BANDS:
        if score >= threshold:
            return text
    return "Your rating was significantly different from what was expected."


def grade_rating_question(
    user_answer: Any,
    rating_min: int,
    rating_max: int,
    rating_type: str | RatingType = RatingType.STARS,
    expected_rating: int | None = None,
    tolerance: int | None = None,
    is_subjective: bool = True,
) -> RatingGradingResult:
    """
    Grade a rating answer.

    Args:
        user_answer: Raw answer payload ({"type": "RATING", "rating": n})
        rating_min: Lowest point on the scale
        rating_max: Highest point on the scale
        rating_type: stars, numbers, emoji or likert
        expected_rating: Target rating for objective grading
        tolerance: Allowed distance from the expected rating (default 0)
        is_subjective: Treat any valid rating as correct

    Raises:
        ConfigurationError: If rating_max is not greater than rating_min.
    """
    if rating_max <= rating_min:
        raise ConfigurationError(
            f"Maximum rating ({rating_max}) must be greater than minimum rating ({rating_min})"
        )

    rating_type = rating_type.value if isinstance(rating_type, RatingType) else str(rating_type)
    common = {
        "expected_rating": expected_rating,
        "rating_type": rating_type,
        "scale_min": rating_min,
        "scale_max": rating_max,
    }

    validation = validate_rating_answer(user_answer, rating_min, rating_max)
    if not validation.is_valid:
        logger.debug(f"Rating answer rejected: {validation.error}")
        return RatingGradingResult(
            is_correct=False,
            score=0.0,
            feedback=validation.error or "Invalid rating format",
            error=validation.error,
            user_rating=0,
            **common,
        )

    rating = validation.value.rating

    if is_subjective or expected_rating is None:
        return RatingGradingResult(
            is_correct=True,
            score=1.0,
            feedback=_subjective_feedback(rating, rating_type, rating_min, rating_max),
            user_rating=rating,
            **common,
        )

    actual_tolerance = tolerance or 0
    distance = abs(rating - expected_rating)

    if distance <= actual_tolerance:
        if actual_tolerance > 0:
            feedback = f"Correct! Your rating of {rating} is within the acceptable range."
        else:
            feedback = f"Perfect! You gave the exact expected rating of {expected_rating}."
        return RatingGradingResult(
            is_correct=True,
            score=1.0,
            feedback=feedback,
            user_rating=rating,
            **common,
        )

    max_distance = max(abs(rating_max - expected_rating), abs(rating_min - expected_rating))
    score = max(0.0, 1 - distance / max_distance)
    logger.debug(f"Rating {rating} vs expected {expected_rating}: partial score {score:.3f}")

    return RatingGradingResult(
        is_correct=False,
        score=score,
        feedback=(
            f"Your rating of {rating} differs from the expected rating of {expected_rating}. "
            f"{_partial_credit_feedback(score)}"
        ),
        user_rating=rating,
        **common,
    )


def generate_detailed_rating_feedback(
    result: RatingGradingResult,
    statistics: RatingStatistics | None = None,
) -> str:
    """Append overall response statistics to a rating result's feedback."""
    feedback = result.feedback

    if statistics and statistics.total > 1:
        feedback += (
            f"\n\nOverall statistics: Average rating is {format_number(statistics.average)}, "
            f"with {statistics.total} total responses."
        )
        if len(statistics.mode) == 1:
            feedback += f" The most common rating is {format_number(statistics.mode[0])}."

    return feedback


@register(QuestionType.RATING)
class RatingGrader:
    """Grader for rating questions."""

    def validate(self, question: RatingQuestion | dict, answer: Any) -> ValidationResult:
        question = coerce_question(RatingQuestion, question)
        return validate_rating_answer(answer, question.rating_min, question.rating_max)

    def grade(self, question: RatingQuestion | dict, answer: Any, **options: Any) -> RatingGradingResult:
        question = coerce_question(RatingQuestion, question)
        return grade_rating_question(
            answer,
            question.rating_min,
            question.rating_max,
            question.rating_type,
            expected_rating=options.get("expected_rating", question.expected_rating),
            tolerance=options.get("tolerance", question.tolerance),
            is_subjective=options.get("is_subjective", question.is_subjective),
        )
