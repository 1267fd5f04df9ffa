"""
Answer and question validators.

Answer validators return a ValidationResult and never raise; graders turn a
failed validation into a zero-score result. Question parsing raises
ConfigurationError, since a question that cannot be parsed is a caller bug
rather than a student mistake.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from loguru import logger
from pydantic import BaseModel, ValidationError

from .base import ConfigurationError, ValidationResult
from .models import (
    AnswerAdapter,
    DropdownAnswer,
    DropdownQuestion,
    QuestionAdapter,
    RatingAnswer,
    SequenceAnswer,
)
from .utils import format_number

ModelT = TypeVar("ModelT", bound=BaseModel)

# Leading float literal, the way browsers' parseFloat reads user input ("12abc" -> 12)
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _format_errors(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()))
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


# =============================================================================
# Raw Input
# =============================================================================


def validate_numeric_input(
    raw: str,
    min_value: float | None = None,
    max_value: float | None = None,
) -> ValidationResult:
    """
    Parse a typed numeric answer and check it against optional bounds.

    Returns the parsed float as `value` when valid.
    """
    if not raw or not raw.strip():
        return ValidationResult(is_valid=False, error="Please enter a number")

    match = _LEADING_NUMBER.match(raw)
    if not match:
        return ValidationResult(is_valid=False, error="Please enter a valid number")

    value = float(match.group(1))
    if not math.isfinite(value):
        return ValidationResult(is_valid=False, error="Please enter a valid number")

    if min_value is not None and value < min_value:
        return ValidationResult(
            is_valid=False,
            error=f"Value must be at least {format_number(min_value)}",
        )

    if max_value is not None and value > max_value:
        return ValidationResult(
            is_valid=False,
            error=f"Value must be at most {format_number(max_value)}",
        )

    return ValidationResult(is_valid=True, value=value)


# =============================================================================
# Answers
# =============================================================================


def validate_sequence_answer(answer: Any, correct_sequence: Sequence[str]) -> ValidationResult:
    """Check a sequence answer is a permutation of the correct sequence."""
    try:
        parsed = SequenceAnswer.model_validate(answer)
    except ValidationError:
        return ValidationResult(is_valid=False, error="Invalid answer format")

    if len(parsed.sequence) != len(correct_sequence):
        return ValidationResult(
            is_valid=False,
            error=f"Answer must contain exactly {len(correct_sequence)} items",
        )

    correct_set = set(correct_sequence)
    if len(set(parsed.sequence)) != len(correct_set):
        return ValidationResult(is_valid=False, error="Answer contains duplicate or missing items")

    if any(item not in correct_set for item in parsed.sequence):
        return ValidationResult(is_valid=False, error="Answer contains invalid items")

    return ValidationResult(is_valid=True, value=parsed)


def validate_rating_answer(answer: Any, rating_min: int, rating_max: int) -> ValidationResult:
    """Check a rating answer is a whole number inside the question's scale."""
    try:
        parsed = RatingAnswer.model_validate(answer)
    except ValidationError:
        return ValidationResult(is_valid=False, error="Invalid rating format")

    if parsed.rating < rating_min or parsed.rating > rating_max:
        return ValidationResult(
            is_valid=False,
            error=f"Rating must be between {rating_min} and {rating_max}",
        )

    return ValidationResult(is_valid=True, value=parsed)


def validate_dropdown_answer(answer: Any) -> ValidationResult:
    """Check a dropdown answer carries the DROPDOWN tag and a non-blank selection."""
    if isinstance(answer, DropdownAnswer):
        answer = answer.model_dump(by_alias=True)

    if not answer or not isinstance(answer, Mapping):
        return ValidationResult(is_valid=False, error="Answer must be an object")

    if answer.get("type") != "DROPDOWN":
        return ValidationResult(is_valid=False, error="Answer type must be DROPDOWN")

    selected = answer.get("selectedOption", answer.get("selected_option"))
    if not selected or not isinstance(selected, str):
        return ValidationResult(
            is_valid=False,
            error="Selected option is required and must be a string",
        )

    if not selected.strip():
        return ValidationResult(is_valid=False, error="Please select a valid option")

    return ValidationResult(
        is_valid=True,
        value=DropdownAnswer(type="DROPDOWN", selected_option=selected),
    )


def parse_answer(payload: Any) -> ValidationResult:
    """Parse a tagged answer payload into its answer model."""
    try:
        return ValidationResult(is_valid=True, value=AnswerAdapter.validate_python(payload))
    except ValidationError as e:
        return ValidationResult(is_valid=False, error=f"Invalid answer format: {_format_errors(e)}")


# =============================================================================
# Questions
# =============================================================================


def coerce_question(model: type[ModelT], question: Any) -> ModelT:
    """
    Return `question` as an instance of `model`, parsing mappings.

    Only structural rules apply here, so a dropdown with no correct option
    still parses and grades (to an empty correct option).
    """
    if isinstance(question, model):
        return question
    try:
        return model.model_validate(question)
    except ValidationError as e:
        raise ConfigurationError(
            f"Invalid {model.__name__} configuration: {_format_errors(e)}"
        ) from e


def load_question(payload: Any) -> Any:
    """Parse a tagged question payload with structural rules only."""
    if isinstance(payload, BaseModel):
        return payload
    try:
        return QuestionAdapter.validate_python(payload)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid question configuration: {_format_errors(e)}") from e


def validate_dropdown_question(question: DropdownQuestion) -> ValidationResult:
    """Authoring rules for dropdown questions."""
    if len(question.options) < 2:
        return ValidationResult(
            is_valid=False,
            error="Dropdown questions must have at least 2 options",
        )
    correct_count = sum(1 for option in question.options if option.is_correct)
    if correct_count != 1:
        return ValidationResult(
            is_valid=False,
            error="Dropdown questions must have exactly one correct option",
        )
    return ValidationResult(is_valid=True, value=question)


def validate_question_config(question: Any) -> ValidationResult:
    """Run the authoring rules that the structural models leave out."""
    if isinstance(question, DropdownQuestion):
        return validate_dropdown_question(question)
    return ValidationResult(is_valid=True, value=question)


def parse_question(payload: Any) -> Any:
    """
    Parse a question payload for authoring, enforcing every configuration rule.

    Raises:
        ConfigurationError: If the payload is not a valid question.
    """
    question = load_question(payload)

    result = validate_question_config(question)
    if not result.is_valid:
        logger.warning(f"Rejected {getattr(question, 'type', '?')} question: {result.error}")
        raise ConfigurationError(result.error)

    return question
