"""
Answer grading engine.

Each question type (numeric, sequence, rating, dropdown) has its own module with:
- a pure grade_*_question() function over plain values
- a registered grader class used by grade_answer() for tagged dispatch

Graders are stateless; every call works only on its own inputs.
"""

from enum import Enum
from typing import TYPE_CHECKING, Any, Mapping

from .base import ConfigurationError, GradingResult

if TYPE_CHECKING:
    from .base import QuestionGrader


class QuestionType(str, Enum):
    """Question types with an automatic grader."""
    NUMERIC = "NUMERIC"
    SEQUENCE = "SEQUENCE"
    RATING = "RATING"
    DROPDOWN = "DROPDOWN"


# Grader registry - populated by @register decorator
GRADERS: dict[QuestionType, "QuestionGrader"] = {}


def register(question_type: QuestionType):
    """Decorator to register a question grader."""
    def decorator(cls):
        GRADERS[question_type] = cls()
        return cls
    return decorator


def get_grader(question_type: "str | QuestionType") -> "QuestionGrader | None":
    """Get the grader for a question type."""
    if isinstance(question_type, str):
        try:
            question_type = QuestionType(question_type.upper())
        except ValueError:
            return None
    return GRADERS.get(question_type)


# Import graders to trigger registration
from . import numeric
from . import sequence
from . import rating
from . import dropdown

from .validation import load_question  # noqa: E402


def grade_answer(question: Any, answer: Any, **options: Any) -> GradingResult:
    """
    Grade an answer against a question of any supported type.

    Args:
        question: A question model or a tagged question mapping
        answer: The raw answer payload for that question type
        **options: Type-specific grading options (e.g. case_sensitive, max_score)

    Raises:
        ConfigurationError: If the question is malformed or of an ungradable type.
    """
    if isinstance(question, Mapping):
        question = load_question(question)

    question_type = getattr(question, "type", None)
    grader = get_grader(question_type) if question_type else None
    if grader is None:
        raise ConfigurationError(f"No grader registered for question type: {question_type!r}")

    return grader.grade(question, answer, **options)


__all__ = [
    "ConfigurationError",
    "GRADERS",
    "GradingResult",
    "QuestionType",
    "get_grader",
    "grade_answer",
    "register",
]
