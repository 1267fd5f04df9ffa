"""
Base protocol and result types for question graders.

Graders never raise on bad answers: validation problems come back as a
zero-score result carrying the validator's message. The only exception the
engine raises is ConfigurationError, for question configurations that cannot
be graded at all.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol


class ConfigurationError(Exception):
    """Raised when a question configuration is malformed."""
    pass


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating an answer or raw input."""
    is_valid: bool
    value: Any = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"isValid": self.is_valid}
        if self.value is not None:
            data["value"] = self.value
        if self.error is not None:
            data["error"] = self.error
        return data


# =============================================================================
# Grading Results
# =============================================================================


@dataclass(frozen=True)
class GradingResult:
    """
    Result of grading a single answer.

    Score is on a 0.0-1.0 scale except for dropdown questions, where it is
    scaled by the question's max score.
    """

    is_correct: bool
    score: float
    feedback: str
    error: str | None = None  # Set only when the answer failed validation

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase wire shape."""
        data: dict[str, Any] = {
            "isCorrect": self.is_correct,
            "score": self.score,
            "feedback": self.feedback,
        }
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass(frozen=True)
class NumericGradingResult(GradingResult):
    """Numeric result; both answers rounded to the question's decimal places."""
    user_answer: float | None = None
    correct_answer: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["userAnswer"] = self.user_answer
        data["correctAnswer"] = self.correct_answer
        return data


@dataclass(frozen=True)
class SequenceGradingResult(GradingResult):
    partial_credit: float | None = None
    correct_sequence: list[str] = field(default_factory=list)
    user_sequence: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        if self.partial_credit is not None:
            data["partialCredit"] = self.partial_credit
        data["correctSequence"] = list(self.correct_sequence)
        data["userSequence"] = list(self.user_sequence)
        return data


@dataclass(frozen=True)
class RatingGradingResult(GradingResult):
    user_rating: int = 0
    expected_rating: int | None = None
    rating_type: str = "stars"
    scale_min: int = 1
    scale_max: int = 5

    @property
    def scale(self) -> dict[str, int]:
        return {"min": self.scale_min, "max": self.scale_max}

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["userRating"] = self.user_rating
        if self.expected_rating is not None:
            data["expectedRating"] = self.expected_rating
        data["ratingType"] = self.rating_type
        data["scale"] = self.scale
        return data


@dataclass(frozen=True)
class DropdownGradingResult(GradingResult):
    """
    Dropdown result.

    match_type is only ever "exact" or "none": a partial-credit award is
    reported through partial_credit, never through match_type.
    """

    max_score: float = 1.0
    selected_option: str = ""
    correct_option: str = ""
    partial_credit: bool = False
    answer_type: str = "incorrect"  # correct | incorrect
    match_type: str = "none"  # exact | none
    case_sensitive: bool = False

    @property
    def grading_details(self) -> dict[str, Any]:
        return {
            "answerType": self.answer_type,
            "matchType": self.match_type,
            "caseSensitive": self.case_sensitive,
        }

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data.update({
            "maxScore": self.max_score,
            "selectedOption": self.selected_option,
            "correctOption": self.correct_option,
            "partialCredit": self.partial_credit,
            "gradingDetails": self.grading_details,
        })
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DropdownGradingResult:
        """Rebuild a result from its wire shape (used when aggregating stored results)."""
        details = data.get("gradingDetails") or {}
        return cls(
            is_correct=bool(data.get("isCorrect", False)),
            score=float(data.get("score", 0.0)),
            feedback=str(data.get("feedback", "")),
            error=data.get("error"),
            max_score=float(data.get("maxScore", 1.0)),
            selected_option=str(data.get("selectedOption", "")),
            correct_option=str(data.get("correctOption", "")),
            partial_credit=bool(data.get("partialCredit", False)),
            answer_type=details.get("answerType", "incorrect"),
            match_type=details.get("matchType", "none"),
            case_sensitive=bool(details.get("caseSensitive", False)),
        )


# =============================================================================
# Grader Protocol
# =============================================================================


class QuestionGrader(Protocol):
    """Protocol for per-type question graders."""

    def validate(self, question: Any, answer: Any) -> ValidationResult:
        """Check the answer's shape and range against the question."""
        ...

    def grade(self, question: Any, answer: Any, **options: Any) -> GradingResult:
        """Grade the answer and return a result. Never raises on bad answers."""
        ...
