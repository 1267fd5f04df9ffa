"""
Question and answer models.

Each question type and each answer type is its own frozen pydantic model,
tagged by a `type` literal so that `Question` and `Answer` are discriminated
unions. Payloads use camelCase keys; attributes are snake_case and either
spelling is accepted on input.

These models carry structural rules only. Authoring rules that graders must
survive at grading time (such as "exactly one correct dropdown option") live
in validation.py.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, StrictInt, TypeAdapter, model_validator
from pydantic.alias_generators import to_camel


class RatingType(str, Enum):
    """Presentation styles for rating questions."""
    STARS = "stars"
    NUMBERS = "numbers"
    EMOJI = "emoji"
    LIKERT = "likert"


class _WireModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )


# =============================================================================
# Questions
# =============================================================================


class _QuestionBase(_WireModel):
    text: str = ""
    order_index: int = Field(0, ge=0)


class NumericQuestion(_QuestionBase):
    type: Literal["NUMERIC"] = "NUMERIC"
    correct_answer: float = Field(..., allow_inf_nan=False)
    tolerance: float = Field(0.0, ge=0, allow_inf_nan=False)
    decimal_places: int = Field(2, ge=0, le=10)
    min_value: float | None = None
    max_value: float | None = None
    unit: str | None = None

    @model_validator(mode="after")
    def _check_bounds(self) -> NumericQuestion:
        if self.min_value is not None and self.max_value is not None:
            if self.min_value > self.max_value:
                raise ValueError("Minimum value must be less than or equal to maximum value")
        if self.min_value is not None and self.correct_answer < self.min_value:
            raise ValueError("Correct answer must be within the specified range")
        if self.max_value is not None and self.correct_answer > self.max_value:
            raise ValueError("Correct answer must be within the specified range")
        return self


class SequenceItem(_WireModel):
    id: str
    text: str = ""


class SequenceQuestion(_QuestionBase):
    type: Literal["SEQUENCE"] = "SEQUENCE"
    items: list[SequenceItem] = Field(default_factory=list)
    correct_sequence: list[str] = Field(..., min_length=2)
    allow_partial_credit: bool = True

    @model_validator(mode="after")
    def _check_permutation(self) -> SequenceQuestion:
        if len(set(self.correct_sequence)) != len(self.correct_sequence):
            raise ValueError("Correct sequence must not contain duplicate items")
        if self.items:
            item_ids = [item.id for item in self.items]
            if sorted(item_ids) != sorted(self.correct_sequence):
                raise ValueError("Correct sequence must be an ordering of all item ids")
        return self

    @property
    def labels(self) -> dict[str, str]:
        """Item id -> display text."""
        return {item.id: item.text for item in self.items}


class RatingQuestion(_QuestionBase):
    type: Literal["RATING"] = "RATING"
    rating_min: int = Field(1, ge=1, le=10)
    rating_max: int = Field(5, ge=2, le=10)
    rating_type: RatingType = RatingType.STARS
    rating_labels: list[str] | None = None
    # Objective grading parameters; ignored while is_subjective is True
    expected_rating: int | None = None
    tolerance: int | None = Field(None, ge=0)
    is_subjective: bool = True

    @model_validator(mode="after")
    def _check_scale(self) -> RatingQuestion:
        if self.rating_max <= self.rating_min:
            raise ValueError("Maximum rating must be greater than minimum rating")
        return self


class DropdownOption(_WireModel):
    text: str = Field(..., min_length=1)
    is_correct: bool = False
    order_index: int = Field(0, ge=0)


class DropdownQuestion(_QuestionBase):
    type: Literal["DROPDOWN"] = "DROPDOWN"
    options: list[DropdownOption] = Field(default_factory=list)
    placeholder: str = "Select an option..."
    allow_search: bool = False
    show_option_numbers: bool = False

    @property
    def correct_option_text(self) -> str:
        """Text of the first option flagged correct, or "" when none is."""
        for option in self.options:
            if option.is_correct:
                return option.text
        return ""


Question = Annotated[
    Union[NumericQuestion, SequenceQuestion, RatingQuestion, DropdownQuestion],
    Field(discriminator="type"),
]
QuestionAdapter: TypeAdapter[Question] = TypeAdapter(Question)


# =============================================================================
# Answers
# =============================================================================


class _AnswerBase(_WireModel):
    question_id: str | None = None


class NumericAnswer(_AnswerBase):
    type: Literal["NUMERIC"]
    value: float = Field(..., allow_inf_nan=False)


class SequenceAnswer(_AnswerBase):
    type: Literal["SEQUENCE"]
    sequence: list[str] = Field(..., min_length=1)


class RatingAnswer(_AnswerBase):
    type: Literal["RATING"]
    rating: StrictInt = Field(..., ge=1, le=10)


class DropdownAnswer(_AnswerBase):
    type: Literal["DROPDOWN"]
    selected_option: str = Field(..., min_length=1)


Answer = Annotated[
    Union[NumericAnswer, SequenceAnswer, RatingAnswer, DropdownAnswer],
    Field(discriminator="type"),
]
AnswerAdapter: TypeAdapter[Answer] = TypeAdapter(Answer)
