"""
Presentation presets for rating and dropdown questions.

Used by question builders to fill in sensible defaults; the graders themselves
do not depend on any of this.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .models import DropdownOption, RatingType

RATING_TYPES: dict[RatingType, dict[str, Any]] = {
    RatingType.STARS: {
        "name": "Stars",
        "description": "Star rating (★★★★★)",
        "icon": "★",
        "default_min": 1,
        "default_max": 5,
        "max_scale": 10,
    },
    RatingType.NUMBERS: {
        "name": "Numbers",
        "description": "Numeric scale (1-10)",
        "icon": "1-10",
        "default_min": 1,
        "default_max": 10,
        "max_scale": 10,
    },
    RatingType.EMOJI: {
        "name": "Emoji",
        "description": "Emoji scale (😞😐😊)",
        "icon": "😊",
        "default_min": 1,
        "default_max": 5,
        "max_scale": 7,
    },
    RatingType.LIKERT: {
        "name": "Likert Scale",
        "description": "Agreement scale (Strongly Disagree to Strongly Agree)",
        "icon": "Agree",
        "default_min": 1,
        "default_max": 5,
        "max_scale": 7,
    },
}

# Default labels per rating type, keyed by scale size
DEFAULT_RATING_LABELS: dict[RatingType, dict[int, list[str]]] = {
    RatingType.STARS: {
        1: ["Poor"],
        2: ["Poor", "Fair"],
        3: ["Poor", "Fair", "Good"],
        4: ["Poor", "Fair", "Good", "Excellent"],
        5: ["Poor", "Fair", "Good", "Very Good", "Excellent"],
        6: ["Very Poor", "Poor", "Fair", "Good", "Very Good", "Excellent"],
        7: ["Very Poor", "Poor", "Below Average", "Average", "Above Average", "Very Good", "Excellent"],
    },
    RatingType.NUMBERS: {
        5: ["1 - Very Low", "2 - Low", "3 - Medium", "4 - High", "5 - Very High"],
        7: [
            "1 - Very Low", "2 - Low", "3 - Below Average", "4 - Average",
            "5 - Above Average", "6 - High", "7 - Very High",
        ],
        10: [str(n) for n in range(1, 11)],
    },
    RatingType.EMOJI: {
        3: ["😞 Sad", "😐 Neutral", "😊 Happy"],
        5: ["😞 Very Sad", "😟 Sad", "😐 Neutral", "😊 Happy", "😍 Very Happy"],
        7: ["😭 Terrible", "😞 Very Sad", "😟 Sad", "😐 Neutral", "😊 Happy", "😍 Very Happy", "🤩 Amazing"],
    },
    RatingType.LIKERT: {
        3: ["Disagree", "Neutral", "Agree"],
        5: ["Strongly Disagree", "Disagree", "Neutral", "Agree", "Strongly Agree"],
        7: [
            "Strongly Disagree", "Disagree", "Somewhat Disagree", "Neutral",
            "Somewhat Agree", "Agree", "Strongly Agree",
        ],
    },
}


def get_default_labels(rating_type: str | RatingType, scale: int) -> list[str]:
    """
    Default labels for a rating scale with `scale` points.

    Uses the smallest preset scale that is at least `scale` (or the largest
    preset), then samples evenly when it has too many labels or pads with
    "Option N" when it has too few.
    """
    if scale <= 0:
        return []

    try:
        rating_type = RatingType(rating_type)
    except ValueError:
        return []

    presets = DEFAULT_RATING_LABELS[rating_type]
    sizes = sorted(presets)
    closest = next((s for s in sizes if s >= scale), sizes[-1])
    labels = list(presets[closest])

    if len(labels) == scale:
        return labels
    if len(labels) > scale:
        step = len(labels) / scale
        return [labels[int(i * step)] for i in range(scale)]

    while len(labels) < scale:
        labels.append(f"Option {len(labels) + 1}")
    return labels


DROPDOWN_CONFIGS: dict[str, dict[str, Any]] = {
    "basic": {
        "name": "Basic Dropdown",
        "description": "Simple dropdown selection",
        "placeholder": "Select an option...",
        "allow_search": False,
        "show_option_numbers": False,
    },
    "searchable": {
        "name": "Searchable Dropdown",
        "description": "Dropdown with search functionality",
        "placeholder": "Search and select...",
        "allow_search": True,
        "show_option_numbers": False,
    },
    "numbered": {
        "name": "Numbered Options",
        "description": "Dropdown with numbered options",
        "placeholder": "Select an option...",
        "allow_search": False,
        "show_option_numbers": True,
    },
    "advanced": {
        "name": "Advanced Dropdown",
        "description": "Searchable with numbered options",
        "placeholder": "Search and select...",
        "allow_search": True,
        "show_option_numbers": True,
    },
}


def get_dropdown_config(name: str) -> dict[str, Any]:
    """Look up a dropdown preset by name. Raises KeyError for unknown presets."""
    return dict(DROPDOWN_CONFIGS[name])


def format_dropdown_options(
    options: Iterable[DropdownOption | Mapping[str, Any]],
    show_numbers: bool = False,
) -> list[dict[str, str]]:
    """Sort options by order index and build their display text."""
    parsed = [o if isinstance(o, DropdownOption) else DropdownOption.model_validate(o) for o in options]
    ordered = sorted(parsed, key=lambda o: o.order_index)

    return [
        {
            "text": option.text,
            "value": option.text,
            "displayText": f"{i + 1}. {option.text}" if show_numbers else option.text,
        }
        for i, option in enumerate(ordered)
    ]
