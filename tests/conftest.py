"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def numeric_question():
    """Gravity question with a tolerance window."""
    return {
        "type": "NUMERIC",
        "text": "Acceleration due to gravity at sea level?",
        "orderIndex": 0,
        "correctAnswer": 9.8,
        "tolerance": 0.2,
        "decimalPlaces": 1,
        "unit": "m/s²",
    }


@pytest.fixture
def sequence_question():
    """Software lifecycle ordering question."""
    return {
        "type": "SEQUENCE",
        "text": "Order the lifecycle phases",
        "orderIndex": 1,
        "items": [
            {"id": "a", "text": "Requirements"},
            {"id": "b", "text": "Design"},
            {"id": "c", "text": "Implementation"},
            {"id": "d", "text": "Testing"},
        ],
        "correctSequence": ["a", "b", "c", "d"],
    }


@pytest.fixture
def rating_question():
    """Five-star satisfaction question."""
    return {
        "type": "RATING",
        "text": "How satisfied are you with the course?",
        "orderIndex": 2,
        "ratingMin": 1,
        "ratingMax": 5,
        "ratingType": "stars",
    }


@pytest.fixture
def dropdown_question():
    """Capital city dropdown with four options."""
    return {
        "type": "DROPDOWN",
        "text": "What is the capital of France?",
        "orderIndex": 3,
        "options": [
            {"text": "London", "isCorrect": False, "orderIndex": 0},
            {"text": "Paris", "isCorrect": True, "orderIndex": 1},
            {"text": "Berlin", "isCorrect": False, "orderIndex": 2},
            {"text": "Madrid", "isCorrect": False, "orderIndex": 3},
        ],
    }
