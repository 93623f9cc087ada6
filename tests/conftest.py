"""Pytest configuration shared by the unit and integration suites."""

import sys
from pathlib import Path

import pytest

# Add the project root and src directory to Python path so tests can import properly
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))
sys.path.insert(0, str(project_root / "src"))

from astra.services.context import DialogueContext  # noqa: E402


@pytest.fixture
def empty_context():
    """A fresh dialogue context with the default memory bound."""
    return DialogueContext()
