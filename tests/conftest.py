"""
Shared fixtures for the widget tests.
"""
import pytest

from tests.helpers import MemoryStorage


@pytest.fixture
def storage():
    return MemoryStorage()
