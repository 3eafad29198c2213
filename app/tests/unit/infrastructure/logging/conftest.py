"""Fixtures for infrastructure.logging tests."""

from unittest.mock import Mock

import pytest

from infrastructure.configuration import Settings


@pytest.fixture
def mock_settings():
    """Mock Settings instance for testing."""
    settings = Mock(spec=Settings)
    settings.LOG_LEVEL = "INFO"
    settings.LOG_MAX_VALUE_LENGTH = 256
    settings.is_production = False
    return settings
