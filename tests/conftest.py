"""
Pytest configuration for the Trip Planner tests.
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Settings must exist before trip_planner.config builds the global config
os.environ.setdefault("GEMINI_API_KEY", "test-key")
os.environ.setdefault("DYNAMODB_TABLE_NAME", "trip-planner-test")

from trip_planner.config import (  # noqa: E402
    APIConfig,
    AuthConfig,
    GenerationConfig,
    SystemConfig,
    TripPlannerConfig,
)
from trip_planner.utils import LogLevel, setup_logging  # noqa: E402


@pytest.fixture(scope="session", autouse=True)
def setup_test_logging():
    """Set up logging for tests."""
    setup_logging(LogLevel.DEBUG)


@pytest.fixture
def mock_gemini_client():
    """Mock Gemini client for testing."""
    mock_client = MagicMock()

    # Mock the aio.models.generate_content method
    mock_response = MagicMock()
    mock_response.text = "Test response"

    mock_client.aio = MagicMock()
    mock_client.aio.models = MagicMock()
    mock_client.aio.models.generate_content = AsyncMock(return_value=mock_response)

    return mock_client


@pytest.fixture
def test_config():
    """Test application configuration."""
    return TripPlannerConfig(
        api=APIConfig(
            gemini_api_key="test-key",
            aws_region="ap-northeast-1",
            dynamodb_table_name="trip-planner-test",
        ),
        system=SystemConfig(log_level=LogLevel.DEBUG, environment="test"),
        # Few iterations keep password hashing fast in tests
        auth=AuthConfig(password_hash_iterations=1000),
        generation=GenerationConfig(retry_min_wait=0, retry_max_wait=0),
    )
