"""
Test configuration for unit tests.
"""

from datetime import date

import pytest

from tests.unit.fake_dynamodb import FakeDynamoDBClient
from trip_planner.config import AuthConfig
from trip_planner.data.repository import DynamoDBRepository
from trip_planner.data.trips import Interest, TripRequest
from trip_planner.services.auth_service import AuthService

TODAY = date(2025, 6, 1)


@pytest.fixture
def fake_db():
    return FakeDynamoDBClient()


@pytest.fixture
def repo(fake_db):
    return DynamoDBRepository(fake_db)


@pytest.fixture
def auth(repo):
    return AuthService(
        repo, AuthConfig(password_hash_iterations=1000), google_client_id="client-123"
    )


@pytest.fixture
def today():
    return TODAY


@pytest.fixture
def trip_request():
    return TripRequest(
        destination="Kyoto",
        start_date=date(2025, 6, 10),
        end_date=date(2025, 6, 13),
        budget=2500,
        travelers=2,
        interests=[Interest.HISTORY, Interest.FOOD],
        notes="We prefer quiet mornings",
    )


@pytest.fixture
def itinerary_data():
    """A model reply's JSON as Gemini is asked to produce it."""
    return {
        "days": [
            {
                "date": "2025-06-10",
                "dayNumber": 1,
                "morning": {
                    "activity": "Fushimi Inari Shrine",
                    "description": "Walk the torii gate trail before the crowds.",
                    "estimatedCost": 0,
                },
                "afternoon": {
                    "activity": "Nishiki Market",
                    "description": "Street food tasting.",
                    "estimatedCost": "$45.50",
                },
                "evening": {
                    "activity": "Gion walk",
                    "description": "Historic geisha district at dusk.",
                    "estimatedCost": 20,
                },
                "accommodation": {
                    "name": "Machiya Inn",
                    "description": "Traditional townhouse stay.",
                    "estimatedCost": 180,
                },
            },
            {
                "date": "2025-06-11",
                "dayNumber": 2,
                "morning": {
                    "activity": "Arashiyama Bamboo Grove",
                    "description": "Early visit.",
                    "estimatedCost": 10,
                },
            },
        ],
        "totalEstimatedCost": 1200,
        "generalTips": ["Buy an ICOCA card", "Carry cash"],
        "accommodationSuggestions": ["Machiya Inn"],
        "transportationOptions": ["City buses"],
    }
