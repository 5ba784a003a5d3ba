"""Tests for DynamoDB repository."""

from datetime import UTC, date, datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from trip_planner.data.models import Credential, Session, User
from trip_planner.data.repository import DynamoDBRepository
from trip_planner.data.trips import Itinerary, Trip


@pytest.fixture
def mock_db():
    return MagicMock()


@pytest.fixture
def mock_repo(mock_db):
    return DynamoDBRepository(mock_db)


def _trip(trip_id: str, user_id: str = "u1", created: datetime | None = None) -> Trip:
    return Trip(
        trip_id=trip_id,
        user_id=user_id,
        destination="Lisbon",
        start_date=date(2025, 7, 1),
        end_date=date(2025, 7, 4),
        budget=1500.5,
        created_at=created or datetime(2025, 5, 1, tzinfo=UTC),
        itinerary=Itinerary(total_estimated_cost=1234.75),
    )


def test_save_user(mock_repo, mock_db):
    user = User(user_id="123", email="test@example.com", display_name="Test")
    mock_repo.save_user(user)
    mock_db.put_item.assert_called_once()
    item = mock_db.put_item.call_args[0][0]
    assert item["PK"] == "USER#123"
    assert item["SK"] == "PROFILE"
    assert item["GSI1PK"] == "EMAIL#test@example.com"
    assert item["EntityType"] == "User"
    assert "pk" not in item["Data"]
    assert item["Metadata"]["createdAt"] == user.created_at.isoformat()


def test_get_user(mock_repo, mock_db):
    mock_db.get_item.return_value = {
        "PK": "USER#123",
        "SK": "PROFILE",
        "Data": {
            "user_id": "123",
            "email": "test@example.com",
            "display_name": "Test",
        },
        "EntityType": "User",
        "Version": 1,
    }
    user = mock_repo.get_user("123")
    assert user is not None
    assert user.display_name == "Test"
    mock_db.get_item.assert_called_with("USER#123", "PROFILE")


def test_get_user_not_found(mock_repo, mock_db):
    mock_db.get_item.return_value = None
    assert mock_repo.get_user("999") is None


def test_get_user_by_email_uses_gsi(mock_repo, mock_db):
    mock_db.query_gsi1.return_value = []
    assert mock_repo.get_user_by_email("x@example.com") is None
    mock_db.query_gsi1.assert_called_once_with("EMAIL#x@example.com", limit=1)


def test_credential_round_trip(repo):
    repo.save_credential(
        Credential(user_id="u1", salt="aa", password_hash="bb", iterations=1000)
    )
    credential = repo.get_credential("u1")
    assert credential.password_hash == "bb"
    assert credential.iterations == 1000
    assert repo.get_credential("u2") is None


def test_save_session_sets_ttl(mock_repo, mock_db):
    session = Session(token="tok", user_id="u1", ttl=1_900_000_000)
    mock_repo.save_session(session)
    item = mock_db.put_item.call_args[0][0]
    assert item["PK"] == "SESSION#tok"
    assert item["TTL"] == 1_900_000_000
    assert item["GSI1PK"] == "USER#u1#SESSION"


def test_session_get_and_delete(repo):
    repo.save_session(Session(token="tok", user_id="u1", ttl=1_900_000_000))
    assert repo.get_session("tok").user_id == "u1"
    repo.delete_session("tok")
    assert repo.get_session("tok") is None


def test_save_trip_stores_decimals(mock_repo, mock_db):
    mock_repo.save_trip(_trip("t1"))
    item = mock_db.put_item.call_args[0][0]
    assert item["PK"] == "TRIP#t1"
    assert item["SK"] == "METADATA"
    assert item["GSI1PK"] == "USER#u1#TRIP"
    assert item["Data"]["budget"] == Decimal("1500.5")
    assert item["Data"]["itinerary"]["total_estimated_cost"] == Decimal("1234.75")


def test_trip_round_trip(repo):
    repo.save_trip(_trip("t1"))
    trip = repo.get_trip("t1")
    assert trip.destination == "Lisbon"
    assert trip.budget == 1500.5
    assert trip.start_date == date(2025, 7, 1)
    assert trip.itinerary.total_estimated_cost == 1234.75
    assert repo.get_trip("missing") is None


def test_list_user_trips_newest_first(repo):
    repo.save_trip(_trip("old", created=datetime(2025, 1, 1, tzinfo=UTC)))
    repo.save_trip(_trip("new", created=datetime(2025, 3, 1, tzinfo=UTC)))
    repo.save_trip(_trip("mid", created=datetime(2025, 2, 1, tzinfo=UTC)))
    repo.save_trip(_trip("other", user_id="u2"))

    trips = repo.list_user_trips("u1")
    assert [t.trip_id for t in trips] == ["new", "mid", "old"]


def test_delete_trip(repo):
    repo.save_trip(_trip("t1"))
    repo.delete_trip("t1")
    assert repo.get_trip("t1") is None
