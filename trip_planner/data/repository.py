"""
DynamoDB repository implementing the service's access patterns.

Maps domain models to/from DynamoDB single-table items.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel

from trip_planner.data.dynamodb import DynamoDBClient
from trip_planner.data.models import Credential, EntityType, Session, User
from trip_planner.data.trips import Trip
from trip_planner.utils.helpers import from_dynamo, to_dynamo
from trip_planner.utils.logging import get_logger

logger = get_logger(__name__)

_KEY_FIELDS = {"pk", "sk", "gsi1pk", "gsi1sk"}


class DynamoDBRepository:
    """Repository for all DynamoDB operations across entity types."""

    def __init__(self, db: DynamoDBClient):
        self.db = db

    # --- Helpers ---

    def _to_item(
        self,
        entity: BaseModel,
        entity_type: EntityType,
        created_at: str | None = None,
        version: int = 1,
    ) -> dict[str, Any]:
        """Convert a domain model to a DynamoDB item."""
        data = entity.model_dump(mode="json", exclude=_KEY_FIELDS)
        now = datetime.now(UTC).isoformat()
        item: dict[str, Any] = {
            "PK": entity.pk,
            "SK": entity.sk,
            "EntityType": entity_type.value,
            "Version": version,
            "Data": to_dynamo(data),
            "Metadata": {
                "createdAt": created_at or now,
                "updatedAt": now,
            },
        }
        if hasattr(entity, "gsi1pk"):
            item["GSI1PK"] = entity.gsi1pk
        if hasattr(entity, "gsi1sk"):
            item["GSI1SK"] = entity.gsi1sk
        if getattr(entity, "ttl", None):
            item["TTL"] = entity.ttl
        return item

    @staticmethod
    def _data(item: dict[str, Any]) -> dict[str, Any]:
        return from_dynamo(item["Data"])

    # --- Users ---

    def save_user(self, user: User) -> None:
        self.db.put_item(
            self._to_item(user, EntityType.USER, created_at=user.created_at.isoformat())
        )

    def get_user(self, user_id: str) -> User | None:
        item = self.db.get_item(f"USER#{user_id}", "PROFILE")
        if not item:
            return None
        return User.model_validate(self._data(item))

    def get_user_by_email(self, email: str) -> User | None:
        items = self.db.query_gsi1(f"EMAIL#{email}", limit=1)
        if not items:
            return None
        return User.model_validate(self._data(items[0]))

    # --- Credentials ---

    def save_credential(self, credential: Credential) -> None:
        self.db.put_item(self._to_item(credential, EntityType.CREDENTIAL))

    def get_credential(self, user_id: str) -> Credential | None:
        item = self.db.get_item(f"USER#{user_id}", "CREDENTIAL")
        if not item:
            return None
        return Credential.model_validate(self._data(item))

    # --- Sessions ---

    def save_session(self, session: Session) -> None:
        self.db.put_item(self._to_item(session, EntityType.SESSION))

    def get_session(self, token: str) -> Session | None:
        item = self.db.get_item(f"SESSION#{token}", "METADATA")
        if not item:
            return None
        return Session.model_validate(self._data(item))

    def delete_session(self, token: str) -> None:
        self.db.delete_item(f"SESSION#{token}", "METADATA")

    # --- Trips ---

    def save_trip(self, trip: Trip) -> None:
        self.db.put_item(
            self._to_item(trip, EntityType.TRIP, created_at=trip.created_at.isoformat())
        )
        logger.debug(f"Saved trip {trip.trip_id} for user {trip.user_id}")

    def get_trip(self, trip_id: str) -> Trip | None:
        item = self.db.get_item(f"TRIP#{trip_id}", "METADATA")
        if not item:
            return None
        return Trip.model_validate(self._data(item))

    def list_user_trips(self, user_id: str) -> list[Trip]:
        """A user's trips, newest first."""
        items = self.db.query_gsi1(f"USER#{user_id}#TRIP", scan_forward=False)
        return [Trip.model_validate(self._data(i)) for i in items]

    def delete_trip(self, trip_id: str) -> None:
        self.db.delete_item(f"TRIP#{trip_id}", "METADATA")
