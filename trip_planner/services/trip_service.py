"""
Trip service orchestrating the planning flow.

Handles: validate the form, moderate free text, call the itinerary agent,
save the trip, and the owner-only reads, deletes and exports after that.
"""

from datetime import date
from typing import Any

from trip_planner.data.models import User
from trip_planner.data.repository import DynamoDBRepository
from trip_planner.data.trips import Trip, TripRequest
from trip_planner.prompts.moderation import moderate_trip_text
from trip_planner.services.itinerary_export import export_itinerary
from trip_planner.services.trip_form import validate_trip_request
from trip_planner.utils.error_handling import (
    PermissionDeniedError,
    ResourceNotFoundError,
    ValidationError,
)
from trip_planner.utils.helpers import generate_id
from trip_planner.utils.logging import get_logger

logger = get_logger(__name__)


class TripService:
    """Creates and manages a user's trips."""

    def __init__(self, repo: DynamoDBRepository, agent: Any):
        self.repo = repo
        self.agent = agent

    async def create_trip(
        self, user: User, request: TripRequest, today: date | None = None
    ) -> Trip:
        """
        Generate an itinerary for a request and save it as a new trip.

        Raises:
            ValidationError: The request fails form validation or moderation
            APIError: The itinerary could not be generated
            ItineraryParseError: The model reply was not a usable itinerary
        """
        validate_trip_request(request, today)

        mod_result = moderate_trip_text(request.destination, request.notes)
        if not mod_result.is_safe:
            raise ValidationError(mod_result.reason or "Invalid trip details")

        logger.info(f"Generating itinerary for user {user.user_id}")
        itinerary = await self.agent.generate(request)

        trip = Trip.from_request(
            request,
            trip_id=generate_id(),
            user_id=user.user_id,
            itinerary=itinerary,
        )
        self.repo.save_trip(trip)
        logger.info(f"Created trip {trip.trip_id} ({len(itinerary.days)} days)")
        return trip

    def list_trips(self, user: User) -> list[Trip]:
        return self.repo.list_user_trips(user.user_id)

    def get_trip(self, user: User, trip_id: str) -> Trip:
        """
        Load a trip owned by `user`.

        Raises:
            ResourceNotFoundError: No trip has this id
            PermissionDeniedError: The trip belongs to someone else
        """
        trip = self.repo.get_trip(trip_id) if trip_id else None
        if not trip:
            raise ResourceNotFoundError("Trip not found")
        if trip.user_id != user.user_id:
            logger.warning(f"User {user.user_id} denied access to trip {trip_id}")
            raise PermissionDeniedError("You do not have permission to view this trip")
        return trip

    def delete_trip(self, user: User, trip_id: str) -> None:
        trip = self.get_trip(user, trip_id)
        self.repo.delete_trip(trip.trip_id)
        logger.info(f"Deleted trip {trip.trip_id}")

    def export_itinerary(self, user: User, trip_id: str) -> tuple[str, str]:
        """Return (file name, text) of a trip's downloadable itinerary."""
        return export_itinerary(self.get_trip(user, trip_id))
