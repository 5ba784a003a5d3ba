"""
AWS Lambda handler for the AI trip planner.

Entry point for the web front end's backend calls.
Routes events by "action" field to the auth, profile and trip services.
"""

import asyncio
from datetime import date
from functools import lru_cache
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from trip_planner.agents.itinerary import ItineraryAgent
from trip_planner.config import config
from trip_planner.data.dynamodb import DynamoDBClient
from trip_planner.data.models import Session, User
from trip_planner.data.repository import DynamoDBRepository
from trip_planner.data.trips import Trip, TripRequest
from trip_planner.services.auth_service import AuthService
from trip_planner.services.profile_service import ProfileService
from trip_planner.services.trip_form import validate_step
from trip_planner.services.trip_service import TripService
from trip_planner.utils.error_handling import TripPlannerError, ValidationError
from trip_planner.utils.logging import get_logger

logger = get_logger(__name__)

_KEY_FIELDS = {"pk", "sk", "gsi1pk", "gsi1sk"}
UNEXPECTED_ERROR = "Something went wrong. Please try again later."
INVALID_TRIP = "Invalid trip details"


@lru_cache(maxsize=1)
def _get_repo() -> DynamoDBRepository:
    db = DynamoDBClient(
        table_name=config.api.dynamodb_table_name,
        region=config.api.aws_region,
        endpoint_url=config.api.dynamodb_endpoint,
    )
    if config.api.dynamodb_endpoint:
        db.create_table_if_not_exists()
    return DynamoDBRepository(db)


def _auth_service() -> AuthService:
    return AuthService(_get_repo())


def _trip_service() -> TripService:
    return TripService(_get_repo(), agent=ItineraryAgent())


# --- Payloads ---


def _user_payload(user: User) -> dict[str, Any]:
    return {
        "userId": user.user_id,
        "email": user.email,
        "displayName": user.display_name,
        "provider": user.provider.value,
        "createdAt": user.created_at.isoformat(),
    }


def _session_payload(user: User, session: Session) -> dict[str, Any]:
    return {
        "status": "ok",
        "token": session.token,
        "expiresAt": session.ttl,
        "user": _user_payload(user),
    }


def _trip_payload(trip: Trip) -> dict[str, Any]:
    data = trip.model_dump(mode="json", by_alias=True, exclude=_KEY_FIELDS)
    data["durationDays"] = trip.duration_days
    return data


def _invalid_field_message(error: PydanticValidationError) -> str:
    for detail in error.errors():
        if detail["loc"]:
            return f"Invalid value for {detail['loc'][0]}"
    return INVALID_TRIP


def _trip_request(event: dict[str, Any]) -> TripRequest:
    try:
        return TripRequest.model_validate(event.get("trip") or {})
    except PydanticValidationError as e:
        raise ValidationError(_invalid_field_message(e), original_error=e) from e
    except (ValueError, TypeError) as e:
        raise ValidationError(INVALID_TRIP, original_error=e) from e


def _form_step(event: dict[str, Any]) -> int:
    try:
        return int(event.get("step", 1))
    except (ValueError, TypeError) as e:
        raise ValidationError("Invalid form step", original_error=e) from e


# --- Public actions ---


async def _handle_signup(event: dict[str, Any], user: User | None) -> dict[str, Any]:
    new_user, session = _auth_service().sign_up(
        display_name=event.get("displayName", ""),
        email=event.get("email", ""),
        password=event.get("password", ""),
        confirm_password=event.get("confirmPassword", ""),
    )
    return _session_payload(new_user, session)


async def _handle_login(event: dict[str, Any], user: User | None) -> dict[str, Any]:
    found, session = _auth_service().sign_in(
        email=event.get("email", ""),
        password=event.get("password", ""),
    )
    return _session_payload(found, session)


async def _handle_login_federated(
    event: dict[str, Any], user: User | None
) -> dict[str, Any]:
    found, session = _auth_service().sign_in_federated(event.get("idToken", ""))
    return _session_payload(found, session)


async def _handle_validate_trip_step(
    event: dict[str, Any], user: User | None
) -> dict[str, Any]:
    error = validate_step(_form_step(event), _trip_request(event), date.today())
    if error:
        return {"status": "ok", "valid": False, "message": error}
    return {"status": "ok", "valid": True}


# --- Protected actions ---


async def _handle_logout(event: dict[str, Any], user: User | None) -> dict[str, Any]:
    _auth_service().sign_out(event["token"])
    return {"status": "ok"}


async def _handle_get_profile(event: dict[str, Any], user: User) -> dict[str, Any]:
    repo = _get_repo()
    profile = ProfileService(repo, AuthService(repo)).get_profile(user)
    return {"status": "ok", "user": _user_payload(profile)}


async def _handle_update_profile(event: dict[str, Any], user: User) -> dict[str, Any]:
    repo = _get_repo()
    updated, message = ProfileService(repo, AuthService(repo)).update_profile(
        user,
        display_name=event.get("displayName"),
        email=event.get("email"),
        current_password=event.get("currentPassword", ""),
        new_password=event.get("newPassword", ""),
        confirm_password=event.get("confirmPassword", ""),
    )
    return {"status": "ok", "message": message, "user": _user_payload(updated)}


async def _handle_create_trip(event: dict[str, Any], user: User) -> dict[str, Any]:
    trip = await _trip_service().create_trip(user, _trip_request(event))
    return {"status": "ok", "trip": _trip_payload(trip)}


async def _handle_list_trips(event: dict[str, Any], user: User) -> dict[str, Any]:
    trips = TripService(_get_repo(), agent=None).list_trips(user)
    return {"status": "ok", "trips": [_trip_payload(t) for t in trips]}


async def _handle_get_trip(event: dict[str, Any], user: User) -> dict[str, Any]:
    trip = TripService(_get_repo(), agent=None).get_trip(user, event.get("tripId", ""))
    return {"status": "ok", "trip": _trip_payload(trip)}


async def _handle_delete_trip(event: dict[str, Any], user: User) -> dict[str, Any]:
    TripService(_get_repo(), agent=None).delete_trip(user, event.get("tripId", ""))
    return {"status": "ok"}


async def _handle_download_itinerary(
    event: dict[str, Any], user: User
) -> dict[str, Any]:
    filename, text = TripService(_get_repo(), agent=None).export_itinerary(
        user, event.get("tripId", "")
    )
    return {
        "status": "ok",
        "filename": filename,
        "contentType": "text/plain",
        "content": text,
    }


# Action handlers map
_PUBLIC_HANDLERS = {
    "signup": _handle_signup,
    "login": _handle_login,
    "login_federated": _handle_login_federated,
    "validate_trip_step": _handle_validate_trip_step,
}

_PROTECTED_HANDLERS = {
    "logout": _handle_logout,
    "get_profile": _handle_get_profile,
    "update_profile": _handle_update_profile,
    "create_trip": _handle_create_trip,
    "list_trips": _handle_list_trips,
    "get_trip": _handle_get_trip,
    "delete_trip": _handle_delete_trip,
    "download_itinerary": _handle_download_itinerary,
}


async def async_handler(event: dict[str, Any]) -> dict[str, Any]:
    """Main async handler."""
    action = event.get("action", "unknown")

    handler_fn = _PUBLIC_HANDLERS.get(action) or _PROTECTED_HANDLERS.get(action)
    if not handler_fn:
        return {
            "status": "error",
            "error": f"Unknown action: {action}",
            "code": "unknown_action",
        }

    try:
        user = None
        if action in _PROTECTED_HANDLERS:
            user = _auth_service().authenticate(event.get("token"))
        return await handler_fn(event, user)
    except TripPlannerError as e:
        logger.info(f"{action} rejected ({e.code}): {e.message}")
        return {"status": "error", "error": e.message, "code": e.code}
    except Exception as e:
        logger.exception(f"Error handling {action}: {e}")
        return {"status": "error", "error": UNEXPECTED_ERROR, "code": "internal"}


def handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    """Lambda entry point (sync wrapper)."""
    return asyncio.run(async_handler(event))
