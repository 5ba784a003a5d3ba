"""
Utility modules for the Trip Planner service.
"""

from trip_planner.config import LogLevel
from trip_planner.utils.error_handling import (
    APIError,
    AuthenticationError,
    ItineraryParseError,
    PermissionDeniedError,
    ResourceNotFoundError,
    TripPlannerError,
    ValidationError,
    safe_execute,
    with_retry,
)
from trip_planner.utils.helpers import (
    extract_json_object,
    format_amount,
    format_long_date,
    generate_id,
    is_valid_email,
    normalize_email,
    slugify_destination,
)
from trip_planner.utils.logging import AgentLogger, get_logger, mask_email, setup_logging

__all__ = [
    "APIError",
    "AgentLogger",
    "AuthenticationError",
    "ItineraryParseError",
    "LogLevel",
    "PermissionDeniedError",
    "ResourceNotFoundError",
    "TripPlannerError",
    "ValidationError",
    "extract_json_object",
    "format_amount",
    "format_long_date",
    "generate_id",
    "get_logger",
    "is_valid_email",
    "mask_email",
    "normalize_email",
    "safe_execute",
    "setup_logging",
    "slugify_destination",
    "with_retry",
]
