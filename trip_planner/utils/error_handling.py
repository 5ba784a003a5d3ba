"""
Error handling utilities for the Trip Planner service.

This module provides the exception hierarchy surfaced to callers, plus
decorators for retrying and logging failures consistently.
"""

import functools
import inspect
import traceback
from collections.abc import Callable
from typing import Any, TypeVar, cast

from loguru import logger
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

F = TypeVar("F", bound=Callable[..., Any])
T = TypeVar("T")


class TripPlannerError(Exception):
    """Base exception class for all Trip Planner errors."""

    code = "internal"

    def __init__(self, message: str, original_error: Exception | None = None):
        """
        Initialize a TripPlannerError.

        Args:
            message: Error message, safe to show to the user
            original_error: The original exception that caused this error (optional)
        """
        self.message = message
        self.original_error = original_error
        super().__init__(message)


class APIError(TripPlannerError):
    """Error raised when an external API request fails."""

    code = "api_error"

    def __init__(
        self,
        message: str,
        service_name: str,
        status_code: int | None = None,
        original_error: Exception | None = None,
    ):
        """
        Initialize an APIError.

        Args:
            message: Error message
            service_name: Name of the API service
            status_code: HTTP status code (optional)
            original_error: The original exception that caused this error (optional)
        """
        self.service_name = service_name
        self.status_code = status_code
        super().__init__(message, original_error)

    @property
    def is_transient(self) -> bool:
        """Network failures, rate limits and server errors are worth retrying."""
        return (
            self.status_code is None
            or self.status_code == 429
            or self.status_code >= 500
        )

    def __str__(self) -> str:
        status_str = f" (status: {self.status_code})" if self.status_code else ""
        return f"Error in {self.service_name} API{status_str}: {self.message}"


class ItineraryParseError(TripPlannerError):
    """Error raised when the model reply holds no usable itinerary JSON."""

    code = "parse_error"


class ValidationError(TripPlannerError):
    """Error raised when validation of input or data fails."""

    code = "validation_error"


class AuthenticationError(TripPlannerError):
    """Error raised for bad credentials or a missing/expired session."""

    code = "unauthenticated"


class PermissionDeniedError(TripPlannerError):
    """Error raised when a user acts on a resource they do not own."""

    code = "permission_denied"


class ResourceNotFoundError(TripPlannerError):
    """Error raised when a requested resource is not found."""

    code = "not_found"


def _log_retry(retry_state: Any) -> None:
    func_name = getattr(retry_state.fn, "__name__", "call")
    exc = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        f"Attempt {retry_state.attempt_number} of {func_name} failed: {exc!s}; retrying"
    )


def with_retry(
    max_attempts: int = 3,
    min_wait_seconds: float = 1.0,
    max_wait_seconds: float = 10.0,
    retry_exceptions: tuple = (APIError,),
) -> Callable[[F], F]:
    """
    Decorator to retry a function with exponential backoff when specific
    exceptions occur. Works on both plain and coroutine functions; the last
    exception is re-raised once attempts are exhausted. Exceptions exposing
    `is_transient = False` are raised immediately.

    Args:
        max_attempts: Maximum number of attempts
        min_wait_seconds: Minimum wait time between retries
        max_wait_seconds: Maximum wait time between retries
        retry_exceptions: Tuple of exception types to retry on

    Returns:
        Decorated function
    """

    def _should_retry(error: BaseException) -> bool:
        return isinstance(error, retry_exceptions) and getattr(
            error, "is_transient", True
        )

    def decorator(func: F) -> F:
        retrying = retry(
            retry=retry_if_exception(_should_retry),
            stop=stop_after_attempt(max_attempts),
            wait=wait_exponential(
                multiplier=1, min=min_wait_seconds, max=max_wait_seconds
            ),
            before_sleep=_log_retry,
            reraise=True,
        )
        wrapped = retrying(func)

        if inspect.iscoroutinefunction(func):

            @functools.wraps(func)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                try:
                    return await wrapped(*args, **kwargs)
                except retry_exceptions as e:
                    logger.error(f"Giving up on {func.__name__}: {e!s}")
                    raise

            return cast(F, async_wrapper)

        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> Any:
            try:
                return wrapped(*args, **kwargs)
            except retry_exceptions as e:
                logger.error(f"Giving up on {func.__name__}: {e!s}")
                raise

        return cast(F, wrapper)

    return decorator


def safe_execute(
    func: Callable[..., T], *args: Any, default: T | None = None, **kwargs: Any
) -> T | None:
    """
    Execute a function safely, catching any exceptions and
    optionally returning a default value.

    Args:
        func: Function to execute
        *args: Positional arguments to pass to the function
        default: Default value to return if an exception occurs (optional)
        **kwargs: Keyword arguments to pass to the function

    Returns:
        Result of the function or default value if an exception occurs
    """
    try:
        return func(*args, **kwargs)
    except Exception as e:
        func_name = getattr(func, "__name__", str(func))
        logger.error(f"Error executing {func_name}: {e!s}")
        logger.debug(f"Traceback: {traceback.format_exc()}")
        return default
