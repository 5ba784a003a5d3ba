"""
Helper utilities for the Trip Planner service.
"""

import re
import uuid
from datetime import date
from decimal import Decimal
from typing import Any

_EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
_JSON_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)
_WHITESPACE_PATTERN = re.compile(r"\s+")


def generate_id(prefix: str = "") -> str:
    """
    Generate a unique ID with an optional prefix.

    Args:
        prefix: Optional prefix for the ID

    Returns:
        A unique ID string
    """
    unique_id = uuid.uuid4().hex
    if prefix:
        return f"{prefix}-{unique_id}"
    return unique_id


def is_valid_email(email: str) -> bool:
    """Check if a string looks like an e-mail address."""
    return bool(email and _EMAIL_PATTERN.match(email))


def normalize_email(email: str) -> str:
    return email.strip().lower()


def extract_json_object(text: str) -> str:
    """
    Return the outermost `{...}` span of a model reply.

    Models often wrap JSON in prose or code fences; the span runs from the
    first opening brace to the last closing brace. Text without braces is
    returned unchanged so the caller's parser reports the failure.
    """
    match = _JSON_OBJECT_PATTERN.search(text)
    return match.group(0) if match else text


def format_amount(value: float | int | Decimal | None, missing: str = "N/A") -> str:
    """Render a money amount without a trailing `.0` for whole numbers."""
    if value is None:
        return missing
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return f"{number:.2f}".rstrip("0").rstrip(".")


def format_long_date(value: date | None) -> str:
    """Format a date as e.g. 'Monday, June 2, 2025'."""
    if value is None:
        return ""
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


def slugify_destination(destination: str) -> str:
    """Lower-case a destination and replace whitespace runs with dashes."""
    return _WHITESPACE_PATTERN.sub("-", destination).lower()


def to_dynamo(value: Any) -> Any:
    """Convert floats (recursively) to Decimal, which DynamoDB requires."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, list):
        return [to_dynamo(item) for item in value]
    if isinstance(value, dict):
        return {k: to_dynamo(v) for k, v in value.items()}
    return value


def from_dynamo(value: Any) -> Any:
    """Convert Decimals (recursively) back to int or float."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, list):
        return [from_dynamo(item) for item in value]
    if isinstance(value, dict):
        return {k: from_dynamo(v) for k, v in value.items()}
    return value
