"""Tests for helper utilities and password hashing."""

from datetime import date
from decimal import Decimal

import pytest

from trip_planner.utils.helpers import (
    extract_json_object,
    format_amount,
    format_long_date,
    from_dynamo,
    generate_id,
    is_valid_email,
    normalize_email,
    slugify_destination,
    to_dynamo,
)
from trip_planner.utils.logging import mask_email
from trip_planner.utils.passwords import hash_password, new_session_token, verify_password


def test_generate_id():
    assert len(generate_id()) == 32
    assert generate_id("trip").startswith("trip-")
    assert generate_id() != generate_id()


@pytest.mark.parametrize(
    "email, valid",
    [
        ("a@example.com", True),
        ("first.last+tag@sub.example.co", True),
        ("no-at-sign", False),
        ("a@b", False),
        ("", False),
    ],
)
def test_is_valid_email(email, valid):
    assert is_valid_email(email) is valid


def test_normalize_email():
    assert normalize_email("  Ana@Example.COM ") == "ana@example.com"


def test_extract_json_object_is_greedy_across_lines():
    text = 'Sure!\n```json\n{"a": {"b": 1}}\n```\nAnd {"c": 2} too'
    assert extract_json_object(text) == '{"a": {"b": 1}}\n```\nAnd {"c": 2}'


def test_extract_json_object_without_braces():
    assert extract_json_object("no json here") == "no json here"


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, "N/A"),
        (0, "0"),
        (1200, "1200"),
        (1200.0, "1200"),
        (45.5, "45.5"),
        (19.999, "20"),
        (Decimal("12.30"), "12.3"),
    ],
)
def test_format_amount(value, expected):
    assert format_amount(value) == expected


def test_format_long_date():
    assert format_long_date(date(2025, 6, 2)) == "Monday, June 2, 2025"
    assert format_long_date(None) == ""


def test_slugify_destination():
    assert slugify_destination("Rio de  Janeiro\t") == "rio-de-janeiro-"


def test_dynamo_conversions():
    stored = to_dynamo({"budget": 10.5, "days": [{"cost": 3.0}], "ok": True, "n": 2})
    assert stored == {
        "budget": Decimal("10.5"),
        "days": [{"cost": Decimal("3.0")}],
        "ok": True,
        "n": 2,
    }
    assert from_dynamo(stored) == {"budget": 10.5, "days": [{"cost": 3}], "ok": True, "n": 2}


def test_mask_email():
    assert mask_email("Failed login for ana@example.com") == "Failed login for a***@example.com"


def test_password_hashing():
    salt, digest = hash_password("secret1", iterations=1000)
    assert verify_password("secret1", salt, digest, 1000)
    assert not verify_password("secret2", salt, digest, 1000)
    assert not verify_password("secret1", salt, digest, 1001)

    other_salt, other_digest = hash_password("secret1", iterations=1000)
    assert other_salt != salt
    assert other_digest != digest


def test_session_tokens_are_unique():
    assert new_session_token() != new_session_token()
