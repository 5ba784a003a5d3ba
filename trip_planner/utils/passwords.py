"""
Password hashing with salted PBKDF2-SHA256.
"""

import hashlib
import hmac
import secrets

SALT_BYTES = 16


def hash_password(password: str, salt: str | None = None, iterations: int = 390_000) -> tuple[str, str]:
    """
    Hash a password.

    Args:
        password: Plain-text password
        salt: Hex salt; a new random one is generated when omitted
        iterations: PBKDF2 iteration count

    Returns:
        Tuple of (salt hex, hash hex)
    """
    salt = salt or secrets.token_hex(SALT_BYTES)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode("utf-8"), bytes.fromhex(salt), iterations
    )
    return salt, digest.hex()


def verify_password(password: str, salt: str, expected_hash: str, iterations: int) -> bool:
    """Check a password against a stored salt and hash in constant time."""
    _, candidate = hash_password(password, salt=salt, iterations=iterations)
    return hmac.compare_digest(candidate, expected_hash)


def new_session_token() -> str:
    return secrets.token_urlsafe(32)
