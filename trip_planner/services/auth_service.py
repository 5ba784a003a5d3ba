"""
Authentication service.

E-mail/password accounts and Google sign-in (verified ID tokens), both ending
in a bearer-token session stored in DynamoDB with a TTL.
"""

from datetime import UTC, datetime
from typing import Any

from google.auth import exceptions as google_auth_exceptions
from google.auth.transport import requests as google_requests
from google.oauth2 import id_token

from trip_planner.config import AuthConfig, config
from trip_planner.data.models import AuthProvider, Credential, Session, User
from trip_planner.data.repository import DynamoDBRepository
from trip_planner.utils.error_handling import (
    APIError,
    AuthenticationError,
    ValidationError,
    safe_execute,
)
from trip_planner.utils.helpers import generate_id, is_valid_email, normalize_email
from trip_planner.utils.logging import get_logger, mask_email
from trip_planner.utils.passwords import hash_password, new_session_token, verify_password

logger = get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password. Please try again."
LOGIN_REQUIRED = "You must be logged in to do that. Please log in and try again."
INVALID_EMAIL = "Invalid email address. Please check your email and try again."
GOOGLE_SIGN_IN_FAILED = "Google sign-in failed. Please try again."
GOOGLE_SIGN_IN_UNAVAILABLE = "Google sign-in is not available."


def verify_google_id_token(token: str | None, client_id: str | None) -> dict[str, Any]:
    """
    Verify a Google ID token's signature, expiry and audience.

    Returns:
        The token claims; `email` is present and verified

    Raises:
        AuthenticationError: Sign-in is not configured or the token is not
            acceptable
        APIError: Google's signing keys could not be fetched
    """
    if not client_id:
        raise AuthenticationError(GOOGLE_SIGN_IN_UNAVAILABLE)
    if not token:
        raise AuthenticationError(GOOGLE_SIGN_IN_FAILED)

    try:
        claims = id_token.verify_oauth2_token(token, google_requests.Request(), client_id)
    except google_auth_exceptions.TransportError as e:
        raise APIError(
            GOOGLE_SIGN_IN_FAILED, service_name="google", original_error=e
        ) from e
    except (ValueError, google_auth_exceptions.GoogleAuthError) as e:
        logger.info(f"Rejected Google ID token: {e!s}")
        raise AuthenticationError(GOOGLE_SIGN_IN_FAILED, original_error=e) from e

    if not claims.get("email") or not claims.get("email_verified"):
        raise AuthenticationError(GOOGLE_SIGN_IN_FAILED)
    return claims


class AuthService:
    """Sign-up, sign-in and session lookup."""

    def __init__(
        self,
        repo: DynamoDBRepository,
        settings: AuthConfig | None = None,
        google_client_id: str | None = None,
    ):
        self.repo = repo
        self.settings = settings or config.auth
        self.google_client_id = google_client_id or config.api.google_client_id

    # --- Passwords ---

    def check_new_password(self, password: str, confirm_password: str) -> None:
        if password != confirm_password:
            raise ValidationError("Passwords do not match")
        if len(password) < self.settings.min_password_length:
            raise ValidationError(
                f"Password must be at least {self.settings.min_password_length} "
                "characters long"
            )

    def make_credential(self, user_id: str, password: str) -> Credential:
        salt, digest = hash_password(
            password, iterations=self.settings.password_hash_iterations
        )
        return Credential(
            user_id=user_id,
            salt=salt,
            password_hash=digest,
            iterations=self.settings.password_hash_iterations,
        )

    def verify_user_password(self, user_id: str, password: str) -> bool:
        credential = self.repo.get_credential(user_id)
        if not credential or not password:
            return False
        return verify_password(
            password, credential.salt, credential.password_hash, credential.iterations
        )

    # --- Sessions ---

    def _start_session(self, user: User) -> Session:
        now = datetime.now(UTC)
        session = Session(
            token=new_session_token(),
            user_id=user.user_id,
            created_at=now,
            ttl=int(now.timestamp()) + self.settings.session_ttl_seconds,
        )
        self.repo.save_session(session)
        logger.info(f"Started session for user {user.user_id}")
        return session

    def authenticate(self, token: str | None) -> User:
        """
        Resolve a session token to its user.

        Raises:
            AuthenticationError: If the token is missing, unknown or expired
        """
        if not token:
            raise AuthenticationError(LOGIN_REQUIRED)

        session = self.repo.get_session(token)
        if not session:
            raise AuthenticationError(LOGIN_REQUIRED)

        if session.is_expired():
            safe_execute(self.repo.delete_session, token)
            raise AuthenticationError(LOGIN_REQUIRED)

        user = self.repo.get_user(session.user_id)
        if not user:
            raise AuthenticationError(LOGIN_REQUIRED)
        return user

    def sign_out(self, token: str) -> None:
        self.repo.delete_session(token)

    # --- Accounts ---

    def sign_up(
        self,
        display_name: str,
        email: str,
        password: str,
        confirm_password: str,
    ) -> tuple[User, Session]:
        """
        Create an e-mail/password account and log it in.

        Raises:
            ValidationError: On mismatched or short passwords, a malformed
                e-mail address, or an address that is already registered
        """
        self.check_new_password(password, confirm_password)

        email = normalize_email(email)
        if not is_valid_email(email):
            raise ValidationError(INVALID_EMAIL)
        if self.repo.get_user_by_email(email):
            raise ValidationError(
                "Email is already in use. Please try a different email or log in."
            )

        user = User(
            user_id=generate_id(),
            email=email,
            display_name=display_name.strip(),
            provider=AuthProvider.PASSWORD,
        )
        self.repo.save_user(user)
        self.repo.save_credential(self.make_credential(user.user_id, password))
        logger.info(f"Created account {user.user_id} for {mask_email(email)}")

        return user, self._start_session(user)

    def sign_in(self, email: str, password: str) -> tuple[User, Session]:
        """
        Log in with e-mail and password.

        Raises:
            AuthenticationError: If the e-mail is unknown or the password wrong
        """
        user = self.repo.get_user_by_email(normalize_email(email))
        if not user or not self.verify_user_password(user.user_id, password):
            logger.info(f"Failed login for {mask_email(email)}")
            raise AuthenticationError(INVALID_CREDENTIALS)

        return user, self._start_session(user)

    def sign_in_federated(self, google_id_token: str) -> tuple[User, Session]:
        """
        Log in with a Google ID token obtained by the front end.

        The e-mail comes from the verified token claims. The profile is
        created on first sign-in; an existing profile with that e-mail is
        left as it is.

        Raises:
            AuthenticationError: The token is missing, invalid, issued for
                another client, or carries no verified e-mail
            APIError: Google's signing keys could not be fetched
        """
        claims = verify_google_id_token(google_id_token, self.google_client_id)
        email = normalize_email(claims["email"])

        user = self.repo.get_user_by_email(email)
        if not user:
            user = User(
                user_id=generate_id(),
                email=email,
                display_name=(claims.get("name") or "").strip(),
                provider=AuthProvider.GOOGLE,
            )
            self.repo.save_user(user)
            logger.info(f"Created google account {user.user_id}")

        return user, self._start_session(user)
