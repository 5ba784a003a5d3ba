"""
Profile service: view and update the signed-in user's profile.

Every check runs before anything is written, so a rejected update leaves
both the profile and the stored password untouched.
"""

from trip_planner.data.models import User
from trip_planner.data.repository import DynamoDBRepository
from trip_planner.services.auth_service import INVALID_EMAIL, AuthService
from trip_planner.utils.error_handling import AuthenticationError, ValidationError
from trip_planner.utils.helpers import is_valid_email, normalize_email
from trip_planner.utils.logging import get_logger

logger = get_logger(__name__)

UPDATED = "Profile updated successfully"
UNCHANGED = "No changes were made"


class ProfileService:
    def __init__(self, repo: DynamoDBRepository, auth: AuthService):
        self.repo = repo
        self.auth = auth

    def get_profile(self, user: User) -> User:
        return self.repo.get_user(user.user_id) or user

    def update_profile(
        self,
        user: User,
        display_name: str | None = None,
        email: str | None = None,
        current_password: str = "",
        new_password: str = "",
        confirm_password: str = "",
    ) -> tuple[User, str]:
        """
        Apply display name, e-mail and password changes.

        Changing the e-mail or the password requires the current password.

        Returns:
            The (possibly unchanged) user and a status message

        Raises:
            ValidationError: A check failed; nothing was saved
            AuthenticationError: The current password is wrong
        """
        updates = {}

        if display_name is not None and display_name.strip() != user.display_name:
            updates["display_name"] = display_name.strip()

        if email is not None and normalize_email(email) != user.email:
            email = normalize_email(email)
            if not current_password:
                raise ValidationError("Current password is required to change email")
            if not self.auth.verify_user_password(user.user_id, current_password):
                raise AuthenticationError("Incorrect current password")
            existing = self.repo.get_user_by_email(email)
            if existing and existing.user_id != user.user_id:
                raise ValidationError("Email is already in use by another account")
            if not is_valid_email(email):
                raise ValidationError(INVALID_EMAIL)
            updates["email"] = email

        credential = None
        if new_password:
            if not current_password:
                raise ValidationError(
                    "Current password is required to set a new password"
                )
            min_length = self.auth.settings.min_password_length
            if len(new_password) < min_length:
                raise ValidationError(
                    f"New password must be at least {min_length} characters long"
                )
            if new_password != confirm_password:
                raise ValidationError("New passwords do not match")
            if not self.auth.verify_user_password(user.user_id, current_password):
                raise AuthenticationError("Incorrect current password")
            credential = self.auth.make_credential(user.user_id, new_password)

        if not updates and credential is None:
            return user, UNCHANGED

        if updates:
            user = user.model_copy(update=updates)
            self.repo.save_user(user)
        if credential is not None:
            self.repo.save_credential(credential)

        logger.info(
            f"Updated profile {user.user_id}: "
            f"{', '.join([*updates, *(['password'] if credential else [])])}"
        )
        return user, UPDATED
