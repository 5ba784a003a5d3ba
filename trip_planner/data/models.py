"""
Account domain models: user profiles, stored credentials and login sessions.

Each model includes DynamoDB key generation (pk, sk, gsi1pk, gsi1sk)
matching the single-table design access patterns.
"""

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, Field, computed_field


class EntityType(StrEnum):
    USER = "User"
    CREDENTIAL = "Credential"
    SESSION = "Session"
    TRIP = "Trip"


class AuthProvider(StrEnum):
    PASSWORD = "password"
    GOOGLE = "google"


class User(BaseModel):
    """User profile. PK=USER#id, SK=PROFILE; GSI1 by e-mail."""

    user_id: str
    email: str
    display_name: str = ""
    provider: AuthProvider = AuthProvider.PASSWORD
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @computed_field
    @property
    def pk(self) -> str:
        return f"USER#{self.user_id}"

    @computed_field
    @property
    def sk(self) -> str:
        return "PROFILE"

    @computed_field
    @property
    def gsi1pk(self) -> str:
        return f"EMAIL#{self.email}"

    @computed_field
    @property
    def gsi1sk(self) -> str:
        return f"USER#{self.user_id}"


class Credential(BaseModel):
    """Password hash for a user. PK=USER#id, SK=CREDENTIAL."""

    user_id: str
    salt: str
    password_hash: str
    iterations: int

    @computed_field
    @property
    def pk(self) -> str:
        return f"USER#{self.user_id}"

    @computed_field
    @property
    def sk(self) -> str:
        return "CREDENTIAL"


class Session(BaseModel):
    """Login session keyed by its bearer token. PK=SESSION#token, SK=METADATA."""

    token: str
    user_id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    ttl: int

    @computed_field
    @property
    def pk(self) -> str:
        return f"SESSION#{self.token}"

    @computed_field
    @property
    def sk(self) -> str:
        return "METADATA"

    @computed_field
    @property
    def gsi1pk(self) -> str:
        return f"USER#{self.user_id}#SESSION"

    @computed_field
    @property
    def gsi1sk(self) -> str:
        return self.created_at.isoformat()

    def is_expired(self, now: datetime | None = None) -> bool:
        # DynamoDB TTL deletion lags, so expiry is also checked on read
        now = now or datetime.now(UTC)
        return self.ttl <= int(now.timestamp())
