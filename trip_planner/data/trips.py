"""
Trip domain models: the planning request, the generated itinerary and the
stored trip.

Field names are snake_case in Python and camelCase on the wire, which is
also the shape Gemini is asked to produce.
"""

from datetime import UTC, date, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel

MAX_INTERESTS = 5


class Interest(StrEnum):
    HISTORY = "History"
    ART = "Art"
    MUSEUMS = "Museums"
    FOOD = "Food"
    NIGHTLIFE = "Nightlife"
    SHOPPING = "Shopping"
    NATURE = "Nature"
    ADVENTURE = "Adventure"
    RELAXATION = "Relaxation"
    PHOTOGRAPHY = "Photography"
    ARCHITECTURE = "Architecture"
    LOCAL_CULTURE = "Local Culture"
    BEACHES = "Beaches"
    HIKING = "Hiking"
    WILDLIFE = "Wildlife"
    MUSIC = "Music"
    SPORTS = "Sports"
    FAMILY_ACTIVITIES = "Family Activities"


class AccommodationType(StrEnum):
    HOTEL = "Hotel"
    HOSTEL = "Hostel"
    RESORT = "Resort"
    APARTMENT = "Apartment"
    GUESTHOUSE = "Guesthouse"
    ANY = "Any"


class TransportationType(StrEnum):
    PUBLIC_TRANSPORT = "Public Transport"
    RENTAL_CAR = "Rental Car"
    WALKING_BIKING = "Walking/Biking"
    GUIDED_TOURS = "Guided Tours"
    TAXI_RIDESHARE = "Taxi/Rideshare"
    ANY = "Any"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _optional_number(value: Any) -> float | None:
    """Parse form or model numbers leniently; unusable input becomes None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.replace("$", "").replace(",", "").strip()
        if not value:
            return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class TripRequest(_CamelModel):
    """Travel preferences collected by the three-step planning form."""

    destination: str = ""
    start_date: date | None = None
    end_date: date | None = None
    budget: float | None = None
    travelers: int | None = 1
    interests: list[Interest] = Field(default_factory=list)
    accommodation_type: AccommodationType = AccommodationType.ANY
    transportation_type: TransportationType = TransportationType.ANY
    notes: str = ""

    @field_validator("destination", "notes", mode="before")
    @classmethod
    def _strip_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        return value.strip() if isinstance(value, str) else value

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _blank_date(cls, value: Any) -> Any:
        return None if value == "" else value

    @field_validator("budget", mode="before")
    @classmethod
    def _parse_budget(cls, value: Any) -> float | None:
        return _optional_number(value)

    @field_validator("travelers", mode="before")
    @classmethod
    def _parse_travelers(cls, value: Any) -> int | None:
        number = _optional_number(value)
        if number is None or not number.is_integer():
            return None
        return int(number)

    @field_validator("accommodation_type", "transportation_type", mode="before")
    @classmethod
    def _default_any(cls, value: Any) -> Any:
        return value or "Any"


class ActivitySlot(_CamelModel):
    activity: str = ""
    description: str = ""
    estimated_cost: float | None = None

    @field_validator("estimated_cost", mode="before")
    @classmethod
    def _parse_cost(cls, value: Any) -> float | None:
        return _optional_number(value)


class Stay(_CamelModel):
    name: str = ""
    description: str = ""
    estimated_cost: float | None = None

    @field_validator("estimated_cost", mode="before")
    @classmethod
    def _parse_cost(cls, value: Any) -> float | None:
        return _optional_number(value)


class ItineraryDay(_CamelModel):
    # Kept as text: models do not always return ISO dates
    date: str = ""
    day_number: int | None = None
    morning: ActivitySlot | None = None
    afternoon: ActivitySlot | None = None
    evening: ActivitySlot | None = None
    accommodation: Stay | None = None

    @field_validator("date", mode="before")
    @classmethod
    def _date_text(cls, value: Any) -> str:
        return "" if value is None else str(value)


class Itinerary(_CamelModel):
    """Day-by-day plan returned by the itinerary agent."""

    days: list[ItineraryDay] = Field(default_factory=list)
    total_estimated_cost: float | None = None
    general_tips: list[str] = Field(default_factory=list)
    accommodation_suggestions: list[str] = Field(default_factory=list)
    transportation_options: list[str] = Field(default_factory=list)

    @field_validator("total_estimated_cost", mode="before")
    @classmethod
    def _parse_total(cls, value: Any) -> float | None:
        return _optional_number(value)

    @field_validator(
        "general_tips", "accommodation_suggestions", "transportation_options",
        mode="before",
    )
    @classmethod
    def _text_items(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return value
        items = []
        for item in value:
            if isinstance(item, dict):
                item = " - ".join(str(v) for v in item.values() if v)
            if item:
                items.append(str(item))
        return items


class Trip(TripRequest):
    """A stored trip. PK=TRIP#id, SK=METADATA; GSI1 lists a user's trips."""

    trip_id: str
    user_id: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    itinerary: Itinerary | None = None

    @computed_field
    @property
    def pk(self) -> str:
        return f"TRIP#{self.trip_id}"

    @computed_field
    @property
    def sk(self) -> str:
        return "METADATA"

    @computed_field
    @property
    def gsi1pk(self) -> str:
        return f"USER#{self.user_id}#TRIP"

    @computed_field
    @property
    def gsi1sk(self) -> str:
        return self.created_at.isoformat()

    @property
    def duration_days(self) -> int:
        """Whole days between start and end date (not inclusive)."""
        if not self.start_date or not self.end_date:
            return 0
        return abs((self.end_date - self.start_date).days)

    @classmethod
    def from_request(
        cls, request: TripRequest, trip_id: str, user_id: str, itinerary: Itinerary
    ) -> "Trip":
        return cls(
            **request.model_dump(),
            trip_id=trip_id,
            user_id=user_id,
            itinerary=itinerary,
        )
