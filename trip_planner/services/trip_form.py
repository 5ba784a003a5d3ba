"""
Three-step trip planning form.

Step 1 collects where and when, step 2 budget, party size and
preferences, step 3 free-text notes and a summary before generation.
Each step is validated before the form moves on.
"""

from datetime import date

from trip_planner.data.trips import MAX_INTERESTS, Interest, TripRequest
from trip_planner.utils.error_handling import ValidationError
from trip_planner.utils.helpers import format_amount

FIRST_STEP = 1
LAST_STEP = 3


def validate_basics(request: TripRequest, today: date | None = None) -> str | None:
    """Validate step 1 (destination and dates); return the first error message."""
    today = today or date.today()
    if not request.destination:
        return "Please enter a destination"
    if not request.start_date:
        return "Please select a start date"
    if not request.end_date:
        return "Please select an end date"
    if request.start_date < today:
        return "Start date cannot be in the past"
    if request.end_date < request.start_date:
        return "End date cannot be before start date"
    return None


def validate_preferences(request: TripRequest) -> str | None:
    """Validate step 2 (budget, travelers, interests); return the first error message."""
    if request.budget is None or request.budget <= 0:
        return "Please enter a valid budget amount"
    if request.travelers is None or request.travelers < 1:
        return "Please enter at least 1 traveler"
    if not request.interests:
        return "Please select at least one interest"
    return None


def validate_step(step: int, request: TripRequest, today: date | None = None) -> str | None:
    if step == 1:
        return validate_basics(request, today)
    if step == 2:
        return validate_preferences(request)
    return None


def validate_trip_request(request: TripRequest, today: date | None = None) -> None:
    """
    Validate a complete request as submitted from the last step.

    Raises:
        ValidationError: With the first failing step's message
    """
    error = validate_basics(request, today) or validate_preferences(request)
    if error:
        raise ValidationError(error)


def toggle_interest(interests: list[Interest], interest: Interest) -> list[Interest]:
    """Deselect a chosen interest, or select it while fewer than five are chosen."""
    if interest in interests:
        return [i for i in interests if i != interest]
    if len(interests) < MAX_INTERESTS:
        return [*interests, interest]
    return list(interests)


class TripPlanningForm:
    """Step-by-step state of one trip being planned."""

    def __init__(self, request: TripRequest | None = None, today: date | None = None):
        self.request = request or TripRequest()
        self.step = FIRST_STEP
        self.error: str | None = None
        self._today = today

    def update(self, **fields) -> None:
        """Apply field changes, re-running model validation."""
        data = self.request.model_dump()
        data.update(fields)
        self.request = TripRequest.model_validate(data)

    def toggle_interest(self, interest: Interest) -> None:
        self.request = self.request.model_copy(
            update={"interests": toggle_interest(self.request.interests, interest)}
        )

    def next_step(self) -> bool:
        """Advance if the current step is valid; otherwise record the error."""
        self.error = validate_step(self.step, self.request, self._today)
        if self.error:
            return False
        self.step = min(self.step + 1, LAST_STEP)
        return True

    def prev_step(self) -> None:
        self.error = None
        self.step = max(self.step - 1, FIRST_STEP)

    @property
    def is_last_step(self) -> bool:
        return self.step == LAST_STEP

    def submit(self) -> TripRequest:
        """Return the finished request, validating every step again."""
        try:
            validate_trip_request(self.request, self._today)
        except ValidationError as e:
            self.error = e.message
            raise
        self.error = None
        return self.request

    def summary(self) -> list[str]:
        """Lines for the trip summary shown before generation."""
        r = self.request
        dates = (
            f"{r.start_date:%m/%d/%Y} to {r.end_date:%m/%d/%Y}"
            if r.start_date and r.end_date
            else ""
        )
        return [
            f"Destination: {r.destination}",
            f"Dates: {dates}",
            f"Budget: ${format_amount(r.budget, missing='')}",
            f"Travelers: {r.travelers if r.travelers is not None else ''}",
            f"Interests: {', '.join(i.value for i in r.interests)}",
            f"Accommodation: {r.accommodation_type.value}",
            f"Transportation: {r.transportation_type.value}",
        ]
