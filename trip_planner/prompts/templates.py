"""
Prompt templates for itinerary generation.
"""

import re

from trip_planner.data.trips import TripRequest
from trip_planner.utils.helpers import format_amount


def render_template(template: str, **kwargs: str) -> str:
    """Render a template string, leaving unresolved vars as-is."""
    return re.sub(
        r"\{(\w+)\}", lambda m: kwargs.get(m.group(1), m.group(0)), template
    )


ITINERARY_TEMPLATE = """\
Create a detailed travel itinerary for the following trip:

Destination: {destination}
Start Date: {start_date}
End Date: {end_date}
Budget: ${budget}
Number of travelers: {travelers}
Interests: {interests}
Accommodation preference: {accommodation}
Transportation preference: {transportation}
{notes}
Please include:
1. Day-by-day schedule with morning, afternoon, and evening activities
2. Recommended attractions that match the interests
3. Dining recommendations within the budget
4. Estimated costs for activities and meals
5. Transportation options between locations
6. Accommodation suggestions
7. Tips specific to the destination

Format the response as a structured JSON object with the following structure:
{
  "days": [
    {
      "date": "YYYY-MM-DD",
      "dayNumber": 1,
      "morning": { "activity": "", "description": "", "estimatedCost": 0 },
      "afternoon": { "activity": "", "description": "", "estimatedCost": 0 },
      "evening": { "activity": "", "description": "", "estimatedCost": 0 },
      "accommodation": { "name": "", "description": "", "estimatedCost": 0 }
    }
  ],
  "totalEstimatedCost": 0,
  "generalTips": [""],
  "accommodationSuggestions": [""],
  "transportationOptions": [""]
}
"""


def build_itinerary_prompt(request: TripRequest) -> str:
    """Fill the itinerary template from a validated trip request."""
    notes = f"Additional notes from the traveler: {request.notes}\n" if request.notes else ""
    return render_template(
        ITINERARY_TEMPLATE,
        destination=request.destination,
        start_date=request.start_date.isoformat() if request.start_date else "",
        end_date=request.end_date.isoformat() if request.end_date else "",
        budget=format_amount(request.budget, missing="0"),
        travelers=str(request.travelers or 1),
        interests=", ".join(i.value for i in request.interests),
        accommodation=request.accommodation_type.value,
        transportation=request.transportation_type.value,
        notes=notes,
    )
