"""Tests for the plain-text itinerary export."""

from trip_planner.data.trips import Itinerary, Trip
from trip_planner.services.itinerary_export import (
    export_itinerary,
    itinerary_filename,
    render_itinerary_text,
)

EXPECTED = """\
TRAVEL ITINERARY: KYOTO
Tuesday, June 10, 2025 to Friday, June 13, 2025

TRIP SUMMARY:
Destination: Kyoto
Duration: 3 days
Budget: $2500
Travelers: 2
Interests: History, Food

DAILY ITINERARY:

DAY 1 - 2025-06-10
------------------------
MORNING: Fushimi Inari Shrine
Walk the torii gate trail before the crowds.
Estimated Cost: $0

AFTERNOON: Nishiki Market
Street food tasting.
Estimated Cost: $45.5

EVENING: Gion walk
Historic geisha district at dusk.
Estimated Cost: $20

ACCOMMODATION: Machiya Inn
Traditional townhouse stay.
Estimated Cost: $180


DAY 2 - 2025-06-11
------------------------
MORNING: Arashiyama Bamboo Grove
Early visit.
Estimated Cost: $10


GENERAL TIPS:
1. Buy an ICOCA card
2. Carry cash

Total Estimated Cost: $1200

Generated by AI Travel Planner - Your personal AI travel companion"""


def _trip(trip_request, itinerary):
    return Trip.from_request(trip_request, trip_id="t1", user_id="u1", itinerary=itinerary)


def test_render_full_itinerary(trip_request, itinerary_data):
    trip = _trip(trip_request, Itinerary.model_validate(itinerary_data))
    assert render_itinerary_text(trip) == EXPECTED


def test_render_without_days_or_tips(trip_request):
    text = render_itinerary_text(_trip(trip_request, Itinerary(total_estimated_cost=0)))

    assert "DAILY ITINERARY" not in text
    assert "GENERAL TIPS" not in text
    assert text.endswith(
        "Interests: History, Food\n\n"
        "Total Estimated Cost: $N/A\n\n"
        "Generated by AI Travel Planner - Your personal AI travel companion"
    )


def test_filename_slugs_destination():
    assert itinerary_filename("New  York City") == "new-york-city-itinerary.txt"


def test_export_itinerary(trip_request, itinerary_data):
    trip = _trip(trip_request, Itinerary.model_validate(itinerary_data))
    filename, text = export_itinerary(trip)
    assert filename == "kyoto-itinerary.txt"
    assert text == EXPECTED
