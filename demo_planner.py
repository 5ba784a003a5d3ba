"""
Demo script: plan a trip step by step in the console.

Usage:
    python demo_planner.py

Walks you through:
  1. Destination and dates
  2. Budget, travelers and preferences
  3. Notes and a summary, then Gemini generates the itinerary

The result is printed in the download format and can be saved to a file.
No database is needed; GEMINI_API_KEY must be set (or in .env).
"""

import asyncio
import sys

# Ensure UTF-8 output on Windows
sys.stdout.reconfigure(encoding="utf-8")

from trip_planner.agents.itinerary import ItineraryAgent
from trip_planner.config import initialize_config
from trip_planner.data.trips import (
    MAX_INTERESTS,
    AccommodationType,
    Interest,
    TransportationType,
    Trip,
)
from trip_planner.prompts.templates import build_itinerary_prompt
from trip_planner.services.itinerary_export import export_itinerary
from trip_planner.services.trip_form import TripPlanningForm
from trip_planner.utils.error_handling import TripPlannerError
from trip_planner.utils.helpers import generate_id
from trip_planner.utils.logging import setup_logging


def header(title: str) -> None:
    print("\n" + "=" * 60)
    print(title)
    print("=" * 60)


def choose(label: str, options: list[str]) -> str:
    for n, option in enumerate(options, 1):
        print(f"  {n}. {option}")
    answer = input(f"{label} [number, Enter for Any]: ").strip()
    if answer.isdigit() and 1 <= int(answer) <= len(options):
        return options[int(answer) - 1]
    return "Any"


def ask_basics(form: TripPlanningForm) -> None:
    """Step 1: where and when."""
    header("STEP 1: Where and when")
    form.update(
        destination=input("Destination: "),
        start_date=input("Start date (YYYY-MM-DD): ").strip(),
        end_date=input("End date (YYYY-MM-DD): ").strip(),
    )


def ask_preferences(form: TripPlanningForm) -> None:
    """Step 2: budget, party size and preferences."""
    header("STEP 2: Budget and preferences")
    form.update(
        budget=input("Budget (USD): "),
        travelers=input("Travelers [1]: ").strip() or 1,
    )

    interests = list(Interest)
    for n, interest in enumerate(interests, 1):
        print(f"  {n:>2}. {interest.value}")
    picked = input(f"Interests (numbers, comma separated, max {MAX_INTERESTS}): ")
    form.update(interests=[])
    for token in picked.split(","):
        token = token.strip()
        if token.isdigit() and 1 <= int(token) <= len(interests):
            form.toggle_interest(interests[int(token) - 1])

    print("\nAccommodation:")
    accommodation = choose(
        "Accommodation",
        [a.value for a in AccommodationType if a != AccommodationType.ANY],
    )
    print("\nTransportation:")
    transportation = choose(
        "Transportation",
        [t.value for t in TransportationType if t != TransportationType.ANY],
    )
    form.update(
        accommodation_type=accommodation, transportation_type=transportation
    )


def ask_notes(form: TripPlanningForm) -> None:
    """Step 3: notes and summary."""
    header("STEP 3: Review")
    form.update(notes=input("Anything else we should know? "))
    print("\nTrip summary:")
    for line in form.summary():
        print(f"  {line}")


async def generate(form: TripPlanningForm) -> None:
    request = form.submit()

    if input("\nShow the prompt sent to Gemini? [y/N] ").strip().lower() == "y":
        print(f"\n{build_itinerary_prompt(request)}")

    print("\nGenerating your itinerary...")
    itinerary = await ItineraryAgent().generate(request)

    trip = Trip.from_request(
        request, trip_id=generate_id(), user_id="demo", itinerary=itinerary
    )
    filename, text = export_itinerary(trip)
    header("YOUR ITINERARY")
    print(text)

    if input(f"\nSave to {filename}? [y/N] ").strip().lower() == "y":
        with open(filename, "w", encoding="utf-8") as f:
            f.write(text)
        print(f"Saved {filename}")


def main():
    config = initialize_config()
    setup_logging(config.system.log_level)

    form = TripPlanningForm()
    steps = {1: ask_basics, 2: ask_preferences, 3: ask_notes}

    while True:
        try:
            steps[form.step](form)
        except ValueError as e:
            # pydantic rejects e.g. malformed dates
            print(f"\nError: {e}")
            continue
        if form.is_last_step:
            break
        if not form.next_step():
            print(f"\nError: {form.error}")

    try:
        asyncio.run(generate(form))
    except TripPlannerError as e:
        print(f"\nError: {e.message}")
        sys.exit(1)


if __name__ == "__main__":
    main()
