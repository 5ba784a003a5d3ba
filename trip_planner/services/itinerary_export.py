"""
Plain-text itinerary export, the format offered for download.
"""

from trip_planner.data.trips import ActivitySlot, Stay, Trip
from trip_planner.utils.helpers import (
    format_amount,
    format_long_date,
    slugify_destination,
)

FOOTER = "Generated by AI Travel Planner - Your personal AI travel companion"
DAY_RULE = "-" * 24


def itinerary_filename(destination: str) -> str:
    return f"{slugify_destination(destination)}-itinerary.txt"


def _slot_lines(label: str, title: str, slot: ActivitySlot | Stay) -> list[str]:
    return [
        f"{label}: {title}",
        slot.description,
        f"Estimated Cost: ${format_amount(slot.estimated_cost)}",
        "",
    ]


def render_itinerary_text(trip: Trip) -> str:
    """Render a stored trip and its itinerary as a text document."""
    lines = [
        f"TRAVEL ITINERARY: {trip.destination.upper()}",
        f"{format_long_date(trip.start_date)} to {format_long_date(trip.end_date)}",
        "",
        "TRIP SUMMARY:",
        f"Destination: {trip.destination}",
        f"Duration: {trip.duration_days} days",
        f"Budget: ${format_amount(trip.budget)}",
        f"Travelers: {trip.travelers if trip.travelers is not None else ''}",
        f"Interests: {', '.join(i.value for i in trip.interests)}",
        "",
    ]

    itinerary = trip.itinerary
    if itinerary and itinerary.days:
        lines += ["DAILY ITINERARY:", ""]
        for day in itinerary.days:
            day_number = day.day_number if day.day_number is not None else ""
            lines += [f"DAY {day_number} - {day.date}", DAY_RULE]
            for label, slot in (
                ("MORNING", day.morning),
                ("AFTERNOON", day.afternoon),
                ("EVENING", day.evening),
            ):
                if slot:
                    lines += _slot_lines(label, slot.activity, slot)
            if day.accommodation:
                lines += _slot_lines(
                    "ACCOMMODATION", day.accommodation.name, day.accommodation
                )
            lines.append("")

    if itinerary and itinerary.general_tips:
        lines.append("GENERAL TIPS:")
        lines += [f"{n}. {tip}" for n, tip in enumerate(itinerary.general_tips, 1)]
        lines.append("")

    # A zero total is shown as N/A as well
    total = itinerary.total_estimated_cost if itinerary else None
    lines += [f"Total Estimated Cost: ${format_amount(total or None)}", ""]
    lines.append(FOOTER)
    return "\n".join(lines)


def export_itinerary(trip: Trip) -> tuple[str, str]:
    """Return the download file name and text for a trip."""
    return itinerary_filename(trip.destination), render_itinerary_text(trip)
