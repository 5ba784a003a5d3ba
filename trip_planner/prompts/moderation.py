"""
Content moderation for free-text trip fields sent to Gemini.

Harmful content is left to Gemini's built-in safety filters; this layer
only rejects input that is too long to place in a prompt.
"""

from pydantic import BaseModel

MAX_INPUT_LENGTH = 5000
MAX_DESTINATION_LENGTH = 200


class ModerationResult(BaseModel):
    is_safe: bool
    reason: str | None = None


def moderate_input(text: str, max_length: int = MAX_INPUT_LENGTH) -> ModerationResult:
    """Validate free text before it is placed in a prompt."""
    if len(text) > max_length:
        return ModerationResult(
            is_safe=False,
            reason=f"Input too long ({len(text)} chars, max {max_length})",
        )

    return ModerationResult(is_safe=True)


def moderate_trip_text(destination: str, notes: str) -> ModerationResult:
    """Check the destination and notes of a trip request."""
    result = moderate_input(destination, max_length=MAX_DESTINATION_LENGTH)
    if not result.is_safe:
        return ModerationResult(is_safe=False, reason=f"Destination: {result.reason}")

    result = moderate_input(notes)
    if not result.is_safe:
        return ModerationResult(is_safe=False, reason=f"Notes: {result.reason}")

    return result
