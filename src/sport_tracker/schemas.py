"""Validated inputs at the point where workouts enter the system."""

from pydantic import BaseModel, Field

from .database.models import MAX_WORKOUT_MINUTES, WorkoutType


class WorkoutInput(BaseModel):
    """A workout as chosen in the add-workout wizard."""

    type: WorkoutType = Field(description="Workout category")
    duration_minutes: int = Field(
        ge=1,
        le=MAX_WORKOUT_MINUTES,
        description="Duration in whole minutes",
    )


def parse_custom_duration(text: str) -> int:
    """Parse a typed duration like '75'.

    Raises ValueError unless the text is a whole number of minutes
    between 1 and 1440.
    """
    stripped = text.strip()
    if not stripped.isdigit():
        raise ValueError(f"Not a whole number of minutes: {text!r}")
    minutes = int(stripped)
    if not 1 <= minutes <= MAX_WORKOUT_MINUTES:
        raise ValueError(f"Duration out of range: {minutes}")
    return minutes
