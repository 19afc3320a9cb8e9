"""Form input parsing and validation for new workouts."""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime

from mapty.workout.model import (
    Coordinates,
    CyclingWorkout,
    RunningWorkout,
    Workout,
    WorkoutKind,
)


class InvalidWorkoutInput(ValueError):
    """Raised when form values cannot produce a workout."""


@dataclass(frozen=True)
class WorkoutForm:
    kind: WorkoutKind
    distance: float
    duration: float
    cadence_or_elevation: float


def validate_form(
    kind: str,
    distance: object,
    duration: object,
    cadence_or_elevation: object,
) -> WorkoutForm:
    if kind not in (RunningWorkout.kind, CyclingWorkout.kind):
        raise InvalidWorkoutInput(f"Unknown workout type '{kind}'")

    distance_km = _parse_number(distance, "Distance")
    duration_min = _parse_number(duration, "Duration")
    metric_name = "Cadence" if kind == RunningWorkout.kind else "Elevation gain"
    metric = _parse_number(cadence_or_elevation, metric_name)

    if distance_km <= 0:
        raise InvalidWorkoutInput("Distance must be a positive number")
    if duration_min <= 0:
        raise InvalidWorkoutInput("Duration must be a positive number")
    # Elevation gain may be zero or negative (downhill rides).
    if kind == RunningWorkout.kind and metric <= 0:
        raise InvalidWorkoutInput("Cadence must be a positive number")

    return WorkoutForm(
        kind=kind,
        distance=distance_km,
        duration=duration_min,
        cadence_or_elevation=metric,
    )


def build_workout(
    form: WorkoutForm,
    coordinates: Coordinates,
    *,
    now: datetime | None = None,
) -> Workout:
    if form.kind == RunningWorkout.kind:
        return RunningWorkout.create(
            coordinates,
            form.distance,
            form.duration,
            form.cadence_or_elevation,
            now=now,
        )
    return CyclingWorkout.create(
        coordinates,
        form.distance,
        form.duration,
        form.cadence_or_elevation,
        now=now,
    )


def _parse_number(raw: object, field_name: str) -> float:
    if raw is None or isinstance(raw, bool):
        raise InvalidWorkoutInput(f"{field_name} is required")
    text = str(raw).strip()
    if not text:
        raise InvalidWorkoutInput(f"{field_name} is required")
    try:
        value = float(text)
    except ValueError as exc:
        raise InvalidWorkoutInput(f"{field_name} must be a number") from exc
    if not math.isfinite(value):
        raise InvalidWorkoutInput(f"{field_name} must be a finite number")
    return value
