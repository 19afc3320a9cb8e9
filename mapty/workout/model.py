"""Workout domain models."""

from __future__ import annotations

import math
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import ClassVar, Literal

WorkoutKind = Literal["running", "cycling"]
Coordinates = tuple[float, float]

MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def round2(value: float) -> float:
    """Round half-up to two decimals."""
    return math.floor(value * 100 + 0.5) / 100


def workout_id_from(created_at: datetime) -> str:
    # Last 10 digits of the epoch milliseconds. Two workouts created in the
    # same millisecond share an id.
    millis = int(created_at.timestamp() * 1000)
    return str(millis)[-10:]


def format_title(label: str, created_at: datetime) -> str:
    return f"{label} on {MONTHS[created_at.month - 1]} {created_at.day}"


def _now_utc() -> datetime:
    return datetime.fromtimestamp(time.time(), tz=timezone.utc)


@dataclass(frozen=True)
class Workout(ABC):
    id: str
    created_at: datetime
    coordinates: Coordinates
    distance: float
    duration: float
    title: str

    kind: ClassVar[WorkoutKind]
    label: ClassVar[str]

    @property
    @abstractmethod
    def derived_metric(self) -> float:
        """Pace for runs, speed for rides."""


@dataclass(frozen=True)
class RunningWorkout(Workout):
    cadence: float
    pace: float

    kind: ClassVar[WorkoutKind] = "running"
    label: ClassVar[str] = "Running"

    @classmethod
    def create(
        cls,
        coordinates: Coordinates,
        distance: float,
        duration: float,
        cadence: float,
        *,
        now: datetime | None = None,
    ) -> RunningWorkout:
        created_at = now or _now_utc()
        return cls(
            id=workout_id_from(created_at),
            created_at=created_at,
            coordinates=(float(coordinates[0]), float(coordinates[1])),
            distance=distance,
            duration=duration,
            title=format_title(cls.label, created_at),
            cadence=cadence,
            pace=round2(duration / distance),
        )

    @property
    def derived_metric(self) -> float:
        return self.pace


@dataclass(frozen=True)
class CyclingWorkout(Workout):
    """A ride. ``speed`` is distance over duration in minutes, i.e. km/min."""

    elevation_gain: float
    speed: float

    kind: ClassVar[WorkoutKind] = "cycling"
    label: ClassVar[str] = "Cycling"

    @classmethod
    def create(
        cls,
        coordinates: Coordinates,
        distance: float,
        duration: float,
        elevation_gain: float,
        *,
        now: datetime | None = None,
    ) -> CyclingWorkout:
        created_at = now or _now_utc()
        return cls(
            id=workout_id_from(created_at),
            created_at=created_at,
            coordinates=(float(coordinates[0]), float(coordinates[1])),
            distance=distance,
            duration=duration,
            title=format_title(cls.label, created_at),
            elevation_gain=elevation_gain,
            speed=round2(distance / duration),
        )

    @property
    def derived_metric(self) -> float:
        return self.speed


WORKOUT_TYPES: dict[str, type[Workout]] = {
    RunningWorkout.kind: RunningWorkout,
    CyclingWorkout.kind: CyclingWorkout,
}
