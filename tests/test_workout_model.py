from __future__ import annotations

import dataclasses
from datetime import datetime, timezone

import pytest

from mapty.workout.model import (
    CyclingWorkout,
    RunningWorkout,
    Workout,
    round2,
    workout_id_from,
)

CREATED = datetime(2026, 4, 14, 9, 30, 12, 345000, tzinfo=timezone.utc)


def test_running_workout_derives_pace_and_title() -> None:
    run = RunningWorkout.create((40.7, -74.0), 5, 25, 180, now=CREATED)

    assert run.kind == "running"
    assert run.pace == 5.0
    assert run.derived_metric == 5.0
    assert run.title == "Running on April 14"
    assert run.created_at == CREATED
    assert run.coordinates == (40.7, -74.0)
    assert not hasattr(run, "speed")


def test_cycling_workout_derives_speed_and_title() -> None:
    ride = CyclingWorkout.create((40.7, -74.0), 20, 60, 150, now=CREATED)

    assert ride.kind == "cycling"
    assert ride.speed == round2(20 / 60)
    assert ride.speed == 0.33
    assert "Cycling" in ride.title
    assert not hasattr(ride, "pace")


@pytest.mark.parametrize(
    ("distance", "duration"),
    [(5, 25), (3.3, 17), (42.195, 215.5), (0.7, 4.1), (12, 7)],
)
def test_derived_metrics_follow_round2(distance: float, duration: float) -> None:
    run = RunningWorkout.create((0.0, 0.0), distance, duration, 170, now=CREATED)
    ride = CyclingWorkout.create((0.0, 0.0), distance, duration, 0, now=CREATED)

    assert run.pace == round2(duration / distance)
    assert ride.speed == round2(distance / duration)


def test_round2_rounds_half_up() -> None:
    assert round2(0.125) == 0.13
    assert round2(2.5) == 2.5
    assert round2(1 / 3) == 0.33
    assert round2(-0.125) == -0.12


def test_id_is_last_ten_digits_of_epoch_millis() -> None:
    millis = int(CREATED.timestamp() * 1000)
    run = RunningWorkout.create((0.0, 0.0), 5, 25, 180, now=CREATED)

    assert run.id == str(millis)[-10:]
    assert run.id == workout_id_from(CREATED)
    assert len(run.id) == 10


def test_same_millisecond_workouts_share_id() -> None:
    a = RunningWorkout.create((0.0, 0.0), 5, 25, 180, now=CREATED)
    b = CyclingWorkout.create((1.0, 1.0), 10, 30, 5, now=CREATED)

    assert a.id == b.id


def test_workouts_are_immutable() -> None:
    run = RunningWorkout.create((0.0, 0.0), 5, 25, 180, now=CREATED)

    with pytest.raises(dataclasses.FrozenInstanceError):
        run.id = "other"  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        run.pace = 1.0  # type: ignore[misc]


def test_base_workout_is_not_instantiable() -> None:
    with pytest.raises(TypeError):
        Workout(
            id="1",
            created_at=CREATED,
            coordinates=(0.0, 0.0),
            distance=1.0,
            duration=1.0,
            title="x",
        )


def test_elevation_gain_may_be_negative() -> None:
    ride = CyclingWorkout.create((0.0, 0.0), 30, 60, -120, now=CREATED)

    assert ride.elevation_gain == -120
    assert ride.speed == 0.5


def test_derived_metric_matches_kind() -> None:
    run = RunningWorkout.create((0.0, 0.0), 5, 25, 180, now=CREATED)
    ride = CyclingWorkout.create((0.0, 0.0), 20, 60, 150, now=CREATED)

    assert run.derived_metric == run.pace
    assert ride.derived_metric == ride.speed
    assert "derived_metric" in Workout.__abstractmethods__
