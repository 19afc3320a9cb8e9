"""Serialize workouts to a flat JSON blob and restore them by kind."""

from __future__ import annotations

import json
import math
from datetime import datetime
from typing import Any, Iterable

from mapty.workout.model import CyclingWorkout, RunningWorkout, Workout


class CorruptPersistedState(ValueError):
    """Raised when the persisted workout blob cannot be restored."""


def encode(workouts: Iterable[Workout]) -> str:
    return json.dumps([_encode_record(w) for w in workouts], ensure_ascii=True)


def decode(text: str | None) -> list[Workout]:
    if text is None or not text.strip():
        return []

    try:
        data = json.loads(text)
    except (ValueError, RecursionError) as exc:
        raise CorruptPersistedState(f"Invalid JSON: {exc}") from exc

    if not isinstance(data, list):
        raise CorruptPersistedState("Persisted workouts must be an array")

    out: list[Workout] = []
    for i, raw in enumerate(data):
        if not isinstance(raw, dict):
            raise CorruptPersistedState(f"Record {i + 1}: must be an object")
        out.append(_decode_record(raw, index=i))
    return out


def _encode_record(workout: Workout) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "kind": workout.kind,
        "id": workout.id,
        "created_at": workout.created_at.isoformat(),
        "coordinates": [workout.coordinates[0], workout.coordinates[1]],
        "distance": workout.distance,
        "duration": workout.duration,
        "title": workout.title,
    }
    if isinstance(workout, RunningWorkout):
        payload["cadence"] = workout.cadence
        payload["pace"] = workout.pace
    elif isinstance(workout, CyclingWorkout):
        payload["elevation_gain"] = workout.elevation_gain
        payload["speed"] = workout.speed
    else:
        raise TypeError(f"Unsupported workout type: {type(workout).__name__}")
    return payload


def _decode_record(raw: dict[str, Any], *, index: int) -> Workout:
    kind = raw.get("kind")
    common = {
        "id": _parse_str(raw, "id", index),
        "created_at": _parse_datetime(raw, "created_at", index),
        "coordinates": _parse_coordinates(raw, index),
        "distance": _parse_float(raw, "distance", index),
        "duration": _parse_float(raw, "duration", index),
        "title": _parse_str(raw, "title", index),
    }
    if kind == RunningWorkout.kind:
        return RunningWorkout(
            **common,
            cadence=_parse_float(raw, "cadence", index),
            pace=_parse_float(raw, "pace", index),
        )
    if kind == CyclingWorkout.kind:
        return CyclingWorkout(
            **common,
            elevation_gain=_parse_float(raw, "elevation_gain", index),
            speed=_parse_float(raw, "speed", index),
        )
    raise CorruptPersistedState(f"Record {index + 1}: unknown kind {kind!r}")


def _parse_str(raw: dict[str, Any], field_name: str, index: int) -> str:
    value = raw.get(field_name)
    if not isinstance(value, str):
        raise CorruptPersistedState(f"Record {index + 1}: invalid {field_name}")
    return value


def _parse_float(raw: dict[str, Any], field_name: str, index: int) -> float:
    value = raw.get(field_name)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise CorruptPersistedState(f"Record {index + 1}: invalid {field_name}")
    try:
        number = float(value)
    except OverflowError as exc:
        raise CorruptPersistedState(f"Record {index + 1}: {field_name} out of range") from exc
    if not math.isfinite(number):
        raise CorruptPersistedState(f"Record {index + 1}: {field_name} must be finite")
    return number


def _parse_datetime(raw: dict[str, Any], field_name: str, index: int) -> datetime:
    value = _parse_str(raw, field_name, index)
    try:
        return datetime.fromisoformat(value)
    except ValueError as exc:
        raise CorruptPersistedState(f"Record {index + 1}: invalid {field_name}") from exc


def _parse_coordinates(raw: dict[str, Any], index: int) -> tuple[float, float]:
    value = raw.get("coordinates")
    if not isinstance(value, list) or len(value) != 2:
        raise CorruptPersistedState(f"Record {index + 1}: coordinates must be [lat, lng]")
    pair = {"lat": value[0], "lng": value[1]}
    return (_parse_float(pair, "lat", index), _parse_float(pair, "lng", index))
