"""Event handlers shared by the web UI and tests."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Protocol

from mapty.core.location import LocationProvider, LocationUnavailable
from mapty.core.settings import AppSettings
from mapty.core.state import SessionState
from mapty.workout.codec import CorruptPersistedState, encode
from mapty.workout.inputs import InvalidWorkoutInput, build_workout, validate_form
from mapty.workout.model import Coordinates, RunningWorkout, Workout
from mapty.workout.storage import LocalStorage, read_workouts
from mapty.workout.store import WorkoutStore

logger = logging.getLogger(__name__)

RUNNING_EMOJI = "🏃‍♂️"
CYCLING_EMOJI = "🚴‍♀️"


class MapView(Protocol):
    @property
    def zoom(self) -> int | None: ...

    def render_marker(self, workout: Workout, label: str) -> None: ...

    def center_on(self, coordinates: Coordinates, zoom: int) -> None: ...

    def clear_markers(self) -> None: ...


class ListView(Protocol):
    def render_workout(self, workout: Workout) -> None: ...

    def clear(self) -> None: ...


class Notifier(Protocol):
    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...


def marker_label(workout: Workout) -> str:
    emoji = RUNNING_EMOJI if isinstance(workout, RunningWorkout) else CYCLING_EMOJI
    return f"{emoji} {workout.title}"


class WorkoutController:
    def __init__(
        self,
        map_view: MapView,
        list_view: ListView,
        notifier: Notifier,
        settings: AppSettings | None = None,
        store: WorkoutStore | None = None,
        storage: LocalStorage | None = None,
    ) -> None:
        self.settings = settings if settings is not None else AppSettings()
        self.store = store if store is not None else WorkoutStore()
        self.storage = (
            storage if storage is not None else LocalStorage(self.settings.storage_dir)
        )
        self.state = SessionState()
        self._map = map_view
        self._list = list_view
        self._notifier = notifier

    async def start(self, provider: LocationProvider) -> bool:
        try:
            location = await provider.request_location()
        except LocationUnavailable as exc:
            logger.warning("Location unavailable: %s", exc)
            self.state.creation_enabled = False
            self._notifier.error(str(exc))
            return False

        self.state.home_location = location
        self.state.creation_enabled = True
        self._center(location, self.settings.map_zoom)
        self.load()
        return True

    def load(self) -> list[Workout]:
        try:
            workouts = read_workouts(self.storage, self.settings.storage_key)
        except CorruptPersistedState as exc:
            logger.warning("Discarding stored workouts: %s", exc)
            self.store.clear()
            self._notifier.warning(
                "Saved workouts could not be read and were not restored"
            )
            return []

        self.store.replace_all(workouts)
        for workout in workouts:
            self._render(workout)
        logger.info("Restored %d workouts", len(workouts))
        return workouts

    def select_location(self, coordinates: Coordinates) -> None:
        self.state.pending_location = (float(coordinates[0]), float(coordinates[1]))
        zoom = self.settings.map_zoom
        current = self._map.zoom
        if current is not None and current > zoom:
            zoom = current
        self._center(self.state.pending_location, zoom)

    def submit(
        self,
        kind: str,
        distance: object,
        duration: object,
        cadence_or_elevation: object,
        *,
        now: datetime | None = None,
    ) -> Workout | None:
        if not self.state.creation_enabled:
            self._notifier.error("Location is unavailable; workouts cannot be added")
            return None
        if self.state.pending_location is None:
            self._notifier.error("Click on the map to choose a workout location")
            return None

        try:
            form = validate_form(kind, distance, duration, cadence_or_elevation)
        except InvalidWorkoutInput as exc:
            self._notifier.error(str(exc))
            return None

        workout = build_workout(form, self.state.pending_location, now=now)
        self.store.add(workout)
        self._render(workout)
        self.state.pending_location = None
        self.save()
        logger.info("Added %s workout %s", workout.kind, workout.id)
        return workout

    def focus(self, workout_id: str) -> Workout | None:
        workout = self.store.find_by_id(workout_id)
        if workout is None:
            logger.debug("No workout with id %s", workout_id)
            return None
        self._center(workout.coordinates, self.settings.map_zoom)
        return workout

    def save(self) -> None:
        self.storage.set_item(self.settings.storage_key, encode(self.store.all()))

    def reset(self) -> None:
        self.storage.remove_item(self.settings.storage_key)
        self.store.clear()
        self.state.pending_location = None
        self._map.clear_markers()
        self._list.clear()
        logger.info("Cleared stored workouts")

    def _render(self, workout: Workout) -> None:
        self._map.render_marker(workout, marker_label(workout))
        self._list.render_workout(workout)

    def _center(self, coordinates: Coordinates, zoom: int) -> None:
        self.state.current_zoom = zoom
        self._map.center_on(coordinates, zoom)
