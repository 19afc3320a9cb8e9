"""NiceGUI web UI for Mapty."""

from __future__ import annotations

from typing import Any

from nicegui import ui

from mapty.core.location import BrowserLocationProvider, FixedLocationProvider, LocationProvider
from mapty.core.settings import AppSettings
from mapty.ui.controller import WorkoutController
from mapty.workout.model import Coordinates, CyclingWorkout, RunningWorkout, Workout

FALLBACK_CENTER = (0.0, 0.0)


def _fmt_number(value: float) -> str:
    return f"{value:g}"


def _summary_rows(workout: Workout) -> list[tuple[str, str, str]]:
    rows = [
        ("🏃" if isinstance(workout, RunningWorkout) else "🚴‍♀️", _fmt_number(workout.distance), "km"),
        ("⏱", _fmt_number(workout.duration), "min"),
    ]
    if isinstance(workout, RunningWorkout):
        rows.append(("⚡️", _fmt_number(workout.pace), "min/km"))
        rows.append(("🦶🏼", _fmt_number(workout.cadence), "spm"))
    elif isinstance(workout, CyclingWorkout):
        rows.append(("⚡️", _fmt_number(workout.speed), "km/min"))
        rows.append(("⛰", _fmt_number(workout.elevation_gain), "m"))
    return rows


class LeafletMapView:
    def __init__(self, leaflet: Any) -> None:
        self._leaflet = leaflet
        self._markers: list[Any] = []

    @property
    def zoom(self) -> int | None:
        return self._leaflet.zoom

    def render_marker(self, workout: Workout, label: str) -> None:
        marker = self._leaflet.marker(latlng=workout.coordinates)
        marker.run_method(
            "bindPopup",
            label,
            {
                "maxWidth": 250,
                "minWidth": 100,
                "autoClose": False,
                "closeOnClick": False,
                "className": f"{workout.kind}-popup",
            },
        )
        marker.run_method("openPopup")
        self._markers.append(marker)

    def center_on(self, coordinates: Coordinates, zoom: int) -> None:
        self._leaflet.set_center(coordinates)
        self._leaflet.set_zoom(zoom)

    def clear_markers(self) -> None:
        for marker in self._markers:
            self._leaflet.remove_layer(marker)
        self._markers.clear()


class CardListView:
    def __init__(self, container: Any) -> None:
        self._container = container
        self.on_select: Any = None

    def render_workout(self, workout: Workout) -> None:
        with self._container:
            card = ui.card().classes(f"w-full cursor-pointer workout--{workout.kind}")
            with card:
                ui.label(workout.title).classes("text-base font-semibold")
                with ui.row().classes("gap-4"):
                    for icon, value, unit in _summary_rows(workout):
                        ui.label(f"{icon} {value} {unit}").classes("text-sm")
        # Newest first.
        card.move(target_index=0)
        if self.on_select is not None:
            card.on("click", lambda _e, workout_id=workout.id: self.on_select(workout_id))

    def clear(self) -> None:
        self._container.clear()


class NotifyNotifier:
    def error(self, message: str) -> None:
        ui.notify(message, type="negative")

    def warning(self, message: str) -> None:
        ui.notify(message, type="warning")


def _location_provider(settings: AppSettings) -> LocationProvider:
    if settings.start_location is not None:
        lat, lng = settings.start_location
        return FixedLocationProvider(lat, lng)
    return BrowserLocationProvider()


def run_web_ui(settings: AppSettings) -> int:
    @ui.page("/")
    async def index() -> None:
        with ui.row().classes("w-full h-screen no-wrap gap-0"):
            with ui.column().classes("w-[420px] h-full p-4 gap-3 bg-slate-800 text-white"):
                ui.label("MAPTY").classes("text-xl font-semibold tracking-wide")
                status_label = ui.label("Waiting for location...").classes("text-sm")

                with ui.card().classes("w-full") as form_card:
                    type_select = ui.select(
                        {RunningWorkout.kind: "Running", CyclingWorkout.kind: "Cycling"},
                        value=RunningWorkout.kind,
                        label="Type",
                    ).classes("w-full")
                    distance_input = ui.input("Distance (km)").classes("w-full")
                    duration_input = ui.input("Duration (min)").classes("w-full")
                    cadence_input = ui.input("Cadence (step/min)").classes("w-full")
                    elevation_input = ui.input("Elevation gain (m)").classes("w-full")
                    submit_btn = ui.button("OK")
                form_card.set_visibility(False)
                elevation_input.set_visibility(False)

                workout_list = ui.column().classes("w-full gap-2 overflow-auto")
                reset_btn = ui.button("Reset").props("outline color=white")

            leaflet = ui.leaflet(center=FALLBACK_CENTER, zoom=settings.map_zoom).classes(
                "flex-grow h-full"
            )

        list_view = CardListView(workout_list)
        controller = WorkoutController(
            map_view=LeafletMapView(leaflet),
            list_view=list_view,
            notifier=NotifyNotifier(),
            settings=settings,
        )
        list_view.on_select = controller.focus

        def clear_form() -> None:
            type_select.value = RunningWorkout.kind
            for field in (distance_input, duration_input, cadence_input, elevation_input):
                field.value = ""
            form_card.set_visibility(False)

        def on_type_change() -> None:
            running = type_select.value == RunningWorkout.kind
            cadence_input.set_visibility(running)
            elevation_input.set_visibility(not running)

        def on_map_click(e: Any) -> None:
            if not controller.state.creation_enabled:
                return
            latlng = e.args["latlng"]
            controller.select_location((latlng["lat"], latlng["lng"]))
            form_card.set_visibility(True)
            distance_input.run_method("focus")

        def on_submit() -> None:
            running = type_select.value == RunningWorkout.kind
            workout = controller.submit(
                str(type_select.value),
                distance_input.value,
                duration_input.value,
                cadence_input.value if running else elevation_input.value,
            )
            if workout is not None:
                clear_form()

        def on_reset() -> None:
            controller.reset()
            clear_form()

        type_select.on_value_change(on_type_change)
        submit_btn.on_click(on_submit)
        for field in (distance_input, duration_input, cadence_input, elevation_input):
            field.on("keydown.enter", on_submit)
        reset_btn.on_click(on_reset)
        leaflet.on("map-click", on_map_click)

        await ui.context.client.connected()
        if await controller.start(_location_provider(settings)):
            status_label.set_text("Click on the map to add a workout")
        else:
            status_label.set_text("Location unavailable: adding workouts is disabled")

    ui.run(
        host=settings.host,
        port=settings.port,
        reload=False,
        title="Mapty",
        show=False,
    )
    return 0
