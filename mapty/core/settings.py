"""Application settings resolved from CLI flags and home-directory defaults."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from mapty.workout.storage import default_storage_dir

DEFAULT_MAP_ZOOM = 13
DEFAULT_STORAGE_KEY = "workouts"


@dataclass(frozen=True)
class AppSettings:
    storage_dir: Path = field(default_factory=default_storage_dir)
    storage_key: str = DEFAULT_STORAGE_KEY
    map_zoom: int = DEFAULT_MAP_ZOOM
    host: str = "127.0.0.1"
    port: int = 8090
    start_location: tuple[float, float] | None = None
