"""Runtime state of the active mapping session."""

from __future__ import annotations

from dataclasses import dataclass

from mapty.workout.model import Coordinates


@dataclass
class SessionState:
    home_location: Coordinates | None = None
    pending_location: Coordinates | None = None
    creation_enabled: bool = False
    current_zoom: int | None = None
