"""Startup location lookup."""

from __future__ import annotations

import logging
import math
from typing import Protocol

from mapty.workout.model import Coordinates

logger = logging.getLogger(__name__)

_GEOLOCATION_JS = """
new Promise((resolve) => {
  if (!navigator.geolocation) { resolve(null); return; }
  navigator.geolocation.getCurrentPosition(
    (pos) => resolve([pos.coords.latitude, pos.coords.longitude]),
    () => resolve(null),
  );
})
"""


class LocationUnavailable(RuntimeError):
    """Raised when the user's location cannot be determined."""


class LocationProvider(Protocol):
    async def request_location(self) -> Coordinates: ...


class FixedLocationProvider:
    def __init__(self, lat: float, lng: float) -> None:
        self._coords = (float(lat), float(lng))

    async def request_location(self) -> Coordinates:
        lat, lng = self._coords
        if not (math.isfinite(lat) and math.isfinite(lng)):
            raise LocationUnavailable("Configured start location is not a valid coordinate")
        if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
            raise LocationUnavailable("Configured start location is out of range")
        return self._coords


class BrowserLocationProvider:
    """Asks the connected browser for its position via navigator.geolocation."""

    def __init__(self, timeout: float = 60.0) -> None:
        self._timeout = timeout

    async def request_location(self) -> Coordinates:
        from nicegui import ui

        try:
            result = await ui.run_javascript(_GEOLOCATION_JS, timeout=self._timeout)
        except TimeoutError as exc:
            raise LocationUnavailable("Timed out waiting for browser location") from exc
        return _coords_from_js(result)


def _coords_from_js(result: object) -> Coordinates:
    if not isinstance(result, (list, tuple)) or len(result) != 2:
        logger.debug("Browser geolocation returned %r", result)
        raise LocationUnavailable("Geolocation is not supported or permission was denied")
    try:
        return (float(result[0]), float(result[1]))
    except (TypeError, ValueError) as exc:
        raise LocationUnavailable("Browser returned an invalid location") from exc
