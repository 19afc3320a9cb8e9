from __future__ import annotations

import asyncio

import pytest

from mapty.core.location import FixedLocationProvider, LocationUnavailable, _coords_from_js


def test_fixed_provider_resolves() -> None:
    assert asyncio.run(FixedLocationProvider(40.7, -74.0).request_location()) == (40.7, -74.0)


@pytest.mark.parametrize(("lat", "lng"), [(91.0, 0.0), (0.0, 181.0), (float("nan"), 0.0)])
def test_fixed_provider_rejects_invalid_coordinates(lat: float, lng: float) -> None:
    with pytest.raises(LocationUnavailable):
        asyncio.run(FixedLocationProvider(lat, lng).request_location())


def test_browser_result_parsing() -> None:
    assert _coords_from_js([51.5, -0.12]) == (51.5, -0.12)
    with pytest.raises(LocationUnavailable):
        _coords_from_js(None)
    with pytest.raises(LocationUnavailable):
        _coords_from_js(["a", "b"])
