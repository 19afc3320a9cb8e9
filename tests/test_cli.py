from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest

from mapty.cli.main import build_parser, main, settings_from_args
from mapty.workout.codec import encode
from mapty.workout.model import CyclingWorkout, RunningWorkout
from mapty.workout.storage import LocalStorage

T0 = datetime(2026, 8, 20, 17, 0, tzinfo=timezone.utc)


def test_list_prints_saved_workouts(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    LocalStorage(tmp_path).set_item(
        "workouts",
        encode(
            [
                RunningWorkout.create((40.7, -74.0), 5, 25, 180, now=T0),
                CyclingWorkout.create((40.7, -74.0), 20, 60, 150, now=T0),
            ]
        ),
    )

    assert main(["--storage-dir", str(tmp_path), "--list"]) == 0

    out = capsys.readouterr().out.splitlines()
    assert len(out) == 2
    assert "Running on August 20" in out[0]
    assert "pace=5.0" in out[0]
    assert "speed=0.33" in out[1]


def test_list_reports_corrupt_storage(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    LocalStorage(tmp_path).set_item("workouts", "{oops")

    assert main(["--storage-dir", str(tmp_path), "--list"]) == 1
    assert "corrupt" in capsys.readouterr().out


def test_reset_removes_saved_workouts(tmp_path: Path) -> None:
    storage = LocalStorage(tmp_path)
    storage.set_item("workouts", "[]")

    assert main(["--storage-dir", str(tmp_path), "--reset"]) == 0
    assert storage.get_item("workouts") is None


def test_settings_from_args() -> None:
    args = build_parser().parse_args(["--lat", "40.7", "--lng", "-74.0", "--port", "9000"])
    settings = settings_from_args(args)

    assert settings.start_location == (40.7, -74.0)
    assert settings.port == 9000
    assert settings.map_zoom == 13


def test_lat_without_lng_is_an_error() -> None:
    with pytest.raises(SystemExit):
        main(["--lat", "40.7", "--list"])


def test_list_reports_undecodable_storage(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    (tmp_path / "workouts.json").write_bytes(b"\xff\xfe[garbage")

    assert main(["--storage-dir", str(tmp_path), "--list"]) == 1
    assert "corrupt" in capsys.readouterr().out
