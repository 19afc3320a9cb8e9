"""Flat key-value text storage on the local filesystem."""

from __future__ import annotations

import os
import re
from pathlib import Path

from mapty.workout.codec import CorruptPersistedState, decode
from mapty.workout.model import Workout

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


def default_storage_dir() -> Path:
    return Path.home() / ".mapty" / "local-storage"


class LocalStorage:
    """One text file per key. Writes replace the whole value."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self.base_dir = base_dir or default_storage_dir()

    def get_item(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_text(value, encoding="utf-8")
        os.replace(tmp, path)

    def remove_item(self, key: str) -> None:
        self._path_for(key).unlink(missing_ok=True)

    def _path_for(self, key: str) -> Path:
        if not _KEY_RE.match(key) or key in {".", ".."}:
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.base_dir / f"{key}.json"


def read_workouts(storage: LocalStorage, key: str) -> list[Workout]:
    """Decode the workouts stored under ``key``; unreadable text counts as corrupt."""
    try:
        text = storage.get_item(key)
    except UnicodeDecodeError as exc:
        raise CorruptPersistedState(f"Stored text is not valid UTF-8: {exc}") from exc
    return decode(text)
