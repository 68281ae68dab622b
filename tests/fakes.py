# tests/fakes.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta


class FakeClock:
    """
    Deterministic clock for Board tests.

    Calling it returns the current fake time; advance() moves it forward.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self.current = start or datetime(2024, 6, 1, 9, 5)

    def __call__(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current = self.current + timedelta(**kwargs)


@dataclass(slots=True)
class RecordingStore:
    """
    In-memory KeyValueStore that remembers every write batch.

    Used to assert that each operation flushes the full snapshot exactly once.
    """

    data: dict[str, str] = field(default_factory=dict)
    writes: list[dict[str, str]] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.set_many({key: value})

    def set_many(self, items: Mapping[str, str]) -> None:
        self.writes.append(dict(items))
        self.data.update(items)

    def remove(self, key: str) -> None:
        self.removed.append(key)
        self.data.pop(key, None)


class BrokenStore:
    """Store whose writes always fail (disk full, locked DB, ...)."""

    def get(self, key: str) -> str | None:
        return None

    def set(self, key: str, value: str) -> None:
        raise OSError("disk full")

    def remove(self, key: str) -> None:
        return
