# src/daybook/tasks/ids.py

from __future__ import annotations

import time
from collections.abc import Callable


class IdAllocator:
    """
    Millisecond-clock ids that never repeat.

    Ids keep the shape of a creation timestamp (ms since epoch) but are bumped
    past the last issued value when two allocations land in the same tick or the
    clock goes backwards.
    """

    def __init__(self, *, floor: int = 0, clock: Callable[[], float] = time.time) -> None:
        self._last = int(floor)
        self._clock = clock

    def next_id(self) -> int:
        now_ms = int(self._clock() * 1000)
        nid = max(now_ms, self._last + 1)
        self._last = nid
        return nid

    @property
    def last(self) -> int:
        return self._last
