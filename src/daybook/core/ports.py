# src/daybook/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The board and the snapshot codec depend on Protocols instead of concrete
implementations, so storage backends stay swappable and tests can use fakes.
Stores may also offer set_many(items) to write a whole snapshot in one batch;
the snapshot codec uses it when present.
"""

from typing import Protocol


class KeyValueStore(Protocol):
    """Named string slots in some durable medium. Pure I/O, no business rules."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...
