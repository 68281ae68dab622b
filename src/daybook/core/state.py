# src/daybook/core/state.py

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any

from ..tasks.board import Board
from .ports import KeyValueStore


@dataclass
class AppState:
    # Settings live on the state so command handlers can read them.
    settings: Any

    store: KeyValueStore
    board: Board

    # Serializes board access between connectors.
    lock: threading.Lock = field(default_factory=threading.Lock)
