# src/daybook/tasks/expansion.py

"""
Expand/collapse flags.

Three namespaces share these helpers: lists, list task panels (both keyed by
list id) and task groups (keyed by date). A key that is absent reads as
DEFAULT_EXPANDED everywhere.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Mapping
from typing import TypeVar

K = TypeVar("K", bound=Hashable)

DEFAULT_EXPANDED = True


def is_expanded(flags: Mapping[K, bool], key: K) -> bool:
    return bool(flags.get(key, DEFAULT_EXPANDED))


def toggle(flags: Mapping[K, bool], key: K) -> dict[K, bool]:
    out = dict(flags)
    out[key] = not is_expanded(flags, key)
    return out


def set_all(flags: Mapping[K, bool], keys: Iterable[K], value: bool) -> dict[K, bool]:
    out = dict(flags)
    for key in keys:
        out[key] = value
    return out


def bulk_target(flags: Mapping[K, bool], keys: Iterable[K]) -> bool:
    """
    Target state for "collapse/expand all": collapse only when every key is
    currently expanded, otherwise expand.
    """
    keys = list(keys)
    if keys and all(is_expanded(flags, k) for k in keys):
        return False
    return True


def without(flags: Mapping[K, bool], keys: Iterable[K]) -> dict[K, bool]:
    drop = set(keys)
    return {k: v for k, v in flags.items() if k not in drop}
