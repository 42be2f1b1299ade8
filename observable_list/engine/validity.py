# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Apply-time checks deciding whether a queued change still makes sense.

A change is judged against the list as it is *now*, not as it was when
the change was requested. A change that fails is dropped without error.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

from .._sentinel import Unset
from ..change import Change, ChangeAction

__all__ = (
    "old_item_is_current",
    "insert_target_is_valid",
    "move_target_is_valid",
    "is_applicable",
)

Comparer = Callable[[Any, Any], bool]

_READS_OLD_ITEM = frozenset((ChangeAction.REMOVE, ChangeAction.REPLACE, ChangeAction.MOVE))


def old_item_is_current(change: Change, items: Sequence, comparer: Comparer) -> bool:
    """The element recorded at request time is still at ``old_index``."""
    if change.action not in _READS_OLD_ITEM:
        return True
    return change.old_index < len(items) and comparer(items[change.old_index], change.old_item)


def insert_target_is_valid(change: Change, items: Sequence) -> bool:
    """An insert may target any position up to and including the end."""
    if change.action is not ChangeAction.ADD or change.new_index is Unset:
        return True
    return change.new_index <= len(items)


def move_target_is_valid(change: Change, items: Sequence) -> bool:
    """A move may not target the end; only inserts can."""
    if change.action is not ChangeAction.MOVE:
        return True
    return change.new_index < len(items)


def is_applicable(change: Change, items: Sequence, comparer: Comparer) -> bool:
    return (
        old_item_is_current(change, items, comparer)
        and insert_target_is_valid(change, items)
        and move_target_is_valid(change, items)
    )
