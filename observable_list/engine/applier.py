# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from ..change import Change, ChangeAction

__all__ = ("apply_change",)


def apply_change(change: Change, items: list) -> Change:
    """Mutate ``items`` according to an already validated change.

    The steps always run in the order reset, replace, remove, insert, so a
    move is a removal followed by an insertion at ``new_index`` of the
    shortened list.

    Returns:
        Change: The change to report. An append comes back with the
            concrete index it landed at.
    """
    action = change.action

    if action is ChangeAction.RESET:
        items.clear()

    if action is ChangeAction.REPLACE:
        items[change.old_index] = change.new_item

    if action in (ChangeAction.REMOVE, ChangeAction.MOVE):
        del items[change.old_index]

    if change.is_append:
        change = change.resolved(len(items))

    if action in (ChangeAction.ADD, ChangeAction.MOVE):
        items.insert(change.new_index, change.new_item)

    return change
