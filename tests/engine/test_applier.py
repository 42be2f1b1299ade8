# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from observable_list import Change, ChangeAction
from observable_list.engine.applier import apply_change


class TestApplyChange:
    def test_reset_clears(self):
        items = [1, 2, 3]
        applied = apply_change(Change.reset(), items)
        assert items == []
        assert applied.action is ChangeAction.RESET

    def test_replace_overwrites_in_place(self):
        items = [8, 13, 42]
        apply_change(Change.replace(13, 12, 1), items)
        assert items == [8, 12, 42]

    def test_remove(self):
        items = [8, 13, 42]
        apply_change(Change.remove(13, 1), items)
        assert items == [8, 42]

    def test_insert(self):
        items = [12, 43]
        applied = apply_change(Change.add(42, 1), items)
        assert items == [12, 42, 43]
        assert applied.new_index == 1

    def test_append_reports_concrete_index(self):
        items = [1, 2]
        requested = Change.add(3)
        applied = apply_change(requested, items)
        assert items == [1, 2, 3]
        assert applied.new_index == 2
        assert applied.new_item == 3
        assert requested.is_append

    def test_move_lower(self):
        items = [2, 3, 1]
        apply_change(Change.move(1, 2, 0), items)
        assert items == [1, 2, 3]

    def test_move_higher_inserts_into_shortened_list(self):
        items = [3, 1, 2]
        applied = apply_change(Change.move(3, 0, 2), items)
        assert items == [1, 2, 3]
        assert applied == Change.move(3, 0, 2)

    def test_returns_same_descriptor_when_not_normalized(self):
        change = Change.remove(1, 0)
        assert apply_change(change, [1]) is change
