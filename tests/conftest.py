# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

import pytest

from observable_list import ObservableList


class Recorder:
    """Collects every notification a list sends, in arrival order."""

    def __init__(self, ol: ObservableList):
        self.changes = []
        self.item_updates = []
        self.size_changes = []
        self.log = []
        ol.collection_changed.subscribe(self.on_change)
        ol.item_updated.subscribe(self.on_item_updated)
        ol.size_changed.subscribe(self.on_size_changed)

    def on_change(self, change):
        self.changes.append(change)
        self.log.append(("change", change))

    def on_item_updated(self, event):
        self.item_updates.append(event)
        self.log.append(("item_updated", event))

    def on_size_changed(self, event):
        self.size_changes.append(event)
        self.log.append(("size_changed", event))


def _run_once(fn):
    """Wrap a listener body so it only reacts to the first notification."""
    state = {"done": False}

    def listener(_event):
        if state["done"]:
            return
        state["done"] = True
        fn()

    return listener


@pytest.fixture
def make_list():
    def _make(*items, **kwargs):
        return ObservableList(items, **kwargs)

    return _make


@pytest.fixture
def record():
    """Attach a Recorder; the fixture keeps it alive for the test."""
    recorders = []

    def _record(ol):
        r = Recorder(ol)
        recorders.append(r)
        return r

    return _record


@pytest.fixture
def run_once():
    return _run_once
