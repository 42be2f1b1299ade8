# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Tests for Broadcaster (observable_list/broadcaster.py)."""

import gc

import pytest

from observable_list.broadcaster import Broadcaster


class _Evt:
    def __init__(self, value=None):
        self.value = value


class _Holder:
    def __init__(self):
        self.received = []

    def handle(self, e):
        self.received.append(e.value)


# ---------------------------------------------------------------------------
# subscribe / unsubscribe
# ---------------------------------------------------------------------------


class TestSubscribe:
    def test_subscribe_adds_callback(self):
        b = Broadcaster(_Evt)

        def handler(e):
            pass

        b.subscribe(handler)
        assert b.get_subscriber_count() == 1
        assert len(b) == 1

    def test_subscribe_idempotent(self):
        """Subscribing the same callback twice does not duplicate."""
        b = Broadcaster(_Evt)

        def handler(e):
            pass

        b.subscribe(handler)
        b.subscribe(handler)
        assert b.get_subscriber_count() == 1

    def test_subscribe_bound_method_idempotent(self):
        b = Broadcaster(_Evt)
        holder = _Holder()
        b.subscribe(holder.handle)
        b.subscribe(holder.handle)
        assert b.get_subscriber_count() == 1

    def test_unsubscribe_removes_callback(self):
        b = Broadcaster(_Evt)

        def handler(e):
            pass

        b.subscribe(handler)
        b.unsubscribe(handler)
        assert b.get_subscriber_count() == 0

    def test_unsubscribe_bound_method(self):
        b = Broadcaster(_Evt)
        holder = _Holder()
        b.subscribe(holder.handle)
        b.unsubscribe(holder.handle)
        assert b.get_subscriber_count() == 0

    def test_unsubscribe_nonexistent_is_noop(self):
        b = Broadcaster(_Evt)
        b.unsubscribe(lambda e: None)
        assert b.get_subscriber_count() == 0


# ---------------------------------------------------------------------------
# weak references
# ---------------------------------------------------------------------------


class TestWeakRefs:
    def test_bound_method_dropped_after_gc(self):
        b = Broadcaster(_Evt)
        holder = _Holder()
        b.subscribe(holder.handle)
        assert b.get_subscriber_count() == 1

        del holder
        gc.collect()
        assert b.get_subscriber_count() == 0

    def test_strong_bound_methods_survive_gc(self):
        b = Broadcaster(_Evt, weak_methods=False)
        holder = _Holder()
        b.subscribe(holder.handle)

        del holder
        gc.collect()
        assert b.get_subscriber_count() == 1

    def test_lambda_kept_alive(self):
        b = Broadcaster(_Evt)
        received = []
        b.subscribe(lambda e: received.append(e.value))
        gc.collect()
        b.emit(_Evt(1))
        assert received == [1]

    def test_builtin_bound_method_held_strongly(self):
        b = Broadcaster(_Evt)
        received = []
        b.subscribe(received.append)
        b.subscribe(received.append)
        gc.collect()

        assert b.get_subscriber_count() == 1
        evt = _Evt(1)
        b.emit(evt)
        assert received == [evt]

        b.unsubscribe(received.append)
        assert b.get_subscriber_count() == 0

    def test_builtin_function_subscribes(self, capsys):
        b = Broadcaster(str)
        b.subscribe(print)
        assert b.get_subscriber_count() == 1

        b.emit("hello")
        assert capsys.readouterr().out == "hello\n"


# ---------------------------------------------------------------------------
# emit
# ---------------------------------------------------------------------------


class TestEmit:
    def test_calls_in_registration_order(self):
        b = Broadcaster(_Evt)
        order = []
        b.subscribe(lambda e: order.append("first"))
        b.subscribe(lambda e: order.append("second"))
        b.subscribe(lambda e: order.append("third"))

        b.emit(_Evt())
        assert order == ["first", "second", "third"]

    def test_passes_event(self):
        b = Broadcaster(_Evt)
        holder = _Holder()
        b.subscribe(holder.handle)
        b.emit(_Evt("payload"))
        assert holder.received == ["payload"]

    def test_wrong_event_type_raises(self):
        b = Broadcaster(_Evt)
        with pytest.raises(ValueError, match="_Evt"):
            b.emit("not an event")

    def test_untyped_accepts_anything(self):
        b = Broadcaster()
        received = []
        b.subscribe(received.append)
        b.emit("anything")
        assert received == ["anything"]

    def test_callback_error_propagates_and_stops_delivery(self):
        b = Broadcaster(_Evt)
        reached = []

        def failing(e):
            raise RuntimeError("listener failed")

        b.subscribe(failing)
        b.subscribe(lambda e: reached.append(True))

        with pytest.raises(RuntimeError, match="listener failed"):
            b.emit(_Evt())
        assert reached == []

    def test_subscribe_during_emit_does_not_affect_current_delivery(self):
        b = Broadcaster(_Evt)
        late = []

        def late_handler(e):
            late.append(e.value)

        def subscriber(e):
            b.subscribe(late_handler)

        b.subscribe(subscriber)
        b.emit(_Evt(1))
        assert late == []

        b.emit(_Evt(2))
        assert late == [2]

    def test_unsubscribe_during_emit_does_not_affect_current_delivery(self):
        b = Broadcaster(_Evt)
        calls = []

        def second(e):
            calls.append(e.value)

        def first(e):
            b.unsubscribe(second)

        b.subscribe(first)
        b.subscribe(second)
        b.emit(_Evt(1))
        assert calls == [1]

        b.emit(_Evt(2))
        assert calls == [1]

    def test_emit_without_subscribers(self):
        Broadcaster(_Evt).emit(_Evt())

    def test_repr(self):
        assert repr(Broadcaster(_Evt)) == "Broadcaster[_Evt](subscribers=0)"
