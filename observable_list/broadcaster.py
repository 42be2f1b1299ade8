# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import inspect
import logging
import weakref
from typing import TYPE_CHECKING, Any, Generic, TypeVar

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

__all__ = ("Broadcaster",)

E = TypeVar("E")


class Broadcaster(Generic[E]):
    """Ordered, synchronous multicast of one kind of event.

    Each list owns one broadcaster per notification channel. Callbacks run
    in registration order and each one runs to completion before the next
    starts. Exceptions raised by a callback are not caught here: they end
    the broadcast and reach whoever triggered it.

    Bound methods of Python objects can be stored as weak references (via
    ``WeakMethod``) so that a subscriber is dropped automatically once its
    owning object is garbage collected. Plain functions, lambdas and
    builtins such as ``print`` or ``list.append`` are always held strongly;
    unsubscribe them explicitly.

    Example::

        changed = Broadcaster(Change)
        changed.subscribe(lambda change: print(change.action))
        changed.emit(Change.reset())
    """

    def __init__(self, event_type: type[E] | None = None, *, weak_methods: bool = True):
        self._event_type = event_type
        self._weak_methods = weak_methods
        self._subscribers: list[Callable[[], Callable[[E], Any] | None]] = []

    def subscribe(self, callback: Callable[[E], Any]) -> None:
        """Add subscriber callback (idempotent).

        Args:
            callback: Callable receiving the event.
        """
        for ref in self._subscribers:
            if ref() == callback:
                return
        if self._weak_methods and inspect.ismethod(callback):
            self._subscribers.append(weakref.WeakMethod(callback))
        else:
            self._subscribers.append(lambda cb=callback: cb)

    def unsubscribe(self, callback: Callable[[E], Any]) -> None:
        """Remove subscriber callback.

        Args:
            callback: Previously subscribed callback to remove.
        """
        for ref in list(self._subscribers):
            if ref() == callback:
                self._subscribers.remove(ref)
                return

    def _cleanup_dead_refs(self) -> list[Callable[[E], Any]]:
        """Prune dead weakrefs, return live callbacks."""
        callbacks, alive_refs = [], []
        for ref in self._subscribers:
            if (cb := ref()) is not None:
                callbacks.append(cb)
                alive_refs.append(ref)
        self._subscribers[:] = alive_refs
        return callbacks

    def emit(self, event: E) -> None:
        """Deliver event to every subscriber, in registration order.

        The subscriber list is snapshotted first, so callbacks may
        subscribe or unsubscribe during delivery without affecting it.

        Raises:
            ValueError: If event type doesn't match the configured type.
        """
        if self._event_type is not None and not isinstance(event, self._event_type):
            raise ValueError(f"Event must be of type {self._event_type.__name__}")
        callbacks = self._cleanup_dead_refs()
        if not callbacks:
            return
        logger.debug(f"Emitting {type(event).__name__} to {len(callbacks)} subscriber(s)")
        for callback in callbacks:
            callback(event)

    def get_subscriber_count(self) -> int:
        """Count live subscribers (triggers dead ref cleanup)."""
        return len(self._cleanup_dead_refs())

    def __len__(self) -> int:
        return self.get_subscriber_count()

    def __repr__(self) -> str:
        name = self._event_type.__name__ if self._event_type else "Any"
        return f"Broadcaster[{name}](subscribers={len(self)})"
