# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
import operator
from collections.abc import Callable, Iterable, Iterator, MutableSequence, Sequence
from typing import TYPE_CHECKING, Any, Generic, TypeVar, overload

from ._errors import IndexOutOfRangeError, ValidationError
from .broadcaster import Broadcaster
from .change import Change
from .config import ListSettings
from .config import settings as default_settings
from .engine.session import ChangeSession
from .events import ItemUpdatedEvent, SizeChangedEvent

if TYPE_CHECKING:
    from .adapter import UntypedList

T = TypeVar("T")

__all__ = ("ObservableList",)

logger = logging.getLogger(__name__)


class ObservableList(Sequence[T], Generic[T]):
    """List that reports its changes and tolerates listeners changing it back.

    Every mutating call is turned into a `Change` and handed to a
    `ChangeSession`. Listeners of ``collection_changed`` may call mutating
    methods themselves; such requests are queued and applied after the
    current report finishes, each one only if it still fits the list at
    that point. A request that no longer fits (its element was moved,
    replaced or removed, or its target position vanished) is silently
    dropped.

    Index errors are raised when a request is made, never when it is
    applied.

    Attributes:
        collection_changed (Broadcaster[Change]): Receives every applied
            change.
        item_updated (Broadcaster[ItemUpdatedEvent]): Receives in-place
            update declarations.
        size_changed (Broadcaster[SizeChangedEvent]): Receives at most one
            event per drain cycle, when that cycle changed the length.

    Example::

        ol = ObservableList([12, 43])
        ol.collection_changed.subscribe(print)
        ol.insert(1, 42)            # prints the applied ADD change
        list(ol)                    # [12, 42, 43]
    """

    def __init__(
        self,
        items: Iterable[T] = (),
        *,
        comparer: Callable[[T, T], bool] | None = None,
        settings: ListSettings | None = None,
    ) -> None:
        """
        Args:
            items: Initial contents, loaded without notifications.
            comparer: Equality relation used for staleness checks and
                lookups. Defaults to ``==``.
            settings: Overrides the process-wide `ListSettings`.
        """
        cfg = settings or default_settings
        self._items: list[T] = list(items)
        self._comparer = comparer or operator.eq

        self.collection_changed: Broadcaster[Change] = Broadcaster(
            Change, weak_methods=cfg.weak_listeners
        )
        self.item_updated: Broadcaster[ItemUpdatedEvent] = Broadcaster(
            ItemUpdatedEvent, weak_methods=cfg.weak_listeners
        )
        self.size_changed: Broadcaster[SizeChangedEvent] = Broadcaster(
            SizeChangedEvent, weak_methods=cfg.weak_listeners
        )

        self._session = ChangeSession(
            self._items,
            on_change=self._on_collection_changed,
            on_settled=self._settle,
            comparer=self._comparer,
            drain_limit=cfg.drain_limit,
        )

    # ------------------------------------------------------------------
    # read API
    # ------------------------------------------------------------------

    @property
    def original_request(self) -> Change | None:
        """The change that started the running drain cycle, or None when idle.

        Listeners can use it to tell cycles apart; it stays the same for
        every notification of one cycle, including the size change.
        """
        return self._session.original_request

    @property
    def comparer(self) -> Callable[[T, T], bool]:
        return self._comparer

    def __len__(self) -> int:
        return len(self._items)

    @overload
    def __getitem__(self, key: int) -> T: ...

    @overload
    def __getitem__(self, key: slice) -> list[T]: ...

    def __getitem__(self, key: int | slice) -> T | list[T]:
        if isinstance(key, slice):
            return self._items[key]
        try:
            return self._items[key]
        except IndexError:
            raise IndexOutOfRangeError.for_index(key, len(self._items)) from None

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __contains__(self, item: object) -> bool:
        return self.index_of(item) != -1

    def __eq__(self, other: object) -> bool:
        if isinstance(other, ObservableList):
            return self._items == other._items
        if isinstance(other, Sequence) and not isinstance(other, (str, bytes)):
            return self._items == list(other)
        return NotImplemented

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"

    def index_of(self, item: Any) -> int:
        """Index of the first element equal to ``item``, or -1."""
        for i, existing in enumerate(self._items):
            if self._comparer(existing, item):
                return i
        return -1

    def index(self, item: Any, start: int = 0, stop: int | None = None) -> int:
        """Index of the first element equal to ``item``.

        Raises:
            ValueError: If no element matches.
        """
        start, stop, _ = slice(start, stop).indices(len(self._items))
        for i, existing in enumerate(self._items[start:stop], start=start):
            if self._comparer(existing, item):
                return i
        raise ValueError(f"{item!r} is not in list")

    def count(self, item: Any) -> int:
        return sum(1 for existing in self._items if self._comparer(existing, item))

    def copy_to(self, buffer: MutableSequence, start: int = 0) -> None:
        """Copy the current contents into ``buffer`` beginning at ``start``.

        Raises:
            IndexOutOfRangeError: If ``start`` is negative.
            ValidationError: If ``buffer`` cannot hold the contents.
        """
        if start < 0:
            raise IndexOutOfRangeError.for_index(start, len(buffer))
        if len(buffer) - start < len(self._items):
            raise ValidationError(
                "destination buffer is too small",
                details={"buffer_size": len(buffer), "start": start, "required": len(self._items)},
            )
        for offset, item in enumerate(self._items):
            buffer[start + offset] = item

    # ------------------------------------------------------------------
    # mutation API
    # ------------------------------------------------------------------

    def append(self, item: T) -> None:
        """Request ``item`` be added at the end.

        The position is decided when the request is applied, so the item
        still lands last even if the list grew in the meantime.
        """
        self._session.submit(Change.add(item))

    def extend(self, items: Iterable[T]) -> None:
        for item in list(items):
            self.append(item)

    def insert(self, index: int, item: T) -> None:
        """Request ``item`` be inserted before ``index``.

        Raises:
            IndexOutOfRangeError: If ``index`` is not in ``[0, len]``.
        """
        self._check_index(index, inclusive=True)
        self._session.submit(Change.add(item, index))

    def __setitem__(self, index: int, item: T) -> None:
        if isinstance(index, slice):
            raise TypeError(f"{type(self).__name__} does not support slice assignment")
        self._check_index(index)
        self._session.submit(Change.replace(self._items[index], item, index))

    def remove_at(self, index: int) -> None:
        """Request removal of the element at ``index``.

        Dropped if that element has been moved, replaced or removed by the
        time the request is applied.
        """
        self._check_index(index)
        self._session.submit(Change.remove(self._items[index], index))

    def __delitem__(self, index: int) -> None:
        if isinstance(index, slice):
            raise TypeError(f"{type(self).__name__} does not support slice deletion")
        self.remove_at(index)

    def remove(self, item: T) -> bool:
        """Request removal of the first element equal to ``item``.

        Returns:
            bool: False when no element matched and nothing was requested.
        """
        index = self.index_of(item)
        if index == -1:
            return False
        self.remove_at(index)
        return True

    def move(self, old_index: int, new_index: int) -> None:
        """Request the element at ``old_index`` be moved to ``new_index``.

        Moving an element onto its own position is ignored outright.
        """
        self._check_index(old_index)
        self._check_index(new_index)
        if old_index == new_index:
            return
        self._session.submit(Change.move(self._items[old_index], old_index, new_index))

    def clear(self) -> None:
        self._session.submit(Change.reset())

    # ------------------------------------------------------------------
    # in-place update declarations
    # ------------------------------------------------------------------

    def notify_item_updated_at(self, index: int) -> None:
        """Announce that the element at ``index`` changed its own state.

        Out-of-range indices are ignored. The list is not modified.
        """
        if index < 0 or index >= len(self._items):
            return
        self._on_item_updated(ItemUpdatedEvent(index=index))

    def notify_item_updated(self, item: T) -> None:
        """Announce that ``item`` changed its own state; ignored if absent."""
        self.notify_item_updated_at(self.index_of(item))

    def as_untyped(
        self,
        element_type: type | tuple[type, ...],
        *,
        allow_none: bool = False,
    ) -> UntypedList:
        """Wrap this list in an adapter that type-checks untyped values."""
        from .adapter import UntypedList

        return UntypedList(self, element_type, allow_none=allow_none)

    # ------------------------------------------------------------------
    # notification hooks, overridable by subclasses
    # ------------------------------------------------------------------

    def _on_collection_changed(self, change: Change) -> None:
        self.collection_changed.emit(change)

    def _on_item_updated(self, event: ItemUpdatedEvent) -> None:
        self.item_updated.emit(event)

    def _on_size_changed(self, event: SizeChangedEvent) -> None:
        self.size_changed.emit(event)

    def _settle(self, initial_size: int) -> None:
        if initial_size != len(self._items):
            logger.debug(f"Size changed from {initial_size} to {len(self._items)}")
            self._on_size_changed(SizeChangedEvent(previous=initial_size, current=len(self._items)))

    def _check_index(self, index: int, *, inclusive: bool = False) -> None:
        index = operator.index(index)
        upper = len(self._items) + 1 if inclusive else len(self._items)
        if not 0 <= index < upper:
            raise IndexOutOfRangeError.for_index(index, len(self._items), inclusive=inclusive)
