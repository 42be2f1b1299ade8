# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
import operator
from collections import deque
from collections.abc import Callable
from typing import Any

from .._errors import DrainLimitExceededError
from ..change import Change
from .applier import apply_change
from .validity import is_applicable

__all__ = ("ChangeSession",)

logger = logging.getLogger(__name__)


class ChangeSession:
    """Serializes change requests made against one list.

    The first request that finds the session idle becomes the *original
    request* and its caller drains the queue: each queued change is
    validated against the current items, applied, and reported before the
    next one is looked at. Requests made while draining (typically from a
    listener reacting to a report) are only queued, so they run later in
    the same drain, in arrival order.

    Once the queue is empty ``on_settled`` receives the length observed
    when the drain started, while ``original_request`` is still set.

    Attributes:
        drain_limit (int | None): Maximum number of changes one drain may
            dequeue before it is aborted. ``None`` means no limit.
    """

    def __init__(
        self,
        items: list,
        *,
        on_change: Callable[[Change], Any],
        on_settled: Callable[[int], Any],
        comparer: Callable[[Any, Any], bool] | None = None,
        drain_limit: int | None = None,
    ) -> None:
        self._items = items
        self._on_change = on_change
        self._on_settled = on_settled
        self._comparer = comparer or operator.eq
        self._pending: deque[Change] = deque()
        self._original: Change | None = None
        self.drain_limit = drain_limit

    @property
    def original_request(self) -> Change | None:
        """The change whose request started the current drain, if any."""
        return self._original

    @property
    def is_active(self) -> bool:
        return self._original is not None

    @property
    def pending(self) -> tuple[Change, ...]:
        return tuple(self._pending)

    def submit(self, change: Change) -> None:
        """Queue a change, draining the queue unless a drain is running.

        Changes requested from ``on_settled`` find the queue already
        drained; they start a follow-up cycle of their own once the
        current one is released.
        """
        self._pending.append(change)
        if self._original is not None:
            logger.debug(f"Queued {change.action.value} behind {len(self._pending) - 1} pending")
            return

        while self._pending:
            self._original = self._pending[0]
            completed = False
            try:
                self._drain()
                completed = True
            except Exception as e:
                logger.error(
                    f"Drain started by {self._original.action.value} aborted: {e}",
                    exc_info=True,
                )
                raise
            finally:
                self._original = None
                if not completed:
                    self._pending.clear()

    def _drain(self) -> None:
        initial_size = len(self._items)
        applied = dropped = 0

        while self._pending:
            if self.drain_limit is not None and applied + dropped >= self.drain_limit:
                raise DrainLimitExceededError(
                    f"drain exceeded {self.drain_limit} changes",
                    details={
                        "drain_limit": self.drain_limit,
                        "pending": len(self._pending),
                        "original_request": self._original,
                    },
                )
            requested = self._pending.popleft()
            if not is_applicable(requested, self._items, self._comparer):
                dropped += 1
                logger.debug(f"Dropping stale change: {requested!r}")
                continue

            self._on_change(apply_change(requested, self._items))
            applied += 1

        logger.debug(f"Drain finished: {applied} applied, {dropped} dropped")
        self._on_settled(initial_size)
