# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from pydantic import BaseModel, ConfigDict

__all__ = (
    "ItemUpdatedEvent",
    "SizeChangedEvent",
)


class ItemUpdatedEvent(BaseModel):
    """An element declared that its own state changed in place.

    The list itself is untouched; ``index`` is where the element sits.
    """

    model_config = ConfigDict(frozen=True)

    index: int


class SizeChangedEvent(BaseModel):
    """Sent once at the end of a drain cycle that changed the length."""

    model_config = ConfigDict(frozen=True)

    previous: int
    current: int

    @property
    def delta(self) -> int:
        return self.current - self.previous
