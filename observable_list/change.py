# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator
from typing_extensions import Self

from ._sentinel import Unset, UnsetType

__all__ = (
    "ChangeAction",
    "Change",
)


class ChangeAction(str, Enum):
    """Kinds of structural change a list can go through.

    Attributes:
        ADD: An element is inserted at a position or appended at the end.
        REMOVE: The element at a position is taken out.
        REPLACE: The element at a position is overwritten.
        MOVE: An element is taken out and re-inserted elsewhere.
        RESET: Every element is removed.
    """

    ADD = "add"
    REMOVE = "remove"
    REPLACE = "replace"
    MOVE = "move"
    RESET = "reset"

    @classmethod
    def allowed(cls) -> tuple[str, ...]:
        return tuple(e.value for e in cls)


class Change(BaseModel):
    """Immutable record of one requested structural change.

    The ``old_*`` fields describe the list as it was observed when the
    request was made. They are compared with the list as it is when the
    request is finally applied, which is how stale requests are detected.
    Fields an action does not use hold ``Unset`` (items) or ``-1``
    (indices). An append is an ``ADD`` whose ``new_index`` is ``Unset``
    until it is applied.

    Use the factory classmethods rather than the constructor::

        Change.add(42)               # append
        Change.add(42, 1)            # insert at 1
        Change.remove(13, 1)
        Change.replace(13, 12, 1)
        Change.move(42, 0, 1)
        Change.reset()
    """

    model_config = ConfigDict(
        frozen=True,
        arbitrary_types_allowed=True,
        extra="forbid",
        use_attribute_docstrings=True,
    )

    action: ChangeAction
    """What kind of change this is."""

    old_item: Any = Field(default=Unset)
    """Element expected at ``old_index`` when the change is applied."""

    old_index: int = -1
    """Position the change reads from."""

    new_item: Any = Field(default=Unset)
    """Element placed by the change."""

    new_index: int | UnsetType = -1
    """Position the change writes to, ``Unset`` for a pending append."""

    @model_validator(mode="after")
    def _check_fields_for_action(self) -> Self:
        a = self.action
        needs_old = a in (ChangeAction.REMOVE, ChangeAction.REPLACE, ChangeAction.MOVE)
        needs_new = a in (ChangeAction.ADD, ChangeAction.REPLACE, ChangeAction.MOVE)

        if needs_old:
            if self.old_item is Unset:
                raise ValueError(f"{a.value} change requires old_item")
            if self.old_index < 0:
                raise ValueError(f"{a.value} change requires a non-negative old_index")
        if needs_new:
            if self.new_item is Unset:
                raise ValueError(f"{a.value} change requires new_item")
            if a is not ChangeAction.ADD and self.new_index is Unset:
                raise ValueError(f"{a.value} change requires new_index")
            if self.new_index is not Unset and self.new_index < 0:
                raise ValueError(f"{a.value} change requires a non-negative new_index")
        if a is ChangeAction.REPLACE and self.new_index != self.old_index:
            raise ValueError("replace change must keep its position")
        return self

    @classmethod
    def add(cls, item: Any, index: int | UnsetType = Unset) -> Self:
        return cls(action=ChangeAction.ADD, new_item=item, new_index=index)

    @classmethod
    def remove(cls, item: Any, index: int) -> Self:
        return cls(action=ChangeAction.REMOVE, old_item=item, old_index=index)

    @classmethod
    def replace(cls, old_item: Any, new_item: Any, index: int) -> Self:
        return cls(
            action=ChangeAction.REPLACE,
            old_item=old_item,
            old_index=index,
            new_item=new_item,
            new_index=index,
        )

    @classmethod
    def move(cls, item: Any, old_index: int, new_index: int) -> Self:
        return cls(
            action=ChangeAction.MOVE,
            old_item=item,
            old_index=old_index,
            new_item=item,
            new_index=new_index,
        )

    @classmethod
    def reset(cls) -> Self:
        return cls(action=ChangeAction.RESET)

    @property
    def is_append(self) -> bool:
        """True for an ``ADD`` whose position is decided at apply time."""
        return self.action is ChangeAction.ADD and self.new_index is Unset

    def resolved(self, index: int) -> Self:
        """Return this append with its target position filled in."""
        if not self.is_append:
            return self
        return self.model_copy(update={"new_index": index})
