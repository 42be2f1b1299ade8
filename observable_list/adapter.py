# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Untyped entry point over an `ObservableList`.

Callers that only have values of unknown type go through `UntypedList`,
which checks each value against the element type before the list ever
sees it. Reads are passed straight through.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from ._errors import TypeMismatchError

if TYPE_CHECKING:
    from .observable_list import ObservableList

__all__ = ("UntypedList", "type_name")


def type_name(tp: type | tuple[type, ...]) -> str:
    if isinstance(tp, tuple):
        return " | ".join(type_name(t) for t in tp)
    if tp.__module__ == "builtins":
        return tp.__qualname__
    return f"{tp.__module__}.{tp.__qualname__}"


class UntypedList:
    """Type-checking adapter that accepts values of any type.

    Args:
        target: The list every accepted call is forwarded to.
        element_type: Type (or tuple of types) a value must be an
            instance of.
        allow_none: Whether ``None`` counts as a valid element.
    """

    def __init__(
        self,
        target: ObservableList,
        element_type: type | tuple[type, ...],
        *,
        allow_none: bool = False,
    ) -> None:
        self.target = target
        self.element_type = element_type
        self.allow_none = allow_none

    def is_compatible(self, value: Any) -> bool:
        if value is None:
            return self.allow_none
        return isinstance(value, self.element_type)

    def check(self, value: Any) -> Any:
        """Return ``value`` unchanged if it has the element type.

        Raises:
            TypeMismatchError: Otherwise, before any change is requested.
        """
        if self.is_compatible(value):
            return value
        expected = type_name(self.element_type)
        raise TypeMismatchError.from_value(
            value,
            expected=expected,
            message=(
                f'The value "{value}" is not of type "{expected}" '
                "and cannot be used in this generic collection."
            ),
            param_name="value",
        )

    def add(self, value: Any) -> int:
        """Append ``value``; returns the last index after the call."""
        self.target.append(self.check(value))
        return len(self.target) - 1

    def insert(self, index: int, value: Any) -> None:
        self.target.insert(index, self.check(value))

    def __getitem__(self, index: int) -> Any:
        return self.target[index]

    def __setitem__(self, index: int, value: Any) -> None:
        self.target[index] = self.check(value)

    def remove(self, value: Any) -> None:
        """Remove the first equal element; wrong-typed values are ignored."""
        if self.is_compatible(value):
            self.target.remove(value)

    def remove_at(self, index: int) -> None:
        self.target.remove_at(index)

    def clear(self) -> None:
        self.target.clear()

    def contains(self, value: Any) -> bool:
        return self.is_compatible(value) and value in self.target

    __contains__ = contains

    def index_of(self, value: Any) -> int:
        if not self.is_compatible(value):
            return -1
        return self.target.index_of(value)

    def __len__(self) -> int:
        return len(self.target)

    def __iter__(self) -> Iterator[Any]:
        return iter(self.target)

    def __repr__(self) -> str:
        return f"UntypedList[{type_name(self.element_type)}]({list(self.target)!r})"
