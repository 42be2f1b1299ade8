# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Any, Final, Literal

__all__ = (
    "SingletonType",
    "Unset",
    "UnsetType",
    "is_unset",
    "not_unset",
)


class _SingletonMeta(type):
    """Metaclass that guarantees exactly one instance per subclass."""

    _cache: dict[type, SingletonType] = {}

    def __call__(cls, *a, **kw):
        if cls not in cls._cache:
            cls._cache[cls] = super().__call__(*a, **kw)
        return cls._cache[cls]


class SingletonType(metaclass=_SingletonMeta):
    """Base class for singleton sentinel types.

    Identity survives copy and deepcopy, and the sentinel is falsy.
    """

    __slots__: tuple[str, ...] = ()

    def __deepcopy__(self, memo):
        return self

    def __copy__(self):
        return self

    # concrete classes *must* override the two methods below
    def __bool__(self) -> bool: ...
    def __repr__(self) -> str: ...


class UnsetType(SingletonType):
    """Sentinel for a slot that carries no value.

    A change descriptor uses it for the item fields its action does not
    need, which keeps ``None`` available as an ordinary element, and for
    the target index of an append that is resolved only when applied.

    Example:
        >>> change = Change.add("x")
        >>> change.new_index is Unset
        True
    """

    __slots__ = ()

    def __bool__(self) -> Literal[False]:
        return False

    def __repr__(self) -> Literal["Unset"]:
        return "Unset"

    def __str__(self) -> Literal["Unset"]:
        return "Unset"

    def __reduce__(self):
        """Ensure pickle preservation of singleton identity."""
        return "Unset"


Unset: Final = UnsetType()
"""A slot present but carrying no value."""


def is_unset(value: Any) -> bool:
    return value is Unset


def not_unset(value: Any) -> bool:
    return value is not Unset
