# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from typing import Any, ClassVar

__all__ = (
    "ObservableListError",
    "ValidationError",
    "TypeMismatchError",
    "IndexOutOfRangeError",
    "ExecutionError",
    "DrainLimitExceededError",
)


class ObservableListError(Exception):
    default_message: ClassVar[str] = "ObservableList error"

    def __init__(
        self,
        message: str | None = None,
        *,
        details: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message or self.default_message)
        if cause:
            self.__cause__ = cause  # preserves traceback
        self.message = message or self.default_message
        self.details = details or {}

    def to_dict(self, *, include_cause: bool = False) -> dict[str, Any]:
        data = {
            "error": self.__class__.__name__,
            "message": self.message,
            **({"details": self.details} if self.details else {}),
        }
        if include_cause and (cause := self.get_cause()):
            data["cause"] = repr(cause)
        return data

    def get_cause(self) -> Exception | None:
        """Get the cause of this error, if any."""
        return self.__cause__ if hasattr(self, "__cause__") else None


class ValidationError(ObservableListError, ValueError):
    """Exception raised when validation fails."""

    default_message = "Validation failed"

    @classmethod
    def from_value(
        cls,
        value: Any,
        *,
        expected: str | None = None,
        message: str | None = None,
        cause: Exception | None = None,
        **extra: Any,
    ):
        """Create an error from a value with optional expected type and message."""
        details = {
            "value": value,
            "type": type(value).__name__,
            **({"expected": expected} if expected else {}),
            **extra,
        }
        return cls(message=message, details=details, cause=cause)


class TypeMismatchError(ValidationError, TypeError):
    """A value handed to an untyped entry point is not of the element type."""

    default_message = "Value is not of the element type"


class IndexOutOfRangeError(ObservableListError, IndexError):
    default_message = "Index out of range"

    @classmethod
    def for_index(cls, index: int, size: int, *, inclusive: bool = False):
        upper = f"{size}]" if inclusive else f"{size})"
        return cls(
            f"index {index} is outside the valid range [0, {upper}",
            details={"index": index, "size": size},
        )


class ExecutionError(ObservableListError):
    default_message = "Change processing failed"


class DrainLimitExceededError(ExecutionError):
    """A single drain cycle dequeued more changes than allowed."""

    default_message = "Drain limit exceeded"
