# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from typing import Any, ClassVar

from .config import settings

__all__ = (
    "GroupError",
    "InvalidArgumentError",
    "short_repr",
)


def short_repr(value: Any, limit: int | None = None) -> str:
    """repr() of ``value``, cut to ``limit`` characters."""
    limit = limit or settings.ERROR_REPR_LIMIT
    text = repr(value)
    if len(text) > limit:
        text = f"{text[:limit]}..."
    return text


class GroupError(Exception):
    default_message: ClassVar[str] = "Group error"
    __slots__ = ("message", "details")

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


class InvalidArgumentError(GroupError, TypeError):
    """Raised when an argument to a Group operation has the wrong shape.

    The offending value is kept in ``details["value"]``.
    """

    default_message = "Invalid argument"
    __slots__ = ()  # no new attrs

    @classmethod
    def from_value(
        cls,
        value: Any,
        *,
        expected: str | None = None,
        argument: str | None = None,
        message: str | None = None,
        cause: Exception | None = None,
        **extra: Any,
    ):
        """Create an InvalidArgumentError describing ``value``."""
        if message is None:
            subject = f"{argument} parameter" if argument else "argument"
            message = f"Invalid {subject}: {short_repr(value)}"
            if expected:
                message = f"{message}. Expected {expected}."
        details = {
            "value": value,
            "type": type(value).__name__,
            **({"expected": expected} if expected else {}),
            **({"argument": argument} if argument else {}),
            **extra,
        }
        return cls(message=message, details=details, cause=cause)

    @property
    def value(self) -> Any:
        """The offending value."""
        return self.details.get("value")
