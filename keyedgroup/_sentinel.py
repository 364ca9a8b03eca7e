# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Any, Final, Literal, TypeVar, Union

__all__ = (
    "Undefined",
    "UndefinedType",
    "MaybeUndefined",
    "is_sentinel",
    "not_sentinel",
)

T = TypeVar("T")


class UndefinedType:
    """The "no value" marker returned by Group lookups that find nothing:
    a missing key, a position out of range, a search without a match.

    There is exactly one instance, so compare with ``is``.

    Example:
        >>> g = Group([("a", 1)])
        >>> g.find(lambda v: v > 5) is Undefined
        True
    """

    __slots__ = ()
    _instance: UndefinedType | None = None

    def __new__(cls) -> UndefinedType:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> Literal[False]:
        return False

    def __repr__(self) -> Literal["Undefined"]:
        return "Undefined"

    def __copy__(self) -> UndefinedType:
        return self

    def __deepcopy__(self, memo) -> UndefinedType:
        return self

    def __reduce__(self):
        """Pickle by reference to the module-level ``Undefined``."""
        return "Undefined"


Undefined: Final = UndefinedType()

MaybeUndefined = Union[T, UndefinedType]


def is_sentinel(value: Any) -> bool:
    return value is Undefined


def not_sentinel(value: Any) -> bool:
    """Useful for filtering Undefined out of results."""
    return value is not Undefined
