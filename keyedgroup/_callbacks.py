# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

"""Argument checks and callback binding shared by Group operations."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Sequence
from typing import Any

from ._errors import InvalidArgumentError, short_repr

__all__ = (
    "bind_callback",
    "positional_arity",
    "validate_callable",
    "validate_index",
    "validate_amount",
    "validate_keys",
)

logger = logging.getLogger(__name__)

_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def positional_arity(fn: Callable, max_args: int) -> int:
    """Number of leading positional arguments ``fn`` can take, capped at
    ``max_args``.

    Builtins without an introspectable signature are treated as taking a
    single argument, e.g. ``bool`` or ``str.isdigit``.
    """
    try:
        params = inspect.signature(fn).parameters.values()
    except (TypeError, ValueError):
        return min(1, max_args)

    count = 0
    for p in params:
        if p.kind is inspect.Parameter.VAR_POSITIONAL:
            return max_args
        if p.kind in _POSITIONAL:
            count += 1
    return min(count, max_args)


def bind_callback(fn: Callable, max_args: int) -> Callable[..., Any]:
    """Wrap ``fn`` so it can always be called with ``max_args`` positional
    arguments; the trailing ones it does not declare are dropped.
    """
    arity = positional_arity(fn, max_args)
    if arity == max_args:
        return fn

    def _call(*args: Any) -> Any:
        return fn(*args[:arity])

    return _call


def validate_callable(fn: Any, argument: str = "fn") -> None:
    if not callable(fn):
        logger.debug("Rejected non-callable %s: %r", argument, fn)
        raise InvalidArgumentError.from_value(
            fn,
            argument=argument,
            expected="a callable",
            message=f"{argument} parameter must be a valid function.",
        )


def validate_index(index: Any, argument: str = "index") -> None:
    # bool is an int subclass but never a meaningful position
    if isinstance(index, bool) or not isinstance(index, int):
        logger.debug("Rejected non-integer %s: %r", argument, index)
        raise InvalidArgumentError.from_value(
            index,
            argument=argument,
            expected="an integer number",
        )


def validate_amount(amount: Any, argument: str = "amount") -> None:
    validate_index(amount, argument)
    if amount < 0:
        logger.debug("Rejected negative %s: %r", argument, amount)
        raise InvalidArgumentError.from_value(
            amount,
            argument=argument,
            expected="a non-negative integer",
        )


def validate_keys(keys: Any, argument: str = "keys") -> None:
    if isinstance(keys, (str, bytes, bytearray)) or not isinstance(
        keys, Sequence
    ):
        logger.debug("Rejected non-sequence %s: %r", argument, keys)
        raise InvalidArgumentError.from_value(
            keys,
            argument=argument,
            expected="a sequence of keys",
            message=(
                f"Invalid {argument} parameter. Expected a sequence of keys."
            ),
        )
    for key in keys:
        try:
            hash(key)
        except TypeError as e:
            logger.debug("Rejected unhashable key in %s: %r", argument, key)
            raise InvalidArgumentError.from_value(
                key,
                argument=argument,
                expected="hashable keys",
                message=(
                    f"Unhashable key in {argument} parameter: "
                    f"{short_repr(key)}."
                ),
                cause=e,
            ) from e
