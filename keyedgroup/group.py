# Copyright (c) 2023-2025, HaiyangLi <quantocean.li at gmail dot com>
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from collections.abc import (
    Callable,
    Iterable,
    Iterator,
    Mapping,
    MutableMapping,
    Sequence,
)
from itertools import islice
from operator import attrgetter
from typing import Any, Generic, TypeVar, get_args

from typing_extensions import Self

from ._callbacks import (
    bind_callback,
    validate_amount,
    validate_callable,
    validate_index,
    validate_keys,
)
from ._errors import InvalidArgumentError
from ._sentinel import MaybeUndefined, Undefined

__all__ = ("Group",)

K = TypeVar("K")
V = TypeVar("V")
R = TypeVar("R")

logger = logging.getLogger(__name__)


class Group(MutableMapping[K, V], Generic[K, V]):
    """An insertion-ordered mapping with chainable collection operations.

    A Group wraps a plain ``dict`` and exposes the usual mapping surface
    plus search, filtering, mapping, positional access, get-or-create and
    merging. It is meant for records that carry a unique identifier.

    Callbacks are called as ``fn(value, key, group)``. A callback that
    declares fewer positional parameters only receives the leading ones, so
    ``group.find(lambda v: v > 1)`` works as expected.

    Query operations never mutate the group. ``each``, ``sweep`` and
    ``concat`` return the group itself so calls can be chained; ``filter``
    and ``map`` return new groups. Lookups that find nothing return
    ``Undefined`` rather than ``None``, since ``None`` is a valid value.

    Example:
        >>> g = Group([("a", 1), ("b", 2), ("c", 3)])
        >>> g.filter(lambda v: v > 1)
        Group(2) {'b': 2, 'c': 3}
        >>> g.key_at(-1)
        'c'
    """

    __slots__ = ("_items",)

    def __init__(
        self,
        entries: Mapping[K, V] | Iterable[tuple[K, V]] | None = None,
        /,
    ) -> None:
        self._items: dict[K, V] = {}
        if entries is None:
            return
        if isinstance(entries, Mapping):
            entries = entries.items()
        pairs = []
        try:
            for entry in entries:
                if isinstance(entry, (str, bytes, bytearray)):
                    raise TypeError(f"{entry!r} is not a (key, value) pair")
                key, value = entry
                pairs.append((key, value))
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError.from_value(
                entries,
                argument="entries",
                expected="a mapping or an iterable of (key, value) pairs",
                cause=e,
            ) from e
        for key, value in pairs:
            self[key] = value

    @classmethod
    def from_values(
        cls,
        values: Iterable[V],
        /,
        key: Callable[[V], K] = attrgetter("id"),
    ) -> Self:
        """Build a group from identifiable records.

        Args:
            values: The records, in the order they should be stored.
            key: Derives the key of each record. Defaults to its ``id``
                attribute.

        Returns:
            Group: A new group; a later record replaces an earlier one
                with the same key.

        Raises:
            InvalidArgumentError: If ``key`` is not callable.
        """
        validate_callable(key, "key")
        return cls((key(v), v) for v in values)

    # ------------------------------------------------------------------
    # mapping protocol
    # ------------------------------------------------------------------

    def __getitem__(self, key: K, /) -> V:
        return self._items[key]

    def __setitem__(self, key: K, value: V, /) -> None:
        if value is Undefined:
            raise InvalidArgumentError.from_value(
                value,
                argument="value",
                message=f"Cannot store Undefined under key {key!r}.",
            )
        self._items[key] = value

    def __delitem__(self, key: K, /) -> None:
        del self._items[key]

    def __iter__(self) -> Iterator[K]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: object, /) -> bool:
        return key in self._items

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({len(self)}) {self._items!r}"

    def __copy__(self) -> Self:
        return self.copy()

    def clear(self) -> None:
        self._items.clear()

    @property
    def size(self) -> int:
        """Number of entries in the group."""
        return len(self._items)

    def is_empty(self) -> bool:
        return not self._items

    def copy(self) -> Self:
        """Shallow copy; values are shared, not copied."""
        return self.__class__(self._items)

    def to_dict(self) -> dict[K, V]:
        return dict(self._items)

    def to_list(self) -> list[V]:
        return list(self._items.values())

    # ------------------------------------------------------------------
    # iteration and search
    # ------------------------------------------------------------------

    def each(self, fn: Callable[[V, K, Self], Any], /) -> Self:
        """Call ``fn`` for every entry, in order, and return the group.

        The keys are read from a snapshot taken before the first call, so
        ``fn`` may add or delete entries without breaking the loop. Entries
        added by ``fn`` are not visited; entries it deleted are skipped.
        """
        validate_callable(fn)
        call = bind_callback(fn, 3)
        for key in list(self._items):
            if key not in self._items:
                continue
            call(self._items[key], key, self)
        return self

    def find(self, fn: Callable[[V, K, Self], Any], /) -> MaybeUndefined[V]:
        """Return the first value for which ``fn`` is truthy, or Undefined."""
        validate_callable(fn)
        call = bind_callback(fn, 3)
        for key, value in self._items.items():
            if call(value, key, self):
                return value
        return Undefined

    def find_key(
        self, fn: Callable[[V, K, Self], Any], /
    ) -> MaybeUndefined[K]:
        """Return the first key for which ``fn`` is truthy, or Undefined."""
        validate_callable(fn)
        call = bind_callback(fn, 3)
        for key, value in self._items.items():
            if call(value, key, self):
                return key
        return Undefined

    def filter(self, fn: Callable[[V, K, Self], Any], /) -> Self:
        """Return a new group with the entries for which ``fn`` is truthy.

        Order is preserved and the group itself is left untouched.
        """
        validate_callable(fn)
        call = bind_callback(fn, 3)
        filtered = self.__class__()
        for key, value in self._items.items():
            if call(value, key, self):
                filtered._items[key] = value
        return filtered

    def map(self, fn: Callable[[V, K, Self], R], /) -> Group[K, R]:
        """Return a new group with the same keys and values ``fn(...)``.

        Raises:
            InvalidArgumentError: If ``fn`` is not callable, or if it
                returns Undefined for some entry.
        """
        validate_callable(fn)
        call = bind_callback(fn, 3)
        mapped = self.__class__()
        for key, value in self._items.items():
            mapped[key] = call(value, key, self)
        return mapped

    def every(self, fn: Callable[[V, K, Self], Any], /) -> bool:
        """True if ``fn`` is truthy for all entries (vacuously for none)."""
        validate_callable(fn)
        call = bind_callback(fn, 3)
        return all(
            call(value, key, self) for key, value in self._items.items()
        )

    def some(self, fn: Callable[[V, K, Self], Any], /) -> bool:
        """True if ``fn`` is truthy for at least one entry."""
        validate_callable(fn)
        call = bind_callback(fn, 3)
        return any(
            call(value, key, self) for key, value in self._items.items()
        )

    # ------------------------------------------------------------------
    # membership
    # ------------------------------------------------------------------

    def has_all(self, keys: Sequence[K], /) -> bool:
        """True if every key in ``keys`` is present; True for ``[]``."""
        validate_keys(keys)
        return all(key in self._items for key in keys)

    def has_any(self, keys: Sequence[K], /) -> bool:
        """True if any key in ``keys`` is present; False for ``[]``."""
        validate_keys(keys)
        return any(key in self._items for key in keys)

    # ------------------------------------------------------------------
    # positional access
    # ------------------------------------------------------------------

    def first(self) -> MaybeUndefined[V]:
        """First value, or Undefined if the group is empty."""
        return next(iter(self._items.values()), Undefined)

    def first_n(self, amount: int, /) -> list[V]:
        """Up to ``amount`` leading values, in order."""
        validate_amount(amount)
        return list(islice(self._items.values(), amount))

    def last(self) -> MaybeUndefined[V]:
        """Last value, or Undefined if the group is empty."""
        return next(reversed(self._items.values()), Undefined)

    def last_n(self, amount: int, /) -> list[V]:
        """Up to ``amount`` trailing values, in order."""
        validate_amount(amount)
        if amount == 0:
            return []
        return list(self._items.values())[-amount:]

    def at(self, index: int, /) -> MaybeUndefined[V]:
        """Value at ``index`` in iteration order.

        Negative indices count from the end. Out of range gives Undefined.
        """
        validate_index(index)
        try:
            return list(self._items.values())[index]
        except IndexError:
            return Undefined

    def key_at(self, index: int, /) -> MaybeUndefined[K]:
        """Key at ``index`` in iteration order, with the rules of ``at``."""
        validate_index(index)
        try:
            return list(self._items)[index]
        except IndexError:
            return Undefined

    # ------------------------------------------------------------------
    # mutation
    # ------------------------------------------------------------------

    def sweep(self, fn: Callable[[V, K, Self], Any], /) -> Self:
        """Delete every entry for which ``fn`` is truthy and return the group.

        The entries are visited from a snapshot, so deleting never skips or
        revisits one. An entry deleted by an earlier callback is not
        visited.
        """
        validate_callable(fn)
        call = bind_callback(fn, 3)
        removed = 0
        snapshot = list(self._items)
        for key in snapshot:
            if key not in self._items:
                continue
            if call(self._items[key], key, self):
                self._items.pop(key, None)
                removed += 1
        logger.debug("Swept %d of %d entries", removed, len(snapshot))
        return self

    def fallback(self, key: K, generator: Callable[[K, Self], V], /) -> V:
        """Return the value under ``key``, creating it first if missing.

        ``generator(key, group)`` is only called when ``key`` is absent;
        its result is stored and returned.

        Raises:
            InvalidArgumentError: If ``generator`` is not callable, or if it
                returns Undefined.
        """
        validate_callable(generator, "generator")
        if key in self._items:
            return self._items[key]
        value = bind_callback(generator, 2)(key, self)
        self[key] = value
        logger.debug("Generated value for missing key %r", key)
        return value

    def concat(self, *groups: Group[K, V]) -> Self:
        """Merge ``groups`` into this group, in argument order.

        On a key collision the later value wins and the key keeps its
        current position. The argument groups are not modified.

        Raises:
            InvalidArgumentError: If any argument is not a Group. Nothing
                is merged in that case.
        """
        for group in groups:
            if not isinstance(group, Group):
                raise InvalidArgumentError.from_value(
                    group,
                    argument="groups",
                    expected="a Group instance",
                )
        for group in groups:
            self._items.update(group._items)
        logger.debug(
            "Merged %d group(s); size is now %d", len(groups), len(self)
        )
        return self

    # ------------------------------------------------------------------
    # pydantic integration
    # ------------------------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(cls, source_type: Any, handler: Any):
        """Validate as ``dict[K, V]`` using the field's type arguments.

        A bare ``Group`` annotation validates as ``dict[Any, Any]``. Pairs
        are accepted as well as mappings; insertion order is kept.
        """
        from pydantic_core import core_schema

        args = get_args(source_type)
        key_type, value_type = args if len(args) == 2 else (Any, Any)
        dict_schema = handler.generate_schema(dict[key_type, value_type])

        return core_schema.no_info_after_validator_function(
            cls._from_validated,
            core_schema.no_info_before_validator_function(
                cls._coerce_entries, dict_schema
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                cls.to_dict, return_schema=dict_schema
            ),
        )

    @classmethod
    def _coerce_entries(cls, value: Any) -> Any:
        if isinstance(value, dict):
            return value
        try:
            return cls(value).to_dict()
        except InvalidArgumentError as e:
            # pydantic only turns ValueError into a ValidationError
            raise ValueError(e.message) from e

    @classmethod
    def _from_validated(cls, value: dict) -> Group:
        try:
            return cls(value)
        except InvalidArgumentError as e:
            raise ValueError(e.message) from e
