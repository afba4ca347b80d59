"""
fstweight/composite/sparse_power.py

Sparse power: an index → weight mapping over int64 indices with a default
value for every index that is not stored.

Only indices whose value differs from the default are materialized. Entries
are kept sorted by index with no duplicates, so two weights with the same
default and the same non-default entries have the same representation.
Operators apply pointwise over the union of the stored indices; the result
default is the operator applied to the two defaults.
"""

from __future__ import annotations

import bisect
import functools
from typing import Any, BinaryIO, Callable, Iterator, List, Optional, Tuple

import numpy as np

from fstweight.algebra.weight import (
    COMPONENTWISE_PROPERTIES,
    DELTA,
    SPARSE_POWER_RANK,
    DivideType,
    Properties,
    Weight,
)
from fstweight.core.config import WeightConfig
from fstweight.io.binary import read_int32, read_int64, write_int32, write_int64
from fstweight.io.text import CompositeWeightReader, join_composite


class SparsePowerWeight(Weight):
    """
    Base of the sparse_power_weight() kinds.

    Attributes:
        element_type: Weight kind of the default and of every entry
    """

    __slots__ = ("_default", "_keys", "_entries")

    element_type: type

    def __init__(self, default: Any = None, entries: Optional[dict] = None):
        cls = type(self)
        if "element_type" not in vars(cls):
            raise TypeError(f"instantiate {cls.__name__} through sparse_power_weight()")
        self._default = cls.element_type.zero() if default is None else cls.element_type.coerce(default).copy()
        self._keys: List[int] = []
        self._entries: List[Weight] = []
        for index, value in sorted((entries or {}).items()):
            self.set_value(index, value)

    @classmethod
    def _make(cls, default: Weight, keys: List[int], entries: List[Weight]) -> "SparsePowerWeight":
        obj = object.__new__(cls)
        obj._default = default
        obj._keys = keys
        obj._entries = entries
        return obj

    @classmethod
    def broadcast(cls, weight: Any) -> "SparsePowerWeight":
        """The sparse weight whose every index (stored or not) equals weight."""
        return cls._make(cls.element_type.coerce(weight).copy(), [], [])

    # Mapping interface

    @property
    def default_value(self) -> Weight:
        return self._default.copy()

    def value(self, index: int) -> Weight:
        return self._get(index).copy()

    def _get(self, index: int) -> Weight:
        i = bisect.bisect_left(self._keys, index)
        if i < len(self._keys) and self._keys[i] == index:
            return self._entries[i]
        return self._default

    def set_value(self, index: int, weight: Any) -> None:
        """Insert, update, or (when weight equals the default) remove an entry."""
        index = int(index)
        weight = self.element_type.coerce(weight)
        i = bisect.bisect_left(self._keys, index)
        present = i < len(self._keys) and self._keys[i] == index
        if weight == self._default:
            if present:
                del self._keys[i]
                del self._entries[i]
        elif present:
            self._entries[i] = weight.copy()
        else:
            self._keys.insert(i, index)
            self._entries.insert(i, weight.copy())

    def set_default_value(self, weight: Any) -> None:
        """Change the default; entries equal to the new default are dropped."""
        self._default = self.element_type.coerce(weight).copy()
        kept = [(k, v) for k, v in zip(self._keys, self._entries) if v != self._default]
        self._keys = [k for k, _ in kept]
        self._entries = [v for _, v in kept]

    def size(self) -> int:
        return len(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def items(self) -> Iterator[Tuple[int, Weight]]:
        return zip(list(self._keys), [v.copy() for v in self._entries])

    # Metadata

    @classmethod
    def zero(cls) -> "SparsePowerWeight":
        return cls._make(cls.element_type.zero(), [], [])

    @classmethod
    def one(cls) -> "SparsePowerWeight":
        return cls._make(cls.element_type.one(), [], [])

    @classmethod
    def no_weight(cls) -> "SparsePowerWeight":
        return cls._make(cls.element_type.no_weight(), [], [])

    @classmethod
    def type_name(cls) -> str:
        return f"sparse_power_{cls.element_type.type_name()}"

    @classmethod
    def properties(cls) -> Properties:
        return cls.element_type.properties() & COMPONENTWISE_PROPERTIES

    @classmethod
    def reverse_type(cls) -> type:
        return sparse_power_weight(cls.element_type.reverse_type())

    def member(self) -> bool:
        return self._default.member() and all(v.member() for v in self._entries)

    # Pointwise algebra

    def _pointwise(self, other: "SparsePowerWeight", op: Callable[[Weight, Weight], Weight]) -> "SparsePowerWeight":
        result = self._make(op(self._default, other._default), [], [])
        for index in sorted(set(self._keys) | set(other._keys)):
            result.set_value(index, op(self._get(index), other._get(index)))
        return result

    def plus(self, other: Any) -> "SparsePowerWeight":
        return self._pointwise(self._operand(other), lambda a, b: a.plus(b))

    def times(self, other: Any) -> "SparsePowerWeight":
        return self._pointwise(self._operand(other), lambda a, b: a.times(b))

    def divide(self, other: Any, divide_type: DivideType = DivideType.ANY) -> "SparsePowerWeight":
        return self._pointwise(self._operand(other), lambda a, b: a.divide(b, divide_type))

    def quantize(self, delta: float = DELTA) -> "SparsePowerWeight":
        return self._map(lambda w: w.quantize(delta), type(self))

    def reverse(self) -> "SparsePowerWeight":
        return self._map(lambda w: w.reverse(), self.reverse_type())

    def _map(self, fn: Callable[[Weight], Weight], kind: type) -> "SparsePowerWeight":
        result = kind._make(fn(self._default), [], [])
        for index, value in zip(self._keys, self._entries):
            result.set_value(index, fn(value))
        return result

    def approx_equal(self, other: Any, delta: float = DELTA) -> bool:
        other = self._operand(other)
        if not self._default.approx_equal(other._default, delta):
            return False
        return all(
            self._get(i).approx_equal(other._get(i), delta)
            for i in set(self._keys) | set(other._keys)
        )

    def _key(self):
        return (
            self._default._key(),
            tuple(self._keys),
            tuple(v._key() for v in self._entries),
        )

    def _clone(self) -> "SparsePowerWeight":
        return self._make(self._default.copy(), list(self._keys), [v.copy() for v in self._entries])

    # I/O

    def _render(self, config: WeightConfig) -> str:
        parts = [self._default._render(config)]
        for index, value in zip(self._keys, self._entries):
            parts.append(str(index))
            parts.append(value._render(config))
        return join_composite(parts, config)

    @classmethod
    def _read_text(cls, reader: CompositeWeightReader) -> Optional["SparsePowerWeight"]:
        group = reader.read_group()
        if group is None:
            return None
        default = cls.element_type._read_text(group)
        if default is None:
            return None
        result = cls._make(default, [], [])
        # The entries run to the end of the enclosing scope.
        while not group.done():
            token = group.read_element()
            try:
                index = int(token)
            except ValueError:
                return None
            value = cls.element_type._read_text(group)
            if value is None:
                return None
            result.set_value(index, value)
        if not reader.close_group(group):
            return None
        return result

    def write(self, stream: BinaryIO) -> None:
        self._default.write(stream)
        write_int32(stream, len(self._keys))
        for index, value in zip(self._keys, self._entries):
            write_int64(stream, index)
            value.write(stream)

    @classmethod
    def _read(cls, stream: BinaryIO) -> Optional["SparsePowerWeight"]:
        default = cls.element_type._read(stream)
        n = read_int32(stream)
        if default is None or n is None or n < 0:
            return None
        result = cls._make(default, [], [])
        for _ in range(n):
            index = read_int64(stream)
            value = cls.element_type._read(stream)
            if index is None or value is None:
                return None
            result.set_value(index, value)
        return result

    @classmethod
    def random(cls, rng: np.random.Generator, allow_zero: bool = True) -> "SparsePowerWeight":
        result = cls._make(cls.element_type.random(rng, allow_zero), [], [])
        for index in range(1, SPARSE_POWER_RANK + 1):
            result.set_value(index, cls.element_type.random(rng, allow_zero))
        return result


@functools.lru_cache(maxsize=None)
def sparse_power_weight(w: type) -> type:
    name = f"SparsePowerWeight[{w.__name__}]"
    return type(name, (SparsePowerWeight,), {"__slots__": (), "element_type": w})
