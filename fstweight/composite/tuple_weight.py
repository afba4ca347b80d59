"""
fstweight/composite/tuple_weight.py

Base of the fixed-arity composites (Product, Power, Lexicographic, the
product-shaped Gallic kinds and Expectation).

A TupleWeight subclass fixes component_types; instances hold one value of
each component type. Everything that does not depend on the combinator's
plus/times (identities, membership, I/O, copies, random draws) is done
componentwise here.
"""

from __future__ import annotations

from typing import Any, BinaryIO, ClassVar, Optional, Tuple

import numpy as np

from fstweight.algebra.weight import DELTA, DivideType, Weight
from fstweight.core.config import WeightConfig
from fstweight.core.errors import WeightContractError
from fstweight.io.text import CompositeWeightReader, join_composite


class TupleWeight(Weight):
    """
    Fixed-arity tuple of sub-weights.

    Attributes:
        component_types: Weight kind of each slot
    """

    __slots__ = ("_values",)

    component_types: ClassVar[Tuple[type, ...]] = ()

    def __init__(self, *values: Any):
        types = type(self).component_types
        if not types:
            raise TypeError(f"instantiate {type(self).__name__} through its factory")
        if len(values) != len(types):
            raise WeightContractError(
                f"{type(self).type_name()} takes {len(types)} components, got {len(values)}"
            )
        self._values = tuple(t.coerce(v).copy() for t, v in zip(types, values))

    @classmethod
    def _make(cls, values: Tuple[Weight, ...]) -> "TupleWeight":
        obj = object.__new__(cls)
        obj._values = tuple(values)
        return obj

    @property
    def values(self) -> Tuple[Weight, ...]:
        return tuple(v.copy() for v in self._values)

    def _component(self, index: int) -> Weight:
        return self._values[index].copy()

    @classmethod
    def zero(cls) -> "TupleWeight":
        return cls._make(tuple(t.zero() for t in cls.component_types))

    @classmethod
    def one(cls) -> "TupleWeight":
        return cls._make(tuple(t.one() for t in cls.component_types))

    @classmethod
    def no_weight(cls) -> "TupleWeight":
        return cls._make(tuple(t.no_weight() for t in cls.component_types))

    def member(self) -> bool:
        return all(v.member() for v in self._values)

    # Componentwise helpers for subclasses

    def _map2(self, other: "TupleWeight", op: str, *args) -> "TupleWeight":
        return self._make(tuple(getattr(a, op)(b, *args) for a, b in zip(self._values, other._values)))

    def _plus_componentwise(self, other: Any) -> "TupleWeight":
        return self._map2(self._operand(other), "plus")

    def _times_componentwise(self, other: Any) -> "TupleWeight":
        return self._map2(self._operand(other), "times")

    def _divide_componentwise(self, other: Any, divide_type: DivideType) -> "TupleWeight":
        return self._map2(self._operand(other), "divide", divide_type)

    def quantize(self, delta: float = DELTA) -> "TupleWeight":
        return self._make(tuple(v.quantize(delta) for v in self._values))

    def reverse(self) -> "TupleWeight":
        return type(self).reverse_type()._make(tuple(v.reverse() for v in self._values))

    def approx_equal(self, other: Any, delta: float = DELTA) -> bool:
        other = self._operand(other)
        return all(a.approx_equal(b, delta) for a, b in zip(self._values, other._values))

    def _key(self) -> Tuple[Any, ...]:
        return tuple(v._key() for v in self._values)

    def _clone(self) -> "TupleWeight":
        return self._make(tuple(v.copy() for v in self._values))

    # I/O

    def _render(self, config: WeightConfig) -> str:
        return join_composite([v._render(config) for v in self._values], config)

    @classmethod
    def _read_text(cls, reader: CompositeWeightReader) -> Optional["TupleWeight"]:
        group = reader.read_group()
        if group is None:
            return None
        values = []
        for t in cls.component_types:
            value = t._read_text(group)
            if value is None:
                return None
            values.append(value)
        if not reader.close_group(group):
            return None
        return cls._make(tuple(values))

    def write(self, stream: BinaryIO) -> None:
        for v in self._values:
            v.write(stream)

    @classmethod
    def _read(cls, stream: BinaryIO) -> Optional["TupleWeight"]:
        values = []
        for t in cls.component_types:
            value = t._read(stream)
            if value is None:
                return None
            values.append(value)
        return cls._make(tuple(values))

    @classmethod
    def random(cls, rng: np.random.Generator, allow_zero: bool = True) -> "TupleWeight":
        return cls._make(tuple(t.random(rng, allow_zero) for t in cls.component_types))
