"""
fstweight/composite/lexicographic.py

Lexicographic pair: plus picks the smaller pair under the natural order of
the first component, falling back to the second component on ties. Times
and divide are componentwise.

Both components must be idempotent with a total natural order (PATH), which
makes the lexicographic plus itself a path operation.
"""

from __future__ import annotations

import functools
from typing import Any

import numpy as np

from fstweight.algebra.weight import (
    NUM_RANDOM_WEIGHTS,
    DivideType,
    Properties,
    Weight,
    natural_less,
)
from fstweight.composite.tuple_weight import TupleWeight
from fstweight.core.errors import WeightContractError

_REQUIRED = Properties.IDEMPOTENT | Properties.PATH


class LexicographicWeight(TupleWeight):
    __slots__ = ()

    @property
    def value1(self) -> Weight:
        return self._component(0)

    @property
    def value2(self) -> Weight:
        return self._component(1)

    @classmethod
    def type_name(cls) -> str:
        w1, w2 = cls.component_types
        return f"{w1.type_name()}_LT_{w2.type_name()}"

    @classmethod
    def properties(cls) -> Properties:
        w1, w2 = cls.component_types
        props = Properties.SEMIRING | Properties.PATH | Properties.IDEMPOTENT
        if w1.properties() & w2.properties() & Properties.COMMUTATIVE:
            props |= Properties.COMMUTATIVE
        return props

    @classmethod
    def reverse_type(cls) -> type:
        w1, w2 = cls.component_types
        return lexicographic_weight(w1.reverse_type(), w2.reverse_type())

    def plus(self, other: Any) -> "LexicographicWeight":
        other = self._operand(other)
        if not (self.member() and other.member()):
            return self.no_weight()
        a1, a2 = self._values
        b1, b2 = other._values
        if natural_less(a1, b1):
            return self
        if natural_less(b1, a1):
            return other
        if natural_less(b2, a2):
            return other
        return self

    def times(self, other: Any) -> "LexicographicWeight":
        return self._times_componentwise(other)

    def divide(self, other: Any, divide_type: DivideType = DivideType.ANY) -> "LexicographicWeight":
        return self._divide_componentwise(other, divide_type)

    @classmethod
    def random(cls, rng: np.random.Generator, allow_zero: bool = True) -> "LexicographicWeight":
        # A pair with a single Zero component breaks distributivity, so Zero
        # is only drawn as a whole.
        if allow_zero and rng.integers(NUM_RANDOM_WEIGHTS + 1) == 0:
            return cls.zero()
        return cls._make(tuple(t.random(rng, False) for t in cls.component_types))


@functools.lru_cache(maxsize=None)
def lexicographic_weight(w1: type, w2: type) -> type:
    for w in (w1, w2):
        if (w.properties() & _REQUIRED) != _REQUIRED:
            raise WeightContractError(
                f"lexicographic components must be idempotent path semirings, got {w.type_name()}"
            )
    name = f"LexicographicWeight[{w1.__name__}, {w2.__name__}]"
    return type(name, (LexicographicWeight,), {"__slots__": (), "component_types": (w1, w2)})
