"""
fstweight/composite/expectation.py

Expectation weight: a primary weight p of kind W1 paired with a companion
weight c of kind W2, where W2 is W1 itself or a (sparse) power over W1. The
primary is lifted into W2 by broadcasting.

    (p1, c1) ⊕ (p2, c2) = (p1 ⊕ p2, c1 ⊕ c2 ⊕ p1⊗p2)
    (p1, c1) ⊗ (p2, c2) = (p1 ⊗ p2, p1⊗c2 ⊕ c1⊗p2)

Zero is (0, 0) and One is (1, 0).
"""

from __future__ import annotations

import functools
from typing import Any

from fstweight.algebra.weight import Properties, Weight
from fstweight.composite.power import PowerWeight
from fstweight.composite.sparse_power import SparsePowerWeight
from fstweight.composite.tuple_weight import TupleWeight
from fstweight.core.errors import WeightContractError


class ExpectationWeight(TupleWeight):
    __slots__ = ()

    @property
    def value1(self) -> Weight:
        return self._component(0)

    @property
    def value2(self) -> Weight:
        return self._component(1)

    @classmethod
    def _lift(cls, primary: Weight) -> Weight:
        companion = cls.component_types[1]
        if companion is cls.component_types[0]:
            return primary
        return companion.broadcast(primary)

    @classmethod
    def one(cls) -> "ExpectationWeight":
        w1, w2 = cls.component_types
        return cls._make((w1.one(), w2.zero()))

    @classmethod
    def type_name(cls) -> str:
        w1, w2 = cls.component_types
        return f"expectation_{w1.type_name()}_{w2.type_name()}"

    @classmethod
    def properties(cls) -> Properties:
        # The cross term of plus breaks distributivity.
        w1, w2 = cls.component_types
        return w1.properties() & w2.properties() & Properties.COMMUTATIVE

    @classmethod
    def reverse_type(cls) -> type:
        w1, w2 = cls.component_types
        return expectation_weight(w1.reverse_type(), w2.reverse_type())

    def plus(self, other: Any) -> "ExpectationWeight":
        other = self._operand(other)
        if not (self.member() and other.member()):
            return self.no_weight()
        p1, c1 = self._values
        p2, c2 = other._values
        cross = self._lift(p1).times(self._lift(p2))
        return self._make((p1.plus(p2), c1.plus(c2).plus(cross)))

    def times(self, other: Any) -> "ExpectationWeight":
        other = self._operand(other)
        if not (self.member() and other.member()):
            return self.no_weight()
        p1, c1 = self._values
        p2, c2 = other._values
        companion = self._lift(p1).times(c2).plus(c1.times(self._lift(p2)))
        return self._make((p1.times(p2), companion))


@functools.lru_cache(maxsize=None)
def expectation_weight(w1: type, w2: type) -> type:
    """
    The expectation kind with primary w1 and companion w2.
    """
    if w2 is not w1:
        lifted = (
            issubclass(w2, (PowerWeight, SparsePowerWeight))
            and w2.element_type is w1
        )
        if not lifted:
            raise WeightContractError(
                f"expectation companion must be {w1.type_name()} or a power of it, "
                f"got {w2.type_name()}"
            )
    name = f"ExpectationWeight[{w1.__name__}, {w2.__name__}]"
    return type(name, (ExpectationWeight,), {"__slots__": (), "component_types": (w1, w2)})
