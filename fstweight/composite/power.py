"""
fstweight/composite/power.py

Fixed-arity power W^n: an n-tuple of one weight kind with componentwise
operators.
"""

from __future__ import annotations

import functools
from typing import Any

from fstweight.algebra.weight import COMPONENTWISE_PROPERTIES, DivideType, Properties, Weight
from fstweight.composite.tuple_weight import TupleWeight
from fstweight.core.errors import WeightContractError


class PowerWeight(TupleWeight):
    """
    Base of the power_weight() kinds.

    Attributes:
        element_type: Weight kind of every slot
        arity: Number of slots
    """

    __slots__ = ()

    element_type: type
    arity: int

    @classmethod
    def broadcast(cls, weight: Any) -> "PowerWeight":
        """The power weight with every slot equal to weight."""
        w = cls.element_type.coerce(weight)
        return cls._make(tuple(w.copy() for _ in range(cls.arity)))

    def _check_index(self, index: int) -> None:
        if not 0 <= index < self.arity:
            raise WeightContractError(
                f"index {index} out of range for {self.type_name()} (arity {self.arity})"
            )

    def value(self, index: int) -> Weight:
        self._check_index(index)
        return self._component(index)

    def set_value(self, index: int, weight: Any) -> None:
        self._check_index(index)
        values = list(self._values)
        values[index] = self.element_type.coerce(weight).copy()
        self._values = tuple(values)

    def __len__(self) -> int:
        return self.arity

    @classmethod
    def type_name(cls) -> str:
        return f"{cls.element_type.type_name()}_^{cls.arity}"

    @classmethod
    def properties(cls) -> Properties:
        return cls.element_type.properties() & COMPONENTWISE_PROPERTIES

    @classmethod
    def reverse_type(cls) -> type:
        return power_weight(cls.element_type.reverse_type(), cls.arity)

    def plus(self, other: Any) -> "PowerWeight":
        return self._plus_componentwise(other)

    def times(self, other: Any) -> "PowerWeight":
        return self._times_componentwise(other)

    def divide(self, other: Any, divide_type: DivideType = DivideType.ANY) -> "PowerWeight":
        return self._divide_componentwise(other, divide_type)


@functools.lru_cache(maxsize=None)
def power_weight(w: type, n: int) -> type:
    if n < 1:
        raise WeightContractError(f"power arity must be positive, got {n}")
    name = f"PowerWeight[{w.__name__}, {n}]"
    return type(name, (PowerWeight,), {
        "__slots__": (),
        "component_types": (w,) * n,
        "element_type": w,
        "arity": n,
    })
