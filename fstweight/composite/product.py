"""
fstweight/composite/product.py

Product of two weight kinds: (a1, a2) ⊕ (b1, b2) = (a1 ⊕ b1, a2 ⊕ b2), and
likewise for times and divide.
"""

from __future__ import annotations

import functools
from typing import Any

from fstweight.algebra.weight import COMPONENTWISE_PROPERTIES, DivideType, Properties, Weight
from fstweight.composite.tuple_weight import TupleWeight


class ProductWeight(TupleWeight):
    """Base of the product_weight() kinds."""

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
        return f"{w1.type_name()}_X_{w2.type_name()}"

    @classmethod
    def properties(cls) -> Properties:
        w1, w2 = cls.component_types
        return w1.properties() & w2.properties() & COMPONENTWISE_PROPERTIES

    @classmethod
    def reverse_type(cls) -> type:
        w1, w2 = cls.component_types
        return product_weight(w1.reverse_type(), w2.reverse_type())

    def plus(self, other: Any) -> "ProductWeight":
        return self._plus_componentwise(other)

    def times(self, other: Any) -> "ProductWeight":
        return self._times_componentwise(other)

    def divide(self, other: Any, divide_type: DivideType = DivideType.ANY) -> "ProductWeight":
        return self._divide_componentwise(other, divide_type)


@functools.lru_cache(maxsize=None)
def product_weight(w1: type, w2: type) -> type:
    """
    The product kind of w1 and w2 (cached, so equal arguments give the
    same class).
    """
    name = f"ProductWeight[{w1.__name__}, {w2.__name__}]"
    return type(name, (ProductWeight,), {"__slots__": (), "component_types": (w1, w2)})
