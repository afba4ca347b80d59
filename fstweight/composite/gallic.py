"""
fstweight/composite/gallic.py

Gallic weights pair an output label string with a weight of kind W, so that
transducer output labels and path weights can be combined as one value.

| GallicType | shape                   | plus                            |
|------------|-------------------------|---------------------------------|
| LEFT       | left_string × W         | common prefix, W plus           |
| RIGHT      | right_string × W        | common suffix, W plus           |
| RESTRICT   | restricted_string × W   | strings must match, W plus      |
| MIN        | restricted_string × W   | the pair with the smaller W     |
| GENERAL    | union of RESTRICT pairs | W plus of terms with one string |

The type is a parameter of gallic_weight(), never a runtime flag.
"""

from __future__ import annotations

import functools
from enum import Enum
from typing import Any

import numpy as np

from fstweight.algebra.string_weight import (
    LeftStringWeight,
    RestrictStringWeight,
    RightStringWeight,
    StringWeight,
    string_less,
)
from fstweight.algebra.weight import (
    COMPONENTWISE_PROPERTIES,
    NUM_RANDOM_WEIGHTS,
    Properties,
    Weight,
    natural_less,
)
from fstweight.composite.product import ProductWeight
from fstweight.composite.union import UnionWeight, UnionWeightOptions
from fstweight.core.errors import WeightContractError


class GallicType(Enum):
    LEFT = 0
    RIGHT = 1
    RESTRICT = 2
    MIN = 3
    GENERAL = 4


_STRING_TYPES = {
    GallicType.LEFT: LeftStringWeight,
    GallicType.RIGHT: RightStringWeight,
    GallicType.RESTRICT: RestrictStringWeight,
    GallicType.MIN: RestrictStringWeight,
}

_PREFIXES = {
    GallicType.LEFT: "left_gallic",
    GallicType.RIGHT: "right_gallic",
    GallicType.RESTRICT: "restricted_gallic",
    GallicType.MIN: "min_gallic",
    GallicType.GENERAL: "gallic",
}

_REVERSED = {
    GallicType.LEFT: GallicType.RIGHT,
    GallicType.RIGHT: GallicType.LEFT,
    GallicType.RESTRICT: GallicType.RESTRICT,
    GallicType.MIN: GallicType.MIN,
    GallicType.GENERAL: GallicType.GENERAL,
}


class GallicWeight(ProductWeight):
    """
    (string, W) pair of the LEFT, RIGHT, RESTRICT and MIN kinds.

    Attributes:
        gallic_type: Combination policy of the kind
        weight_type: Kind W of the second component
    """

    __slots__ = ()

    gallic_type: GallicType
    weight_type: type

    def __init__(self, labels: Any = (), weight: Any = None):
        string_type = type(self).component_types[0]
        if not isinstance(labels, StringWeight):
            labels = string_type(labels)
        if weight is None:
            weight = type(self).weight_type.one()
        super().__init__(labels, weight)

    @property
    def string(self) -> StringWeight:
        return self._component(0)

    @property
    def weight(self) -> Weight:
        return self._component(1)

    @classmethod
    def type_name(cls) -> str:
        return f"{_PREFIXES[cls.gallic_type]}_{cls.weight_type.type_name()}"

    @classmethod
    def properties(cls) -> Properties:
        props = super().properties()
        if cls.gallic_type is GallicType.MIN:
            props |= cls.weight_type.properties() & Properties.PATH
        return props

    @classmethod
    def reverse_type(cls) -> type:
        return gallic_weight(cls.weight_type.reverse_type(), _REVERSED[cls.gallic_type])

    def plus(self, other: Any) -> "GallicWeight":
        if self.gallic_type is not GallicType.MIN:
            return super().plus(other)
        other = self._operand(other)
        if not (self.member() and other.member()):
            return self.no_weight()
        if self._values[0].is_zero():
            return other
        if other._values[0].is_zero():
            return self
        if natural_less(self._values[1], other._values[1]):
            return self
        if natural_less(other._values[1], self._values[1]):
            return other
        return other if string_less(other._values[0], self._values[0]) else self

    @classmethod
    def random(cls, rng: np.random.Generator, allow_zero: bool = True) -> "GallicWeight":
        if allow_zero and rng.integers(NUM_RANDOM_WEIGHTS + 1) == 0:
            return cls.zero()
        string_type = cls.component_types[0]
        if cls.gallic_type is GallicType.RESTRICT:
            string = string_type.one()
        else:
            string = string_type._make(LeftStringWeight.random_labels(rng))
        return cls._make((string, cls.weight_type.random(rng, False)))


def _gallic_string_less(a: GallicWeight, b: GallicWeight) -> bool:
    return string_less(a._values[0], b._values[0])


def _gallic_merge(a: GallicWeight, b: GallicWeight) -> GallicWeight:
    return a.plus(b)


GENERAL_GALLIC_OPTIONS = UnionWeightOptions(compare=_gallic_string_less, merge=_gallic_merge)


class GeneralGallicWeight(UnionWeight):
    """
    Union of restricted Gallic pairs, one term per distinct string.

    Attributes:
        weight_type: Kind W of the pairs
    """

    __slots__ = ()

    gallic_type = GallicType.GENERAL
    weight_type: type

    @classmethod
    def type_name(cls) -> str:
        return f"gallic_{cls.weight_type.type_name()}"

    @classmethod
    def properties(cls) -> Properties:
        return cls.weight_type.properties() & COMPONENTWISE_PROPERTIES & ~Properties.COMMUTATIVE

    @classmethod
    def reverse_type(cls) -> type:
        return gallic_weight(cls.weight_type.reverse_type(), GallicType.GENERAL)

    @classmethod
    def from_pair(cls, labels: Any, weight: Any) -> "GeneralGallicWeight":
        return cls([cls.element_type(labels, weight)])

    @classmethod
    def random(cls, rng: np.random.Generator, allow_zero: bool = True) -> "GeneralGallicWeight":
        n = int(rng.integers(1, 4))
        if allow_zero and rng.integers(NUM_RANDOM_WEIGHTS + 1) == 0:
            return cls.zero()
        terms = [
            cls.element_type._make((
                RestrictStringWeight._make(LeftStringWeight.random_labels(rng)),
                cls.weight_type.random(rng, False),
            ))
            for _ in range(n)
        ]
        return cls._from_terms(terms)


def gallic_weight(w: type, gallic_type: GallicType = GallicType.LEFT) -> type:
    """
    The Gallic kind over w for the given type (cached, so equal arguments
    give the same class).
    """
    return _gallic_weight(w, gallic_type)


@functools.lru_cache(maxsize=None)
def _gallic_weight(w: type, gallic_type: GallicType) -> type:
    if gallic_type is GallicType.GENERAL:
        element = gallic_weight(w, GallicType.RESTRICT)
        name = f"GeneralGallicWeight[{w.__name__}]"
        return type(name, (GeneralGallicWeight,), {
            "__slots__": (),
            "element_type": element,
            "options": GENERAL_GALLIC_OPTIONS,
            "weight_type": w,
        })
    if gallic_type is GallicType.MIN and not w.properties() & Properties.PATH:
        raise WeightContractError(f"min gallic requires a path semiring, got {w.type_name()}")
    string_type = _STRING_TYPES[gallic_type]
    name = f"GallicWeight[{gallic_type.name}, {w.__name__}]"
    return type(name, (GallicWeight,), {
        "__slots__": (),
        "component_types": (string_type, w),
        "gallic_type": gallic_type,
        "weight_type": w,
    })
