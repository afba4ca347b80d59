"""
fstweight/algebra/set_weight.py

Weights over finite sets of non-negative integers, plus a universal set.

| SetType                  | plus | times | zero      | one       |
|--------------------------|------|-------|-----------|-----------|
| INTERSECT_UNION          | ∩    | ∪     | universal | ∅         |
| UNION_INTERSECT          | ∪    | ∩     | ∅         | universal |
| INTERSECT_UNION_RESTRICT | ∩ of identical operands | ∪ | universal | ∅ |
| BOOLEAN                  | ∪    | ∩     | ∅         | universal |

BOOLEAN weights only take the values ∅ and universal: any non-empty set is
collapsed to universal on construction.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, BinaryIO, ClassVar, Iterable, Optional, Tuple

import numpy as np

from fstweight.algebra.weight import (
    ALPHABET_SIZE,
    DELTA,
    MAX_SET_SIZE,
    NUM_RANDOM_WEIGHTS,
    DivideType,
    Properties,
    Weight,
)
from fstweight.core.config import WeightConfig
from fstweight.core.errors import WeightContractError, WeightZeroDivisionError
from fstweight.io.binary import read_labels, write_labels
from fstweight.io.text import CompositeWeightReader

SET_UNIVERSAL = -1
SET_BAD = -2
SET_SEPARATOR = "_"

_UNIVERSAL = (SET_UNIVERSAL,)
_BAD = (SET_BAD,)


class SetType(Enum):
    INTERSECT_UNION = 0
    UNION_INTERSECT = 1
    INTERSECT_UNION_RESTRICT = 2
    BOOLEAN = 3


_INTERSECT_PLUS = (SetType.INTERSECT_UNION, SetType.INTERSECT_UNION_RESTRICT)


class SetWeight(Weight):
    """
    Set weight. Elements are stored as a sorted tuple; the universal set and
    the invalid sentinel are the reserved tuples (-1,) and (-2,).
    """

    __slots__ = ("_elements",)

    set_type: ClassVar[SetType]

    def __init__(self, elements: Iterable[int] = ()):
        elements = tuple(sorted(set(int(e) for e in elements)))
        if any(e < 0 for e in elements):
            raise ValueError(f"set elements must be non-negative, got {elements}")
        self._elements = self._canonical(elements)

    @classmethod
    def _canonical(cls, elements: Tuple[int, ...]) -> Tuple[int, ...]:
        if cls.set_type is SetType.BOOLEAN and elements and elements != _BAD:
            return _UNIVERSAL
        return elements

    @classmethod
    def _make(cls, elements: Tuple[int, ...]) -> "SetWeight":
        obj = object.__new__(cls)
        obj._elements = cls._canonical(elements)
        return obj

    @classmethod
    def universal(cls) -> "SetWeight":
        return cls._make(_UNIVERSAL)

    @classmethod
    def empty(cls) -> "SetWeight":
        return cls._make(())

    @property
    def elements(self) -> Tuple[int, ...]:
        return self._elements

    def is_universal(self) -> bool:
        return self._elements == _UNIVERSAL

    def is_empty(self) -> bool:
        return not self._elements

    @classmethod
    def zero(cls) -> "SetWeight":
        return cls.universal() if cls.set_type in _INTERSECT_PLUS else cls.empty()

    @classmethod
    def one(cls) -> "SetWeight":
        return cls.empty() if cls.set_type in _INTERSECT_PLUS else cls.universal()

    @classmethod
    def no_weight(cls) -> "SetWeight":
        obj = object.__new__(cls)
        obj._elements = _BAD
        return obj

    @classmethod
    def type_name(cls) -> str:
        return {
            SetType.INTERSECT_UNION: "intersect_union",
            SetType.UNION_INTERSECT: "union_intersect",
            SetType.INTERSECT_UNION_RESTRICT: "restricted_set_intersect_union",
            SetType.BOOLEAN: "boolean",
        }[cls.set_type]

    @classmethod
    def properties(cls) -> Properties:
        props = Properties.SEMIRING | Properties.COMMUTATIVE | Properties.IDEMPOTENT
        if cls.set_type is SetType.BOOLEAN:
            props |= Properties.PATH
        return props

    def member(self) -> bool:
        return self._elements != _BAD

    # Set algebra with the universal sentinel

    def _union(self, other: "SetWeight") -> "SetWeight":
        if self.is_universal() or other.is_universal():
            return self.universal()
        return self._make(tuple(sorted(set(self._elements) | set(other._elements))))

    def _intersect(self, other: "SetWeight") -> "SetWeight":
        if self.is_universal():
            return other._clone()
        if other.is_universal():
            return self._clone()
        return self._make(tuple(sorted(set(self._elements) & set(other._elements))))

    def _subset_of(self, other: "SetWeight") -> bool:
        if other.is_universal():
            return True
        if self.is_universal():
            return False
        return set(self._elements) <= set(other._elements)

    def plus(self, other: Any) -> "SetWeight":
        other = self._operand(other)
        if not (self.member() and other.member()):
            return self.no_weight()
        if self.set_type is SetType.INTERSECT_UNION_RESTRICT:
            zero = self.zero()
            if self == zero:
                return other._clone()
            if other == zero:
                return self._clone()
            if self._elements != other._elements:
                raise WeightContractError(
                    f"restricted set plus requires identical operands: {self} != {other}"
                )
            return self._clone()
        if self.set_type is SetType.INTERSECT_UNION:
            return self._intersect(other)
        return self._union(other)

    def times(self, other: Any) -> "SetWeight":
        other = self._operand(other)
        if not (self.member() and other.member()):
            return self.no_weight()
        if self.set_type in _INTERSECT_PLUS:
            return self._union(other)
        return self._intersect(other)

    def divide(self, other: Any, divide_type: DivideType = DivideType.ANY) -> "SetWeight":
        """
        Solve other ⊗ x = self.

        Intersect-union kinds return the difference self - other (other must
        be a subset of self); the others return self (self must be a subset
        of other).
        """
        other = self._operand(other)
        if not (self.member() and other.member()):
            return self.no_weight()
        if other == self.zero():
            raise WeightZeroDivisionError(f"{self.type_name()} division by Zero")
        if self.set_type in _INTERSECT_PLUS:
            if not other._subset_of(self):
                raise WeightContractError(f"{other} is not a subset of {self}")
            if self.is_universal():
                return self.universal()
            return self._make(tuple(e for e in self._elements if e not in set(other._elements)))
        if not self._subset_of(other):
            raise WeightContractError(f"{self} is not a subset of {other}")
        return self._clone()

    def quantize(self, delta: float = DELTA) -> "SetWeight":
        return self._clone()

    def reverse(self) -> "SetWeight":
        return self._clone()

    def approx_equal(self, other: Any, delta: float = DELTA) -> bool:
        return self == self._operand(other)

    def _key(self) -> Tuple[int, ...]:
        return self._elements

    def _clone(self) -> "SetWeight":
        obj = object.__new__(type(self))
        obj._elements = self._elements
        return obj

    def _render(self, config: WeightConfig) -> str:
        if not self.member():
            return "BadSet"
        if self.is_universal():
            return "UnivSet"
        if self.is_empty():
            return "EmptySet"
        return SET_SEPARATOR.join(str(e) for e in self._elements)

    @classmethod
    def _read_text(cls, reader: CompositeWeightReader) -> Optional["SetWeight"]:
        token = reader.read_element()
        if token is None:
            return None
        if token == "BadSet":
            return cls.no_weight()
        if token == "UnivSet":
            return cls.universal()
        if token == "EmptySet":
            return cls.empty()
        try:
            elements = [int(part) for part in token.split(SET_SEPARATOR)]
        except ValueError:
            return None
        if any(e < 0 for e in elements):
            return None
        return cls._make(tuple(sorted(set(elements))))

    def write(self, stream: BinaryIO) -> None:
        write_labels(stream, self._elements)

    @classmethod
    def _read(cls, stream: BinaryIO) -> Optional["SetWeight"]:
        elements = read_labels(stream)
        if elements is None:
            return None
        if elements == _BAD:
            return cls.no_weight()
        if elements == _UNIVERSAL:
            return cls.universal()
        if any(e < 0 for e in elements):
            return None
        return cls._make(tuple(sorted(set(elements))))

    @classmethod
    def random(cls, rng: np.random.Generator, allow_zero: bool = True) -> "SetWeight":
        if allow_zero and rng.integers(NUM_RANDOM_WEIGHTS + 1) == NUM_RANDOM_WEIGHTS:
            return cls.zero()
        if cls.set_type is SetType.INTERSECT_UNION_RESTRICT:
            # plus is only defined on identical operands.
            return cls.one()
        if rng.integers(NUM_RANDOM_WEIGHTS + 1) == 0:
            return cls.universal()
        n = int(rng.integers(MAX_SET_SIZE + 1))
        return cls._make(tuple(sorted(set(int(x) for x in rng.integers(1, ALPHABET_SIZE + 1, size=n)))))


class IntersectUnionSetWeight(SetWeight):
    __slots__ = ()
    set_type = SetType.INTERSECT_UNION


class UnionIntersectSetWeight(SetWeight):
    __slots__ = ()
    set_type = SetType.UNION_INTERSECT


class RestrictIntersectUnionSetWeight(SetWeight):
    __slots__ = ()
    set_type = SetType.INTERSECT_UNION_RESTRICT


class BooleanSetWeight(SetWeight):
    __slots__ = ()
    set_type = SetType.BOOLEAN


def set_weight_type(set_type: SetType) -> type:
    return {
        SetType.INTERSECT_UNION: IntersectUnionSetWeight,
        SetType.UNION_INTERSECT: UnionIntersectSetWeight,
        SetType.INTERSECT_UNION_RESTRICT: RestrictIntersectUnionSetWeight,
        SetType.BOOLEAN: BooleanSetWeight,
    }[set_type]
