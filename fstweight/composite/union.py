"""
fstweight/composite/union.py

Union weight: a disjunction of terms of one weight kind, kept sorted under a
strict total order and free of compare-equal duplicates.

    UnionWeightOptions(compare, merge, reverse)

compare(a, b) is the strict order of the terms; two terms that are neither
less nor greater than each other are combined into one with merge(a, b).
Zero is the empty union, One is the union holding the single term One.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Callable, Iterable, List, Optional, Tuple

import numpy as np

from fstweight.algebra.weight import (
    COMPONENTWISE_PROPERTIES,
    DELTA,
    MAX_UNION_TERMS,
    DivideType,
    Properties,
    Weight,
    natural_less,
)
from fstweight.core.config import WeightConfig
from fstweight.core.errors import WeightZeroDivisionError
from fstweight.io.binary import read_int32, write_int32
from fstweight.io.text import CompositeWeightReader, join_composite

_EMPTY_TOKEN = "EmptyUnion"
_BAD_TOKEN = "BadUnion"


@dataclass(frozen=True)
class UnionWeightOptions:
    """
    Term policy of a union kind.

    Attributes:
        compare: Strict total order on terms
        merge: Combines two compare-equal terms
        reverse: Options of the reversed kind; None means these options
    """
    compare: Callable[[Weight, Weight], bool]
    merge: Callable[[Weight, Weight], Weight]
    reverse: Optional["UnionWeightOptions"] = field(default=None, compare=False)

    @property
    def reverse_options(self) -> "UnionWeightOptions":
        return self if self.reverse is None else self.reverse


def _keep_first(a: Weight, b: Weight) -> Weight:
    return a


@functools.lru_cache(maxsize=None)
def natural_union_options(w: type) -> UnionWeightOptions:
    """Terms ordered by the natural order of w; duplicates keep the first."""
    return UnionWeightOptions(compare=natural_less, merge=_keep_first)


class UnionWeight(Weight):
    """
    Base of the union_weight() kinds.

    Attributes:
        element_type: Weight kind of the terms
        options: Order and merge policy of the terms
    """

    __slots__ = ("_terms", "_bad")

    element_type: type
    options: UnionWeightOptions

    def __init__(self, terms: Iterable[Any] = ()):
        cls = type(self)
        if not hasattr(cls, "options"):
            raise TypeError(f"instantiate {cls.__name__} through union_weight()")
        built = cls._from_terms([cls.element_type.coerce(t).copy() for t in terms])
        self._terms = built._terms
        self._bad = False

    @classmethod
    def _make(cls, terms: Tuple[Weight, ...], bad: bool = False) -> "UnionWeight":
        obj = object.__new__(cls)
        obj._terms = tuple(terms)
        obj._bad = bad
        return obj

    @classmethod
    def _from_terms(cls, terms: List[Weight]) -> "UnionWeight":
        """Sort arbitrary terms, merge compare-equal neighbours and drop Zero terms."""
        compare = cls.options.compare
        zero = cls.element_type.zero()

        def cmp(a, b):
            if compare(a, b):
                return -1
            if compare(b, a):
                return 1
            return 0

        merged: List[Weight] = []
        for term in sorted(terms, key=functools.cmp_to_key(cmp)):
            if merged and cmp(merged[-1], term) == 0:
                merged[-1] = cls.options.merge(merged[-1], term)
            else:
                merged.append(term)
        return cls._make(tuple(t for t in merged if t != zero))

    @property
    def terms(self) -> Tuple[Weight, ...]:
        return tuple(t.copy() for t in self._terms)

    def __len__(self) -> int:
        return len(self._terms)

    def __iter__(self):
        return iter(self.terms)

    @classmethod
    def zero(cls) -> "UnionWeight":
        return cls._make(())

    @classmethod
    def one(cls) -> "UnionWeight":
        return cls._make((cls.element_type.one(),))

    @classmethod
    def no_weight(cls) -> "UnionWeight":
        return cls._make((), bad=True)

    @classmethod
    def type_name(cls) -> str:
        return f"{cls.element_type.type_name()}_union"

    @classmethod
    def properties(cls) -> Properties:
        return cls.element_type.properties() & COMPONENTWISE_PROPERTIES

    @classmethod
    def reverse_type(cls) -> type:
        return union_weight(cls.element_type.reverse_type(), cls.options.reverse_options)

    def member(self) -> bool:
        return not self._bad and all(t.member() for t in self._terms)

    def plus(self, other: Any) -> "UnionWeight":
        other = self._operand(other)
        if not (self.member() and other.member()):
            return self.no_weight()
        compare, merge = self.options.compare, self.options.merge
        a, b = self._terms, other._terms
        merged: List[Weight] = []
        i = j = 0
        while i < len(a) and j < len(b):
            if compare(a[i], b[j]):
                merged.append(a[i])
                i += 1
            elif compare(b[j], a[i]):
                merged.append(b[j])
                j += 1
            else:
                merged.append(merge(a[i], b[j]))
                i += 1
                j += 1
        merged.extend(a[i:])
        merged.extend(b[j:])
        return self._make(tuple(merged))

    def times(self, other: Any) -> "UnionWeight":
        other = self._operand(other)
        if not (self.member() and other.member()):
            return self.no_weight()
        return self._from_terms([a.times(b) for a in self._terms for b in other._terms])

    def divide(self, other: Any, divide_type: DivideType = DivideType.ANY) -> "UnionWeight":
        """Divide every term by the single term of other."""
        other = self._operand(other)
        if not (self.member() and other.member()):
            return self.no_weight()
        if not other._terms:
            raise WeightZeroDivisionError(f"{self.type_name()} division by Zero")
        if len(other._terms) > 1:
            return self.no_weight()
        divisor = other._terms[0]
        return self._from_terms([t.divide(divisor, divide_type) for t in self._terms])

    def quantize(self, delta: float = DELTA) -> "UnionWeight":
        if self._bad:
            return self._clone()
        return self._from_terms([t.quantize(delta) for t in self._terms])

    def reverse(self) -> "UnionWeight":
        rtype = self.reverse_type()
        if self._bad:
            return rtype.no_weight()
        return rtype._from_terms([t.reverse() for t in self._terms])

    def approx_equal(self, other: Any, delta: float = DELTA) -> bool:
        other = self._operand(other)
        if self._bad != other._bad or len(self._terms) != len(other._terms):
            return False
        return all(a.approx_equal(b, delta) for a, b in zip(self._terms, other._terms))

    def _key(self):
        return (self._bad, tuple(t._key() for t in self._terms))

    def _clone(self) -> "UnionWeight":
        return self._make(tuple(t.copy() for t in self._terms), self._bad)

    # I/O

    def _render(self, config: WeightConfig) -> str:
        if self._bad:
            return _BAD_TOKEN
        if not self._terms:
            return _EMPTY_TOKEN
        return join_composite([t._render(config) for t in self._terms], config)

    @classmethod
    def _read_text(cls, reader: CompositeWeightReader) -> Optional["UnionWeight"]:
        token = reader.peek()
        if token == _EMPTY_TOKEN:
            reader.read_element()
            return cls.zero()
        if token == _BAD_TOKEN:
            reader.read_element()
            return cls.no_weight()
        group = reader.read_group()
        if group is None or group.done():
            return None
        terms = []
        # The terms run to the end of the enclosing scope.
        while not group.done():
            term = cls.element_type._read_text(group)
            if term is None:
                return None
            terms.append(term)
        if not reader.close_group(group):
            return None
        return cls._from_terms(terms)

    def write(self, stream: BinaryIO) -> None:
        write_int32(stream, -1 if self._bad else len(self._terms))
        for t in self._terms:
            t.write(stream)

    @classmethod
    def _read(cls, stream: BinaryIO) -> Optional["UnionWeight"]:
        n = read_int32(stream)
        if n is None or n < -1:
            return None
        if n == -1:
            return cls.no_weight()
        terms = []
        for _ in range(n):
            term = cls.element_type._read(stream)
            if term is None:
                return None
            terms.append(term)
        return cls._from_terms(terms)

    @classmethod
    def random(cls, rng: np.random.Generator, allow_zero: bool = True) -> "UnionWeight":
        n = int(rng.integers(MAX_UNION_TERMS + 1))
        if n == 0 and not allow_zero:
            n = 1
        return cls._from_terms([cls.element_type.random(rng, False) for _ in range(n)])


def union_weight(w: type, options: Optional[UnionWeightOptions] = None) -> type:
    """
    The union kind over w with the given term policy (natural order of w
    and keep-first merging when omitted).
    """
    return _union_weight(w, natural_union_options(w) if options is None else options)


@functools.lru_cache(maxsize=None)
def _union_weight(w: type, options: UnionWeightOptions) -> type:
    name = f"UnionWeight[{w.__name__}]"
    return type(name, (UnionWeight,), {"__slots__": (), "element_type": w, "options": options})
