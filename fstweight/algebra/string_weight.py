"""
fstweight/algebra/string_weight.py

Weights over label sequences under concatenation.

times is concatenation (not commutative); plus depends on the StringType:
- LEFT: longest common prefix
- RIGHT: longest common suffix
- RESTRICT: operands must be identical

One is the empty sequence; Zero is an absorbing sentinel that is also the
identity of plus.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, BinaryIO, ClassVar, Iterable, Optional, Tuple

import numpy as np

from fstweight.algebra.weight import (
    ALPHABET_SIZE,
    DELTA,
    MAX_STRING_LENGTH,
    NUM_RANDOM_WEIGHTS,
    DivideType,
    Properties,
    Weight,
)
from fstweight.core.config import WeightConfig
from fstweight.core.errors import WeightContractError, WeightZeroDivisionError
from fstweight.io.binary import read_labels, write_labels
from fstweight.io.text import CompositeWeightReader

STRING_INFINITY = -1
STRING_BAD = -2
STRING_SEPARATOR = "_"

_ZERO_LABELS = (STRING_INFINITY,)
_BAD_LABELS = (STRING_BAD,)


class StringType(Enum):
    """Combination policy of plus."""
    LEFT = 0
    RIGHT = 1
    RESTRICT = 2


def _common_prefix(a: Tuple[int, ...], b: Tuple[int, ...]) -> Tuple[int, ...]:
    n = 0
    for x, y in zip(a, b):
        if x != y:
            break
        n += 1
    return a[:n]


def _common_suffix(a: Tuple[int, ...], b: Tuple[int, ...]) -> Tuple[int, ...]:
    return tuple(reversed(_common_prefix(tuple(reversed(a)), tuple(reversed(b)))))


class StringWeight(Weight):
    """
    Label sequence weight.

    Attributes:
        string_type: Combination policy of the kind
    """

    __slots__ = ("_labels",)

    string_type: ClassVar[StringType]

    def __init__(self, labels: Iterable[int] = ()):
        labels = tuple(int(label) for label in labels)
        if any(label < 0 for label in labels):
            raise ValueError(f"string labels must be non-negative, got {labels}")
        self._labels = labels

    @classmethod
    def _make(cls, labels: Tuple[int, ...]) -> "StringWeight":
        obj = object.__new__(cls)
        obj._labels = labels
        return obj

    @property
    def labels(self) -> Tuple[int, ...]:
        return self._labels

    def __len__(self) -> int:
        return 0 if self.is_zero() else len(self._labels)

    def is_zero(self) -> bool:
        return self._labels == _ZERO_LABELS

    @classmethod
    def zero(cls) -> "StringWeight":
        return cls._make(_ZERO_LABELS)

    @classmethod
    def one(cls) -> "StringWeight":
        return cls._make(())

    @classmethod
    def no_weight(cls) -> "StringWeight":
        return cls._make(_BAD_LABELS)

    @classmethod
    def type_name(cls) -> str:
        return {
            StringType.LEFT: "left_string",
            StringType.RIGHT: "right_string",
            StringType.RESTRICT: "restricted_string",
        }[cls.string_type]

    @classmethod
    def properties(cls) -> Properties:
        side = {
            StringType.LEFT: Properties.LEFT_SEMIRING,
            StringType.RIGHT: Properties.RIGHT_SEMIRING,
            StringType.RESTRICT: Properties.SEMIRING,
        }[cls.string_type]
        return side | Properties.IDEMPOTENT

    @classmethod
    def reverse_type(cls) -> type:
        return string_weight_type({
            StringType.LEFT: StringType.RIGHT,
            StringType.RIGHT: StringType.LEFT,
            StringType.RESTRICT: StringType.RESTRICT,
        }[cls.string_type])

    def member(self) -> bool:
        return self._labels != _BAD_LABELS

    def plus(self, other: Any) -> "StringWeight":
        other = self._operand(other)
        if not (self.member() and other.member()):
            return self.no_weight()
        if self.is_zero():
            return other._clone()
        if other.is_zero():
            return self._clone()
        if self.string_type is StringType.LEFT:
            return self._make(_common_prefix(self._labels, other._labels))
        if self.string_type is StringType.RIGHT:
            return self._make(_common_suffix(self._labels, other._labels))
        if self._labels != other._labels:
            raise WeightContractError(
                f"restricted string plus requires identical operands: {self} != {other}"
            )
        return self._clone()

    def times(self, other: Any) -> "StringWeight":
        other = self._operand(other)
        if not (self.member() and other.member()):
            return self.no_weight()
        if self.is_zero() or other.is_zero():
            return self.zero()
        return self._make(self._labels + other._labels)

    def divide(self, other: Any, divide_type: DivideType = DivideType.ANY) -> "StringWeight":
        """
        Remove other from the front (LEFT) or the back (RIGHT) of self.
        """
        other = self._operand(other)
        allowed = {
            StringType.LEFT: (DivideType.LEFT,),
            StringType.RIGHT: (DivideType.RIGHT,),
            StringType.RESTRICT: (DivideType.LEFT, DivideType.RIGHT),
        }[self.string_type]
        if divide_type not in allowed:
            raise WeightContractError(
                f"{self.type_name()} weights only support {[d.name for d in allowed]} division"
            )
        if not (self.member() and other.member()):
            return self.no_weight()
        if other.is_zero():
            raise WeightZeroDivisionError(f"{self.type_name()} division by Zero")
        if self.is_zero():
            return self.zero()
        n = len(other._labels)
        if divide_type is DivideType.LEFT:
            if self._labels[:n] != other._labels:
                raise WeightContractError(f"{other} is not a prefix of {self}")
            return self._make(self._labels[n:])
        if n and self._labels[-n:] != other._labels:
            raise WeightContractError(f"{other} is not a suffix of {self}")
        return self._make(self._labels[:len(self._labels) - n])

    def quantize(self, delta: float = DELTA) -> "StringWeight":
        return self._clone()

    def reverse(self) -> "StringWeight":
        rtype = self.reverse_type()
        if not self.member() or self.is_zero():
            return rtype._make(self._labels)
        return rtype._make(tuple(reversed(self._labels)))

    def approx_equal(self, other: Any, delta: float = DELTA) -> bool:
        return self == self._operand(other)

    def _key(self) -> Tuple[int, ...]:
        return self._labels

    def _clone(self) -> "StringWeight":
        return self._make(self._labels)

    def _render(self, config: WeightConfig) -> str:
        if self.is_zero():
            return "Infinity"
        if not self.member():
            return "BadString"
        if not self._labels:
            return "Epsilon"
        return STRING_SEPARATOR.join(str(label) for label in self._labels)

    @classmethod
    def _read_text(cls, reader: CompositeWeightReader) -> Optional["StringWeight"]:
        token = reader.read_element()
        if token is None:
            return None
        if token == "Infinity":
            return cls.zero()
        if token == "BadString":
            return cls.no_weight()
        if token == "Epsilon":
            return cls.one()
        try:
            labels = tuple(int(part) for part in token.split(STRING_SEPARATOR))
        except ValueError:
            return None
        if any(label < 0 for label in labels):
            return None
        return cls._make(labels)

    def write(self, stream: BinaryIO) -> None:
        write_labels(stream, self._labels)

    @classmethod
    def _read(cls, stream: BinaryIO) -> Optional["StringWeight"]:
        labels = read_labels(stream)
        if labels is None:
            return None
        if labels in (_ZERO_LABELS, _BAD_LABELS):
            return cls._make(labels)
        if any(label < 0 for label in labels):
            return None
        return cls._make(labels)

    @classmethod
    def random_labels(cls, rng: np.random.Generator) -> Tuple[int, ...]:
        n = int(rng.integers(MAX_STRING_LENGTH + 1))
        return tuple(int(x) for x in rng.integers(1, ALPHABET_SIZE + 1, size=n))

    @classmethod
    def random(cls, rng: np.random.Generator, allow_zero: bool = True) -> "StringWeight":
        if allow_zero and rng.integers(NUM_RANDOM_WEIGHTS + 1) == NUM_RANDOM_WEIGHTS:
            return cls.zero()
        if cls.string_type is StringType.RESTRICT:
            # plus is only defined on identical operands.
            return cls.one()
        return cls._make(cls.random_labels(rng))


class LeftStringWeight(StringWeight):
    __slots__ = ()
    string_type = StringType.LEFT


class RightStringWeight(StringWeight):
    __slots__ = ()
    string_type = StringType.RIGHT


class RestrictStringWeight(StringWeight):
    __slots__ = ()
    string_type = StringType.RESTRICT


def string_weight_type(string_type: StringType) -> type:
    """The string weight kind for a combination policy."""
    return {
        StringType.LEFT: LeftStringWeight,
        StringType.RIGHT: RightStringWeight,
        StringType.RESTRICT: RestrictStringWeight,
    }[string_type]


def string_less(w1: StringWeight, w2: StringWeight) -> bool:
    """Strict total order on label sequences: shorter first, then lexicographic."""
    a, b = w1.labels, w2.labels
    if len(a) != len(b):
        return len(a) < len(b)
    return a < b
