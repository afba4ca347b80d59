"""
fstweight/algebra/signed_log.py

Signed log semiring: a log-domain magnitude with its sign tracked separately,
so that sums of positive and negative terms can be represented.

A weight (s, f) stands for the real number s * e^-f. Zero is (+1, +inf), One
is (+1, 0). Renders as the two-element composite "sign,value".
"""

from __future__ import annotations

import math
from typing import Any, BinaryIO, ClassVar, Optional

import numpy as np
from scipy.special import logsumexp

from fstweight.algebra.float_weight import (
    dtype_template,
    format_float,
    parse_float,
    precision_suffix,
)
from fstweight.algebra.weight import (
    DELTA,
    NUM_RANDOM_WEIGHTS,
    DivideType,
    Properties,
    Weight,
)
from fstweight.core.config import WeightConfig
from fstweight.core.errors import WeightZeroDivisionError
from fstweight.io.binary import read_scalar, write_scalar
from fstweight.io.text import CompositeWeightReader, join_composite

_NUMBER_TYPES = (int, float, np.integer, np.floating)


class SignedLogWeightTpl(Weight):
    """
    Signed log weight over a numpy floating dtype.

    Attributes:
        dtype: numpy floating dtype of the instantiation
    """

    __slots__ = ("_sign", "_value")

    dtype: ClassVar[np.dtype]
    family: ClassVar[str] = "signed_log"

    def __init__(self, value: Any, sign: int = 1):
        cls = type(self)
        if "dtype" not in vars(cls):
            raise TypeError(f"instantiate {cls.__name__} through with_dtype()")
        if sign not in (1, -1):
            raise ValueError(f"sign must be 1 or -1, got {sign!r}")
        v = cls.dtype.type(value)
        if v == 0:
            v = cls.dtype.type(0.0)
        # Zero has a single representation.
        self._sign = 1 if v == math.inf else sign
        self._value = v

    @classmethod
    def with_dtype(cls, dtype: Any) -> type:
        return dtype_template(SignedLogWeightTpl, dtype, "SignedLogWeight")

    @property
    def sign(self) -> int:
        return self._sign

    @property
    def value(self) -> np.floating:
        return self._value

    @classmethod
    def zero(cls) -> "SignedLogWeightTpl":
        return cls(math.inf)

    @classmethod
    def one(cls) -> "SignedLogWeightTpl":
        return cls(0.0)

    @classmethod
    def no_weight(cls) -> "SignedLogWeightTpl":
        return cls(math.nan)

    @classmethod
    def type_name(cls) -> str:
        return f"{cls.family}{precision_suffix(cls.dtype)}"

    @classmethod
    def properties(cls) -> Properties:
        return Properties.SEMIRING | Properties.COMMUTATIVE

    @classmethod
    def coerce(cls, value: Any) -> "SignedLogWeightTpl":
        if isinstance(value, _NUMBER_TYPES) and not isinstance(value, bool):
            return cls(value)
        return super().coerce(value)

    def member(self) -> bool:
        return not math.isnan(self._value) and self._value != -math.inf

    def negate(self) -> "SignedLogWeightTpl":
        return type(self)(self._value, -self._sign)

    def plus(self, other: Any) -> "SignedLogWeightTpl":
        other = self._operand(other)
        if not (self.member() and other.member()):
            return self.no_weight()
        f1, f2 = float(self._value), float(other._value)
        if f1 == math.inf:
            return other._clone()
        if f2 == math.inf:
            return self._clone()
        if f1 == f2 and self._sign != other._sign:
            return self.zero()
        with np.errstate(divide="ignore"):
            total, sign = logsumexp([-f1, -f2], b=[self._sign, other._sign], return_sign=True)
        # Cancellation below the float resolution.
        if sign == 0 or total == -np.inf:
            return self.zero()
        return type(self)(-float(total), int(sign))

    def minus(self, other: Any) -> "SignedLogWeightTpl":
        return self.plus(self._operand(other).negate())

    def times(self, other: Any) -> "SignedLogWeightTpl":
        other = self._operand(other)
        if not (self.member() and other.member()):
            return self.no_weight()
        f1, f2 = float(self._value), float(other._value)
        if f1 == math.inf or f2 == math.inf:
            return self.zero()
        return type(self)(f1 + f2, self._sign * other._sign)

    def divide(self, other: Any, divide_type: DivideType = DivideType.ANY) -> "SignedLogWeightTpl":
        other = self._operand(other)
        if not (self.member() and other.member()):
            return self.no_weight()
        f1, f2 = float(self._value), float(other._value)
        if f2 == math.inf:
            raise WeightZeroDivisionError(f"{self.type_name()} division by Zero")
        if f1 == math.inf:
            return self.zero()
        return type(self)(f1 - f2, self._sign * other._sign)

    def quantize(self, delta: float = DELTA) -> "SignedLogWeightTpl":
        v = float(self._value)
        if not math.isfinite(v):
            return self._clone()
        return type(self)(math.floor(v / delta + 0.5) * delta, self._sign)

    def reverse(self) -> "SignedLogWeightTpl":
        return self._clone()

    def approx_equal(self, other: Any, delta: float = DELTA) -> bool:
        other = self._operand(other)
        if self._sign != other._sign:
            return False
        a, b = float(self._value), float(other._value)
        return a <= b + delta and b <= a + delta

    def _key(self):
        return (self._sign, float(self._value))

    def _clone(self) -> "SignedLogWeightTpl":
        return type(self)(self._value, self._sign)

    def _render(self, config: WeightConfig) -> str:
        return join_composite([str(self._sign), format_float(self._value)], config)

    @classmethod
    def _read_text(cls, reader: CompositeWeightReader) -> Optional["SignedLogWeightTpl"]:
        group = reader.read_group()
        if group is None:
            return None
        sign = parse_float(group.read_element())
        value = parse_float(group.read_element())
        if sign is None or value is None or sign == 0 or math.isnan(sign):
            return None
        if not reader.close_group(group):
            return None
        return cls(value, 1 if sign > 0 else -1)

    def write(self, stream: BinaryIO) -> None:
        write_scalar(stream, self._sign, self.dtype)
        write_scalar(stream, self._value, self.dtype)

    @classmethod
    def _read(cls, stream: BinaryIO) -> Optional["SignedLogWeightTpl"]:
        sign = read_scalar(stream, cls.dtype)
        value = read_scalar(stream, cls.dtype)
        if sign is None or value is None or sign == 0 or math.isnan(sign):
            return None
        return cls(value, 1 if sign > 0 else -1)

    @classmethod
    def random(cls, rng: np.random.Generator, allow_zero: bool = True) -> "SignedLogWeightTpl":
        n = int(rng.integers(NUM_RANDOM_WEIGHTS + (1 if allow_zero else 0)))
        if n == NUM_RANDOM_WEIGHTS:
            return cls.zero()
        sign = 1 if rng.integers(2) == 0 else -1
        return cls(n, sign)


def minus(w1: Any, w2: Any) -> SignedLogWeightTpl:
    """w1 ⊕ (-w2) for signed weights."""
    if isinstance(w1, SignedLogWeightTpl):
        return w1.minus(w2)
    if isinstance(w2, SignedLogWeightTpl):
        return type(w2).coerce(w1).minus(w2)
    raise TypeError("minus requires a signed log weight operand")


SignedLogWeight = SignedLogWeightTpl.with_dtype(np.float32)
SignedLogWeight64 = SignedLogWeightTpl.with_dtype(np.float64)
