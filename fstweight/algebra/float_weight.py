"""
fstweight/algebra/float_weight.py

Single-scalar floating weight kernels.

| Family   | plus            | times | zero | one |
|----------|-----------------|-------|------|-----|
| Tropical | min             | +     | +inf | 0   |
| Log      | -log(e^-a+e^-b) | +     | +inf | 0   |
| Real     | +               | *     | 0    | 1   |
| MinMax   | min             | max   | +inf | -inf|

Each family is a template over a numpy floating dtype:

    TropicalWeightTpl.with_dtype(np.float64) is TropicalWeight64

Arithmetic runs in double precision and the result is canonicalized into the
dtype, so a value compares equal to itself however it was produced.
"""

from __future__ import annotations

import math
from typing import Any, BinaryIO, ClassVar, Dict, Iterable, Optional, Tuple

import numpy as np
from scipy.special import logsumexp

from fstweight.algebra.weight import (
    DELTA,
    NUM_RANDOM_WEIGHTS,
    DivideType,
    Properties,
    Weight,
)
from fstweight.core.config import WeightConfig
from fstweight.core.errors import WeightContractError, WeightZeroDivisionError
from fstweight.io.binary import read_scalar, write_scalar
from fstweight.io.text import CompositeWeightReader

_NUMBER_TYPES = (int, float, np.integer, np.floating)

_INFINITY_TOKEN = "Infinity"
_NEG_INFINITY_TOKEN = "-Infinity"
_BAD_NUMBER_TOKEN = "BadNumber"

_SPECIAL_VALUES = {
    _INFINITY_TOKEN: math.inf,
    _NEG_INFINITY_TOKEN: -math.inf,
    _BAD_NUMBER_TOKEN: math.nan,
}

_DTYPE_CLASSES: Dict[Tuple[type, np.dtype], type] = {}


def precision_suffix(dtype: np.dtype) -> str:
    """Type-name suffix of a precision: empty for 32 bits, else the bit width."""
    bits = np.dtype(dtype).itemsize * 8
    return "" if bits == 32 else str(bits)


def format_float(value: float) -> str:
    """Shortest text that reads back to the same scalar."""
    if math.isnan(value):
        return _BAD_NUMBER_TOKEN
    if math.isinf(value):
        return _INFINITY_TOKEN if value > 0 else _NEG_INFINITY_TOKEN
    return str(value)


def parse_float(token: Optional[str]) -> Optional[float]:
    if token is None:
        return None
    if token in _SPECIAL_VALUES:
        return _SPECIAL_VALUES[token]
    try:
        return float(token)
    except ValueError:
        return None


def dtype_template(template: type, dtype: Any, prefix: str) -> type:
    """
    Instantiate a floating template for a dtype (cached per template/dtype).
    """
    dt = np.dtype(dtype)
    if dt.kind != "f":
        raise TypeError(f"{template.__name__} requires a floating dtype, got {dt}")
    key = (template, dt)
    cls = _DTYPE_CLASSES.get(key)
    if cls is None:
        name = f"{prefix}{precision_suffix(dt)}"
        cls = type(name, (template,), {"__slots__": (), "dtype": dt, "__module__": template.__module__})
        cls.__qualname__ = name
        _DTYPE_CLASSES[key] = cls
    return cls


class FloatWeightTpl(Weight):
    """
    Base of the single-scalar kernels.

    Attributes:
        dtype: numpy floating dtype of the instantiation
        family: Family name, the type name without precision suffix
    """

    __slots__ = ("_value",)

    dtype: ClassVar[np.dtype]
    family: ClassVar[str] = "float"

    def __init__(self, value: Any):
        cls = type(self)
        if "dtype" not in vars(cls):
            raise TypeError(f"instantiate {cls.__name__} through with_dtype()")
        if isinstance(value, FloatWeightTpl):
            if type(value) is not cls:
                raise TypeError(f"cannot build {cls.type_name()} weight from {value.type_name()}")
            value = value._value
        v = cls.dtype.type(value)
        if v == 0:
            v = cls.dtype.type(0.0)
        self._value = v

    @classmethod
    def with_dtype(cls, dtype: Any) -> type:
        template = cls._template()
        return dtype_template(template, dtype, template.__name__[:-len("Tpl")])

    @classmethod
    def _template(cls) -> type:
        for klass in cls.__mro__:
            if klass.__name__.endswith("Tpl"):
                return klass
        raise TypeError(f"{cls.__name__} is not a floating weight template")

    @property
    def value(self) -> np.floating:
        return self._value

    def __float__(self) -> float:
        return float(self._value)

    @classmethod
    def type_name(cls) -> str:
        return f"{cls.family}{precision_suffix(cls.dtype)}"

    @classmethod
    def coerce(cls, value: Any) -> "FloatWeightTpl":
        if isinstance(value, _NUMBER_TYPES) and not isinstance(value, bool):
            return cls(value)
        return super().coerce(value)

    @classmethod
    def no_weight(cls) -> "FloatWeightTpl":
        return cls(math.nan)

    def member(self) -> bool:
        return not math.isnan(self._value)

    def _both_members(self, other: "FloatWeightTpl") -> bool:
        return self.member() and other.member()

    # Identity

    def _key(self) -> float:
        return float(self._value)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, _NUMBER_TYPES):
            return bool(self._value == self.dtype.type(other))
        return super().__eq__(other)

    def __hash__(self) -> int:
        return hash(float(self._value))

    def _clone(self) -> "FloatWeightTpl":
        return type(self)(self._value)

    def approx_equal(self, other: Any, delta: float = DELTA) -> bool:
        other = self._operand(other)
        a, b = float(self._value), float(other._value)
        return a <= b + delta and b <= a + delta

    def quantize(self, delta: float = DELTA) -> "FloatWeightTpl":
        v = float(self._value)
        if not math.isfinite(v):
            return self._clone()
        return type(self)(math.floor(v / delta + 0.5) * delta)

    def reverse(self) -> "FloatWeightTpl":
        return self._clone()

    # I/O

    def _render(self, config: WeightConfig) -> str:
        return format_float(self._value)

    @classmethod
    def _read_text(cls, reader: CompositeWeightReader) -> Optional["FloatWeightTpl"]:
        value = parse_float(reader.read_element())
        return None if value is None else cls(value)

    def write(self, stream: BinaryIO) -> None:
        write_scalar(stream, self._value, self.dtype)

    @classmethod
    def _read(cls, stream: BinaryIO) -> Optional["FloatWeightTpl"]:
        value = read_scalar(stream, cls.dtype)
        return None if value is None else cls(value)

    @classmethod
    def random(cls, rng: np.random.Generator, allow_zero: bool = True) -> "FloatWeightTpl":
        n = int(rng.integers(NUM_RANDOM_WEIGHTS + (1 if allow_zero else 0)))
        if n == NUM_RANDOM_WEIGHTS:
            return cls.zero()
        return cls(n)


class _LogDomainTpl(FloatWeightTpl):
    """Shared times/divide of the families whose times is addition."""

    __slots__ = ()

    @classmethod
    def zero(cls):
        return cls(math.inf)

    @classmethod
    def one(cls):
        return cls(0.0)

    def member(self) -> bool:
        return not math.isnan(self._value) and self._value != -math.inf

    def times(self, other: Any):
        other = self._operand(other)
        if not self._both_members(other):
            return self.no_weight()
        f1, f2 = float(self._value), float(other._value)
        if f1 == math.inf or f2 == math.inf:
            return self.zero()
        return type(self)(f1 + f2)

    def divide(self, other: Any, divide_type: DivideType = DivideType.ANY):
        other = self._operand(other)
        if not self._both_members(other):
            return self.no_weight()
        f1, f2 = float(self._value), float(other._value)
        if f2 == math.inf:
            raise WeightZeroDivisionError(f"{self.type_name()} division by Zero")
        if f1 == math.inf:
            return self.zero()
        return type(self)(f1 - f2)


class TropicalWeightTpl(_LogDomainTpl):
    """Min-plus semiring."""

    __slots__ = ()
    family = "tropical"

    @classmethod
    def properties(cls) -> Properties:
        return Properties.SEMIRING | Properties.COMMUTATIVE | Properties.IDEMPOTENT | Properties.PATH

    def plus(self, other: Any) -> "TropicalWeightTpl":
        other = self._operand(other)
        if not self._both_members(other):
            return self.no_weight()
        return self if self._value <= other._value else other


class LogWeightTpl(_LogDomainTpl):
    """Negative log probabilities: plus is -log(e^-a + e^-b)."""

    __slots__ = ()
    family = "log"

    @classmethod
    def properties(cls) -> Properties:
        return Properties.SEMIRING | Properties.COMMUTATIVE

    def plus(self, other: Any) -> "LogWeightTpl":
        other = self._operand(other)
        if not self._both_members(other):
            return self.no_weight()
        return type(self)(log_plus(float(self._value), float(other._value)))

    @classmethod
    def plus_all(cls, weights: Iterable["LogWeightTpl"]) -> "LogWeightTpl":
        values = np.array([float(cls.coerce(w)._value) for w in weights], dtype=np.float64)
        if values.size == 0 or np.all(np.isinf(values)):
            return cls.zero()
        if np.any(np.isnan(values)) or np.any(values == -np.inf):
            return cls.no_weight()
        return cls(-logsumexp(-values))


def log_plus(f1: float, f2: float) -> float:
    """-log(e^-f1 + e^-f2) without overflow."""
    return float(-np.logaddexp(-f1, -f2))


class RealWeightTpl(FloatWeightTpl):
    """Sum-product semiring over the reals."""

    __slots__ = ()
    family = "real"

    @classmethod
    def zero(cls) -> "RealWeightTpl":
        return cls(0.0)

    @classmethod
    def one(cls) -> "RealWeightTpl":
        return cls(1.0)

    @classmethod
    def properties(cls) -> Properties:
        return Properties.SEMIRING | Properties.COMMUTATIVE

    def member(self) -> bool:
        return math.isfinite(self._value)

    def plus(self, other: Any) -> "RealWeightTpl":
        other = self._operand(other)
        if not self._both_members(other):
            return self.no_weight()
        return type(self)(float(self._value) + float(other._value))

    def times(self, other: Any) -> "RealWeightTpl":
        other = self._operand(other)
        if not self._both_members(other):
            return self.no_weight()
        return type(self)(float(self._value) * float(other._value))

    def divide(self, other: Any, divide_type: DivideType = DivideType.ANY) -> "RealWeightTpl":
        other = self._operand(other)
        if not self._both_members(other):
            return self.no_weight()
        if other._value == 0:
            raise WeightZeroDivisionError(f"{self.type_name()} division by Zero")
        return type(self)(float(self._value) / float(other._value))

    @classmethod
    def plus_all(cls, weights: Iterable["RealWeightTpl"]) -> "RealWeightTpl":
        values = [float(cls.coerce(w)._value) for w in weights]
        return cls(math.fsum(values))


class MinMaxWeightTpl(FloatWeightTpl):
    """Min-max semiring: plus is min, times is max."""

    __slots__ = ()
    family = "minmax"

    @classmethod
    def zero(cls) -> "MinMaxWeightTpl":
        return cls(math.inf)

    @classmethod
    def one(cls) -> "MinMaxWeightTpl":
        return cls(-math.inf)

    @classmethod
    def properties(cls) -> Properties:
        return Properties.SEMIRING | Properties.COMMUTATIVE | Properties.IDEMPOTENT | Properties.PATH

    def plus(self, other: Any) -> "MinMaxWeightTpl":
        other = self._operand(other)
        if not self._both_members(other):
            return self.no_weight()
        return self if self._value <= other._value else other

    def times(self, other: Any) -> "MinMaxWeightTpl":
        other = self._operand(other)
        if not self._both_members(other):
            return self.no_weight()
        return self if self._value >= other._value else other

    def divide(self, other: Any, divide_type: DivideType = DivideType.ANY) -> "MinMaxWeightTpl":
        """Return a, the solution of max(x, b) = a; requires a >= b."""
        other = self._operand(other)
        if not self._both_members(other):
            return self.no_weight()
        if other._value == math.inf:
            raise WeightZeroDivisionError(f"{self.type_name()} division by Zero")
        if self._value < other._value:
            raise WeightContractError(
                f"{self.type_name()} division has no solution: {self} < {other}"
            )
        return self._clone()

    @classmethod
    def random(cls, rng: np.random.Generator, allow_zero: bool = True) -> "MinMaxWeightTpl":
        # Values in [-N, N], then One, then (optionally) Zero.
        span = 2 * NUM_RANDOM_WEIGHTS + 1
        n = int(rng.integers(span + (2 if allow_zero else 1)))
        if n == span:
            return cls.one()
        if n == span + 1:
            return cls.zero()
        return cls(n - NUM_RANDOM_WEIGHTS)


TropicalWeight = TropicalWeightTpl.with_dtype(np.float32)
TropicalWeight64 = TropicalWeightTpl.with_dtype(np.float64)
LogWeight = LogWeightTpl.with_dtype(np.float32)
LogWeight64 = LogWeightTpl.with_dtype(np.float64)
RealWeight = RealWeightTpl.with_dtype(np.float32)
RealWeight64 = RealWeightTpl.with_dtype(np.float64)
MinMaxWeight = MinMaxWeightTpl.with_dtype(np.float32)
MinMaxWeight64 = MinMaxWeightTpl.with_dtype(np.float64)
