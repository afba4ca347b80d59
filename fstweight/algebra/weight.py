"""
fstweight/algebra/weight.py

The weight capability set.

A weight kind is a Weight subclass. It provides the semiring
(S, ⊕, ⊗, 0, 1):
- plus (⊕): semiring addition
- times (⊗): semiring multiplication
- zero (0): additive identity, absorbing under times
- one (1): multiplicative identity
- divide (optional): inverse of times on the declared side(s)

together with the invalid sentinel no_weight(), a type name unique per
family and precision, declared Properties, and text/binary I/O.

Weights are values: operators return new instances and never mutate their
operands. Equality (==) is exact on the canonical form; approx_equal()
compares within a family tolerance.
"""

from __future__ import annotations

import functools
import logging
from abc import ABC, abstractmethod
from enum import Enum, IntFlag
from typing import Any, BinaryIO, Iterable, Optional

import numpy as np

from fstweight.core.config import WeightConfig, resolve_config
from fstweight.core.errors import WeightContractError
from fstweight.io.text import CompositeWeightReader

logger = logging.getLogger(__name__)

# Default tolerance of approx_equal() and quantize().
DELTA = 1.0 / 1024.0

# Sizes used by the random generators of the built-in kinds.
NUM_RANDOM_WEIGHTS = 5
MAX_STRING_LENGTH = 5
ALPHABET_SIZE = 5
MAX_SET_SIZE = 4
SPARSE_POWER_RANK = 3
MAX_UNION_TERMS = 3


class Properties(IntFlag):
    """Algebraic properties a weight kind declares."""
    NONE = 0
    LEFT_SEMIRING = 0x1     # times distributes over plus from the left
    RIGHT_SEMIRING = 0x2    # times distributes over plus from the right
    SEMIRING = 0x3
    COMMUTATIVE = 0x4       # times is commutative
    IDEMPOTENT = 0x8        # plus(a, a) == a
    PATH = 0x10             # plus(a, b) is a or b


# Properties preserved by the componentwise combinators.
COMPONENTWISE_PROPERTIES = Properties.SEMIRING | Properties.COMMUTATIVE | Properties.IDEMPOTENT


class DivideType(Enum):
    """Side of a division: LEFT solves a ⊗ x = b, RIGHT solves x ⊗ a = b."""
    LEFT = 0
    RIGHT = 1
    ANY = 2


class Weight(ABC):
    """Abstract base of every weight kind."""

    __slots__ = ()

    # -- identities and metadata ---------------------------------------

    @classmethod
    @abstractmethod
    def zero(cls) -> "Weight": ...

    @classmethod
    @abstractmethod
    def one(cls) -> "Weight": ...

    @classmethod
    @abstractmethod
    def no_weight(cls) -> "Weight":
        """The invalid sentinel produced by failed reads."""

    @classmethod
    @abstractmethod
    def type_name(cls) -> str: ...

    @classmethod
    @abstractmethod
    def properties(cls) -> Properties: ...

    @classmethod
    def reverse_type(cls) -> type:
        """Kind of reverse(); the kind itself unless times is order sensitive."""
        return cls

    @classmethod
    def coerce(cls, value: Any) -> "Weight":
        """Convert an operand to this kind (implicit conversion)."""
        if type(value) is cls:
            return value
        raise TypeError(
            f"cannot combine {cls.type_name()} weight with {_describe(value)}"
        )

    @classmethod
    def plus_all(cls, weights: Iterable["Weight"]) -> "Weight":
        """⊕-reduce an iterable of weights of this kind."""
        return functools.reduce(plus, weights, cls.zero())

    # -- algebra ---------------------------------------------------------

    @abstractmethod
    def member(self) -> bool:
        """True iff this is a valid element of the semiring."""

    @abstractmethod
    def plus(self, other: Any) -> "Weight": ...

    @abstractmethod
    def times(self, other: Any) -> "Weight": ...

    def divide(self, other: Any, divide_type: DivideType = DivideType.ANY) -> "Weight":
        raise WeightContractError(f"{self.type_name()} weights do not support division")

    @abstractmethod
    def quantize(self, delta: float = DELTA) -> "Weight": ...

    @abstractmethod
    def reverse(self) -> "Weight": ...

    @abstractmethod
    def approx_equal(self, other: "Weight", delta: float = DELTA) -> bool: ...

    def _operand(self, other: Any) -> "Weight":
        if type(other) is type(self):
            return other
        return type(self).coerce(other)

    # -- identity, hashing and copies --------------------------------------

    @abstractmethod
    def _key(self) -> Any:
        """Hashable canonical form used by == and hash()."""

    @abstractmethod
    def _clone(self) -> "Weight":
        """Deep copy sharing no mutable state with self."""

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash((type(self).type_name(), self._key()))

    def copy(self) -> "Weight":
        return self._clone()

    def __copy__(self) -> "Weight":
        return self._clone()

    def __deepcopy__(self, memo) -> "Weight":
        return self._clone()

    # -- text I/O ----------------------------------------------------------

    @abstractmethod
    def _render(self, config: WeightConfig) -> str: ...

    @classmethod
    @abstractmethod
    def _read_text(cls, reader: CompositeWeightReader) -> Optional["Weight"]:
        """Consume this kind's rendering from reader; None if malformed."""

    def to_string(self, config: Optional[WeightConfig] = None) -> str:
        return self._render(resolve_config(config))

    @classmethod
    def from_string(cls, text: str, config: Optional[WeightConfig] = None) -> "Weight":
        """
        Parse a rendering produced by to_string().

        Malformed text yields no_weight() rather than raising.
        """
        reader = CompositeWeightReader(text.strip(), resolve_config(config))
        weight = cls._read_text(reader) if reader.ok else None
        if weight is None or not reader.done():
            logger.debug("malformed %s weight text: %r", cls.type_name(), text)
            return cls.no_weight()
        return weight

    def __str__(self) -> str:
        return self.to_string()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_string()!r})"

    # -- binary I/O --------------------------------------------------------

    @abstractmethod
    def write(self, stream: BinaryIO) -> None: ...

    @classmethod
    @abstractmethod
    def _read(cls, stream: BinaryIO) -> Optional["Weight"]: ...

    @classmethod
    def read(cls, stream: BinaryIO) -> "Weight":
        """Read a weight written by write(); truncated input yields no_weight()."""
        weight = cls._read(stream)
        if weight is None:
            logger.debug("truncated %s weight in binary stream", cls.type_name())
            return cls.no_weight()
        return weight

    # -- generation --------------------------------------------------------

    @classmethod
    @abstractmethod
    def random(cls, rng: np.random.Generator, allow_zero: bool = True) -> "Weight":
        """Draw a weight from rng; Zero is only drawn when allow_zero."""


def _describe(value: Any) -> str:
    if isinstance(value, Weight):
        return f"{type(value).type_name()} weight"
    return f"{type(value).__name__} value"


def _coerce_pair(w1: Any, w2: Any):
    if isinstance(w1, Weight):
        return w1, w1._operand(w2)
    if isinstance(w2, Weight):
        return type(w2).coerce(w1), w2
    raise TypeError(f"expected a weight operand, got {_describe(w1)} and {_describe(w2)}")


def plus(w1: Any, w2: Any) -> Weight:
    """w1 ⊕ w2."""
    a, b = _coerce_pair(w1, w2)
    return a.plus(b)


def times(w1: Any, w2: Any) -> Weight:
    """w1 ⊗ w2 (argument order matters for non-commutative kinds)."""
    a, b = _coerce_pair(w1, w2)
    return a.times(b)


def divide(w1: Any, w2: Any, divide_type: DivideType = DivideType.ANY) -> Weight:
    """w1 ⊘ w2 on the given side."""
    a, b = _coerce_pair(w1, w2)
    return a.divide(b, divide_type)


def power(w: Weight, n: int) -> Weight:
    """w ⊗ w ⊗ ... ⊗ w (n factors); One for n == 0."""
    if n < 0:
        raise ValueError("power requires n >= 0")
    result = type(w).one()
    for _ in range(n):
        result = result.times(w)
    return result


def approx_equal(w1: Any, w2: Any, delta: float = DELTA) -> bool:
    """Equality within the family tolerance delta."""
    a, b = _coerce_pair(w1, w2)
    return a.approx_equal(b, delta)


def natural_less(w1: Weight, w2: Weight) -> bool:
    """
    Natural order of an idempotent semiring: w1 < w2 iff w1 ⊕ w2 == w1 != w2.
    """
    a, b = _coerce_pair(w1, w2)
    if not type(a).properties() & Properties.IDEMPOTENT:
        raise WeightContractError(
            f"natural order is undefined for non-idempotent {type(a).type_name()} weights"
        )
    return a != b and a.plus(b) == a
