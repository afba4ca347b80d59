"""
fstweight/runtime/adder.py

Running ⊕-reduction that stays accurate over many additions.

Adder(weight_type) picks the strategy for the kind:
- Real: Kahan compensated summation
- Log: Kahan compensated log-sum
- SignedLog: separate compensated log-sums of the positive and negative terms
- any other kind: plain plus

Accumulators run in double precision; sum() casts back into the kind.
"""

from __future__ import annotations

import math
from typing import Any, Optional

from fstweight.algebra.float_weight import LogWeightTpl, RealWeightTpl
from fstweight.algebra.signed_log import SignedLogWeightTpl
from fstweight.algebra.weight import Weight


def kahan_log_sum(a: float, b: float, c: float):
    """
    -log(e^-a + e^-b) for a <= b, with running compensation c.

    Returns:
        (sum, compensation)
    """
    y = -math.log1p(math.exp(-(b - a))) - c
    t = a + y
    return t, (t - a) - y


class _LogAccumulator:
    """Compensated log-sum of non-negative magnitudes; +inf is the empty sum."""

    __slots__ = ("total", "comp")

    def __init__(self, value: float = math.inf):
        self.total = value
        self.comp = 0.0

    def add(self, f: float) -> None:
        if f == math.inf:
            return
        if self.total == math.inf:
            self.total, self.comp = f, 0.0
        elif f > self.total:
            self.total, self.comp = kahan_log_sum(self.total, f, self.comp)
        else:
            self.total, self.comp = kahan_log_sum(f, self.total, self.comp)


class Adder:
    """
    Plain ⊕ accumulator; the base of the compensated strategies.

    Instantiating Adder itself returns the strategy for weight_type.
    """

    def __new__(cls, weight_type: type, weight: Optional[Any] = None):
        if cls is Adder:
            cls = _strategy(weight_type)
        return super().__new__(cls)

    def __init__(self, weight_type: type, weight: Optional[Any] = None):
        self.weight_type = weight_type
        self.reset(weight)

    def reset(self, weight: Optional[Any] = None) -> None:
        """Restart the reduction at weight (Zero by default)."""
        self._sum = self.weight_type.zero() if weight is None else self.weight_type.coerce(weight)

    def add(self, weight: Any) -> Weight:
        """Add weight and return the running sum."""
        self._sum = self._sum.plus(self.weight_type.coerce(weight))
        return self._sum

    def sum(self) -> Weight:
        return self._sum


class RealAdder(Adder):

    def reset(self, weight: Optional[Any] = None) -> None:
        start = self.weight_type.zero() if weight is None else self.weight_type.coerce(weight)
        self._bad = not start.member()
        self._total = float(start.value)
        self._comp = 0.0

    def add(self, weight: Any) -> Weight:
        w = self.weight_type.coerce(weight)
        if not w.member():
            self._bad = True
        elif not self._bad:
            y = float(w.value) - self._comp
            t = self._total + y
            self._comp = (t - self._total) - y
            self._total = t
        return self.sum()

    def sum(self) -> Weight:
        if self._bad:
            return self.weight_type.no_weight()
        return self.weight_type(self._total)


class LogAdder(Adder):

    def reset(self, weight: Optional[Any] = None) -> None:
        start = self.weight_type.zero() if weight is None else self.weight_type.coerce(weight)
        self._bad = not start.member()
        self._acc = _LogAccumulator(float(start.value))

    def add(self, weight: Any) -> Weight:
        w = self.weight_type.coerce(weight)
        if not w.member():
            self._bad = True
        elif not self._bad:
            self._acc.add(float(w.value))
        return self.sum()

    def sum(self) -> Weight:
        if self._bad:
            return self.weight_type.no_weight()
        return self.weight_type(self._acc.total)


class SignedLogAdder(Adder):

    def reset(self, weight: Optional[Any] = None) -> None:
        self._bad = False
        self._pos = _LogAccumulator()
        self._neg = _LogAccumulator()
        if weight is not None:
            self.add(weight)

    def add(self, weight: Any) -> Weight:
        w = self.weight_type.coerce(weight)
        if not w.member():
            self._bad = True
        elif not self._bad:
            (self._pos if w.sign > 0 else self._neg).add(float(w.value))
        return self.sum()

    def sum(self) -> Weight:
        if self._bad:
            return self.weight_type.no_weight()
        pos = self.weight_type(self._pos.total, 1)
        neg = self.weight_type(self._neg.total, -1)
        return pos.plus(neg)


def _strategy(weight_type: type) -> type:
    if issubclass(weight_type, RealWeightTpl):
        return RealAdder
    if issubclass(weight_type, LogWeightTpl):
        return LogAdder
    if issubclass(weight_type, SignedLogWeightTpl):
        return SignedLogAdder
    return Adder
