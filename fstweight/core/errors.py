"""
fstweight/core/errors.py

Error types raised by the weight algebra.

Contract violations are programming errors and are raised at the point of
violation. Malformed input never raises: readers return the kind's
``no_weight()`` sentinel instead.
"""

from __future__ import annotations


class WeightContractError(ValueError):
    """An algebraic precondition of a weight operation was violated."""


class WeightZeroDivisionError(WeightContractError, ZeroDivisionError):
    """Division by the Zero element of a semiring."""


class WeightTestFailure(AssertionError):
    """A semiring axiom or I/O round trip failed in the conformance tester."""
