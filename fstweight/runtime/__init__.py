"""
Runtime module: accumulators.
"""

from fstweight.runtime.adder import Adder, LogAdder, RealAdder, SignedLogAdder

__all__ = [
    "Adder",
    "LogAdder",
    "RealAdder",
    "SignedLogAdder",
]
