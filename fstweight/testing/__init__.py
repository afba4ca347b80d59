"""
Testing module: random weight generation and the conformance tester.
"""

from fstweight.testing.generate import WeightGenerate
from fstweight.testing.tester import WeightTester

__all__ = [
    "WeightGenerate",
    "WeightTester",
]
