"""
Tests for the signed log weight.
"""

import io
import math

import numpy as np
import pytest

from fstweight.algebra.signed_log import (
    SignedLogWeight,
    SignedLogWeight64,
    SignedLogWeightTpl,
    minus,
)
from fstweight.core.config import WeightConfig
from fstweight.core.errors import WeightZeroDivisionError


def real_value(w):
    return w.sign * math.exp(-float(w.value))


class TestSignedLogWeight:
    def test_identities(self):
        assert SignedLogWeight.zero().sign == 1
        assert SignedLogWeight.zero().value == math.inf
        assert SignedLogWeight.one() == SignedLogWeight(0.0, 1)

    def test_zero_sign_is_normalized(self):
        assert SignedLogWeight(math.inf, -1) == SignedLogWeight.zero()

    def test_invalid_sign(self):
        with pytest.raises(ValueError):
            SignedLogWeight(1.0, 0)

    def test_plus_same_sign(self):
        w = SignedLogWeight64(0.0).plus(SignedLogWeight64(0.0))
        assert w.sign == 1
        assert float(w.value) == pytest.approx(-math.log(2.0))

    def test_plus_opposite_signs(self):
        a = SignedLogWeight64(1.0, 1)
        b = SignedLogWeight64(2.0, -1)
        w = a.plus(b)
        assert w.sign == 1
        assert real_value(w) == pytest.approx(math.exp(-1.0) - math.exp(-2.0))
        w = b.plus(a.negate())
        assert w.sign == -1
        assert real_value(w) == pytest.approx(-math.exp(-1.0) - math.exp(-2.0))

    def test_cancellation_gives_zero(self):
        a = SignedLogWeight(1.5, 1)
        assert a.plus(a.negate()) == SignedLogWeight.zero()
        assert minus(a, a) == SignedLogWeight.zero()

    def test_plus_large_magnitudes(self):
        a = SignedLogWeight64(-800.0, 1)
        b = SignedLogWeight64(-800.0 + math.log(2.0), -1)
        w = a.plus(b)
        assert w.sign == 1
        assert float(w.value) == pytest.approx(-800.0 + math.log(2.0))

    def test_cancellation_below_resolution(self):
        a = SignedLogWeight64(0.0, 1)
        b = SignedLogWeight64(1e-17, -1)
        assert a.plus(b) == SignedLogWeight64.zero()

    def test_times(self):
        w = SignedLogWeight(1.0, -1).times(SignedLogWeight(2.0, -1))
        assert w == SignedLogWeight(3.0, 1)
        assert SignedLogWeight(1.0, -1).times(SignedLogWeight.zero()) == SignedLogWeight.zero()

    def test_divide(self):
        w = SignedLogWeight(3.0, -1).divide(SignedLogWeight(1.0, 1))
        assert w == SignedLogWeight(2.0, -1)
        with pytest.raises(WeightZeroDivisionError):
            SignedLogWeight(3.0).divide(SignedLogWeight.zero())

    def test_approx_equal_requires_same_sign(self):
        assert SignedLogWeight(1.0, 1).approx_equal(SignedLogWeight(1.0001, 1))
        assert not SignedLogWeight(1.0, 1).approx_equal(SignedLogWeight(1.0, -1))

    def test_type_names(self):
        assert SignedLogWeight.type_name() == "signed_log"
        assert SignedLogWeight64.type_name() == "signed_log64"
        assert SignedLogWeightTpl.with_dtype(np.float64) is SignedLogWeight64

    def test_text(self):
        w = SignedLogWeight(2.0, -1)
        assert w.to_string() == "-1,2.0"
        assert w.to_string(WeightConfig(parentheses="()")) == "(-1,2.0)"
        assert SignedLogWeight.from_string("-1,2.0") == w
        assert SignedLogWeight.from_string("(-1,2.0)", WeightConfig(parentheses="()")) == w

    def test_malformed_text(self):
        assert not SignedLogWeight.from_string("2.0").member()
        assert not SignedLogWeight.from_string("0,2.0").member()
        assert not SignedLogWeight.from_string("-1,2.0", WeightConfig(parentheses="()")).member()

    def test_binary(self):
        stream = io.BytesIO()
        SignedLogWeight64(2.0, -1).write(stream)
        assert len(stream.getvalue()) == 16
        stream.seek(0)
        assert SignedLogWeight64.read(stream) == SignedLogWeight64(2.0, -1)
