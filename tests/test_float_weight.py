"""
Tests for the floating weight kernels.
"""

import io
import math

import numpy as np
import pytest

from fstweight.algebra.float_weight import (
    LogWeight,
    LogWeight64,
    LogWeightTpl,
    MinMaxWeight,
    RealWeight,
    RealWeight64,
    TropicalWeight,
    TropicalWeight64,
    TropicalWeightTpl,
    log_plus,
)
from fstweight.algebra.weight import (
    DivideType,
    Properties,
    approx_equal,
    divide,
    natural_less,
    plus,
    power,
    times,
)
from fstweight.core.errors import WeightContractError, WeightZeroDivisionError


class TestTropicalWeight:
    def test_identities(self):
        assert TropicalWeight.zero() == math.inf
        assert TropicalWeight.one() == 0.0
        assert TropicalWeight.zero().member()
        assert not TropicalWeight.no_weight().member()

    def test_plus_times(self):
        assert plus(TropicalWeight(3.0), TropicalWeight(5.0)) == 3.0
        assert times(TropicalWeight(3.0), TropicalWeight(5.0)) == 8.0
        assert plus(TropicalWeight(3.0), TropicalWeight.zero()) == 3.0
        assert times(TropicalWeight(3.0), TropicalWeight.zero()) == TropicalWeight.zero()

    def test_numbers_are_coerced(self):
        assert TropicalWeight(3.0).plus(5) == TropicalWeight(3.0)
        assert times(2, TropicalWeight(1.5)) == 3.5

    def test_divide(self):
        assert divide(TropicalWeight(8.0), TropicalWeight(3.0)) == 5.0
        assert divide(TropicalWeight.zero(), TropicalWeight(3.0)) == TropicalWeight.zero()
        with pytest.raises(WeightZeroDivisionError):
            divide(TropicalWeight(1.0), TropicalWeight.zero())

    def test_division_by_zero_is_a_zero_division_error(self):
        with pytest.raises(ZeroDivisionError):
            TropicalWeight(1.0).divide(TropicalWeight.zero(), DivideType.LEFT)

    def test_power(self):
        assert power(TropicalWeight(2.0), 3) == 6.0
        assert power(TropicalWeight(2.0), 0) == TropicalWeight.one()

    def test_properties(self):
        props = TropicalWeight.properties()
        assert props & Properties.SEMIRING == Properties.SEMIRING
        assert props & Properties.PATH
        assert props & Properties.IDEMPOTENT

    def test_natural_order(self):
        assert natural_less(TropicalWeight(1.0), TropicalWeight(2.0))
        assert not natural_less(TropicalWeight(2.0), TropicalWeight(1.0))
        assert not natural_less(TropicalWeight(2.0), TropicalWeight(2.0))

    def test_type_names(self):
        assert TropicalWeight.type_name() == "tropical"
        assert TropicalWeight64.type_name() == "tropical64"
        assert TropicalWeightTpl.with_dtype(np.float16).type_name() == "tropical16"

    def test_with_dtype_is_cached(self):
        assert TropicalWeightTpl.with_dtype(np.float64) is TropicalWeight64
        assert TropicalWeightTpl.with_dtype("float32") is TropicalWeight

    def test_template_cannot_be_instantiated(self):
        with pytest.raises(TypeError):
            TropicalWeightTpl(1.0)

    def test_non_float_dtype_rejected(self):
        with pytest.raises(TypeError):
            TropicalWeightTpl.with_dtype(np.int32)

    def test_mixing_kinds_raises(self):
        with pytest.raises(TypeError):
            TropicalWeight(1.0).plus(LogWeight(1.0))
        with pytest.raises(TypeError):
            TropicalWeight(1.0).plus(TropicalWeight64(1.0))

    def test_different_kinds_never_equal(self):
        assert TropicalWeight(1.0) != LogWeight(1.0)

    def test_negative_zero_is_canonical(self):
        w = TropicalWeight(-0.0)
        assert w == TropicalWeight(0.0)
        assert hash(w) == hash(TropicalWeight(0.0))
        assert w.to_string() == "0.0"


class TestLogWeight:
    def test_plus(self):
        assert float(plus(LogWeight(0.0), LogWeight(0.0))) == pytest.approx(-math.log(2.0), abs=1e-6)
        assert float(plus(LogWeight64(0.0), LogWeight64(0.0))) == pytest.approx(-0.693, abs=1e-3)

    def test_plus_with_zero(self):
        assert plus(LogWeight(2.0), LogWeight.zero()) == 2.0
        assert plus(LogWeight.zero(), LogWeight.zero()) == LogWeight.zero()

    def test_log_plus(self):
        assert log_plus(0.0, 0.0) == pytest.approx(-math.log(2.0))
        assert log_plus(math.inf, 2.5) == 2.5
        assert log_plus(2.5, math.inf) == 2.5
        assert log_plus(math.inf, math.inf) == math.inf
        assert log_plus(1000.0, 0.0) == pytest.approx(0.0)
        assert log_plus(-700.0, -700.0) == pytest.approx(-700.0 - math.log(2.0))

    def test_times(self):
        assert times(LogWeight(1.5), LogWeight(2.0)) == 3.5

    def test_plus_all(self):
        weights = [LogWeight64(v) for v in (1.0, 2.0, 3.0)]
        expected = -math.log(math.exp(-1.0) + math.exp(-2.0) + math.exp(-3.0))
        assert float(LogWeight64.plus_all(weights)) == pytest.approx(expected)
        assert LogWeight64.plus_all([]) == LogWeight64.zero()
        assert not LogWeight64.plus_all([LogWeight64.no_weight()]).member()

    def test_member(self):
        assert not LogWeight(-math.inf).member()
        assert LogWeight(math.inf).member()

    def test_not_idempotent(self):
        assert not LogWeight.properties() & Properties.IDEMPOTENT
        with pytest.raises(WeightContractError):
            natural_less(LogWeight(1.0), LogWeight(2.0))

    def test_type_names(self):
        assert LogWeight.type_name() == "log"
        assert LogWeight64.type_name() == "log64"
        assert LogWeightTpl.with_dtype(np.float64) is LogWeight64


class TestRealWeight:
    def test_identities(self):
        assert RealWeight.zero() == 0.0
        assert RealWeight.one() == 1.0

    def test_operations(self):
        assert plus(RealWeight(0.25), RealWeight(0.5)) == 0.75
        assert times(RealWeight(0.25), RealWeight(0.5)) == 0.125
        assert divide(RealWeight(1.0), RealWeight(4.0)) == 0.25

    def test_divide_by_zero(self):
        with pytest.raises(WeightZeroDivisionError):
            divide(RealWeight(1.0), RealWeight.zero())

    def test_member(self):
        assert not RealWeight(math.inf).member()
        assert not RealWeight(math.nan).member()

    def test_plus_all(self):
        assert RealWeight64.plus_all([RealWeight64(0.1)] * 10) == 1.0

    def test_type_names(self):
        assert RealWeight.type_name() == "real"
        assert RealWeight64.type_name() == "real64"


class TestMinMaxWeight:
    def test_identities(self):
        assert MinMaxWeight.zero() == math.inf
        assert MinMaxWeight.one() == -math.inf

    def test_operations(self):
        assert plus(MinMaxWeight(2.0), MinMaxWeight(5.0)) == 2.0
        assert times(MinMaxWeight(2.0), MinMaxWeight(5.0)) == 5.0

    def test_divide(self):
        assert divide(MinMaxWeight(5.0), MinMaxWeight(2.0)) == 5.0
        with pytest.raises(WeightContractError):
            divide(MinMaxWeight(2.0), MinMaxWeight(5.0))
        with pytest.raises(WeightZeroDivisionError):
            divide(MinMaxWeight(2.0), MinMaxWeight.zero())

    def test_type_name(self):
        assert MinMaxWeight.type_name() == "minmax"


class TestFloatApprox:
    def test_approx_equal(self):
        assert approx_equal(TropicalWeight(1.0), TropicalWeight(1.0 + 1e-4))
        assert not approx_equal(TropicalWeight(1.0), TropicalWeight(1.1))
        assert TropicalWeight(1.0).approx_equal(TropicalWeight(1.05), delta=0.1)

    def test_quantize(self):
        assert TropicalWeight64(1.0001).quantize() == 1.0
        assert TropicalWeight.zero().quantize() == TropicalWeight.zero()


class TestFloatText:
    def test_render(self):
        assert TropicalWeight(3.0).to_string() == "3.0"
        assert TropicalWeight.zero().to_string() == "Infinity"
        assert MinMaxWeight.one().to_string() == "-Infinity"
        assert TropicalWeight.no_weight().to_string() == "BadNumber"

    def test_parse(self):
        assert TropicalWeight.from_string("3.5") == 3.5
        assert TropicalWeight.from_string(" Infinity ") == TropicalWeight.zero()
        assert MinMaxWeight.from_string("-Infinity") == MinMaxWeight.one()

    def test_round_trip_keeps_precision(self):
        w = LogWeight(0.0).plus(LogWeight(0.0))
        assert LogWeight.from_string(w.to_string()) == w

    def test_malformed_text(self):
        assert not TropicalWeight.from_string("abc").member()
        assert not TropicalWeight.from_string("1.0,2.0").member()
        assert not TropicalWeight.from_string("").member()


class TestFloatBinary:
    def test_little_endian_encoding(self):
        stream = io.BytesIO()
        TropicalWeight(1.0).write(stream)
        assert stream.getvalue() == np.array([1.0], dtype="<f4").tobytes()
        stream = io.BytesIO()
        TropicalWeight64(1.0).write(stream)
        assert len(stream.getvalue()) == 8

    def test_round_trip(self):
        stream = io.BytesIO()
        TropicalWeight(2.5).write(stream)
        TropicalWeight.zero().write(stream)
        stream.seek(0)
        assert TropicalWeight.read(stream) == 2.5
        assert TropicalWeight.read(stream) == TropicalWeight.zero()

    def test_truncated_input(self):
        stream = io.BytesIO(b"\x00\x00")
        assert not TropicalWeight.read(stream).member()
