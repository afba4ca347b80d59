"""
Tests for the Product and Power combinators.
"""

import io

import pytest

from fstweight.algebra.float_weight import LogWeight, RealWeight, TropicalWeight
from fstweight.algebra.string_weight import LeftStringWeight
from fstweight.algebra.weight import Properties
from fstweight.composite.power import power_weight
from fstweight.composite.product import product_weight
from fstweight.core.config import WeightConfig
from fstweight.core.errors import WeightContractError

PARENS = WeightConfig(parentheses="()")


class TestProductWeight:
    def test_factory_is_cached(self):
        assert product_weight(TropicalWeight, LogWeight) is product_weight(TropicalWeight, LogWeight)

    def test_componentwise(self):
        P = product_weight(TropicalWeight, RealWeight)
        a = P(1.0, 2.0)
        b = P(3.0, 4.0)
        assert a.plus(b) == P(1.0, 6.0)
        assert a.times(b) == P(4.0, 8.0)
        assert P(4.0, 8.0).divide(b) == a
        assert a.value1 == 1.0
        assert a.value2 == 2.0

    def test_identities(self):
        P = product_weight(TropicalWeight, RealWeight)
        assert P.zero() == P(TropicalWeight.zero(), RealWeight.zero())
        assert P.one() == P(0.0, 1.0)

    def test_wrong_arity(self):
        P = product_weight(TropicalWeight, RealWeight)
        with pytest.raises(WeightContractError):
            P(1.0)

    def test_properties_are_intersected(self):
        P = product_weight(TropicalWeight, LeftStringWeight)
        props = P.properties()
        assert props & Properties.LEFT_SEMIRING
        assert not props & Properties.RIGHT_SEMIRING
        assert not props & Properties.COMMUTATIVE
        assert not props & Properties.PATH

    def test_type_name(self):
        P = product_weight(TropicalWeight, LogWeight)
        assert P.type_name() == "tropical_X_log"
        assert product_weight(P, TropicalWeight).type_name() == "tropical_X_log_X_tropical"

    def test_reverse_type(self):
        P = product_weight(LeftStringWeight, TropicalWeight)
        r = P(LeftStringWeight([1, 2]), 3.0).reverse()
        assert r.type_name() == "right_string_X_tropical"
        assert r.value1.labels == (2, 1)

    def test_text(self):
        P = product_weight(TropicalWeight, LogWeight)
        w = P(1.0, 2.0)
        assert w.to_string() == "1.0,2.0"
        assert w.to_string(PARENS) == "(1.0,2.0)"
        assert P.from_string("1.0,2.0") == w
        assert P.from_string("(1.0,2.0)", PARENS) == w

    def test_nested_text(self):
        P = product_weight(TropicalWeight, LogWeight)
        Q = product_weight(P, TropicalWeight)
        w = Q(P(1.0, 2.0), 3.0)
        assert w.to_string() == "1.0,2.0,3.0"
        assert w.to_string(PARENS) == "((1.0,2.0),3.0)"
        assert Q.from_string("1.0,2.0,3.0") == w
        assert Q.from_string("((1.0,2.0),3.0)", PARENS) == w

    def test_malformed_text(self):
        P = product_weight(TropicalWeight, LogWeight)
        assert not P.from_string("1.0").member()
        assert not P.from_string("1.0,2.0,3.0").member()
        assert not P.from_string("(1.0,2.0", PARENS).member()

    def test_binary(self):
        P = product_weight(TropicalWeight, LeftStringWeight)
        w = P(1.0, LeftStringWeight([7]))
        stream = io.BytesIO()
        w.write(stream)
        assert len(stream.getvalue()) == 4 + 4 + 4
        stream.seek(0)
        assert P.read(stream) == w

    def test_copy_is_deep(self):
        P = product_weight(TropicalWeight, LogWeight)
        w = P(1.0, 2.0)
        c = w.copy()
        assert c == w
        assert c.value1 is not w.value1


class TestPowerWeight:
    def test_get_set_value(self):
        P = power_weight(TropicalWeight, 3)
        w = P.zero()
        w.set_value(1, 2.0)
        assert w.value(1) == 2.0
        assert w.value(0) == TropicalWeight.zero()
        with pytest.raises(WeightContractError):
            w.value(3)
        with pytest.raises(WeightContractError):
            w.set_value(-1, 1.0)

    def test_set_value_stores_a_copy(self):
        P = power_weight(TropicalWeight, 2)
        w = P.one()
        other = P.zero()
        w.set_value(0, other.value(0))
        assert w.value(0) == other.value(0)
        assert w.value(0) is not other.value(0)

    def test_componentwise(self):
        P = power_weight(TropicalWeight, 2)
        assert P(1.0, 5.0).plus(P(2.0, 3.0)) == P(1.0, 3.0)
        assert P(1.0, 5.0).times(P(2.0, 3.0)) == P(3.0, 8.0)

    def test_wrong_arity(self):
        P = power_weight(TropicalWeight, 3)
        with pytest.raises(WeightContractError):
            P(1.0, 2.0)
        with pytest.raises(WeightContractError):
            power_weight(TropicalWeight, 0)

    def test_broadcast(self):
        P = power_weight(LogWeight, 3)
        assert P.broadcast(2.0) == P(2.0, 2.0, 2.0)
        assert len(P.broadcast(2.0)) == 3

    def test_type_name(self):
        assert power_weight(TropicalWeight, 3).type_name() == "tropical_^3"

    def test_text(self):
        P = power_weight(TropicalWeight, 3)
        w = P(1.0, 2.0, 3.0)
        assert w.to_string() == "1.0,2.0,3.0"
        assert P.from_string("(1.0,2.0,3.0)", PARENS) == w


class TestNestedPowerIsolation:
    def test_power_of_power_value_is_a_copy(self):
        P2 = power_weight(TropicalWeight, 2)
        PP = power_weight(P2, 2)
        w = PP(P2(1.0, 2.0), P2(3.0, 4.0))
        w.value(0).set_value(0, 9.0)
        w.values[1].set_value(1, 9.0)
        assert w == PP(P2(1.0, 2.0), P2(3.0, 4.0))

    def test_product_component_is_a_copy(self):
        P2 = power_weight(TropicalWeight, 2)
        P = product_weight(P2, TropicalWeight)
        w = P(P2(1.0, 2.0), 3.0)
        w.value1.set_value(0, 7.0)
        assert w.value1 == P2(1.0, 2.0)

    def test_constructor_copies_components(self):
        P2 = power_weight(TropicalWeight, 2)
        PP = power_weight(P2, 2)
        inner = P2(1.0, 2.0)
        w = PP.broadcast(inner)
        inner.set_value(0, 5.0)
        assert w.value(0) == P2(1.0, 2.0)
        assert w.value(1) == P2(1.0, 2.0)
