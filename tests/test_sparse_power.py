"""
Tests for the SparsePower combinator.
"""

import io

import pytest

from fstweight.algebra.float_weight import LogWeight, TropicalWeight
from fstweight.composite.power import power_weight
from fstweight.composite.sparse_power import sparse_power_weight
from fstweight.core.config import WeightConfig

SP = sparse_power_weight(TropicalWeight)


class TestSparsePowerGetSet:
    def test_default_seventeen(self):
        w = SP(17.0)
        w.set_value(10, 10.0)
        assert w.value(10) == 10.0
        assert w.value(0) == 17.0
        assert w.size() == 1
        w.set_value(10, 17.0)
        assert w.value(10) == 17.0
        assert w.size() == 0

    def test_size_tracks_entries(self):
        w = SP(0.0)
        w.set_value(5, 1.0)
        assert w.size() == 1
        w.set_value(2, 1.0)
        assert w.size() == 2
        w.set_value(5, 3.0)
        assert w.size() == 2
        w.set_value(5, 0.0)
        assert w.size() == 1
        w.set_value(99, 0.0)
        assert w.size() == 1

    def test_entries_sorted(self):
        w = SP(0.0, {7: 1.0, 3: 2.0, 5: 3.0})
        assert [index for index, _ in w.items()] == [3, 5, 7]

    def test_unset_index_returns_default(self):
        w = SP(4.0)
        assert w.value(123456789) == 4.0
        assert w.value(-5) == 4.0

    def test_set_default_value_drops_matching_entries(self):
        w = SP(0.0, {1: 2.0, 2: 3.0})
        w.set_default_value(2.0)
        assert w.size() == 1
        assert w.value(1) == 2.0
        assert w.value(2) == 3.0
        assert w.value(50) == 2.0


class TestSparsePowerAlgebra:
    def test_identities(self):
        assert SP.zero().default_value == TropicalWeight.zero()
        assert SP.one().default_value == TropicalWeight.one()
        assert SP.zero().size() == 0

    def test_pointwise_plus(self):
        a = SP(5.0, {1: 1.0})
        b = SP(4.0, {2: 2.0})
        s = a.plus(b)
        assert s.default_value == 4.0
        assert s.value(1) == 1.0
        assert s.value(2) == 2.0
        assert s.value(3) == 4.0

    def test_pointwise_times(self):
        a = SP(1.0, {1: 2.0})
        b = SP(3.0, {1: 4.0, 2: 5.0})
        p = a.times(b)
        assert p.default_value == 4.0
        assert p.value(1) == 6.0
        assert p.value(2) == 6.0
        assert p.size() == 2

    def test_result_entries_equal_to_default_are_dropped(self):
        a = SP(1.0, {1: 2.0})
        b = SP(2.0, {1: 1.0})
        assert a.times(b).size() == 0

    def test_zero_absorbs(self):
        a = SP(1.0, {1: 2.0})
        assert a.times(SP.zero()) == SP.zero()

    def test_broadcast(self):
        assert SP.broadcast(3.0).value(17) == 3.0

    def test_equality_and_hash(self):
        a = SP(1.0, {1: 2.0})
        b = SP(1.0)
        b.set_value(1, 2.0)
        assert a == b
        assert hash(a) == hash(b)

    def test_copy_is_independent(self):
        a = SP(1.0, {1: 2.0})
        c = a.copy()
        c.set_value(1, 1.0)
        assert a.size() == 1
        assert c.size() == 0

    def test_type_name(self):
        assert SP.type_name() == "sparse_power_tropical"
        assert sparse_power_weight(LogWeight).type_name() == "sparse_power_log"


class TestSparsePowerIO:
    def test_text(self):
        w = SP(17.0, {10: 10.0})
        assert w.to_string() == "17.0,10,10.0"
        assert w.to_string(WeightConfig(parentheses="()")) == "(17.0,10,10.0)"
        assert SP.from_string("17.0,10,10.0") == w
        assert SP.from_string("17.0") == SP(17.0)

    def test_malformed_text(self):
        assert not SP.from_string("17.0,x,1.0").member()
        assert not SP.from_string("17.0,10").member()

    def test_binary_layout(self):
        w = SP(17.0, {10: 10.0})
        stream = io.BytesIO()
        w.write(stream)
        assert len(stream.getvalue()) == 4 + 4 + 8 + 4
        stream.seek(0)
        assert SP.read(stream) == w

    def test_truncated_binary(self):
        w = SP(17.0, {10: 10.0})
        stream = io.BytesIO()
        w.write(stream)
        truncated = io.BytesIO(stream.getvalue()[:-2])
        assert not SP.read(truncated).member()


class TestSparsePowerOfPower:
    P2 = power_weight(TropicalWeight, 2)

    def test_unset_index_does_not_expose_default(self):
        S = sparse_power_weight(self.P2)
        w = S()
        w.value(7).set_value(0, 5.0)
        assert w.default_value == self.P2.zero()
        w.default_value.set_value(1, 5.0)
        assert w.value(7) == self.P2.zero()

    def test_entry_mutation_keeps_size(self):
        S = sparse_power_weight(self.P2)
        w = S(self.P2(1.0, 1.0))
        w.set_value(3, self.P2(1.0, 2.0))
        w.value(3).set_value(1, 1.0)
        assert w.size() == 1
        assert w.value(3) == self.P2(1.0, 2.0)

    def test_items_are_copies(self):
        S = sparse_power_weight(self.P2)
        w = S(self.P2.zero(), {3: self.P2(1.0, 2.0)})
        for _, value in w.items():
            value.set_value(0, 0.0)
        assert w.value(3) == self.P2(1.0, 2.0)

    def test_set_value_reduces_to_default(self):
        S = sparse_power_weight(self.P2)
        w = S(self.P2(1.0, 1.0))
        w.set_value(3, self.P2(1.0, 2.0))
        updated = w.value(3)
        updated.set_value(1, 1.0)
        w.set_value(3, updated)
        assert w.size() == 0
