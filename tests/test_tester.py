"""
Conformance runs of the generic weight tester over every weight kind.
"""

import numpy as np
import pytest

from fstweight.algebra.float_weight import (
    LogWeight,
    LogWeight64,
    LogWeightTpl,
    MinMaxWeight,
    MinMaxWeight64,
    RealWeight,
    RealWeight64,
    TropicalWeight,
    TropicalWeight64,
    TropicalWeightTpl,
)
from fstweight.algebra.set_weight import (
    BooleanSetWeight,
    IntersectUnionSetWeight,
    RestrictIntersectUnionSetWeight,
    UnionIntersectSetWeight,
)
from fstweight.algebra.signed_log import SignedLogWeight, SignedLogWeight64
from fstweight.algebra.string_weight import (
    LeftStringWeight,
    RestrictStringWeight,
    RightStringWeight,
)
from fstweight.algebra.weight import Properties
from fstweight.composite.expectation import expectation_weight
from fstweight.composite.gallic import GallicType, gallic_weight
from fstweight.composite.lexicographic import lexicographic_weight
from fstweight.composite.power import power_weight
from fstweight.composite.product import product_weight
from fstweight.composite.sparse_power import sparse_power_weight
from fstweight.composite.union import union_weight
from fstweight.core.config import WeightConfig
from fstweight.core.errors import WeightTestFailure
from fstweight.testing import WeightGenerate, WeightTester

REPEAT = 25

NESTED_PRODUCT = product_weight(product_weight(TropicalWeight, TropicalWeight), TropicalWeight)
NESTED_POWER = power_weight(NESTED_PRODUCT, 3)

PRIMITIVE_KINDS = [
    TropicalWeight,
    TropicalWeight64,
    TropicalWeightTpl.with_dtype(np.float16),
    LogWeight,
    LogWeight64,
    RealWeight,
    RealWeight64,
    MinMaxWeight,
    MinMaxWeight64,
    SignedLogWeight,
    SignedLogWeight64,
    LeftStringWeight,
    RightStringWeight,
    RestrictStringWeight,
    IntersectUnionSetWeight,
    UnionIntersectSetWeight,
    RestrictIntersectUnionSetWeight,
    BooleanSetWeight,
]

COMPOSITE_KINDS = [
    product_weight(TropicalWeight, LogWeight),
    product_weight(LeftStringWeight, TropicalWeight),
    NESTED_PRODUCT,
    product_weight(TropicalWeight, product_weight(SignedLogWeight, RealWeight)),
    power_weight(TropicalWeight, 3),
    power_weight(LogWeight64, 2),
    sparse_power_weight(TropicalWeight),
    sparse_power_weight(LogWeight),
    lexicographic_weight(TropicalWeight, TropicalWeight),
    lexicographic_weight(TropicalWeight, MinMaxWeight),
    union_weight(TropicalWeight),
    gallic_weight(TropicalWeight, GallicType.LEFT),
    gallic_weight(TropicalWeight, GallicType.RIGHT),
    gallic_weight(TropicalWeight, GallicType.RESTRICT),
    gallic_weight(TropicalWeight, GallicType.GENERAL),
    gallic_weight(LogWeight, GallicType.GENERAL),
    expectation_weight(LogWeight, LogWeight),
    expectation_weight(RealWeight, RealWeight),
    expectation_weight(LogWeight, sparse_power_weight(LogWeight)),
    expectation_weight(RealWeight, power_weight(RealWeight, 2)),
    NESTED_POWER,
    sparse_power_weight(NESTED_POWER),
]

CONFIGS = [
    WeightConfig(),
    WeightConfig(parentheses="()"),
    WeightConfig(separator=";", parentheses="[]"),
]


def _kind_id(kind):
    return kind.type_name()


def _config_id(config):
    return f"sep{config.separator}paren{config.parentheses or 'none'}"


class TestPrimitiveConformance:
    @pytest.mark.parametrize("kind", PRIMITIVE_KINDS, ids=_kind_id)
    def test_kind(self, kind):
        WeightTester(kind, WeightGenerate(kind)).test(REPEAT)

    @pytest.mark.parametrize("kind", [TropicalWeight, SignedLogWeight, LeftStringWeight], ids=_kind_id)
    @pytest.mark.parametrize("config", CONFIGS, ids=_config_id)
    def test_configs(self, kind, config):
        WeightTester(kind).test(REPEAT, config)


class TestCompositeConformance:
    @pytest.mark.parametrize("kind", COMPOSITE_KINDS, ids=_kind_id)
    @pytest.mark.parametrize("config", CONFIGS, ids=_config_id)
    def test_kind(self, kind, config):
        WeightTester(kind, WeightGenerate(kind, seed=7)).test(REPEAT, config)

    def test_without_zero(self):
        kind = union_weight(TropicalWeight)
        WeightTester(kind, WeightGenerate(kind, allow_zero=False)).test(REPEAT)


class TestWeightGenerate:
    def test_reproducible(self):
        a = WeightGenerate(TropicalWeight, seed=11)
        b = WeightGenerate(TropicalWeight, seed=11)
        assert [a() for _ in range(20)] == [b() for _ in range(20)]

    def test_allow_zero(self):
        gen = WeightGenerate(TropicalWeight, allow_zero=False)
        assert all(gen() != TropicalWeight.zero() for _ in range(200))

    def test_zero_is_drawn(self):
        gen = WeightGenerate(TropicalWeight)
        assert any(gen() == TropicalWeight.zero() for _ in range(200))


class IdempotentLogWeight(LogWeightTpl):
    """Log weight that wrongly claims an idempotent plus."""
    __slots__ = ()
    dtype = np.dtype(np.float32)

    @classmethod
    def properties(cls):
        return LogWeight.properties() | Properties.IDEMPOTENT


class TestWeightTesterFailures:
    def test_false_property_is_reported(self):
        with pytest.raises(WeightTestFailure):
            WeightTester(IdempotentLogWeight).test(REPEAT)

    def test_failure_is_an_assertion_error(self):
        with pytest.raises(AssertionError):
            WeightTester(IdempotentLogWeight).test(REPEAT)
