"""
fstweight/algebra/convert.py

Conversions between weight kinds.

    to_log = WeightConvert(TropicalWeight, LogWeight64)
    to_log(TropicalWeight(3.0))        # LogWeight64(3.0)

Built into DEFAULT_REGISTRY:
- any float family to itself at another precision (lossless when the target
  is at least as wide)
- Tropical <-> Log at any precision (same scalar reinterpreted)
- Product, Power and SparsePower componentwise, when the element
  conversions exist
- intersect-union <-> union-intersect sets (lossless, the set is kept as is)
- intersect-union / union-intersect sets -> boolean sets (lossy, one way)
"""

from __future__ import annotations

from typing import Any, Optional

import numpy as np

from fstweight.algebra.float_weight import FloatWeightTpl, LogWeightTpl, TropicalWeightTpl
from fstweight.algebra.set_weight import (
    BooleanSetWeight,
    IntersectUnionSetWeight,
    SetWeight,
    UnionIntersectSetWeight,
)
from fstweight.algebra.signed_log import SignedLogWeightTpl
from fstweight.algebra.weight import Weight
from fstweight.composite.power import PowerWeight
from fstweight.composite.product import ProductWeight
from fstweight.composite.sparse_power import SparsePowerWeight
from fstweight.core.registry import Conversion, ConversionRegistry


def _float_template(kind: type) -> Optional[type]:
    if issubclass(kind, FloatWeightTpl) and "dtype" in vars(kind):
        return kind._template()
    if issubclass(kind, SignedLogWeightTpl) and "dtype" in vars(kind):
        return SignedLogWeightTpl
    return None


def _widening(source: type, target: type) -> bool:
    return np.dtype(target.dtype).itemsize >= np.dtype(source.dtype).itemsize


def float_precision_rule(registry: ConversionRegistry, source: type, target: type) -> Optional[Conversion]:
    """Same family, different precision."""
    family = _float_template(source)
    if family is None or family is not _float_template(target):
        return None
    if family is SignedLogWeightTpl:
        return Conversion(fn=lambda w: target(w.value, w.sign), lossless=_widening(source, target))
    return Conversion(fn=lambda w: target(w.value), lossless=_widening(source, target))


def tropical_log_rule(registry: ConversionRegistry, source: type, target: type) -> Optional[Conversion]:
    """Tropical and Log share the scalar encoding of a negative log value."""
    families = {_float_template(source), _float_template(target)}
    if families != {TropicalWeightTpl, LogWeightTpl}:
        return None
    return Conversion(fn=lambda w: target(w.value), lossless=_widening(source, target))


def composite_rule(registry: ConversionRegistry, source: type, target: type) -> Optional[Conversion]:
    """Componentwise conversion of products and (sparse) powers."""
    if issubclass(source, PowerWeight) and issubclass(target, PowerWeight):
        if source.arity != target.arity:
            return None
        element = registry.find(source.element_type, target.element_type)
        if element is None:
            return None
        return Conversion(
            fn=lambda w: target._make(tuple(element.fn(v) for v in w.values)),
            lossless=element.lossless,
        )
    if issubclass(source, SparsePowerWeight) and issubclass(target, SparsePowerWeight):
        element = registry.find(source.element_type, target.element_type)
        if element is None:
            return None

        def convert_sparse(w):
            result = target.broadcast(element.fn(w.default_value))
            for index, value in w.items():
                result.set_value(index, element.fn(value))
            return result

        return Conversion(fn=convert_sparse, lossless=element.lossless)
    if (issubclass(source, ProductWeight) and issubclass(target, ProductWeight)
            and not issubclass(source, PowerWeight) and not issubclass(target, PowerWeight)):
        conversions = [
            registry.find(s, t) for s, t in zip(source.component_types, target.component_types)
        ]
        if any(c is None for c in conversions):
            return None
        return Conversion(
            fn=lambda w: target._make(tuple(c.fn(v) for c, v in zip(conversions, w.values))),
            lossless=all(c.lossless for c in conversions),
        )
    return None


def _set_to(target: type):
    def fn(w: SetWeight) -> SetWeight:
        if not w.member():
            return target.no_weight()
        if w.is_universal():
            return target.universal()
        return target._make(w.elements)
    return fn


def build_default_registry() -> ConversionRegistry:
    registry = ConversionRegistry()
    registry.add_rule(float_precision_rule)
    registry.add_rule(tropical_log_rule)
    registry.add_rule(composite_rule)
    registry.register(IntersectUnionSetWeight, UnionIntersectSetWeight,
                      _set_to(UnionIntersectSetWeight), lossless=True)
    registry.register(UnionIntersectSetWeight, IntersectUnionSetWeight,
                      _set_to(IntersectUnionSetWeight), lossless=True)
    registry.register(IntersectUnionSetWeight, BooleanSetWeight, _set_to(BooleanSetWeight))
    registry.register(UnionIntersectSetWeight, BooleanSetWeight, _set_to(BooleanSetWeight))
    return registry


DEFAULT_REGISTRY = build_default_registry()


class WeightConvert:
    """
    Callable conversion from one weight kind to another.

    Raises WeightContractError on construction if the direction is
    undefined.
    """

    def __init__(self, source: type, target: type, registry: Optional[ConversionRegistry] = None):
        self.source = source
        self.target = target
        self._conversion = (registry or DEFAULT_REGISTRY).lookup(source, target)

    @property
    def lossless(self) -> bool:
        return self._conversion.lossless

    def __call__(self, weight: Any) -> Weight:
        return self._conversion.fn(self.source.coerce(weight))


def convert(weight: Weight, target: type, registry: Optional[ConversionRegistry] = None) -> Weight:
    """Convert a weight to the target kind."""
    return WeightConvert(type(weight), target, registry)(weight)


def is_lossless(source: type, target: type, registry: Optional[ConversionRegistry] = None) -> bool:
    """True iff both directions are defined and declared lossless."""
    registry = registry or DEFAULT_REGISTRY
    forward = registry.find(source, target)
    backward = registry.find(target, source)
    return bool(forward and backward and forward.lossless and backward.lossless)
