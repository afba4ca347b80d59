"""
Composite module: combinators building weight kinds out of other kinds.
"""

from fstweight.composite.tuple_weight import TupleWeight
from fstweight.composite.product import ProductWeight, product_weight
from fstweight.composite.power import PowerWeight, power_weight
from fstweight.composite.sparse_power import SparsePowerWeight, sparse_power_weight
from fstweight.composite.lexicographic import LexicographicWeight, lexicographic_weight
from fstweight.composite.union import (
    UnionWeight,
    UnionWeightOptions,
    natural_union_options,
    union_weight,
)
from fstweight.composite.gallic import (
    GallicType,
    GallicWeight,
    GeneralGallicWeight,
    gallic_weight,
)
from fstweight.composite.expectation import ExpectationWeight, expectation_weight

__all__ = [
    "TupleWeight",
    "ProductWeight",
    "product_weight",
    "PowerWeight",
    "power_weight",
    "SparsePowerWeight",
    "sparse_power_weight",
    "LexicographicWeight",
    "lexicographic_weight",
    "UnionWeight",
    "UnionWeightOptions",
    "natural_union_options",
    "union_weight",
    "GallicType",
    "GallicWeight",
    "GeneralGallicWeight",
    "gallic_weight",
    "ExpectationWeight",
    "expectation_weight",
]
