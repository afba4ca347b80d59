"""
fstweight: weighted semiring algebra

Weight kinds implementing pluggable semirings (Zero, One, Plus, Times and,
for some families, Divide), composite combinators that build larger semirings
out of smaller ones, conversions between kinds, a numerically stable
accumulator, and a conformance tester for semiring axioms and I/O.

Key components:
- algebra: The Weight base, primitive kernels (Tropical, Log, Real, MinMax,
  SignedLog), string and set weights, conversions
- composite: Product, Power, SparsePower, Lexicographic, Union, Gallic,
  Expectation
- io: Text and binary encodings
- runtime: Stable Adder
- testing: WeightGenerate and WeightTester
- core: Errors, rendering configuration, conversion registry
"""

__version__ = "1.0.0"

from fstweight.core.errors import WeightContractError, WeightTestFailure, WeightZeroDivisionError
from fstweight.core.config import WeightConfig, get_weight_config, set_weight_config
from fstweight.algebra.weight import (
    DivideType,
    Properties,
    Weight,
    approx_equal,
    divide,
    natural_less,
    plus,
    power,
    times,
)
from fstweight.algebra.float_weight import (
    LogWeight,
    LogWeight64,
    LogWeightTpl,
    MinMaxWeight,
    MinMaxWeight64,
    MinMaxWeightTpl,
    RealWeight,
    RealWeight64,
    RealWeightTpl,
    TropicalWeight,
    TropicalWeight64,
    TropicalWeightTpl,
)
from fstweight.algebra.signed_log import SignedLogWeight, SignedLogWeight64, SignedLogWeightTpl, minus
from fstweight.algebra.string_weight import (
    LeftStringWeight,
    RestrictStringWeight,
    RightStringWeight,
    StringType,
)
from fstweight.algebra.set_weight import (
    BooleanSetWeight,
    IntersectUnionSetWeight,
    RestrictIntersectUnionSetWeight,
    SetType,
    UnionIntersectSetWeight,
)
from fstweight.composite import (
    GallicType,
    UnionWeightOptions,
    expectation_weight,
    gallic_weight,
    lexicographic_weight,
    power_weight,
    product_weight,
    sparse_power_weight,
    union_weight,
)
from fstweight.algebra.convert import WeightConvert, convert, is_lossless
from fstweight.runtime.adder import Adder
from fstweight.testing import WeightGenerate, WeightTester

__all__ = [
    # Errors and configuration
    "WeightContractError",
    "WeightTestFailure",
    "WeightZeroDivisionError",
    "WeightConfig",
    "get_weight_config",
    "set_weight_config",
    # Capability set
    "DivideType",
    "Properties",
    "Weight",
    "approx_equal",
    "divide",
    "natural_less",
    "plus",
    "power",
    "times",
    # Primitive kernels
    "LogWeight",
    "LogWeight64",
    "LogWeightTpl",
    "MinMaxWeight",
    "MinMaxWeight64",
    "MinMaxWeightTpl",
    "RealWeight",
    "RealWeight64",
    "RealWeightTpl",
    "TropicalWeight",
    "TropicalWeight64",
    "TropicalWeightTpl",
    "SignedLogWeight",
    "SignedLogWeight64",
    "SignedLogWeightTpl",
    "minus",
    "LeftStringWeight",
    "RestrictStringWeight",
    "RightStringWeight",
    "StringType",
    "BooleanSetWeight",
    "IntersectUnionSetWeight",
    "RestrictIntersectUnionSetWeight",
    "SetType",
    "UnionIntersectSetWeight",
    # Composites
    "GallicType",
    "UnionWeightOptions",
    "expectation_weight",
    "gallic_weight",
    "lexicographic_weight",
    "power_weight",
    "product_weight",
    "sparse_power_weight",
    "union_weight",
    # Conversion, accumulation, testing
    "WeightConvert",
    "convert",
    "is_lossless",
    "Adder",
    "WeightGenerate",
    "WeightTester",
]
