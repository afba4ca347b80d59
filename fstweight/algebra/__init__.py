"""
Algebra module: the weight capability set and the primitive weight kernels.
"""

from fstweight.algebra.weight import (
    COMPONENTWISE_PROPERTIES,
    DELTA,
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
    FloatWeightTpl,
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
from fstweight.algebra.signed_log import (
    SignedLogWeight,
    SignedLogWeight64,
    SignedLogWeightTpl,
    minus,
)
from fstweight.algebra.string_weight import (
    LeftStringWeight,
    RestrictStringWeight,
    RightStringWeight,
    StringType,
    StringWeight,
    string_less,
    string_weight_type,
)
from fstweight.algebra.set_weight import (
    BooleanSetWeight,
    IntersectUnionSetWeight,
    RestrictIntersectUnionSetWeight,
    SetType,
    SetWeight,
    UnionIntersectSetWeight,
    set_weight_type,
)

__all__ = [
    "COMPONENTWISE_PROPERTIES",
    "DELTA",
    "DivideType",
    "Properties",
    "Weight",
    "approx_equal",
    "divide",
    "natural_less",
    "plus",
    "power",
    "times",
    "FloatWeightTpl",
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
    "StringWeight",
    "string_less",
    "string_weight_type",
    "BooleanSetWeight",
    "IntersectUnionSetWeight",
    "RestrictIntersectUnionSetWeight",
    "SetType",
    "SetWeight",
    "UnionIntersectSetWeight",
    "set_weight_type",
]
