"""
Core module: errors, rendering configuration and the conversion registry.
"""

from fstweight.core.errors import WeightContractError, WeightTestFailure, WeightZeroDivisionError
from fstweight.core.config import (
    DEFAULT_CONFIG,
    WeightConfig,
    get_weight_config,
    resolve_config,
    set_weight_config,
)
from fstweight.core.registry import Conversion, ConversionRegistry

__all__ = [
    "WeightContractError",
    "WeightTestFailure",
    "WeightZeroDivisionError",
    "DEFAULT_CONFIG",
    "WeightConfig",
    "get_weight_config",
    "resolve_config",
    "set_weight_config",
    "Conversion",
    "ConversionRegistry",
]
