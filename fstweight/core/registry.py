"""
fstweight/core/registry.py

Registry of conversions between weight kinds.

Conversions are keyed by the ordered (source kind, target kind) pair. A pair
is resolved by, in order:
1. identity (source is target)
2. an explicitly registered conversion
3. the first inference rule that accepts the pair

Pairs that resolve to nothing are undefined; looking them up raises.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple

from fstweight.core.errors import WeightContractError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Conversion:
    """
    A resolved conversion.

    Attributes:
        fn: Maps a weight of the source kind to the target kind
        lossless: Whether converting back recovers the original weight
    """
    fn: Callable[[Any], Any]
    lossless: bool


ConversionRule = Callable[["ConversionRegistry", type, type], Optional[Conversion]]


def _identity(weight: Any) -> Any:
    return weight.copy()


@dataclass
class ConversionRegistry:
    """
    Registry of weight conversions.

    Attributes:
        entries: (source, target) -> explicitly registered conversion
        rules: Inference rules tried in order for unregistered pairs
    """
    entries: Dict[Tuple[type, type], Conversion] = field(default_factory=dict)
    rules: List[ConversionRule] = field(default_factory=list)

    def register(self, source: type, target: type, fn: Callable[[Any], Any], lossless: bool = False) -> None:
        """
        Register a conversion from source to target.

        Args:
            source: Weight kind converted from
            target: Weight kind converted to
            fn: The conversion function
            lossless: Declare that the reverse direction recovers the input
        """
        self.entries[(source, target)] = Conversion(fn=fn, lossless=lossless)
        logger.debug("registered conversion %s -> %s (lossless=%s)",
                     source.type_name(), target.type_name(), lossless)

    def add_rule(self, rule: ConversionRule) -> None:
        self.rules.append(rule)

    def find(self, source: type, target: type) -> Optional[Conversion]:
        """Resolve a pair, or None if no conversion is defined."""
        if source is target:
            return Conversion(fn=_identity, lossless=True)
        conversion = self.entries.get((source, target))
        if conversion is not None:
            return conversion
        for rule in self.rules:
            conversion = rule(self, source, target)
            if conversion is not None:
                return conversion
        return None

    def lookup(self, source: type, target: type) -> Conversion:
        """Resolve a pair; undefined pairs raise WeightContractError."""
        conversion = self.find(source, target)
        if conversion is None:
            raise WeightContractError(
                f"no conversion from {source.type_name()} to {target.type_name()}"
            )
        return conversion

    def copy(self) -> "ConversionRegistry":
        """An independent registry with the same entries and rules."""
        return ConversionRegistry(entries=dict(self.entries), rules=list(self.rules))
