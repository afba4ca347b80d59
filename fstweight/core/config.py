"""
fstweight/core/config.py

Text rendering configuration for weights.

A WeightConfig is threaded through every to_string/from_string call. When a
call does not pass one, the process-wide value installed with
set_weight_config() is used. The process-wide value is owned by the caller:
it is never reset implicitly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

# Characters that occur inside rendered tokens: digits, letters, label and
# float punctuation.
_TOKEN_PUNCTUATION = frozenset("_.-+")


def _in_tokens(c: str) -> bool:
    return c.isalnum() or c.isspace() or c in _TOKEN_PUNCTUATION


@dataclass(frozen=True)
class WeightConfig:
    """
    Rendering configuration for composite weights.

    Attributes:
        separator: Single character joining composite elements
        parentheses: Empty string, or a two-character open/close pair such
            as "()" that brackets every composite rendering
    """
    separator: str = ","
    parentheses: str = ""

    def __post_init__(self):
        if len(self.separator) != 1:
            raise ValueError(f"separator must be a single character, got {self.separator!r}")
        if _in_tokens(self.separator):
            raise ValueError(f"separator {self.separator!r} clashes with token characters")
        if self.parentheses and len(self.parentheses) != 2:
            raise ValueError(
                f"parentheses must be empty or an open/close pair, got {self.parentheses!r}"
            )
        if self.separator in self.parentheses:
            raise ValueError("separator must differ from the parentheses")
        if self.parentheses and (
            self.parentheses[0] == self.parentheses[1] or any(_in_tokens(c) for c in self.parentheses)
        ):
            raise ValueError(f"parentheses {self.parentheses!r} clash with token characters")

    @property
    def open_paren(self) -> Optional[str]:
        return self.parentheses[0] if self.parentheses else None

    @property
    def close_paren(self) -> Optional[str]:
        return self.parentheses[1] if self.parentheses else None

    def with_parentheses(self, parentheses: str = "()") -> "WeightConfig":
        """Return a copy of this config with the given bracket pair."""
        return WeightConfig(separator=self.separator, parentheses=parentheses)


DEFAULT_CONFIG = WeightConfig()

_current = DEFAULT_CONFIG


def get_weight_config() -> WeightConfig:
    """Return the process-wide rendering configuration."""
    return _current


def set_weight_config(config: WeightConfig) -> WeightConfig:
    """
    Install the process-wide rendering configuration.

    Returns:
        The previously installed configuration, so callers can restore it
    """
    global _current
    if not isinstance(config, WeightConfig):
        raise TypeError(f"expected WeightConfig, got {type(config).__name__}")
    previous = _current
    _current = config
    return previous


def resolve_config(config: Optional[WeightConfig]) -> WeightConfig:
    return _current if config is None else config
