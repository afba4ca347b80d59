"""
fstweight/io/text.py

Text rendering of composite weights.

A composite renders as its elements joined by the configured separator,
bracketed when the configuration carries parentheses:

    parentheses="":    1,2,3
    parentheses="()":  (1,(2,3))

CompositeWeightReader walks one rendering element by element. Without
parentheses a composite reads its components straight from the enclosing
stream, so right- and left-nested fixed-arity composites parse unambiguously;
variable-length composites consume the remainder of the enclosing scope and
therefore must come last unless parentheses are configured.
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Union

from fstweight.core.config import WeightConfig


def join_composite(parts: Iterable[str], config: WeightConfig) -> str:
    """Render already-rendered elements as one composite."""
    body = config.separator.join(parts)
    if config.parentheses:
        return f"{config.open_paren}{body}{config.close_paren}"
    return body


def split_top_level(text: str, config: WeightConfig) -> Optional[List[str]]:
    """
    Split text on separators that are not nested inside parentheses.

    Returns:
        The stripped elements, or None if the parentheses are unbalanced
    """
    open_paren, close_paren = config.open_paren, config.close_paren
    parts: List[str] = []
    depth = 0
    start = 0
    for i, c in enumerate(text):
        if open_paren is not None and c == open_paren:
            depth += 1
        elif close_paren is not None and c == close_paren:
            depth -= 1
            if depth < 0:
                return None
        elif c == config.separator and depth == 0:
            parts.append(text[start:i].strip())
            start = i + 1
    if depth != 0:
        return None
    parts.append(text[start:].strip())
    return parts


class CompositeWeightReader:
    """
    Sequential reader over the top-level elements of a weight rendering.

    Attributes:
        config: Rendering configuration the text was written with
    """

    def __init__(self, text: str, config: WeightConfig):
        self.config = config
        self._elements = split_top_level(text, config)
        self._pos = 0

    @property
    def ok(self) -> bool:
        return self._elements is not None

    def done(self) -> bool:
        """True when every element has been consumed."""
        return self._elements is None or self._pos >= len(self._elements)

    def peek(self) -> Optional[str]:
        if self.done():
            return None
        return self._elements[self._pos]

    def read_element(self) -> Optional[str]:
        """Consume and return the next element, or None when exhausted."""
        token = self.peek()
        if token is not None:
            self._pos += 1
        return token

    def read_group(self) -> Optional["CompositeWeightReader"]:
        """
        Open the scope holding the components of the next composite.

        With parentheses configured the next element must be a bracketed
        group and a reader over its contents is returned. Without
        parentheses the components follow in this stream, so self is
        returned.
        """
        if not self.config.parentheses:
            return self
        token = self.read_element()
        if token is None or len(token) < 2:
            return None
        if token[0] != self.config.open_paren or token[-1] != self.config.close_paren:
            return None
        group = CompositeWeightReader(token[1:-1], self.config)
        return group if group.ok else None

    def close_group(self, group: "CompositeWeightReader") -> bool:
        """Check that a group opened by read_group was fully consumed."""
        return group is self or group.done()


TextSource = Union[str, CompositeWeightReader]
