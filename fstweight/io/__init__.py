"""
I/O module: text and binary encodings shared by all weight kinds.
"""

from fstweight.io.text import CompositeWeightReader, join_composite, split_top_level
from fstweight.io.binary import (
    read_int32,
    read_int64,
    read_labels,
    read_scalar,
    write_int32,
    write_int64,
    write_labels,
    write_scalar,
)

__all__ = [
    "CompositeWeightReader",
    "join_composite",
    "split_top_level",
    "read_int32",
    "read_int64",
    "read_labels",
    "read_scalar",
    "write_int32",
    "write_int64",
    "write_labels",
    "write_scalar",
]
