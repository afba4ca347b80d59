"""
fstweight/io/binary.py

Fixed-width little-endian binary encoding helpers.

Readers return None on truncated input; weight readers turn that into the
kind's no_weight() sentinel.
"""

from __future__ import annotations

from typing import BinaryIO, Optional

import numpy as np

INT32 = np.dtype("<i4")
INT64 = np.dtype("<i8")


def _read_exact(stream: BinaryIO, n: int) -> Optional[bytes]:
    data = stream.read(n)
    if data is None or len(data) != n:
        return None
    return data


def write_scalar(stream: BinaryIO, value, dtype: np.dtype) -> None:
    """Write one scalar in the little-endian layout of dtype."""
    stream.write(np.asarray(value, dtype=np.dtype(dtype).newbyteorder("<")).tobytes())


def read_scalar(stream: BinaryIO, dtype: np.dtype) -> Optional[np.generic]:
    """Read one scalar written by write_scalar, converted to native dtype."""
    dt = np.dtype(dtype)
    data = _read_exact(stream, dt.itemsize)
    if data is None:
        return None
    return np.frombuffer(data, dtype=dt.newbyteorder("<"))[0].astype(dt)


def write_int32(stream: BinaryIO, value: int) -> None:
    write_scalar(stream, value, INT32)


def read_int32(stream: BinaryIO) -> Optional[int]:
    value = read_scalar(stream, INT32)
    return None if value is None else int(value)


def write_int64(stream: BinaryIO, value: int) -> None:
    write_scalar(stream, value, INT64)


def read_int64(stream: BinaryIO) -> Optional[int]:
    value = read_scalar(stream, INT64)
    return None if value is None else int(value)


def write_labels(stream: BinaryIO, labels) -> None:
    """Write an int32 count followed by int32 labels."""
    write_int32(stream, len(labels))
    if labels:
        stream.write(np.asarray(labels, dtype=INT32).tobytes())


def read_labels(stream: BinaryIO) -> Optional[tuple]:
    n = read_int32(stream)
    if n is None or n < 0:
        return None
    data = _read_exact(stream, n * INT32.itemsize)
    if data is None:
        return None
    return tuple(int(x) for x in np.frombuffer(data, dtype=INT32))
