# utils/bitops.py
from __future__ import annotations

import numpy as np


def reverse_bits(value: int, width: int) -> int:
    """
    Mirror the low `width` bits of `value` (bit 0 <-> bit width-1).

    `value` must fit in `width` bits.
    """
    if value < 0 or value >> width:
        raise ValueError(f"value 0x{value:x} does not fit in {width} bits")
    return int(f"{value:0{width}b}"[::-1], 2)


REVERSED_BYTES = tuple(reverse_bits(i, 8) for i in range(256))


def reverse_bits_array(values: np.ndarray, width: int) -> np.ndarray:
    """
    Vectorized reverse_bits() over every element of `values`.

    Works for the fixed unsigned dtypes and for object arrays of Python ints
    (used for widths numpy has no dtype for). The result keeps the input dtype.
    """
    v = np.asarray(values)
    one = 1 if v.dtype == object else v.dtype.type(1)
    out = np.zeros_like(v)
    for _ in range(width):
        out = (out << one) | (v & one)
        v = v >> one
    return out

