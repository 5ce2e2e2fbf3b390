# algorithm/table.py
from __future__ import annotations

import logging
from functools import lru_cache
from typing import Iterator, Tuple

import numpy as np

from crckit.algorithm.params import Width, check_bool, check_int
from crckit.utils.bitops import REVERSED_BYTES, reverse_bits, reverse_bits_array

logger = logging.getLogger(__name__)


class LookupTable:
    """
    Read-only 256-entry Sarwate table for one (polynomial, reflect_input, width).

    Entries are kept twice: as a non-writeable numpy array of width.dtype
    (for inspection / comparison) and as a tuple of Python ints, which is what
    fold_bytes() indexes in its inner loop.

    polynomial and reflect_input record what the table was derived from; a
    table is only valid for algorithms that share both (and the width).
    """
    __slots__ = ("_width", "_polynomial", "_reflect_input", "_array", "_entries")

    def __init__(self, entries, *, width, polynomial: int, reflect_input: bool):
        width = Width.coerce(width)
        raw = np.asarray(entries, dtype=object)
        if raw.shape != (256,):
            raise ValueError(f"lookup table must have exactly 256 entries, got shape {raw.shape}")
        values = tuple(int(x) for x in raw.tolist())
        if any(v < 0 or v > width.mask for v in values):
            raise ValueError(f"lookup table entries must fit in {width.bits} bits")
        arr = np.array(values, dtype=width.dtype)
        arr.flags.writeable = False

        self._width = width
        self._polynomial = check_int("polynomial", polynomial, 0, width.mask)
        self._reflect_input = check_bool("reflect_input", reflect_input)
        self._array = arr
        self._entries = values

    @property
    def width(self) -> Width:
        return self._width

    @property
    def polynomial(self) -> int:
        return self._polynomial

    @property
    def reflect_input(self) -> bool:
        return self._reflect_input

    @property
    def entries(self) -> Tuple[int, ...]:
        return self._entries

    def as_array(self) -> np.ndarray:
        """The entries as a read-only numpy array."""
        return self._array

    def __len__(self) -> int:
        return 256

    def __getitem__(self, index: int) -> int:
        return self._entries[index]

    def __iter__(self) -> Iterator[int]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LookupTable):
            return NotImplemented
        return (
            self._width == other._width
            and self._polynomial == other._polynomial
            and self._reflect_input == other._reflect_input
            and self._entries == other._entries
        )

    def __hash__(self) -> int:
        return hash((self._width, self._polynomial, self._reflect_input, self._entries))

    def __repr__(self) -> str:
        return (
            f"LookupTable(width={self._width.bits}, polynomial=0x{self._polynomial:x}, "
            f"reflect_input={self._reflect_input}, "
            f"entries=[0x{self._entries[0]:x}, 0x{self._entries[1]:x}, ...])"
        )


def derive_table(polynomial: int, reflect_input: bool, width) -> LookupTable:
    """
    Build the byte-wise lookup table for `polynomial` (normal form).

    Every entry is produced by the same LSB-first recurrence: 8 steps of
    "shift right, XOR the reflected polynomial if a 1 fell out". For
    reflect_input=False the byte index is mirrored going in and the entry is
    mirrored coming out, which turns the result into the MSB-first table.

    Results are memoized: specs that share (polynomial, reflect_input, width)
    get the same LookupTable object.
    """
    width = Width.coerce(width)
    polynomial = check_int("polynomial", polynomial, 0, width.mask)
    reflect_input = check_bool("reflect_input", reflect_input)
    return _derive_table(polynomial, reflect_input, width)


@lru_cache(maxsize=64)
def _derive_table(polynomial: int, reflect_input: bool, width: Width) -> LookupTable:
    one = width.scalar(1)
    reflected_poly = width.scalar(reverse_bits(polynomial, width.bits))

    index = np.arange(256) if reflect_input else np.asarray(REVERSED_BYTES)
    c = index.astype(width.dtype)

    # all 256 entries advance through the recurrence together
    for _ in range(8):
        shifted = c >> one
        c = np.where((c & one) != 0, shifted ^ reflected_poly, shifted)

    if not reflect_input:
        c = reverse_bits_array(c, width.bits)

    logger.debug(
        "derived %d-bit lookup table poly=0x%x reflect_input=%s",
        width.bits, polynomial, reflect_input,
    )
    return LookupTable(c, width=width, polynomial=polynomial, reflect_input=reflect_input)
