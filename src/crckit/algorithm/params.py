# algorithm/params.py
from __future__ import annotations

import enum
import sys
from typing import Any

import numpy as np


# ============================
# Register width
# ============================

class Width(enum.IntEnum):
    """
    Supported CRC register widths.

    The width is fixed when an algorithm is constructed; anything outside these
    four values is rejected instead of being truncated.
    """
    W16 = 16
    W32 = 32
    W64 = 64
    W128 = 128

    @property
    def bits(self) -> int:
        return int(self)

    @property
    def nbytes(self) -> int:
        return int(self) // 8

    @property
    def mask(self) -> int:
        return (1 << int(self)) - 1

    @property
    def dtype(self) -> np.dtype:
        # numpy has no 128-bit unsigned integer, so W128 tables hold Python ints
        return _DTYPES[self]

    def scalar(self, value: int):
        """`value` as a scalar that mixes with arrays of self.dtype without promotion."""
        if self is Width.W128:
            return int(value)
        return self.dtype.type(value)

    @classmethod
    def coerce(cls, value: Any) -> "Width":
        if isinstance(value, cls):
            return value
        if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
            raise TypeError(f"width must be int, got {type(value).__name__}")
        try:
            return cls(int(value))
        except ValueError:
            supported = "/".join(str(w.bits) for w in cls)
            raise ValueError(f"width={int(value)} is not supported; expected one of {supported}") from None


_DTYPES = {
    Width.W16: np.dtype(np.uint16),
    Width.W32: np.dtype(np.uint32),
    Width.W64: np.dtype(np.uint64),
    Width.W128: np.dtype(object),
}


# ============================
# Output byte order
# ============================

class ByteOrder(enum.Enum):
    """
    Byte order used when a checksum is serialized to bytes.

    NATIVE follows the host (sys.byteorder) and is therefore NOT portable:
    the same algorithm produces different bytes (and a different derived
    residue) on big- and little-endian machines. Prefer BIG or LITTLE.
    """
    BIG = "big"
    LITTLE = "little"
    NATIVE = "native"

    def resolve(self) -> str:
        """The concrete order as accepted by int.to_bytes()."""
        if self is ByteOrder.NATIVE:
            return sys.byteorder
        return self.value

    @classmethod
    def coerce(cls, value: Any) -> "ByteOrder":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.lower())
            except ValueError:
                raise ValueError(f"unknown byte_order {value!r}; expected big/little/native") from None
        raise TypeError(f"byte_order must be ByteOrder or str, got {type(value).__name__}")


# ============================
# Validation helpers
# ============================

def check_int(name: str, value: Any, lo: int, hi: int) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"{name} must be int")
    value = int(value)
    if not (lo <= value <= hi):
        raise ValueError(f"{name} out of range [0x{lo:x},0x{hi:x}]: 0x{value:x}")
    return value


def check_bool(name: str, value: Any) -> bool:
    if not isinstance(value, (bool, np.bool_)):
        raise TypeError(f"{name} must be bool")
    return bool(value)


def check_bytes_like(op: str, data: Any) -> None:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError(f"{op}: data must be bytes-like")
