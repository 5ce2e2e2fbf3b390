# engine/checksum.py
from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Optional

from crckit.algorithm.ops import (
    CHECK_INPUT,
    finalize,
    fold_bytes,
    initialize_register,
    reflect_conditionally,
    to_endian_bytes,
)
from crckit.algorithm.params import check_bytes_like, check_int
from crckit.algorithm.spec import AlgorithmSpec
from crckit.algorithm.table import LookupTable, derive_table


@dataclass
class ChecksumEngine:
    """
    Running CRC accumulator.

    Usage:
        engine = ChecksumEngine.create(width=32, polynomial=0x04C11DB7, init=0xFFFFFFFF,
                                       reflect_input=True, reflect_output=True,
                                       xor_output=0xFFFFFFFF)
        engine.initialize().update(b"1234").update(b"56789").current_checksum()

    Nothing resets the register implicitly: call initialize() (or one of the
    one-shot helpers, which do it for you) before starting a new message.
    The table is shared read-only; only `register` changes.
    """
    algorithm: AlgorithmSpec
    table: Optional[LookupTable] = field(default=None, repr=False)
    register: Optional[int] = None

    def __post_init__(self):
        algo = self.algorithm
        if not isinstance(algo, AlgorithmSpec):
            raise TypeError("algorithm must be an AlgorithmSpec")

        if self.table is None:
            self.table = derive_table(algo.polynomial, algo.reflect_input, algo.width)
        elif (
            self.table.width != algo.width
            or self.table.polynomial != algo.polynomial
            or self.table.reflect_input != algo.reflect_input
        ):
            t = self.table
            raise ValueError(
                f"table (width={t.width.bits}, polynomial=0x{t.polynomial:x}, reflect_input={t.reflect_input}) "
                f"does not match algorithm (width={algo.width.bits}, polynomial=0x{algo.polynomial:x}, "
                f"reflect_input={algo.reflect_input})"
            )

        if self.register is None:
            self.register = initialize_register(algo.init, algo.reflect_input, algo.width)
        else:
            self.register = check_int("register", self.register, 0, algo.width.mask)

    # ----------------------------
    # Constructors
    # ----------------------------

    @classmethod
    def create(cls, **params: Any) -> "ChecksumEngine":
        """
        Validating constructor; takes the keyword arguments of AlgorithmSpec.create()
        (width, polynomial, init, reflect_input, reflect_output, xor_output, byte_order)
        and derives the residue.
        """
        return cls(AlgorithmSpec.create(**params))

    @classmethod
    def from_algorithm(cls, algorithm: AlgorithmSpec) -> "ChecksumEngine":
        """
        Build from a complete AlgorithmSpec without re-deriving its residue.

        The caller vouches for algorithm.residue; if it is wrong, verify() and
        verify_message() return wrong answers without raising.
        """
        return cls(algorithm)

    def copy(self) -> "ChecksumEngine":
        return dataclasses.replace(self)

    __copy__ = copy

    # ----------------------------
    # Streaming protocol
    # ----------------------------

    def initialize(self) -> "ChecksumEngine":
        algo = self.algorithm
        self.register = initialize_register(algo.init, algo.reflect_input, algo.width)
        return self

    def update(self, data: bytes) -> "ChecksumEngine":
        check_bytes_like("update", data)
        self.register = fold_bytes(self.algorithm.reflect_input, self.register, data, self.table)
        return self

    def current_checksum(self) -> int:
        """Finalized value of the register; the register itself is left untouched."""
        return finalize(self.algorithm, self.register)

    def current_checksum_bytes(self) -> bytes:
        algo = self.algorithm
        return to_endian_bytes(self.current_checksum(), algo.byte_order, algo.width)

    # ----------------------------
    # One-shot helpers
    # ----------------------------

    def checksum(self, data: bytes) -> int:
        return self.initialize().update(data).current_checksum()

    def checksum_as_bytes(self, data: bytes) -> bytes:
        return self.initialize().update(data).current_checksum_bytes()

    def check_value(self) -> int:
        """Checksum of b"123456789", comparable with published catalogue check values."""
        return self.checksum(CHECK_INPUT)

    # ----------------------------
    # Residue check
    # ----------------------------

    def verify(self) -> bool:
        """True if the current register holds the algorithm's residue."""
        algo = self.algorithm
        value = reflect_conditionally(algo.reflect_input, algo.reflect_output, self.register, algo.width)
        return value == algo.residue

    def verify_message(self, data: bytes) -> bool:
        """
        Check a codeword: message followed by its serialized checksum
        (as produced by checksum_as_bytes()). False means corruption.
        """
        return self.initialize().update(data).verify()
