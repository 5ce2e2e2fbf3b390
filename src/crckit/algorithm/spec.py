# algorithm/spec.py
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, Optional

from crckit.algorithm.ops import derive_residue
from crckit.algorithm.params import ByteOrder, Width, check_bool, check_int


@dataclass(frozen=True)
class AlgorithmSpec:
    """
    Parameters of one CRC variant, in the notation of the RevEng CRC catalogue.

    width:          register width (16/32/64/128)
    polynomial:     generator polynomial, normal (MSB-first) form, top bit implicit
    init:           register seed, normal form
    reflect_input:  input bytes processed LSB-first
    reflect_output: register reflected before output
    xor_output:     mask XORed into the final value
    residue:        register left by an error-free codeword, after conditional
                    reflection and before xor_output
    byte_order:     order of the serialized checksum (register math ignores it)

    Build specs with create(), which derives the residue. unchecked() (and the
    plain constructor) trust whatever residue they are given; a wrong one makes
    every verify() answer meaningless.
    """
    width: Width
    polynomial: int
    init: int = 0
    reflect_input: bool = False
    reflect_output: bool = False
    xor_output: int = 0
    residue: int = 0
    byte_order: ByteOrder = ByteOrder.BIG

    def __post_init__(self):
        width = Width.coerce(self.width)
        object.__setattr__(self, "width", width)
        for name in ("polynomial", "init", "xor_output", "residue"):
            object.__setattr__(self, name, check_int(name, getattr(self, name), 0, width.mask))
        for name in ("reflect_input", "reflect_output"):
            object.__setattr__(self, name, check_bool(name, getattr(self, name)))
        object.__setattr__(self, "byte_order", ByteOrder.coerce(self.byte_order))

    # ----------------------------
    # Constructors
    # ----------------------------

    @classmethod
    def create(
        cls,
        *,
        width: Any,
        polynomial: int,
        init: int = 0,
        reflect_input: bool = False,
        reflect_output: bool = False,
        xor_output: int = 0,
        byte_order: Optional[Any] = None,
    ) -> "AlgorithmSpec":
        """
        Validating constructor: the residue is derived, never taken from the caller.

        byte_order defaults to the direction the register shifts out:
        LITTLE for reflected input, BIG otherwise.
        """
        if byte_order is None:
            byte_order = ByteOrder.LITTLE if reflect_input else ByteOrder.BIG
        draft = cls(
            width=width,
            polynomial=polynomial,
            init=init,
            reflect_input=reflect_input,
            reflect_output=reflect_output,
            xor_output=xor_output,
            residue=0,
            byte_order=byte_order,
        )
        return dataclasses.replace(draft, residue=derive_residue(draft))

    @classmethod
    def unchecked(
        cls,
        *,
        width: Any,
        polynomial: int,
        init: int,
        reflect_input: bool,
        reflect_output: bool,
        xor_output: int,
        residue: int,
        byte_order: Any,
    ) -> "AlgorithmSpec":
        """Trust-the-caller constructor: `residue` is stored as given, not re-derived."""
        return cls(
            width=width,
            polynomial=polynomial,
            init=init,
            reflect_input=reflect_input,
            reflect_output=reflect_output,
            xor_output=xor_output,
            residue=residue,
            byte_order=byte_order,
        )

    def with_byte_order(self, byte_order: Any) -> "AlgorithmSpec":
        """Same algorithm serialized in another byte order (residue re-derived)."""
        return AlgorithmSpec.create(
            width=self.width,
            polynomial=self.polynomial,
            init=self.init,
            reflect_input=self.reflect_input,
            reflect_output=self.reflect_output,
            xor_output=self.xor_output,
            byte_order=byte_order,
        )

    # ----------------------------
    # Residue helpers
    # ----------------------------

    @property
    def self_verifying(self) -> bool:
        """
        True when message + checksum_as_bytes(message) leaves `residue` for
        every message, not only the empty one.

        That needs an uncrossed model (reflect_input == reflect_output) whose
        checksum bytes go out in the order the register shifts: little-endian
        for reflected input, big-endian otherwise.
        """
        if self.reflect_input != self.reflect_output:
            return False
        expected = "little" if self.reflect_input else "big"
        return self.byte_order.resolve() == expected

    def has_consistent_residue(self) -> bool:
        return self.residue == derive_residue(self)
