# algorithm/ops.py
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Optional

from crckit.algorithm.params import ByteOrder, Width, check_bool, check_bytes_like, check_int
from crckit.algorithm.table import LookupTable, derive_table
from crckit.utils.bitops import reverse_bits

if TYPE_CHECKING:
    from crckit.algorithm.spec import AlgorithmSpec

logger = logging.getLogger(__name__)

# Input of the catalogue "check" value.
CHECK_INPUT = b"123456789"


# ============================
# Register transforms
# ============================

def initialize_register(init: int, reflect_input: bool, width) -> int:
    """
    Starting register value for `init` (normal form).

    A reflected-input algorithm runs its whole register mirrored, so the seed
    is mirrored once here.
    """
    width = Width.coerce(width)
    init = check_int("init", init, 0, width.mask)
    return reverse_bits(init, width.bits) if reflect_input else init


def reflect_conditionally(reflect_input: bool, reflect_output: bool, value: int, width) -> int:
    """Mirror `value` iff exactly one of reflect_input / reflect_output is set."""
    width = Width.coerce(width)
    value = check_int("value", value, 0, width.mask)
    if bool(reflect_input) != bool(reflect_output):
        return reverse_bits(value, width.bits)
    return value


def finalize(spec: "AlgorithmSpec", register: int) -> int:
    """Register -> externally visible checksum: conditional reflection, then xor_output."""
    value = reflect_conditionally(spec.reflect_input, spec.reflect_output, register, spec.width)
    return value ^ spec.xor_output


def to_endian_bytes(value: int, byte_order: Any, width) -> bytes:
    """
    Serialize `value` into exactly width/8 bytes.

    ByteOrder.NATIVE uses the host order and is not portable between machines.
    """
    width = Width.coerce(width)
    value = check_int("value", value, 0, width.mask)
    return value.to_bytes(width.nbytes, ByteOrder.coerce(byte_order).resolve())


# ============================
# Sarwate update
# ============================

def fold_bytes(reflect_input: bool, register: int, data: bytes, table: LookupTable) -> int:
    """
    Feed `data` through the register one byte at a time.

    reflected: r = T[(r ^ b) & 0xFF] ^ (r >> 8)
    normal:    r = T[((r >> (w-8)) ^ b) & 0xFF] ^ (r << 8)

    `table` must have been derived with the same reflect_input; the two
    directions are not interchangeable, so a mismatch is rejected.
    """
    check_bytes_like("fold_bytes", data)
    reflect_input = check_bool("reflect_input", reflect_input)
    if table.reflect_input != reflect_input:
        raise ValueError(
            f"fold_bytes: table derived for reflect_input={table.reflect_input} "
            f"used with reflect_input={reflect_input}"
        )

    width = table.width
    register = check_int("register", register, 0, width.mask)
    entries = table.entries

    if reflect_input:
        for b in data:
            register = entries[(register ^ b) & 0xFF] ^ (register >> 8)
    else:
        shift = width.bits - 8
        mask = width.mask
        for b in data:
            register = entries[((register >> shift) ^ b) & 0xFF] ^ ((register << 8) & mask)

    return register


# ============================
# Derived constants
# ============================

def derive_residue(spec: "AlgorithmSpec", table: Optional[LookupTable] = None) -> int:
    """
    Residue constant of `spec` (its own `residue` field is ignored).

    The empty message's checksum is serialized with the algorithm's byte order
    and fed back into a freshly initialized register; the register after
    conditional reflection (without xor_output) is the residue. Any codeword
    (message + its serialized checksum) leaves the same value when the byte
    order matches the register direction, see AlgorithmSpec.self_verifying.
    """
    if table is None:
        table = derive_table(spec.polynomial, spec.reflect_input, spec.width)

    register = initialize_register(spec.init, spec.reflect_input, spec.width)
    empty_checksum = finalize(spec, register)
    codeword = to_endian_bytes(empty_checksum, spec.byte_order, spec.width)
    register = fold_bytes(spec.reflect_input, register, codeword, table)
    residue = reflect_conditionally(spec.reflect_input, spec.reflect_output, register, spec.width)

    logger.debug(
        "derived residue 0x%x for %d-bit poly=0x%x byte_order=%s",
        residue, spec.width.bits, spec.polynomial, spec.byte_order.value,
    )
    return residue


def derive_check(spec: "AlgorithmSpec", table: Optional[LookupTable] = None) -> int:
    """Catalogue check value: the checksum of b"123456789"."""
    if table is None:
        table = derive_table(spec.polynomial, spec.reflect_input, spec.width)
    register = initialize_register(spec.init, spec.reflect_input, spec.width)
    register = fold_bytes(spec.reflect_input, register, CHECK_INPUT, table)
    return finalize(spec, register)
