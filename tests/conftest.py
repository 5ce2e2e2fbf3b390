from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List

CHECK_BYTES = b"123456789"


def repo_root() -> Path:
    """
    Find the repository root by walking upward until we find pyproject.toml.
    This is robust regardless of where tests live.
    """
    start = Path(__file__).resolve()
    for p in [start] + list(start.parents):
        if (p / "pyproject.toml").exists():
            return p
    raise RuntimeError("repo_root(): could not find pyproject.toml walking upward")


def sample_assets_dir() -> Path:
    """
    Committed sample data for tests.
    """
    return repo_root() / "tests" / "sample_assets"


def golden_tables() -> Dict[str, List[int]]:
    """Known-good 32-bit lookup tables (CRC-32C reflected, CRC-32 normal)."""
    return json.loads((sample_assets_dir() / "crc32_tables.json").read_text())


# Published parameter sets (RevEng CRC catalogue): name -> (params, check, residue)
CATALOGUE = {
    # 16-bit
    "CRC-16/ARC": (dict(width=16, polynomial=0x8005, init=0x0000, reflect_input=True, reflect_output=True, xor_output=0x0000), 0xBB3D, 0x0000),
    "CRC-16/DNP": (dict(width=16, polynomial=0x3D65, init=0x0000, reflect_input=True, reflect_output=True, xor_output=0xFFFF), 0xEA82, 0x66C5),
    "CRC-16/EN-13757": (dict(width=16, polynomial=0x3D65, init=0x0000, reflect_input=False, reflect_output=False, xor_output=0xFFFF), 0xC2B7, 0xA366),
    "CRC-16/GENIBUS": (dict(width=16, polynomial=0x1021, init=0xFFFF, reflect_input=False, reflect_output=False, xor_output=0xFFFF), 0xD64E, 0x1D0F),
    "CRC-16/IBM-3740": (dict(width=16, polynomial=0x1021, init=0xFFFF, reflect_input=False, reflect_output=False, xor_output=0x0000), 0x29B1, 0x0000),
    "CRC-16/IBM-SDLC": (dict(width=16, polynomial=0x1021, init=0xFFFF, reflect_input=True, reflect_output=True, xor_output=0xFFFF), 0x906E, 0xF0B8),
    "CRC-16/KERMIT": (dict(width=16, polynomial=0x1021, init=0x0000, reflect_input=True, reflect_output=True, xor_output=0x0000), 0x2189, 0x0000),
    "CRC-16/MODBUS": (dict(width=16, polynomial=0x8005, init=0xFFFF, reflect_input=True, reflect_output=True, xor_output=0x0000), 0x4B37, 0x0000),
    "CRC-16/USB": (dict(width=16, polynomial=0x8005, init=0xFFFF, reflect_input=True, reflect_output=True, xor_output=0xFFFF), 0xB4C8, 0xB001),
    "CRC-16/XMODEM": (dict(width=16, polynomial=0x1021, init=0x0000, reflect_input=False, reflect_output=False, xor_output=0x0000), 0x31C3, 0x0000),
    # 32-bit
    "CRC-32/AIXM": (dict(width=32, polynomial=0x814141AB, init=0x00000000, reflect_input=False, reflect_output=False, xor_output=0x00000000), 0x3010BF7F, 0x00000000),
    "CRC-32/AUTOSAR": (dict(width=32, polynomial=0xF4ACFB13, init=0xFFFFFFFF, reflect_input=True, reflect_output=True, xor_output=0xFFFFFFFF), 0x1697D06A, 0x904CDDBF),
    "CRC-32/BASE91-D": (dict(width=32, polynomial=0xA833982B, init=0xFFFFFFFF, reflect_input=True, reflect_output=True, xor_output=0xFFFFFFFF), 0x87315576, 0x45270551),
    "CRC-32/BZIP2": (dict(width=32, polynomial=0x04C11DB7, init=0xFFFFFFFF, reflect_input=False, reflect_output=False, xor_output=0xFFFFFFFF), 0xFC891918, 0xC704DD7B),
    "CRC-32/CD-ROM-EDC": (dict(width=32, polynomial=0x8001801B, init=0x00000000, reflect_input=True, reflect_output=True, xor_output=0x00000000), 0x6EC2EDC4, 0x00000000),
    "CRC-32/CKSUM": (dict(width=32, polynomial=0x04C11DB7, init=0x00000000, reflect_input=False, reflect_output=False, xor_output=0xFFFFFFFF), 0x765E7680, 0xC704DD7B),
    "CRC-32/ISCSI": (dict(width=32, polynomial=0x1EDC6F41, init=0xFFFFFFFF, reflect_input=True, reflect_output=True, xor_output=0xFFFFFFFF), 0xE3069283, 0xB798B438),
    "CRC-32/ISO-HDLC": (dict(width=32, polynomial=0x04C11DB7, init=0xFFFFFFFF, reflect_input=True, reflect_output=True, xor_output=0xFFFFFFFF), 0xCBF43926, 0xDEBB20E3),
    "CRC-32/JAMCRC": (dict(width=32, polynomial=0x04C11DB7, init=0xFFFFFFFF, reflect_input=True, reflect_output=True, xor_output=0x00000000), 0x340BC6D9, 0x00000000),
    "CRC-32/MEF": (dict(width=32, polynomial=0x741B8CD7, init=0xFFFFFFFF, reflect_input=True, reflect_output=True, xor_output=0x00000000), 0xD2C22F51, 0x00000000),
    "CRC-32/MPEG-2": (dict(width=32, polynomial=0x04C11DB7, init=0xFFFFFFFF, reflect_input=False, reflect_output=False, xor_output=0x00000000), 0x0376E6E7, 0x00000000),
    "CRC-32/XFER": (dict(width=32, polynomial=0x000000AF, init=0x00000000, reflect_input=False, reflect_output=False, xor_output=0x00000000), 0xBD0BE338, 0x00000000),
    # 64-bit
    "CRC-64/ECMA-182": (dict(width=64, polynomial=0x42F0E1EBA9EA3693, init=0x0, reflect_input=False, reflect_output=False, xor_output=0x0), 0x6C40DF5F0B497347, 0x0),
    "CRC-64/GO-ISO": (dict(width=64, polynomial=0x000000000000001B, init=0xFFFFFFFFFFFFFFFF, reflect_input=True, reflect_output=True, xor_output=0xFFFFFFFFFFFFFFFF), 0xB90956C775A41001, 0x5300000000000000),
    "CRC-64/MS": (dict(width=64, polynomial=0x259C84CBA6426349, init=0xFFFFFFFFFFFFFFFF, reflect_input=True, reflect_output=True, xor_output=0x0), 0x75D4B74F024ECEEA, 0x0),
    "CRC-64/REDIS": (dict(width=64, polynomial=0xAD93D23594C935A9, init=0x0, reflect_input=True, reflect_output=True, xor_output=0x0), 0xE9C6D914C4B8D9CA, 0x0),
    "CRC-64/WE": (dict(width=64, polynomial=0x42F0E1EBA9EA3693, init=0xFFFFFFFFFFFFFFFF, reflect_input=False, reflect_output=False, xor_output=0xFFFFFFFFFFFFFFFF), 0x62EC59E3F1A4F00A, 0xFCACBEBD5931A992),
    "CRC-64/XZ": (dict(width=64, polynomial=0x42F0E1EBA9EA3693, init=0xFFFFFFFFFFFFFFFF, reflect_input=True, reflect_output=True, xor_output=0xFFFFFFFFFFFFFFFF), 0x995DC9BBDF1939FA, 0x49958C9ABD7D353F),
}

# One synthetic parameter set per width and reflection combination, including the
# crossed models (reflect_input != reflect_output). The 128-bit polynomial has
# no catalogue entry; its results are cross-checked against reference_crc().
_POLYS = {
    16: 0x1021,
    32: 0x04C11DB7,
    64: 0x42F0E1EBA9EA3693,
    128: 0x0000000000000000_0000000000000087,
}


def synthetic_params() -> List[dict]:
    out = []
    for width, poly in _POLYS.items():
        mask = (1 << width) - 1
        seed = 0x0123456789ABCDEF0123456789ABCDEF & mask
        for refin in (False, True):
            for refout in (False, True):
                out.append(dict(
                    width=width,
                    polynomial=poly,
                    init=seed,
                    reflect_input=refin,
                    reflect_output=refout,
                    xor_output=mask ^ (seed >> 1),
                ))
    return out


def params_id(p: dict) -> str:
    return f"w{p['width']}-in{int(p['reflect_input'])}-out{int(p['reflect_output'])}"


def reference_crc(data: bytes, *, width: int, polynomial: int, init: int = 0,
                  reflect_input: bool = False, reflect_output: bool = False,
                  xor_output: int = 0) -> int:
    """
    Bit-at-a-time MSB-first CRC (Williams model), no table.
    Slow but obviously correct; used to cross-check the table-driven engine.
    """
    top = 1 << (width - 1)
    mask = (1 << width) - 1
    crc = init
    for b in data:
        if reflect_input:
            b = int(f"{b:08b}"[::-1], 2)
        crc ^= b << (width - 8)
        for _ in range(8):
            if crc & top:
                crc = ((crc << 1) ^ polynomial) & mask
            else:
                crc = (crc << 1) & mask
    if reflect_output:
        crc = int(f"{crc:0{width}b}"[::-1], 2)
    return crc ^ xor_output
