"""
Stellar Binary Codec Module

Low-level building blocks shared by the StrKey and XDR layers.

Key components:
- base32.py: strict RFC 4648 base-32 without padding
- crc16.py: CRC16-XModem checksum appended to StrKey data
- writer.py: XDR writer (big-endian, 4-byte aligned)
- reader.py: XDR cursor reader with bounds checks before every read
- hashes.py: SHA-256 helpers
"""

from . import base32, crc16
from .hashes import sha256_bytes, sha256_hex
from .reader import XdrReader
from .writer import XdrWriter

__all__ = [
    "XdrReader",
    "XdrWriter",
    "base32",
    "crc16",
    "sha256_bytes",
    "sha256_hex",
]
