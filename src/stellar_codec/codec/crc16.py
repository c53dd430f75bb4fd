"""
CRC16-XModem checksum used by StrKey.

Polynomial 0x1021, initial value 0x0000, no reflection, no final XOR. The
checksum is appended to StrKey data low byte first.
"""

import struct

import crcmod.predefined

_xmodem = crcmod.predefined.mkPredefinedCrcFun("xmodem")


def checksum(data: bytes) -> int:
    """
    Compute the CRC16-XModem checksum of data.

    Args:
        data: Bytes to checksum

    Returns:
        16-bit checksum value
    """
    return _xmodem(bytes(data))


def checksum_bytes(data: bytes) -> bytes:
    """Checksum of data as 2 little-endian bytes."""
    return struct.pack("<H", checksum(data))


__all__ = ["checksum", "checksum_bytes"]
