"""
RFC 4648 base-32 without padding.

StrKey strings never carry ``=`` padding, so encoding strips it and decoding
rejects it. Decoding is strict: only the upper-case alphabet is accepted,
lengths that no byte count can produce are rejected, and the unused low bits
of the last symbol must be zero so that every byte string has exactly one
textual form.
"""

import base64
import binascii
import re

from ..runtime.errors import (
    InvalidCharacterSetError,
    InvalidLengthError,
    NonZeroTrailingBitsError,
)

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

_SYMBOL_VALUES = {symbol: value for value, symbol in enumerate(ALPHABET)}
_VALID_TEXT = re.compile(r"\A[A-Z2-7]*\Z")

# Number of trailing symbols (len % 8) that no whole number of bytes produces.
_INVALID_REMAINDERS = frozenset((1, 3, 6))


def encode(data: bytes) -> str:
    """
    Encode bytes as unpadded base-32 text.

    Args:
        data: Bytes to encode

    Returns:
        Upper-case base-32 string without ``=`` padding
    """
    return base64.b32encode(bytes(data)).decode("ascii").rstrip("=")


def decode(text: str) -> bytes:
    """
    Decode unpadded base-32 text.

    Args:
        text: Base-32 string

    Returns:
        Decoded bytes

    Raises:
        InvalidCharacterSetError: If text contains characters outside the alphabet
        InvalidLengthError: If the length is congruent to 1, 3 or 6 mod 8
        NonZeroTrailingBitsError: If the unused bits of the final symbol are set
    """
    if not isinstance(text, str) or not _VALID_TEXT.match(text):
        raise InvalidCharacterSetError(
            "Encoded string contains characters outside the base-32 alphabet"
        )

    remainder = len(text) % 8
    if remainder in _INVALID_REMAINDERS:
        raise InvalidLengthError(
            f"Base-32 length {len(text)} is not a valid encoding length",
            {"length": len(text), "mod8": remainder},
        )

    unused_bits = (len(text) * 5) % 8
    if unused_bits and _SYMBOL_VALUES[text[-1]] & ((1 << unused_bits) - 1):
        raise NonZeroTrailingBitsError(
            "Unused trailing bits of the final base-32 symbol must be zero",
            {"unused_bits": unused_bits},
        )

    padded = text + "=" * (-len(text) % 8)
    try:
        return base64.b32decode(padded)
    except binascii.Error as e:
        raise InvalidCharacterSetError("Invalid base-32 string", cause=e)


__all__ = ["ALPHABET", "encode", "decode"]
