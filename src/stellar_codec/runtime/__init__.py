"""Runtime helpers for the Stellar codec"""

from .errors import (
    ErrorCode,
    StellarCodecError,
    InvalidCharacterSetError,
    NonZeroTrailingBitsError,
    InvalidLengthError,
    VersionByteMismatchError,
    ChecksumMismatchError,
    PayloadTooLargeError,
    BufferUnderrunError,
    UnknownUnionArmError,
    XdrValueError,
    KeyPairError,
)

__all__ = [
    "ErrorCode",
    "StellarCodecError",
    "InvalidCharacterSetError",
    "NonZeroTrailingBitsError",
    "InvalidLengthError",
    "VersionByteMismatchError",
    "ChecksumMismatchError",
    "PayloadTooLargeError",
    "BufferUnderrunError",
    "UnknownUnionArmError",
    "XdrValueError",
    "KeyPairError",
]
