"""
Stellar Codec Error Model

This module provides the error handling framework for the StrKey and XDR
codecs. Every failure carries a stable error code, a message and optional
structured details so callers can branch on the kind of failure.
"""

from __future__ import annotations
from typing import Optional, Dict, Any
from enum import IntEnum


class ErrorCode(IntEnum):
    """Codec error codes."""

    UNKNOWN = 1

    # StrKey / text encoding errors (100-199)
    INVALID_CHARACTER_SET = 100
    NON_ZERO_TRAILING_BITS = 101
    INVALID_LENGTH = 102
    VERSION_BYTE_MISMATCH = 103
    CHECKSUM_MISMATCH = 104
    PAYLOAD_TOO_LARGE = 105

    # XDR errors (200-299)
    BUFFER_UNDERRUN = 200
    UNKNOWN_UNION_ARM = 201
    INVALID_PADDING = 202
    INVALID_BOOLEAN = 203
    TRAILING_BYTES = 204
    VALUE_OUT_OF_RANGE = 205
    INVALID_BASE64 = 206

    # Key errors (300-399)
    INVALID_KEY = 300
    MISSING_SECRET = 301


class StellarCodecError(Exception):
    """
    Base class for all codec errors.

    Provides structured error information: a code identifying the kind of
    failure, a human readable message and optional details.
    """

    def __init__(self, message: str, code: ErrorCode = ErrorCode.UNKNOWN,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        """
        Initialize a codec error.

        Args:
            message: Error message
            code: Error code
            details: Additional error details
            cause: Underlying exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}
        self.cause = cause

    def __str__(self) -> str:
        """String representation of the error."""
        parts = [f"[{self.code.name}] {self.message}"]
        if self.details:
            parts.append(f"Details: {self.details}")
        if self.cause:
            parts.append(f"Caused by: {self.cause}")
        return " | ".join(parts)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        result = {
            "code": self.code.value,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        if self.cause:
            result["cause"] = str(self.cause)
        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'StellarCodecError':
        """Create error from dictionary representation."""
        code = ErrorCode(data.get("code", ErrorCode.UNKNOWN))
        message = data.get("message", "Unknown error")
        details = data.get("details")
        error_class = _ERROR_CLASSES.get(code, StellarCodecError)
        if error_class in (StellarCodecError, XdrValueError, KeyPairError):
            return error_class(message, code, details)
        return error_class(message, details)


class InvalidCharacterSetError(StellarCodecError):
    """Text contains characters outside the base-32 alphabet."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_CHARACTER_SET, details, cause)


class NonZeroTrailingBitsError(StellarCodecError):
    """Unused bits of the final base-32 symbol are not zero."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.NON_ZERO_TRAILING_BITS, details, cause)


class InvalidLengthError(StellarCodecError):
    """Encoded or decoded data has a length the format does not allow."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.INVALID_LENGTH, details, cause)


class VersionByteMismatchError(StellarCodecError):
    """StrKey version byte does not match the expected variant."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.VERSION_BYTE_MISMATCH, details, cause)


class ChecksumMismatchError(StellarCodecError):
    """StrKey CRC16 checksum does not match its contents."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.CHECKSUM_MISMATCH, details, cause)


class PayloadTooLargeError(StellarCodecError):
    """Signed payload exceeds the 64 byte protocol limit."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.PAYLOAD_TOO_LARGE, details, cause)


class BufferUnderrunError(StellarCodecError):
    """XDR decoding needs more bytes than remain in the buffer."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.BUFFER_UNDERRUN, details, cause)


class UnknownUnionArmError(StellarCodecError):
    """XDR union discriminant has no arm in the schema."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, ErrorCode.UNKNOWN_UNION_ARM, details, cause)


class XdrValueError(StellarCodecError):
    """Malformed XDR value (padding, booleans, ranges, base64, trailing data)."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.VALUE_OUT_OF_RANGE,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


class KeyPairError(StellarCodecError):
    """Key material errors."""

    def __init__(self, message: str, code: ErrorCode = ErrorCode.INVALID_KEY,
                 details: Optional[Dict[str, Any]] = None, cause: Optional[Exception] = None):
        super().__init__(message, code, details, cause)


_ERROR_CLASSES = {
    ErrorCode.INVALID_CHARACTER_SET: InvalidCharacterSetError,
    ErrorCode.NON_ZERO_TRAILING_BITS: NonZeroTrailingBitsError,
    ErrorCode.INVALID_LENGTH: InvalidLengthError,
    ErrorCode.VERSION_BYTE_MISMATCH: VersionByteMismatchError,
    ErrorCode.CHECKSUM_MISMATCH: ChecksumMismatchError,
    ErrorCode.PAYLOAD_TOO_LARGE: PayloadTooLargeError,
    ErrorCode.BUFFER_UNDERRUN: BufferUnderrunError,
    ErrorCode.UNKNOWN_UNION_ARM: UnknownUnionArmError,
    ErrorCode.INVALID_PADDING: XdrValueError,
    ErrorCode.INVALID_BOOLEAN: XdrValueError,
    ErrorCode.TRAILING_BYTES: XdrValueError,
    ErrorCode.VALUE_OUT_OF_RANGE: XdrValueError,
    ErrorCode.INVALID_BASE64: XdrValueError,
    ErrorCode.INVALID_KEY: KeyPairError,
    ErrorCode.MISSING_SECRET: KeyPairError,
}


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
