"""
XDR Reader

Cursor-based canonical XDR decoding. Every read checks that enough bytes
remain before it consumes anything, so a failed read never leaves a partially
decoded value behind.
"""

import builtins
import struct
from typing import Callable, List, Optional, TypeVar

from ..runtime.errors import (
    BufferUnderrunError,
    ErrorCode,
    InvalidLengthError,
    XdrValueError,
)
from .writer import MAX_XDR_LENGTH, padding_length

T = TypeVar("T")


class XdrReader:
    """
    XDR reader over an immutable byte buffer.

    The reader is owned by a single decode call: position starts at 0 and
    every read advances it by the exact number of bytes consumed, padding
    included.
    """

    def __init__(self, buf: builtins.bytes):
        """
        Initialize reader with byte buffer.

        Args:
            buf: Byte buffer to read from
        """
        self._buf = builtins.bytes(buf)
        self._off = 0

    @property
    def position(self) -> int:
        """Current read offset."""
        return self._off

    @property
    def remaining(self) -> int:
        """Number of unread bytes."""
        return len(self._buf) - self._off

    @property
    def eof(self) -> builtins.bool:
        """
        Check if at end of buffer.

        Returns:
            True if at end of buffer
        """
        return self._off >= len(self._buf)

    def _require(self, n: int, what: str) -> None:
        if n > self.remaining:
            raise BufferUnderrunError(
                f"Unexpected end of XDR data reading {what}",
                {"needed": n, "remaining": self.remaining, "position": self._off},
            )

    def _take(self, n: int, what: str) -> builtins.bytes:
        self._require(n, what)
        out = self._buf[self._off: self._off + n]
        self._off += n
        return out

    def _unpack(self, fmt: str, size: int, what: str) -> int:
        return struct.unpack(fmt, self._take(size, what))[0]

    def int32(self) -> int:
        """Read signed 32-bit big-endian integer."""
        return self._unpack(">i", 4, "int32")

    def uint32(self) -> int:
        """Read unsigned 32-bit big-endian integer."""
        return self._unpack(">I", 4, "uint32")

    def int64(self) -> int:
        """Read signed 64-bit big-endian integer."""
        return self._unpack(">q", 8, "int64")

    def uint64(self) -> int:
        """Read unsigned 64-bit big-endian integer."""
        return self._unpack(">Q", 8, "uint64")

    def bool(self) -> builtins.bool:
        """
        Read boolean.

        Raises:
            XdrValueError: If the encoded value is not 0 or 1
        """
        self._require(4, "bool")
        value = struct.unpack(">I", self._buf[self._off: self._off + 4])[0]
        if value not in (0, 1):
            raise XdrValueError(
                f"Invalid XDR boolean value {value}",
                ErrorCode.INVALID_BOOLEAN,
                {"value": value, "position": self._off},
            )
        self._off += 4
        return value == 1

    def _padded(self, length: int, what: str) -> builtins.bytes:
        pad = padding_length(length)
        self._require(length + pad, what)
        data = self._buf[self._off: self._off + length]
        padding = self._buf[self._off + length: self._off + length + pad]
        if any(padding):
            raise XdrValueError(
                f"Non-zero padding after {what}",
                ErrorCode.INVALID_PADDING,
                {"position": self._off + length},
            )
        self._off += length + pad
        return data

    def opaque_fixed(self, length: int) -> builtins.bytes:
        """
        Read fixed-length opaque data.

        Args:
            length: Schema-defined length

        Returns:
            Exactly ``length`` bytes (padding consumed and verified)
        """
        return self._padded(length, "fixed opaque")

    def _length_prefix(self, max_length: int, what: str) -> int:
        self._require(4, what)
        length = struct.unpack(">I", self._buf[self._off: self._off + 4])[0]
        if length > max_length:
            raise InvalidLengthError(
                f"{what} length {length} exceeds maximum {max_length}",
                {"max_length": max_length, "actual": length},
            )
        # Check the whole body fits before consuming the prefix.
        self._require(4 + length + padding_length(length), what)
        self._off += 4
        return length

    def opaque_var(self, max_length: int = MAX_XDR_LENGTH) -> builtins.bytes:
        """
        Read variable-length opaque data.

        Args:
            max_length: Schema maximum length

        Returns:
            Opaque bytes without padding
        """
        length = self._length_prefix(max_length, "opaque")
        return self._padded(length, "opaque")

    def string(self, max_length: int = MAX_XDR_LENGTH) -> builtins.bytes:
        """
        Read XDR string.

        Returns raw bytes; XDR strings are not required to be valid UTF-8.
        """
        length = self._length_prefix(max_length, "string")
        return self._padded(length, "string")

    def optional(self, read: Callable[["XdrReader"], T]) -> Optional[T]:
        """Read optional value: presence flag followed by the value if present."""
        if self.bool():
            return read(self)
        return None

    def array_fixed(self, length: int, read: Callable[["XdrReader"], T]) -> List[T]:
        """Read fixed-length array (no count prefix)."""
        return [read(self) for _ in range(length)]

    def array_var(self, max_length: int, read: Callable[["XdrReader"], T],
                  min_element_size: int = 4) -> List[T]:
        """
        Read variable-length array with uint32 count prefix.

        Args:
            max_length: Schema maximum element count
            read: Callable decoding one element
            min_element_size: Smallest encoded size of an element

        Raises:
            InvalidLengthError: If the count exceeds max_length
            BufferUnderrunError: If the count cannot fit in the remaining bytes
        """
        self._require(4, "array count")
        count = struct.unpack(">I", self._buf[self._off: self._off + 4])[0]
        if count > max_length:
            raise InvalidLengthError(
                f"Array length {count} exceeds maximum {max_length}",
                {"max_length": max_length, "actual": count},
            )
        self._require(4 + count * min_element_size, "array")
        self._off += 4
        return [read(self) for _ in range(count)]

    def done(self) -> None:
        """
        Assert that the whole buffer has been consumed.

        Raises:
            XdrValueError: If unread bytes remain
        """
        if not self.eof:
            raise XdrValueError(
                f"{self.remaining} trailing bytes after XDR value",
                ErrorCode.TRAILING_BYTES,
                {"remaining": self.remaining, "position": self._off},
            )
