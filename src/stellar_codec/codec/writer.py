"""
XDR Writer

Implements canonical XDR (RFC 4506) encoding as used by the Stellar network.
All integers are big-endian; opaque data and strings are zero-padded to a
4-byte boundary.
"""

import struct
from typing import Callable, Optional, Sequence, TypeVar

from ..runtime.errors import ErrorCode, InvalidLengthError, XdrValueError

T = TypeVar("T")

MAX_XDR_LENGTH = 0xFFFFFFFF

_INT_RANGES = {
    "int32": (-(1 << 31), (1 << 31) - 1),
    "uint32": (0, (1 << 32) - 1),
    "int64": (-(1 << 63), (1 << 63) - 1),
    "uint64": (0, (1 << 64) - 1),
}


def padding_length(n: int) -> int:
    """Number of zero bytes needed to align n to 4 bytes."""
    return -n % 4


class XdrWriter:
    """
    XDR writer accumulating encoded bytes.

    Each method appends exactly the bytes the XDR standard defines for the
    value, including padding.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb = bytearray()

    def _check_range(self, kind: str, v: int) -> None:
        low, high = _INT_RANGES[kind]
        if isinstance(v, bool) or not isinstance(v, int) or not low <= v <= high:
            raise XdrValueError(
                f"Value {v!r} out of range for {kind}",
                ErrorCode.VALUE_OUT_OF_RANGE,
                {"type": kind, "min": low, "max": high},
            )

    def int32(self, v: int) -> None:
        """
        Write signed 32-bit integer.

        Args:
            v: Integer value in [-2^31, 2^31 - 1]
        """
        self._check_range("int32", v)
        self._bb.extend(struct.pack(">i", v))

    def uint32(self, v: int) -> None:
        """
        Write unsigned 32-bit integer.

        Args:
            v: Integer value in [0, 2^32 - 1]
        """
        self._check_range("uint32", v)
        self._bb.extend(struct.pack(">I", v))

    def int64(self, v: int) -> None:
        """
        Write signed 64-bit integer (XDR hyper).

        Args:
            v: Integer value in [-2^63, 2^63 - 1]
        """
        self._check_range("int64", v)
        self._bb.extend(struct.pack(">q", v))

    def uint64(self, v: int) -> None:
        """
        Write unsigned 64-bit integer (XDR unsigned hyper).

        Args:
            v: Integer value in [0, 2^64 - 1]
        """
        self._check_range("uint64", v)
        self._bb.extend(struct.pack(">Q", v))

    def bool(self, v: bool) -> None:
        """Write boolean as uint32 0 or 1."""
        self._bb.extend(struct.pack(">I", 1 if v else 0))

    def _pad(self, n: int) -> None:
        self._bb.extend(b"\x00" * padding_length(n))

    def opaque_fixed(self, v: bytes, length: int) -> None:
        """
        Write fixed-length opaque data without length prefix.

        Args:
            v: Bytes to write, must be exactly ``length`` bytes
            length: Schema-defined length

        Raises:
            InvalidLengthError: If v does not have the schema length
        """
        if len(v) != length:
            raise InvalidLengthError(
                f"Fixed opaque must be {length} bytes, got {len(v)}",
                {"expected": length, "actual": len(v)},
            )
        self._bb.extend(v)
        self._pad(length)

    def opaque_var(self, v: bytes, max_length: int = MAX_XDR_LENGTH) -> None:
        """
        Write variable-length opaque data with uint32 length prefix.

        Args:
            v: Bytes to write
            max_length: Schema maximum length

        Raises:
            InvalidLengthError: If v is longer than max_length
        """
        if len(v) > max_length:
            raise InvalidLengthError(
                f"Opaque length {len(v)} exceeds maximum {max_length}",
                {"max_length": max_length, "actual": len(v)},
            )
        self.uint32(len(v))
        self._bb.extend(v)
        self._pad(len(v))

    def string(self, v, max_length: int = MAX_XDR_LENGTH) -> None:
        """
        Write XDR string.

        Text is UTF-8 encoded; bytes are written as-is since XDR strings are
        byte sequences.

        Args:
            v: String or bytes value
            max_length: Schema maximum length in bytes
        """
        data = v.encode("utf-8") if isinstance(v, str) else bytes(v)
        self.opaque_var(data, max_length)

    def optional(self, v: Optional[T], write: Callable[["XdrWriter", T], None]) -> None:
        """
        Write optional value: presence flag followed by the value if present.

        Args:
            v: Value or None
            write: Callable writing a present value
        """
        if v is None:
            self.bool(False)
        else:
            self.bool(True)
            write(self, v)

    def array_fixed(self, items: Sequence[T], length: int,
                    write: Callable[["XdrWriter", T], None]) -> None:
        """Write fixed-length array (no count prefix)."""
        if len(items) != length:
            raise InvalidLengthError(
                f"Fixed array must have {length} elements, got {len(items)}",
                {"expected": length, "actual": len(items)},
            )
        for item in items:
            write(self, item)

    def array_var(self, items: Sequence[T], max_length: int,
                  write: Callable[["XdrWriter", T], None]) -> None:
        """Write variable-length array with uint32 count prefix."""
        if len(items) > max_length:
            raise InvalidLengthError(
                f"Array length {len(items)} exceeds maximum {max_length}",
                {"max_length": max_length, "actual": len(items)},
            )
        self.uint32(len(items))
        for item in items:
            write(self, item)

    def to_bytes(self) -> bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return bytes(self._bb)
