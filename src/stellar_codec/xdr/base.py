"""
Shared plumbing for typed XDR structures.

Every structure implements ``pack(writer)`` and ``unpack(reader)``; this
base derives the byte and base64 helpers from them.
"""

from __future__ import annotations
import base64
import binascii
import logging
from abc import ABC, abstractmethod
from typing import Type, TypeVar

from ..codec.reader import XdrReader
from ..codec.writer import XdrWriter
from ..runtime.errors import ErrorCode, UnknownUnionArmError, XdrValueError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="XdrType")


class XdrType(ABC):
    """Base adding byte/base64 conversions on top of pack/unpack."""

    @abstractmethod
    def pack(self, writer: XdrWriter) -> None:
        """Write the XDR encoding of this value."""
        pass

    @classmethod
    @abstractmethod
    def unpack(cls: Type[T], reader: XdrReader) -> T:
        """Read one value from the reader."""
        pass

    def to_xdr_bytes(self) -> bytes:
        """Encode to XDR bytes."""
        writer = XdrWriter()
        self.pack(writer)
        return writer.to_bytes()

    @classmethod
    def from_xdr_bytes(cls: Type[T], data: bytes) -> T:
        """
        Decode from XDR bytes.

        The whole buffer must be consumed.

        Raises:
            StellarCodecError: If the data is malformed or has trailing bytes
        """
        reader = XdrReader(data)
        value = cls.unpack(reader)
        reader.done()
        return value

    def to_xdr_base64(self) -> str:
        """Encode to base64 XDR text."""
        return base64.b64encode(self.to_xdr_bytes()).decode("ascii")

    @classmethod
    def from_xdr_base64(cls: Type[T], text: str) -> T:
        """
        Decode from base64 XDR text.

        Raises:
            XdrValueError: If text is not strict base64
        """
        try:
            data = base64.b64decode(text, validate=True)
        except (binascii.Error, ValueError, TypeError) as e:
            logger.debug("Invalid base64 XDR for %s: %s", cls.__name__, e)
            raise XdrValueError(
                "Invalid base64-encoded XDR",
                ErrorCode.INVALID_BASE64,
                {"type": cls.__name__},
                cause=e,
            )
        return cls.from_xdr_bytes(data)


def unknown_arm(union: str, discriminant: int) -> UnknownUnionArmError:
    """Build the error raised for a discriminant with no arm in the schema."""
    return UnknownUnionArmError(
        f"Unknown {union} discriminant {discriminant}",
        {"union": union, "discriminant": discriminant},
    )
