"""
Asset union.

Credit asset codes are fixed-width opaque fields, right-padded with zero
bytes: 4 bytes for alphanum4, 12 for alphanum12.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import ClassVar

from ..codec.reader import XdrReader
from ..codec.writer import XdrWriter
from ..runtime.errors import ErrorCode, XdrValueError
from .base import XdrType, unknown_arm
from .enums import AssetType
from .keys import AccountID

_ASSET_CODE = re.compile(r"\A[a-zA-Z0-9]+\Z")
_ASSET_CODE_BYTES = re.compile(rb"\A[a-zA-Z0-9]+\Z")


def _pad_code(code: str, width: int) -> bytes:
    if not _ASSET_CODE.match(code) or len(code) > width:
        raise XdrValueError(
            f"Invalid asset code {code!r}",
            ErrorCode.VALUE_OUT_OF_RANGE,
            {"code": code, "max_length": width},
        )
    return code.encode("ascii").ljust(width, b"\x00")


def _strip_code(raw: bytes) -> str:
    code = raw.rstrip(b"\x00")
    # zero bytes are only allowed as right padding
    if not _ASSET_CODE_BYTES.match(code):
        raise XdrValueError(
            f"Invalid asset code bytes {raw.hex()}",
            ErrorCode.VALUE_OUT_OF_RANGE,
            {"code": raw.hex(), "max_length": len(raw)},
        )
    return code.decode("ascii")


class Asset(XdrType):
    """
    Asset union.

    Variants: AssetNative, AssetCreditAlphanum4, AssetCreditAlphanum12.
    """

    @classmethod
    def unpack(cls, reader: XdrReader) -> "Asset":
        asset_type = reader.int32()
        if asset_type == AssetType.ASSET_TYPE_NATIVE:
            return AssetNative()
        if asset_type == AssetType.ASSET_TYPE_CREDIT_ALPHANUM4:
            code = _strip_code(reader.opaque_fixed(4))
            return AssetCreditAlphanum4(code, AccountID.unpack(reader))
        if asset_type == AssetType.ASSET_TYPE_CREDIT_ALPHANUM12:
            code = _strip_code(reader.opaque_fixed(12))
            return AssetCreditAlphanum12(code, AccountID.unpack(reader))
        raise unknown_arm("Asset", asset_type)

    @staticmethod
    def credit(code: str, issuer: str) -> "Asset":
        """
        Build a credit asset, picking alphanum4 or alphanum12 by code length.

        Args:
            code: Asset code, 1-12 alphanumeric characters
            issuer: Issuer "G..." account id
        """
        issuer_id = AccountID.from_strkey(issuer)
        if len(code) <= 4:
            return AssetCreditAlphanum4(code, issuer_id)
        return AssetCreditAlphanum12(code, issuer_id)


@dataclass(frozen=True)
class AssetNative(Asset):
    DISCRIMINANT: ClassVar[AssetType] = AssetType.ASSET_TYPE_NATIVE

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)


@dataclass(frozen=True)
class AssetCreditAlphanum4(Asset):
    code: str
    issuer: AccountID

    DISCRIMINANT: ClassVar[AssetType] = AssetType.ASSET_TYPE_CREDIT_ALPHANUM4

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        writer.opaque_fixed(_pad_code(self.code, 4), 4)
        self.issuer.pack(writer)


@dataclass(frozen=True)
class AssetCreditAlphanum12(Asset):
    code: str
    issuer: AccountID

    DISCRIMINANT: ClassVar[AssetType] = AssetType.ASSET_TYPE_CREDIT_ALPHANUM12

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        writer.opaque_fixed(_pad_code(self.code, 12), 12)
        self.issuer.pack(writer)
