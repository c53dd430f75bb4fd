"""Transaction memo union."""

from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar

from ..codec.reader import XdrReader
from ..codec.writer import XdrWriter
from ..runtime.errors import InvalidLengthError
from .base import XdrType, unknown_arm
from .enums import MemoType

MEMO_TEXT_MAX_LENGTH = 28
MEMO_HASH_LENGTH = 32


class Memo(XdrType):
    """
    Memo union.

    Variants: MemoNone, MemoText, MemoId, MemoHash, MemoReturn.
    """

    @classmethod
    def unpack(cls, reader: XdrReader) -> "Memo":
        memo_type = reader.int32()
        if memo_type == MemoType.MEMO_NONE:
            return MemoNone()
        if memo_type == MemoType.MEMO_TEXT:
            return MemoText(reader.string(MEMO_TEXT_MAX_LENGTH))
        if memo_type == MemoType.MEMO_ID:
            return MemoId(reader.uint64())
        if memo_type == MemoType.MEMO_HASH:
            return MemoHash(reader.opaque_fixed(MEMO_HASH_LENGTH))
        if memo_type == MemoType.MEMO_RETURN:
            return MemoReturn(reader.opaque_fixed(MEMO_HASH_LENGTH))
        raise unknown_arm("Memo", memo_type)


@dataclass(frozen=True)
class MemoNone(Memo):
    DISCRIMINANT: ClassVar[MemoType] = MemoType.MEMO_NONE

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)


@dataclass(frozen=True)
class MemoText(Memo):
    """
    Text memo, at most 28 bytes.

    ``text`` is kept as bytes since the network does not require UTF-8; a
    ``str`` argument is UTF-8 encoded.
    """

    text: bytes

    DISCRIMINANT: ClassVar[MemoType] = MemoType.MEMO_TEXT

    def __post_init__(self):
        if isinstance(self.text, str):
            object.__setattr__(self, "text", self.text.encode("utf-8"))
        if len(self.text) > MEMO_TEXT_MAX_LENGTH:
            raise InvalidLengthError(
                f"Memo text is {len(self.text)} bytes, maximum is {MEMO_TEXT_MAX_LENGTH}",
                {"length": len(self.text), "max_length": MEMO_TEXT_MAX_LENGTH},
            )

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        writer.string(self.text, MEMO_TEXT_MAX_LENGTH)


@dataclass(frozen=True)
class MemoId(Memo):
    id: int

    DISCRIMINANT: ClassVar[MemoType] = MemoType.MEMO_ID

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        writer.uint64(self.id)


@dataclass(frozen=True)
class MemoHash(Memo):
    hash: bytes

    DISCRIMINANT: ClassVar[MemoType] = MemoType.MEMO_HASH

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        writer.opaque_fixed(self.hash, MEMO_HASH_LENGTH)


@dataclass(frozen=True)
class MemoReturn(Memo):
    ret_hash: bytes

    DISCRIMINANT: ClassVar[MemoType] = MemoType.MEMO_RETURN

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        writer.opaque_fixed(self.ret_hash, MEMO_HASH_LENGTH)
