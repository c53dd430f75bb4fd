"""
Operations.

Only a core set of operation bodies is decodable: CreateAccount, Payment,
ManageData and BumpSequence. Any other operation type is rejected with
UnknownUnionArmError rather than skipped, since the body length is not
known without its schema.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, Optional

from ..codec.reader import XdrReader
from ..codec.writer import XdrWriter
from ..runtime.errors import InvalidLengthError
from .asset import Asset
from .base import XdrType, unknown_arm
from .enums import OperationType
from .keys import AccountID, MuxedAccount

DATA_NAME_MAX_LENGTH = 64
DATA_VALUE_MAX_LENGTH = 64


class OperationBody(XdrType):
    """
    Operation body union.

    Variants: CreateAccountOp, PaymentOp, ManageDataOp, BumpSequenceOp.
    """

    @classmethod
    def unpack(cls, reader: XdrReader) -> "OperationBody":
        op_type = reader.int32()
        if op_type == OperationType.CREATE_ACCOUNT:
            return CreateAccountOp(AccountID.unpack(reader), reader.int64())
        if op_type == OperationType.PAYMENT:
            destination = MuxedAccount.unpack(reader)
            asset = Asset.unpack(reader)
            return PaymentOp(destination, asset, reader.int64())
        if op_type == OperationType.MANAGE_DATA:
            name = reader.string(DATA_NAME_MAX_LENGTH)
            value = reader.optional(lambda r: r.opaque_var(DATA_VALUE_MAX_LENGTH))
            return ManageDataOp(name, value)
        if op_type == OperationType.BUMP_SEQUENCE:
            return BumpSequenceOp(reader.int64())
        raise unknown_arm("OperationBody", op_type)


@dataclass(frozen=True)
class CreateAccountOp(OperationBody):
    destination: AccountID
    starting_balance: int

    DISCRIMINANT: ClassVar[OperationType] = OperationType.CREATE_ACCOUNT

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        self.destination.pack(writer)
        writer.int64(self.starting_balance)


@dataclass(frozen=True)
class PaymentOp(OperationBody):
    destination: MuxedAccount
    asset: Asset
    amount: int

    DISCRIMINANT: ClassVar[OperationType] = OperationType.PAYMENT

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        self.destination.pack(writer)
        self.asset.pack(writer)
        writer.int64(self.amount)


@dataclass(frozen=True)
class ManageDataOp(OperationBody):
    """Set (``data_value`` given) or delete (``data_value`` None) an account data entry."""

    data_name: bytes
    data_value: Optional[bytes] = None

    DISCRIMINANT: ClassVar[OperationType] = OperationType.MANAGE_DATA

    def __post_init__(self):
        if isinstance(self.data_name, str):
            object.__setattr__(self, "data_name", self.data_name.encode("utf-8"))
        if not 0 < len(self.data_name) <= DATA_NAME_MAX_LENGTH:
            raise InvalidLengthError(
                f"Data name must be 1-{DATA_NAME_MAX_LENGTH} bytes, got {len(self.data_name)}",
                {"length": len(self.data_name)},
            )

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        writer.string(self.data_name, DATA_NAME_MAX_LENGTH)
        writer.optional(self.data_value, lambda w, v: w.opaque_var(v, DATA_VALUE_MAX_LENGTH))


@dataclass(frozen=True)
class BumpSequenceOp(OperationBody):
    bump_to: int

    DISCRIMINANT: ClassVar[OperationType] = OperationType.BUMP_SEQUENCE

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        writer.int64(self.bump_to)


@dataclass(frozen=True)
class Operation(XdrType):
    """Operation with an optional per-operation source account."""

    body: OperationBody
    source_account: Optional[MuxedAccount] = None

    def pack(self, writer: XdrWriter) -> None:
        writer.optional(self.source_account, lambda w, v: v.pack(w))
        self.body.pack(writer)

    @classmethod
    def unpack(cls, reader: XdrReader) -> "Operation":
        source_account = reader.optional(MuxedAccount.unpack)
        return cls(OperationBody.unpack(reader), source_account)
