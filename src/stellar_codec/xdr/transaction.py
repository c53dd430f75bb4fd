"""
Transactions, envelopes and signature payloads.

The transaction hash that signers sign is
``sha256(network_id || envelope_type || transaction)``, i.e. the SHA-256 of
the XDR-encoded TransactionSignaturePayload.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar, Optional, Sequence, Tuple, Union

from ..codec.hashes import sha256_bytes
from ..codec.reader import XdrReader
from ..codec.writer import XdrWriter
from .base import XdrType, unknown_arm
from .enums import EnvelopeType
from .keys import MuxedAccount, MuxedAccountEd25519
from .memo import Memo, MemoNone
from .operations import Operation
from .preconditions import (
    Preconditions,
    PreconditionsNone,
    PreconditionsTime,
    TimeBounds,
)

if TYPE_CHECKING:
    from ..network import Network

MAX_OPERATIONS = 100
MAX_SIGNATURES = 20
SIGNATURE_HINT_LENGTH = 4
SIGNATURE_MAX_LENGTH = 64

# optional source flag + operation type
_MIN_OPERATION_SIZE = 8
# hint + signature length prefix
_MIN_SIGNATURE_SIZE = 8


def _pack_ext(writer: XdrWriter) -> None:
    writer.int32(0)


def _unpack_ext(reader: XdrReader, union: str) -> None:
    v = reader.int32()
    if v != 0:
        raise unknown_arm(union, v)


@dataclass(frozen=True)
class DecoratedSignature(XdrType):
    """Signature with the 4-byte hint identifying the signing key."""

    hint: bytes
    signature: bytes

    def pack(self, writer: XdrWriter) -> None:
        writer.opaque_fixed(self.hint, SIGNATURE_HINT_LENGTH)
        writer.opaque_var(self.signature, SIGNATURE_MAX_LENGTH)

    @classmethod
    def unpack(cls, reader: XdrReader) -> "DecoratedSignature":
        return cls(reader.opaque_fixed(SIGNATURE_HINT_LENGTH), reader.opaque_var(SIGNATURE_MAX_LENGTH))


class _SignableTransaction(XdrType):
    ENVELOPE_TYPE: ClassVar[EnvelopeType]

    def signature_base(self, network: "Network") -> bytes:
        """XDR bytes of the signature payload for this transaction on a network."""
        return TransactionSignaturePayload(network.network_id, self).to_xdr_bytes()

    def hash(self, network: "Network") -> bytes:
        """Transaction hash (32 bytes) on the given network."""
        return sha256_bytes(self.signature_base(network))

    def hash_hex(self, network: "Network") -> str:
        return self.hash(network).hex()


@dataclass(frozen=True)
class Transaction(_SignableTransaction):
    """
    Transaction (envelope type TX).

    Args:
        source_account: Source account, plain or muxed
        fee: Total fee in stroops (uint32)
        seq_num: Sequence number (int64)
        operations: Up to 100 operations
        cond: Preconditions, defaults to none
        memo: Memo, defaults to none
    """

    source_account: MuxedAccount
    fee: int
    seq_num: int
    operations: Tuple[Operation, ...] = field(default_factory=tuple)
    cond: Preconditions = field(default_factory=PreconditionsNone)
    memo: Memo = field(default_factory=MemoNone)

    ENVELOPE_TYPE: ClassVar[EnvelopeType] = EnvelopeType.ENVELOPE_TYPE_TX

    def __post_init__(self):
        object.__setattr__(self, "operations", tuple(self.operations))

    def pack(self, writer: XdrWriter) -> None:
        self.source_account.pack(writer)
        writer.uint32(self.fee)
        writer.int64(self.seq_num)
        self.cond.pack(writer)
        self.memo.pack(writer)
        writer.array_var(self.operations, MAX_OPERATIONS, lambda w, v: v.pack(w))
        _pack_ext(writer)

    @classmethod
    def unpack(cls, reader: XdrReader) -> "Transaction":
        source_account = MuxedAccount.unpack(reader)
        fee = reader.uint32()
        seq_num = reader.int64()
        cond = Preconditions.unpack(reader)
        memo = Memo.unpack(reader)
        operations = reader.array_var(MAX_OPERATIONS, Operation.unpack, _MIN_OPERATION_SIZE)
        _unpack_ext(reader, "TransactionExt")
        return cls(source_account, fee, seq_num, operations, cond, memo)


@dataclass(frozen=True)
class TransactionV0(XdrType):
    """Pre-protocol-13 transaction with a bare ed25519 source and optional time bounds."""

    source_account_ed25519: bytes
    fee: int
    seq_num: int
    operations: Tuple[Operation, ...] = field(default_factory=tuple)
    time_bounds: Optional[TimeBounds] = None
    memo: Memo = field(default_factory=MemoNone)

    def __post_init__(self):
        object.__setattr__(self, "operations", tuple(self.operations))

    def pack(self, writer: XdrWriter) -> None:
        writer.opaque_fixed(self.source_account_ed25519, 32)
        writer.uint32(self.fee)
        writer.int64(self.seq_num)
        writer.optional(self.time_bounds, lambda w, v: v.pack(w))
        self.memo.pack(writer)
        writer.array_var(self.operations, MAX_OPERATIONS, lambda w, v: v.pack(w))
        _pack_ext(writer)

    @classmethod
    def unpack(cls, reader: XdrReader) -> "TransactionV0":
        source = reader.opaque_fixed(32)
        fee = reader.uint32()
        seq_num = reader.int64()
        time_bounds = reader.optional(TimeBounds.unpack)
        memo = Memo.unpack(reader)
        operations = reader.array_var(MAX_OPERATIONS, Operation.unpack, _MIN_OPERATION_SIZE)
        _unpack_ext(reader, "TransactionV0Ext")
        return cls(source, fee, seq_num, operations, time_bounds, memo)

    def to_transaction(self) -> Transaction:
        """
        Equivalent v1 transaction.

        V0 transactions are signed and hashed as their v1 form.
        """
        cond = PreconditionsTime(self.time_bounds) if self.time_bounds else PreconditionsNone()
        return Transaction(
            MuxedAccountEd25519(self.source_account_ed25519),
            self.fee,
            self.seq_num,
            self.operations,
            cond,
            self.memo,
        )

    def signature_base(self, network: "Network") -> bytes:
        return self.to_transaction().signature_base(network)

    def hash(self, network: "Network") -> bytes:
        return self.to_transaction().hash(network)


class TransactionEnvelope(XdrType):
    """
    Envelope union keyed by EnvelopeType.

    Variants: TransactionV0Envelope, TransactionV1Envelope,
    FeeBumpTransactionEnvelope. Each variant packs its own discriminant.
    """

    tx: Union[TransactionV0, Transaction, "FeeBumpTransaction"]
    signatures: Tuple[DecoratedSignature, ...]

    @classmethod
    def unpack(cls, reader: XdrReader) -> "TransactionEnvelope":
        envelope_type = reader.int32()
        if envelope_type == EnvelopeType.ENVELOPE_TYPE_TX_V0:
            return TransactionV0Envelope.unpack_body(reader)
        if envelope_type == EnvelopeType.ENVELOPE_TYPE_TX:
            return TransactionV1Envelope.unpack_body(reader)
        if envelope_type == EnvelopeType.ENVELOPE_TYPE_TX_FEE_BUMP:
            return FeeBumpTransactionEnvelope.unpack_body(reader)
        raise unknown_arm("TransactionEnvelope", envelope_type)

    def hash(self, network: "Network") -> bytes:
        return self.tx.hash(network)

    def hash_hex(self, network: "Network") -> str:
        return self.hash(network).hex()

    def signature_base(self, network: "Network") -> bytes:
        return self.tx.signature_base(network)


def _pack_signatures(writer: XdrWriter, signatures: Sequence[DecoratedSignature]) -> None:
    writer.array_var(signatures, MAX_SIGNATURES, lambda w, v: v.pack(w))


def _unpack_signatures(reader: XdrReader) -> Tuple[DecoratedSignature, ...]:
    return tuple(reader.array_var(MAX_SIGNATURES, DecoratedSignature.unpack, _MIN_SIGNATURE_SIZE))


@dataclass(frozen=True)
class TransactionV0Envelope(TransactionEnvelope):
    tx: TransactionV0
    signatures: Tuple[DecoratedSignature, ...] = field(default_factory=tuple)

    DISCRIMINANT: ClassVar[EnvelopeType] = EnvelopeType.ENVELOPE_TYPE_TX_V0

    def __post_init__(self):
        object.__setattr__(self, "signatures", tuple(self.signatures))

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        self.tx.pack(writer)
        _pack_signatures(writer, self.signatures)

    @classmethod
    def unpack_body(cls, reader: XdrReader) -> "TransactionV0Envelope":
        return cls(TransactionV0.unpack(reader), _unpack_signatures(reader))


@dataclass(frozen=True)
class TransactionV1Envelope(TransactionEnvelope):
    tx: Transaction
    signatures: Tuple[DecoratedSignature, ...] = field(default_factory=tuple)

    DISCRIMINANT: ClassVar[EnvelopeType] = EnvelopeType.ENVELOPE_TYPE_TX

    def __post_init__(self):
        object.__setattr__(self, "signatures", tuple(self.signatures))

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        self.tx.pack(writer)
        _pack_signatures(writer, self.signatures)

    @classmethod
    def unpack_body(cls, reader: XdrReader) -> "TransactionV1Envelope":
        return cls(Transaction.unpack(reader), _unpack_signatures(reader))


@dataclass(frozen=True)
class FeeBumpTransaction(_SignableTransaction):
    """
    Fee bump wrapping a signed v1 envelope.

    ``inner_tx`` is a single-arm union on ENVELOPE_TYPE_TX; packing the inner
    TransactionV1Envelope writes that discriminant.
    """

    fee_source: MuxedAccount
    fee: int
    inner_tx: TransactionV1Envelope

    ENVELOPE_TYPE: ClassVar[EnvelopeType] = EnvelopeType.ENVELOPE_TYPE_TX_FEE_BUMP

    def pack(self, writer: XdrWriter) -> None:
        self.fee_source.pack(writer)
        writer.int64(self.fee)
        self.inner_tx.pack(writer)
        _pack_ext(writer)

    @classmethod
    def unpack(cls, reader: XdrReader) -> "FeeBumpTransaction":
        fee_source = MuxedAccount.unpack(reader)
        fee = reader.int64()
        inner_type = reader.int32()
        if inner_type != EnvelopeType.ENVELOPE_TYPE_TX:
            raise unknown_arm("FeeBumpTransactionInnerTx", inner_type)
        inner_tx = TransactionV1Envelope.unpack_body(reader)
        _unpack_ext(reader, "FeeBumpTransactionExt")
        return cls(fee_source, fee, inner_tx)


@dataclass(frozen=True)
class FeeBumpTransactionEnvelope(TransactionEnvelope):
    tx: FeeBumpTransaction
    signatures: Tuple[DecoratedSignature, ...] = field(default_factory=tuple)

    DISCRIMINANT: ClassVar[EnvelopeType] = EnvelopeType.ENVELOPE_TYPE_TX_FEE_BUMP

    def __post_init__(self):
        object.__setattr__(self, "signatures", tuple(self.signatures))

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        self.tx.pack(writer)
        _pack_signatures(writer, self.signatures)

    @classmethod
    def unpack_body(cls, reader: XdrReader) -> "FeeBumpTransactionEnvelope":
        return cls(FeeBumpTransaction.unpack(reader), _unpack_signatures(reader))


@dataclass(frozen=True)
class TransactionSignaturePayload(XdrType):
    """
    What signers sign: network id followed by the tagged transaction.

    ``tagged_transaction`` is a Transaction (ENVELOPE_TYPE_TX) or a
    FeeBumpTransaction (ENVELOPE_TYPE_TX_FEE_BUMP).
    """

    network_id: bytes
    tagged_transaction: Union[Transaction, FeeBumpTransaction]

    def pack(self, writer: XdrWriter) -> None:
        writer.opaque_fixed(self.network_id, 32)
        writer.int32(self.tagged_transaction.ENVELOPE_TYPE)
        self.tagged_transaction.pack(writer)

    @classmethod
    def unpack(cls, reader: XdrReader) -> "TransactionSignaturePayload":
        network_id = reader.opaque_fixed(32)
        tx_type = reader.int32()
        if tx_type == EnvelopeType.ENVELOPE_TYPE_TX:
            return cls(network_id, Transaction.unpack(reader))
        if tx_type == EnvelopeType.ENVELOPE_TYPE_TX_FEE_BUMP:
            return cls(network_id, FeeBumpTransaction.unpack(reader))
        raise unknown_arm("TaggedTransaction", tx_type)
