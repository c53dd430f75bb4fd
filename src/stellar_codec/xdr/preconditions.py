"""
Transaction preconditions (CAP-21).

Preconditions is a union over PRECOND_NONE, PRECOND_TIME and PRECOND_V2.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import ClassVar, Optional, Tuple

from ..codec.reader import XdrReader
from ..codec.writer import XdrWriter
from .base import XdrType, unknown_arm
from .enums import PreconditionType
from .keys import SignerKey

MAX_EXTRA_SIGNERS = 2


@dataclass(frozen=True)
class TimeBounds(XdrType):
    """Close-time window in unix seconds; ``max_time`` 0 means unbounded."""

    min_time: int
    max_time: int

    def pack(self, writer: XdrWriter) -> None:
        writer.uint64(self.min_time)
        writer.uint64(self.max_time)

    @classmethod
    def unpack(cls, reader: XdrReader) -> "TimeBounds":
        return cls(reader.uint64(), reader.uint64())


@dataclass(frozen=True)
class LedgerBounds(XdrType):
    """Ledger sequence window; ``max_ledger`` 0 means unbounded."""

    min_ledger: int
    max_ledger: int

    def pack(self, writer: XdrWriter) -> None:
        writer.uint32(self.min_ledger)
        writer.uint32(self.max_ledger)

    @classmethod
    def unpack(cls, reader: XdrReader) -> "LedgerBounds":
        return cls(reader.uint32(), reader.uint32())


@dataclass(frozen=True)
class PreconditionsV2(XdrType):
    """
    Extended preconditions.

    Wire layout::

        TimeBounds*   timeBounds
        LedgerBounds* ledgerBounds
        int64*        minSeqNum
        uint64        minSeqAge       (Duration)
        uint32        minSeqLedgerGap
        SignerKey     extraSigners<2>
    """

    time_bounds: Optional[TimeBounds] = None
    ledger_bounds: Optional[LedgerBounds] = None
    min_seq_num: Optional[int] = None
    min_seq_age: int = 0
    min_seq_ledger_gap: int = 0
    extra_signers: Tuple[SignerKey, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "extra_signers", tuple(self.extra_signers))

    def pack(self, writer: XdrWriter) -> None:
        writer.optional(self.time_bounds, lambda w, v: v.pack(w))
        writer.optional(self.ledger_bounds, lambda w, v: v.pack(w))
        writer.optional(self.min_seq_num, XdrWriter.int64)
        writer.uint64(self.min_seq_age)
        writer.uint32(self.min_seq_ledger_gap)
        writer.array_var(self.extra_signers, MAX_EXTRA_SIGNERS, lambda w, v: v.pack(w))

    @classmethod
    def unpack(cls, reader: XdrReader) -> "PreconditionsV2":
        return cls(
            time_bounds=reader.optional(TimeBounds.unpack),
            ledger_bounds=reader.optional(LedgerBounds.unpack),
            min_seq_num=reader.optional(XdrReader.int64),
            min_seq_age=reader.uint64(),
            min_seq_ledger_gap=reader.uint32(),
            extra_signers=reader.array_var(MAX_EXTRA_SIGNERS, SignerKey.unpack),
        )


class Preconditions(XdrType):
    """
    Preconditions union.

    Variants: PreconditionsNone, PreconditionsTime, PreconditionsV2Arm.
    """

    @classmethod
    def unpack(cls, reader: XdrReader) -> "Preconditions":
        cond_type = reader.int32()
        if cond_type == PreconditionType.PRECOND_NONE:
            return PreconditionsNone()
        if cond_type == PreconditionType.PRECOND_TIME:
            return PreconditionsTime(TimeBounds.unpack(reader))
        if cond_type == PreconditionType.PRECOND_V2:
            return PreconditionsV2Arm(PreconditionsV2.unpack(reader))
        raise unknown_arm("Preconditions", cond_type)


@dataclass(frozen=True)
class PreconditionsNone(Preconditions):
    DISCRIMINANT: ClassVar[PreconditionType] = PreconditionType.PRECOND_NONE

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)


@dataclass(frozen=True)
class PreconditionsTime(Preconditions):
    time_bounds: TimeBounds

    DISCRIMINANT: ClassVar[PreconditionType] = PreconditionType.PRECOND_TIME

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        self.time_bounds.pack(writer)


@dataclass(frozen=True)
class PreconditionsV2Arm(Preconditions):
    v2: PreconditionsV2

    DISCRIMINANT: ClassVar[PreconditionType] = PreconditionType.PRECOND_V2

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        self.v2.pack(writer)
