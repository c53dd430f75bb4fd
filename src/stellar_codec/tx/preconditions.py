"""
Validated transaction preconditions.

Friendly counterparts of the XDR precondition structures. ``to_xdr`` picks
the narrowest union arm able to express the conditions: none, time bounds
only, or the full v2 form.
"""

from __future__ import annotations
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..runtime.errors import StellarCodecError
from ..xdr import preconditions as xdr
from ..xdr.keys import SignerKey

UINT32_MAX = (1 << 32) - 1
UINT64_MAX = (1 << 64) - 1
INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1


class TimeBounds(BaseModel):
    """
    Close-time window in unix seconds.

    ``max_time`` 0 leaves the upper bound open.
    """
    min_time: int = Field(default=0, ge=0, le=UINT64_MAX, alias="minTime")
    max_time: int = Field(default=0, ge=0, le=UINT64_MAX, alias="maxTime")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def check_order(self) -> TimeBounds:
        if self.max_time != 0 and self.max_time < self.min_time:
            raise ValueError("max_time must be 0 or not earlier than min_time")
        return self

    def to_xdr(self) -> xdr.TimeBounds:
        return xdr.TimeBounds(self.min_time, self.max_time)

    @classmethod
    def from_xdr(cls, value: xdr.TimeBounds) -> TimeBounds:
        return cls(min_time=value.min_time, max_time=value.max_time)


class LedgerBounds(BaseModel):
    """
    Ledger sequence window.

    ``max_ledger`` 0 leaves the upper bound open.
    """
    min_ledger: int = Field(default=0, ge=0, le=UINT32_MAX, alias="minLedger")
    max_ledger: int = Field(default=0, ge=0, le=UINT32_MAX, alias="maxLedger")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def check_order(self) -> LedgerBounds:
        if self.max_ledger != 0 and self.max_ledger < self.min_ledger:
            raise ValueError("max_ledger must be 0 or not lower than min_ledger")
        return self

    def to_xdr(self) -> xdr.LedgerBounds:
        return xdr.LedgerBounds(self.min_ledger, self.max_ledger)

    @classmethod
    def from_xdr(cls, value: xdr.LedgerBounds) -> LedgerBounds:
        return cls(min_ledger=value.min_ledger, max_ledger=value.max_ledger)


class TransactionPreconditions(BaseModel):
    """
    Transaction preconditions.

    ``extra_signers`` holds up to two signer StrKeys ("G...", "T...",
    "X..." or "P...").
    """
    time_bounds: Optional[TimeBounds] = Field(default=None, alias="timeBounds")
    ledger_bounds: Optional[LedgerBounds] = Field(default=None, alias="ledgerBounds")
    min_sequence_number: Optional[int] = Field(default=None, ge=INT64_MIN, le=INT64_MAX, alias="minSeqNum")
    min_sequence_age: int = Field(default=0, ge=0, le=UINT64_MAX, alias="minSeqAge")
    min_sequence_ledger_gap: int = Field(default=0, ge=0, le=UINT32_MAX, alias="minSeqLedgerGap")
    extra_signers: List[str] = Field(default_factory=list, max_length=xdr.MAX_EXTRA_SIGNERS,
                                     alias="extraSigners")

    model_config = {"populate_by_name": True}

    @field_validator("extra_signers")
    @classmethod
    def validate_extra_signers(cls, v: List[str]) -> List[str]:
        for signer in v:
            try:
                SignerKey.from_strkey(signer)
            except StellarCodecError as e:
                raise ValueError(f"Invalid extra signer {signer!r}: {e.message}") from e
        return v

    def has_v2(self) -> bool:
        """True if any condition beyond time bounds is set."""
        return (
            self.ledger_bounds is not None
            or self.min_sequence_number is not None
            or self.min_sequence_age > 0
            or self.min_sequence_ledger_gap > 0
            or len(self.extra_signers) > 0
        )

    def to_xdr(self) -> xdr.Preconditions:
        if self.has_v2():
            return xdr.PreconditionsV2Arm(xdr.PreconditionsV2(
                time_bounds=self.time_bounds.to_xdr() if self.time_bounds else None,
                ledger_bounds=self.ledger_bounds.to_xdr() if self.ledger_bounds else None,
                min_seq_num=self.min_sequence_number,
                min_seq_age=self.min_sequence_age,
                min_seq_ledger_gap=self.min_sequence_ledger_gap,
                extra_signers=[SignerKey.from_strkey(s) for s in self.extra_signers],
            ))
        if self.time_bounds is not None:
            return xdr.PreconditionsTime(self.time_bounds.to_xdr())
        return xdr.PreconditionsNone()

    @classmethod
    def from_xdr(cls, value: xdr.Preconditions) -> TransactionPreconditions:
        if isinstance(value, xdr.PreconditionsV2Arm):
            v2 = value.v2
            return cls(
                time_bounds=TimeBounds.from_xdr(v2.time_bounds) if v2.time_bounds else None,
                ledger_bounds=LedgerBounds.from_xdr(v2.ledger_bounds) if v2.ledger_bounds else None,
                min_sequence_number=v2.min_seq_num,
                min_sequence_age=v2.min_seq_age,
                min_sequence_ledger_gap=v2.min_seq_ledger_gap,
                extra_signers=[s.to_strkey() for s in v2.extra_signers],
            )
        if isinstance(value, xdr.PreconditionsTime):
            return cls(time_bounds=TimeBounds.from_xdr(value.time_bounds))
        return cls()
