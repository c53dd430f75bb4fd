"""
Validated models for building transactions.

These pydantic models check their fields on construction and convert to and
from the typed XDR structures in ``stellar_codec.xdr``.
"""

from .accounts import MuxedAccount, SignedPayloadSigner
from .preconditions import LedgerBounds, TimeBounds, TransactionPreconditions

__all__ = [
    "LedgerBounds",
    "MuxedAccount",
    "SignedPayloadSigner",
    "TimeBounds",
    "TransactionPreconditions",
]
