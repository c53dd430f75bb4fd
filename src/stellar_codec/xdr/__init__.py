"""
Typed XDR structures for the Stellar protocol.

Key components:
- keys.py: AccountID, MuxedAccount, SignedPayload, SignerKey, ClaimableBalanceID
- preconditions.py: TimeBounds, LedgerBounds, PreconditionsV2, Preconditions
- memo.py / asset.py / operations.py: transaction building blocks
- transaction.py: transactions, envelopes and signature payloads
"""

from .asset import Asset, AssetCreditAlphanum4, AssetCreditAlphanum12, AssetNative
from .base import XdrType
from .enums import (
    AssetType,
    ClaimableBalanceIDType,
    CryptoKeyType,
    EnvelopeType,
    MemoType,
    OperationType,
    PreconditionType,
    PublicKeyType,
    SignerKeyType,
)
from .keys import (
    AccountID,
    ClaimableBalanceID,
    MuxedAccount,
    MuxedAccountEd25519,
    MuxedAccountMed25519,
    PublicKey,
    SignedPayload,
    SignerKey,
    SignerKeyEd25519,
    SignerKeyEd25519SignedPayload,
    SignerKeyHashX,
    SignerKeyPreAuthTx,
)
from .memo import Memo, MemoHash, MemoId, MemoNone, MemoReturn, MemoText
from .operations import (
    BumpSequenceOp,
    CreateAccountOp,
    ManageDataOp,
    Operation,
    OperationBody,
    PaymentOp,
)
from .preconditions import (
    LedgerBounds,
    Preconditions,
    PreconditionsNone,
    PreconditionsTime,
    PreconditionsV2,
    PreconditionsV2Arm,
    TimeBounds,
)
from .transaction import (
    DecoratedSignature,
    FeeBumpTransaction,
    FeeBumpTransactionEnvelope,
    Transaction,
    TransactionEnvelope,
    TransactionSignaturePayload,
    TransactionV0,
    TransactionV0Envelope,
    TransactionV1Envelope,
)

__all__ = [
    "XdrType",
    # enums
    "AssetType",
    "ClaimableBalanceIDType",
    "CryptoKeyType",
    "EnvelopeType",
    "MemoType",
    "OperationType",
    "PreconditionType",
    "PublicKeyType",
    "SignerKeyType",
    # keys
    "AccountID",
    "ClaimableBalanceID",
    "MuxedAccount",
    "MuxedAccountEd25519",
    "MuxedAccountMed25519",
    "PublicKey",
    "SignedPayload",
    "SignerKey",
    "SignerKeyEd25519",
    "SignerKeyEd25519SignedPayload",
    "SignerKeyHashX",
    "SignerKeyPreAuthTx",
    # preconditions
    "LedgerBounds",
    "Preconditions",
    "PreconditionsNone",
    "PreconditionsTime",
    "PreconditionsV2",
    "PreconditionsV2Arm",
    "TimeBounds",
    # memo / asset / operations
    "Memo",
    "MemoHash",
    "MemoId",
    "MemoNone",
    "MemoReturn",
    "MemoText",
    "Asset",
    "AssetCreditAlphanum4",
    "AssetCreditAlphanum12",
    "AssetNative",
    "BumpSequenceOp",
    "CreateAccountOp",
    "ManageDataOp",
    "Operation",
    "OperationBody",
    "PaymentOp",
    # transactions
    "DecoratedSignature",
    "FeeBumpTransaction",
    "FeeBumpTransactionEnvelope",
    "Transaction",
    "TransactionEnvelope",
    "TransactionSignaturePayload",
    "TransactionV0",
    "TransactionV0Envelope",
    "TransactionV1Envelope",
]
