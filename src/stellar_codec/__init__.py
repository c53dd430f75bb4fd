"""
Stellar Codec - StrKey and XDR encoding for the Stellar network

This package provides the binary and text codecs a Stellar SDK is built on:
canonical XDR encoding of protocol structures and the checksummed StrKey
address format.
"""

from .runtime.errors import *
from .strkey import StrKey, VersionByte, decode_check, encode_check
from .codec import XdrReader, XdrWriter, sha256_bytes, sha256_hex
from .network import Network
from .crypto import KeyPair
from .xdr import *
from .tx import (
    LedgerBounds as LedgerBoundsModel,
    MuxedAccount as MuxedAccountModel,
    SignedPayloadSigner,
    TimeBounds as TimeBoundsModel,
    TransactionPreconditions,
)

__version__ = "0.1.0"
