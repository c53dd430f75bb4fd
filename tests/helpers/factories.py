"""
Builders for test fixtures.

Known key material shared by the strkey, xdr and crypto suites.
"""

from stellar_codec import KeyPair
from stellar_codec.xdr import (
    AssetNative,
    MuxedAccountEd25519,
    Operation,
    PaymentOp,
    Transaction,
)

# Key used across the StrKey reference vectors
REFERENCE_KEY_HEX = "3f0c34bf93ad0d9971d04ccc90f705511c838aad9734a4a2fb0d7a03fc7fe89a"
REFERENCE_KEY = bytes.fromhex(REFERENCE_KEY_HEX)
REFERENCE_ACCOUNT_ID = "GA7QYNF7SOWQ3GLR2BGMZEHXAVIRZA4KVWLTJJFC7MGXUA74P7UJVSGZ"

SEED = "SDJHRQF4GCMIIKAAAQ6IHY42X73FQFLHUULAPSKKD4DFDM7UXWWCRHBE"
SEED_ACCOUNT_ID = "GCZHXL5HXQX5ABDM26LHYRCQZ5OJFHLOPLZX47WEBP3V2PF5AVFK2A5D"


def mk_keypair(index: int = 0) -> KeyPair:
    """Deterministic key pair from a repeated seed byte."""
    return KeyPair.from_raw_ed25519_seed(bytes([index + 1]) * 32)


def mk_payment_transaction(source: KeyPair, destination: KeyPair,
                           amount: int = 10_000_000, seq_num: int = 1) -> Transaction:
    """Single-operation native payment."""
    payment = PaymentOp(MuxedAccountEd25519(destination.raw_public_key), AssetNative(), amount)
    return Transaction(
        source_account=source.xdr_muxed_account(),
        fee=100,
        seq_num=seq_num,
        operations=[Operation(payment)],
    )
