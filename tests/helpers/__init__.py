from .factories import (
    REFERENCE_ACCOUNT_ID,
    REFERENCE_KEY,
    REFERENCE_KEY_HEX,
    SEED,
    SEED_ACCOUNT_ID,
    mk_keypair,
    mk_payment_transaction,
)
from .parity import assert_hex_equal

__all__ = [
    "REFERENCE_ACCOUNT_ID",
    "REFERENCE_KEY",
    "REFERENCE_KEY_HEX",
    "SEED",
    "SEED_ACCOUNT_ID",
    "mk_keypair",
    "mk_payment_transaction",
    "assert_hex_equal",
]
