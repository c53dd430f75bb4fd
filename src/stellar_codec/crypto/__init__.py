"""
Cryptographic primitives for Stellar accounts.

Provides ed25519 key pairs that convert to and from StrKey addresses and
produce decorated signatures.
"""

from .keypair import KeyPair

__all__ = ["KeyPair"]
