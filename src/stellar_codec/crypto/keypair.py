"""
Ed25519 key pairs for Stellar accounts.

A KeyPair holds a public key and optionally the 32-byte secret seed. Public
keys are exchanged as "G..." account ids and seeds as "S..." StrKeys.
"""

from __future__ import annotations
import logging
import os
from typing import Optional

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from ..runtime.errors import ErrorCode, KeyPairError
from ..strkey import ED25519_KEY_LENGTH, StrKey
from ..xdr.keys import AccountID, MuxedAccountEd25519, SignerKeyEd25519
from ..xdr.transaction import DecoratedSignature

logger = logging.getLogger(__name__)

SIGNATURE_LENGTH = 64
HINT_LENGTH = 4


def _raw_public_bytes(key: Ed25519PublicKey) -> bytes:
    return key.public_bytes(
        encoding=serialization.Encoding.Raw,
        format=serialization.PublicFormat.Raw,
    )


class KeyPair:
    """
    Ed25519 key pair.

    Build one with :meth:`random`, :meth:`from_secret_seed`,
    :meth:`from_raw_ed25519_seed`, :meth:`from_account_id` or
    :meth:`from_public_key`. Pairs built from a public key alone can verify
    but not sign.
    """

    def __init__(self, public_key: bytes, private_key: Optional[bytes] = None):
        """
        Initialize from raw key bytes.

        Args:
            public_key: 32-byte ed25519 public key
            private_key: Optional 32-byte ed25519 seed

        Raises:
            KeyPairError: If a key is malformed or the seed does not match
        """
        if len(public_key) != ED25519_KEY_LENGTH:
            raise KeyPairError(
                f"Ed25519 public key must be 32 bytes, got {len(public_key)}",
                details={"length": len(public_key)},
            )
        try:
            self._public = Ed25519PublicKey.from_public_bytes(bytes(public_key))
        except ValueError as e:
            raise KeyPairError("Invalid Ed25519 public key", cause=e)
        self._public_key = bytes(public_key)

        self._private: Optional[Ed25519PrivateKey] = None
        self._seed: Optional[bytes] = None
        if private_key is not None:
            if len(private_key) != ED25519_KEY_LENGTH:
                raise KeyPairError(
                    f"Ed25519 seed must be 32 bytes, got {len(private_key)}",
                    details={"length": len(private_key)},
                )
            self._private = Ed25519PrivateKey.from_private_bytes(bytes(private_key))
            if _raw_public_bytes(self._private.public_key()) != self._public_key:
                raise KeyPairError("Seed does not match public key")
            self._seed = bytes(private_key)

    @classmethod
    def random(cls) -> KeyPair:
        """Generate a new random key pair."""
        return cls.from_raw_ed25519_seed(os.urandom(ED25519_KEY_LENGTH))

    @classmethod
    def from_raw_ed25519_seed(cls, seed: bytes) -> KeyPair:
        """Create key pair from a raw 32-byte ed25519 seed."""
        if len(seed) != ED25519_KEY_LENGTH:
            raise KeyPairError(
                f"Ed25519 seed must be 32 bytes, got {len(seed)}",
                details={"length": len(seed)},
            )
        private = Ed25519PrivateKey.from_private_bytes(bytes(seed))
        return cls(_raw_public_bytes(private.public_key()), seed)

    @classmethod
    def from_secret_seed(cls, secret_seed: str) -> KeyPair:
        """
        Create key pair from a "S..." secret seed.

        Raises:
            StellarCodecError: If the seed is not a valid StrKey seed
        """
        return cls.from_raw_ed25519_seed(StrKey.decode_seed(secret_seed))

    @classmethod
    def from_public_key(cls, public_key: bytes) -> KeyPair:
        """Create a verify-only key pair from a raw 32-byte public key."""
        return cls(public_key)

    @classmethod
    def from_account_id(cls, account_id: str) -> KeyPair:
        """
        Create a verify-only key pair from a "G..." or "M..." address.

        The muxed id of an "M..." address is discarded.
        """
        if isinstance(account_id, str) and account_id.startswith("M"):
            public_key, _ = StrKey.decode_muxed_account(account_id)
        else:
            public_key = StrKey.decode_account_id(account_id)
        return cls(public_key)

    @property
    def account_id(self) -> str:
        """The "G..." account id."""
        return StrKey.encode_account_id(self._public_key)

    @property
    def secret_seed(self) -> str:
        """
        The "S..." secret seed.

        Raises:
            KeyPairError: If this key pair has no secret
        """
        return StrKey.encode_seed(self._require_secret())

    @property
    def raw_public_key(self) -> bytes:
        return self._public_key

    @property
    def raw_secret_key(self) -> bytes:
        return self._require_secret()

    def can_sign(self) -> bool:
        return self._private is not None

    def _require_secret(self) -> bytes:
        if self._seed is None:
            raise KeyPairError(
                "Key pair has no secret seed",
                ErrorCode.MISSING_SECRET,
                {"account_id": self.account_id},
            )
        return self._seed

    def xdr_account_id(self) -> AccountID:
        return AccountID(self._public_key)

    def xdr_muxed_account(self) -> MuxedAccountEd25519:
        return MuxedAccountEd25519(self._public_key)

    def xdr_signer_key(self) -> SignerKeyEd25519:
        return SignerKeyEd25519(self._public_key)

    def signature_hint(self) -> bytes:
        """Last 4 bytes of the public key."""
        return self._public_key[-HINT_LENGTH:]

    def sign(self, data: bytes) -> bytes:
        """
        Sign data.

        Args:
            data: Message bytes (for transactions, the 32-byte transaction hash)

        Returns:
            64-byte ed25519 signature

        Raises:
            KeyPairError: If this key pair has no secret
        """
        self._require_secret()
        logger.debug("Signing %d bytes with %s", len(data), self.account_id)
        return self._private.sign(data)

    def verify(self, data: bytes, signature: bytes) -> bool:
        """
        Verify a signature.

        Returns:
            True if the signature is valid for data under this public key
        """
        if len(signature) != SIGNATURE_LENGTH:
            return False
        try:
            self._public.verify(signature, data)
        except InvalidSignature:
            return False
        return True

    def sign_decorated(self, data: bytes) -> DecoratedSignature:
        """Sign data and attach this key's signature hint."""
        return DecoratedSignature(self.signature_hint(), self.sign(data))

    def sign_payload_decorated(self, payload: bytes) -> DecoratedSignature:
        """
        Sign a signed-payload signer payload.

        The hint is the key hint XORed with the last 4 bytes of the payload;
        payloads shorter than 4 bytes are right-padded with zeros.
        """
        signature = self.sign(payload)
        if len(payload) >= HINT_LENGTH:
            payload_hint = payload[-HINT_LENGTH:]
        else:
            payload_hint = payload.ljust(HINT_LENGTH, b"\x00")
        hint = bytes(a ^ b for a, b in zip(self.signature_hint(), payload_hint))
        return DecoratedSignature(hint, signature)

    def __eq__(self, other) -> bool:
        if not isinstance(other, KeyPair):
            return NotImplemented
        return self._public_key == other._public_key and self._seed == other._seed

    def __hash__(self) -> int:
        return hash(self._public_key)

    def __repr__(self) -> str:
        return f"KeyPair(account_id={self.account_id!r}, can_sign={self.can_sign()})"
