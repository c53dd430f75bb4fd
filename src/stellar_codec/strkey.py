"""
StrKey encoding for Stellar keys and identifiers.

A StrKey is the base-32 text form of ``version byte || payload || crc16``
where the CRC16-XModem checksum covers the version byte and payload and is
appended little-endian. The version byte selects the variant and fixes the
first character of the text ('G' account id, 'S' seed, 'M' muxed account,
'T' pre-auth tx, 'X' sha256 hash, 'P' signed payload, 'C' contract,
'L' liquidity pool, 'B' claimable balance).

Reference: SEP-0023 (Strkeys), CAP-0040 (signed payload signers)
"""

from __future__ import annotations
import logging
import struct
from enum import IntEnum
from typing import Dict, Tuple, TYPE_CHECKING

from .codec import base32, crc16
from .codec.reader import XdrReader
from .runtime.errors import (
    ChecksumMismatchError,
    ErrorCode,
    InvalidCharacterSetError,
    InvalidLengthError,
    StellarCodecError,
    VersionByteMismatchError,
    XdrValueError,
)

if TYPE_CHECKING:
    from .xdr.keys import SignedPayload

logger = logging.getLogger(__name__)

ED25519_KEY_LENGTH = 32
MUXED_ACCOUNT_LENGTH = 40
CLAIMABLE_BALANCE_LENGTH = 33
CHECKSUM_LENGTH = 2

SIGNED_PAYLOAD_MAX_LENGTH = 64
# signer key + length prefix + at least one padded word of payload
SIGNED_PAYLOAD_MIN_RAW = ED25519_KEY_LENGTH + 4 + 4
SIGNED_PAYLOAD_MAX_RAW = ED25519_KEY_LENGTH + 4 + SIGNED_PAYLOAD_MAX_LENGTH


class VersionByte(IntEnum):
    """StrKey version bytes. The high 5 bits select the leading character."""

    ACCOUNT_ID = 6 << 3            # G
    MUXED_ACCOUNT = 12 << 3        # M
    SEED = 18 << 3                 # S
    PRE_AUTH_TX = 19 << 3          # T
    SHA256_HASH = 23 << 3          # X
    SIGNED_PAYLOAD = 15 << 3       # P
    CONTRACT = 2 << 3              # C
    LIQUIDITY_POOL = 11 << 3       # L
    CLAIMABLE_BALANCE = 1 << 3     # B


# Payload lengths for fixed-size variants; signed payloads are variable.
_PAYLOAD_LENGTHS: Dict[VersionByte, int] = {
    VersionByte.ACCOUNT_ID: ED25519_KEY_LENGTH,
    VersionByte.SEED: ED25519_KEY_LENGTH,
    VersionByte.PRE_AUTH_TX: ED25519_KEY_LENGTH,
    VersionByte.SHA256_HASH: ED25519_KEY_LENGTH,
    VersionByte.CONTRACT: ED25519_KEY_LENGTH,
    VersionByte.LIQUIDITY_POOL: ED25519_KEY_LENGTH,
    VersionByte.MUXED_ACCOUNT: MUXED_ACCOUNT_LENGTH,
    VersionByte.CLAIMABLE_BALANCE: CLAIMABLE_BALANCE_LENGTH,
}

_INVALID_ALGORITHM = 0x07


def _check_payload_length(version: VersionByte, data: bytes) -> None:
    if version == VersionByte.SIGNED_PAYLOAD:
        ok = (SIGNED_PAYLOAD_MIN_RAW <= len(data) <= SIGNED_PAYLOAD_MAX_RAW
              and len(data) % 4 == 0)
    else:
        ok = len(data) == _PAYLOAD_LENGTHS[version]
    if not ok:
        raise InvalidLengthError(
            f"Invalid {version.name.lower()} payload length {len(data)}",
            {"version": version.name, "length": len(data)},
        )


def encode_check(version: VersionByte, data: bytes) -> str:
    """
    Encode payload bytes as a StrKey of the given variant.

    Args:
        version: Variant version byte
        data: Raw payload

    Returns:
        StrKey text

    Raises:
        InvalidLengthError: If data has the wrong length for the variant
    """
    data = bytes(data)
    _check_payload_length(version, data)
    versioned = bytes([version]) + data
    return base32.encode(versioned + crc16.checksum_bytes(versioned))


def decode_check(version: VersionByte, text: str) -> bytes:
    """
    Decode a StrKey of the given variant to its payload bytes.

    Checks, in order: base-32 alphabet, length and trailing bits; decoded
    length for the variant; version byte; checksum.

    Args:
        version: Expected variant version byte
        text: StrKey text

    Returns:
        Raw payload (without version byte and checksum)

    Raises:
        InvalidCharacterSetError: Characters outside the base-32 alphabet
        NonZeroTrailingBitsError: Non-canonical final symbol
        InvalidLengthError: Wrong encoded or decoded length
        VersionByteMismatchError: Version byte is not the expected one
        ChecksumMismatchError: CRC16 does not match
    """
    decoded = base32.decode(text)
    if len(decoded) < 1 + CHECKSUM_LENGTH:
        raise InvalidLengthError(
            f"Decoded StrKey too short ({len(decoded)} bytes)",
            {"version": version.name, "length": len(decoded)},
        )

    payload = decoded[1:-CHECKSUM_LENGTH]
    _check_payload_length(version, payload)

    actual = decoded[0]
    if actual & _INVALID_ALGORITHM == _INVALID_ALGORITHM:
        raise VersionByteMismatchError(
            "Invalid algorithm bits in version byte",
            {"expected": int(version), "actual": actual},
        )
    if actual != version:
        raise VersionByteMismatchError(
            f"Version byte {actual} does not match expected {version.name.lower()} ({int(version)})",
            {"expected": int(version), "actual": actual},
        )

    expected_checksum = crc16.checksum_bytes(decoded[:-CHECKSUM_LENGTH])
    if decoded[-CHECKSUM_LENGTH:] != expected_checksum:
        raise ChecksumMismatchError(
            "Invalid checksum in encoded data",
            {"expected": expected_checksum.hex(), "actual": decoded[-CHECKSUM_LENGTH:].hex()},
        )

    return payload


def _is_valid(version: VersionByte, text: str) -> bool:
    if not isinstance(text, str):
        return False
    try:
        decode_check(version, text)
        if version == VersionByte.SIGNED_PAYLOAD:
            StrKey.decode_signed_payload(text)
    except StellarCodecError as e:
        logger.debug("Rejected %s strkey: %s", version.name.lower(), e)
        return False
    return True


def _from_hex(value: str) -> bytes:
    try:
        return bytes.fromhex(value)
    except (ValueError, TypeError) as e:
        raise InvalidCharacterSetError(f"Invalid hex string: {value!r}", cause=e)


class StrKey:
    """
    Encoders, decoders and validators for every StrKey variant.

    ``encode_*`` and ``decode_*`` raise a :class:`StellarCodecError`
    subclass on bad input; ``is_valid_*`` never raises.
    """

    # Account id (G...)

    @staticmethod
    def encode_account_id(data: bytes) -> str:
        """Encode a 32-byte ed25519 public key as "G..."."""
        return encode_check(VersionByte.ACCOUNT_ID, data)

    @staticmethod
    def decode_account_id(account_id: str) -> bytes:
        """Decode "G..." to the 32-byte ed25519 public key."""
        return decode_check(VersionByte.ACCOUNT_ID, account_id)

    @staticmethod
    def is_valid_account_id(account_id: str) -> bool:
        return _is_valid(VersionByte.ACCOUNT_ID, account_id)

    # Seed (S...)

    @staticmethod
    def encode_seed(data: bytes) -> str:
        """Encode a 32-byte ed25519 seed as "S..."."""
        return encode_check(VersionByte.SEED, data)

    @staticmethod
    def decode_seed(seed: str) -> bytes:
        """Decode "S..." to the 32-byte ed25519 seed."""
        return decode_check(VersionByte.SEED, seed)

    @staticmethod
    def is_valid_seed(seed: str) -> bool:
        return _is_valid(VersionByte.SEED, seed)

    # Muxed account (M...)

    @staticmethod
    def encode_muxed_account_id(data: bytes) -> str:
        """Encode 40 raw bytes (ed25519 key || big-endian uint64 id) as "M..."."""
        return encode_check(VersionByte.MUXED_ACCOUNT, data)

    @staticmethod
    def decode_muxed_account_id(muxed_account_id: str) -> bytes:
        """Decode "M..." to 40 raw bytes (ed25519 key || big-endian uint64 id)."""
        return decode_check(VersionByte.MUXED_ACCOUNT, muxed_account_id)

    @staticmethod
    def encode_muxed_account(ed25519: bytes, muxed_id: int) -> str:
        """
        Encode an ed25519 key and 64-bit id as "M...".

        Args:
            ed25519: 32-byte ed25519 public key
            muxed_id: Unsigned 64-bit sub-account id

        Returns:
            Muxed account StrKey
        """
        if len(ed25519) != ED25519_KEY_LENGTH:
            raise InvalidLengthError(
                f"Ed25519 key must be 32 bytes, got {len(ed25519)}",
                {"length": len(ed25519)},
            )
        try:
            id_bytes = struct.pack(">Q", muxed_id)
        except struct.error as e:
            raise XdrValueError(
                f"Muxed id {muxed_id!r} is not an unsigned 64-bit integer",
                ErrorCode.VALUE_OUT_OF_RANGE,
                cause=e,
            )
        return encode_check(VersionByte.MUXED_ACCOUNT, bytes(ed25519) + id_bytes)

    @staticmethod
    def decode_muxed_account(muxed_account_id: str) -> Tuple[bytes, int]:
        """Decode "M..." to ``(ed25519_key, muxed_id)``."""
        raw = decode_check(VersionByte.MUXED_ACCOUNT, muxed_account_id)
        return raw[:ED25519_KEY_LENGTH], struct.unpack(">Q", raw[ED25519_KEY_LENGTH:])[0]

    @staticmethod
    def is_valid_muxed_account_id(muxed_account_id: str) -> bool:
        return _is_valid(VersionByte.MUXED_ACCOUNT, muxed_account_id)

    # Pre-auth transaction (T...)

    @staticmethod
    def encode_pre_auth_tx(data: bytes) -> str:
        return encode_check(VersionByte.PRE_AUTH_TX, data)

    @staticmethod
    def decode_pre_auth_tx(pre_auth_tx: str) -> bytes:
        return decode_check(VersionByte.PRE_AUTH_TX, pre_auth_tx)

    @staticmethod
    def is_valid_pre_auth_tx(pre_auth_tx: str) -> bool:
        return _is_valid(VersionByte.PRE_AUTH_TX, pre_auth_tx)

    # Sha256 hash / hash-x signer (X...)

    @staticmethod
    def encode_sha256_hash(data: bytes) -> str:
        return encode_check(VersionByte.SHA256_HASH, data)

    @staticmethod
    def decode_sha256_hash(sha256_hash: str) -> bytes:
        return decode_check(VersionByte.SHA256_HASH, sha256_hash)

    @staticmethod
    def is_valid_sha256_hash(sha256_hash: str) -> bool:
        return _is_valid(VersionByte.SHA256_HASH, sha256_hash)

    # Signed payload (P...)

    @staticmethod
    def encode_signed_payload(signed_payload: "SignedPayload") -> str:
        """
        Encode a signed payload signer as "P...".

        The payload section is the XDR encoding of the signed payload:
        signer key, uint32 payload length, payload zero-padded to 4 bytes.

        Raises:
            PayloadTooLargeError: If the payload exceeds 64 bytes
            InvalidLengthError: If the payload is empty
        """
        if not signed_payload.payload:
            raise InvalidLengthError("Signed payload must not be empty")
        return encode_check(VersionByte.SIGNED_PAYLOAD, signed_payload.to_xdr_bytes())

    @staticmethod
    def decode_signed_payload(signed_payload: str) -> "SignedPayload":
        """
        Decode "P..." to a :class:`SignedPayload`.

        Raises:
            PayloadTooLargeError: If the declared payload length exceeds 64 bytes
            InvalidLengthError: If the declared length does not fill the payload section
            XdrValueError: If payload padding is not zero
        """
        # Import here to avoid circular imports
        from .xdr.keys import SignedPayload

        raw = decode_check(VersionByte.SIGNED_PAYLOAD, signed_payload)
        reader = XdrReader(raw)
        value = SignedPayload.unpack(reader)
        if not reader.eof:
            raise InvalidLengthError(
                f"Signed payload length does not match its {len(raw)}-byte payload section",
                {"raw_length": len(raw), "payload_length": len(value.payload)},
            )
        return value

    @staticmethod
    def is_valid_signed_payload(signed_payload: str) -> bool:
        return _is_valid(VersionByte.SIGNED_PAYLOAD, signed_payload)

    # Contract (C...)

    @staticmethod
    def encode_contract_id(data: bytes) -> str:
        return encode_check(VersionByte.CONTRACT, data)

    @staticmethod
    def encode_contract_id_hex(contract_id: str) -> str:
        """Encode a hex contract id as "C..."."""
        return encode_check(VersionByte.CONTRACT, _from_hex(contract_id))

    @staticmethod
    def decode_contract_id(contract_id: str) -> bytes:
        return decode_check(VersionByte.CONTRACT, contract_id)

    @staticmethod
    def decode_contract_id_hex(contract_id: str) -> str:
        """Decode "C..." to the hex form of the contract id."""
        return decode_check(VersionByte.CONTRACT, contract_id).hex()

    @staticmethod
    def is_valid_contract_id(contract_id: str) -> bool:
        return _is_valid(VersionByte.CONTRACT, contract_id)

    # Liquidity pool (L...)

    @staticmethod
    def encode_liquidity_pool_id(data: bytes) -> str:
        return encode_check(VersionByte.LIQUIDITY_POOL, data)

    @staticmethod
    def encode_liquidity_pool_id_hex(liquidity_pool_id: str) -> str:
        return encode_check(VersionByte.LIQUIDITY_POOL, _from_hex(liquidity_pool_id))

    @staticmethod
    def decode_liquidity_pool_id(liquidity_pool_id: str) -> bytes:
        return decode_check(VersionByte.LIQUIDITY_POOL, liquidity_pool_id)

    @staticmethod
    def decode_liquidity_pool_id_hex(liquidity_pool_id: str) -> str:
        return decode_check(VersionByte.LIQUIDITY_POOL, liquidity_pool_id).hex()

    @staticmethod
    def is_valid_liquidity_pool_id(liquidity_pool_id: str) -> bool:
        return _is_valid(VersionByte.LIQUIDITY_POOL, liquidity_pool_id)

    # Claimable balance (B...)

    @staticmethod
    def encode_claimable_balance_id(data: bytes) -> str:
        """
        Encode a claimable balance id as "B...".

        Accepts either the 33-byte form (discriminant byte + 32-byte hash) or
        a bare 32-byte v0 hash, in which case discriminant 0 is prepended.
        """
        data = bytes(data)
        if len(data) == ED25519_KEY_LENGTH:
            data = b"\x00" + data
        return encode_check(VersionByte.CLAIMABLE_BALANCE, data)

    @staticmethod
    def encode_claimable_balance_id_hex(claimable_balance_id: str) -> str:
        return StrKey.encode_claimable_balance_id(_from_hex(claimable_balance_id))

    @staticmethod
    def decode_claimable_balance_id(claimable_balance_id: str) -> bytes:
        """Decode "B..." to 33 bytes: discriminant byte + 32-byte hash."""
        return decode_check(VersionByte.CLAIMABLE_BALANCE, claimable_balance_id)

    @staticmethod
    def decode_claimable_balance_id_hex(claimable_balance_id: str) -> str:
        return decode_check(VersionByte.CLAIMABLE_BALANCE, claimable_balance_id).hex()

    @staticmethod
    def is_valid_claimable_balance_id(claimable_balance_id: str) -> bool:
        return _is_valid(VersionByte.CLAIMABLE_BALANCE, claimable_balance_id)

    # Derivation

    @staticmethod
    def account_id_from_seed(seed: str) -> str:
        """Derive the "G..." account id for a "S..." secret seed."""
        # Import here to avoid circular imports
        from .crypto.keypair import KeyPair

        return KeyPair.from_secret_seed(seed).account_id


__all__ = [
    "VersionByte",
    "StrKey",
    "encode_check",
    "decode_check",
]
