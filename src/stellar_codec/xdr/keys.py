"""
Key and identifier structures.

Covers AccountID/PublicKey, MuxedAccount, SignedPayload, SignerKey and
ClaimableBalanceID together with their StrKey conversions.

Each union is a closed set of frozen dataclass variants. The union base class
decodes by switching on the discriminant and raises UnknownUnionArmError for
anything outside the schema.
"""

from __future__ import annotations
from abc import abstractmethod
from dataclasses import dataclass
from typing import ClassVar

from ..codec.reader import XdrReader
from ..codec.writer import XdrWriter
from ..runtime.errors import InvalidLengthError, PayloadTooLargeError
from ..strkey import (
    ED25519_KEY_LENGTH,
    SIGNED_PAYLOAD_MAX_LENGTH,
    StrKey,
)
from .base import XdrType, unknown_arm
from .enums import (
    ClaimableBalanceIDType,
    CryptoKeyType,
    PublicKeyType,
    SignerKeyType,
)

HASH_LENGTH = 32


def _check_length(name: str, value: bytes, length: int) -> None:
    if len(value) != length:
        raise InvalidLengthError(
            f"{name} must be {length} bytes, got {len(value)}",
            {"field": name, "expected": length, "actual": len(value)},
        )


@dataclass(frozen=True)
class PublicKey(XdrType):
    """
    Ed25519 public key behind the PublicKeyType union.

    ``AccountID`` is an alias of this type.
    """

    ed25519: bytes

    def __post_init__(self):
        _check_length("ed25519", self.ed25519, ED25519_KEY_LENGTH)

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(PublicKeyType.PUBLIC_KEY_TYPE_ED25519)
        writer.opaque_fixed(self.ed25519, ED25519_KEY_LENGTH)

    @classmethod
    def unpack(cls, reader: XdrReader) -> "PublicKey":
        key_type = reader.int32()
        if key_type != PublicKeyType.PUBLIC_KEY_TYPE_ED25519:
            raise unknown_arm("PublicKey", key_type)
        return cls(reader.opaque_fixed(ED25519_KEY_LENGTH))

    @classmethod
    def from_strkey(cls, account_id: str) -> "PublicKey":
        """Build from a "G..." account id."""
        return cls(StrKey.decode_account_id(account_id))

    def to_strkey(self) -> str:
        """Encode as a "G..." account id."""
        return StrKey.encode_account_id(self.ed25519)


AccountID = PublicKey


class MuxedAccount(XdrType):
    """
    Union of a plain ed25519 account and a multiplexed (med25519) account.

    Variants: MuxedAccountEd25519, MuxedAccountMed25519.
    """

    @classmethod
    def unpack(cls, reader: XdrReader) -> "MuxedAccount":
        key_type = reader.int32()
        if key_type == CryptoKeyType.KEY_TYPE_ED25519:
            return MuxedAccountEd25519(reader.opaque_fixed(ED25519_KEY_LENGTH))
        if key_type == CryptoKeyType.KEY_TYPE_MUXED_ED25519:
            muxed_id = reader.uint64()
            return MuxedAccountMed25519(muxed_id, reader.opaque_fixed(ED25519_KEY_LENGTH))
        raise unknown_arm("MuxedAccount", key_type)

    @staticmethod
    def from_strkey(address: str) -> "MuxedAccount":
        """
        Parse a "G..." or "M..." address.

        Raises:
            VersionByteMismatchError: If the address is neither variant
        """
        if isinstance(address, str) and address.startswith("M"):
            ed25519, muxed_id = StrKey.decode_muxed_account(address)
            return MuxedAccountMed25519(muxed_id, ed25519)
        return MuxedAccountEd25519(StrKey.decode_account_id(address))

    @abstractmethod
    def to_strkey(self) -> str:
        """StrKey text of this variant."""
        pass

    @property
    def account_id(self) -> str:
        """The underlying "G..." account id."""
        return StrKey.encode_account_id(self.ed25519)


@dataclass(frozen=True)
class MuxedAccountEd25519(MuxedAccount):
    ed25519: bytes

    DISCRIMINANT: ClassVar[CryptoKeyType] = CryptoKeyType.KEY_TYPE_ED25519

    def __post_init__(self):
        _check_length("ed25519", self.ed25519, ED25519_KEY_LENGTH)

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        writer.opaque_fixed(self.ed25519, ED25519_KEY_LENGTH)

    def to_strkey(self) -> str:
        return StrKey.encode_account_id(self.ed25519)


@dataclass(frozen=True)
class MuxedAccountMed25519(MuxedAccount):
    """
    Multiplexed account.

    XDR order is ``id`` then ``ed25519``; the "M..." StrKey payload stores
    the key first and the id second.
    """

    id: int
    ed25519: bytes

    DISCRIMINANT: ClassVar[CryptoKeyType] = CryptoKeyType.KEY_TYPE_MUXED_ED25519

    def __post_init__(self):
        _check_length("ed25519", self.ed25519, ED25519_KEY_LENGTH)

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        writer.uint64(self.id)
        writer.opaque_fixed(self.ed25519, ED25519_KEY_LENGTH)

    def to_strkey(self) -> str:
        return StrKey.encode_muxed_account(self.ed25519, self.id)


@dataclass(frozen=True)
class SignedPayload(XdrType):
    """
    Ed25519 signed payload signer (CAP-40).

    ``payload`` is ``opaque<64>``: uint32 length, bytes, zero padding to a
    4-byte boundary.
    """

    ed25519: bytes
    payload: bytes

    def __post_init__(self):
        _check_length("ed25519", self.ed25519, ED25519_KEY_LENGTH)
        if len(self.payload) > SIGNED_PAYLOAD_MAX_LENGTH:
            raise PayloadTooLargeError(
                f"Signed payload is {len(self.payload)} bytes, maximum is {SIGNED_PAYLOAD_MAX_LENGTH}",
                {"length": len(self.payload), "max_length": SIGNED_PAYLOAD_MAX_LENGTH},
            )

    def pack(self, writer: XdrWriter) -> None:
        writer.opaque_fixed(self.ed25519, ED25519_KEY_LENGTH)
        writer.opaque_var(self.payload, SIGNED_PAYLOAD_MAX_LENGTH)

    @classmethod
    def unpack(cls, reader: XdrReader) -> "SignedPayload":
        ed25519 = reader.opaque_fixed(ED25519_KEY_LENGTH)
        try:
            payload = reader.opaque_var(SIGNED_PAYLOAD_MAX_LENGTH)
        except InvalidLengthError as e:
            raise PayloadTooLargeError(
                "Signed payload exceeds 64 bytes", dict(e.details), cause=e
            )
        return cls(ed25519, payload)

    @property
    def signer_account_id(self) -> str:
        """The signer as a "G..." account id."""
        return StrKey.encode_account_id(self.ed25519)

    @classmethod
    def from_strkey(cls, signed_payload: str) -> "SignedPayload":
        return StrKey.decode_signed_payload(signed_payload)

    def to_strkey(self) -> str:
        return StrKey.encode_signed_payload(self)


class SignerKey(XdrType):
    """
    Union over the signer kinds an account can carry.

    Variants: SignerKeyEd25519, SignerKeyPreAuthTx, SignerKeyHashX,
    SignerKeyEd25519SignedPayload.
    """

    @classmethod
    def unpack(cls, reader: XdrReader) -> "SignerKey":
        key_type = reader.int32()
        if key_type == SignerKeyType.SIGNER_KEY_TYPE_ED25519:
            return SignerKeyEd25519(reader.opaque_fixed(HASH_LENGTH))
        if key_type == SignerKeyType.SIGNER_KEY_TYPE_PRE_AUTH_TX:
            return SignerKeyPreAuthTx(reader.opaque_fixed(HASH_LENGTH))
        if key_type == SignerKeyType.SIGNER_KEY_TYPE_HASH_X:
            return SignerKeyHashX(reader.opaque_fixed(HASH_LENGTH))
        if key_type == SignerKeyType.SIGNER_KEY_TYPE_ED25519_SIGNED_PAYLOAD:
            return SignerKeyEd25519SignedPayload(SignedPayload.unpack(reader))
        raise unknown_arm("SignerKey", key_type)

    @staticmethod
    def from_strkey(key: str) -> "SignerKey":
        """
        Parse a signer from its StrKey ("G...", "T...", "X..." or "P...").

        Raises:
            VersionByteMismatchError: For any other prefix
        """
        prefix = key[:1] if isinstance(key, str) else ""
        if prefix == "T":
            return SignerKeyPreAuthTx(StrKey.decode_pre_auth_tx(key))
        if prefix == "X":
            return SignerKeyHashX(StrKey.decode_sha256_hash(key))
        if prefix == "P":
            return SignerKeyEd25519SignedPayload(StrKey.decode_signed_payload(key))
        return SignerKeyEd25519(StrKey.decode_account_id(key))

    @abstractmethod
    def to_strkey(self) -> str:
        """StrKey text of this variant."""
        pass


@dataclass(frozen=True)
class SignerKeyEd25519(SignerKey):
    ed25519: bytes

    DISCRIMINANT: ClassVar[SignerKeyType] = SignerKeyType.SIGNER_KEY_TYPE_ED25519

    def __post_init__(self):
        _check_length("ed25519", self.ed25519, HASH_LENGTH)

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        writer.opaque_fixed(self.ed25519, HASH_LENGTH)

    def to_strkey(self) -> str:
        return StrKey.encode_account_id(self.ed25519)


@dataclass(frozen=True)
class SignerKeyPreAuthTx(SignerKey):
    pre_auth_tx: bytes

    DISCRIMINANT: ClassVar[SignerKeyType] = SignerKeyType.SIGNER_KEY_TYPE_PRE_AUTH_TX

    def __post_init__(self):
        _check_length("pre_auth_tx", self.pre_auth_tx, HASH_LENGTH)

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        writer.opaque_fixed(self.pre_auth_tx, HASH_LENGTH)

    def to_strkey(self) -> str:
        return StrKey.encode_pre_auth_tx(self.pre_auth_tx)


@dataclass(frozen=True)
class SignerKeyHashX(SignerKey):
    hash_x: bytes

    DISCRIMINANT: ClassVar[SignerKeyType] = SignerKeyType.SIGNER_KEY_TYPE_HASH_X

    def __post_init__(self):
        _check_length("hash_x", self.hash_x, HASH_LENGTH)

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        writer.opaque_fixed(self.hash_x, HASH_LENGTH)

    def to_strkey(self) -> str:
        return StrKey.encode_sha256_hash(self.hash_x)


@dataclass(frozen=True)
class SignerKeyEd25519SignedPayload(SignerKey):
    signed_payload: SignedPayload

    DISCRIMINANT: ClassVar[SignerKeyType] = SignerKeyType.SIGNER_KEY_TYPE_ED25519_SIGNED_PAYLOAD

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(self.DISCRIMINANT)
        self.signed_payload.pack(writer)

    def to_strkey(self) -> str:
        return StrKey.encode_signed_payload(self.signed_payload)


@dataclass(frozen=True)
class ClaimableBalanceID(XdrType):
    """
    Claimable balance id (v0: 32-byte hash).

    The XDR form uses a 4-byte discriminant; the "B..." StrKey form uses a
    single discriminant byte.
    """

    v0: bytes

    def __post_init__(self):
        _check_length("v0", self.v0, HASH_LENGTH)

    def pack(self, writer: XdrWriter) -> None:
        writer.int32(ClaimableBalanceIDType.CLAIMABLE_BALANCE_ID_TYPE_V0)
        writer.opaque_fixed(self.v0, HASH_LENGTH)

    @classmethod
    def unpack(cls, reader: XdrReader) -> "ClaimableBalanceID":
        id_type = reader.int32()
        if id_type != ClaimableBalanceIDType.CLAIMABLE_BALANCE_ID_TYPE_V0:
            raise unknown_arm("ClaimableBalanceID", id_type)
        return cls(reader.opaque_fixed(HASH_LENGTH))

    @classmethod
    def from_strkey(cls, claimable_balance_id: str) -> "ClaimableBalanceID":
        raw = StrKey.decode_claimable_balance_id(claimable_balance_id)
        if raw[0] != ClaimableBalanceIDType.CLAIMABLE_BALANCE_ID_TYPE_V0:
            raise unknown_arm("ClaimableBalanceID", raw[0])
        return cls(raw[1:])

    def to_strkey(self) -> str:
        return StrKey.encode_claimable_balance_id(
            bytes([ClaimableBalanceIDType.CLAIMABLE_BALANCE_ID_TYPE_V0]) + self.v0
        )
