"""
Validated account and signer models.

MuxedAccount wraps a "G..." account id with an optional 64-bit sub-account
id; SignedPayloadSigner pairs a signer account id with up to 64 payload
bytes.
"""

from __future__ import annotations
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from ..runtime.errors import StellarCodecError
from ..strkey import SIGNED_PAYLOAD_MAX_LENGTH, StrKey
from ..xdr import keys as xdr

UINT64_MAX = (1 << 64) - 1


class MuxedAccount(BaseModel):
    """
    Account address with an optional muxed id.

    Example:
        >>> account = MuxedAccount.from_address("M...")
        >>> account.account_id, account.muxed_id
    """
    account_id: str = Field(alias="accountId", description="Underlying G... account id")
    muxed_id: Optional[int] = Field(default=None, ge=0, le=UINT64_MAX, alias="muxedId")

    model_config = {"populate_by_name": True}

    @field_validator("account_id")
    @classmethod
    def validate_account_id(cls, v: str) -> str:
        if not StrKey.is_valid_account_id(v):
            raise ValueError(f"Invalid account id: {v!r}")
        return v

    @property
    def address(self) -> str:
        """"M..." when a muxed id is set, otherwise the "G..." account id."""
        if self.muxed_id is None:
            return self.account_id
        return StrKey.encode_muxed_account(StrKey.decode_account_id(self.account_id), self.muxed_id)

    @classmethod
    def from_address(cls, address: str) -> MuxedAccount:
        """
        Parse a "G..." or "M..." address.

        Raises:
            StellarCodecError: If the address is not a valid account or muxed account
        """
        return cls.from_xdr(xdr.MuxedAccount.from_strkey(address))

    def to_xdr(self) -> xdr.MuxedAccount:
        ed25519 = StrKey.decode_account_id(self.account_id)
        if self.muxed_id is None:
            return xdr.MuxedAccountEd25519(ed25519)
        return xdr.MuxedAccountMed25519(self.muxed_id, ed25519)

    @classmethod
    def from_xdr(cls, value: xdr.MuxedAccount) -> MuxedAccount:
        muxed_id = value.id if isinstance(value, xdr.MuxedAccountMed25519) else None
        return cls(account_id=value.account_id, muxed_id=muxed_id)


class SignedPayloadSigner(BaseModel):
    """Signed payload signer: ed25519 account id plus 1-64 payload bytes."""
    signer_account_id: str = Field(alias="signerAccountId")
    payload: bytes = Field(min_length=1, max_length=SIGNED_PAYLOAD_MAX_LENGTH)

    model_config = {"populate_by_name": True}

    @field_validator("signer_account_id")
    @classmethod
    def validate_signer(cls, v: str) -> str:
        try:
            StrKey.decode_account_id(v)
        except StellarCodecError as e:
            raise ValueError(f"Invalid signer account id {v!r}: {e.message}") from e
        return v

    def to_xdr(self) -> xdr.SignedPayload:
        return xdr.SignedPayload(StrKey.decode_account_id(self.signer_account_id), self.payload)

    @classmethod
    def from_xdr(cls, value: xdr.SignedPayload) -> SignedPayloadSigner:
        return cls(signer_account_id=value.signer_account_id, payload=value.payload)

    def to_strkey(self) -> str:
        """Encode as a "P..." StrKey."""
        return StrKey.encode_signed_payload(self.to_xdr())

    @classmethod
    def from_strkey(cls, signed_payload: str) -> SignedPayloadSigner:
        return cls.from_xdr(StrKey.decode_signed_payload(signed_payload))
