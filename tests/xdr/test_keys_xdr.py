"""
Key structure XDR tests.

AccountID, MuxedAccount, SignerKey, SignedPayload and ClaimableBalanceID:
byte layouts, StrKey conversions and union discriminant handling.
"""

import pytest

from stellar_codec import StrKey
from stellar_codec.runtime.errors import (
    BufferUnderrunError,
    ErrorCode,
    InvalidLengthError,
    PayloadTooLargeError,
    UnknownUnionArmError,
    VersionByteMismatchError,
    XdrValueError,
)
from stellar_codec.xdr import (
    AccountID,
    Asset,
    ClaimableBalanceID,
    Memo,
    MuxedAccount,
    MuxedAccountEd25519,
    MuxedAccountMed25519,
    Preconditions,
    PublicKey,
    SignedPayload,
    SignerKey,
    SignerKeyEd25519,
    SignerKeyEd25519SignedPayload,
    SignerKeyHashX,
    SignerKeyPreAuthTx,
    TransactionEnvelope,
    XdrType,
)

from helpers import REFERENCE_ACCOUNT_ID, REFERENCE_KEY, REFERENCE_KEY_HEX, assert_hex_equal

MUXED = "MA7QYNF7SOWQ3GLR2BGMZEHXAVIRZA4KVWLTJJFC7MGXUA74P7UJVAAAAAAAAAAAAAJLK"
CLAIMABLE_BALANCE_ID = "BAAD6DBUX6J22DMZOHIEZTEQ64CVCHEDRKWZONFEUL5Q26QD7R76RGR4TU"
SEED_TEXT = "SAB5556L5AN5KSR5WF7UOEFDCIODEWEO7H2UR4S5R62DFTQOGLKOVZDY"


class TestAccountID:
    """Test the public key union."""

    def test_layout(self):
        assert_hex_equal(AccountID(REFERENCE_KEY).to_xdr_bytes(), "00000000" + REFERENCE_KEY_HEX, "AccountID")

    def test_alias(self):
        assert AccountID is PublicKey

    def test_strkey(self):
        account = PublicKey.from_strkey(REFERENCE_ACCOUNT_ID)
        assert account.ed25519 == REFERENCE_KEY
        assert account.to_strkey() == REFERENCE_ACCOUNT_ID

    def test_unknown_key_type(self):
        with pytest.raises(UnknownUnionArmError) as exc_info:
            PublicKey.from_xdr_bytes(bytes.fromhex("00000001" + REFERENCE_KEY_HEX))
        assert exc_info.value.code == ErrorCode.UNKNOWN_UNION_ARM
        assert exc_info.value.details["discriminant"] == 1

    def test_wrong_key_length(self):
        with pytest.raises(InvalidLengthError):
            PublicKey(REFERENCE_KEY[:16])

    def test_truncated(self):
        with pytest.raises(BufferUnderrunError) as exc_info:
            PublicKey.from_xdr_bytes(bytes.fromhex("00000000" + REFERENCE_KEY_HEX[:40]))
        assert exc_info.value.code == ErrorCode.BUFFER_UNDERRUN


class TestMuxedAccount:
    """Test the muxed account union."""

    def test_med25519_layout(self):
        """XDR puts the id before the key, unlike the StrKey payload."""
        muxed = MuxedAccountMed25519(0x8000000000000000, REFERENCE_KEY)
        assert_hex_equal(
            muxed.to_xdr_bytes(),
            "00000100" + "8000000000000000" + REFERENCE_KEY_HEX,
            "MuxedAccount med25519",
        )

    def test_from_muxed_strkey(self):
        muxed = MuxedAccount.from_strkey(MUXED)
        assert muxed == MuxedAccountMed25519(0x8000000000000000, REFERENCE_KEY)
        assert muxed.account_id == REFERENCE_ACCOUNT_ID
        assert muxed.to_strkey() == MUXED

    def test_from_account_strkey(self):
        account = MuxedAccount.from_strkey(REFERENCE_ACCOUNT_ID)
        assert isinstance(account, MuxedAccountEd25519)
        assert account.to_strkey() == REFERENCE_ACCOUNT_ID
        assert_hex_equal(account.to_xdr_bytes(), "00000000" + REFERENCE_KEY_HEX, "MuxedAccount ed25519")

    def test_base64_round_trip(self):
        muxed = MuxedAccountMed25519(97839283928292, REFERENCE_KEY)
        assert MuxedAccount.from_xdr_base64(muxed.to_xdr_base64()) == muxed

    def test_seed_is_rejected(self):
        with pytest.raises(VersionByteMismatchError):
            MuxedAccount.from_strkey(SEED_TEXT)

    @pytest.mark.parametrize("discriminant", ["00000001", "00000002", "00000101"])
    def test_unknown_arm(self, discriminant):
        with pytest.raises(UnknownUnionArmError):
            MuxedAccount.from_xdr_bytes(bytes.fromhex(discriminant + REFERENCE_KEY_HEX))


class TestSignerKey:
    """Test the signer key union."""

    @pytest.mark.parametrize("signer,discriminant,encode", [
        (SignerKeyEd25519(REFERENCE_KEY), "00000000", StrKey.encode_account_id),
        (SignerKeyPreAuthTx(REFERENCE_KEY), "00000001", StrKey.encode_pre_auth_tx),
        (SignerKeyHashX(REFERENCE_KEY), "00000002", StrKey.encode_sha256_hash),
    ])
    def test_hash_variants(self, signer, discriminant, encode):
        assert_hex_equal(signer.to_xdr_bytes(), discriminant + REFERENCE_KEY_HEX, type(signer).__name__)
        assert signer.to_strkey() == encode(REFERENCE_KEY)
        assert SignerKey.from_strkey(signer.to_strkey()) == signer
        assert SignerKey.from_xdr_bytes(signer.to_xdr_bytes()) == signer

    def test_signed_payload_variant(self):
        signer = SignerKeyEd25519SignedPayload(SignedPayload(REFERENCE_KEY, b"\x01\x02\x03"))
        assert_hex_equal(
            signer.to_xdr_bytes(),
            "00000003" + REFERENCE_KEY_HEX + "00000003" + "01020300",
            "SignerKey signed payload",
        )
        assert signer.to_strkey().startswith("P")
        assert SignerKey.from_strkey(signer.to_strkey()) == signer
        assert SignerKey.from_xdr_bytes(signer.to_xdr_bytes()) == signer

    def test_unknown_arm(self):
        with pytest.raises(UnknownUnionArmError):
            SignerKey.from_xdr_bytes(bytes.fromhex("00000004" + REFERENCE_KEY_HEX))

    def test_unsupported_prefix(self):
        with pytest.raises(VersionByteMismatchError):
            SignerKey.from_strkey(SEED_TEXT)


class TestSignedPayloadXdr:
    """Test SignedPayload construction and decoding limits."""

    def test_payload_over_64_bytes(self):
        with pytest.raises(PayloadTooLargeError):
            SignedPayload(REFERENCE_KEY, bytes(65))

    def test_decoded_length_over_64_bytes(self):
        data = bytes.fromhex(REFERENCE_KEY_HEX + "00000041") + bytes(68)
        with pytest.raises(PayloadTooLargeError) as exc_info:
            SignedPayload.from_xdr_bytes(data)
        assert exc_info.value.code == ErrorCode.PAYLOAD_TOO_LARGE

    def test_strkey(self):
        signed = SignedPayload(REFERENCE_KEY, bytes(range(1, 33)))
        assert SignedPayload.from_strkey(signed.to_strkey()) == signed
        assert signed.signer_account_id == REFERENCE_ACCOUNT_ID


class TestClaimableBalanceID:
    """Test claimable balance ids."""

    def test_layout(self):
        balance = ClaimableBalanceID(REFERENCE_KEY)
        assert_hex_equal(balance.to_xdr_bytes(), "00000000" + REFERENCE_KEY_HEX, "ClaimableBalanceID")

    def test_strkey(self):
        balance = ClaimableBalanceID.from_strkey(CLAIMABLE_BALANCE_ID)
        assert balance.v0 == REFERENCE_KEY
        assert balance.to_strkey() == CLAIMABLE_BALANCE_ID

    def test_unknown_discriminant_byte(self):
        text = StrKey.encode_claimable_balance_id(b"\x01" + REFERENCE_KEY)
        with pytest.raises(UnknownUnionArmError):
            ClaimableBalanceID.from_strkey(text)


class TestXdrTypeHelpers:
    """Test the shared byte/base64 helpers."""

    def test_invalid_base64(self):
        with pytest.raises(XdrValueError) as exc_info:
            PublicKey.from_xdr_base64("not base64!")
        assert exc_info.value.code == ErrorCode.INVALID_BASE64

    def test_trailing_bytes(self):
        data = AccountID(REFERENCE_KEY).to_xdr_bytes() + b"\x00\x00\x00\x00"
        with pytest.raises(XdrValueError) as exc_info:
            AccountID.from_xdr_bytes(data)
        assert exc_info.value.code == ErrorCode.TRAILING_BYTES

    def test_base64_round_trip(self):
        account = AccountID(REFERENCE_KEY)
        assert AccountID.from_xdr_base64(account.to_xdr_base64()) == account

    @pytest.mark.parametrize("base", [XdrType, MuxedAccount, SignerKey, Preconditions, Memo, Asset, TransactionEnvelope])
    def test_union_bases_are_abstract(self, base):
        with pytest.raises(TypeError):
            base()

    def test_variant_without_pack_is_abstract(self):
        class Incomplete(MuxedAccount):
            pass

        with pytest.raises(TypeError):
            Incomplete()
