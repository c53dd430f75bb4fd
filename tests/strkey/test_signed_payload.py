"""
Signed payload StrKey tests.

The payload section of a "P..." key is the XDR SignedPayload: signer key,
uint32 length, payload zero-padded to 4 bytes.
"""

import struct

import pytest

from stellar_codec import StrKey, VersionByte, encode_check
from stellar_codec.runtime.errors import (
    ErrorCode,
    InvalidLengthError,
    PayloadTooLargeError,
    XdrValueError,
)
from stellar_codec.xdr import SignedPayload

from helpers import REFERENCE_ACCOUNT_ID, REFERENCE_KEY

PAYLOAD_32 = (
    "PA7QYNF7SOWQ3GLR2BGMZEHXAVIRZA4KVWLTJJFC7MGXUA74P7UJUAAAAAQACAQDAQCQMBYIB"
    "EFAWDANBYHRAEISCMKBKFQXDAMRUGY4DUPB6IBZGM"
)
PAYLOAD_29 = (
    "PA7QYNF7SOWQ3GLR2BGMZEHXAVIRZA4KVWLTJJFC7MGXUA74P7UJUAAAAAOQCAQDAQCQMBYIB"
    "EFAWDANBYHRAEISCMKBKFQXDAMRUGY4DUAAAAFGBU"
)


def _raw_section(declared_length: int, body: bytes) -> bytes:
    return REFERENCE_KEY + struct.pack(">I", declared_length) + body


class TestSignedPayloadVectors:
    """Test reference vectors."""

    @pytest.mark.parametrize("text,payload", [
        (PAYLOAD_32, bytes(range(1, 33))),
        (PAYLOAD_29, bytes(range(1, 30))),
    ])
    def test_decode(self, text, payload):
        decoded = StrKey.decode_signed_payload(text)
        assert decoded.ed25519 == REFERENCE_KEY
        assert decoded.signer_account_id == REFERENCE_ACCOUNT_ID
        assert decoded.payload == payload

    @pytest.mark.parametrize("text,payload", [
        (PAYLOAD_32, bytes(range(1, 33))),
        (PAYLOAD_29, bytes(range(1, 30))),
    ])
    def test_encode(self, text, payload):
        assert StrKey.encode_signed_payload(SignedPayload(REFERENCE_KEY, payload)) == text
        assert StrKey.is_valid_signed_payload(text)

    def test_padding_in_payload_section(self):
        """A 29-byte payload is followed by 3 zero bytes before the checksum."""
        raw = StrKey.decode_signed_payload(PAYLOAD_29).to_xdr_bytes()
        assert len(raw) == 32 + 4 + 32
        assert raw[36 + 29:] == b"\x00\x00\x00"

    @pytest.mark.parametrize("size", [1, 4, 63, 64])
    def test_round_trip_sizes(self, size):
        signed = SignedPayload(REFERENCE_KEY, bytes([0xAB]) * size)
        text = StrKey.encode_signed_payload(signed)
        assert text.startswith("P")
        assert StrKey.decode_signed_payload(text) == signed


class TestSignedPayloadLimits:
    """Test size limits and malformed payload sections."""

    def test_encode_payload_over_64_bytes(self):
        with pytest.raises(PayloadTooLargeError) as exc_info:
            StrKey.encode_signed_payload(SignedPayload(REFERENCE_KEY, bytes(65)))
        assert exc_info.value.code == ErrorCode.PAYLOAD_TOO_LARGE

    def test_encode_empty_payload(self):
        with pytest.raises(InvalidLengthError):
            StrKey.encode_signed_payload(SignedPayload(REFERENCE_KEY, b""))

    def test_decode_declared_length_over_64(self):
        text = encode_check(VersionByte.SIGNED_PAYLOAD, _raw_section(65, bytes(64)))
        with pytest.raises(PayloadTooLargeError):
            StrKey.decode_signed_payload(text)
        assert not StrKey.is_valid_signed_payload(text)

    def test_decode_declared_length_shorter_than_section(self):
        text = encode_check(VersionByte.SIGNED_PAYLOAD, _raw_section(1, b"\x01" + bytes(7)))
        with pytest.raises(InvalidLengthError):
            StrKey.decode_signed_payload(text)
        assert not StrKey.is_valid_signed_payload(text)

    def test_decode_zero_declared_length(self):
        text = encode_check(VersionByte.SIGNED_PAYLOAD, _raw_section(0, bytes(4)))
        with pytest.raises(InvalidLengthError):
            StrKey.decode_signed_payload(text)

    def test_decode_non_zero_padding(self):
        text = encode_check(VersionByte.SIGNED_PAYLOAD, _raw_section(1, b"\x01\x00\x00\x01"))
        with pytest.raises(XdrValueError) as exc_info:
            StrKey.decode_signed_payload(text)
        assert exc_info.value.code == ErrorCode.INVALID_PADDING
        assert not StrKey.is_valid_signed_payload(text)

    @pytest.mark.parametrize("length", [36, 41, 104])
    def test_raw_section_length(self, length):
        """The section must be 40-100 bytes and 4-byte aligned."""
        with pytest.raises(InvalidLengthError):
            encode_check(VersionByte.SIGNED_PAYLOAD, bytes(length))

    def test_not_a_signed_payload(self):
        assert not StrKey.is_valid_signed_payload(REFERENCE_ACCOUNT_ID)
