"""
Base-32 and CRC16-XModem tests.

Covers the RFC 4648 alphabet without padding, the strict decode checks
(alphabet, length, trailing bits) and the XModem checksum.
"""

import pytest

from stellar_codec.codec import base32, crc16
from stellar_codec.runtime.errors import (
    ErrorCode,
    InvalidCharacterSetError,
    InvalidLengthError,
    NonZeroTrailingBitsError,
)


class TestBase32Encode:
    """Test base-32 encoding."""

    @pytest.mark.parametrize("data,expected", [
        (b"", ""),
        (b"f", "MY"),
        (b"fo", "MZXQ"),
        (b"foo", "MZXW6"),
        (b"foob", "MZXW6YQ"),
        (b"fooba", "MZXW6YTB"),
        (b"foobar", "MZXW6YTBOI"),
    ])
    def test_rfc4648_vectors_without_padding(self, data, expected):
        """Encoding matches RFC 4648 with '=' stripped."""
        assert base32.encode(data) == expected

    def test_decode_inverts_encode(self):
        data = bytes(range(256))
        assert base32.decode(base32.encode(data)) == data


class TestBase32Decode:
    """Test strict base-32 decoding."""

    @pytest.mark.parametrize("text", [
        "MY======",
        "mzxw6ytboi",
        "MZXW6YTBO1",
        "MZXW6YTBO0",
        "MZXW6YTB8I",
        "MZ+W6YTBOI",
        "MZXW 6YTBOI",
    ])
    def test_invalid_characters(self, text):
        """Characters outside A-Z2-7 are rejected, padding included."""
        with pytest.raises(InvalidCharacterSetError) as exc_info:
            base32.decode(text)
        assert exc_info.value.code == ErrorCode.INVALID_CHARACTER_SET

    def test_non_string_input(self):
        with pytest.raises(InvalidCharacterSetError):
            base32.decode(b"MZXW6YTBOI")

    @pytest.mark.parametrize("text", ["A", "ABC", "ABCDEF", "MZXW6YTBA"])
    def test_impossible_lengths(self, text):
        """Lengths congruent to 1, 3 or 6 mod 8 cannot come from any byte string."""
        with pytest.raises(InvalidLengthError):
            base32.decode(text)

    @pytest.mark.parametrize("text", ["MZ", "MZXR", "MZXW7", "MZXW6YR"])
    def test_non_zero_trailing_bits(self, text):
        """Unused bits of the last symbol must be zero."""
        with pytest.raises(NonZeroTrailingBitsError) as exc_info:
            base32.decode(text)
        assert exc_info.value.code == ErrorCode.NON_ZERO_TRAILING_BITS

    def test_canonical_final_symbol(self):
        assert base32.decode("MY") == b"f"
        assert base32.decode("MZXQ") == b"fo"


class TestCrc16XModem:
    """Test the StrKey checksum."""

    def test_check_value(self):
        """Standard XModem check value for '123456789'."""
        assert crc16.checksum(b"123456789") == 0x31C3

    def test_empty_input(self):
        assert crc16.checksum(b"") == 0

    def test_checksum_bytes_little_endian(self):
        assert crc16.checksum_bytes(b"123456789") == b"\xc3\x31"

    def test_single_bit_change_alters_checksum(self):
        data = bytearray(b"\x30" + bytes(32))
        original = crc16.checksum(bytes(data))
        data[5] ^= 0x01
        assert crc16.checksum(bytes(data)) != original
