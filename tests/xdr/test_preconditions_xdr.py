"""
Preconditions XDR tests.

Covers the three union arms, presence flags of PreconditionsV2 optionals,
the minSeqAge width and the extraSigners bound.
"""

import pytest

from stellar_codec.runtime.errors import (
    BufferUnderrunError,
    InvalidLengthError,
    UnknownUnionArmError,
)
from stellar_codec.xdr import (
    LedgerBounds,
    Preconditions,
    PreconditionsNone,
    PreconditionsTime,
    PreconditionsV2,
    PreconditionsV2Arm,
    SignedPayload,
    SignerKeyEd25519,
    SignerKeyEd25519SignedPayload,
    SignerKeyHashX,
    TimeBounds,
)

from helpers import REFERENCE_KEY, REFERENCE_KEY_HEX, assert_hex_equal


class TestPreconditionArms:
    """Test NONE and TIME arms."""

    def test_none(self):
        assert_hex_equal(PreconditionsNone().to_xdr_bytes(), "00000000", "PRECOND_NONE")
        assert Preconditions.from_xdr_bytes(bytes(4)) == PreconditionsNone()

    def test_time(self):
        cond = PreconditionsTime(TimeBounds(1, 0xFFFFFFFF + 1))
        assert_hex_equal(
            cond.to_xdr_bytes(),
            "00000001 0000000000000001 0000000100000000",
            "PRECOND_TIME",
        )
        assert Preconditions.from_xdr_bytes(cond.to_xdr_bytes()) == cond

    def test_unknown_arm(self):
        with pytest.raises(UnknownUnionArmError) as exc_info:
            Preconditions.from_xdr_bytes(bytes.fromhex("00000003"))
        assert exc_info.value.details["union"] == "Preconditions"


class TestPreconditionsV2:
    """Test the V2 arm."""

    def test_only_sequence_age_and_gap(self):
        """Every optional absent except minSeqAge and minSeqLedgerGap."""
        cond = PreconditionsV2Arm(PreconditionsV2(min_seq_age=300, min_seq_ledger_gap=5))
        data = cond.to_xdr_bytes()
        assert_hex_equal(
            data,
            "00000002"
            "00000000"  # timeBounds absent
            "00000000"  # ledgerBounds absent
            "00000000"  # minSeqNum absent
            "000000000000012c"  # minSeqAge uint64
            "00000005"  # minSeqLedgerGap
            "00000000",  # extraSigners
            "PRECOND_V2",
        )

        decoded = Preconditions.from_xdr_bytes(data)
        assert decoded == cond
        assert decoded.v2.time_bounds is None
        assert decoded.v2.ledger_bounds is None
        assert decoded.v2.min_seq_num is None
        assert decoded.v2.extra_signers == ()
        assert decoded.v2.min_seq_age == 300
        assert decoded.v2.min_seq_ledger_gap == 5

    def test_min_seq_age_is_64_bit(self):
        cond = PreconditionsV2(min_seq_age=2**40)
        decoded = PreconditionsV2.from_xdr_bytes(cond.to_xdr_bytes())
        assert decoded.min_seq_age == 2**40

    def test_zero_min_seq_num_is_present(self):
        """A present zero is distinct from an absent value."""
        cond = PreconditionsV2(min_seq_num=0)
        data = cond.to_xdr_bytes()
        assert_hex_equal(data[8:20], "00000001 0000000000000000", "minSeqNum")
        assert PreconditionsV2.from_xdr_bytes(data).min_seq_num == 0

    def test_all_fields(self):
        cond = PreconditionsV2(
            time_bounds=TimeBounds(10, 20),
            ledger_bounds=LedgerBounds(100, 0),
            min_seq_num=-5,
            min_seq_age=60,
            min_seq_ledger_gap=2,
            extra_signers=[
                SignerKeyHashX(REFERENCE_KEY),
                SignerKeyEd25519SignedPayload(SignedPayload(REFERENCE_KEY, b"abcd")),
            ],
        )
        data = PreconditionsV2Arm(cond).to_xdr_bytes()
        assert Preconditions.from_xdr_bytes(data) == PreconditionsV2Arm(cond)
        assert data.endswith(bytes.fromhex(
            "00000002"
            "00000002" + REFERENCE_KEY_HEX
            + "00000003" + REFERENCE_KEY_HEX + "00000004" + "61626364"
        ))

    def test_too_many_extra_signers_on_encode(self):
        signers = [SignerKeyEd25519(REFERENCE_KEY)] * 3
        with pytest.raises(InvalidLengthError):
            PreconditionsV2(extra_signers=signers).to_xdr_bytes()

    def test_too_many_extra_signers_on_decode(self):
        signer = "00000000" + REFERENCE_KEY_HEX
        data = bytes.fromhex(
            "00000000 00000000 00000000 0000000000000000 00000000 00000003"
            + signer * 3
        )
        with pytest.raises(InvalidLengthError):
            PreconditionsV2.from_xdr_bytes(data)

    def test_truncated_optional(self):
        """A set presence flag with no value behind it is an underrun."""
        with pytest.raises(BufferUnderrunError):
            PreconditionsV2.from_xdr_bytes(bytes.fromhex("00000001 00000000"))

    def test_hashable_value(self):
        """Signer lists are stored as tuples so the structure stays hashable."""
        first = PreconditionsV2(extra_signers=[SignerKeyEd25519(REFERENCE_KEY)])
        second = PreconditionsV2(extra_signers=(SignerKeyEd25519(REFERENCE_KEY),))
        assert isinstance(first.extra_signers, tuple)
        assert first == second
        assert hash(first) == hash(second)
        assert hash(PreconditionsV2()) == hash(PreconditionsV2())
        assert len({PreconditionsV2Arm(first), PreconditionsV2Arm(second)}) == 1
