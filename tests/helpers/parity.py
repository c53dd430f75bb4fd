"""
Byte Parity Helper

Compares encoded XDR against reference hex and prints a row diff on mismatch
so the failing offset is visible in the pytest output.
"""


def _row(data: bytes) -> str:
    return " ".join(f"{b:02x}" for b in data).ljust(47)


def assert_hex_equal(actual: bytes, expected_hex: str, ctx: str) -> None:
    """
    Assert that actual bytes match a reference hex string.

    Args:
        actual: Encoded bytes
        expected_hex: Reference hex (spaces and case ignored)
        ctx: Label for the failure message

    Raises:
        AssertionError: With a 16-bytes-per-row diff if the bytes differ
    """
    expected_hex = expected_hex.replace(" ", "").replace("\n", "").lower()
    if actual.hex() == expected_hex:
        return

    expected = bytes.fromhex(expected_hex)
    print(f"\n[FAIL] XDR mismatch in {ctx}")
    print(f"   Expected length: {len(expected)} bytes")
    print(f"   Actual length:   {len(actual)} bytes")
    print(f"   {'Offset':<8} {'Expected':<48} {'Actual':<48}")
    for i in range(0, max(len(expected), len(actual)), 16):
        exp_chunk = expected[i: i + 16]
        act_chunk = actual[i: i + 16]
        marker = "" if exp_chunk == act_chunk else "<<"
        print(f"   {i:08x} {_row(exp_chunk)} {_row(act_chunk)} {marker}")

    first_diff = next(
        (i for i in range(min(len(expected), len(actual))) if expected[i] != actual[i]),
        None,
    )
    if first_diff is not None:
        print(f"\n   First difference at byte offset {first_diff}")
    raise AssertionError(f"XDR mismatch in {ctx}")
