"""
Hash Functions

SHA-256 helpers used for network ids, transaction hashes and hash-x signers.
"""

import hashlib


def sha256_bytes(input_bytes: bytes) -> bytes:
    """
    Compute SHA-256 hash of input bytes.

    Args:
        input_bytes: Input bytes to hash

    Returns:
        SHA-256 hash as bytes (32 bytes)
    """
    return hashlib.sha256(input_bytes).digest()


def sha256_hex(input_bytes: bytes) -> str:
    """SHA-256 hash of input bytes as lower-case hex."""
    return hashlib.sha256(input_bytes).hexdigest()
