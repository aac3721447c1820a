"""
Crypto - Hashing Utilities
Basic hashing utilities for Merkle commitments over evidence chains.

This module provides:
- SHA-256 hashing for raw bytes
- Hex encoding/decoding with 0x prefix
- Leaf/node domain tags for the domain-separated tree variant

Security/Determinism Notes:
- Always hash raw bytes exactly as given; no whitespace stripping
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
import string


# Size of every digest produced by this module
DIGEST_SIZE: int = 32

# Domain tags (RFC 6962 style) for the domain-separated tree variant
LEAF_PREFIX: bytes = b"\x00"
NODE_PREFIX: bytes = b"\x01"


def sha256(data: bytes) -> bytes:
    """
    Compute SHA-256 hash of raw bytes.

    Example:
        >>> sha256(b"hello").hex()
        '2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824'
    """
    return hashlib.sha256(data).digest()


def hash_concat(left: bytes, right: bytes) -> bytes:
    """
    Hash the concatenation of two byte sequences: sha256(left + right).

    This is the legacy (untagged) Merkle parent hash.
    """
    return sha256(left + right)


def to_hex(data: bytes) -> str:
    """
    Convert bytes to a lowercase hexadecimal string with 0x prefix.

    Example:
        >>> to_hex(bytes.fromhex("deadbeef"))
        '0xdeadbeef'
    """
    return "0x" + data.hex()


def from_hex(hex_string: str) -> bytes:
    """
    Convert a hexadecimal string to bytes.

    The 0x prefix is optional so that roots copied from explorers or
    anchoring services without a prefix are accepted as well.

    Raises:
        ValueError: If the value is not a string, has odd length, or
                    contains invalid hex characters.

    Example:
        >>> from_hex("0xdeadbeef").hex()
        'deadbeef'
    """
    if not isinstance(hex_string, str):
        raise ValueError(f"Hex value must be a string, got {type(hex_string).__name__}")

    hex_content = hex_string[2:] if hex_string[:2].lower() == "0x" else hex_string

    if len(hex_content) % 2 != 0:
        raise ValueError(
            f"Hex string must have even length, got length {len(hex_content)}"
        )

    # bytes.fromhex tolerates embedded whitespace; a root must not
    if any(c not in string.hexdigits for c in hex_content):
        raise ValueError("Invalid hex characters in string")

    try:
        return bytes.fromhex(hex_content)
    except ValueError as e:
        raise ValueError(f"Invalid hex characters in string: {e}") from e


def digest_from_hex(hex_string: str) -> bytes:
    """
    Decode a hex string that must hold exactly one 32-byte digest.

    Raises:
        ValueError: On bad hex or a decoded length other than 32 bytes.
    """
    digest = from_hex(hex_string)
    if len(digest) != DIGEST_SIZE:
        raise ValueError(
            f"Digest must be {DIGEST_SIZE} bytes, got {len(digest)}"
        )
    return digest


__all__ = [
    "DIGEST_SIZE",
    "LEAF_PREFIX",
    "NODE_PREFIX",
    "sha256",
    "hash_concat",
    "to_hex",
    "from_hex",
    "digest_from_hex",
]
