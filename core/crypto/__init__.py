"""
Core cryptographic utilities.

Hashing for Merkle commitments and Ed25519 verification for signed statements.
"""
from .hashing import (
    DIGEST_SIZE,
    LEAF_PREFIX,
    NODE_PREFIX,
    digest_from_hex,
    from_hex,
    hash_concat,
    sha256,
    to_hex,
)
from .signatures import (
    KeyEncoding,
    MessageFormat,
    SignatureVerifier,
    canonical_message,
    decode_public_key,
    decode_signature,
    max_encoded_length,
    verify_encoded_signature,
    verify_signature,
)

__all__ = [
    "DIGEST_SIZE",
    "LEAF_PREFIX",
    "NODE_PREFIX",
    "sha256",
    "hash_concat",
    "to_hex",
    "from_hex",
    "digest_from_hex",
    "KeyEncoding",
    "MessageFormat",
    "SignatureVerifier",
    "canonical_message",
    "decode_public_key",
    "decode_signature",
    "max_encoded_length",
    "verify_signature",
    "verify_encoded_signature",
]
