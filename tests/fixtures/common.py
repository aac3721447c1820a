"""
Common test fixtures shared by all modules.

Provides factory functions for core Threadline data structures:
- EvidenceItem / evidence chains
- Ed25519 signing keys and SignedStatement
- An independent reference fold for Merkle roots

These are the foundational building blocks used by higher-level tests.
"""

import base64
import hashlib
from typing import Optional

import base58
from nacl.signing import SigningKey

from core.crypto.signatures import MessageFormat, canonical_message
from core.schemas.evidence import EvidenceItem, EvidenceKind
from core.schemas.statements import SignedStatement


# The three-event chain a garment verifier sees for a Chiapas-sourced garment
CHIAPAS_ITEMS = ["chiapas", "mill-001", "artisan-001"]

# The same chain as dated stage:actor:date events
DATED_CHIAPAS_ITEMS = [
    "sourced:chiapas:2024-01-15",
    "spun:mill-001:2024-01-20",
    "woven:artisan-001:2024-02-10",
]

# 2026-03-01T00:00:00Z in unix milliseconds
BASE_TIMESTAMP_MS = 1772323200000


# =============================================================================
# Evidence Factories
# =============================================================================

def make_evidence_item(
    kind: EvidenceKind = EvidenceKind.SOURCE,
    payload: str = "chiapas",
    timestamp: int = BASE_TIMESTAMP_MS,
) -> EvidenceItem:
    """Create a structured EvidenceItem for testing."""
    return EvidenceItem(kind=kind, payload=payload, timestamp=timestamp)


def make_evidence_chain(count: int, prefix: str = "event") -> list[str]:
    """Create count distinct plain-string evidence entries."""
    return [f"{prefix}-{i:03d}" for i in range(count)]


def make_structured_chain() -> list[EvidenceItem]:
    """The Chiapas chain as structured items, one per stage."""
    return [
        make_evidence_item(EvidenceKind.SOURCE, "chiapas", BASE_TIMESTAMP_MS),
        make_evidence_item(EvidenceKind.PROCESS, "mill-001", BASE_TIMESTAMP_MS + 86_400_000),
        make_evidence_item(EvidenceKind.CRAFT, "artisan-001", BASE_TIMESTAMP_MS + 172_800_000),
    ]


# =============================================================================
# Reference Merkle Fold
# =============================================================================

def reference_root(items: list[bytes], domain_separated: bool = False) -> bytes:
    """
    Fold a root with hashlib only, independent of core.merkle.

    Odd levels duplicate their last node.
    """
    leaf_tag = b"\x00" if domain_separated else b""
    node_tag = b"\x01" if domain_separated else b""

    level = [hashlib.sha256(leaf_tag + item).digest() for item in items]
    while len(level) > 1:
        if len(level) % 2:
            level.append(level[-1])
        level = [
            hashlib.sha256(node_tag + level[i] + level[i + 1]).digest()
            for i in range(0, len(level), 2)
        ]
    return level[0]


# =============================================================================
# Signing Factories
# =============================================================================

def make_signing_key(seed_byte: int = 7) -> SigningKey:
    """Deterministic Ed25519 key derived from a repeated seed byte."""
    return SigningKey(bytes([seed_byte]) * 32)


def encode_public_key(signing_key: SigningKey) -> str:
    """Base58 text of the key's verify key, as a wallet would show it."""
    return base58.b58encode(bytes(signing_key.verify_key)).decode("ascii")


def sign_message(signing_key: SigningKey, message: bytes) -> str:
    """Base64 detached signature over message."""
    return base64.b64encode(signing_key.sign(message).signature).decode("ascii")


def make_signed_statement(
    signing_key: Optional[SigningKey] = None,
    content: str = "Hand-loomed in San Cristóbal, dyed with indigo.",
    context_id: str = "post-0001",
    timestamp_ms: int = BASE_TIMESTAMP_MS,
    message_format: MessageFormat = MessageFormat.LENGTH_PREFIXED,
) -> SignedStatement:
    """Create a statement signed by signing_key under message_format."""
    signing_key = signing_key or make_signing_key()
    message = canonical_message(content, context_id, timestamp_ms, message_format)
    return SignedStatement(
        content=content,
        context_id=context_id,
        timestamp_ms=timestamp_ms,
        public_key=encode_public_key(signing_key),
        signature=sign_message(signing_key, message),
    )
