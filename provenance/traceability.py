"""
Provenance - Evidence Chain Traceability

Composes the Merkle engine into the operations a garment verifier needs:
commit an evidence chain, re-verify it against a previously anchored root,
and prove/verify inclusion of a single event.

All functions here are pure and hold no shared state, so verifying many
chains concurrently needs no coordination (see verify_traceability_batch).
"""
from __future__ import annotations

import hmac
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from core.crypto.hashing import DIGEST_SIZE, digest_from_hex, to_hex
from core.merkle.merkle_tree import (
    LEGACY_HASHER,
    MerkleHasher,
    MerkleProof,
    build_merkle_proof,
    build_merkle_root,
    compute_tree_depth,
    verify_merkle_proof,
)
from core.schemas.errors import SchemaValidationException
from core.schemas.evidence import EvidenceInput, EvidenceItem
from core.schemas.verification import ChainCommitment, TraceabilityResult


logger = logging.getLogger(__name__)


# A root as supplied by a caller: raw digest or hex text
RootInput = Union[bytes, str]


def evidence_to_bytes(item: EvidenceInput) -> bytes:
    """
    Convert one evidence entry to the bytes that get hashed into a leaf.

    bytes pass through unchanged, strings are UTF-8 encoded, and
    EvidenceItem objects use their canonical JSON form.

    Raises:
        SchemaValidationException: For any other type.
    """
    if isinstance(item, (bytes, bytearray)):
        return bytes(item)
    if isinstance(item, str):
        return item.encode("utf-8")
    if isinstance(item, EvidenceItem):
        return item.to_bytes()
    raise SchemaValidationException(
        f"Unsupported evidence item type: {type(item).__name__}",
        details={"type": type(item).__name__},
    )


def evidence_leaves(items: Sequence[EvidenceInput]) -> list[bytes]:
    """Convert an evidence chain to leaf input bytes, preserving order."""
    return [evidence_to_bytes(item) for item in items]


def _coerce_root(expected_root: RootInput) -> Optional[bytes]:
    """Decode an expected root; None when it is not a 32-byte digest."""
    if isinstance(expected_root, (bytes, bytearray)):
        return bytes(expected_root) if len(expected_root) == DIGEST_SIZE else None
    if isinstance(expected_root, str):
        try:
            return digest_from_hex(expected_root)
        except ValueError:
            return None
    return None


def commit_evidence(
    chain_id: str,
    items: Sequence[EvidenceInput],
    hasher: MerkleHasher = LEGACY_HASHER,
) -> ChainCommitment:
    """
    Compute the root to anchor for an evidence chain.

    Raises:
        EmptyInputError: If items is empty.
    """
    root = build_merkle_root(evidence_leaves(items), hasher)
    commitment = ChainCommitment(
        chain_id=chain_id,
        root=to_hex(root),
        leaf_count=len(items),
        proof_depth=compute_tree_depth(len(items)),
        domain_separated=hasher.domain_separated,
    )
    logger.info("Committed chain %s: %d items, root %s", chain_id, len(items), commitment.root)
    return commitment


def verify_traceability(
    chain_id: str,
    items: Sequence[EvidenceInput],
    expected_root: RootInput,
    hasher: MerkleHasher = LEGACY_HASHER,
) -> TraceabilityResult:
    """
    Recompute the root of an evidence chain and compare it to an anchored root.

    A malformed expected root (bad hex, wrong length) is treated like a
    mismatch: the result is simply not valid.

    Raises:
        EmptyInputError: If items is empty.
    """
    recomputed = build_merkle_root(evidence_leaves(items), hasher)
    expected = _coerce_root(expected_root)

    is_valid = expected is not None and hmac.compare_digest(recomputed, expected)
    if is_valid:
        logger.info("Chain %s verified", chain_id)
    else:
        logger.warning("Chain %s not verified", chain_id)

    return TraceabilityResult(
        chain_id=chain_id,
        is_valid=is_valid,
        recomputed_root=to_hex(recomputed),
        proof_depth=compute_tree_depth(len(items)),
        leaf_count=len(items),
    )


def prove_inclusion(
    items: Sequence[EvidenceInput],
    index: int,
    hasher: MerkleHasher = LEGACY_HASHER,
) -> MerkleProof:
    """
    Build an inclusion proof for the evidence entry at index.

    Raises:
        EmptyInputError: If items is empty.
        IndexOutOfRangeError: If index is out of range.
    """
    return build_merkle_proof(evidence_leaves(items), index, hasher)


def verify_inclusion(
    item: EvidenceInput,
    proof: MerkleProof,
    expected_root: RootInput,
    hasher: MerkleHasher = LEGACY_HASHER,
    leaf_count: Optional[int] = None,
) -> bool:
    """
    Check that one evidence entry is committed under expected_root. Never raises.

    leaf_count, when the chain length is known, rejects proofs for the
    padding position past the last item.
    """
    try:
        leaf = hasher.leaf(evidence_to_bytes(item))
    except SchemaValidationException:
        return False
    root = _coerce_root(expected_root)
    if root is None:
        return False
    return verify_merkle_proof(leaf, proof, root, hasher, leaf_count)


@dataclass(frozen=True)
class TraceabilityRequest:
    """One chain to re-verify in a batch."""
    chain_id: str
    items: Sequence[EvidenceInput]
    expected_root: RootInput


def verify_traceability_batch(
    requests: Sequence[TraceabilityRequest],
    max_workers: Optional[int] = None,
    hasher: MerkleHasher = LEGACY_HASHER,
) -> list[TraceabilityResult]:
    """
    Verify many evidence chains concurrently.

    Results are returned in request order. Structural errors (an empty
    chain) propagate from the failing request.
    """
    if not requests:
        return []

    def _verify(request: TraceabilityRequest) -> TraceabilityResult:
        return verify_traceability(
            request.chain_id, request.items, request.expected_root, hasher
        )

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        return list(pool.map(_verify, requests))


__all__ = [
    "RootInput",
    "evidence_to_bytes",
    "evidence_leaves",
    "commit_evidence",
    "verify_traceability",
    "prove_inclusion",
    "verify_inclusion",
    "TraceabilityRequest",
    "verify_traceability_batch",
]
