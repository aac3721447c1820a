"""
Merkle Commitments
Deterministic Merkle tree construction + proof generation/verification
for garment evidence chains.

This module provides:
- MerkleProof / ProofStep / Side: inclusion proof structures
- MerkleHasher: legacy or domain-separated leaf/node hashing
- build_merkle_root: Compute root from raw evidence items
- build_merkle_proof: Generate proof for a specific item
- verify_merkle_proof: Verify a proof against an expected root

Usage:
    from core.merkle import build_merkle_root, build_merkle_proof, verify_merkle_proof, leaf_hash

    items = [b"sourced:chiapas:2024-01-15", b"spun:mill-001:2024-01-20"]
    root = build_merkle_root(items)
    proof = build_merkle_proof(items, index=1)
    assert verify_merkle_proof(leaf_hash(items[1]), proof, root)
"""
from .merkle_tree import (
    DOMAIN_SEPARATED_HASHER,
    LEGACY_HASHER,
    MerkleHasher,
    MerkleProof,
    ProofStep,
    Side,
    build_merkle_levels,
    build_merkle_proof,
    build_merkle_root,
    compute_tree_depth,
    leaf_hash,
    merkle_parent,
    verify_merkle_proof,
)

from .merkle_proofs import (
    MerkleProver,
    MerkleVerifier,
    hasher_from_config,
)


__all__ = [
    # Core types
    "Side",
    "ProofStep",
    "MerkleProof",
    "MerkleHasher",
    "LEGACY_HASHER",
    "DOMAIN_SEPARATED_HASHER",
    # Core functions
    "leaf_hash",
    "merkle_parent",
    "build_merkle_levels",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
    # Convenience classes
    "MerkleProver",
    "MerkleVerifier",
    "hasher_from_config",
]
