"""
Merkle - Prover / Verifier Wrappers
Thin class-based wrappers around merkle_tree.py, bound to one hashing
strategy so callers cannot mix legacy and domain-separated digests.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

from core.merkle.merkle_tree import (
    DOMAIN_SEPARATED_HASHER,
    LEGACY_HASHER,
    MerkleHasher,
    MerkleProof,
    build_merkle_proof,
    build_merkle_root,
    compute_tree_depth,
    verify_merkle_proof,
)

if TYPE_CHECKING:
    from core.config.runtime import RuntimeConfig


def hasher_from_config(config: "RuntimeConfig | None" = None) -> MerkleHasher:
    """Pick the hashing strategy named by the runtime configuration."""
    if config is None:
        from core.config.runtime import get_default_config
        config = get_default_config()
    if config.merkle.domain_separated:
        return DOMAIN_SEPARATED_HASHER
    return LEGACY_HASHER


class MerkleProver:
    """
    Computes roots and inclusion proofs for raw evidence items.

    Example:
        >>> prover = MerkleProver()
        >>> proof = prover.prove([b"a", b"b", b"c"], index=1)
        >>> proof.depth
        2
    """

    def __init__(self, hasher: MerkleHasher = LEGACY_HASHER) -> None:
        self.hasher = hasher

    def root(self, items: Sequence[bytes]) -> bytes:
        """
        Compute the 32-byte root of a non-empty item list.

        Raises:
            EmptyInputError: If items is empty.
        """
        return build_merkle_root(items, self.hasher)

    def prove(self, items: Sequence[bytes], index: int) -> MerkleProof:
        """
        Generate an inclusion proof for the item at index.

        Raises:
            EmptyInputError: If items is empty.
            IndexOutOfRangeError: If index is out of range.
        """
        return build_merkle_proof(items, index, self.hasher)

    def depth(self, items: Sequence[bytes]) -> int:
        return compute_tree_depth(len(items))


class MerkleVerifier:
    """
    Verifies inclusion proofs. Every method returns a bool and never raises.

    Example:
        >>> verifier = MerkleVerifier()
        >>> verifier.verify(b"b", proof, root)
        True
    """

    def __init__(self, hasher: MerkleHasher = LEGACY_HASHER) -> None:
        self.hasher = hasher

    def verify_leaf(
        self,
        leaf: bytes,
        proof: MerkleProof,
        root: bytes,
        leaf_count: int | None = None,
    ) -> bool:
        """Verify a proof starting from an already-hashed leaf digest."""
        return verify_merkle_proof(leaf, proof, root, self.hasher, leaf_count)

    def verify(
        self,
        item: bytes,
        proof: MerkleProof,
        root: bytes,
        leaf_count: int | None = None,
    ) -> bool:
        """Hash the raw item with this verifier's strategy, then verify."""
        if not isinstance(item, (bytes, bytearray)):
            return False
        return self.verify_leaf(self.hasher.leaf(bytes(item)), proof, root, leaf_count)


__all__ = [
    "hasher_from_config",
    "MerkleProver",
    "MerkleVerifier",
]
