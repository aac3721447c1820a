"""
Merkle - Tree Implementation
Deterministic Merkle commitment over an ordered list of evidence items,
inclusion proof generation, and proof verification.

Canonical Commitment Rules (Hard Contracts):
1. Leaf hashing: leaf = sha256(item)                    (legacy, default)
                 leaf = sha256(0x00 + item)             (domain-separated)
2. Parent hashing: parent = sha256(left + right)        (legacy, default)
                   parent = sha256(0x01 + left + right) (domain-separated)
3. Padding rule: duplicate the last node if a level has an odd count,
   at every level (never promote the lone node unchanged)
4. Empty input: no root is defined; EmptyInputError is raised
5. Single item: root = leaf hash of that item, proof depth 0

Determinism Notes:
- No randomness or non-deterministic ordering
- Leaf order is defined by the evidence assembler and never sorted here,
  so reordering items always changes the root
"""
from __future__ import annotations

import hmac
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Sequence

from core.crypto.hashing import (
    DIGEST_SIZE,
    LEAF_PREFIX,
    NODE_PREFIX,
    digest_from_hex,
    hash_concat,
    sha256,
    to_hex,
)
from core.schemas.errors import (
    EmptyInputError,
    IndexOutOfRangeError,
    MalformedProofError,
)


logger = logging.getLogger(__name__)


class Side(str, Enum):
    """Position of a sibling relative to the node being folded."""

    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class MerkleHasher:
    """
    Leaf and node hashing strategy.

    The legacy strategy uses the same untagged SHA-256 for leaves and
    internal nodes, which keeps roots compatible with already-anchored
    chains. The domain-separated strategy tags leaves with 0x00 and nodes
    with 0x01 so a node digest can never be replayed as a leaf.
    """
    domain_separated: bool = False

    def leaf(self, item: bytes) -> bytes:
        if self.domain_separated:
            return sha256(LEAF_PREFIX + item)
        return sha256(item)

    def parent(self, left: bytes, right: bytes) -> bytes:
        if self.domain_separated:
            return sha256(NODE_PREFIX + left + right)
        return hash_concat(left, right)


LEGACY_HASHER = MerkleHasher(domain_separated=False)
DOMAIN_SEPARATED_HASHER = MerkleHasher(domain_separated=True)


@dataclass(frozen=True)
class ProofStep:
    """One level of an inclusion proof: the sibling digest and its side."""
    sibling: bytes
    side: Side


@dataclass(frozen=True)
class MerkleProof:
    """
    A Merkle inclusion proof for a single leaf.

    Attributes:
        index: 0-based position of the leaf in the evidence list
        steps: Sibling digests with their sides, from the leaf level up.
               len(steps) == ceil(log2(leaf_count)).
    """
    index: int
    steps: tuple[ProofStep, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable tuple
        object.__setattr__(self, "steps", tuple(self.steps))

    @property
    def depth(self) -> int:
        return len(self.steps)

    def to_dict(self) -> dict[str, Any]:
        """Serialize with 0x-hex siblings and "left"/"right" sides."""
        return {
            "index": self.index,
            "steps": [
                {"sibling": to_hex(step.sibling), "side": Side(step.side).value}
                for step in self.steps
            ],
        }

    @classmethod
    def from_dict(cls, data: Any) -> "MerkleProof":
        """
        Parse a proof produced by to_dict().

        Raises:
            MalformedProofError: If the structure, index, hex or sides are invalid.
        """
        if not isinstance(data, dict):
            raise MalformedProofError("Proof must be a JSON object")

        index = data.get("index")
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            raise MalformedProofError(
                "Proof index must be a non-negative integer",
                details={"index": repr(index)},
            )

        raw_steps = data.get("steps", [])
        if not isinstance(raw_steps, list):
            raise MalformedProofError("Proof steps must be a list", leaf_index=index)

        steps: list[ProofStep] = []
        for position, raw in enumerate(raw_steps):
            if not isinstance(raw, dict):
                raise MalformedProofError(
                    f"Proof step {position} must be an object", leaf_index=index
                )
            try:
                sibling = digest_from_hex(raw.get("sibling"))
                side = Side(raw.get("side"))
            except ValueError as e:
                raise MalformedProofError(
                    f"Proof step {position} is invalid: {e}", leaf_index=index
                ) from e
            steps.append(ProofStep(sibling=sibling, side=side))

        return cls(index=index, steps=tuple(steps))


def leaf_hash(item: bytes, hasher: MerkleHasher = LEGACY_HASHER) -> bytes:
    """
    Hash one evidence item into a leaf digest.

    Example:
        >>> leaf_hash(b"a") == sha256(b"a")
        True
    """
    return hasher.leaf(item)


def merkle_parent(
    left: bytes,
    right: bytes,
    hasher: MerkleHasher = LEGACY_HASHER,
) -> bytes:
    """Compute the parent digest of two child digests."""
    return hasher.parent(left, right)


def build_merkle_levels(
    items: Sequence[bytes],
    hasher: MerkleHasher = LEGACY_HASHER,
) -> list[list[bytes]]:
    """
    Build every level of the tree, leaves first, root level last.

    Levels are stored unpadded; the duplicate partner of an odd last
    node is implied.

    Raises:
        EmptyInputError: If items is empty.
    """
    if len(items) == 0:
        raise EmptyInputError("Cannot build a Merkle tree over zero evidence items")

    current_level: list[bytes] = [hasher.leaf(item) for item in items]
    levels: list[list[bytes]] = [current_level]

    while len(current_level) > 1:
        # Pad with duplicate of last node if odd
        if len(current_level) % 2 == 1:
            current_level = current_level + [current_level[-1]]

        current_level = [
            hasher.parent(current_level[i], current_level[i + 1])
            for i in range(0, len(current_level), 2)
        ]
        levels.append(current_level)

    return levels


def build_merkle_root(
    items: Sequence[bytes],
    hasher: MerkleHasher = LEGACY_HASHER,
) -> bytes:
    """
    Build the Merkle root of an ordered, non-empty list of items.

    Padding Rule: Duplicate last node at each level if odd.
    Example: [a, b, c] -> [H(a), H(b), H(c), H(c)] -> [H(ab), H(cc)] -> root

    Raises:
        EmptyInputError: If items is empty.
    """
    levels = build_merkle_levels(items, hasher)
    root = levels[-1][0]
    logger.debug(
        "Built Merkle root over %d items (depth %d)", len(items), len(levels) - 1
    )
    return root


def build_merkle_proof(
    items: Sequence[bytes],
    index: int,
    hasher: MerkleHasher = LEGACY_HASHER,
) -> MerkleProof:
    """
    Generate an inclusion proof for the item at the given index.

    At each level the sibling is the node at (index XOR 1); when the
    current node is the odd last one, its sibling is its own duplicate.
    An even index means the current node is a left child, so the sibling
    sits on the right.

    Raises:
        EmptyInputError: If items is empty.
        IndexOutOfRangeError: If index < 0 or index >= len(items).
    """
    if len(items) == 0:
        raise EmptyInputError("Cannot generate proof for empty evidence list")

    if isinstance(index, bool) or index < 0 or index >= len(items):
        raise IndexOutOfRangeError(index, len(items))

    levels = build_merkle_levels(items, hasher)

    steps: list[ProofStep] = []
    current_index = index
    for level in levels[:-1]:
        sibling_index = current_index ^ 1
        if sibling_index >= len(level):
            sibling = level[current_index]
        else:
            sibling = level[sibling_index]

        side = Side.RIGHT if current_index % 2 == 0 else Side.LEFT
        steps.append(ProofStep(sibling=sibling, side=side))
        current_index //= 2

    return MerkleProof(index=index, steps=tuple(steps))


def _is_digest(value: Any) -> bool:
    return isinstance(value, (bytes, bytearray)) and len(value) == DIGEST_SIZE


def verify_merkle_proof(
    leaf: bytes,
    proof: MerkleProof,
    expected_root: bytes,
    hasher: MerkleHasher = LEGACY_HASHER,
    leaf_count: int | None = None,
) -> bool:
    """
    Verify an inclusion proof against an expected root.

    Folds from the leaf upward: a LEFT sibling gives parent(sibling, current),
    a RIGHT sibling gives parent(current, sibling). The recorded sides must
    agree with the bits of proof.index, and the index must fit in
    len(proof.steps) bits.

    Because odd levels duplicate their last node, the last leaf of a tree
    with an odd leaf count also verifies at the padding position: in a
    3-leaf tree the proof for index 2 is equally valid as index 3. Pass
    leaf_count when it is known to reject any index >= leaf_count.

    Never raises: a malformed proof or digest is reported as False, the
    same as a proof that simply does not match.
    """
    try:
        if not _is_digest(leaf) or not _is_digest(expected_root):
            return False

        index = proof.index
        if isinstance(index, bool) or not isinstance(index, int) or index < 0:
            return False

        if leaf_count is not None and index >= leaf_count:
            return False

        steps = tuple(proof.steps)
        if index >> len(steps):
            # Index does not fit the proof depth
            return False

        current = bytes(leaf)
        for level, step in enumerate(steps):
            if not _is_digest(step.sibling):
                return False

            expected_side = Side.LEFT if (index >> level) & 1 else Side.RIGHT
            if Side(step.side) is not expected_side:
                return False

            if expected_side is Side.LEFT:
                current = hasher.parent(bytes(step.sibling), current)
            else:
                current = hasher.parent(current, bytes(step.sibling))

        return hmac.compare_digest(current, bytes(expected_root))
    except (AttributeError, TypeError, ValueError) as e:
        logger.debug("Rejected malformed Merkle proof: %s", e)
        return False


def compute_tree_depth(num_leaves: int) -> int:
    """
    Number of proof steps for a tree with num_leaves leaves: ceil(log2(n)).

    A single leaf has depth 0, two leaves depth 1, three or four depth 2.

    Raises:
        EmptyInputError: If num_leaves < 1.
    """
    if num_leaves < 1:
        raise EmptyInputError("Tree depth is undefined for zero leaves")
    return (num_leaves - 1).bit_length()


__all__ = [
    "Side",
    "MerkleHasher",
    "LEGACY_HASHER",
    "DOMAIN_SEPARATED_HASHER",
    "ProofStep",
    "MerkleProof",
    "leaf_hash",
    "merkle_parent",
    "build_merkle_levels",
    "build_merkle_root",
    "build_merkle_proof",
    "verify_merkle_proof",
    "compute_tree_depth",
]
