"""
Commit Routes

Compute the root of an evidence chain and build inclusion proofs.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import get_hasher
from api.models.requests import CommitRequest, ProofRequest
from api.models.responses import CommitResponse, ProofResponse
from core.crypto.hashing import to_hex
from core.merkle.merkle_tree import build_merkle_root
from provenance.traceability import commit_evidence, evidence_leaves, prove_inclusion


logger = logging.getLogger(__name__)

router = APIRouter(tags=["commitment"])


@router.post("/commit", response_model=CommitResponse)
def commit(request: CommitRequest) -> CommitResponse:
    """
    Compute the root to anchor for an evidence chain.

    An empty chain is rejected with EMPTY_INPUT.
    """
    hasher = get_hasher(request.domain_separated)
    commitment = commit_evidence(request.chain_id, request.items, hasher)
    return CommitResponse(ok=True, commitment=commitment)


@router.post("/proof", response_model=ProofResponse)
def proof(request: ProofRequest) -> ProofResponse:
    """
    Build an inclusion proof for the item at ``index``.

    An empty chain is rejected with EMPTY_INPUT, a bad index with
    INDEX_OUT_OF_RANGE.
    """
    hasher = get_hasher(request.domain_separated)
    merkle_proof = prove_inclusion(request.items, request.index, hasher)
    root = build_merkle_root(evidence_leaves(request.items), hasher)
    logger.debug("Built proof for index %d of %d items", request.index, len(request.items))
    return ProofResponse(
        ok=True,
        root=to_hex(root),
        leaf_count=len(request.items),
        proof=merkle_proof.to_dict(),
    )
