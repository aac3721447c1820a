"""
Verify Routes

Check inclusion proofs and re-verify evidence chains against a root.
Data that fails verification yields ok=false, never an error response.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter

from api.deps import get_anchor, get_hasher
from api.models.requests import CommitRequest, TraceabilityVerifyRequest, VerifyProofRequest
from api.models.responses import TraceabilityResponse, VerifyProofResponse
from core.merkle.merkle_tree import MerkleProof
from core.schemas.errors import MalformedProofError
from core.schemas.verification import TraceabilityResult
from provenance.anchor import verify_against_anchor
from provenance.traceability import verify_inclusion, verify_traceability


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/verify", tags=["verification"])


def _traceability_response(result: TraceabilityResult) -> TraceabilityResponse:
    return TraceabilityResponse(ok=result.is_valid, status=result.status, result=result)


@router.post("/proof", response_model=VerifyProofResponse)
def verify_proof(request: VerifyProofRequest) -> VerifyProofResponse:
    """Check that ``item`` is committed under ``root``."""
    try:
        merkle_proof = MerkleProof.from_dict(request.proof)
    except MalformedProofError as e:
        logger.info("Rejected malformed proof: %s", e.message)
        return VerifyProofResponse(ok=False)

    hasher = get_hasher(request.domain_separated)
    ok = verify_inclusion(
        request.item, merkle_proof, request.root, hasher, leaf_count=request.leaf_count
    )
    return VerifyProofResponse(ok=ok)


@router.post("/traceability", response_model=TraceabilityResponse)
def verify_chain(request: TraceabilityVerifyRequest) -> TraceabilityResponse:
    """Recompute the chain's root and compare it to ``expected_root``."""
    hasher = get_hasher(request.domain_separated)
    result = verify_traceability(request.chain_id, request.items, request.expected_root, hasher)
    return _traceability_response(result)


@router.post("/anchored", response_model=TraceabilityResponse)
def verify_anchored(request: CommitRequest) -> TraceabilityResponse:
    """
    Re-verify a chain against the root stored for ``chain_id``.

    Returns 404 ANCHOR_NOT_FOUND when nothing was anchored for the chain.
    """
    hasher = get_hasher(request.domain_separated)
    result = verify_against_anchor(request.chain_id, request.items, get_anchor(), hasher)
    return _traceability_response(result)
