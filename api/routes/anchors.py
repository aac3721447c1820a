"""
Anchor Routes

Store committed roots and read them back.
"""

from __future__ import annotations

from fastapi import APIRouter

from api.deps import get_anchor, get_hasher
from api.models.requests import CommitRequest
from api.models.responses import AnchoredRootResponse, AnchorResponse
from core.crypto.hashing import to_hex
from core.schemas.errors import AnchorNotFoundError
from provenance.anchor import anchor_evidence


router = APIRouter(prefix="/anchors", tags=["anchors"])


@router.post("", response_model=AnchorResponse)
def create_anchor(request: CommitRequest) -> AnchorResponse:
    """Commit an evidence chain and anchor its root under ``chain_id``."""
    hasher = get_hasher(request.domain_separated)
    commitment, receipt = anchor_evidence(request.chain_id, request.items, get_anchor(), hasher)
    return AnchorResponse(ok=True, commitment=commitment, receipt=receipt)


@router.get("/{chain_id}", response_model=AnchoredRootResponse)
def get_anchored_root(chain_id: str) -> AnchoredRootResponse:
    """Return the root anchored for ``chain_id``, or 404."""
    root = get_anchor().get_root(chain_id)
    if root is None:
        raise AnchorNotFoundError(chain_id)
    return AnchoredRootResponse(ok=True, chain_id=chain_id, root=to_hex(root))
