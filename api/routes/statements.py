"""
Statement Routes

Verify signed posts and comments from the feed.
"""

from __future__ import annotations

from fastapi import APIRouter

from api.deps import get_signature_verifier
from api.models.requests import StatementVerifyRequest
from api.models.responses import StatementVerifyResponse
from core.schemas.statements import SignedStatement


router = APIRouter(prefix="/verify", tags=["statements"])


@router.post("/statement", response_model=StatementVerifyResponse)
def verify_statement(request: StatementVerifyRequest) -> StatementVerifyResponse:
    """
    Check a statement's signature against its claimed public key.

    Unsigned statements and undecodable keys or signatures come back
    with ok=false and status verified_invalid.
    """
    statement = SignedStatement(**request.model_dump())
    verification = get_signature_verifier().verify_statement(statement)
    return StatementVerifyResponse(
        ok=verification.ok,
        context_id=verification.context_id,
        public_key=verification.public_key,
        status=verification.status,
    )
