"""
API Response Models

Pydantic models for API response serialization.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.schemas.statements import StatementStatus
from core.schemas.verification import AnchorReceipt, ChainCommitment, TraceabilityResult


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "threadline-api"
    version: str = "v1"


class CommitResponse(BaseModel):
    """Response for POST /commit endpoint."""

    ok: bool = True
    commitment: ChainCommitment = Field(..., description="Root, depth and leaf count")


class ProofResponse(BaseModel):
    """Response for POST /proof endpoint."""

    ok: bool = True
    root: str = Field(..., description="Root the proof verifies against")
    leaf_count: int = Field(..., description="Number of evidence items")
    proof: dict[str, Any] = Field(..., description="Index and sibling steps")


class VerifyProofResponse(BaseModel):
    """Response for POST /verify/proof endpoint."""

    ok: bool = Field(..., description="Whether the item is included under the root")


class TraceabilityResponse(BaseModel):
    """Response for POST /verify/traceability and POST /verify/anchored."""

    ok: bool = Field(..., description="Whether the chain matches the expected root")
    status: str = Field(..., description="'verified' or 'not verified'")
    result: TraceabilityResult


class AnchorResponse(BaseModel):
    """Response for POST /anchors endpoint."""

    ok: bool = True
    commitment: ChainCommitment
    receipt: AnchorReceipt


class AnchoredRootResponse(BaseModel):
    """Response for GET /anchors/{chain_id} endpoint."""

    ok: bool = True
    chain_id: str
    root: str = Field(..., description="Anchored root, 0x-prefixed hex")


class StatementVerifyResponse(BaseModel):
    """Response for POST /verify/statement endpoint."""

    ok: bool = Field(..., description="Whether the signature is valid for the claimed key")
    context_id: str
    public_key: str
    status: StatementStatus


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
