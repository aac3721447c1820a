"""
API Request Models

Pydantic models for API request validation.
"""

from typing import Any, Union

from pydantic import BaseModel, Field

from core.schemas.evidence import EvidenceItem


# One evidence entry as sent over the wire: a plain string or a structured item
EvidenceEntry = Union[EvidenceItem, str]


class EvidenceRequest(BaseModel):
    """Fields shared by every request that carries an evidence chain."""

    items: list[EvidenceEntry] = Field(
        ...,
        description="Evidence entries in commitment order",
    )
    domain_separated: bool | None = Field(
        default=None,
        description="Override the server's leaf/node hashing mode for this request",
    )


class CommitRequest(EvidenceRequest):
    """Request body for POST /commit and POST /anchors."""

    chain_id: str = Field(..., min_length=1, description="Garment / chain identifier")


class ProofRequest(EvidenceRequest):
    """Request body for POST /proof."""

    index: int = Field(..., description="0-based index of the item to prove")


class VerifyProofRequest(BaseModel):
    """Request body for POST /verify/proof."""

    item: EvidenceEntry = Field(..., description="The evidence entry claimed to be included")
    proof: dict[str, Any] = Field(..., description="Proof as returned by POST /proof")
    root: str = Field(..., description="Expected Merkle root, hex")
    leaf_count: int | None = Field(
        default=None,
        ge=1,
        description="Chain length from POST /proof; rejects indexes past the last item",
    )
    domain_separated: bool | None = Field(
        default=None,
        description="Override the server's leaf/node hashing mode for this request",
    )


class TraceabilityVerifyRequest(CommitRequest):
    """Request body for POST /verify/traceability."""

    expected_root: str = Field(..., description="Previously anchored root, hex")


class StatementVerifyRequest(BaseModel):
    """Request body for POST /verify/statement."""

    content: str = Field(..., description="Post or comment body")
    context_id: str = Field(..., min_length=1, description="Post / thread identifier")
    timestamp_ms: int = Field(..., ge=0, description="Authoring time as unix milliseconds")
    public_key: str = Field(
        ..., min_length=1, max_length=66, description="Claimed author public key"
    )
    signature: str | None = Field(
        default=None, max_length=130, description="Detached signature"
    )
