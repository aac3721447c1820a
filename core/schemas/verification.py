"""
Schemas - Commitment & Verification Results
File: verification.py

Purpose: Standard result formats returned by the commitment engine to the
verifier UI, CLI and API. Failures of untrusted data are reported through
these models (is_valid=False), never through exceptions.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ChainCommitment(BaseModel):
    """Root committed for an evidence chain, ready to be anchored."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    chain_id: str = Field(..., description="Garment / chain identifier", min_length=1)
    root: str = Field(..., description="Merkle root as 0x-prefixed hex")
    leaf_count: int = Field(..., description="Number of evidence items committed", ge=1)
    proof_depth: int = Field(..., description="Inclusion proof length: ceil(log2(leaf_count))", ge=0)
    domain_separated: bool = Field(
        default=False,
        description="Whether leaf/node hashing used domain tags",
    )


class TraceabilityResult(BaseModel):
    """
    Outcome of re-verifying an evidence chain against an expected root.

    Deliberately carries no hint of which item diverged: a failed check
    exposes only the recomputed root and the depth.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    chain_id: str = Field(..., description="Garment / chain identifier")
    is_valid: bool = Field(..., description="Whether the recomputed root equals the expected root")
    recomputed_root: str = Field(..., description="Root recomputed from the evidence, 0x-prefixed hex")
    proof_depth: int = Field(..., description="ceil(log2(leaf_count)); 0 for a single item", ge=0)
    leaf_count: int = Field(..., description="Number of evidence items", ge=1)

    @property
    def status(self) -> str:
        return "verified" if self.is_valid else "not verified"


class AnchorReceipt(BaseModel):
    """Acknowledgement returned by a ledger anchor after storing a root."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    chain_id: str = Field(..., description="Garment / chain identifier", min_length=1)
    root: str = Field(..., description="Anchored root, 0x-prefixed hex")
    anchored_at: datetime = Field(..., description="When the anchor accepted the root (UTC)")
    replaced: bool = Field(
        default=False,
        description="Whether a previously anchored root was overwritten",
    )
