"""API request and response models."""

from api.models.requests import (
    CommitRequest,
    EvidenceRequest,
    ProofRequest,
    StatementVerifyRequest,
    TraceabilityVerifyRequest,
    VerifyProofRequest,
)
from api.models.responses import (
    AnchoredRootResponse,
    AnchorResponse,
    CommitResponse,
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    ProofResponse,
    StatementVerifyResponse,
    TraceabilityResponse,
    VerifyProofResponse,
)

__all__ = [
    "CommitRequest",
    "EvidenceRequest",
    "ProofRequest",
    "StatementVerifyRequest",
    "TraceabilityVerifyRequest",
    "VerifyProofRequest",
    "AnchoredRootResponse",
    "AnchorResponse",
    "CommitResponse",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "ProofResponse",
    "StatementVerifyResponse",
    "TraceabilityResponse",
    "VerifyProofResponse",
]
