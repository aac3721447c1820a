"""
Schemas
File: __init__.py

Purpose: Export the public API for the schemas module.
This is the main entry point for other modules to import schema definitions.
"""

# Canonical serialization API
from .canonical import (
    CANONICAL_JSON_SEPARATORS,
    canonicalize_value,
    dumps_canonical,
)

# Error models and exceptions
from .errors import (
    AnchorNotFoundError,
    AnchorStoreError,
    CanonicalizationException,
    ConfigurationException,
    EmptyInputError,
    ErrorCodes,
    IndexOutOfRangeError,
    MalformedProofError,
    MalformedSignatureError,
    SchemaValidationException,
    ThreadlineError,
    ThreadlineException,
)

# Evidence schemas
from .evidence import (
    EvidenceChain,
    EvidenceInput,
    EvidenceItem,
    EvidenceKind,
)

# Signed statement schemas
from .statements import (
    SignedStatement,
    StatementStatus,
    StatementVerification,
)

# Commitment / verification results
from .verification import (
    AnchorReceipt,
    ChainCommitment,
    TraceabilityResult,
)


__all__ = [
    # Canonical serialization
    "dumps_canonical",
    "canonicalize_value",
    "CANONICAL_JSON_SEPARATORS",
    # Errors
    "ErrorCodes",
    "ThreadlineError",
    "ThreadlineException",
    "EmptyInputError",
    "IndexOutOfRangeError",
    "MalformedProofError",
    "MalformedSignatureError",
    "AnchorNotFoundError",
    "AnchorStoreError",
    "CanonicalizationException",
    "SchemaValidationException",
    "ConfigurationException",
    # Evidence
    "EvidenceKind",
    "EvidenceItem",
    "EvidenceChain",
    "EvidenceInput",
    # Statements
    "SignedStatement",
    "StatementStatus",
    "StatementVerification",
    # Verification
    "ChainCommitment",
    "TraceabilityResult",
    "AnchorReceipt",
]
