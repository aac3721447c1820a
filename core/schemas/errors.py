"""
Schemas - Error Taxonomy
File: errors.py

Purpose: Standard error taxonomy for the Threadline commitment engine.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Propagation policy:
- Structural misuse (empty evidence, out-of-range leaf index) raises.
- Untrusted data that fails to verify (tampered chain, corrupted proof,
  forged or malformed signature) is reported as a False / is_valid=False
  outcome, never an exception.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used across Threadline."""

    # Schema & Validation Errors
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"
    CANONICALIZATION_ERROR = "CANONICALIZATION_ERROR"
    CONFIG_ERROR = "CONFIG_ERROR"

    # Merkle & Commitment Errors
    EMPTY_INPUT = "EMPTY_INPUT"
    INDEX_OUT_OF_RANGE = "INDEX_OUT_OF_RANGE"
    MALFORMED_PROOF = "MALFORMED_PROOF"

    # Signature Errors
    MALFORMED_SIGNATURE = "MALFORMED_SIGNATURE"

    # Anchor Errors
    ANCHOR_NOT_FOUND = "ANCHOR_NOT_FOUND"
    ANCHOR_STORE_ERROR = "ANCHOR_STORE_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class ThreadlineError(BaseModel):
    """
    Base error model for structured error communication.

    Used for passing errors across the API and CLI boundaries without
    exceptions, enabling structured error handling and serialization.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.EMPTY_INPUT],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the operation can be retried",
    )

    def to_exception(self) -> "ThreadlineException":
        """Convert this error model to a raised exception."""
        return ThreadlineException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class ThreadlineException(Exception):
    """
    Base exception for all Threadline errors.

    Carries structured error information and can be converted
    to/from ThreadlineError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "THREADLINE_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> ThreadlineError:
        """Convert this exception to a ThreadlineError model."""
        return ThreadlineError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class EmptyInputError(ThreadlineException, ValueError):
    """Raised when a root or proof is requested over zero evidence items."""

    def __init__(
        self,
        message: str = "At least one evidence item is required",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.EMPTY_INPUT,
            details=details,
            retryable=False,
        )


class IndexOutOfRangeError(ThreadlineException, IndexError):
    """Raised when a proof is requested for a leaf index that does not exist."""

    def __init__(
        self,
        index: int,
        leaf_count: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["leaf_index"] = index
        full_details["leaf_count"] = leaf_count
        super().__init__(
            message=f"Leaf index {index} out of range for {leaf_count} leaves",
            code=ErrorCodes.INDEX_OUT_OF_RANGE,
            details=full_details,
            retryable=False,
        )


class MalformedProofError(ThreadlineException):
    """Raised when a serialized Merkle proof cannot be parsed."""

    def __init__(
        self,
        message: str,
        leaf_index: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if leaf_index is not None:
            full_details["leaf_index"] = leaf_index
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_PROOF,
            details=full_details,
            retryable=False,
        )


class MalformedSignatureError(ThreadlineException):
    """Raised when a signature or public key cannot be decoded."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.MALFORMED_SIGNATURE,
            details=details,
            retryable=False,
        )


class AnchorNotFoundError(ThreadlineException):
    """Raised when no root has been anchored for a chain id."""

    def __init__(
        self,
        chain_id: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["chain_id"] = chain_id
        super().__init__(
            message=f"No anchored root for chain {chain_id!r}",
            code=ErrorCodes.ANCHOR_NOT_FOUND,
            details=full_details,
            retryable=False,
        )


class AnchorStoreError(ThreadlineException):
    """Raised when an anchor store holds data that cannot be read back."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.ANCHOR_STORE_ERROR,
            details=details,
            retryable=False,
        )


class CanonicalizationException(ThreadlineException):
    """Exception raised when canonical serialization fails."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.CANONICALIZATION_ERROR,
            details=details,
            retryable=False,
        )


class SchemaValidationException(ThreadlineException):
    """Exception raised when schema validation fails."""

    def __init__(
        self,
        message: str,
        field_path: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if field_path:
            full_details["field_path"] = field_path
        super().__init__(
            message=message,
            code=ErrorCodes.SCHEMA_VALIDATION_ERROR,
            details=full_details,
            retryable=False,
        )


class ConfigurationException(ThreadlineException):
    """Exception raised when runtime configuration is invalid."""

    def __init__(
        self,
        message: str,
        key: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if key:
            full_details["key"] = key
        super().__init__(
            message=message,
            code=ErrorCodes.CONFIG_ERROR,
            details=full_details,
            retryable=False,
        )
