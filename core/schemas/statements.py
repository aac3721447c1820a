"""
Schemas - Signed Statements
File: statements.py

Purpose: Feed posts/comments authored under a wallet key.

Lifecycle per statement:
    UNSIGNED -> SIGNED -> {VERIFIED_VALID, VERIFIED_INVALID}

A statement is immutable once signed. Verification produces a separate
StatementVerification and may be repeated any number of times.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class StatementStatus(str, Enum):
    """Where a statement sits in its signing/verification lifecycle."""

    UNSIGNED = "unsigned"
    SIGNED = "signed"
    VERIFIED_VALID = "verified_valid"
    VERIFIED_INVALID = "verified_invalid"


class SignedStatement(BaseModel):
    """
    A user-authored post or comment with a detached signature.

    ``public_key`` and ``signature`` are kept in their transport encodings
    (base58 key, base64 signature by default); decoding happens at
    verification time so malformed values fail closed there.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    content: str = Field(..., description="Free-text body of the post")
    context_id: str = Field(..., description="Post / thread / statement identifier", min_length=1)
    timestamp_ms: int = Field(..., description="Authoring time as unix milliseconds", ge=0)
    public_key: str = Field(..., description="Claimed author public key (encoded)", min_length=1)
    signature: str | None = Field(
        default=None,
        description="Detached signature over the canonical message (encoded)",
    )

    @field_validator("timestamp_ms", mode="before")
    @classmethod
    def _reject_bool_timestamp(cls, value):
        if isinstance(value, bool):
            raise ValueError("timestamp_ms must be an integer, not a boolean")
        return value

    @property
    def status(self) -> StatementStatus:
        if not self.signature:
            return StatementStatus.UNSIGNED
        return StatementStatus.SIGNED

    def with_signature(self, signature: str) -> "SignedStatement":
        """Return the signed copy of an unsigned statement."""
        return self.model_copy(update={"signature": signature})


class StatementVerification(BaseModel):
    """Result of checking a statement's signature against its claimed key."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    context_id: str = Field(..., description="Identifier of the verified statement")
    public_key: str = Field(..., description="Claimed author key, as supplied")
    status: StatementStatus = Field(..., description="VERIFIED_VALID or VERIFIED_INVALID")

    @property
    def ok(self) -> bool:
        return self.status == StatementStatus.VERIFIED_VALID
