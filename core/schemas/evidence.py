"""
Schemas - Evidence Items
File: evidence.py

Purpose: Structured provenance facts for a garment's evidence chain.

An evidence chain is an ordered list of custody/processing events. Each
event becomes one Merkle leaf; order is significant and items are never
mutated once committed.
"""

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field

from .canonical import dumps_canonical


class EvidenceKind(str, Enum):
    """Category of a provenance fact."""

    SOURCE = "source"
    PROCESS = "process"
    CRAFT = "craft"
    QA = "qa"


class EvidenceItem(BaseModel):
    """
    A single provenance fact.

    The free-text ``payload`` keeps the flexibility of ad-hoc evidence
    strings ("chiapas", "mill-001", "artisan-001") while ``kind`` and
    ``timestamp`` give the item a fixed shape.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: EvidenceKind = Field(..., description="Category of the event")
    payload: str = Field(..., description="Free-text event detail", min_length=1)
    timestamp: int = Field(..., description="Event time as unix milliseconds", ge=0)

    def to_bytes(self) -> bytes:
        """Leaf bytes: canonical JSON of the item, UTF-8 encoded."""
        return dumps_canonical(self).encode("utf-8")

    def to_legacy_string(self) -> str:
        """Colon-joined form used by plain-string evidence chains."""
        return f"{self.kind.value}:{self.payload}:{self.timestamp}"


# Anything the commitment engine accepts as one evidence entry
EvidenceInput = Union[bytes, str, EvidenceItem]


class EvidenceChain(BaseModel):
    """
    An ordered evidence chain for one garment.

    Items may be plain strings (as produced by existing assemblers) or
    structured EvidenceItem objects; both commit the same way once
    converted to bytes.
    """

    model_config = ConfigDict(extra="forbid")

    chain_id: str = Field(..., description="Garment / chain identifier", min_length=1)
    items: list[Union[EvidenceItem, str]] = Field(
        default_factory=list,
        description="Evidence entries in commitment order",
    )
