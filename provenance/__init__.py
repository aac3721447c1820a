"""
Provenance - Evidence Chain Commitment & Verification

Composes the Merkle engine and anchor interface into garment-level
operations: commit a chain, anchor its root, re-verify it later, and
prove that a single event belongs to it.

Public API:
- commit_evidence / verify_traceability / verify_traceability_batch
- prove_inclusion / verify_inclusion
- LedgerAnchor, InMemoryLedgerAnchor, JsonFileLedgerAnchor
- anchor_evidence / verify_against_anchor / anchor_from_config
- load_evidence_file: read an evidence chain from .json or text
"""

from provenance.traceability import (
    RootInput,
    TraceabilityRequest,
    commit_evidence,
    evidence_leaves,
    evidence_to_bytes,
    prove_inclusion,
    verify_inclusion,
    verify_traceability,
    verify_traceability_batch,
)
from provenance.anchor import (
    InMemoryLedgerAnchor,
    JsonFileLedgerAnchor,
    LedgerAnchor,
    anchor_evidence,
    anchor_from_config,
    verify_against_anchor,
)
from provenance.io import load_evidence_file

__all__ = [
    "RootInput",
    "TraceabilityRequest",
    "commit_evidence",
    "evidence_leaves",
    "evidence_to_bytes",
    "prove_inclusion",
    "verify_inclusion",
    "verify_traceability",
    "verify_traceability_batch",
    "LedgerAnchor",
    "InMemoryLedgerAnchor",
    "JsonFileLedgerAnchor",
    "anchor_evidence",
    "anchor_from_config",
    "verify_against_anchor",
    "load_evidence_file",
]
