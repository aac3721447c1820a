"""
Shared helpers for CLI commands: exit codes, evidence loading, hasher choice.
"""

from __future__ import annotations

from argparse import Namespace
from typing import Union

from core.merkle.merkle_proofs import hasher_from_config
from core.merkle.merkle_tree import DOMAIN_SEPARATED_HASHER, MerkleHasher
from core.schemas.evidence import EvidenceItem
from provenance.io import load_evidence_file


# Exit codes
EXIT_SUCCESS = 0
EXIT_RUNTIME_ERROR = 1
EXIT_VERIFICATION_FAILED = 2


def load_items(args: Namespace) -> list[Union[EvidenceItem, str]]:
    """
    Evidence items from --file, followed by any positional ITEMS.

    Raises:
        FileNotFoundError: If --file does not exist.
        SchemaValidationException: If --file is JSON that is not evidence.
    """
    items: list[Union[EvidenceItem, str]] = []
    if getattr(args, "file", None):
        items.extend(load_evidence_file(args.file))
    items.extend(getattr(args, "items", None) or [])
    return items


def resolve_hasher(args: Namespace) -> MerkleHasher:
    """--domain-separated wins, otherwise the loaded config decides."""
    if getattr(args, "domain_separated", False):
        return DOMAIN_SEPARATED_HASHER
    return hasher_from_config(args.runtime_config)


def status_text(ok: bool) -> str:
    return "verified" if ok else "not verified"
