"""
CLI Verify Commands

Check inclusion proofs and re-verify evidence chains offline.

Usage:
    threadline verify-proof --item S --proof PATH --root HEX
    threadline verify --chain-id ID [ITEMS...] [--file F] (--root HEX | --anchor-file PATH)

Exit code 2 means the data did not verify.
"""

from __future__ import annotations

import json
import logging
from argparse import Namespace

from core.schemas.errors import MalformedProofError
from core.schemas.verification import TraceabilityResult
from provenance.anchor import JsonFileLedgerAnchor, verify_against_anchor
from provenance.io import load_proof_file
from provenance.traceability import verify_inclusion, verify_traceability

from threadline_cli.commands.common import (
    EXIT_SUCCESS,
    EXIT_VERIFICATION_FAILED,
    load_items,
    resolve_hasher,
    status_text,
)


logger = logging.getLogger(__name__)


def verify_proof_cmd(args: Namespace) -> int:
    """Check that --item is committed under --root."""
    try:
        proof = load_proof_file(args.proof)
    except MalformedProofError as e:
        logger.warning("Proof file rejected: %s", e.message)
        ok = False
    else:
        ok = verify_inclusion(
            args.item, proof, args.root, resolve_hasher(args), leaf_count=args.leaf_count
        )

    if args.json:
        print(json.dumps({"ok": ok}, indent=2))
    else:
        print(f"inclusion: {status_text(ok)}")
    return EXIT_SUCCESS if ok else EXIT_VERIFICATION_FAILED


def print_result(result: TraceabilityResult, output_json: bool) -> None:
    if output_json:
        print(json.dumps(result.model_dump(), indent=2))
        return
    print(f"chain_id: {result.chain_id}")
    print(f"status: {result.status}")
    print(f"recomputed_root: {result.recomputed_root}")
    print(f"proof_depth: {result.proof_depth}")


def verify_cmd(args: Namespace) -> int:
    """
    Re-verify an evidence chain against --root or the root held in an
    anchor file. A chain with no anchored root is a runtime error.
    """
    items = load_items(args)
    hasher = resolve_hasher(args)

    if args.root is not None:
        result = verify_traceability(args.chain_id, items, args.root, hasher)
    else:
        anchor = JsonFileLedgerAnchor(args.anchor_file)
        result = verify_against_anchor(args.chain_id, items, anchor, hasher)

    print_result(result, args.json)
    return EXIT_SUCCESS if result.is_valid else EXIT_VERIFICATION_FAILED
