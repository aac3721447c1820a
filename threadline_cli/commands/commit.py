"""
CLI Commit Commands

Compute roots, build inclusion proofs and anchor evidence chains.

Usage:
    threadline root [ITEMS...] [--file F] [--domain-separated] [--json]
    threadline prove --index I [ITEMS...] [--file F] [--out PATH] [--json]
    threadline anchor --chain-id ID [ITEMS...] [--file F] [--anchor-file PATH]
"""

from __future__ import annotations

import json
import logging
import sys
from argparse import Namespace

from core.crypto.hashing import to_hex
from core.merkle.merkle_tree import build_merkle_root
from provenance.anchor import JsonFileLedgerAnchor, anchor_evidence
from provenance.io import save_json
from provenance.traceability import commit_evidence, evidence_leaves, prove_inclusion

from threadline_cli.commands.common import (
    EXIT_RUNTIME_ERROR,
    EXIT_SUCCESS,
    load_items,
    resolve_hasher,
)


logger = logging.getLogger(__name__)


def root_cmd(args: Namespace) -> int:
    """Print the Merkle root of an evidence chain."""
    items = load_items(args)
    commitment = commit_evidence(args.chain_id, items, resolve_hasher(args))

    if args.json:
        print(json.dumps(commitment.model_dump(), indent=2))
    else:
        print(f"root: {commitment.root}")
        print(f"leaf_count: {commitment.leaf_count}")
        print(f"proof_depth: {commitment.proof_depth}")
    return EXIT_SUCCESS


def prove_cmd(args: Namespace) -> int:
    """Build an inclusion proof for the item at --index."""
    items = load_items(args)
    hasher = resolve_hasher(args)
    proof = prove_inclusion(items, args.index, hasher)
    root = to_hex(build_merkle_root(evidence_leaves(items), hasher))

    proof_dict = proof.to_dict()
    if args.out:
        save_json(proof_dict, args.out)
        logger.info("Wrote proof for index %d to %s", args.index, args.out)

    if args.json:
        print(json.dumps({"root": root, "proof": proof_dict}, indent=2))
    else:
        print(f"root: {root}")
        print(f"index: {proof.index}")
        print(f"depth: {proof.depth}")
        for step in proof.steps:
            print(f"  {step.side.value:<5} {to_hex(step.sibling)}")
        if args.out:
            print(f"proof written to: {args.out}")
    return EXIT_SUCCESS


def anchor_cmd(args: Namespace) -> int:
    """Commit an evidence chain and store its root in a JSON anchor file."""
    anchor_path = args.anchor_file or args.runtime_config.anchor.path
    if not anchor_path:
        print("Error: --anchor-file is required (or set anchor.path in config)", file=sys.stderr)
        return EXIT_RUNTIME_ERROR

    items = load_items(args)
    commitment, receipt = anchor_evidence(
        args.chain_id, items, JsonFileLedgerAnchor(anchor_path), resolve_hasher(args)
    )

    if args.json:
        print(json.dumps(
            {
                "commitment": commitment.model_dump(),
                "receipt": receipt.model_dump(mode="json"),
            },
            indent=2,
        ))
    else:
        print(f"chain_id: {commitment.chain_id}")
        print(f"root: {commitment.root}")
        print(f"anchor_file: {anchor_path}")
        if receipt.replaced:
            print("note: replaced a previously anchored root")
    return EXIT_SUCCESS
