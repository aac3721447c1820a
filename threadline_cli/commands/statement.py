"""
CLI Statement Command

Verify a signed feed post or comment.

Usage:
    threadline verify-statement --content C --context-id G --timestamp T \\
        --signature S --public-key K
"""

from __future__ import annotations

import json
from argparse import Namespace

from core.crypto.signatures import SignatureVerifier
from core.schemas.statements import SignedStatement

from threadline_cli.commands.common import EXIT_SUCCESS, EXIT_VERIFICATION_FAILED


def verify_statement_cmd(args: Namespace) -> int:
    """Check the statement's signature against its claimed public key."""
    statement = SignedStatement(
        content=args.content,
        context_id=args.context_id,
        timestamp_ms=args.timestamp,
        public_key=args.public_key,
        signature=args.signature,
    )
    verifier = SignatureVerifier.from_config(args.runtime_config.signatures)
    verification = verifier.verify_statement(statement)

    if args.json:
        print(json.dumps(
            {"ok": verification.ok, **verification.model_dump(mode="json")},
            indent=2,
        ))
    else:
        print(f"context_id: {verification.context_id}")
        print(f"status: {verification.status.value}")
    return EXIT_SUCCESS if verification.ok else EXIT_VERIFICATION_FAILED
