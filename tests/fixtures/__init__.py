"""
Test fixtures package for Threadline tests.

This package provides factory functions for creating test objects:
- common.py: evidence chains, signing keys, signed statements and a
  hashlib-only reference Merkle fold

Usage:
    from fixtures.common import make_signed_statement, reference_root

    def test_something():
        statement = make_signed_statement(context_id="post-42")
"""

from .common import (
    BASE_TIMESTAMP_MS,
    CHIAPAS_ITEMS,
    DATED_CHIAPAS_ITEMS,
    encode_public_key,
    make_evidence_chain,
    make_evidence_item,
    make_signed_statement,
    make_signing_key,
    make_structured_chain,
    reference_root,
    sign_message,
)

__all__ = [
    "BASE_TIMESTAMP_MS",
    "CHIAPAS_ITEMS",
    "DATED_CHIAPAS_ITEMS",
    "encode_public_key",
    "make_evidence_chain",
    "make_evidence_item",
    "make_signed_statement",
    "make_signing_key",
    "make_structured_chain",
    "reference_root",
    "sign_message",
]
