"""
Provenance - File IO

Read evidence chains and proofs from disk for the CLI.

Evidence files:
- *.json: a list whose entries are strings or EvidenceItem objects,
  or an EvidenceChain object {"chain_id": ..., "items": [...]}
- anything else: UTF-8 text, one evidence string per non-empty line
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Union

from pydantic import TypeAdapter, ValidationError

from core.merkle.merkle_tree import MerkleProof
from core.schemas.errors import MalformedProofError, SchemaValidationException
from core.schemas.evidence import EvidenceChain, EvidenceItem


_ITEMS_ADAPTER = TypeAdapter(list[Union[EvidenceItem, str]])


def load_evidence_file(path: str | Path) -> list[Union[EvidenceItem, str]]:
    """
    Load an ordered evidence list from a .json or text file.

    Raises:
        FileNotFoundError: If the file does not exist.
        SchemaValidationException: If the JSON does not describe evidence.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Evidence file not found: {path}")

    text = path.read_text(encoding="utf-8")

    if path.suffix.lower() != ".json":
        # Trailing newline characters are not part of an item
        return [line.rstrip("\r\n") for line in text.splitlines() if line.strip()]

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SchemaValidationException(
            f"Evidence file {path} is not valid JSON: {e}"
        ) from e

    try:
        if isinstance(data, dict):
            return list(EvidenceChain.model_validate(data).items)
        return _ITEMS_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise SchemaValidationException(
            f"Evidence file {path} does not match the evidence schema",
            details={"errors": e.errors(include_url=False)},
        ) from e


def load_proof_file(path: str | Path) -> MerkleProof:
    """
    Load a proof written by save_json(proof.to_dict()).

    Raises:
        FileNotFoundError: If the file does not exist.
        MalformedProofError: If the file is not a valid proof.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Proof file not found: {path}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MalformedProofError(f"Proof file {path} is not valid JSON: {e}") from e

    return MerkleProof.from_dict(data)


def save_json(data: Any, path: str | Path) -> Path:
    """Write data as indented JSON, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2) + "\n", encoding="utf-8")
    return path


__all__ = ["load_evidence_file", "load_proof_file", "save_json"]
