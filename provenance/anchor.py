"""
Provenance - Ledger Anchors

The engine never talks to a ledger. Whatever durably stores a committed
root sits behind the LedgerAnchor interface; the engine only compares
against the root an anchor hands back.

Implementations:
- InMemoryLedgerAnchor: thread-safe dict, used as the test double and by
  the development API server
- JsonFileLedgerAnchor: a local JSON file of {chain_id: root}, used by the CLI
"""
from __future__ import annotations

import json
import logging
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from pathlib import Path
from typing import TYPE_CHECKING, Optional, Sequence

from core.crypto.hashing import DIGEST_SIZE, digest_from_hex, to_hex
from core.merkle.merkle_tree import LEGACY_HASHER, MerkleHasher
from core.schemas.errors import (
    AnchorNotFoundError,
    AnchorStoreError,
    SchemaValidationException,
)
from core.schemas.evidence import EvidenceInput
from core.schemas.verification import AnchorReceipt, ChainCommitment, TraceabilityResult

from provenance.traceability import commit_evidence, verify_traceability

if TYPE_CHECKING:
    from core.config.runtime import RuntimeConfig


logger = logging.getLogger(__name__)


def _require_digest(root: bytes) -> bytes:
    if not isinstance(root, (bytes, bytearray)) or len(root) != DIGEST_SIZE:
        raise SchemaValidationException(
            f"Anchored root must be {DIGEST_SIZE} bytes", field_path="root"
        )
    return bytes(root)


class LedgerAnchor(ABC):
    """Interface for durable root storage keyed by chain id."""

    @abstractmethod
    def get_root(self, chain_id: str) -> Optional[bytes]:
        """Return the anchored root for chain_id, or None if never anchored."""
        raise NotImplementedError

    @abstractmethod
    def put_root(self, chain_id: str, root: bytes) -> AnchorReceipt:
        """Store root for chain_id and acknowledge it."""
        raise NotImplementedError


class InMemoryLedgerAnchor(LedgerAnchor):
    """Process-local anchor. Roots are lost when the process exits."""

    def __init__(self) -> None:
        self._roots: dict[str, bytes] = {}
        self._lock = threading.Lock()

    def get_root(self, chain_id: str) -> Optional[bytes]:
        with self._lock:
            return self._roots.get(chain_id)

    def put_root(self, chain_id: str, root: bytes) -> AnchorReceipt:
        root = _require_digest(root)
        with self._lock:
            replaced = chain_id in self._roots
            self._roots[chain_id] = root
        return AnchorReceipt(
            chain_id=chain_id,
            root=to_hex(root),
            anchored_at=datetime.now(timezone.utc),
            replaced=replaced,
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._roots)


class JsonFileLedgerAnchor(LedgerAnchor):
    """
    Anchor backed by a JSON file mapping chain ids to 0x-hex roots.

    Writes go through a temporary file and os.replace so a crash never
    leaves a half-written file behind.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.Lock()

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise AnchorStoreError(
                f"Anchor file {self.path} is not valid JSON: {e}",
                details={"path": str(self.path)},
            ) from e
        if not isinstance(data, dict):
            raise AnchorStoreError(
                f"Anchor file {self.path} must hold a JSON object",
                details={"path": str(self.path)},
            )
        return data

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get_root(self, chain_id: str) -> Optional[bytes]:
        with self._lock:
            value = self._read().get(chain_id)
        if value is None:
            return None
        try:
            return digest_from_hex(value)
        except ValueError as e:
            raise AnchorStoreError(
                f"Anchor file holds an invalid root for {chain_id!r}: {e}",
                details={"path": str(self.path), "chain_id": chain_id},
            ) from e

    def put_root(self, chain_id: str, root: bytes) -> AnchorReceipt:
        root = _require_digest(root)
        with self._lock:
            data = self._read()
            replaced = chain_id in data
            data[chain_id] = to_hex(root)
            self._write(data)
        logger.debug("Wrote root for %s to %s", chain_id, self.path)
        return AnchorReceipt(
            chain_id=chain_id,
            root=to_hex(root),
            anchored_at=datetime.now(timezone.utc),
            replaced=replaced,
        )


def anchor_from_config(config: "RuntimeConfig") -> LedgerAnchor:
    """File anchor when anchor.path is configured, otherwise in-memory."""
    if config.anchor.path:
        return JsonFileLedgerAnchor(config.anchor.path)
    return InMemoryLedgerAnchor()


def anchor_evidence(
    chain_id: str,
    items: Sequence[EvidenceInput],
    anchor: LedgerAnchor,
    hasher: MerkleHasher = LEGACY_HASHER,
) -> tuple[ChainCommitment, AnchorReceipt]:
    """
    Commit an evidence chain and store its root with the anchor.

    Raises:
        EmptyInputError: If items is empty.
    """
    commitment = commit_evidence(chain_id, items, hasher)
    receipt = anchor.put_root(chain_id, digest_from_hex(commitment.root))
    if receipt.replaced:
        logger.warning("Anchored root for %s replaced a previous root", chain_id)
    return commitment, receipt


def verify_against_anchor(
    chain_id: str,
    items: Sequence[EvidenceInput],
    anchor: LedgerAnchor,
    hasher: MerkleHasher = LEGACY_HASHER,
) -> TraceabilityResult:
    """
    Re-verify an evidence chain against the root its anchor holds.

    Raises:
        AnchorNotFoundError: If nothing was anchored for chain_id.
        EmptyInputError: If items is empty.
    """
    anchored = anchor.get_root(chain_id)
    if anchored is None:
        raise AnchorNotFoundError(chain_id)
    return verify_traceability(chain_id, items, anchored, hasher)


__all__ = [
    "LedgerAnchor",
    "InMemoryLedgerAnchor",
    "JsonFileLedgerAnchor",
    "anchor_from_config",
    "anchor_evidence",
    "verify_against_anchor",
]
