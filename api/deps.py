"""
API Dependencies

Factories for the runtime config, hasher, signature verifier and the
anchor store shared by all requests.
"""

from __future__ import annotations

import logging
import threading
from typing import Optional

from core.config.runtime import RuntimeConfig, load_runtime_config
from core.crypto.signatures import SignatureVerifier
from core.merkle.merkle_proofs import hasher_from_config
from core.merkle.merkle_tree import DOMAIN_SEPARATED_HASHER, LEGACY_HASHER, MerkleHasher
from provenance.anchor import LedgerAnchor, anchor_from_config

logger = logging.getLogger(__name__)


_config: Optional[RuntimeConfig] = None
_anchor: Optional[LedgerAnchor] = None
_anchor_lock = threading.Lock()


def get_runtime_config() -> RuntimeConfig:
    """Load RuntimeConfig once: config file search, then environment overrides."""
    global _config
    if _config is None:
        _config = load_runtime_config()
        logger.info(
            "Loaded runtime config (domain_separated=%s, anchor=%s)",
            _config.merkle.domain_separated,
            _config.anchor.path or "memory",
        )
    return _config


def get_hasher(domain_separated: bool | None = None) -> MerkleHasher:
    """Hasher for one request; an explicit flag overrides the server default."""
    if domain_separated is None:
        return hasher_from_config(get_runtime_config())
    return DOMAIN_SEPARATED_HASHER if domain_separated else LEGACY_HASHER


def get_signature_verifier() -> SignatureVerifier:
    """Create a SignatureVerifier from the signature config section."""
    return SignatureVerifier.from_config(get_runtime_config().signatures)


def get_anchor() -> LedgerAnchor:
    """Return the process-wide anchor store, creating it on first use."""
    global _anchor
    with _anchor_lock:
        if _anchor is None:
            _anchor = anchor_from_config(get_runtime_config())
        return _anchor


def reset_dependencies(
    config: RuntimeConfig | None = None,
    anchor: LedgerAnchor | None = None,
) -> None:
    """Replace (or with no arguments, drop) the cached config and anchor."""
    global _config, _anchor
    with _anchor_lock:
        _config = config
        _anchor = anchor
