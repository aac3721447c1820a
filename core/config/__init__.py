"""
Runtime Configuration Module

Provides configuration loading and management for Threadline.
"""

from .runtime import (
    AnchorConfig,
    MerkleConfig,
    RuntimeConfig,
    SignatureConfig,
    get_default_config,
    load_runtime_config,
    set_default_config,
)

__all__ = [
    "RuntimeConfig",
    "MerkleConfig",
    "SignatureConfig",
    "AnchorConfig",
    "get_default_config",
    "set_default_config",
    "load_runtime_config",
]
