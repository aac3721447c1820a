"""
Runtime Configuration

Central configuration for the commitment engine, signature verification,
and anchor storage.
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from core.crypto.signatures import KeyEncoding, MessageFormat
from core.schemas.errors import ConfigurationException

load_dotenv()


ENV_PREFIX = "THREADLINE_"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class MerkleConfig:
    """Configuration for Merkle commitments."""
    # Legacy untagged hashing keeps roots compatible with anchored chains
    domain_separated: bool = False


@dataclass
class SignatureConfig:
    """Configuration for signed statement verification."""
    message_format: str = MessageFormat.LENGTH_PREFIXED.value
    public_key_encoding: str = KeyEncoding.BASE58.value
    signature_encoding: str = KeyEncoding.BASE64.value

    def __post_init__(self) -> None:
        try:
            MessageFormat(self.message_format)
        except ValueError:
            raise ConfigurationException(
                f"Unknown message format: {self.message_format!r}",
                key="signatures.message_format",
            ) from None
        for key in ("public_key_encoding", "signature_encoding"):
            value = getattr(self, key)
            try:
                KeyEncoding(value)
            except ValueError:
                raise ConfigurationException(
                    f"Unknown encoding for {key}: {value!r}",
                    key=f"signatures.{key}",
                ) from None


@dataclass
class AnchorConfig:
    """Configuration for the root anchor store."""
    # JSON file used by the file anchor; in-memory anchor when unset
    path: Optional[str] = None


@dataclass
class RuntimeConfig:
    """
    Complete runtime configuration for Threadline.

    Can be loaded from:
    - Environment variables
    - YAML or JSON file
    - Programmatic construction
    """
    merkle: MerkleConfig = field(default_factory=MerkleConfig)
    signatures: SignatureConfig = field(default_factory=SignatureConfig)
    anchor: AnchorConfig = field(default_factory=AnchorConfig)
    log_level: str = "INFO"
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.log_level = str(self.log_level).upper()
        if self.log_level not in _LOG_LEVELS:
            raise ConfigurationException(
                f"Unknown log level: {self.log_level!r}", key="log_level"
            )

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        This is the SINGLE source of truth for all env var reading.

        Supported variables:
        - THREADLINE_DOMAIN_SEPARATED: Domain-separated leaf/node hashing (true/false)
        - THREADLINE_MESSAGE_FORMAT: length_prefixed or delimited
        - THREADLINE_PUBLIC_KEY_ENCODING: base58, base64 or hex
        - THREADLINE_SIGNATURE_ENCODING: base58, base64 or hex
        - THREADLINE_ANCHOR_PATH: JSON file for the file anchor
        - THREADLINE_LOG_LEVEL: DEBUG, INFO, WARNING or ERROR
        """
        overrides: dict[str, Any] = {}

        if os.getenv(f"{ENV_PREFIX}DOMAIN_SEPARATED"):
            overrides.setdefault("merkle", {})["domain_separated"] = _parse_bool(
                os.getenv(f"{ENV_PREFIX}DOMAIN_SEPARATED", "false")
            )

        if os.getenv(f"{ENV_PREFIX}MESSAGE_FORMAT"):
            overrides.setdefault("signatures", {})["message_format"] = os.getenv(
                f"{ENV_PREFIX}MESSAGE_FORMAT"
            )
        if os.getenv(f"{ENV_PREFIX}PUBLIC_KEY_ENCODING"):
            overrides.setdefault("signatures", {})["public_key_encoding"] = os.getenv(
                f"{ENV_PREFIX}PUBLIC_KEY_ENCODING"
            )
        if os.getenv(f"{ENV_PREFIX}SIGNATURE_ENCODING"):
            overrides.setdefault("signatures", {})["signature_encoding"] = os.getenv(
                f"{ENV_PREFIX}SIGNATURE_ENCODING"
            )

        if os.getenv(f"{ENV_PREFIX}ANCHOR_PATH"):
            overrides.setdefault("anchor", {})["path"] = os.getenv(f"{ENV_PREFIX}ANCHOR_PATH")

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            overrides["log_level"] = os.getenv(f"{ENV_PREFIX}LOG_LEVEL")

        return overrides

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        """
        Load configuration purely from environment variables.

        Uses defaults for any values not specified in env vars.
        """
        return cls.from_dict(cls._get_env_overrides())

    @classmethod
    def from_yaml(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a YAML file."""
        import yaml
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)

    @classmethod
    def from_json(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        with open(path) as f:
            data = json.load(f)

        return cls.from_dict(data)

    @classmethod
    def from_file(cls, path: str | Path) -> "RuntimeConfig":
        """Load configuration from a .json, .yaml or .yml file."""
        path = Path(path)
        if path.suffix.lower() in (".yaml", ".yml"):
            return cls.from_yaml(path)
        return cls.from_json(path)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RuntimeConfig":
        """Load configuration from a dictionary (supports partial data)."""
        if not isinstance(data, dict):
            raise ConfigurationException("Configuration must be a mapping")

        merkle_data = data.get("merkle") or {}
        signatures_data = data.get("signatures") or {}
        anchor_data = data.get("anchor") or {}

        try:
            merkle = MerkleConfig(**merkle_data)
            signatures = SignatureConfig(**signatures_data)
            anchor = AnchorConfig(**anchor_data)
        except TypeError as e:
            raise ConfigurationException(f"Invalid configuration: {e}") from e

        return cls(
            merkle=merkle,
            signatures=signatures,
            anchor=anchor,
            log_level=data.get("log_level", "INFO"),
            extra=data.get("extra", {}),
        )

    def with_env_overrides(self) -> "RuntimeConfig":
        """
        Return a new config with environment variable overrides applied.

        This allows loading from a config file first, then overlaying env vars.
        """
        overrides = self._get_env_overrides()
        if not overrides:
            return self

        merged = self.to_dict()
        for section in ("merkle", "signatures", "anchor"):
            if section in overrides:
                merged[section].update(overrides[section])
        if "log_level" in overrides:
            merged["log_level"] = overrides["log_level"]
        merged["extra"] = copy.deepcopy(self.extra)

        return RuntimeConfig.from_dict(merged)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a dictionary."""
        return {
            "merkle": {
                "domain_separated": self.merkle.domain_separated,
            },
            "signatures": {
                "message_format": self.signatures.message_format,
                "public_key_encoding": self.signatures.public_key_encoding,
                "signature_encoding": self.signatures.signature_encoding,
            },
            "anchor": {
                "path": self.anchor.path,
            },
            "log_level": self.log_level,
            "extra": self.extra,
        }


def load_runtime_config(config_path: str | Path | None = None) -> RuntimeConfig:
    """
    Load RuntimeConfig from a config file, then overlay environment variables.

    Search order when no explicit path is given:
      1. ./threadline.json
      2. ./.threadline.json
      3. ~/.config/threadline/config.json

    Environment variables ALWAYS override config file values.
    """
    if config_path is not None:
        return RuntimeConfig.from_file(config_path).with_env_overrides()

    search_paths = [
        Path.cwd() / "threadline.json",
        Path.cwd() / ".threadline.json",
        Path.home() / ".config" / "threadline" / "config.json",
    ]
    for path in search_paths:
        if path.exists():
            return RuntimeConfig.from_json(path).with_env_overrides()

    return RuntimeConfig().with_env_overrides()


# Global default configuration
_default_config: Optional[RuntimeConfig] = None


def get_default_config() -> RuntimeConfig:
    """Get the default runtime configuration."""
    global _default_config
    if _default_config is None:
        _default_config = RuntimeConfig.from_env()
    return _default_config


def set_default_config(config: RuntimeConfig | None) -> None:
    """Set (or with None, reset) the default runtime configuration."""
    global _default_config
    _default_config = config
