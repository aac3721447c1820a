"""
CLI Configuration

Loads the shared RuntimeConfig for the CLI and provides the template
written by `threadline config --init`.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

from core.config.runtime import ENV_PREFIX, RuntimeConfig, load_runtime_config


def load_config(config_path: Path | None = None) -> RuntimeConfig:
    """
    Load configuration from file and/or environment.

    Environment variables override file settings. Without an explicit path
    the default locations (./threadline.json, ./.threadline.json,
    ~/.config/threadline/config.json) are searched.

    Raises:
        FileNotFoundError: If an explicit config_path does not exist.
        ConfigurationException: If the file holds invalid settings.
    """
    if config_path is not None and not Path(config_path).exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    return load_runtime_config(config_path)


def get_log_file(config: RuntimeConfig) -> str | None:
    """Log file from THREADLINE_LOG_FILE, else the config's extra.log_file."""
    return os.getenv(f"{ENV_PREFIX}LOG_FILE") or config.extra.get("log_file")


def get_default_config_template() -> str:
    """Get a template configuration file."""
    return json.dumps(RuntimeConfig().to_dict(), indent=2) + "\n"
