"""Load a ``NetworkConfig`` from YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Optional

import yaml

from evdock.config.network import NetworkConfig


def load_network_config(path: Optional[str | Path] = None) -> NetworkConfig:
    """Read and validate a network config file.

    The path falls back to ``$EVDOCK_CONFIG_PATH``; with neither set, the
    built-in defaults are returned.  Missing sections use defaults.
    """
    raw_path = path or os.getenv("EVDOCK_CONFIG_PATH")
    if not raw_path:
        return NetworkConfig()

    config_path = Path(raw_path).resolve()
    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"{config_path}: expected a mapping at the top level")
    return NetworkConfig(**data)
