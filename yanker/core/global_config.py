# yanker/core/global_config.py

import os
import shlex
from pathlib import Path
from typing import List, Optional
import yaml

from yanker.core.constants import DEFAULT_CARGO_COMMAND, DEFAULT_HTTP_TIMEOUT

CONFIG_PATH = Path.home() / ".yanker" / "config.yaml"


def load_global_config(config_path: Optional[Path] = None) -> Optional[dict]:
    """Load config from ~/.yanker/config.yaml"""
    config_path = config_path or CONFIG_PATH

    if not config_path.exists():
        return None

    try:
        data = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError):
        return None

    return data if isinstance(data, dict) else None


def _get_section_value(section: str, key: str, config_path: Optional[Path] = None):
    config = load_global_config(config_path)
    if config and isinstance(config.get(section), dict):
        return config[section].get(key)
    return None


def get_cargo_command(config_path: Optional[Path] = None) -> List[str]:
    """
    Get the cargo command (as argv prefix) from:
    1. Environment variable YANKER_CARGO
    2. Global config ~/.yanker/config.yaml (cargo.path)
    3. Plain 'cargo' on PATH
    """

    # 1. Env var (highest priority)
    if env_cargo := os.getenv("YANKER_CARGO"):
        return shlex.split(env_cargo)

    # 2. Global config
    configured = _get_section_value("cargo", "path", config_path)
    if configured:
        return shlex.split(str(configured))

    # 3. Default
    return [DEFAULT_CARGO_COMMAND]


def get_http_timeout(config_path: Optional[Path] = None) -> float:
    """HTTP timeout in seconds: YANKER_HTTP_TIMEOUT, then http.timeout, then default."""
    candidates = (os.getenv("YANKER_HTTP_TIMEOUT"), _get_section_value("http", "timeout", config_path))
    for value in candidates:
        if value is None or value == "":
            continue
        try:
            timeout = float(value)
        except (TypeError, ValueError):
            continue
        if timeout > 0:
            return timeout

    return DEFAULT_HTTP_TIMEOUT


def is_global_fail_fast(config_path: Optional[Path] = None) -> bool:
    value = _get_section_value("yank", "fail_fast", config_path)
    if isinstance(value, bool):
        return value

    return False  # Keep going by default
