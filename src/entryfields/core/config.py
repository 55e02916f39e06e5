#!/usr/bin/env python3
"""
entryfields configuration loader.
"""

import os
from pathlib import Path
from typing import Any, Dict, Final, List

from entryfields.core.utils import merge_dicts, load_json_file

# --- Defaults & locations --- #

DEFAULT_CONFIG: Final[Dict[str, Any]] = {
    "settings_paths": [str(Path(".").resolve())],
    "custom_fields": [],
    "logging": {"level": "INFO"},
}

GLOBAL_CONFIG_PATH: Final[Path] = Path.home() / ".config" / "entryfields" / "config.json"


# --- Public API --- #

def load_config() -> Dict[str, Any]:
    """
    Load entryfields configuration with layered precedence.

    Order:
        1. Built-in defaults
        2. Global config (~/.config/entryfields/config.json)
        3. Project config (./entryfields.json)
        4. Environment overrides:
           - ENTRYFIELDS_SETTINGS_PATHS (pathsep-separated list)
           - ENTRYFIELDS_CUSTOM_FIELDS (comma-separated dotted module paths)
           - ENTRYFIELDS_LOG_LEVEL

    Returns:
        A merged configuration dictionary.
    """
    # 1) start with defaults
    config = dict(DEFAULT_CONFIG)

    # 2) global config
    config = merge_dicts(config, load_json_file(GLOBAL_CONFIG_PATH))

    # 3) project config
    project_path = Path.cwd() / "entryfields.json"
    config = merge_dicts(config, load_json_file(project_path))

    # 4) environment overrides
    settings_paths_env = os.getenv("ENTRYFIELDS_SETTINGS_PATHS")
    if settings_paths_env:
        config["settings_paths"] = _split_paths_env(settings_paths_env)

    custom_fields_env = os.getenv("ENTRYFIELDS_CUSTOM_FIELDS")
    if custom_fields_env:
        config["custom_fields"] = [p.strip() for p in custom_fields_env.split(",") if p.strip()]

    log_level_env = os.getenv("ENTRYFIELDS_LOG_LEVEL")
    if log_level_env:
        config["logging"] = {**config.get("logging", {}), "level": log_level_env}

    return config


# --- Internals --- #

def _split_paths_env(value: str) -> List[str]:
    """
    Split a path-list env var on os.pathsep, trimming empties and expanding '~'.

    Example:
        "a:~/b:/tmp" on Unix  -> ["a", "/home/user/b", "/tmp"] (no resolve here)
    """
    parts = [p.strip() for p in value.split(os.pathsep)]
    return [str(Path(p).expanduser()) for p in parts if p]
