#!/usr/bin/env python3
"""
Purpose:
    Wires together the entryfields application context by merging
    configuration, building the field registry and loading the site
    settings file.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Iterable, Optional

from loguru import logger

from entryfields.core.config import load_config
from entryfields.core.constants import SETTINGS_FILENAME
from entryfields.core.fields.registry import FieldRegistry, build_registry
from entryfields.core.schema.content_schema import load_settings


# --- Data model --- #

@dataclass(frozen=True)
class AppContext:
    """Immutable container for configuration, field registry and settings."""
    config: Dict[str, Any]
    registry: FieldRegistry
    settings: Dict[str, Any]
    settings_path: Optional[Path] = None


# --- Factory --- #

def find_settings_file(roots: Iterable[Path]) -> Optional[Path]:
    """First existing settings file (`.pages.yml`) among `roots`; roots may also be files."""
    for root in roots:
        candidate = root if root.is_file() else root / SETTINGS_FILENAME
        if candidate.is_file():
            return candidate
    return None


def build_context(
    *,
    config: Optional[Dict[str, Any]] = None,
    settings_path: Optional[Path] = None,
) -> AppContext:
    """
    Build an `AppContext`.

    Args:
        config:
            Pre-merged configuration. If omitted, `load_config()` is used.
        settings_path:
            Explicit settings file. Defaults to the first `.pages.yml` found
            in `config['settings_paths']`; no file means empty settings.

    Returns:
        AppContext: immutable bundle of config, field registry and settings.

    Raises:
        FieldRegistryError: if a custom field module is malformed
        ValueError / FileNotFoundError: if the settings file cannot be loaded
    """
    cfg = config or load_config()
    registry = build_registry(custom_paths=cfg.get("custom_fields", []))

    path = settings_path or find_settings_file(Path(p) for p in cfg.get("settings_paths", []))
    settings: Dict[str, Any] = {}
    if path is not None:
        settings = load_settings(path)
        logger.debug(f"Loaded settings from {path}")
    else:
        logger.debug("No settings file found; using empty settings")

    return AppContext(config=cfg, registry=registry, settings=settings, settings_path=path)
