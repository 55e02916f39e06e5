#!/usr/bin/env python3
"""
Purpose:
    Provides a module-level accessor for the entryfields AppContext, with
    optional reload and overrides for configuration and the settings file.
"""
from pathlib import Path
from typing import Any, Dict, Optional

from entryfields.core.app_context import AppContext, build_context
from entryfields.core.fields.registry import FieldRegistry

# --- Module state --- #

_CTX: Optional[AppContext] = None


# --- Public API --- #

def get_context(
    *,
    force_reload: bool = False,
    config_override: Optional[Dict[str, Any]] = None,
    settings_path_override: Optional[Path] = None,
) -> AppContext:
    """
    Return the process-wide `AppContext`.

    Args:
        force_reload:
            If True, rebuilds the context even if one is already cached.
        config_override:
            Optional configuration dict to use instead of `load_config()`.
        settings_path_override:
            Optional settings file used instead of the one found in `config['settings_paths']`.

    Returns:
        A loaded `AppContext` instance.
    """
    global _CTX
    if _CTX is None or force_reload or config_override or settings_path_override:
        _CTX = build_context(config=config_override, settings_path=settings_path_override)
    return _CTX


def get_registry() -> FieldRegistry:
    """The process-wide field registry (built once, read-only afterwards)."""
    return get_context().registry
