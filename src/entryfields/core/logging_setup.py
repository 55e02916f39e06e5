#!/usr/bin/env python3
"""
Purpose:
    Configures the loguru logger from the `logging` section of the
    entryfields configuration.
"""

import sys
from typing import Any, Dict, Optional

from loguru import logger

DEFAULT_FORMAT = "<level>{level: <8}</level> | {name}:{line} - {message}"


def configure_logging(config: Optional[Dict[str, Any]] = None) -> str:
    """
    Replace loguru's default sink with a stderr sink at the configured level.

    Returns:
        The effective (uppercased) level name.
    """
    section = (config or {}).get("logging") or {}
    level = str(section.get("level", "INFO")).strip().upper() or "INFO"
    logger.remove()
    logger.add(sys.stderr, level=level, format=section.get("format", DEFAULT_FORMAT))
    return level
