# log_config.py
from __future__ import annotations

import logging
import os
import sys
from typing import Optional


def level_from_env(default: int = logging.INFO) -> int:
    name = os.environ.get("AUTOSINK_LOG_LEVEL", "").strip().upper()
    if not name:
        return default
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else default


def setup_logging(level: Optional[int] = None) -> None:
    """Configure root logger for console. AUTOSINK_LOG_LEVEL wins when no level is given."""
    if level is None:
        level = level_from_env()
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )
