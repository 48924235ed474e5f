# 🧰 rate_converter/shared/utils/__init__.py
"""
🧰 Спільні утиліти конвертера: наразі лише узгоджене логування.
"""

from __future__ import annotations

from .logger import (
    LOG_NAME,
    get_logger,
    init_logging,
    init_logging_from_config,
)

__all__ = [
    "LOG_NAME",
    "get_logger",
    "init_logging",
    "init_logging_from_config",
]
