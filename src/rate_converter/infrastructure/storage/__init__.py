# 💽 rate_converter/infrastructure/storage/__init__.py
"""
💽 Сховище налаштувань.

🔹 `JsonFileStore` — key/value у JSON-файлі з атомарним записом.
🔹 `SettingsStore` — типізовані `Settings` / `LiveRate` поверх нього.
"""

from __future__ import annotations

from .json_store import JsonFileStore
from .settings_store import ChangeListener, SettingsStore

__all__ = ["JsonFileStore", "SettingsStore", "ChangeListener"]
