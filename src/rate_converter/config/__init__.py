# ⚙️ rate_converter/config/__init__.py
"""
⚙️ Пакет Config — централізована конфігурація та збирання залежностей.

- `ConfigService` завантажує config.yaml та .env.
- `Container` створює й звʼязує всі сервіси.
"""

from typing import TYPE_CHECKING

from .config_service import ConfigService

if TYPE_CHECKING:
    from .container import Container

__all__ = ["ConfigService", "Container"]


def __getattr__(name: str):
    if name == "Container":
        from .container import Container  # локальний імпорт → немає циклу

        return Container
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
