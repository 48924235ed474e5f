# 💱 rate_converter/domain/currency/__init__.py
"""
💱 Пакет `domain.currency` публікує DTO, контракти та чисту логіку курсів.

🔹 `models.py` — `Settings`, `LiveRate`, `RateTable` і ключі сховища.
🔹 `interfaces.py` — протоколи `IKeyValueStore` та `IRateFetcher`.
🔹 `rate_resolver.py` — побудова таблиці курсів і конвертація.
"""

from .interfaces import IKeyValueStore, IRateFetcher
from .models import LiveRate, RateTable, Settings
from .rate_resolver import (
    SUPPORTED_CURRENCIES,
    RateResolver,
    conversion_rate,
    convert,
    effective_table,
    inverse_rate,
)

__all__ = [
    "IKeyValueStore",
    "IRateFetcher",
    "LiveRate",
    "RateTable",
    "Settings",
    "SUPPORTED_CURRENCIES",
    "RateResolver",
    "conversion_rate",
    "convert",
    "effective_table",
    "inverse_rate",
]
