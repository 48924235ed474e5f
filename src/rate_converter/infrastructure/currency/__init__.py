# 💱 rate_converter/infrastructure/currency/__init__.py
"""
💱 Інфраструктурні сервіси живого курсу.

🔹 `RateFetcher` — HTTP-отримання USD→KGS з fallback між endpoint-ами.
🔹 `LiveRateCache` — кеш курсу, перевірка свіжості та оновлення.
"""

from __future__ import annotations

from .live_rate_cache import DEFAULT_MAX_AGE, LiveRateCache
from .rate_fetcher import DEFAULT_ENDPOINTS, RateEndpoint, RateFetcher

__all__ = [
    "DEFAULT_ENDPOINTS",
    "DEFAULT_MAX_AGE",
    "LiveRateCache",
    "RateEndpoint",
    "RateFetcher",
]
