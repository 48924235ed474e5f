# 📦 rate_converter/config/container.py
"""
📦 Контейнер залежностей конвертера.

🔹 Створює сервіси в правильному порядку DI: сховище → налаштування → fetcher → кеш → сценарії.
🔹 Читає всі параметри з `ConfigService` (або будь-якого обʼєкта з методом `.get`).
🔹 Дає єдину точку доступу для CLI та тестів.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from datetime import timedelta
from typing import Any, List, Optional, Protocol

# 🧩 Внутрішні модулі проєкту
from rate_converter.domain.currency.interfaces import IKeyValueStore, IRateFetcher
from rate_converter.domain.currency.rate_resolver import RateResolver
from rate_converter.infrastructure.currency.live_rate_cache import DEFAULT_MAX_AGE, LiveRateCache
from rate_converter.infrastructure.currency.rate_fetcher import (
    DEFAULT_ENDPOINTS,
    DEFAULT_TIMEOUT_SEC,
    DEFAULT_USER_AGENT,
    RateEndpoint,
    RateFetcher,
)
from rate_converter.infrastructure.storage.json_store import JsonFileStore
from rate_converter.infrastructure.storage.settings_store import SettingsStore
from rate_converter.services.admin_service import AdminService
from rate_converter.services.converter_service import ConverterService
from rate_converter.shared.utils.logger import LOG_NAME, init_logging_from_config

logger = logging.getLogger(LOG_NAME)

DEFAULT_STORE_PATH = "data/converter_settings.json"


class IConfig(Protocol):
    def get(self, key: str, default: Any = None) -> Any: ...


# ================================
# 🛠️ ДОПОМІЖНІ ФУНКЦІЇ
# ================================
def _float_or_default(value: Any, default: float) -> float:
    """Повертає додатний float або запасне значення, якщо каст неможливий."""
    if value is None or isinstance(value, bool):
        return default
    try:
        coerced = float(value)
    except (TypeError, ValueError):
        return default
    return coerced if coerced > 0 else default


def _bool_or_default(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        cleaned = value.strip().lower()
        if cleaned in {"1", "true", "yes", "on"}:
            return True
        if cleaned in {"0", "false", "no", "off"}:
            return False
    return default


def endpoints_from_config(raw: Any) -> List[RateEndpoint]:
    """
    Будує впорядкований список endpoint-ів із `currency_api.endpoints`.

    Некоректні записи пропускаються; порожній результат → дефолтні endpoint-и.
    """
    endpoints: List[RateEndpoint] = []
    for item in raw or []:
        if not isinstance(item, dict):
            logger.warning("⚠️ Пропущено некоректний endpoint у конфігу: %r", item)
            continue
        url = item.get("url")
        if not isinstance(url, str) or not url.strip():
            logger.warning("⚠️ Endpoint без url: %r", item)
            continue
        name = item.get("name") or url
        endpoints.append(RateEndpoint(name=str(name), url=url.strip()))
    return endpoints or list(DEFAULT_ENDPOINTS)


# ================================
# 📦 КОНТЕЙНЕР
# ================================
class Container:
    """
    📦 Збирає всі сервіси застосунку з конфігурації.
    """

    def __init__(
        self,
        config: Optional[IConfig] = None,
        *,
        store: Optional[IKeyValueStore] = None,
        fetcher: Optional[IRateFetcher] = None,
        init_logging: bool = False,
    ) -> None:
        if config is None:
            from rate_converter.config.config_service import ConfigService  # 🗂️ Singleton лише за потреби

            config = ConfigService()
        self.config = config

        if init_logging:
            init_logging_from_config(self.config.get("logging", {}) or {})

        self.store: IKeyValueStore = store or JsonFileStore(
            self.config.get("storage.path", DEFAULT_STORE_PATH) or DEFAULT_STORE_PATH
        )
        self.settings_store = SettingsStore(self.store)
        self.fetcher: IRateFetcher = fetcher or RateFetcher(
            endpoints_from_config(self.config.get("currency_api.endpoints")),
            connect_timeout=_float_or_default(self.config.get("currency_api.connect_timeout_sec"), DEFAULT_TIMEOUT_SEC),
            read_timeout=_float_or_default(self.config.get("currency_api.read_timeout_sec"), DEFAULT_TIMEOUT_SEC),
            user_agent=str(self.config.get("currency_api.user_agent") or DEFAULT_USER_AGENT),
        )

        max_age_hours = _float_or_default(
            self.config.get("live_rate.max_age_hours"),
            DEFAULT_MAX_AGE.total_seconds() / 3600,
        )
        self.live_rate_cache = LiveRateCache(
            self.settings_store,
            self.fetcher,
            max_age=timedelta(hours=max_age_hours),
            coalesce=_bool_or_default(self.config.get("live_rate.coalesce_refresh"), True),
        )
        self.resolver = RateResolver()
        self.converter = ConverterService(self.settings_store, self.live_rate_cache, self.resolver)
        self.admin = AdminService(self.settings_store, self.live_rate_cache)
        logger.debug("📦 Container зібрано (max_age=%sh)", max_age_hours)


__all__ = ["Container", "IConfig", "endpoints_from_config"]
