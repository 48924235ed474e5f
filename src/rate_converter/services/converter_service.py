# 🔁 rate_converter/services/converter_service.py
"""
🔁 ConverterService — сценарій «сума + дві валюти → результат».

🔹 Парсить і валідує ввід (сума > 0, відомі коди, різні валюти).
🔹 Будує таблицю курсів через `RateResolver` з поточних налаштувань та кешу.
🔹 `warm_up()` — best-effort оновлення застарілого живого курсу перед конвертацією.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from dataclasses import dataclass
from typing import Optional, Union

# 🧩 Внутрішні модулі проєкту
from rate_converter.domain.currency.models import RateTable
from rate_converter.domain.currency.rate_resolver import SUPPORTED_CURRENCIES, RateResolver
from rate_converter.domain.currency.validation import parse_number
from rate_converter.infrastructure.currency.live_rate_cache import LiveRateCache
from rate_converter.infrastructure.storage.settings_store import SettingsStore
from rate_converter.shared.errors import FetchError, ValidationError
from rate_converter.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.converter")


# ================================
# 🧱 DTO РЕЗУЛЬТАТІВ
# ================================
@dataclass(frozen=True)
class ConversionResult:
    amount: float
    from_code: str
    to_code: str
    rate: float                                                   # 📊 Одиниць `to_code` за 1 `from_code`
    result: float
    live_rate_used: bool                                          # 📡 Чи брав участь живий курс KGS
    live_updated_at_ms: Optional[int] = None


@dataclass(frozen=True)
class RateStatus:
    """📡 Стан живого курсу для екрана/команди перегляду."""

    live_enabled: bool
    rate: Optional[float]
    inverse_rate: Optional[float]
    updated_at_ms: Optional[int]
    is_stale: bool
    offline_kgs_per_usd: float


def parse_amount(raw: Union[str, int, float]) -> float:
    """Сума з рядка; кома дозволена як десятковий роздільник."""
    return parse_number(raw, "amount")


def normalize_code(code: str) -> str:
    normalized = (code or "").strip().lower()
    if normalized not in SUPPORTED_CURRENCIES:
        raise ValidationError(
            f"Невідома валюта: {code!r}. Доступні: {', '.join(c.upper() for c in SUPPORTED_CURRENCIES)}.",
            field="currency",
        )
    return normalized


class ConverterService:
    """
    🔁 Поєднує налаштування, кеш живого курсу та резолвер.
    """

    def __init__(
        self,
        settings_store: SettingsStore,
        live_rate_cache: LiveRateCache,
        resolver: Optional[RateResolver] = None,
    ) -> None:
        self._settings = settings_store
        self._cache = live_rate_cache
        self._resolver = resolver or RateResolver()

    async def rate_table(self) -> RateTable:
        settings = await self._settings.get_settings()
        live_rate = await self._cache.get()
        return self._resolver.effective_table(settings, live_rate)

    async def convert(self, amount: Union[str, float], from_code: str, to_code: str) -> ConversionResult:
        """
        Конвертує суму між двома підтримуваними валютами.

        Raises:
            ValidationError: сума <= 0, невідомий код або однакові валюти.
        """
        value = parse_amount(amount)
        if value <= 0:
            raise ValidationError("Сума має бути більшою за 0.", field="amount")
        src = normalize_code(from_code)
        dst = normalize_code(to_code)
        if src == dst:
            raise ValidationError("Оберіть дві різні валюти.", field="currency")

        settings = await self._settings.get_settings()
        live_rate = await self._cache.get()
        table = self._resolver.effective_table(settings, live_rate)
        rate = self._resolver.conversion_rate(src, dst, table)
        result = value * rate

        live_used = "kgs" in (src, dst) and settings.use_live_kgs_rate and live_rate.rate is not None
        logger.info("🔁 %s %s → %s %s (rate=%s, live=%s)", value, src, result, dst, rate, live_used)
        return ConversionResult(
            amount=value,
            from_code=src,
            to_code=dst,
            rate=rate,
            result=result,
            live_rate_used=live_used,
            live_updated_at_ms=live_rate.updated_at_ms if live_used else None,
        )

    async def warm_up(self) -> Optional[float]:
        """
        Best-effort оновлення застарілого живого курсу.

        Повертає актуальний курс або None, якщо живий курс вимкнено чи
        отримати його не вдалося (тоді діє офлайн-курс).
        """
        settings = await self._settings.get_settings()
        if not settings.use_live_kgs_rate:
            return None
        try:
            return await self._cache.refresh_if_stale()
        except FetchError as e:
            logger.warning("⚠️ Живий курс недоступний, використовується офлайн: %s", e)
            return None

    async def rate_status(self, now: Optional[int] = None) -> RateStatus:
        settings = await self._settings.get_settings()
        live_rate = await self._cache.get()
        stale = await self._cache.is_stale(now=now)
        return RateStatus(
            live_enabled=settings.use_live_kgs_rate,
            rate=live_rate.rate,
            inverse_rate=self._resolver.inverse_rate(live_rate.rate),
            updated_at_ms=live_rate.updated_at_ms,
            is_stale=stale,
            offline_kgs_per_usd=settings.offline_kgs_per_usd,
        )


__all__ = ["ConversionResult", "RateStatus", "ConverterService", "parse_amount", "normalize_code"]
