# 🧮 rate_converter/domain/currency/rate_resolver.py
"""
🧮 RateResolver — чиста (без I/O) логіка вибору курсів і конвертації.

🔹 `effective_table()` зводить налаштування та кешований живий курс у `RateTable`.
🔹 `conversion_rate()` / `convert()` рахують коефіцієнт для будь-якої пари валют.
🔹 Округлення тут не застосовується: це справа шару відображення.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from typing import Optional

# 🧩 Внутрішні модулі проєкту
from rate_converter.domain.currency.models import LiveRate, RateTable, Settings
from rate_converter.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.resolver")

SUPPORTED_CURRENCIES = ("usd", "eur", "rub", "kgs")
BASE_CURRENCY = "usd"
_MISSING_RATE = 1.0                                           # 🟡 Курс для коду, якого немає в таблиці


def effective_table(settings: Settings, live_rate: LiveRate) -> RateTable:
    """
    Повертає актуальну таблицю «одиниць валюти за 1 USD».

    KGS береться з живого курсу лише коли він увімкнений і вже отриманий;
    EUR та RUB завжди офлайнові.
    """
    use_live = settings.use_live_kgs_rate and live_rate.rate is not None
    kgs_per_usd = live_rate.rate if use_live else settings.offline_kgs_per_usd
    logger.debug("📊 effective_table: kgs source=%s value=%s", "live" if use_live else "offline", kgs_per_usd)
    return {
        BASE_CURRENCY: 1.0,
        "eur": settings.offline_eur_per_usd,
        "rub": settings.offline_rub_per_usd,
        "kgs": float(kgs_per_usd),  # type: ignore[arg-type]
    }


def conversion_rate(from_code: str, to_code: str, table: RateTable) -> float:
    """Скільки одиниць `to_code` дають за 1 одиницю `from_code`."""
    to_rate = table.get(to_code.lower())
    from_rate = table.get(from_code.lower())
    if to_rate is None or from_rate is None:
        # Відсутній код не є помилкою: трактуємо як 1.0
        logger.debug("🟡 Код відсутній у таблиці: from=%s to=%s", from_code, to_code)
    to_rate = _MISSING_RATE if to_rate is None else to_rate
    from_rate = _MISSING_RATE if from_rate is None else from_rate
    return to_rate / from_rate


def convert(amount: float, from_code: str, to_code: str, table: RateTable) -> float:
    return amount * conversion_rate(from_code, to_code, table)


def inverse_rate(rate: Optional[float]) -> Optional[float]:
    """1 / rate для додатного курсу (наприклад, KGS→USD), інакше None."""
    if rate is None or rate <= 0:
        return None
    return 1.0 / rate


class RateResolver:
    """
    🧮 Тонкий фасад над функціями модуля для впровадження через DI.
    """

    supported_currencies = SUPPORTED_CURRENCIES

    def effective_table(self, settings: Settings, live_rate: LiveRate) -> RateTable:
        return effective_table(settings, live_rate)

    def conversion_rate(self, from_code: str, to_code: str, table: RateTable) -> float:
        return conversion_rate(from_code, to_code, table)

    def convert(self, amount: float, from_code: str, to_code: str, table: RateTable) -> float:
        return convert(amount, from_code, to_code, table)

    def inverse_rate(self, rate: Optional[float]) -> Optional[float]:
        return inverse_rate(rate)


__all__ = [
    "SUPPORTED_CURRENCIES",
    "BASE_CURRENCY",
    "effective_table",
    "conversion_rate",
    "convert",
    "inverse_rate",
    "RateResolver",
]
