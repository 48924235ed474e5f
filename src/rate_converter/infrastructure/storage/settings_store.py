# ⚙️ rate_converter/infrastructure/storage/settings_store.py
"""
⚙️ SettingsStore — типізований доступ до `Settings` та `LiveRate` поверх key/value-сховища.

🔹 Дефолти матеріалізуються при першому зверненні (`ensure_defaults`).
🔹 Кожна операція пише повний узгоджений набір ключів одним `set_many()`.
🔹 Слухачі (`subscribe`) отримують множину змінених ключів після успішного запису.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging
from typing import Any, Callable, Dict, FrozenSet, List, Mapping

# 🧩 Внутрішні модулі проєкту
from rate_converter.domain.currency.interfaces import IKeyValueStore
from rate_converter.domain.currency.models import (
    KEY_ADMIN_PASSWORD,
    KEY_LIVE_USD_KGS_RATE,
    KEY_LIVE_USD_KGS_UPDATED_AT,
    KEY_OFFLINE_EUR_PER_USD,
    KEY_OFFLINE_KGS_PER_USD,
    KEY_OFFLINE_RUB_PER_USD,
    KEY_USE_LIVE_KGS_RATE,
    SETTINGS_KEYS,
    LiveRate,
    Settings,
)
from rate_converter.domain.currency.validation import require_password, require_positive_rate
from rate_converter.shared.errors import ValidationError
from rate_converter.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.settings")

ChangeListener = Callable[[FrozenSet[str]], None]


class SettingsStore:
    """
    🗂️ Єдина точка читання/запису налаштувань і живого курсу.
    """

    def __init__(self, store: IKeyValueStore) -> None:
        self._store = store
        self._listeners: List[ChangeListener] = []
        self._defaults_ready = False

    # ================================
    # 📖 ЧИТАННЯ
    # ================================
    async def ensure_defaults(self) -> None:
        """Записує дефолтні значення для відсутніх ключів налаштувань."""
        if self._defaults_ready:
            return
        data = await self._store.get_all()
        defaults = Settings.defaults().to_mapping()
        missing = {key: defaults[key] for key in SETTINGS_KEYS if key not in data}
        if missing:
            await self._store.set_many(missing)
            logger.info("🆕 Дефолтні налаштування записано: %s", sorted(missing))
        self._defaults_ready = True

    async def get_settings(self) -> Settings:
        await self.ensure_defaults()
        return Settings.from_mapping(await self._store.get_all())

    async def get_live_rate(self) -> LiveRate:
        return LiveRate.from_mapping(await self._store.get_all())

    # ================================
    # ✍️ ЗАПИС НАЛАШТУВАНЬ
    # ================================
    async def set_use_live_kgs_rate(self, enabled: bool) -> None:
        await self._write({KEY_USE_LIVE_KGS_RATE: bool(enabled)})
        logger.info("🔀 use_live_kgs_rate=%s", bool(enabled))

    async def save_offline_rates(self, eur_per_usd: Any, rub_per_usd: Any, kgs_per_usd: Any) -> None:
        """Валідує та атомарно зберігає три офлайн-курси."""
        await self._write(_offline_rates(eur_per_usd, rub_per_usd, kgs_per_usd))
        logger.info("💾 Офлайн-курси збережено: eur=%s rub=%s kgs=%s", eur_per_usd, rub_per_usd, kgs_per_usd)

    async def save_admin_settings(
        self,
        use_live_kgs_rate: bool,
        eur_per_usd: Any,
        rub_per_usd: Any,
        kgs_per_usd: Any,
    ) -> None:
        """Прапорець живого курсу та офлайн-курси одним записом."""
        values: Dict[str, Any] = _offline_rates(eur_per_usd, rub_per_usd, kgs_per_usd)
        values[KEY_USE_LIVE_KGS_RATE] = bool(use_live_kgs_rate)
        await self._write(values)
        logger.info("💾 Налаштування адміністратора збережено (live=%s)", bool(use_live_kgs_rate))

    async def set_admin_password(self, new_password: str) -> None:
        await self._write({KEY_ADMIN_PASSWORD: require_password(new_password)})
        logger.info("🔑 Пароль адміністратора змінено")

    # ================================
    # 📡 ЗАПИС ЖИВОГО КУРСУ
    # ================================
    async def save_live_rate(self, rate: float, updated_at_ms: int) -> None:
        """Пара (курс, час) пишеться разом або не пишеться взагалі."""
        safe_rate = require_positive_rate(rate, KEY_LIVE_USD_KGS_RATE)
        if isinstance(updated_at_ms, bool) or not isinstance(updated_at_ms, int):
            raise ValidationError("Мітка часу має бути цілим числом мілісекунд.", field=KEY_LIVE_USD_KGS_UPDATED_AT)
        await self._write({KEY_LIVE_USD_KGS_RATE: safe_rate, KEY_LIVE_USD_KGS_UPDATED_AT: updated_at_ms})
        logger.info("📡 Живий курс USD→KGS збережено: %s (ts=%s)", safe_rate, updated_at_ms)

    # ================================
    # 🔔 СПОВІЩЕННЯ
    # ================================
    def subscribe(self, listener: ChangeListener) -> Callable[[], None]:
        """Підписує слухача змін; повертає функцію відписки."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    async def _write(self, values: Mapping[str, Any]) -> None:
        await self._store.set_many(values)
        changed = frozenset(values)
        for listener in list(self._listeners):
            try:
                listener(changed)
            except Exception:
                logger.exception("⚠️ Слухач змін налаштувань завершився з помилкою")


def _offline_rates(eur_per_usd: Any, rub_per_usd: Any, kgs_per_usd: Any) -> Dict[str, Any]:
    return {
        KEY_OFFLINE_EUR_PER_USD: require_positive_rate(eur_per_usd, KEY_OFFLINE_EUR_PER_USD),
        KEY_OFFLINE_RUB_PER_USD: require_positive_rate(rub_per_usd, KEY_OFFLINE_RUB_PER_USD),
        KEY_OFFLINE_KGS_PER_USD: require_positive_rate(kgs_per_usd, KEY_OFFLINE_KGS_PER_USD),
    }


__all__ = ["SettingsStore", "ChangeListener"]
