# 🔐 rate_converter/services/admin_service.py
"""
🔐 AdminService — панель адміністратора за паролем.

🔹 `login()` порівнює пароль із збереженим; `logout()` закриває сесію.
🔹 Усі зміни (курси, прапорець живого курсу, пароль, примусове оновлення)
   вимагають активної сесії, інакше `AuthenticationError`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import hmac                                                         # 🔐 Порівняння паролів
import logging
from typing import Union

# 🧩 Внутрішні модулі проєкту
from rate_converter.domain.currency.validation import require_password, require_positive_rate
from rate_converter.infrastructure.currency.live_rate_cache import LiveRateCache
from rate_converter.infrastructure.storage.settings_store import SettingsStore
from rate_converter.shared.errors import AuthenticationError, ValidationError
from rate_converter.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.admin")

RawNumber = Union[str, int, float]


class AdminService:
    """
    🛠️ Сесія адміністратора поверх `SettingsStore` і `LiveRateCache`.
    """

    def __init__(self, settings_store: SettingsStore, live_rate_cache: LiveRateCache) -> None:
        self._settings = settings_store
        self._cache = live_rate_cache
        self._authenticated = False

    @property
    def is_authenticated(self) -> bool:
        return self._authenticated

    async def login(self, password: str) -> bool:
        settings = await self._settings.get_settings()
        ok = hmac.compare_digest(
            (password or "").encode("utf-8"),
            settings.admin_password.encode("utf-8"),
        )
        self._authenticated = ok
        if ok:
            logger.info("🔓 Адміністратор увійшов")
        else:
            logger.warning("🚫 Невірний пароль адміністратора")
        return ok

    def logout(self) -> None:
        self._authenticated = False
        logger.info("🔒 Адміністратор вийшов")

    async def save_rates(
        self,
        use_live_kgs_rate: bool,
        eur_per_usd: RawNumber,
        rub_per_usd: RawNumber,
        kgs_per_usd: RawNumber,
    ) -> None:
        """Зберігає офлайн-курси та прапорець живого курсу одним записом."""
        self._require_session()
        eur = require_positive_rate(eur_per_usd, "offline_eur_per_usd")
        rub = require_positive_rate(rub_per_usd, "offline_rub_per_usd")
        kgs = require_positive_rate(kgs_per_usd, "offline_kgs_per_usd")
        await self._settings.save_admin_settings(use_live_kgs_rate, eur, rub, kgs)

    async def change_password(self, new_password: str, confirm_password: str) -> None:
        self._require_session()
        require_password(new_password)
        if new_password != confirm_password:
            raise ValidationError("Паролі не збігаються.", field="confirm_password")
        await self._settings.set_admin_password(new_password)

    async def refresh_live_rate(self) -> float:
        """Примусове оновлення; `FetchError` пробрасується викликачу."""
        self._require_session()
        return await self._cache.refresh(force=True)

    def _require_session(self) -> None:
        if not self._authenticated:
            raise AuthenticationError("Потрібен вхід адміністратора.")


__all__ = ["AdminService"]
