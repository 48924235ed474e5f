# 💱 rate_converter/domain/currency/models.py
"""
💱 DTO валютного домену: налаштування, кешований живий курс та таблиця курсів.

🔹 `Settings` — офлайн-курси (одиниць валюти за 1 USD), прапорець живого курсу, пароль адміна.
🔹 `LiveRate` — останній отриманий курс USD→KGS разом із міткою часу (epoch millis).
🔹 `RateTable` — похідна мапа «код → одиниць за 1 USD», завжди з `usd → 1.0`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

# ================================
# 🔑 КЛЮЧІ СХОВИЩА
# ================================
KEY_USE_LIVE_KGS_RATE = "use_live_kgs_rate"
KEY_OFFLINE_EUR_PER_USD = "offline_eur_per_usd"
KEY_OFFLINE_RUB_PER_USD = "offline_rub_per_usd"
KEY_OFFLINE_KGS_PER_USD = "offline_kgs_per_usd"
KEY_ADMIN_PASSWORD = "admin_password"
KEY_LIVE_USD_KGS_RATE = "live_usd_kgs_rate"
KEY_LIVE_USD_KGS_UPDATED_AT = "live_usd_kgs_updated_at"

SETTINGS_KEYS = (
    KEY_USE_LIVE_KGS_RATE,
    KEY_OFFLINE_EUR_PER_USD,
    KEY_OFFLINE_RUB_PER_USD,
    KEY_OFFLINE_KGS_PER_USD,
    KEY_ADMIN_PASSWORD,
)
LIVE_RATE_KEYS = (KEY_LIVE_USD_KGS_RATE, KEY_LIVE_USD_KGS_UPDATED_AT)

RateTable = Dict[str, float]                                  # 📊 код валюти → одиниць за 1 USD


def is_positive_number(value: Any) -> bool:
    """True для скінченного числа > 0 (bool не вважається числом)."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value) and value > 0
    except OverflowError:
        # int, що не влазить у float (JSON дозволяє довільно довгі цілі)
        return False


# ================================
# ⚙️ НАЛАШТУВАННЯ
# ================================
@dataclass(frozen=True)
class Settings:
    """⚙️ Редаговані адміністратором налаштування конвертера."""

    use_live_kgs_rate: bool
    offline_eur_per_usd: float
    offline_rub_per_usd: float
    offline_kgs_per_usd: float
    admin_password: str

    @classmethod
    def defaults(cls) -> "Settings":
        return cls(
            use_live_kgs_rate=True,
            offline_eur_per_usd=0.92,
            offline_rub_per_usd=91.5,
            offline_kgs_per_usd=87.5,
            admin_password="admin",
        )

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "Settings":
        """
        Будує налаштування зі словника сховища.

        Відсутні або пошкоджені значення замінюються дефолтами, тож
        резолвер ніколи не отримує непозитивний курс.
        """
        d = cls.defaults()
        use_live = data.get(KEY_USE_LIVE_KGS_RATE)
        password = data.get(KEY_ADMIN_PASSWORD)

        def _rate(key: str, default: float) -> float:
            value = data.get(key)
            return float(value) if is_positive_number(value) else default

        return cls(
            use_live_kgs_rate=use_live if isinstance(use_live, bool) else d.use_live_kgs_rate,
            offline_eur_per_usd=_rate(KEY_OFFLINE_EUR_PER_USD, d.offline_eur_per_usd),
            offline_rub_per_usd=_rate(KEY_OFFLINE_RUB_PER_USD, d.offline_rub_per_usd),
            offline_kgs_per_usd=_rate(KEY_OFFLINE_KGS_PER_USD, d.offline_kgs_per_usd),
            admin_password=password if isinstance(password, str) and password else d.admin_password,
        )

    def to_mapping(self) -> Dict[str, Any]:
        return {
            KEY_USE_LIVE_KGS_RATE: self.use_live_kgs_rate,
            KEY_OFFLINE_EUR_PER_USD: self.offline_eur_per_usd,
            KEY_OFFLINE_RUB_PER_USD: self.offline_rub_per_usd,
            KEY_OFFLINE_KGS_PER_USD: self.offline_kgs_per_usd,
            KEY_ADMIN_PASSWORD: self.admin_password,
        }


# ================================
# 📡 ЖИВИЙ КУРС
# ================================
@dataclass(frozen=True)
class LiveRate:
    """📡 Кешований курс USD→KGS: `rate` і `updated_at_ms` або обидва є, або обидва None."""

    rate: Optional[float] = None
    updated_at_ms: Optional[int] = None

    def __post_init__(self) -> None:
        if (self.rate is None) != (self.updated_at_ms is None):
            raise ValueError("LiveRate.rate and updated_at_ms must be set together")

    @classmethod
    def empty(cls) -> "LiveRate":
        return cls()

    @classmethod
    def from_mapping(cls, data: Dict[str, Any]) -> "LiveRate":
        """Половинчастий або пошкоджений запис трактується як відсутній курс."""
        rate = data.get(KEY_LIVE_USD_KGS_RATE)
        updated_at = data.get(KEY_LIVE_USD_KGS_UPDATED_AT)
        if not is_positive_number(rate):
            return cls.empty()
        if isinstance(updated_at, bool) or not isinstance(updated_at, (int, float)):
            return cls.empty()
        if isinstance(updated_at, float) and not math.isfinite(updated_at):
            return cls.empty()
        return cls(rate=float(rate), updated_at_ms=int(updated_at))

    @property
    def is_present(self) -> bool:
        return self.rate is not None

    def is_stale(self, max_age_ms: int, now_ms: int) -> bool:
        """True, якщо курсу немає або він старший за `max_age_ms`."""
        if self.rate is None or self.updated_at_ms is None:
            return True
        return (now_ms - self.updated_at_ms) > max_age_ms


__all__ = [
    "KEY_USE_LIVE_KGS_RATE",
    "KEY_OFFLINE_EUR_PER_USD",
    "KEY_OFFLINE_RUB_PER_USD",
    "KEY_OFFLINE_KGS_PER_USD",
    "KEY_ADMIN_PASSWORD",
    "KEY_LIVE_USD_KGS_RATE",
    "KEY_LIVE_USD_KGS_UPDATED_AT",
    "SETTINGS_KEYS",
    "LIVE_RATE_KEYS",
    "RateTable",
    "Settings",
    "LiveRate",
    "is_positive_number",
]
