# 💵 rate_converter/infrastructure/currency/live_rate_cache.py
"""
💵 LiveRateCache — життєвий цикл кешованого курсу USD→KGS.

🎯 Призначення:
    • визначає, чи застарів кеш (немає курсу/мітки часу або вік > max_age);
    • оновлює курс через `IRateFetcher` і атомарно зберігає пару (курс, час);
    • невдале оновлення ніколи не перезаписує попередній (навіть застарілий) курс.

⚙️ Нотатки:
    • за замовчуванням одночасні оновлення об'єднуються в один запит (`coalesce=True`);
      без цього кожен виклик ходить у мережу, а виграє останній завершений запис;
    • скасування очікування викликачем не скасовує спільний запит (`asyncio.shield`).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import asyncio                                                      # 🔁 Спільний in-flight запит
import logging
import time                                                         # ⏱️ Годинник за замовчуванням
from datetime import timedelta
from typing import Callable, Optional

# 🧩 Внутрішні модулі проєкту
from rate_converter.domain.currency.interfaces import IRateFetcher
from rate_converter.domain.currency.models import LiveRate
from rate_converter.infrastructure.storage.settings_store import SettingsStore
from rate_converter.shared.errors import FetchError
from rate_converter.shared.metrics import RATE_REFRESH_TOTAL
from rate_converter.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.live_rate")

DEFAULT_MAX_AGE = timedelta(hours=6)


def now_ms() -> int:
    """Поточний час в epoch millis."""
    return int(time.time() * 1000)


def to_millis(max_age: timedelta) -> int:
    return int(max_age.total_seconds() * 1000)


class LiveRateCache:
    """
    🏦 Власник єдиного кешованого курсу USD→KGS та його свіжості.
    """

    def __init__(
        self,
        settings_store: SettingsStore,
        fetcher: IRateFetcher,
        *,
        max_age: timedelta = DEFAULT_MAX_AGE,
        coalesce: bool = True,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self._settings = settings_store
        self._fetcher = fetcher
        self._max_age = max_age
        self._coalesce = coalesce
        self._clock = clock
        self._inflight: Optional["asyncio.Task[float]"] = None      # 🛰️ Поточний спільний запит
        logger.debug("⚙️ LiveRateCache max_age=%s coalesce=%s", max_age, coalesce)

    @property
    def max_age(self) -> timedelta:
        return self._max_age

    # ================================
    # 🔓 ПУБЛІЧНИЙ ІНТЕРФЕЙС
    # ================================
    async def get(self) -> LiveRate:
        return await self._settings.get_live_rate()

    async def is_stale(self, max_age: Optional[timedelta] = None, now: Optional[int] = None) -> bool:
        """
        True, якщо курсу немає, мітки часу немає або `now - updated_at > max_age`.

        Рівно на межі `max_age` курс ще вважається свіжим.
        """
        current = await self.get()
        return current.is_stale(
            to_millis(max_age if max_age is not None else self._max_age),
            now if now is not None else self._clock(),
        )

    async def refresh_if_stale(self, max_age: Optional[timedelta] = None) -> float:
        """Повертає кешований курс без мережі, якщо він свіжий; інакше примусово оновлює."""
        current = await self.get()
        age_limit = to_millis(max_age if max_age is not None else self._max_age)
        if current.rate is not None and not current.is_stale(age_limit, self._clock()):
            RATE_REFRESH_TOTAL.labels(outcome="cached").inc()
            logger.debug("⏱️ Курс свіжий (updated_at=%s). Оновлення пропущено.", current.updated_at_ms)
            return current.rate
        logger.info("⏰ Курс відсутній або застарів, запускаю оновлення…")
        return await self.refresh(force=True)

    async def refresh(self, force: bool = True) -> float:
        """
        🔄 Оновлює живий курс.

        `force=False` із уже кешованим курсом повертає його без мережевих викликів.
        Збій отримання підіймає `FetchError`, а збережений стан лишається без змін.
        """
        if not force:
            current = await self.get()
            if current.rate is not None:
                RATE_REFRESH_TOTAL.labels(outcome="cached").inc()
                return current.rate

        if not self._coalesce:
            return await self._fetch_and_store()

        task = self._inflight
        if task is None or task.done():
            task = asyncio.ensure_future(self._fetch_and_store())
            task.add_done_callback(self._on_inflight_done)
            self._inflight = task
        else:
            logger.debug("🛰️ Приєднуюсь до вже запущеного оновлення курсу")
        return await asyncio.shield(task)

    # ================================
    # 🔒 ВНУТРІШНЯ ЛОГІКА
    # ================================
    async def _fetch_and_store(self) -> float:
        try:
            rate = await self._fetcher.fetch()
        except FetchError as e:
            RATE_REFRESH_TOTAL.labels(outcome="failed").inc()
            logger.warning("⚠️ Оновлення курсу не вдалося, кеш без змін: %s", e, extra=e.to_log_extra())
            raise

        updated_at = self._clock()
        await self._settings.save_live_rate(rate, updated_at)
        RATE_REFRESH_TOTAL.labels(outcome="fetched").inc()
        logger.info("🕒 Курс USD→KGS оновлено: %s (updated_at=%s)", rate, updated_at)
        return rate

    def _on_inflight_done(self, task: "asyncio.Task[float]") -> None:
        if self._inflight is task:
            self._inflight = None
        if not task.cancelled():
            # Забираємо виняток, щоб задача без очікувачів не сипала "never retrieved"
            task.exception()


__all__ = ["LiveRateCache", "DEFAULT_MAX_AGE", "now_ms", "to_millis"]
