# 📡 rate_converter/infrastructure/currency/rate_fetcher.py
"""
📡 RateFetcher — отримання живого курсу USD→KGS з кількох публічних API.

🎯 Стратегія:
    • endpoint-и перебираються у фіксованому порядку (впорядкований список дескрипторів);
    • для кожного: один GET із таймаутом 8 с на з'єднання і 8 с на читання;
    • тіло парситься як JSON незалежно від HTTP-статусу, якщо воно є;
    • перший валідний додатний `rates.KGS` повертається одразу.

⚙️ Нотатки:
    • збої окремого endpoint-а (`NetworkError`, `MalformedResponseError`) відновлюються локально;
    • коли всі endpoint-и вичерпано, підіймається `FetchError` з останньою причиною;
    • у найгіршому випадку виклик триває ~2 × (8 + 8) с, тож його слід await-ити поза UI-потоком.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import httpx                                                        # 🌐 Асинхронний HTTP-клієнт

# 🔠 Системні імпорти
import json
import logging
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

# 🧩 Внутрішні модулі проєкту
from rate_converter.domain.currency.models import is_positive_number
from rate_converter.shared.errors import FetchError, MalformedResponseError, NetworkError
from rate_converter.shared.metrics import RATE_FETCH_SECONDS, RATE_FETCH_TOTAL
from rate_converter.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.fetcher")

TARGET_CURRENCY = "KGS"
DEFAULT_USER_AGENT = "RateConverter/1.0"
DEFAULT_TIMEOUT_SEC = 8.0


# ================================
# 🧱 ДЕСКРИПТОР ENDPOINT-А
# ================================
@dataclass(frozen=True)
class RateEndpoint:
    """🌐 Одне джерело курсів: ім'я для логів/метрик і URL з базою USD."""

    name: str
    url: str


DEFAULT_ENDPOINTS: Tuple[RateEndpoint, ...] = (
    RateEndpoint("open.er-api.com", "https://open.er-api.com/v6/latest/USD"),
    RateEndpoint("exchangerate-api.com", "https://api.exchangerate-api.com/v4/latest/USD"),
)


class RateFetcher:
    """
    📡 Реалізує `IRateFetcher`: повертає курс USD→KGS або підіймає `FetchError`.
    """

    def __init__(
        self,
        endpoints: Sequence[RateEndpoint] = DEFAULT_ENDPOINTS,
        *,
        connect_timeout: float = DEFAULT_TIMEOUT_SEC,
        read_timeout: float = DEFAULT_TIMEOUT_SEC,
        user_agent: str = DEFAULT_USER_AGENT,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not endpoints:
            raise ValueError("RateFetcher requires at least one endpoint.")
        self._endpoints: Tuple[RateEndpoint, ...] = tuple(endpoints)
        self._timeout = httpx.Timeout(read_timeout, connect=connect_timeout, read=read_timeout)
        self._headers = {"Accept": "application/json", "User-Agent": user_agent}
        self._client = client                                       # 🔌 Зовнішній клієнт (тести, спільний пул)
        logger.debug(
            "⚙️ RateFetcher endpoints=%s connect=%ss read=%ss",
            [e.name for e in self._endpoints],
            connect_timeout,
            read_timeout,
        )

    @property
    def endpoints(self) -> Tuple[RateEndpoint, ...]:
        return self._endpoints

    # ================================
    # 🔓 ПУБЛІЧНИЙ ІНТЕРФЕЙС
    # ================================
    async def fetch(self) -> float:
        """Перебирає endpoint-и до першого валідного курсу."""
        with RATE_FETCH_SECONDS.time():
            if self._client is not None:
                return await self._fetch_with(self._client)
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                return await self._fetch_with(client)

    # ================================
    # 🔒 ВНУТРІШНЯ ЛОГІКА
    # ================================
    async def _fetch_with(self, client: httpx.AsyncClient) -> float:
        attempts: List[Tuple[str, str]] = []
        last_error: Optional[Exception] = None

        for endpoint in self._endpoints:
            try:
                rate = await self._fetch_one(client, endpoint)
            except NetworkError as e:
                RATE_FETCH_TOTAL.labels(endpoint=endpoint.name, outcome="network_error").inc()
                logger.warning("🌐 %s: мережевий збій: %s", endpoint.name, e, extra=e.to_log_extra())
                attempts.append((endpoint.name, str(e)))
                last_error = e
                continue
            except MalformedResponseError as e:
                RATE_FETCH_TOTAL.labels(endpoint=endpoint.name, outcome="malformed").inc()
                logger.warning("🧾 %s: некоректна відповідь: %s", endpoint.name, e, extra=e.to_log_extra())
                attempts.append((endpoint.name, str(e)))
                last_error = e
                continue

            RATE_FETCH_TOTAL.labels(endpoint=endpoint.name, outcome="success").inc()
            logger.info("✅ Курс USD→KGS від %s: %s", endpoint.name, rate)
            return rate

        logger.error("❌ Жоден endpoint не повернув курс USD→KGS (%d спроб)", len(attempts))
        raise FetchError(
            "Не вдалося отримати живий курс. Спробуйте пізніше.",
            last_error=last_error,
            attempts=attempts,
        ) from last_error

    async def _fetch_one(self, client: httpx.AsyncClient, endpoint: RateEndpoint) -> float:
        try:
            response = await client.get(endpoint.url, headers=self._headers, timeout=self._timeout)
        except httpx.HTTPError as e:
            raise NetworkError(
                f"{type(e).__name__} під час запиту",
                url=endpoint.url,
                details=str(e) or None,
            ) from e

        status = response.status_code
        body = response.content
        if not body or not body.strip():
            raise MalformedResponseError(f"Порожня відповідь (HTTP {status})", url=endpoint.url, status_code=status)

        try:
            payload: Any = json.loads(body)
        except ValueError as e:
            raise MalformedResponseError(
                f"Відповідь не є JSON (HTTP {status})",
                url=endpoint.url,
                status_code=status,
                details=str(e),
            ) from e

        return self._extract_rate(payload, endpoint, status)

    @staticmethod
    def _extract_rate(payload: Any, endpoint: RateEndpoint, status: int) -> float:
        """Дістає `rates.KGS` і перевіряє, що це скінченне число > 0."""
        rates = payload.get("rates") if isinstance(payload, dict) else None
        if not isinstance(rates, dict):
            raise MalformedResponseError("У відповіді немає об'єкта 'rates'", url=endpoint.url, status_code=status)

        raw = rates.get(TARGET_CURRENCY)
        if isinstance(raw, str):
            # Числовий рядок ("87.3") приймається так само, як число
            try:
                raw = float(raw.strip())
            except ValueError:
                pass
        if not is_positive_number(raw):
            raise MalformedResponseError(
                f"Курс {TARGET_CURRENCY} відсутній або невалідний",
                url=endpoint.url,
                status_code=status,
                details=repr(raw),
            )
        return float(raw)


__all__ = ["RateEndpoint", "DEFAULT_ENDPOINTS", "RateFetcher", "TARGET_CURRENCY"]
