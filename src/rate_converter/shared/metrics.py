# 📈 rate_converter/shared/metrics.py
"""
📈 Prometheus-метрики живого курсу USD→KGS.

🔹 `RATE_FETCH_TOTAL` — результат кожної спроби звернення до endpoint-а.
🔹 `RATE_REFRESH_TOTAL` — результат оновлення кешу (fetched / cached / failed).
🔹 `RATE_FETCH_SECONDS` — тривалість повного `fetch()` з урахуванням fallback-ів.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
from prometheus_client import Counter, Histogram                      # 📊 Prometheus-метрики

# ================================
# 📊 ЛІЧИЛЬНИКИ
# ================================
RATE_FETCH_TOTAL = Counter(
    "rate_converter_fetch_attempts_total",
    "Live rate fetch attempts per endpoint and outcome",
    ["endpoint", "outcome"],
)

RATE_REFRESH_TOTAL = Counter(
    "rate_converter_refresh_total",
    "Live rate cache refreshes by outcome",
    ["outcome"],
)

# ================================
# ⏱️ ГІСТОГРАМА ЛАТЕНТНОСТІ
# ================================
RATE_FETCH_SECONDS = Histogram(
    "rate_converter_fetch_seconds",
    "Time to obtain a live rate across all endpoints",
)


__all__ = [
    "RATE_FETCH_TOTAL",
    "RATE_REFRESH_TOTAL",
    "RATE_FETCH_SECONDS",
]
