# 🔗 rate_converter/domain/currency/interfaces.py
"""
🔗 Контракти колабораторів валютного домену.

🔹 `IKeyValueStore` — персистентне сховище «ключ → значення» з атомарним записом групи ключів.
🔹 `IRateFetcher` — джерело живого курсу USD→KGS (реальний HTTP або фейк у тестах).
"""

from __future__ import annotations

# 🔠 Системні імпорти
from typing import Any, Dict, Mapping, Protocol, runtime_checkable


@runtime_checkable
class IKeyValueStore(Protocol):
    """💾 Сховище, де кожен запис групи ключів видно лише повністю."""

    async def get_all(self) -> Dict[str, Any]: ...               # 📖 Знімок усіх значень

    async def set_many(self, values: Mapping[str, Any]) -> None: ...  # 💾 Атомарний запис кількох ключів


@runtime_checkable
class IRateFetcher(Protocol):
    """📡 Повертає додатний курс USD→KGS або підіймає `FetchError`."""

    async def fetch(self) -> float: ...


__all__ = ["IKeyValueStore", "IRateFetcher"]
