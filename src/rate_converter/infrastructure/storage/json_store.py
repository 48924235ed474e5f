# 💽 rate_converter/infrastructure/storage/json_store.py
"""
💽 JsonFileStore — персистентне сховище «ключ → значення» в одному JSON-файлі.

🎯 Призначення:
    • реалізує `IKeyValueStore` для налаштувань і кешу живого курсу;
    • кожен `set_many()` переписує файл цілком (tmp-файл + `os.replace`),
      тож група ключів ніколи не буває записана наполовину;
    • записи серіалізуються через `asyncio.Lock`.

⚙️ Нотатки:
    • пошкоджений або відсутній файл при читанні → порожній словник (далі діють дефолти);
    • помилка запису → `StorageError`, а стан у пам'яті лишається попереднім.
"""

from __future__ import annotations

# 🌐 Зовнішні бібліотеки
import aiofiles                                                     # 💽 Асинхронна робота з файлами

# 🔠 Системні імпорти
import asyncio                                                      # 🔐 Лок запису
import json                                                         # 📄 Серіалізація
import logging
import os                                                           # 🔁 Атомарна заміна файлу
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

# 🧩 Внутрішні модулі проєкту
from rate_converter.shared.errors import StorageError
from rate_converter.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.storage")


class JsonFileStore:
    """
    💾 Асинхронне key/value-сховище поверх JSON-файлу.
    """

    def __init__(self, path: Union[str, Path]) -> None:
        self._path = Path(path)
        self._lock: Optional[asyncio.Lock] = None                   # 🔐 Один записувач за раз (на свій event loop)
        self._lock_loop: Optional[asyncio.AbstractEventLoop] = None
        self._data: Optional[Dict[str, Any]] = None                 # 🧠 Ледачий знімок файлу
        logger.debug("⚙️ JsonFileStore path=%s", self._path)

    @property
    def path(self) -> Path:
        return self._path

    # ================================
    # 🔓 ПУБЛІЧНИЙ ІНТЕРФЕЙС
    # ================================
    async def get_all(self) -> Dict[str, Any]:
        """Повертає копію всіх збережених значень."""
        if self._data is None:
            async with self._loop_lock():
                if self._data is None:
                    self._data = await self._load()
        return dict(self._data)

    async def get(self, key: str, default: Any = None) -> Any:
        data = await self.get_all()
        return data.get(key, default)

    async def set_many(self, values: Mapping[str, Any]) -> None:
        """
        Атомарно записує групу ключів.

        Новий стан стає видимим читачам лише після успішної заміни файлу.
        """
        if not values:
            return
        async with self._loop_lock():
            current = self._data if self._data is not None else await self._load()
            updated = {**current, **dict(values)}
            await self._write(updated)
            self._data = updated
        logger.debug("💾 Записано ключі: %s", sorted(values))

    # ================================
    # 🔒 ВНУТРІШНЯ ЛОГІКА
    # ================================
    def _loop_lock(self) -> asyncio.Lock:
        """Лок поточного event loop; новий loop отримує новий лок."""
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def _load(self) -> Dict[str, Any]:
        try:
            async with aiofiles.open(self._path, "r", encoding="utf-8") as f:
                content = await f.read()
        except FileNotFoundError:
            logger.info("📂 Файл налаштувань ще не існує: %s", self._path)
            return {}
        except OSError as e:
            logger.warning("⚠️ Не вдалося прочитати %s (%s). Використовуються дефолти.", self._path, e)
            return {}

        if not content.strip():
            return {}
        try:
            parsed = json.loads(content)
        except json.JSONDecodeError as e:
            logger.warning("⚠️ Пошкоджений JSON у %s (%s). Використовуються дефолти.", self._path, e)
            return {}
        if not isinstance(parsed, dict):
            logger.warning("⚠️ Очікувався об'єкт у %s, отримано %s.", self._path, type(parsed).__name__)
            return {}
        return parsed

    async def _write(self, data: Dict[str, Any]) -> None:
        payload = json.dumps(data, indent=2, ensure_ascii=False, sort_keys=True)
        tmp_path = self._path.with_name(f"{self._path.name}.tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
                await f.write(payload)
                await f.flush()
            os.replace(tmp_path, self._path)                        # 🔁 Атомарна заміна
        except OSError as e:
            logger.error("❌ Помилка запису налаштувань у %s: %s", self._path, e)
            try:
                tmp_path.unlink()
            except FileNotFoundError:
                pass
            except OSError as cleanup_error:
                logger.warning("⚠️ Не вдалося прибрати %s: %s", tmp_path, cleanup_error)
            raise StorageError("Не вдалося зберегти налаштування.", path=str(self._path), details=str(e)) from e


__all__ = ["JsonFileStore"]
