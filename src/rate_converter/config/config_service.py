# ⚙️ config_service.py
"""
⚙️ config_service.py — Сервіс для доступу до статичної конфігурації.

🔹 Клас `ConfigService`:
- Завантажує конфігурацію з config.yaml (поруч із модулем) та .env / змінних середовища.
- Надає єдиний метод .get() для доступу до будь-якого параметра за крапковим ключем.
- Працює як Singleton.
"""

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv              # 🔐 Завантаження змінних із .env

# 🔠 Системні імпорти
import logging                              # 🧾 Логування
import os                                   # 📁 Доступ до змінних середовища
from pathlib import Path                    # 📁 Побудова шляху до файлів
from typing import Any, Dict, Optional      # 🧩 Типізація

from rate_converter.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.config")

CONFIG_YAML_PATH = Path(__file__).parent / "config.yaml"

# 🌱 Змінна середовища → крапковий ключ конфігурації
ENV_OVERRIDES: Dict[str, str] = {
    "RATE_CONVERTER_STORE_PATH": "storage.path",
    "RATE_CONVERTER_MAX_AGE_HOURS": "live_rate.max_age_hours",
    "RATE_CONVERTER_USER_AGENT": "currency_api.user_agent",
    "LOG_LEVEL": "logging.level",
    "LOG_FILE": "logging.file",
}


# ============================
# ⚙️ СЕРВІС ДОСТУПУ ДО КОНФІГІВ
# ============================
class ConfigService:
    """
    ⚙️ Надає доступ до всіх статичних параметрів конвертера.
    Працює як Singleton: конфігурація зчитується лише один раз.
    """

    _instance: Optional["ConfigService"] = None    # 🧩 Singleton-екземпляр
    _config: Dict[str, Any]                        # 📦 Обʼєднана конфігурація

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._config = {}
            cls._instance._load_all_configs()
            logger.debug("🔄 Singleton ConfigService створено і конфігурація завантажена")
        return cls._instance

    @classmethod
    def reload(cls) -> "ConfigService":
        """Скидає singleton і перечитує всі джерела (зміна .env/ENV під час роботи, тести)."""
        cls._instance = None
        return cls()

    def _load_all_configs(self) -> None:
        """
        📥 Завантажує всі джерела конфігурації в один словник.
        Пріоритет: config.yaml → .env / ENV (ENV перекриває YAML).
        """
        # --- 1. YAML-файл ---
        try:
            with open(CONFIG_YAML_PATH, "r", encoding="utf-8") as f:
                self._deep_update(self._config, yaml.safe_load(f) or {})
        except (FileNotFoundError, yaml.YAMLError) as e:
            logger.warning(f"⚠️ Не вдалося завантажити config.yaml: {e}")

        # --- 2. .env змінні ---
        load_dotenv()
        env_vars = {
            key: os.getenv(env_name)
            for env_name, key in ENV_OVERRIDES.items()
            if os.getenv(env_name) not in (None, "")
        }
        self._deep_update(self._config, self._unflatten_dict(env_vars))

        logger.info("✅ Конфігурацію успішно завантажено.")
        logger.debug(f"🔍 Обʼєднаний словник конфігурації: {self._config}")

    def get(self, key: str, default: Any = None) -> Any:
        """
        🔑 Отримує значення конфігурації за ключем (наприклад: 'live_rate.max_age_hours').

        Args:
            key (str): Ключ у форматі з крапкою.
            default (Any): Значення за замовчуванням, якщо ключ не знайдено.

        Returns:
            Any: Значення параметра або default.
        """
        value: Any = self._config
        for k in key.split('.'):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def as_dict(self) -> Dict[str, Any]:
        return dict(self._config)

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ ЗЛИТТЯ КОНФІГІВ
    # ===============================

    @staticmethod
    def _unflatten_dict(d: Dict[str, Any]) -> Dict[str, Any]:
        """
        🔁 Перетворює ключі з крапками в ієрархічний словник.
        'storage.path' → {'storage': {'path': ...}}
        """
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split('.')
            d_ref = result
            for part in parts[:-1]:
                d_ref = d_ref.setdefault(part, {})
            d_ref[parts[-1]] = value
        return result

    def _deep_update(self, source: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """🔁 Рекурсивно обʼєднує два словники."""
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(source.get(key), dict):
                self._deep_update(source[key], value)
            else:
                source[key] = value
