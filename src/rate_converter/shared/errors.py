# 🚨 rate_converter/shared/errors.py
"""
🚨 Ієрархія доменних помилок конвертера.

🔹 `AppError` — базовий виняток із повідомленням, деталями та `to_log_extra()`.
🔹 `UserVisibleError` — помилки, текст яких безпечно показати користувачу.
🔹 Мережеві/форматні збої окремого endpoint-а відновлюються локально у `RateFetcher`,
   а назовні виходить лише `FetchError`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from typing import Dict, List, Optional, Tuple


# ================================
# 🧠 БАЗОВІ ВИНЯТКИ
# ================================
class AppError(Exception):
    """🧠 Базова помилка застосунку."""

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message										# 📝 Основний текст
        self.details = details										# 🔍 Технічні подробиці

    def to_log_extra(self) -> Dict[str, object]:
        """📦 Формує словник для `logger.*(extra=...)`."""
        extra: Dict[str, object] = {"error_type": type(self).__name__}
        if self.details:
            extra["details"] = self.details
        return extra

    def __str__(self) -> str:
        return self.message if not self.details else f"{self.message} ({self.details})"


class UserVisibleError(AppError):
    """👀 Помилка, яку можна показати користувачу як є."""


# ================================
# 🌐 МЕРЕЖА ТА ВІДПОВІДІ API
# ================================
class NetworkError(AppError):
    """🌐 Збій з'єднання або таймаут для конкретного endpoint-а."""

    def __init__(self, message: str, *, url: Optional[str] = None, details: Optional[str] = None) -> None:
        super().__init__(message, details=details)
        self.url = url

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.url:
            extra["url"] = self.url
        return extra


class MalformedResponseError(AppError):
    """🧾 Відповідь не JSON, без `rates` або з невалідним `KGS`."""

    def __init__(
        self,
        message: str,
        *,
        url: Optional[str] = None,
        status_code: Optional[int] = None,
        details: Optional[str] = None,
    ) -> None:
        super().__init__(message, details=details)
        self.url = url
        self.status_code = status_code

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.url:
            extra["url"] = self.url
        if self.status_code is not None:
            extra["status_code"] = self.status_code
        return extra


class FetchError(UserVisibleError):
    """📡 Жоден endpoint не повернув валідний курс."""

    def __init__(
        self,
        message: str,
        *,
        last_error: Optional[BaseException] = None,
        attempts: Optional[List[Tuple[str, str]]] = None,
    ) -> None:
        super().__init__(message, details=str(last_error) if last_error else None)
        self.last_error = last_error								# 🔚 Остання причина збою
        self.attempts: List[Tuple[str, str]] = list(attempts or [])	# 🧾 (endpoint, причина)

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        extra["attempts"] = [f"{name}: {reason}" for name, reason in self.attempts]
        return extra


# ================================
# ✍️ ВВІД КОРИСТУВАЧА ТА ДОСТУП
# ================================
class ValidationError(UserVisibleError):
    """✍️ Невалідний ввід (курс, сума, пароль, код валюти)."""

    def __init__(self, message: str, *, field: Optional[str] = None, details: Optional[str] = None) -> None:
        super().__init__(message, details=details)
        self.field = field

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        if self.field:
            extra["field"] = self.field
        return extra


class AuthenticationError(UserVisibleError):
    """🔐 Невірний пароль адміністратора або дія без входу."""


# ================================
# 💾 СХОВИЩЕ
# ================================
class StorageError(AppError):
    """💾 Не вдалося записати файл налаштувань."""

    def __init__(self, message: str, *, path: Optional[str] = None, details: Optional[str] = None) -> None:
        super().__init__(message, details=details)
        self.path = path


__all__ = [
    "AppError",
    "UserVisibleError",
    "NetworkError",
    "MalformedResponseError",
    "FetchError",
    "ValidationError",
    "AuthenticationError",
    "StorageError",
]
