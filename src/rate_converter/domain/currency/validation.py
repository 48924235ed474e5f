# ✅ rate_converter/domain/currency/validation.py
"""
✅ Валідація користувацького вводу до того, як він потрапить у сховище.

🔹 `parse_number()` — рядок → float (кома як десятковий роздільник дозволена).
🔹 `require_positive_rate()` — курс має бути скінченним і > 0.
🔹 `require_password()` — пароль адміністратора не може бути порожнім.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import math
from typing import Any, Union

# 🧩 Внутрішні модулі проєкту
from rate_converter.shared.errors import ValidationError


def parse_number(raw: Union[str, int, float], field: str) -> float:
    """
    🔢 Перетворює ввід у float.

    Підтримує "87,5" → 87.5; порожній, нечисловий або нескінченний ввід
    відхиляється `ValidationError`.
    """
    if isinstance(raw, bool):
        raise ValidationError("Введіть число.", field=field, details=repr(raw))
    if isinstance(raw, (int, float)):
        try:
            value = float(raw)
        except OverflowError as e:
            raise ValidationError("Число завелике.", field=field, details=repr(raw)) from e
    else:
        text = str(raw or "").strip().replace(",", ".")
        if not text:
            raise ValidationError("Значення не може бути порожнім.", field=field)
        try:
            value = float(text)
        except ValueError as e:
            raise ValidationError("Введіть число (наприклад: 100 або 150.50).", field=field, details=repr(raw)) from e
    if not math.isfinite(value):
        raise ValidationError("Введіть скінченне число.", field=field, details=repr(raw))
    return value


def require_positive_rate(value: Any, field: str) -> float:
    """Повертає курс як float або підіймає `ValidationError` для значень <= 0."""
    rate = parse_number(value, field)
    if rate <= 0:
        raise ValidationError("Курс має бути додатним числом.", field=field, details=repr(value))
    return rate


def require_password(value: Any, field: str = "admin_password") -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("Пароль не може бути порожнім.", field=field)
    return value


__all__ = ["parse_number", "require_positive_rate", "require_password"]
