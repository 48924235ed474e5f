# 🧭 rate_converter/services/__init__.py
"""
🧭 Прикладні сценарії: конвертація та панель адміністратора.
"""

from __future__ import annotations

from .admin_service import AdminService
from .converter_service import ConversionResult, ConverterService, RateStatus

__all__ = ["AdminService", "ConversionResult", "ConverterService", "RateStatus"]
