# 💱 rate_converter/__init__.py
"""
💱 Конвертер валют USD / EUR / RUB / KGS з живим курсом USD→KGS та офлайн-курсами адміністратора.
"""

__version__ = "1.0.0"
