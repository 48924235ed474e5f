# 🧩 rate_converter/shared/__init__.py
"""
🧩 Спільний шар: помилки, метрики та утиліти логування.
"""
