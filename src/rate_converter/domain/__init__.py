# 🏛️ rate_converter/domain/__init__.py
"""
🏛️ Доменний шар: моделі та чиста логіка без I/O.
"""
