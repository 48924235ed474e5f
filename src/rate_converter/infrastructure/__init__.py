# 🏗️ rate_converter/infrastructure/__init__.py
"""
🏗️ Інфраструктурний шар: сховище налаштувань і мережеві джерела курсу.
"""
