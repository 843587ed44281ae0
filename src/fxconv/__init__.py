# 💱 fxconv/__init__.py
"""
💱 fxconv — конвертер валют з двонаправленою синхронізацією полів.

🔹 Курси відносно базової валюти, крос-курси через базу.
🔹 Улюблені валюти та базова валюта зберігаються між сесіями.
"""

__version__ = "1.0.0"
