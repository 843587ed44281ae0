# 🖥️ fxconv/cli/__init__.py
"""🖥️ Консольний інтерфейс."""
