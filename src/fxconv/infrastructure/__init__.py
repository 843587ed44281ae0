# 🏗️ fxconv/infrastructure/__init__.py
"""🏗️ Інфраструктура: мережа, файли, сховища."""
